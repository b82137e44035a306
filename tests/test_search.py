from decimal import Decimal

import pytest

from dealers.search import search


@pytest.fixture
def catalog(make_product):
    return [make_product(name=f"Part {i:03d}", sku=f"P{i:03d}") for i in range(120)]


def test_browse_first_page(catalog):
    result = search('', 1)

    assert len(result.items) == 50
    assert result.total == 120
    assert result.page == 1
    assert result.total_pages == 3
    assert result.has_more is True
    assert result.items[0]['name'] == "Part 000"


def test_browse_last_page(catalog):
    result = search('', 3)

    assert len(result.items) == 20
    assert result.total_pages == 3
    assert result.has_more is False
    assert result.items[-1]['name'] == "Part 119"


def test_browse_pages_do_not_overlap(catalog):
    seen = []
    for page in (1, 2, 3):
        seen.extend(item['id'] for item in search('', page).items)
    assert len(seen) == len(set(seen)) == 120


def test_page_past_the_end_is_empty(catalog):
    result = search('', 9)
    assert result.items == []
    assert result.has_more is False


def test_invalid_page_defaults_to_first(catalog):
    assert search('', 'abc').page == 1
    assert search('', -2).page == 1


def test_browse_is_case_insensitive_by_name(make_product):
    make_product(name="banjo bolt")
    make_product(name="Axle nut")
    make_product(name="Cable")

    names = [item['name'] for item in search('', 1).items]

    assert names == ["Axle nut", "banjo bolt", "Cable"]


def test_empty_catalog(db):
    result = search('', 1)
    assert result.items == []
    assert result.total == 0
    assert result.has_more is False


def test_unpublished_products_are_hidden(make_product):
    make_product(name="Visible")
    make_product(name="Hidden", is_published=False)

    assert [i['name'] for i in search('', 1).items] == ["Visible"]
    assert search('hidden', 1).total == 0


def test_term_unions_name_and_sku_matches(make_product):
    by_name = make_product(name="Wiper blade", sku="WB-1")
    by_sku = make_product(name="air filter", sku="XWIPER-9")
    both = make_product(name="Wiper motor", sku="WIPER-2")
    make_product(name="Spark plug", sku="SP-1")

    result = search('wiper', 1)

    ids = [item['id'] for item in result.items]
    assert len(ids) == len(set(ids)) == 3
    assert set(ids) == {by_name.pk, by_sku.pk, both.pk}
    assert [item['name'] for item in result.items] == ["air filter", "Wiper blade", "Wiper motor"]


def test_term_search_is_a_single_page(make_product):
    for i in range(60):
        make_product(name=f"Gasket {i:02d}", sku=f"G{i:02d}")

    result = search('gasket', 4)

    assert len(result.items) == 60
    assert result.total == 60
    assert result.page == 1
    assert result.total_pages == 1
    assert result.has_more is False


def test_no_matches_is_not_an_error(make_product):
    make_product(name="Horn")
    result = search('zzz', 1)
    assert result.items == []
    assert result.total == 0


def test_items_carry_all_tier_prices(make_product):
    make_product(
        name="Clutch kit",
        sku="CK-1",
        price='100.00',
        daily_order_price=Decimal('110.00'),
        vor_order_price=Decimal('0'),
        stock_quantity=4,
    )

    item = search('CK-1', 1).items[0]

    assert item['stock'] == 4
    assert item['stock_status'] == 'low-stock'
    assert item['prices'] == {
        'stock_order': 100.0,
        'daily_order': 110.0,
        'vor_order': 100.0,
    }
