from datetime import timedelta
from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import CommandError, call_command
from django.utils import timezone

from dealers.models import Category, Order, OrderStatus, Product

CSV = """sku,name,regular_price,sale_price,stock_quantity,category,daily_order_price,vor_order_price
A100,Brake pad,10.00,,12,Brakes,11.50,
A200,Rotor,40.00,35.00,0,Brakes,,60.00
,Missing sku,5.00,,1,Brakes,,
B300,Wiper,abc,,3,Uncategorized,,
"""


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "products.csv"
    path.write_text(CSV)
    return path


def test_import_creates_products(csv_file, db):
    out = StringIO()
    call_command('import_products', str(csv_file), stdout=out)

    pad = Product.objects.get(sku="A100")
    assert pad.name == "Brake pad"
    assert pad.price == Decimal('10.00')
    assert pad.daily_order_price == Decimal('11.50')
    assert pad.vor_order_price is None
    assert pad.stock_quantity == 12
    assert pad.category.name == "Brakes"

    rotor = Product.objects.get(sku="A200")
    assert rotor.price == Decimal('35.00')
    assert rotor.vor_order_price == Decimal('60.00')

    wiper = Product.objects.get(sku="B300")
    assert wiper.price is None
    assert wiper.category is None

    assert Category.objects.count() == 1
    output = out.getvalue()
    assert "New products: 3" in output
    assert "Failed: 1" in output


def test_import_updates_existing_by_sku(csv_file, make_product):
    existing = make_product(sku="A100", name="Old name", price='1.00')

    out = StringIO()
    call_command('import_products', str(csv_file), stdout=out)

    existing.refresh_from_db()
    assert existing.name == "Brake pad"
    assert existing.price == Decimal('10.00')
    assert Product.objects.filter(sku="A100").count() == 1
    assert "Updated products: 1" in out.getvalue()


def test_import_missing_file(tmp_path, db):
    with pytest.raises(CommandError):
        call_command('import_products', str(tmp_path / "nope.csv"))


def test_cancel_unpaid_orders_skips_dealer_orders(dealer, administrator):
    old = timezone.now() - timedelta(hours=3)
    dealer_order = Order.objects.create(user=dealer, is_dealer_order=True, created_at=old)
    stale = Order.objects.create(user=administrator, created_at=old)
    fresh = Order.objects.create(user=administrator)

    out = StringIO()
    call_command('cancel_unpaid_orders', '--minutes', '60', stdout=out)

    for order in (dealer_order, stale, fresh):
        order.refresh_from_db()
    assert dealer_order.status == OrderStatus.PENDING
    assert stale.status == OrderStatus.CANCELLED
    assert fresh.status == OrderStatus.PENDING
    assert "Cancelled 1 unpaid order(s)." in out.getvalue()
