"""
Inventory search for the dealer portal.

Browsing (empty term) is paginated by name. A search term returns every
product whose name or SKU contains it, de-duplicated and sorted by name,
as a single page.
"""
from collections import namedtuple

from django.conf import settings
from django.core.paginator import EmptyPage, Paginator
from django.db.models.functions import Lower

from . import pricing
from .models import Product

SearchPage = namedtuple('SearchPage', ['items', 'total', 'page', 'total_pages', 'has_more'])


def _coerce_page(value):
    try:
        return max(1, int(value))
    except (TypeError, ValueError):
        return 1


def product_payload(product):
    return {
        'id': product.pk,
        'sku': product.sku,
        'name': product.name,
        'stock': product.stock_quantity,
        'stock_status': product.stock_status(),
        'prices': {k: float(v) for k, v in pricing.tier_prices(product).items()},
    }


def search(term='', page=1, page_size=None):
    term = (term or '').strip()
    page = _coerce_page(page)
    catalog = Product.objects.filter(is_published=True)

    if term:
        by_name = catalog.filter(name__icontains=term)
        by_sku = catalog.filter(sku__icontains=term)
        merged = {p.pk: p for p in by_name}
        for product in by_sku:
            merged.setdefault(product.pk, product)
        products = sorted(merged.values(), key=lambda p: (p.name.lower(), p.pk))
        items = [product_payload(p) for p in products]
        return SearchPage(items, len(items), 1, 1, False)

    paginator = Paginator(catalog.order_by(Lower('name'), 'pk'), page_size or settings.DEALER_SEARCH_PAGE_SIZE)
    total = paginator.count
    total_pages = paginator.num_pages if total else 0
    try:
        products = paginator.page(page).object_list
    except EmptyPage:
        products = []
    items = [product_payload(p) for p in products]
    return SearchPage(items, total, page, total_pages, page < total_pages)
