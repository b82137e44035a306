"""
Import or update the dealer catalog from a CSV export.

Usage: python manage.py import_products path/to/products.csv
"""
import csv
import logging
import time
from decimal import Decimal, InvalidOperation

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from dealers.models import Category, Product

logger = logging.getLogger(__name__)

PRICE_COLUMNS = ('stock_order_price', 'daily_order_price', 'vor_order_price')


def parse_price(value):
    """A positive Decimal, or None for blank/invalid/non-positive input."""
    try:
        price = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return price if price > 0 else None


def parse_int(value):
    try:
        return int(float(str(value).strip()))
    except (TypeError, ValueError):
        return 0


class ProductImporter:
    def __init__(self, batch_size=50):
        self.batch_size = batch_size
        self.created = 0
        self.updated = 0
        self.failed = 0
        self._categories = {}

    def run(self, rows, progress=None):
        batch = []
        total = 0
        for row in rows:
            batch.append(row)
            total += 1
            if len(batch) >= self.batch_size:
                self.process_batch(batch)
                batch = []
                if progress:
                    progress(total)
        if batch:
            self.process_batch(batch)
        return total

    def process_batch(self, batch):
        for row in batch:
            try:
                with transaction.atomic():
                    self.import_row(row)
            except Exception:
                self.failed += 1
                logger.exception("Product import failed for SKU %s", row.get('sku'))

    def import_row(self, row):
        sku = (row.get('sku') or '').strip()
        if not sku:
            self.failed += 1
            return

        product = Product.objects.filter(sku=sku).first()
        is_new = product is None
        if is_new:
            product = Product(sku=sku)

        product.name = (row.get('name') or '').strip() or sku
        product.is_published = True

        # A sale price takes precedence over the regular price as the base price.
        base = parse_price(row.get('sale_price')) or parse_price(row.get('regular_price'))
        if base is not None:
            product.price = base
        for column in PRICE_COLUMNS:
            if column in row:
                setattr(product, column, parse_price(row.get(column)))

        product.stock_quantity = parse_int(row.get('stock_quantity'))

        category_name = (row.get('category') or '').strip()
        if category_name and category_name != 'Uncategorized':
            product.category = self.category(category_name)

        product.save()
        if is_new:
            self.created += 1
        else:
            self.updated += 1

    def category(self, name):
        if name not in self._categories:
            self._categories[name], _ = Category.objects.get_or_create(name=name)
        return self._categories[name]


class Command(BaseCommand):
    help = "Import products from a CSV file (matched by SKU)."

    def add_arguments(self, parser):
        parser.add_argument('csv_file')
        parser.add_argument('--batch-size', type=int, default=50)

    def handle(self, *args, **options):
        path = options['csv_file']
        importer = ProductImporter(batch_size=options['batch_size'])
        start = time.monotonic()

        try:
            with open(path, newline='', encoding='utf-8-sig') as handle:
                reader = csv.DictReader(handle)
                if not reader.fieldnames or 'sku' not in reader.fieldnames:
                    raise CommandError("CSV header must include a 'sku' column.")
                total = importer.run(
                    reader,
                    progress=lambda n: self.stdout.write(f"Processed: {n} products..."),
                )
        except FileNotFoundError:
            raise CommandError(f"CSV file not found: {path}")

        elapsed = round(time.monotonic() - start, 2)
        logger.info(
            "Product import finished: %s rows, %s created, %s updated, %s failed",
            total, importer.created, importer.updated, importer.failed,
        )
        self.stdout.write(self.style.SUCCESS("=== Import Complete ==="))
        self.stdout.write(f"Total processed: {total}")
        self.stdout.write(f"New products: {importer.created}")
        self.stdout.write(f"Updated products: {importer.updated}")
        self.stdout.write(f"Failed: {importer.failed}")
        self.stdout.write(f"Time: {elapsed}s")
