from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone


# ------------------------------
# CHOICES
# ------------------------------
class OrderType(models.TextChoices):
    STOCK = 'stock_order', 'Stock Order'
    DAILY = 'daily_order', 'Daily Order'
    VOR = 'vor_order', 'VOR Order'

    @classmethod
    def normalize(cls, value):
        """Anything outside the three known tiers becomes a stock order."""
        if value in cls.values:
            return cls(value)
        return cls.STOCK


class Role(models.TextChoices):
    DEALER = 'dealer', 'Dealer'
    WAREHOUSE_MANAGER = 'warehouse_manager', 'Warehouse Manager'
    ADMINISTRATOR = 'administrator', 'Administrator'


class OrderStatus(models.TextChoices):
    PENDING = 'pending', 'Pending payment'
    PROCESSING = 'processing', 'Processing'
    ON_HOLD = 'on-hold', 'On hold'
    COMPLETED = 'completed', 'Completed'
    CANCELLED = 'cancelled', 'Cancelled'
    REFUNDED = 'refunded', 'Refunded'
    FAILED = 'failed', 'Failed'


# ------------------------------
# CATEGORY MODEL
# ------------------------------
class Category(models.Model):
    name = models.CharField(max_length=100, unique=True)

    class Meta:
        verbose_name_plural = "categories"
        ordering = ['name']

    def __str__(self):
        return self.name


# ------------------------------
# PRODUCT MODEL
# ------------------------------
class Product(models.Model):
    LOW_STOCK_THRESHOLD = 10

    name = models.CharField(max_length=255)
    sku = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True)

    # Base price; the tier prices fall back to it when unset or not positive.
    price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    stock_order_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    daily_order_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    vor_order_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)

    stock_quantity = models.IntegerField(default=0)
    is_published = models.BooleanField(default=True)

    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.sku})"

    def tier_price(self, order_type):
        return getattr(self, f"{OrderType.normalize(order_type).value}_price")

    def stock_status(self):
        if self.stock_quantity <= 0:
            return 'out-of-stock'
        if self.stock_quantity <= self.LOW_STOCK_THRESHOLD:
            return 'low-stock'
        return 'in-stock'


# ------------------------------
# PORTAL ACCOUNTS
# ------------------------------
class PortalAccount(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='portal_account'
    )
    role = models.CharField(max_length=32, choices=Role.choices, default=Role.DEALER)

    def __str__(self):
        return f"{self.user} - {self.get_role_display()}"


CONTACT_ROLES = (
    'accounts_payable',
    'parts_manager',
    'parts_interpreter_front',
    'parts_interpreter_back',
    'parts_group',
)


class DealerProfile(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='dealer_profile'
    )

    dealer_group = models.CharField(max_length=255, blank=True)
    dealer_company_name = models.CharField(max_length=255, blank=True)
    business_name = models.CharField(max_length=255, blank=True)

    delivery_address_full = models.TextField(blank=True)
    suburb = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    post_code = models.CharField(max_length=20, blank=True)
    operating_hours_weekday = models.CharField(max_length=100, blank=True)
    operating_hours_saturday = models.CharField(max_length=100, blank=True)

    accounts_payable = models.CharField(max_length=255, blank=True)
    accounts_payable_email = models.CharField(max_length=255, blank=True)
    accounts_payable_mobile = models.CharField(max_length=50, blank=True)
    accounts_payable_phone = models.CharField(max_length=50, blank=True)

    parts_manager = models.CharField(max_length=255, blank=True)
    parts_manager_email = models.CharField(max_length=255, blank=True)
    parts_manager_mobile = models.CharField(max_length=50, blank=True)
    parts_manager_phone = models.CharField(max_length=50, blank=True)

    parts_interpreter_front = models.CharField(max_length=255, blank=True)
    parts_interpreter_front_email = models.CharField(max_length=255, blank=True)
    parts_interpreter_front_mobile = models.CharField(max_length=50, blank=True)
    parts_interpreter_front_phone = models.CharField(max_length=50, blank=True)

    parts_interpreter_back = models.CharField(max_length=255, blank=True)
    parts_interpreter_back_email = models.CharField(max_length=255, blank=True)
    parts_interpreter_back_mobile = models.CharField(max_length=50, blank=True)
    parts_interpreter_back_phone = models.CharField(max_length=50, blank=True)

    parts_group = models.CharField(max_length=255, blank=True)
    parts_group_email = models.CharField(max_length=255, blank=True)
    parts_group_mobile = models.CharField(max_length=50, blank=True)
    parts_group_phone = models.CharField(max_length=50, blank=True)

    FIELDS = (
        'dealer_group', 'dealer_company_name', 'business_name',
        'delivery_address_full', 'suburb', 'state', 'post_code',
        'operating_hours_weekday', 'operating_hours_saturday',
    ) + tuple(
        f"{role}{suffix}"
        for role in CONTACT_ROLES
        for suffix in ('', '_email', '_mobile', '_phone')
    )

    def __str__(self):
        return self.dealer_company_name or self.business_name or str(self.user)

    def as_dict(self):
        return {name: getattr(self, name) for name in self.FIELDS}


# ------------------------------
# ORDER MODEL
# ------------------------------
class OrderQuerySet(models.QuerySet):
    def expired_unpaid(self, minutes):
        """
        Pending orders older than the hold window.
        Dealer orders are never included: they are settled on account.
        """
        cutoff = timezone.now() - timedelta(minutes=minutes)
        return self.filter(
            status=OrderStatus.PENDING,
            created_at__lt=cutoff,
            is_dealer_order=False,
        )


class Order(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='dealer_orders'
    )

    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING
    )

    total = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )

    customer_note = models.TextField(blank=True)
    is_dealer_order = models.BooleanField(default=False)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    objects = OrderQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"Order #{self.id or 'unsaved'} - {self.customer_name}"

    @property
    def customer_name(self):
        if not self.user:
            return "Guest"
        return self.user.get_full_name() or self.user.username

    def get_total_price(self):
        total = Decimal('0.00')
        for item in self.items.all():
            total += item.line_total
        return total.quantize(Decimal('0.01'))


class ImmutableOrderLine(Exception):
    pass


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey(
        Product,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='order_items'
    )

    # Snapshot of the cart line at placement time
    product_name = models.CharField(max_length=255)
    sku = models.CharField(max_length=100, blank=True)
    quantity = models.PositiveIntegerField(default=1)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    line_total = models.DecimalField(max_digits=12, decimal_places=2)
    order_type = models.CharField(
        max_length=20,
        choices=OrderType.choices,
        default=OrderType.STOCK
    )

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f"{self.product_name} × {self.quantity}"

    def save(self, *args, **kwargs):
        """
        Order lines are written once. Later product price changes
        must never reach a placed order.
        """
        if not self._state.adding:
            raise ImmutableOrderLine(f"Order line #{self.pk} cannot be modified.")
        super().save(*args, **kwargs)
