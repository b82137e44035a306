from django.contrib import admin

from .models import Category, DealerProfile, Order, OrderItem, OrderStatus, PortalAccount, Product
from . import orders as order_service

admin.site.register(Category)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('sku', 'name', 'price', 'stock_order_price', 'daily_order_price',
                    'vor_order_price', 'stock_quantity', 'is_published')
    list_filter = ('is_published', 'category')
    search_fields = ('sku', 'name')


@admin.register(PortalAccount)
class PortalAccountAdmin(admin.ModelAdmin):
    list_display = ('user', 'role')
    list_filter = ('role',)
    search_fields = ('user__username', 'user__email')


@admin.register(DealerProfile)
class DealerProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'dealer_company_name', 'business_name', 'state')
    search_fields = ('user__username', 'dealer_company_name', 'business_name')


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    readonly_fields = ('product', 'product_name', 'sku', 'quantity', 'unit_price',
                       'line_total', 'order_type')

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'total', 'status', 'is_dealer_order', 'created_at')
    list_filter = ('status', 'is_dealer_order', 'created_at')
    search_fields = ('user__username', 'user__email', 'id')
    readonly_fields = ('user', 'total', 'is_dealer_order', 'created_at', 'updated_at')
    inlines = [OrderItemInline]

    actions = ['mark_as_processing', 'mark_as_completed', 'mark_as_on_hold']

    def _set_status(self, queryset, status):
        for order in queryset:
            order_service.update_status(order, status)

    def mark_as_processing(self, request, queryset):
        self._set_status(queryset, OrderStatus.PROCESSING)
    mark_as_processing.short_description = "Mark as Processing"

    def mark_as_completed(self, request, queryset):
        self._set_status(queryset, OrderStatus.COMPLETED)
    mark_as_completed.short_description = "Mark as Completed"

    def mark_as_on_hold(self, request, queryset):
        self._set_status(queryset, OrderStatus.ON_HOLD)
    mark_as_on_hold.short_description = "Mark as On hold"
