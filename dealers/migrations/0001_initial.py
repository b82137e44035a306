import django.db.models.deletion
import django.utils.timezone
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Category',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True)),
            ],
            options={
                'verbose_name_plural': 'categories',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('sku', models.CharField(max_length=100, unique=True)),
                ('description', models.TextField(blank=True)),
                ('price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('stock_order_price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('daily_order_price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('vor_order_price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('stock_quantity', models.IntegerField(default=0)),
                ('is_published', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='products', to='dealers.category')),
            ],
            options={
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='PortalAccount',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('role', models.CharField(choices=[('dealer', 'Dealer'), ('warehouse_manager', 'Warehouse Manager'), ('administrator', 'Administrator')], default='dealer', max_length=32)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='portal_account', to=settings.AUTH_USER_MODEL)),
            ],
        ),
        migrations.CreateModel(
            name='DealerProfile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('dealer_group', models.CharField(blank=True, max_length=255)),
                ('dealer_company_name', models.CharField(blank=True, max_length=255)),
                ('business_name', models.CharField(blank=True, max_length=255)),
                ('delivery_address_full', models.TextField(blank=True)),
                ('suburb', models.CharField(blank=True, max_length=100)),
                ('state', models.CharField(blank=True, max_length=100)),
                ('post_code', models.CharField(blank=True, max_length=20)),
                ('operating_hours_weekday', models.CharField(blank=True, max_length=100)),
                ('operating_hours_saturday', models.CharField(blank=True, max_length=100)),
                ('accounts_payable', models.CharField(blank=True, max_length=255)),
                ('accounts_payable_email', models.CharField(blank=True, max_length=255)),
                ('accounts_payable_mobile', models.CharField(blank=True, max_length=50)),
                ('accounts_payable_phone', models.CharField(blank=True, max_length=50)),
                ('parts_manager', models.CharField(blank=True, max_length=255)),
                ('parts_manager_email', models.CharField(blank=True, max_length=255)),
                ('parts_manager_mobile', models.CharField(blank=True, max_length=50)),
                ('parts_manager_phone', models.CharField(blank=True, max_length=50)),
                ('parts_interpreter_front', models.CharField(blank=True, max_length=255)),
                ('parts_interpreter_front_email', models.CharField(blank=True, max_length=255)),
                ('parts_interpreter_front_mobile', models.CharField(blank=True, max_length=50)),
                ('parts_interpreter_front_phone', models.CharField(blank=True, max_length=50)),
                ('parts_interpreter_back', models.CharField(blank=True, max_length=255)),
                ('parts_interpreter_back_email', models.CharField(blank=True, max_length=255)),
                ('parts_interpreter_back_mobile', models.CharField(blank=True, max_length=50)),
                ('parts_interpreter_back_phone', models.CharField(blank=True, max_length=50)),
                ('parts_group', models.CharField(blank=True, max_length=255)),
                ('parts_group_email', models.CharField(blank=True, max_length=255)),
                ('parts_group_mobile', models.CharField(blank=True, max_length=50)),
                ('parts_group_phone', models.CharField(blank=True, max_length=50)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='dealer_profile', to=settings.AUTH_USER_MODEL)),
            ],
        ),
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.CharField(choices=[('pending', 'Pending payment'), ('processing', 'Processing'), ('on-hold', 'On hold'), ('completed', 'Completed'), ('cancelled', 'Cancelled'), ('refunded', 'Refunded'), ('failed', 'Failed')], default='pending', max_length=20)),
                ('total', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('customer_note', models.TextField(blank=True)),
                ('is_dealer_order', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='dealer_orders', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at', '-id'],
            },
        ),
        migrations.CreateModel(
            name='OrderItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('product_name', models.CharField(max_length=255)),
                ('sku', models.CharField(blank=True, max_length=100)),
                ('quantity', models.PositiveIntegerField(default=1)),
                ('unit_price', models.DecimalField(decimal_places=2, max_digits=10)),
                ('line_total', models.DecimalField(decimal_places=2, max_digits=12)),
                ('order_type', models.CharField(choices=[('stock_order', 'Stock Order'), ('daily_order', 'Daily Order'), ('vor_order', 'VOR Order')], default='stock_order', max_length=20)),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='dealers.order')),
                ('product', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='order_items', to='dealers.product')),
            ],
            options={
                'ordering': ['id'],
            },
        ),
    ]
