# Generated manually for orders app

import uuid
from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('catalog', '0001_initial'),
        ('customers', '0001_initial'),
        ('drivers', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='DailyOrder',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField()),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('in_progress', 'In Progress'), ('completed', 'Completed'), ('cancelled', 'Cancelled')], default='pending', max_length=20)),
                ('nea_start_time', models.DateTimeField(blank=True, null=True)),
                ('nea_end_time', models.DateTimeField(blank=True, null=True)),
                ('total_veg_food', models.PositiveIntegerField(default=0)),
                ('total_non_veg_food', models.PositiveIntegerField(default=0)),
                ('total_food', models.PositiveIntegerField(default=0)),
                ('total_amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('driver', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='daily_orders', to='drivers.driver')),
            ],
            options={
                'db_table': 'daily_orders',
                'ordering': ['-date', 'driver__name'],
                'indexes': [
                    models.Index(fields=['date', 'driver'], name='daily_orders_date_driver_idx'),
                    models.Index(fields=['status'], name='daily_orders_status_idx'),
                ],
                'unique_together': {('date', 'driver')},
            },
        ),
        migrations.CreateModel(
            name='OrderItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('meal_type', models.CharField(choices=[('lunch', 'Lunch'), ('dinner', 'Dinner')], max_length=10)),
                ('bag_format', models.CharField(max_length=100)),
                ('non_veg_count', models.PositiveIntegerField(default=0)),
                ('veg_count', models.PositiveIntegerField(default=0)),
                ('total_count', models.PositiveIntegerField(default=0)),
                ('unit_price', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.00'))])),
                ('total_amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('category', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='order_items', to='catalog.foodcategory')),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='order_items', to='customers.customer')),
                ('daily_order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='orders.dailyorder')),
            ],
            options={
                'db_table': 'order_items',
                'ordering': ['customer__name', 'meal_type', 'category__name'],
                'indexes': [models.Index(fields=['customer', 'category'], name='order_items_cust_cat_idx')],
            },
        ),
    ]
