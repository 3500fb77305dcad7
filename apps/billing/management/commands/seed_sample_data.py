"""
Management command to create sample data for trying out the API.

Usage:
    python manage.py seed_sample_data
    python manage.py seed_sample_data --clear --days 10

This creates:
- 1 staff user (admin / admin123)
- 3 food categories (Normal, Special, Premium)
- 3 drivers with routes
- 1 company and 4 customers with packages and standing daily food
- Daily orders for the last N weekdays
- Bills for the month of the oldest generated order
"""

from datetime import datetime, time, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.billing.models import Bill, Payment
from apps.billing.services import generate_monthly_bills
from apps.catalog.models import FoodCategory
from apps.customers.models import BillingType, Company, Customer, CustomerPackage
from apps.drivers.models import Driver
from apps.orders.models import DailyOrder
from apps.orders.services import generate_daily_orders


class Command(BaseCommand):
    help = 'Create sample drivers, customers, daily orders and bills'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new sample data',
        )
        parser.add_argument(
            '--days',
            type=int,
            default=5,
            help='Number of past weekdays to generate daily orders for',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write('Clearing existing data...')
            self.clear_data()

        self.stdout.write('Creating sample data...')

        self.create_admin()
        categories = self.create_categories()
        drivers = self.create_drivers()
        self.create_customers(categories, drivers)
        order_days = self.create_orders(options['days'])

        if order_days:
            first_day = order_days[0]
            self.stdout.write(f'  Generating bills for {first_day:%Y-%m}...')
            bills = generate_monthly_bills(year=first_day.year, month=first_day.month)
            self.stdout.write(f'    {len(bills)} bill(s)')

        self.stdout.write(self.style.SUCCESS('Sample data created successfully!'))
        self.stdout.write('')
        self.stdout.write('Test account:')
        self.stdout.write('  admin / admin123 (superuser)')

    def clear_data(self):
        """Clear all data from the database."""
        Payment.objects.all().delete()
        Bill.objects.all().delete()
        DailyOrder.objects.all().delete()
        CustomerPackage.objects.all().delete()
        Customer.objects.all().delete()
        Company.objects.all().delete()
        Driver.objects.all().delete()
        FoodCategory.objects.all().delete()

    def create_admin(self):
        self.stdout.write('  Creating admin user...')
        User = get_user_model()
        if not User.objects.filter(username='admin').exists():
            User.objects.create_superuser(
                username='admin',
                email='admin@example.com',
                password='admin123',
            )

    def create_categories(self):
        self.stdout.write('  Creating food categories...')
        data = [
            ('Normal', 'Regular meals'),
            ('Special', 'Special meals with additional items'),
            ('Premium', 'Premium meals with extra variety'),
        ]
        categories = {}
        for name, description in data:
            categories[name], _ = FoodCategory.objects.get_or_create(
                name=name,
                defaults={'description': description},
            )
        return categories

    def create_drivers(self):
        self.stdout.write('  Creating drivers...')
        data = [
            ('John Driver', '1234567890', 'Downtown Area'),
            ('Mike Delivery', '0987654321', 'Suburban Area'),
            ('Sarah Transport', '5555555555', 'Industrial Zone'),
        ]
        drivers = []
        for name, phone, route in data:
            driver, _ = Driver.objects.get_or_create(
                name=name,
                defaults={'phone': phone, 'route': route},
            )
            drivers.append(driver)
        return drivers

    def create_customers(self, categories, drivers):
        self.stdout.write('  Creating companies and customers...')
        company, _ = Company.objects.get_or_create(
            name='ABC Corporation',
            defaults={
                'address': '123 Business St, Downtown',
                'phone': '1111111111',
                'email': 'accounts@abccorp.com',
                'contact_person': 'Priya Shah',
            },
        )

        start_date = timezone.localdate() - timedelta(days=90)
        data = [
            {
                'name': 'ABC Corporation - Floor 2',
                'address': '123 Business St, Downtown',
                'driver': drivers[0],
                'company': company,
                'billing_type': BillingType.COMPANY,
                'lunch_bag_format': '5,5+7',
                'dinner_bag_format': '3+5',
                'packages': [('Normal', '50.00'), ('Special', '75.00')],
            },
            {
                'name': 'ABC Corporation - Floor 5',
                'address': '123 Business St, Downtown',
                'driver': drivers[0],
                'company': company,
                'billing_type': BillingType.COMPANY,
                'lunch_bag_format': '8+4',
                'dinner_bag_format': '',
                'packages': [('Normal', '50.00')],
            },
            {
                'name': 'XYZ Tech Solutions',
                'address': '456 Tech Park, Suburban',
                'driver': drivers[1],
                'company': None,
                'billing_type': BillingType.INDIVIDUAL,
                'lunch_bag_format': '10+15',
                'dinner_bag_format': '8+10',
                'packages': [('Special', '80.00'), ('Premium', '120.00')],
            },
            {
                'name': 'Manufacturing Ltd',
                'address': '789 Factory Rd, Industrial Zone',
                'driver': drivers[2],
                'company': None,
                'billing_type': BillingType.INDIVIDUAL,
                'lunch_bag_format': '20+25',
                'dinner_bag_format': '15+20',
                'packages': [('Normal', '45.00')],
            },
        ]

        for entry in data:
            packages = entry.pop('packages')
            customer, created = Customer.objects.get_or_create(
                name=entry.pop('name'),
                defaults={**entry, 'start_date': start_date},
            )
            if created:
                CustomerPackage.objects.bulk_create([
                    CustomerPackage(
                        customer=customer,
                        category=categories[category_name],
                        unit_price=Decimal(price),
                    )
                    for category_name, price in packages
                ])

    def create_orders(self, days):
        self.stdout.write('  Creating daily orders...')
        order_days = []
        day = timezone.localdate() - timedelta(days=1)
        while len(order_days) < days:
            if day.weekday() < 5:
                order_days.append(day)
            day -= timedelta(days=1)
        order_days.reverse()

        created_days = []
        for order_day in order_days:
            if DailyOrder.objects.filter(date=order_day).exists():
                continue
            start = timezone.make_aware(datetime.combine(order_day, time(10, 0)))
            orders = generate_daily_orders(date=order_day, nea_start_time=start)
            self.stdout.write(f'    {order_day}: {len(orders)} order(s)')
            created_days.append(order_day)
        return created_days
