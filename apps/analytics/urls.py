from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    # Order totals
    path('daily/', views.daily_totals, name='daily'),
    path('range/', views.range_totals, name='range'),

    # Customer billing calculation
    path('customer/<uuid:customer_id>/monthly/', views.customer_monthly, name='customer-monthly'),

    # Profit
    path('profit/', views.profit_analysis, name='profit'),

    # Bag format
    path('validate-bag-format/', views.validate_bag_format, name='validate-bag-format'),
]
