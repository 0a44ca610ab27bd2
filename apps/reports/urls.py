from django.urls import path
from . import views

app_name = 'reports'

urlpatterns = [
    # Venue dashboard
    # GET /api/venues/dashboard/?period=today|week|month
    path('venues/dashboard/', views.venue_dashboard, name='venue-dashboard'),

    # Admin console
    # GET /api/admin/stats/
    # GET /api/admin/venues/
    # GET /api/admin/transactions/?status=&gateway_status=&venue_id=&limit=
    # GET /api/admin/commissions/?start=&end=
    path('admin/stats/', views.admin_stats, name='admin-stats'),
    path('admin/venues/', views.admin_venues, name='admin-venues'),
    path('admin/transactions/', views.admin_transactions, name='admin-transactions'),
    path('admin/commissions/', views.admin_commissions, name='admin-commissions'),
]
