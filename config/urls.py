"""
URL configuration for the tipping platform.

API endpoints live under ``/api/``; server-rendered pages (guest tipping
flow, venue dashboard, admin console) at the root.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenRefreshView

from config import views

urlpatterns = [
    # Health check
    path('api/health/', views.health_check, name='health-check'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # Authentication
    path('api/auth/', include('apps.accounts.urls')),
    path('api/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # API endpoints
    path('api/', include('apps.reports.urls')),
    path('api/', include('apps.venues.urls')),
    path('api/', include('apps.tips.urls')),
    path('api/payouts/', include('apps.payouts.urls')),

    # Guest pages (fixed paths before the short code catch-all)
    path('tip/success', views.tip_success_page, name='tip-success'),
    path('tip/pending', views.tip_pending_page, name='tip-pending'),
    path('tip/error', views.tip_error_page, name='tip-error'),
    path('tip/<str:short_code>', views.tip_page, name='tip-page'),

    # Dashboards
    path('venue/dashboard', views.venue_dashboard_page, name='venue-dashboard-page'),
    path('console/', views.admin_console_page, name='admin-console-page'),
]


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
