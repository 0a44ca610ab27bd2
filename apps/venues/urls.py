from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'venues'

router = DefaultRouter()
router.register(r'staff', views.StaffViewSet, basename='staff')
router.register(r'qr', views.QrCodeViewSet, basename='qr')

urlpatterns = [
    # Venues
    # GET    /api/venues/current/                 - Caller's venue
    # GET    /api/venues/{id}/                    - Venue detail
    # PATCH  /api/venues/{id}/                    - Update venue
    # GET    /api/venues/{id}/settings/           - Distribution settings
    # PATCH  /api/venues/{id}/settings/           - Update settings
    # POST   /api/venues/{id}/midtrans/           - Connect Midtrans
    path('venues/current/', views.current_venue, name='current-venue'),
    path('venues/<uuid:venue_id>/', views.venue_detail, name='venue-detail'),
    path('venues/<uuid:venue_id>/settings/', views.venue_settings, name='venue-settings'),
    path('venues/<uuid:venue_id>/midtrans/', views.venue_connect_midtrans, name='venue-midtrans'),

    # PATCH  /api/admin/venues/{id}/status/       - Activate/block (admin)
    path('admin/venues/<uuid:venue_id>/status/', views.admin_venue_status, name='admin-venue-status'),

    # Public
    # GET    /api/tip/{short_code}/               - Resolve QR for tipping
    path('tip/<str:short_code>/', views.resolve_qr_code, name='resolve-qr'),

    # Staff & QR ViewSets
    # GET/POST        /api/staff/                 GET/PATCH /api/staff/{id}/
    # GET/POST        /api/qr/                    GET/PATCH/DELETE /api/qr/{id}/
    # GET             /api/qr/{id}/download/?file_format=png|svg
    path('', include(router.urls)),
]
