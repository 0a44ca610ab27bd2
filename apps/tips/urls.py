from django.urls import path
from . import views

app_name = 'tips'

urlpatterns = [
    # POST   /api/tips/                  - Create tip (public)
    # GET    /api/tips/{order_id}/       - Tip status polling (public)
    # POST   /api/webhooks/midtrans/     - Midtrans notifications
    path('tips/', views.create_tip_view, name='tip-create'),
    path('tips/<str:order_id>/', views.tip_status, name='tip-status'),
    path('webhooks/midtrans/', views.midtrans_notification, name='midtrans-webhook'),
]
