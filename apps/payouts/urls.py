from django.urls import path
from . import views

app_name = 'payouts'

urlpatterns = [
    # GET    /api/payouts/?start=&end=[&venue_id=]    - Payout report
    # POST   /api/payouts/mark-paid/                  - Mark period paid
    path('', views.payout_report, name='payout-report'),
    path('mark-paid/', views.payout_mark_paid, name='payout-mark-paid'),
]
