from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.context import RequestContext
from apps.accounts.permissions import IsPlatformAdmin
from apps.accounts.views import ErrorResponseSerializer
from apps.venues.services import resolve_venue

from .queries import ReportingQueries
from .serializers import (
    # Input serializers
    DashboardQuerySerializer,
    TransactionsQuerySerializer,
    CommissionQuerySerializer,
    # Response serializers
    DashboardResponseSerializer,
    AdminStatsSerializer,
    AdminVenueSerializer,
    AdminTransactionSerializer,
    CommissionReportSerializer,
)


@extend_schema(
    parameters=[DashboardQuerySerializer],
    responses={200: DashboardResponseSerializer, 404: ErrorResponseSerializer},
    description="Venue dashboard for today, the last 7 days or the last 30 days.",
    tags=['reports'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def venue_dashboard(request):
    """Venue dashboard - thin HTTP handler."""
    query = DashboardQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    params = query.validated_data

    venue = resolve_venue(
        actor=RequestContext.from_request(request),
        venue_id=params.get('venue_id')
    )
    data = ReportingQueries.venue_dashboard(venue, period=params['period'])
    return Response(DashboardResponseSerializer(data).data)


@extend_schema(
    responses={200: AdminStatsSerializer, 403: ErrorResponseSerializer},
    tags=['admin'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def admin_stats(request):
    """Platform-wide counters."""
    return Response(AdminStatsSerializer(ReportingQueries.admin_stats()).data)


@extend_schema(
    responses={200: AdminVenueSerializer(many=True), 403: ErrorResponseSerializer},
    tags=['admin'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def admin_venues(request):
    """Venue overview with Midtrans status and paid volume."""
    return Response(AdminVenueSerializer(ReportingQueries.admin_venues(), many=True).data)


@extend_schema(
    parameters=[TransactionsQuerySerializer],
    responses={200: AdminTransactionSerializer(many=True), 403: ErrorResponseSerializer},
    tags=['admin'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def admin_transactions(request):
    query = TransactionsQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    transactions = ReportingQueries.admin_transactions(**query.validated_data)
    return Response(AdminTransactionSerializer(transactions, many=True).data)


@extend_schema(
    parameters=[CommissionQuerySerializer],
    responses={200: CommissionReportSerializer, 400: ErrorResponseSerializer, 403: ErrorResponseSerializer},
    description="Platform commission per venue over paid net tips in an inclusive date range.",
    tags=['admin'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def admin_commissions(request):
    query = CommissionQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    params = query.validated_data

    report = ReportingQueries.commission_report(params['start'], params['end'])
    return Response(CommissionReportSerializer(report).data)
