from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from apps.accounts.context import RequestContext
from apps.accounts.views import ErrorResponseSerializer

from .serializers import (
    PeriodQuerySerializer,
    MarkPaidInputSerializer,
    PayoutReportSerializer,
)
from .services import get_payout_report, mark_paid


@extend_schema(
    parameters=[PeriodQuerySerializer],
    responses={200: PayoutReportSerializer, 400: ErrorResponseSerializer},
    description=(
        "Per-staff payout report for an inclusive period. The platform fee "
        "is derived at report time."
    ),
    tags=['payouts'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def payout_report(request):
    query = PeriodQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    report = get_payout_report(
        actor=RequestContext.from_request(request),
        **query.validated_data
    )
    return Response(PayoutReportSerializer(report).data)


@extend_schema(
    request=MarkPaidInputSerializer,
    responses={200: PayoutReportSerializer, 404: ErrorResponseSerializer, 409: ErrorResponseSerializer},
    description="Mark a period's payouts paid (all staff or one staff member).",
    tags=['payouts'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def payout_mark_paid(request):
    serializer = MarkPaidInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    report = mark_paid(
        actor=RequestContext.from_request(request),
        **serializer.validated_data
    )
    return Response(PayoutReportSerializer(report).data)
