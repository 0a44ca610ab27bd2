from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, authentication_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema

from apps.accounts.views import ErrorResponseSerializer

from .serializers import (
    TipCreateSerializer,
    TipCreateResponseSerializer,
    TipStatusSerializer,
    WebhookAckSerializer,
)
from .services import create_tip, sync_tip_status, handle_notification


@extend_schema(
    request=TipCreateSerializer,
    responses={
        201: TipCreateResponseSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
        409: ErrorResponseSerializer,
        500: ErrorResponseSerializer,
    },
    description="Create a pending tip and open a Midtrans Snap payment.",
    tags=['tips'],
)
@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def create_tip_view(request):
    serializer = TipCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    result = create_tip(**serializer.validated_data)

    return Response({
        'tip_id': result['tip'].id,
        'order_id': result['order_id'],
        'snap_token': result['snap_token'],
        'redirect_url': result['redirect_url'],
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    responses={200: TipStatusSerializer, 404: ErrorResponseSerializer},
    description=(
        "Tip status for the guest pending page. A pending tip is refreshed "
        "from Midtrans first. Includes the polling interval and attempt limit."
    ),
    tags=['tips'],
)
@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def tip_status(request, order_id):
    tip = sync_tip_status(order_id=order_id)
    return Response(TipStatusSerializer(tip).data)


@extend_schema(
    request=OpenApiTypes.OBJECT,
    responses={200: WebhookAckSerializer, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
    description="Midtrans HTTP notification endpoint.",
    tags=['webhooks'],
)
@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def midtrans_notification(request):
    payload = request.data if isinstance(request.data, dict) else {}
    log = handle_notification(payload=dict(payload))
    return Response({'status': 'ok', 'processed': log.processed})
