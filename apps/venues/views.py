from django.http import HttpResponse
from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes, authentication_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter

from apps.accounts.context import RequestContext
from apps.accounts.permissions import IsPlatformAdmin

from .serializers import (
    VenueSerializer,
    VenueDetailSerializer,
    VenueUpdateSerializer,
    VenueSettingsSerializer,
    VenueSettingsUpdateSerializer,
    MidtransConnectSerializer,
    VenueStatusUpdateSerializer,
    VenueQuerySerializer,
    StaffSerializer,
    StaffCreateSerializer,
    StaffUpdateSerializer,
    QrCodeSerializer,
    QrCodeCreateSerializer,
    QrCodeStatusSerializer,
    QrDownloadQuerySerializer,
    QrDeleteResultSerializer,
    TipContextSerializer,
)
from .services import (
    get_current_venue,
    resolve_venue,
    get_venue_overview,
    update_venue,
    get_venue_settings,
    update_venue_settings,
    connect_midtrans,
    set_venue_status,
    list_staff,
    get_staff,
    create_staff,
    update_staff,
    list_qr_codes,
    get_qr_code,
    create_qr_code,
    set_qr_status,
    delete_qr_code,
    resolve_short_code,
    build_tip_url,
    render_qr_image,
    content_type_for,
)


class RegistryPagination(PageNumberPagination):
    """Pagination for staff and QR code lists."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


def _venue_from_query(request, actor):
    query = VenueQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    return resolve_venue(actor=actor, venue_id=query.validated_data.get('venue_id'))


# ============================================
# Venues
# ============================================

@extend_schema(
    responses={200: VenueSerializer},
    description="Get the venue managed by the authenticated user.",
    tags=['venues'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def current_venue(request):
    venue = get_current_venue(actor=RequestContext.from_request(request))
    return Response(VenueSerializer(venue).data)


@extend_schema(
    methods=['GET'],
    responses={200: VenueDetailSerializer},
    description="Venue detail with active staff and tip/QR counts.",
    tags=['venues'],
)
@extend_schema(
    methods=['PATCH'],
    request=VenueUpdateSerializer,
    responses={200: VenueSerializer},
    description="Partially update venue profile.",
    tags=['venues'],
)
@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated])
def venue_detail(request, venue_id):
    actor = RequestContext.from_request(request)

    if request.method == 'PATCH':
        serializer = VenueUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        venue = update_venue(actor=actor, venue_id=venue_id, **serializer.validated_data)
        return Response(VenueSerializer(venue).data)

    venue = get_venue_overview(actor=actor, venue_id=venue_id)
    return Response(VenueDetailSerializer(venue).data)


@extend_schema(
    methods=['GET'],
    responses={200: VenueSettingsSerializer},
    tags=['venues'],
)
@extend_schema(
    methods=['PATCH'],
    request=VenueSettingsUpdateSerializer,
    responses={200: VenueSettingsSerializer},
    tags=['venues'],
)
@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated])
def venue_settings(request, venue_id):
    """Tip distribution settings of a venue."""
    actor = RequestContext.from_request(request)

    if request.method == 'PATCH':
        serializer = VenueSettingsUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        settings_data = update_venue_settings(
            actor=actor,
            venue_id=venue_id,
            **serializer.validated_data
        )
    else:
        settings_data = get_venue_settings(actor=actor, venue_id=venue_id)

    return Response(VenueSettingsSerializer(settings_data).data)


@extend_schema(
    request=MidtransConnectSerializer,
    responses={200: VenueSerializer},
    description="Connect the venue's own Midtrans merchant account.",
    tags=['venues'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def venue_connect_midtrans(request, venue_id):
    serializer = MidtransConnectSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    venue = connect_midtrans(
        actor=RequestContext.from_request(request),
        venue_id=venue_id,
        **serializer.validated_data
    )
    return Response(VenueSerializer(venue).data)


@extend_schema(
    request=VenueStatusUpdateSerializer,
    responses={200: VenueSerializer},
    description="Activate or block a venue (platform admin only).",
    tags=['admin'],
)
@api_view(['PATCH'])
@permission_classes([IsAuthenticated, IsPlatformAdmin])
def admin_venue_status(request, venue_id):
    serializer = VenueStatusUpdateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    venue = set_venue_status(
        actor=RequestContext.from_request(request),
        venue_id=venue_id,
        status=serializer.validated_data['status']
    )
    return Response(VenueSerializer(venue).data)


# ============================================
# Staff
# ============================================

class StaffViewSet(viewsets.GenericViewSet):
    """
    Staff of a venue.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Staff of ``?venue_id=`` (default: caller's venue)
    create: Add staff member with personal QR code
    retrieve: Get a staff member
    partial_update: Update a staff member (status toggles personal QR)
    """

    serializer_class = StaffSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = RegistryPagination

    @extend_schema(parameters=[VenueQuerySerializer])
    def list(self, request):
        actor = RequestContext.from_request(request)
        venue = _venue_from_query(request, actor)

        queryset = list_staff(actor=actor, venue_id=venue.id)
        page = self.paginate_queryset(queryset)
        serializer = StaffSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @extend_schema(request=StaffCreateSerializer, responses={201: StaffSerializer})
    def create(self, request):
        actor = RequestContext.from_request(request)
        serializer = StaffCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        venue = resolve_venue(actor=actor, venue_id=data.pop('venue_id', None))
        staff = create_staff(actor=actor, venue_id=venue.id, **data)

        return Response(StaffSerializer(staff).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        staff = get_staff(actor=RequestContext.from_request(request), staff_id=pk)
        return Response(StaffSerializer(staff).data)

    @extend_schema(request=StaffUpdateSerializer, responses={200: StaffSerializer})
    def partial_update(self, request, pk=None):
        serializer = StaffUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        staff = update_staff(
            actor=RequestContext.from_request(request),
            staff_id=pk,
            **serializer.validated_data
        )
        return Response(StaffSerializer(staff).data)


# ============================================
# QR codes
# ============================================

class QrCodeViewSet(viewsets.GenericViewSet):
    """
    QR codes of a venue.

    list: QR codes of ``?venue_id=`` (default: caller's venue)
    create: Create TABLE/VENUE QR (requires Midtrans connection)
    retrieve: QR detail with tip URL
    partial_update: Activate/deactivate
    destroy: Delete, or deactivate when tips exist
    download: PNG/SVG image (``?file_format=png|svg``)
    """

    serializer_class = QrCodeSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = RegistryPagination

    @extend_schema(parameters=[VenueQuerySerializer])
    def list(self, request):
        actor = RequestContext.from_request(request)
        venue = _venue_from_query(request, actor)

        queryset = list_qr_codes(actor=actor, venue_id=venue.id)
        page = self.paginate_queryset(queryset)
        serializer = QrCodeSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    @extend_schema(request=QrCodeCreateSerializer, responses={201: QrCodeSerializer})
    def create(self, request):
        actor = RequestContext.from_request(request)
        serializer = QrCodeCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data
        venue = resolve_venue(actor=actor, venue_id=data.get('venue_id'))
        qr_code = create_qr_code(
            actor=actor,
            venue_id=venue.id,
            type=data['type'],
            label=data['label']
        )
        return Response(QrCodeSerializer(qr_code).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        qr_code = get_qr_code(actor=RequestContext.from_request(request), qr_id=pk)
        return Response(QrCodeSerializer(qr_code).data)

    @extend_schema(request=QrCodeStatusSerializer, responses={200: QrCodeSerializer})
    def partial_update(self, request, pk=None):
        serializer = QrCodeStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        qr_code = set_qr_status(
            actor=RequestContext.from_request(request),
            qr_id=pk,
            status=serializer.validated_data['status']
        )
        return Response(QrCodeSerializer(qr_code).data)

    @extend_schema(responses={200: QrDeleteResultSerializer})
    def destroy(self, request, pk=None):
        result = delete_qr_code(actor=RequestContext.from_request(request), qr_id=pk)
        message = (
            'QR code deactivated (has tips)' if result['soft_deleted']
            else 'QR code deleted'
        )
        return Response({'message': message, **result})

    @extend_schema(
        parameters=[QrDownloadQuerySerializer],
        responses={(200, 'image/png'): bytes, (200, 'image/svg+xml'): bytes},
    )
    @action(detail=True, methods=['get'])
    def download(self, request, pk=None):
        """Download the printable QR image."""
        query = QrDownloadQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        image_format = query.validated_data['file_format']

        qr_code = get_qr_code(actor=RequestContext.from_request(request), qr_id=pk)
        content = render_qr_image(build_tip_url(qr_code.short_code), image_format)

        filename = f"{qr_code.label or qr_code.short_code}.{image_format}"
        response = HttpResponse(content, content_type=content_type_for(image_format))
        response['Content-Disposition'] = f'attachment; filename="{filename}"'
        return response


# ============================================
# Public QR resolution
# ============================================

@extend_schema(
    responses={200: TipContextSerializer},
    description="Resolve a QR short code into the guest tipping context.",
    tags=['tips'],
)
@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def resolve_qr_code(request, short_code):
    context = resolve_short_code(short_code=short_code)
    return Response(TipContextSerializer(context).data)
