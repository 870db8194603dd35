from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import OpenApiParameter, extend_schema

from apps.accounts.permissions import IsOperator
from apps.core.request_ids import get_request_id

from .serializers import (
    EventCreateSerializer,
    EventListQuerySerializer,
    EventSerializer,
    ParticipationSerializer,
)
from .services import create_event, get_events, participate_in_event


@extend_schema(
    methods=['GET'],
    parameters=[EventListQuerySerializer],
    responses={200: EventSerializer(many=True)},
    description="List events. Only operators may include inactive ones.",
    tags=['events'],
)
@extend_schema(
    methods=['POST'],
    request=EventCreateSerializer,
    responses={201: EventSerializer},
    description="Create an event (operator only).",
    tags=['events'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def events(request):
    is_operator = IsOperator().has_permission(request, None)

    if request.method == 'POST':
        if not is_operator:
            return Response(
                {'error': "Only operators can create events"},
                status=status.HTTP_403_FORBIDDEN
            )

        serializer = EventCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        event = create_event(
            created_by_id=request.user.id,
            request_id=get_request_id(request),
            **serializer.validated_data
        )
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)

    query = EventListQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    event_list = get_events(
        include_inactive=is_operator and query.validated_data['include_inactive']
    )
    return Response(EventSerializer(event_list, many=True).data)


@extend_schema(
    request=None,
    responses={201: ParticipationSerializer},
    parameters=[OpenApiParameter('X-Request-Id', str, OpenApiParameter.HEADER, required=False)],
    description="Join a running event and receive its XP bonus.",
    tags=['events'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def participate(request, event_id):
    participation = participate_in_event(
        event_id=event_id,
        user_id=request.user.id,
        request_id=get_request_id(request),
    )
    return Response(ParticipationSerializer(participation).data, status=status.HTTP_201_CREATED)
