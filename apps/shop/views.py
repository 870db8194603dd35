from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import OpenApiParameter, extend_schema

from apps.accounts.permissions import IsOperator, IsStudent
from apps.core.request_ids import get_request_id

from .serializers import (
    BuyItemSerializer,
    ItemCreateSerializer,
    ItemSerializer,
    PurchaseResultSerializer,
    PurchaseSerializer,
    ShopOverviewSerializer,
)
from .services import (
    buy_item,
    create_item,
    get_all_items,
    get_shop_items,
    get_user_balance,
    get_user_purchases,
    toggle_item,
)


@extend_schema(
    responses={200: ShopOverviewSerializer},
    description="Items currently on sale and the caller's balance.",
    tags=['shop'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def shop_overview(request):
    data = {
        'items': get_shop_items(),
        'balance': get_user_balance(user_id=request.user.id),
    }
    return Response(ShopOverviewSerializer(data).data)


@extend_schema(
    request=BuyItemSerializer,
    responses={201: PurchaseResultSerializer, 200: PurchaseResultSerializer},
    parameters=[OpenApiParameter('X-Request-Id', str, OpenApiParameter.HEADER, required=False)],
    description="Buy an item. A repeated request returns the original purchase with 200.",
    tags=['shop'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsStudent])
def buy(request):
    """Buy an item (student)."""
    serializer = BuyItemSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    result = buy_item(
        item_id=serializer.validated_data['item_id'],
        user_id=request.user.id,
        request_id=get_request_id(request),
    )
    response_status = status.HTTP_200_OK if result['duplicate'] else status.HTTP_201_CREATED
    return Response(PurchaseResultSerializer(result).data, status=response_status)


@extend_schema(
    responses={200: PurchaseSerializer(many=True)},
    description="The caller's purchase history, newest first.",
    tags=['shop'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def purchases(request):
    history = get_user_purchases(user_id=request.user.id)
    return Response(PurchaseSerializer(history, many=True).data)


@extend_schema(
    request=ItemCreateSerializer,
    responses={200: ItemSerializer(many=True), 201: ItemSerializer},
    description="List every item including inactive ones, or create an item (operator only).",
    tags=['shop'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsOperator])
def items(request):
    if request.method == 'GET':
        return Response(ItemSerializer(get_all_items(), many=True).data)

    serializer = ItemCreateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    item = create_item(
        operator_id=request.user.id,
        request_id=get_request_id(request),
        **serializer.validated_data
    )
    return Response(ItemSerializer(item).data, status=status.HTTP_201_CREATED)


@extend_schema(
    request=None,
    responses={200: ItemSerializer},
    description="Put an item on sale or take it off (operator only).",
    tags=['shop'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated, IsOperator])
def toggle(request, item_id):
    item = toggle_item(
        item_id=item_id,
        operator_id=request.user.id,
        request_id=get_request_id(request),
    )
    return Response(ItemSerializer(item).data)
