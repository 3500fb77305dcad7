from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from config.envelope import EnvelopeMixin, success_response, UUID_LOOKUP_REGEX
from .serializers import (
    DailyOrderQuerySerializer,
    OrderSummaryQuerySerializer,
    GenerateOrdersInputSerializer,
    OrderItemUpdateSerializer,
    OrderStatusUpdateSerializer,
    DailyOrderSerializer,
    OrderSummarySerializer,
)
from .services import (
    generate_daily_orders,
    get_daily_orders,
    update_order_item,
    update_order_status,
    order_summary,
)
from .exceptions import (
    InvalidBagFormatError,
    DailyOrdersAlreadyExistError,
    DailyOrderNotFoundError,
    OrderItemNotFoundError,
)


class DailyOrderViewSet(EnvelopeMixin, viewsets.ReadOnlyModelViewSet):
    """
    Daily orders per driver.

    list: Daily orders, filterable by ?date= and ?driver=
    retrieve: One daily order with items
    summary: Totals over an optional date range
    generate: Create the day's orders from customers' standing food
    update_item: Change one item's bag format
    update_status: Change the order status
    """

    serializer_class = DailyOrderSerializer
    lookup_value_regex = UUID_LOOKUP_REGEX

    def get_queryset(self):
        if self.action != 'list':
            return get_daily_orders()

        query = DailyOrderQuerySerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)
        return get_daily_orders(
            date=query.validated_data.get('date'),
            driver_id=query.validated_data.get('driver'),
        )

    @extend_schema(
        parameters=[
            OpenApiParameter(name='date', type=str, description='YYYY-MM-DD'),
            OpenApiParameter(name='driver', type=str, description='Driver id'),
        ]
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        parameters=[
            OpenApiParameter(name='start_date', type=str, description='YYYY-MM-DD'),
            OpenApiParameter(name='end_date', type=str, description='YYYY-MM-DD'),
        ],
        responses={200: OrderSummarySerializer},
    )
    @action(detail=False, methods=['get'])
    def summary(self, request):
        """
        Totals over all daily orders, optionally limited to a date range.

        GET /api/daily-orders/summary/?start_date=2025-03-01&end_date=2025-03-31
        """
        query = OrderSummaryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        summary = order_summary(
            start_date=query.validated_data.get('start_date'),
            end_date=query.validated_data.get('end_date'),
        )
        return success_response(data=OrderSummarySerializer(summary).data)

    @extend_schema(
        request=GenerateOrdersInputSerializer,
        responses={201: DailyOrderSerializer(many=True)},
    )
    @action(detail=False, methods=['post'])
    def generate(self, request):
        """
        Generate daily orders for a date.

        POST /api/daily-orders/generate/
        Body: {"date": "2025-03-03", "nea_start_time": "2025-03-03T10:00:00Z"}
        """
        input_serializer = GenerateOrdersInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            orders = generate_daily_orders(**input_serializer.validated_data)
        except DailyOrdersAlreadyExistError as e:
            return Response(
                {'success': False, 'message': str(e)},
                status=status.HTTP_400_BAD_REQUEST
            )

        return success_response(
            data=DailyOrderSerializer(orders, many=True).data,
            message=f'Generated {len(orders)} daily order(s)',
            status_code=status.HTTP_201_CREATED,
        )

    @extend_schema(request=OrderItemUpdateSerializer, responses={200: DailyOrderSerializer})
    @action(
        detail=True,
        methods=['put'],
        url_path=r'items/(?P<item_id>[0-9a-fA-F-]{36})',
        url_name='update-item',
    )
    def update_item(self, request, pk=None, item_id=None):
        """
        Change one item's bag format; item and order totals are recomputed.

        PUT /api/daily-orders/{id}/items/{item_id}/
        Body: {"bag_format": "4,4+2"}
        """
        input_serializer = OrderItemUpdateSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            order = update_order_item(
                order_id=pk,
                item_id=item_id,
                bag_format=input_serializer.validated_data['bag_format'],
            )
        except (DailyOrderNotFoundError, OrderItemNotFoundError) as e:
            raise NotFound(str(e))
        except InvalidBagFormatError as e:
            raise ValidationError({'bag_format': [str(e)]})

        return success_response(
            data=DailyOrderSerializer(order).data,
            message='Order item updated successfully',
        )

    @extend_schema(request=OrderStatusUpdateSerializer, responses={200: DailyOrderSerializer})
    @action(detail=True, methods=['patch'], url_path='status', url_name='update-status')
    def update_status(self, request, pk=None):
        """
        PATCH /api/daily-orders/{id}/status/
        Body: {"status": "completed"}
        """
        input_serializer = OrderStatusUpdateSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            order = update_order_status(
                order_id=pk,
                status=input_serializer.validated_data['status'],
            )
        except DailyOrderNotFoundError as e:
            raise NotFound(str(e))

        return success_response(
            data=DailyOrderSerializer(order).data,
            message='Order status updated successfully',
        )
