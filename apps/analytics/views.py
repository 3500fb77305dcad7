from rest_framework.decorators import api_view
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from config.envelope import success_response
from apps.customers.exceptions import CustomerNotFoundError
from .calculations import CalculationEngine
from .serializers import (
    # Input serializers
    DateQuerySerializer,
    DateRangeQuerySerializer,
    CustomerMonthlyQuerySerializer,
    ProfitQuerySerializer,
    BagFormatInputSerializer,
    # Response serializers
    DailyTotalsSerializer,
    RangeTotalsSerializer,
    CustomerMonthlySerializer,
    ProfitAnalysisSerializer,
    BagFormatResultSerializer,
    ErrorSerializer,
)

DATE_RANGE_PARAMETERS = [
    OpenApiParameter('start_date', OpenApiTypes.DATE, required=True, description='Start date (YYYY-MM-DD)'),
    OpenApiParameter('end_date', OpenApiTypes.DATE, required=True, description='End date (YYYY-MM-DD)'),
]


@extend_schema(
    parameters=[
        OpenApiParameter('date', OpenApiTypes.DATE, required=True, description='Delivery date (YYYY-MM-DD)'),
    ],
    responses={
        200: DailyTotalsSerializer,
        400: ErrorSerializer,
        404: ErrorSerializer,
    },
    description="Food counts and revenue for one day with a per-driver breakdown.",
    tags=['analytics'],
)
@api_view(['GET'])
def daily_totals(request):
    """Daily totals - thin HTTP handler."""
    query_serializer = DateQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)

    data = CalculationEngine.daily_totals(query_serializer.validated_data['date'])
    if data is None:
        raise NotFound('No data found for the specified date')

    return success_response(data=DailyTotalsSerializer(data).data)


@extend_schema(
    parameters=DATE_RANGE_PARAMETERS,
    responses={
        200: RangeTotalsSerializer,
        400: ErrorSerializer,
        404: ErrorSerializer,
    },
    description="Totals for a date range with drivers ranked by revenue.",
    tags=['analytics'],
)
@api_view(['GET'])
def range_totals(request):
    """Date range totals - thin HTTP handler."""
    query_serializer = DateRangeQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    data = CalculationEngine.range_totals(params['start_date'], params['end_date'])
    if data is None:
        raise NotFound('No data found for the specified date range')

    return success_response(data=RangeTotalsSerializer(data).data)


@extend_schema(
    parameters=DATE_RANGE_PARAMETERS + [
        OpenApiParameter('tax_rate', OpenApiTypes.NUMBER, description='Tax rate 0-1', default=0.18),
    ],
    responses={
        200: CustomerMonthlySerializer,
        400: ErrorSerializer,
        404: ErrorSerializer,
    },
    description="Itemized bill calculation for one customer over a period.",
    tags=['analytics'],
)
@api_view(['GET'])
def customer_monthly(request, customer_id):
    """Customer monthly report - thin HTTP handler."""
    query_serializer = CustomerMonthlyQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        data = CalculationEngine.customer_monthly(
            customer_id=customer_id,
            start_date=params['start_date'],
            end_date=params['end_date'],
            tax_rate=params['tax_rate'],
        )
    except CustomerNotFoundError as e:
        raise NotFound(str(e))

    if data is None:
        raise NotFound('Unable to generate monthly report for customer')

    return success_response(data=CustomerMonthlySerializer(data).data)


@extend_schema(
    parameters=DATE_RANGE_PARAMETERS + [
        OpenApiParameter('cost_per_meal', OpenApiTypes.NUMBER, description='Estimated cost per meal', default=25),
    ],
    responses={
        200: ProfitAnalysisSerializer,
        400: ErrorSerializer,
        404: ErrorSerializer,
    },
    description="Revenue against an estimated cost per meal for a date range.",
    tags=['analytics'],
)
@api_view(['GET'])
def profit_analysis(request):
    """Profit analysis - thin HTTP handler."""
    query_serializer = ProfitQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    data = CalculationEngine.profit_analysis(
        start_date=params['start_date'],
        end_date=params['end_date'],
        cost_per_meal=params['cost_per_meal'],
    )
    if data is None:
        raise NotFound('Unable to generate profit analysis')

    return success_response(data=ProfitAnalysisSerializer(data).data)


@extend_schema(
    request=BagFormatInputSerializer,
    responses={
        200: BagFormatResultSerializer,
        400: ErrorSerializer,
    },
    description="Parse a bag format and return its meal counts.",
    tags=['analytics'],
)
@api_view(['POST'])
def validate_bag_format(request):
    """Bag format validation - thin HTTP handler."""
    input_serializer = BagFormatInputSerializer(data=request.data)
    input_serializer.is_valid(raise_exception=True)
    bag_format = input_serializer.validated_data['bag_format']

    result = CalculationEngine.validate_and_parse_bag_format(bag_format)
    if not result['is_valid']:
        return Response(
            {'success': False, 'message': result['error']},
            status=status.HTTP_400_BAD_REQUEST
        )

    return success_response(data={'bag_format': bag_format, **result['parsed']})
