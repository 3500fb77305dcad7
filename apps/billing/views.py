from rest_framework import viewsets, mixins, status
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from config.envelope import EnvelopeMixin, success_response, UUID_LOOKUP_REGEX
from .serializers import (
    GenerateBillsInputSerializer,
    GenerateEntityBillInputSerializer,
    BillQuerySerializer,
    EntityQuerySerializer,
    LedgerQuerySerializer,
    RecordPaymentInputSerializer,
    BillSerializer,
    PaymentSerializer,
    LedgerEntrySerializer,
)
from .services import (
    generate_monthly_bills,
    generate_bill_for_entity,
    record_payment,
    list_bills,
    list_payments,
    entity_names,
    build_ledger,
)
from .exceptions import (
    BillingServiceError,
    BillNotFoundError,
    BillingEntityNotFoundError,
)

ENTITY_PARAMETERS = [
    OpenApiParameter('entity_type', OpenApiTypes.STR, description="'customer' or 'company'"),
    OpenApiParameter('entity_id', OpenApiTypes.UUID, description='Customer or company id'),
]


def _billing_error_response(error):
    """404 for missing records, 400 for every other billing rule."""
    if isinstance(error, (BillNotFoundError, BillingEntityNotFoundError)):
        raise NotFound(str(error))
    return Response(
        {'success': False, 'message': str(error)},
        status=status.HTTP_400_BAD_REQUEST
    )


class BillViewSet(EnvelopeMixin, viewsets.ReadOnlyModelViewSet):
    """
    Monthly bills.

    list: Bills filtered by entity, period and status
    retrieve: One bill with items
    generate: Generate or refresh all bills for a month
    generate_entity: Generate or refresh one entity's bill for a month
    ledger: Bills and payments of one entity with running balance
    """

    serializer_class = BillSerializer
    lookup_value_regex = UUID_LOOKUP_REGEX

    def get_queryset(self):
        if self.action != 'list':
            return list_bills()

        query = BillQuerySerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)
        return list_bills(**query.validated_data)

    def _serialize(self, bills, many=False):
        records = list(bills) if many else [bills]
        return BillSerializer(
            bills,
            many=many,
            context={'request': self.request, 'entity_names': entity_names(records)},
        ).data

    @extend_schema(
        parameters=ENTITY_PARAMETERS + [
            OpenApiParameter('year', OpenApiTypes.INT),
            OpenApiParameter('month', OpenApiTypes.INT),
            OpenApiParameter('status', OpenApiTypes.STR),
        ]
    )
    def list(self, request, *args, **kwargs):
        return Response(self._serialize(self.get_queryset(), many=True))

    def retrieve(self, request, *args, **kwargs):
        return Response(self._serialize(self.get_object()))

    @extend_schema(request=GenerateBillsInputSerializer, responses={200: BillSerializer(many=True)})
    @action(detail=False, methods=['post'])
    def generate(self, request):
        """
        Generate monthly bills for all active customers and companies.

        POST /api/billing/generate/
        Body: {"year": 2025, "month": 3}
        """
        input_serializer = GenerateBillsInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        bills = generate_monthly_bills(**input_serializer.validated_data)

        return success_response(
            data=self._serialize(bills, many=True),
            message=f'Generated {len(bills)} bill(s)',
        )

    @extend_schema(request=GenerateEntityBillInputSerializer, responses={200: BillSerializer})
    @action(detail=False, methods=['post'], url_path='generate/entity', url_name='generate-entity')
    def generate_entity(self, request):
        """
        Generate or refresh one customer's or company's bill.

        POST /api/billing/generate/entity/
        Body: {"entity_type": "customer", "entity_id": "<id>", "year": 2025, "month": 3}
        """
        input_serializer = GenerateEntityBillInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            bill = generate_bill_for_entity(**input_serializer.validated_data)
        except BillingServiceError as e:
            return _billing_error_response(e)

        return success_response(data=self._serialize(bill))

    @extend_schema(
        parameters=[
            OpenApiParameter('entity_type', OpenApiTypes.STR, required=True),
            OpenApiParameter('entity_id', OpenApiTypes.UUID, required=True),
        ],
        responses={200: LedgerEntrySerializer(many=True)},
    )
    @action(detail=False, methods=['get'])
    def ledger(self, request):
        """
        GET /api/billing/ledger/?entity_type=customer&entity_id=<id>
        """
        query = LedgerQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        entries = build_ledger(**query.validated_data)
        return success_response(data=LedgerEntrySerializer(entries, many=True).data)


class PaymentViewSet(EnvelopeMixin, mixins.ListModelMixin, viewsets.GenericViewSet):
    """
    Payments.

    list: Payments filtered by entity, newest first
    create: Record a payment and allocate it to bills
    """

    serializer_class = PaymentSerializer

    def get_queryset(self):
        query = EntityQuerySerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)
        return list_payments(**query.validated_data)

    def _serialize(self, payments, many=False):
        records = list(payments) if many else [payments]
        return PaymentSerializer(
            payments,
            many=many,
            context={'request': self.request, 'entity_names': entity_names(records)},
        ).data

    @extend_schema(parameters=ENTITY_PARAMETERS)
    def list(self, request, *args, **kwargs):
        return Response(self._serialize(self.get_queryset(), many=True))

    @extend_schema(request=RecordPaymentInputSerializer, responses={201: PaymentSerializer})
    def create(self, request, *args, **kwargs):
        """
        Record a payment.

        POST /api/payments/
        Body: {"entity_type": "customer", "entity_id": "<id>",
               "amount": "1500.00", "date": "2025-04-05", "method": "upi"}
        """
        input_serializer = RecordPaymentInputSerializer(data=request.data)
        input_serializer.is_valid(raise_exception=True)

        try:
            payment, remaining = record_payment(**input_serializer.validated_data)
        except BillingServiceError as e:
            return _billing_error_response(e)

        if remaining > 0:
            message = f'Advance recorded: {remaining}'
        else:
            message = 'Payment processed successfully'

        return success_response(
            data=self._serialize(payment),
            message=message,
            status_code=status.HTTP_201_CREATED,
        )
