"""
Billing Services Module
========================

Business logic for monthly bills, payments and the account ledger.

Customer bills are built from the customer's monthly calculation. Company
bills consolidate the bills of the company's company-billed customers for
the same month; those customer bills are linked to the company bill and
marked as managed by the company.

Money is kept in Decimal with two places. Proportional splits work in
whole cents (paise) and hand out the leftover cents one at a time, so the
parts always add up to the amount being split.

Functions:
    month_date_range: First and last day of a month.
    generate_next_bill_number: Next ``PREFIX-YYYYMM-####`` number.
    generate_monthly_bills: Bills for every active customer and company.
    generate_bill_for_entity: Bill for one customer or company.
    apply_advance_payments: Use unallocated payment amounts on a bill.
    record_payment: Record a payment and allocate it to bills.
    build_ledger: Bills and payments with a running balance.

Example::

    from apps.billing.services import generate_monthly_bills, record_payment

    bills = generate_monthly_bills(year=2025, month=3)
    payment, advance = record_payment(
        entity_type='customer',
        entity_id=customer.id,
        amount=Decimal('1500.00'),
        date=date(2025, 4, 5),
    )
"""

import calendar
import logging
from datetime import date as date_type
from decimal import Decimal
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.analytics.calculations import CalculationEngine
from apps.customers.models import Company, Customer, BillingType
from .exceptions import (
    BillNotFoundError,
    BillingEntityNotFoundError,
    NoBillableOrdersError,
    NoCustomerBillsError,
    InvalidPaymentError,
    PartialCompanyPaymentError,
)
from .models import (
    Bill,
    BillItem,
    BillStatus,
    EntityType,
    ManagedBy,
    Payment,
    PaymentAllocation,
)

logger = logging.getLogger(__name__)

ADVANCE_REFERENCE = 'ADVANCE'
PAYMENT_TOLERANCE = Decimal('0.01')


def month_date_range(year: int, month: int):
    """Return ``(first_day, last_day)`` of a calendar month."""
    last_day = calendar.monthrange(year, month)[1]
    return date_type(year, month, 1), date_type(year, month, last_day)


def generate_next_bill_number(prefix: str, year: int, month: int) -> str:
    """
    Next bill number for a prefix and month, e.g. ``BILL-C-202503-0007``.

    The four digit sequence restarts every month and is separate per
    prefix.
    """
    base = f"{prefix}-{year}{month:02d}-"
    last_number = (
        Bill.objects
        .filter(number__startswith=base)
        .order_by('-number')
        .values_list('number', flat=True)
        .first()
    )

    sequence = 1
    if last_number:
        suffix = last_number[len(base):]
        if suffix.isdigit():
            sequence = int(suffix) + 1

    return f"{base}{sequence:04d}"


def _get_or_new_bill(entity_type, entity_id, year, month, prefix):
    bill = (
        Bill.objects
        .select_for_update()
        .filter(
            entity_type=entity_type,
            entity_id=entity_id,
            period_year=year,
            period_month=month,
        )
        .first()
    )
    if bill is not None:
        return bill

    return Bill(
        number=generate_next_bill_number(prefix, year, month),
        entity_type=entity_type,
        entity_id=entity_id,
        period_year=year,
        period_month=month,
        generated_at=timezone.now(),
    )


def _split_in_cents(amount, weights):
    """
    Split ``amount`` in proportion to ``weights``.

    Returns one Decimal per weight; the parts sum to ``amount`` exactly.
    """
    total_weight = sum(weights, Decimal('0'))
    if total_weight <= 0:
        return [Decimal('0.00') for _ in weights]

    amount_cents = int(amount * 100)
    cents = [int(amount_cents * weight / total_weight) for weight in weights]
    remainder = amount_cents - sum(cents)
    for index in range(remainder):
        cents[index % len(cents)] += 1

    return [Decimal(part) / 100 for part in cents]


def _distribute_to_linked_bills(company_bill, amount):
    """
    Spread a company bill payment over its customer bills by bill total.

    A share larger than its bill's balance is passed on to the other linked
    bills that still have a balance, in bill number order. Whatever none of
    them can take is logged.
    """
    linked_bills = list(
        company_bill.linked_bills.select_for_update().order_by('number')
    )
    if not linked_bills:
        return

    applied = {bill.id: Decimal('0.00') for bill in linked_bills}
    excess = Decimal('0.00')

    shares = _split_in_cents(amount, [bill.total_amount for bill in linked_bills])
    for bill, share in zip(linked_bills, shares):
        to_apply = min(share, bill.balance_amount)
        if to_apply > 0:
            bill.apply_payment(to_apply)
            applied[bill.id] += to_apply
        excess += share - max(to_apply, Decimal('0.00'))

    for bill in linked_bills:
        if excess <= 0:
            break
        to_apply = min(excess, bill.balance_amount)
        if to_apply <= 0:
            continue
        bill.apply_payment(to_apply)
        applied[bill.id] += to_apply
        excess -= to_apply

    for bill in linked_bills:
        if applied[bill.id] > 0:
            bill.save(update_fields=['paid_amount', 'total_amount', 'balance_amount', 'status', 'updated_at'])

    if excess > 0:
        logger.warning(
            "Company bill %s payment exceeds its customer bills' balances by %s",
            company_bill.number, excess
        )


def _allocate(payment, bill, amount):
    """Apply part of a payment to a bill and record the allocation."""
    previous_balance = bill.balance_amount
    bill.apply_payment(amount)
    bill.save(update_fields=['paid_amount', 'total_amount', 'balance_amount', 'status', 'updated_at'])

    if bill.is_consolidated:
        _distribute_to_linked_bills(bill, amount)

    return PaymentAllocation.objects.create(
        payment=payment,
        bill=bill,
        amount=amount,
        previous_balance=previous_balance,
        new_balance=bill.balance_amount,
        bill_status=bill.status,
    )


def apply_advance_payments(bill: Bill) -> Decimal:
    """
    Apply the entity's unallocated payment amounts to ``bill``, oldest first.

    A payment that was a pure advance and is used up entirely by this bill
    takes the bill number as its reference (unless it has its own).

    Returns:
        Decimal: The amount applied.
    """
    if bill.status in (BillStatus.PAID, BillStatus.CANCELLED):
        return Decimal('0.00')

    payments = (
        Payment.objects
        .filter(entity_type=bill.entity_type, entity_id=bill.entity_id)
        .prefetch_related('allocations')
        .order_by('date', 'created_at')
    )

    applied = Decimal('0.00')
    for payment in payments:
        if bill.balance_amount <= 0:
            break

        already_allocated = payment.allocated_amount
        unallocated = payment.unallocated_amount
        if unallocated <= 0:
            continue

        to_apply = min(unallocated, bill.balance_amount)
        _allocate(payment, bill, to_apply)
        applied += to_apply

        pure_advance = already_allocated == 0 and to_apply == unallocated
        if pure_advance and payment.reference.strip().upper() in ('', ADVANCE_REFERENCE):
            payment.reference = bill.number
            payment.save(update_fields=['reference', 'updated_at'])

    if applied:
        logger.info("Applied advance %s to bill %s", applied, bill.number)
    return applied


def _refresh_customer_bill(customer, year, month):
    start_date, end_date = month_date_range(year, month)
    calc = CalculationEngine.customer_monthly(
        customer_id=customer.id,
        start_date=start_date,
        end_date=end_date,
        tax_rate=settings.CATERING['BILL_TAX_RATE'],
    )
    if calc is None:
        return None

    bill = _get_or_new_bill(
        EntityType.CUSTOMER,
        customer.id,
        year,
        month,
        settings.CATERING['CUSTOMER_BILL_PREFIX'],
    )
    bill.start_date = start_date
    bill.end_date = end_date
    bill.tax = calc['tax']
    bill.managed_by = ManagedBy.COMPANY if customer.is_company_billed else ManagedBy.SELF
    if bill.status == BillStatus.CANCELLED:
        bill.status = BillStatus.UNPAID
    bill.save()

    bill.items.all().delete()
    items = BillItem.objects.bulk_create([
        BillItem(
            bill=bill,
            category_id=line['category_id'],
            category_name=line['category_name'],
            unit_price=line['unit_price'],
            quantity=line['total_quantity'],
            amount=line['total_amount'],
        )
        for line in calc['package_breakdown']
    ])

    bill.subtotal = sum((item.amount for item in items), Decimal('0.00'))
    bill.refresh_balance()
    bill.save()

    apply_advance_payments(bill)
    return bill


def _refresh_company_bill(company, year, month):
    start_date, end_date = month_date_range(year, month)
    customer_ids = Customer.objects.filter(
        company=company,
        billing_type=BillingType.COMPANY,
    ).values_list('id', flat=True)

    customer_bills = list(
        Bill.objects.filter(
            entity_type=EntityType.CUSTOMER,
            entity_id__in=list(customer_ids),
            period_year=year,
            period_month=month,
        )
    )
    if not customer_bills:
        return None

    bill = _get_or_new_bill(
        EntityType.COMPANY,
        company.id,
        year,
        month,
        settings.CATERING['COMPANY_BILL_PREFIX'],
    )
    bill.start_date = start_date
    bill.end_date = end_date
    bill.is_consolidated = True
    bill.subtotal = sum((b.subtotal for b in customer_bills), Decimal('0.00'))
    bill.tax = sum((b.tax for b in customer_bills), Decimal('0.00'))
    bill.refresh_balance()
    bill.save()

    Bill.objects.filter(id__in=[b.id for b in customer_bills]).update(
        parent_bill=bill,
        managed_by=ManagedBy.COMPANY,
    )

    apply_advance_payments(bill)
    return bill


@transaction.atomic
def generate_monthly_bills(*, year: int, month: int):
    """
    Generate or refresh the month's bills for all active customers, then
    the consolidated bills for all active companies.

    Existing bills for the month are updated in place and keep their
    number and paid amount. Customers without orders in the month and
    companies without customer bills are skipped.

    Returns:
        list[Bill]: Customer bills followed by company bills.
    """
    bills = []

    customers = Customer.objects.filter(is_active=True).order_by('name')
    for customer in customers:
        bill = _refresh_customer_bill(customer, year, month)
        if bill is not None:
            bills.append(bill)

    customer_bill_count = len(bills)

    for company in Company.objects.filter(is_active=True).order_by('name'):
        bill = _refresh_company_bill(company, year, month)
        if bill is not None:
            bills.append(bill)

    logger.info(
        "Generated bills for %d-%02d: %d customer, %d company",
        year, month, customer_bill_count, len(bills) - customer_bill_count
    )
    return bills


@transaction.atomic
def generate_bill_for_entity(*, entity_type: str, entity_id: UUID, year: int, month: int) -> Bill:
    """
    Generate or refresh one customer's or company's bill for a month.

    Raises:
        BillingEntityNotFoundError: If the customer or company doesn't exist.
        NoBillableOrdersError: If the customer has no orders in the month.
        NoCustomerBillsError: If the company has no customer bills for the
            month (generate those first).
    """
    if entity_type == EntityType.CUSTOMER:
        customer = Customer.objects.filter(id=entity_id).first()
        if customer is None:
            raise BillingEntityNotFoundError("Customer not found")
        bill = _refresh_customer_bill(customer, year, month)
        if bill is None:
            raise NoBillableOrdersError(
                "No orders for this customer in the selected month"
            )
        return bill

    company = Company.objects.filter(id=entity_id).first()
    if company is None:
        raise BillingEntityNotFoundError("Company not found")
    bill = _refresh_company_bill(company, year, month)
    if bill is None:
        raise NoCustomerBillsError(
            "No customer bills for this company in the selected month"
        )
    return bill


def ensure_entity_exists(*, entity_type: str, entity_id: UUID) -> None:
    """
    Raises:
        BillingEntityNotFoundError: If no such customer or company exists.
    """
    model = Customer if entity_type == EntityType.CUSTOMER else Company
    if not model.objects.filter(id=entity_id).exists():
        raise BillingEntityNotFoundError(f"{model.__name__} not found")


@transaction.atomic
def record_payment(
    *,
    entity_type: str,
    entity_id: UUID,
    amount: Decimal,
    date: date_type,
    method: str = 'cash',
    reference: str = '',
    notes: str = '',
    bill_id: UUID = None,
):
    """
    Record a payment and allocate it to bills.

    With ``bill_id`` the payment goes to that bill only; otherwise it pays
    the entity's open bills oldest period first. A company paying a
    specific bill must pay its full balance. Paying a consolidated company
    bill also pays down the linked customer bills in proportion to their
    totals. Whatever is left over stays on the payment as an advance.

    Returns:
        tuple: ``(Payment, Decimal)``, the payment and its unallocated
        remainder.

    Raises:
        BillingEntityNotFoundError: If the payer doesn't exist.
        BillNotFoundError: If ``bill_id`` doesn't exist.
        InvalidPaymentError: If the bill belongs to someone else or is
            cancelled.
        PartialCompanyPaymentError: If a company pays other than the full
            balance of a bill.
    """
    ensure_entity_exists(entity_type=entity_type, entity_id=entity_id)

    if bill_id is not None:
        bill = Bill.objects.select_for_update().filter(id=bill_id).first()
        if bill is None:
            raise BillNotFoundError("Bill not found")
        if bill.entity_type != entity_type or bill.entity_id != entity_id:
            raise InvalidPaymentError("Bill does not belong to this payer")
        if bill.status == BillStatus.CANCELLED:
            raise InvalidPaymentError("Cannot pay a cancelled bill")
        if (
            entity_type == EntityType.COMPANY
            and abs(amount - bill.balance_amount) > PAYMENT_TOLERANCE
        ):
            raise PartialCompanyPaymentError(
                "Company payments must be full payment only. No partial payments allowed."
            )
        target_bills = [bill]
    else:
        target_bills = (
            Bill.objects
            .select_for_update()
            .filter(
                entity_type=entity_type,
                entity_id=entity_id,
                status__in=[BillStatus.UNPAID, BillStatus.PARTIAL],
            )
            .order_by('period_year', 'period_month', 'created_at')
        )

    payment = Payment.objects.create(
        entity_type=entity_type,
        entity_id=entity_id,
        amount=amount,
        date=date,
        method=method,
        reference=(reference or '').strip(),
        notes=notes or '',
    )

    remaining = amount
    for bill in target_bills:
        if remaining <= 0:
            break
        to_apply = min(remaining, bill.balance_amount)
        if to_apply <= 0:
            continue
        _allocate(payment, bill, to_apply)
        remaining -= to_apply

    if remaining == amount and not payment.reference:
        payment.reference = ADVANCE_REFERENCE
        payment.save(update_fields=['reference', 'updated_at'])

    logger.info(
        "Recorded %s payment %s for %s %s (advance %s)",
        payment.method, amount, entity_type, entity_id, remaining
    )
    return payment, remaining


def list_bills(*, entity_type=None, entity_id=None, year=None, month=None, status=None):
    queryset = Bill.objects.prefetch_related('items').order_by(
        '-period_year', '-period_month', '-created_at'
    )
    if entity_type:
        queryset = queryset.filter(entity_type=entity_type)
    if entity_id:
        queryset = queryset.filter(entity_id=entity_id)
    if year:
        queryset = queryset.filter(period_year=year)
    if month:
        queryset = queryset.filter(period_month=month)
    if status:
        queryset = queryset.filter(status=status)
    return queryset


def list_payments(*, entity_type=None, entity_id=None):
    queryset = Payment.objects.prefetch_related('allocations__bill').order_by('-date', '-created_at')
    if entity_type:
        queryset = queryset.filter(entity_type=entity_type)
    if entity_id:
        queryset = queryset.filter(entity_id=entity_id)
    return queryset


def entity_names(records) -> dict:
    """Map entity ids of bills or payments to customer/company names."""
    customer_ids = {r.entity_id for r in records if r.entity_type == EntityType.CUSTOMER}
    company_ids = {r.entity_id for r in records if r.entity_type == EntityType.COMPANY}

    names = {}
    if customer_ids:
        names.update(Customer.objects.filter(id__in=customer_ids).values_list('id', 'name'))
    if company_ids:
        names.update(Company.objects.filter(id__in=company_ids).values_list('id', 'name'))
    return names


def build_ledger(*, entity_type: str, entity_id: UUID):
    """
    Account statement for a customer or company.

    Bills are debits dated on the day they were generated, payments are
    credits on their payment date. Entries are in date order (a bill
    before a payment on the same day) with a running balance.

    Returns:
        list[dict]: Entries with type, date, reference, debit, credit and
        balance.
    """
    entries = []

    bills = Bill.objects.filter(entity_type=entity_type, entity_id=entity_id)
    for bill in bills:
        entries.append({
            'type': 'bill',
            'date': timezone.localdate(bill.generated_at),
            'reference': bill.number,
            'debit': bill.total_amount,
            'credit': Decimal('0.00'),
        })

    payments = Payment.objects.filter(entity_type=entity_type, entity_id=entity_id)
    for payment in payments:
        entries.append({
            'type': 'payment',
            'date': payment.date,
            'reference': payment.reference or str(payment.id),
            'debit': Decimal('0.00'),
            'credit': payment.amount,
        })

    entries.sort(key=lambda entry: (entry['date'], entry['type'] != 'bill'))

    balance = Decimal('0.00')
    for entry in entries:
        balance += entry['debit'] - entry['credit']
        entry['balance'] = balance

    return entries
