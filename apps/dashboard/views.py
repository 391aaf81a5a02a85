"""
대시보드 API

- 총 부동산 수, 활성 계약 수
- 이번 달(기준월) 수령액 / 미수령액
- 연체 건수
- 다가오는 미납 (오늘 ~ N일 이내, 기한 오름차순, 최대 M건)
"""
import logging
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.db.models import Q, Sum
from django.http import JsonResponse
from django.utils import timezone

from apps.contracts.models import Contract
from apps.core.http import api_view
from apps.payments.models import Payment
from apps.payments.serializers import serialize_payment
from apps.properties.models import Property
from apps.properties.serializers import serialize_property

logger = logging.getLogger(__name__)


def get_dashboard_metrics(user, today=None):
    """사용자별 대시보드 지표 집계"""
    if today is None:
        today = timezone.localdate()
    current_month = today.strftime('%Y-%m')

    payments = Payment.objects.owned_by(user)

    month_totals = payments.by_month(current_month).aggregate(
        received=Sum('value', filter=Q(payment_date__isnull=False)),
        pending=Sum('value', filter=Q(payment_date__isnull=True)),
    )

    upcoming = (
        payments.unpaid()
        .filter(due_date__gte=today, due_date__lte=today + timedelta(days=settings.RENTAL_UPCOMING_DAYS))
        .with_relations()
        .order_by('due_date', 'id')[:settings.RENTAL_UPCOMING_LIMIT]
    )

    upcoming_payments = []
    for payment in upcoming:
        item = serialize_payment(payment)
        item['tenant'] = payment.contract.tenant
        item['property'] = serialize_property(payment.contract.property)
        upcoming_payments.append(item)

    return {
        'total_properties': Property.objects.filter(user=user).count(),
        'active_contracts': Contract.objects.filter(property__user=user, status='active').count(),
        'received_this_month': month_totals['received'] or Decimal('0.00'),
        'pending_this_month': month_totals['pending'] or Decimal('0.00'),
        'overdue_count': payments.overdue(today).count(),
        'current_month': current_month,
        'upcoming_payments': upcoming_payments,
    }


@api_view(['GET'])
def dashboard(request):
    return JsonResponse(get_dashboard_metrics(request.user))
