"""
내보내기 API

- GET /api/export/payments/        납부 내역 CSV
- GET /api/export/payments.xlsx    납부 내역 엑셀
- GET /api/export/backup/          전체 데이터 JSON 백업
"""
import logging

from django.http import HttpResponse, JsonResponse
from django.utils import timezone

from apps.core.http import api_view
from apps.payments.models import Payment
from .exporters import build_backup, export_payments_to_csv, export_payments_to_excel

logger = logging.getLogger(__name__)


def _export_queryset(user):
    return Payment.objects.owned_by(user).with_relations().order_by('-due_date', '-id')


def _timestamp():
    return timezone.localtime().strftime('%Y%m%d_%H%M%S')


@api_view(['GET'])
def export_payments_csv(request):
    content = export_payments_to_csv(_export_queryset(request.user))

    response = HttpResponse(content, content_type='text/csv; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="pagamentos_{_timestamp()}.csv"'
    logger.info(f"CSV 내보내기: user={request.user.id}")
    return response


@api_view(['GET'])
def export_payments_xlsx(request):
    excel_file = export_payments_to_excel(_export_queryset(request.user))

    response = HttpResponse(
        excel_file.read(),
        content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    )
    response['Content-Disposition'] = f'attachment; filename="pagamentos_{_timestamp()}.xlsx"'
    logger.info(f"엑셀 내보내기: user={request.user.id}")
    return response


@api_view(['GET'])
def export_backup(request):
    response = JsonResponse(build_backup(request.user))
    response['Content-Disposition'] = f'attachment; filename="backup_{_timestamp()}.json"'
    logger.info(f"백업 내보내기: user={request.user.id}")
    return response
