"""
납부 내역 내보내기 (CSV / Excel) + 전체 백업 데이터
"""
import csv
from decimal import Decimal
from io import BytesIO, StringIO

import openpyxl
from django.utils import timezone
from openpyxl.styles import Font

from apps.contracts.models import Contract
from apps.contracts.serializers import serialize_contract
from apps.payments.models import Payment
from apps.payments.serializers import serialize_payment
from apps.properties.models import Property
from apps.properties.serializers import serialize_property

PAYMENT_HEADERS = [
    'Mês de referência', 'Imóvel', 'Inquilino', 'Vencimento', 'Pagamento', 'Status',
    'Valor', 'Aluguel', 'IPTU', 'Condomínio', 'Outros', 'IR', 'IVA/IBS',
    'Forma de pagamento', 'Observações',
]


def _payment_row(payment):
    return [
        payment.reference_month,
        payment.contract.property.address,
        payment.contract.tenant,
        payment.due_date.isoformat() if payment.due_date else '',
        payment.payment_date.isoformat() if payment.payment_date else '',
        payment.get_status_display(),
        payment.value,
        payment.rent_amount if payment.rent_amount is not None else '',
        payment.iptu_amount,
        payment.condominium_amount,
        payment.other_charges,
        payment.ir_value,
        payment.iva_ibs_value,
        payment.get_payment_method_display(),
        payment.notes or '',
    ]


def export_payments_to_csv(queryset):
    """납부 내역 CSV (UTF-8 BOM, 엑셀에서 악센트 문자 깨짐 방지)"""
    output = StringIO()
    output.write('\ufeff')
    writer = csv.writer(output)
    writer.writerow(PAYMENT_HEADERS)
    for payment in queryset:
        writer.writerow(_payment_row(payment))
    return output.getvalue()


def export_payments_to_excel(queryset):
    """
    납부 내역 엑셀 내보내기
    Decimal → float 변환 (엑셀 숫자 셀)
    """
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Pagamentos"

    ws.append(PAYMENT_HEADERS)
    for cell in ws[1]:
        cell.font = Font(bold=True)

    for payment in queryset:
        row = [
            float(value) if isinstance(value, Decimal) else value
            for value in _payment_row(payment)
        ]
        ws.append(row)

    ws.freeze_panes = 'A2'
    ws.column_dimensions['B'].width = 40
    ws.column_dimensions['C'].width = 25

    output = BytesIO()
    wb.save(output)
    output.seek(0)
    return output


def build_backup(user):
    """사용자 전체 데이터 백업 {exportDate, data: {properties, contracts, payments}}"""
    return {
        'exportDate': timezone.now(),
        'data': {
            'properties': [serialize_property(p) for p in Property.objects.filter(user=user)],
            'contracts': [serialize_contract(c) for c in Contract.objects.filter(property__user=user)],
            'payments': [serialize_payment(p) for p in Payment.objects.owned_by(user)],
        },
    }
