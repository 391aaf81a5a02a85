"""
세금 API 뷰

- GET /api/tax/calculate/   월 임대료 세금 계산기 (저장 없음)
- GET /api/tax/report/      연간 Carnê-Leão 추정 리포트 (?year=, 기본 올해)
"""
import logging

from django.http import JsonResponse

from apps.core.http import api_view, form_error_response
from apps.payments.models import Payment
from .forms import TaxCalculationForm, TaxReportForm
from .utils import (
    calculate_next_bracket_distance,
    calculate_taxes,
    get_irpf_brackets,
    summarize_year,
)

logger = logging.getLogger(__name__)


@api_view(['GET'])
def tax_calculate(request):
    form = TaxCalculationForm(request.GET)
    if not form.is_valid():
        return form_error_response(form)

    data = form.cleaned_data
    result = calculate_taxes(
        data['rent'],
        data['iptu'],
        data['condominium'],
        iptu_reimbursable=data['iptu_reimbursable'],
        condominium_reimbursable=data['condominium_reimbursable'],
        tenant_type=data['tenant_type'],
        iva_ibs_subject=data['iva_ibs_subject'],
        iva_ibs_rate=data['iva_ibs_rate'],
    )
    result['next_bracket'] = calculate_next_bracket_distance(result['taxable_income'])
    return JsonResponse(result)


@api_view(['GET'])
def tax_report(request):
    """
    연간 세금 리포트

    - 납부 완료 + 기준월이 해당 연도인 납부만 집계
    - 월 평균 소득 기준 IRPF, 연간 추정 = 월 세액 × 12
    - 다음 세율 구간까지 남은 금액
    """
    form = TaxReportForm(request.GET)
    if not form.is_valid():
        return form_error_response(form)

    year = form.cleaned_data['year']
    payments = (
        Payment.objects.owned_by(request.user)
        .paid()
        .by_year(year)
        .select_related('contract')
    )

    report = summarize_year(payments, year)
    report['next_bracket'] = calculate_next_bracket_distance(report['average_monthly'])
    brackets = get_irpf_brackets(year)
    report['brackets'] = [
        {
            'limit': None if i == len(brackets) - 1 else bracket['limit'],  # 최고 구간은 상한 없음
            'rate_percent': float(bracket['rate'] * 100),
            'deduction': bracket['deduction'],
        }
        for i, bracket in enumerate(brackets)
    ]

    logger.debug(f"세금 리포트: user={request.user.id}, year={year}, payments={report['payment_count']}")
    return JsonResponse(report)
