"""
임대 소득 세금 계산 유틸리티 (추정치)

- 환급성 비용(IPTU, 관리비) 분리
- Carnê-Leão 월별 누진세 (IRPF, 개인 임차인만)
- IVA/IBS 소비세 (세제 개편안, 단일 세율)

모든 함수는 순수 함수이며 예외를 발생시키지 않습니다.
잘못되었거나 누락된 숫자 입력은 0으로 처리합니다.

TODO: IRPF 세율표가 매년 바뀌므로 연도별 테이블을 DB(관리자 페이지)에서
수정할 수 있도록 옮길 것
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional


# 2024년 IRPF 월별 세율표 (Carnê-Leão)
# 상한 포함(<=), 첫 번째로 일치하는 구간 적용
IRPF_BRACKETS_2024 = [
    {'limit': Decimal('2259.20'), 'rate': Decimal('0'), 'deduction': Decimal('0')},
    {'limit': Decimal('2826.65'), 'rate': Decimal('0.075'), 'deduction': Decimal('169.44')},
    {'limit': Decimal('3751.05'), 'rate': Decimal('0.15'), 'deduction': Decimal('381.44')},
    {'limit': Decimal('4664.68'), 'rate': Decimal('0.225'), 'deduction': Decimal('662.77')},
    {'limit': Decimal('9999999999999'), 'rate': Decimal('0.275'), 'deduction': Decimal('896.00')},  # 무한대 대신 큰 수
]

# 임대 소득의 80%만 과세표준 (추정 경비 20%)
TAXABLE_SHARE = Decimal('0.80')

TENANT_INDIVIDUAL = 'pf'  # Pessoa Física
TENANT_ENTITY = 'pj'      # Pessoa Jurídica

ZERO = Decimal('0')
CENTS = Decimal('0.01')

# 금액 필드(max_digits=12) 범위를 넘는 값은 잘못된 입력으로 간주
MAX_AMOUNT = Decimal('1e13')

_TRUE_STRINGS = {'1', 'true', 'on', 'yes', 'sim', 's'}


def to_decimal(value) -> Decimal:
    """숫자 입력 정규화 (None, 빈 문자열, 잘못된 값, NaN/Infinity, 범위 초과 → 0)"""
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return ZERO
    if not result.is_finite() or abs(result) >= MAX_AMOUNT:
        return ZERO
    return result


def to_bool(value) -> bool:
    """플래그 입력 정규화 ("false" 문자열이 True가 되지 않도록)"""
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def get_irpf_brackets(year: Optional[int] = None) -> List[Dict]:
    """연도별 세율표 반환 (현재는 2024년 표를 모든 연도에 적용)"""
    return IRPF_BRACKETS_2024


def find_bracket(income: Decimal) -> Dict:
    """소득이 속한 세율 구간 (상한 포함, 첫 번째 일치)"""
    for bracket in IRPF_BRACKETS_2024:
        if income <= bracket['limit']:
            return bracket
    return IRPF_BRACKETS_2024[-1]


def calculate_taxes(
    rent_amount,
    iptu_amount=ZERO,
    condominium_amount=ZERO,
    iptu_reimbursable=False,
    condominium_reimbursable=False,
    tenant_type=TENANT_INDIVIDUAL,
    iva_ibs_subject=False,
    iva_ibs_rate=ZERO,
) -> Dict:
    """
    월 임대료 구성 → 과세 내역 분해

    Args:
        rent_amount: 기본 임대료
        iptu_amount: IPTU (재산세)
        condominium_amount: 관리비
        iptu_reimbursable: IPTU 환급성 여부 (True면 비과세 통과 항목)
        condominium_reimbursable: 관리비 환급성 여부
        tenant_type: 'pf' (개인) / 'pj' (법인) - IRPF는 개인만
        iva_ibs_subject: IVA/IBS 과세 대상 여부
        iva_ibs_rate: IVA/IBS 세율 (퍼센트, 예: 8.5)

    Returns:
        {
            'gross_income': 총 청구액,
            'reimbursements': 환급성 비용 (비과세),
            'rent_income': 임대 소득,
            'taxable_income': 과세표준 (임대 소득의 80%),
            'ir_rate': IRPF 세율 (소수),
            'ir_rate_percent': IRPF 세율 (%),
            'ir_deduction': 누진공제,
            'ir_value': IRPF 세액,
            'iva_ibs_rate': IVA/IBS 세율 (%),
            'iva_ibs_value': IVA/IBS 세액,
            'net_income': 실수령액
        }
    """
    rent = to_decimal(rent_amount)
    iptu = to_decimal(iptu_amount)
    condominium = to_decimal(condominium_amount)

    gross_income = rent + iptu + condominium

    reimbursements = ZERO
    if to_bool(iptu_reimbursable):
        reimbursements += iptu
    if to_bool(condominium_reimbursable):
        reimbursements += condominium

    rent_income = gross_income - reimbursements
    taxable_income = rent_income * TAXABLE_SHARE

    # IRPF (Carnê-Leão) - 개인 임차인만
    ir_rate = ZERO
    ir_deduction = ZERO
    ir_value = ZERO
    if str(tenant_type or '').strip().lower() == TENANT_INDIVIDUAL:
        bracket = find_bracket(taxable_income)
        ir_rate = bracket['rate']
        ir_deduction = bracket['deduction']
        ir_value = max(taxable_income * ir_rate - ir_deduction, ZERO)  # 음수 방지

    # IVA/IBS
    iva_ibs_rate = to_decimal(iva_ibs_rate)
    iva_ibs_value = ZERO
    if to_bool(iva_ibs_subject) and iva_ibs_rate > 0:
        iva_ibs_value = max(rent_income * iva_ibs_rate / Decimal('100'), ZERO)

    rent_income = _money(rent_income)
    ir_value = _money(ir_value)
    iva_ibs_value = _money(iva_ibs_value)

    return {
        'gross_income': _money(gross_income),
        'reimbursements': _money(reimbursements),
        'rent_income': rent_income,
        'taxable_income': _money(taxable_income),
        'ir_rate': ir_rate,
        'ir_rate_percent': float(ir_rate * 100),
        'ir_deduction': ir_deduction,
        'ir_value': ir_value,
        'iva_ibs_rate': iva_ibs_rate,
        'iva_ibs_value': iva_ibs_value,
        'net_income': rent_income - ir_value - iva_ibs_value,
    }


def calculate_payment_taxes(payment, contract=None) -> Dict:
    """
    납부 내역 + 계약 조건으로 세금 계산

    - 임대료: payment.rent_amount가 없으면 payment.value 사용
    - 임차인 유형 기본값: 개인(pf)
    - IVA/IBS 과세 대상 기본값: True (명시적으로 False인 경우만 제외)
    """
    if contract is None:
        contract = payment.contract

    rent = payment.rent_amount if payment.rent_amount else payment.value

    return calculate_taxes(
        rent,
        payment.iptu_amount,
        payment.condominium_amount,
        iptu_reimbursable=contract.iptu_reimbursable or False,
        condominium_reimbursable=contract.condominium_reimbursable or False,
        tenant_type=contract.tenant_type or TENANT_INDIVIDUAL,
        iva_ibs_subject=contract.iva_ibs_subject is not False,
        iva_ibs_rate=contract.iva_ibs_rate,
    )


def calculate_irpf(monthly_income) -> Dict:
    """
    월 소득에 IRPF 세율표 직접 적용 (80% 공제 없이)

    Returns:
        {'tax', 'rate', 'rate_percent', 'deduction', 'effective_rate'}
    """
    income = to_decimal(monthly_income)
    bracket = find_bracket(income)
    tax = _money(max(income * bracket['rate'] - bracket['deduction'], ZERO))

    effective_rate = ZERO
    if income > 0:
        effective_rate = _money(tax / income * 100)

    return {
        'tax': tax,
        'rate': bracket['rate'],
        'rate_percent': float(bracket['rate'] * 100),
        'deduction': bracket['deduction'],
        'effective_rate': effective_rate,
    }


def calculate_next_bracket_distance(taxable_income) -> Optional[Dict]:
    """
    다음 세율 구간까지 거리 계산

    Returns:
        다음 구간 정보 (최고 구간이면 is_max=True)
    """
    taxable_income = to_decimal(taxable_income)

    for i, bracket in enumerate(IRPF_BRACKETS_2024):
        if taxable_income <= bracket['limit']:
            current_rate = bracket['rate']

            if i < len(IRPF_BRACKETS_2024) - 1:
                next_bracket = IRPF_BRACKETS_2024[i + 1]
                return {
                    'current_rate': current_rate,
                    'current_rate_percent': float(current_rate * 100),
                    'next_rate': next_bracket['rate'],
                    'next_rate_percent': float(next_bracket['rate'] * 100),
                    'distance': _money(bracket['limit'] - taxable_income),
                    'next_limit': bracket['limit'],
                    'is_max': False,
                }

            # 최고 구간
            return {
                'current_rate': current_rate,
                'current_rate_percent': float(current_rate * 100),
                'next_rate': None,
                'next_rate_percent': None,
                'distance': None,
                'next_limit': None,
                'is_max': True,
            }

    return None


def summarize_year(payments: Iterable, year: int) -> Dict:
    """
    연간 임대 소득 요약 (Carnê-Leão 추정)

    - 대상: 납부 완료(payment_date 있음) + 기준월이 해당 연도
    - 월 평균 소득에 IRPF 적용 → 연간 추정 = 월 세액 × 12
    - 납부 건별 세금 내역(IR, IVA/IBS, 환급성 비용, 실수령액) 합계

    Args:
        payments: Payment 객체들 (contract select_related 권장)
        year: 대상 연도
    """
    prefix = f"{year}-"
    monthly_totals: Dict[str, Decimal] = {}
    totals = {
        'gross_income': ZERO,
        'reimbursements': ZERO,
        'rent_income': ZERO,
        'ir_value': ZERO,
        'iva_ibs_value': ZERO,
        'net_income': ZERO,
    }
    payment_count = 0

    for payment in payments:
        if not payment.payment_date:
            continue
        if not (payment.reference_month or '').startswith(prefix):
            continue

        payment_count += 1
        month = payment.reference_month
        monthly_totals[month] = monthly_totals.get(month, ZERO) + to_decimal(payment.value)

        breakdown = calculate_payment_taxes(payment)
        for key in totals:
            totals[key] += breakdown[key]

    annual_total = sum(monthly_totals.values(), ZERO)
    month_count = len(monthly_totals)
    average_monthly = _money(annual_total / month_count) if month_count else ZERO

    irpf = calculate_irpf(average_monthly)

    return {
        'year': year,
        'payment_count': payment_count,
        'monthly_totals': [
            {'month': month, 'total': _money(monthly_totals[month])}
            for month in sorted(monthly_totals, reverse=True)  # 최근 월이 먼저
        ],
        'annual_total': _money(annual_total),
        'average_monthly': average_monthly,
        'monthly_tax': irpf['tax'],
        'annual_tax': irpf['tax'] * 12,
        'bracket_rate_percent': irpf['rate_percent'],
        'effective_rate': irpf['effective_rate'],
        'breakdown_totals': {key: _money(value) for key, value in totals.items()},
    }
