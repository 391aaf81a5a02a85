"""
Tax Utils 테스트 (Pytest)

핵심 비즈니스 로직:
- calculate_taxes() 환급성 비용 분리 + IRPF 구간 + IVA/IBS
- calculate_payment_taxes() 계약 기본값 처리
- calculate_irpf() / calculate_next_bracket_distance()
- summarize_year() 연간 요약
"""
import itertools
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from apps.tax.utils import (
    IRPF_BRACKETS_2024,
    TENANT_ENTITY,
    TENANT_INDIVIDUAL,
    calculate_irpf,
    calculate_next_bracket_distance,
    calculate_payment_taxes,
    calculate_taxes,
    find_bracket,
    summarize_year,
    to_bool,
    to_decimal,
)


def make_contract(**kwargs):
    defaults = {
        'iptu_reimbursable': False,
        'condominium_reimbursable': False,
        'tenant_type': 'pf',
        'iva_ibs_subject': False,
        'iva_ibs_rate': Decimal('0'),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def make_payment(contract, reference_month, value, payment_date=None, **kwargs):
    defaults = {
        'contract': contract,
        'reference_month': reference_month,
        'value': Decimal(value),
        'payment_date': payment_date,
        'rent_amount': None,
        'iptu_amount': Decimal('0'),
        'condominium_amount': Decimal('0'),
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


class TestNormalizers:
    """입력 정규화"""

    @pytest.mark.parametrize("value,expected", [
        (None, Decimal('0')),
        ('', Decimal('0')),
        ('abc', Decimal('0')),
        ('NaN', Decimal('0')),
        ('Infinity', Decimal('0')),
        (True, Decimal('0')),
        ('1500.50', Decimal('1500.50')),
        (1000, Decimal('1000')),
        (Decimal('12.34'), Decimal('12.34')),
        ('1e30', Decimal('0')),
        (Decimal('-1e40'), Decimal('0')),
    ])
    def test_to_decimal(self, value, expected):
        assert to_decimal(value) == expected

    @pytest.mark.parametrize("value,expected", [
        ('false', False),
        ('False', False),
        ('0', False),
        ('', False),
        ('true', True),
        ('sim', True),
        ('on', True),
        (True, True),
        (None, False),
    ])
    def test_to_bool(self, value, expected):
        assert to_bool(value) is expected


class TestFindBracket:
    """세율 구간 선택 (상한 포함, 첫 번째 일치)"""

    @pytest.mark.parametrize("income,expected_rate", [
        (Decimal('0'), Decimal('0')),
        (Decimal('2259.20'), Decimal('0')),
        (Decimal('2259.21'), Decimal('0.075')),
        (Decimal('2826.65'), Decimal('0.075')),
        (Decimal('2826.66'), Decimal('0.15')),
        (Decimal('3751.05'), Decimal('0.15')),
        (Decimal('4664.68'), Decimal('0.225')),
        (Decimal('4664.69'), Decimal('0.275')),
        (Decimal('1000000'), Decimal('0.275')),
    ])
    def test_bracket_boundaries(self, income, expected_rate):
        assert find_bracket(income)['rate'] == expected_rate

    def test_bracket_selection_is_monotonic(self):
        """소득이 늘면 세율은 줄지 않음"""
        previous_rate = Decimal('0')
        for cents in range(0, 1000000, 1733):
            rate = find_bracket(Decimal(cents) / 100)['rate']
            assert rate >= previous_rate
            previous_rate = rate

    def test_table_has_five_brackets(self):
        assert len(IRPF_BRACKETS_2024) == 5
        assert IRPF_BRACKETS_2024[-1]['deduction'] == Decimal('896.00')


class TestCalculateTaxes:
    """월 임대료 세금 분해"""

    def test_low_rent_is_exempt(self):
        """1000 → 과세표준 800 → 1구간 → IR 0 → 실수령 1000"""
        result = calculate_taxes(Decimal('1000'))

        assert result['gross_income'] == Decimal('1000.00')
        assert result['taxable_income'] == Decimal('800.00')
        assert result['ir_rate'] == Decimal('0')
        assert result['ir_value'] == Decimal('0.00')
        assert result['iva_ibs_value'] == Decimal('0.00')
        assert result['net_income'] == Decimal('1000.00')

    @pytest.mark.parametrize("rent,expected_ir", [
        (Decimal('3000'), Decimal('10.56')),     # 2400 × 7.5% − 169.44
        (Decimal('4000'), Decimal('98.56')),     # 3200 × 15% − 381.44
        (Decimal('5000'), Decimal('237.23')),    # 4000 × 22.5% − 662.77
        (Decimal('10000'), Decimal('1304.00')),  # 8000 × 27.5% − 896.00
    ])
    def test_progressive_ir(self, rent, expected_ir):
        result = calculate_taxes(rent)

        assert result['ir_value'] == expected_ir
        assert result['net_income'] == rent - expected_ir

    def test_reimbursable_charges_are_not_taxed(self):
        result = calculate_taxes(
            Decimal('2000'), Decimal('300'), Decimal('500'),
            iptu_reimbursable=True, condominium_reimbursable=False,
        )

        assert result['gross_income'] == Decimal('2800.00')
        assert result['reimbursements'] == Decimal('300.00')
        assert result['rent_income'] == Decimal('2500.00')
        assert result['taxable_income'] == Decimal('2000.00')

    def test_no_reimbursements_when_flags_false(self):
        result = calculate_taxes(Decimal('2000'), Decimal('300'), Decimal('500'))

        assert result['reimbursements'] == Decimal('0.00')
        assert result['rent_income'] == result['gross_income']

    def test_flags_given_as_strings(self):
        """"false" 문자열은 False로 처리"""
        result = calculate_taxes(
            Decimal('2000'), Decimal('300'), Decimal('500'),
            iptu_reimbursable='false', condominium_reimbursable='true',
        )
        assert result['reimbursements'] == Decimal('500.00')

    def test_entity_tenant_pays_no_ir(self):
        result = calculate_taxes(Decimal('10000'), tenant_type='pj')

        assert result['ir_value'] == Decimal('0.00')
        assert result['ir_rate'] == Decimal('0')
        assert result['net_income'] == Decimal('10000.00')

    def test_iva_ibs_applied_on_rent_income(self):
        result = calculate_taxes(Decimal('1000'), iva_ibs_subject=True, iva_ibs_rate=Decimal('8.5'))

        assert result['iva_ibs_value'] == Decimal('85.00')
        assert result['net_income'] == Decimal('915.00')

    def test_iva_ibs_skipped_when_not_subject(self):
        result = calculate_taxes(Decimal('1000'), iva_ibs_subject=False, iva_ibs_rate=Decimal('8.5'))
        assert result['iva_ibs_value'] == Decimal('0.00')

    def test_iva_ibs_skipped_when_rate_zero(self):
        result = calculate_taxes(Decimal('1000'), iva_ibs_subject=True, iva_ibs_rate=0)
        assert result['iva_ibs_value'] == Decimal('0.00')

    @pytest.mark.parametrize("rent", [None, '', 'abc', 'NaN'])
    def test_invalid_input_is_zero(self, rent):
        """잘못된 입력은 예외 없이 0 처리"""
        result = calculate_taxes(rent, 'x', None, iva_ibs_subject=True, iva_ibs_rate='y')

        assert result['gross_income'] == Decimal('0.00')
        assert result['ir_value'] == Decimal('0.00')
        assert result['iva_ibs_value'] == Decimal('0.00')
        assert result['net_income'] == Decimal('0.00')

    def test_negative_income_has_no_taxes(self):
        result = calculate_taxes(Decimal('-500'), iva_ibs_subject=True, iva_ibs_rate=Decimal('10'))

        assert result['ir_value'] == Decimal('0.00')
        assert result['iva_ibs_value'] == Decimal('0.00')

    def test_net_never_exceeds_gross(self):
        flags = itertools.product((False, True), (False, True), (TENANT_INDIVIDUAL, TENANT_ENTITY))
        for iptu_reimbursable, condominium_reimbursable, tenant_type in flags:
            for rent in range(0, 20001, 750):
                for iptu in (0, 150, 900):
                    result = calculate_taxes(
                        Decimal(rent), Decimal(iptu), Decimal('400'),
                        iptu_reimbursable=iptu_reimbursable,
                        condominium_reimbursable=condominium_reimbursable,
                        tenant_type=tenant_type,
                        iva_ibs_subject=True,
                        iva_ibs_rate=Decimal('12.5'),
                    )
                    assert result['net_income'] <= result['gross_income']

    @pytest.mark.parametrize("rent", ['1e30', Decimal('1e40'), 10 ** 50])
    def test_out_of_range_amount_is_zero(self, rent):
        result = calculate_taxes(rent, '1e35', iva_ibs_subject=True, iva_ibs_rate=Decimal('10'))

        assert result['gross_income'] == Decimal('0.00')
        assert result['ir_value'] == Decimal('0.00')
        assert result['net_income'] == Decimal('0.00')

    @pytest.mark.parametrize("income", ['1e30', Decimal('1e40')])
    def test_out_of_range_irpf(self, income):
        assert calculate_irpf(income)['tax'] == Decimal('0.00')
        assert calculate_next_bracket_distance(income)['current_rate'] == Decimal('0')

    def test_deterministic(self):
        args = (Decimal('4321.09'), Decimal('120'), Decimal('380'))
        assert calculate_taxes(*args) == calculate_taxes(*args)


class TestCalculatePaymentTaxes:
    """납부 + 계약 조건 세금 계산"""

    def test_uses_rent_amount_when_present(self):
        contract = make_contract()
        payment = make_payment(
            contract, '2024-01', '2700',
            rent_amount=Decimal('2500'), iptu_amount=Decimal('200'),
        )
        result = calculate_payment_taxes(payment)
        assert result['gross_income'] == Decimal('2700.00')

    def test_falls_back_to_value(self):
        contract = make_contract()
        payment = make_payment(contract, '2024-01', '1800')
        result = calculate_payment_taxes(payment, contract)
        assert result['gross_income'] == Decimal('1800.00')

    def test_iva_ibs_subject_defaults_to_true(self):
        """계약에 과세 여부가 없으면 과세 대상으로 간주"""
        contract = make_contract(iva_ibs_subject=None, iva_ibs_rate=Decimal('10'))
        payment = make_payment(contract, '2024-01', '1000')

        result = calculate_payment_taxes(payment)
        assert result['iva_ibs_value'] == Decimal('100.00')

    def test_iva_ibs_explicitly_false(self):
        contract = make_contract(iva_ibs_subject=False, iva_ibs_rate=Decimal('10'))
        payment = make_payment(contract, '2024-01', '1000')

        assert calculate_payment_taxes(payment)['iva_ibs_value'] == Decimal('0.00')

    def test_tenant_type_defaults_to_individual(self):
        contract = make_contract(tenant_type='')
        payment = make_payment(contract, '2024-01', '10000')

        assert calculate_payment_taxes(payment)['ir_value'] == Decimal('1304.00')


class TestCalculateIrpf:

    def test_raw_monthly_income(self):
        result = calculate_irpf(Decimal('3000'))

        assert result['tax'] == Decimal('68.56')  # 3000 × 15% − 381.44
        assert result['rate'] == Decimal('0.15')
        assert result['rate_percent'] == 15.0
        assert result['effective_rate'] == Decimal('2.29')

    def test_zero_income(self):
        result = calculate_irpf(0)

        assert result['tax'] == Decimal('0.00')
        assert result['effective_rate'] == Decimal('0')


class TestNextBracketDistance:

    def test_distance_to_next_bracket(self):
        result = calculate_next_bracket_distance(Decimal('2000'))

        assert result['distance'] == Decimal('259.20')
        assert result['next_rate'] == Decimal('0.075')
        assert result['is_max'] is False

    def test_top_bracket(self):
        result = calculate_next_bracket_distance(Decimal('5000'))

        assert result['is_max'] is True
        assert result['distance'] is None
        assert result['current_rate_percent'] == 27.5


class TestSummarizeYear:
    """연간 요약"""

    @pytest.fixture
    def payments(self):
        contract = make_contract()
        return [
            make_payment(contract, '2024-01', '2000', payment_date=date(2024, 1, 10)),
            make_payment(contract, '2024-02', '4000', payment_date=date(2024, 2, 10)),
            make_payment(contract, '2024-03', '9999'),  # 미납
            make_payment(contract, '2023-12', '9999', payment_date=date(2023, 12, 10)),  # 다른 연도
        ]

    def test_only_paid_payments_of_year(self, payments):
        summary = summarize_year(payments, 2024)

        assert summary['payment_count'] == 2
        assert summary['annual_total'] == Decimal('6000.00')
        assert summary['average_monthly'] == Decimal('3000.00')

    def test_monthly_totals_most_recent_first(self, payments):
        summary = summarize_year(payments, 2024)

        assert [m['month'] for m in summary['monthly_totals']] == ['2024-02', '2024-01']

    def test_annual_estimate_is_monthly_times_twelve(self, payments):
        summary = summarize_year(payments, 2024)

        assert summary['monthly_tax'] == Decimal('68.56')
        assert summary['annual_tax'] == Decimal('822.72')
        assert summary['bracket_rate_percent'] == 15.0

    def test_breakdown_totals(self, payments):
        summary = summarize_year(payments, 2024)
        totals = summary['breakdown_totals']

        assert totals['ir_value'] == Decimal('98.56')  # 2000 → 0, 4000 → 98.56
        assert totals['net_income'] == Decimal('5901.44')

    def test_empty_year(self):
        summary = summarize_year([], 2024)

        assert summary['payment_count'] == 0
        assert summary['monthly_totals'] == []
        assert summary['average_monthly'] == Decimal('0')
        assert summary['annual_tax'] == Decimal('0.00')
