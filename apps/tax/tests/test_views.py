"""
Tax Views 테스트 (Pytest)

- tax_calculate: 쿼리 파라미터 계산기
- tax_report: 연간 요약 (본인 납부만, 납부 완료만)
"""
from datetime import date
from decimal import Decimal

import pytest
from django.urls import reverse

from apps.payments.models import Payment


@pytest.mark.django_db
class TestTaxCalculateView:

    def test_requires_login(self, client):
        response = client.get(reverse('tax:tax_calculate'), {'rent': '1000'})
        assert response.status_code == 401

    def test_basic_calculation(self, authenticated_client):
        response = authenticated_client.get(reverse('tax:tax_calculate'), {'rent': '5000'})

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data['ir_value']) == Decimal('237.23')
        assert Decimal(data['net_income']) == Decimal('4762.77')
        assert data['next_bracket']['next_rate_percent'] == 27.5

    def test_flags_and_iva(self, authenticated_client):
        response = authenticated_client.get(reverse('tax:tax_calculate'), {
            'rent': '2000',
            'iptu': '300',
            'iptu_reimbursable': 'true',
            'condominium': '500',
            'condominium_reimbursable': 'false',
            'tenant_type': 'pj',
            'iva_ibs_subject': 'true',
            'iva_ibs_rate': '10',
        })

        data = response.json()
        assert Decimal(data['reimbursements']) == Decimal('300.00')
        assert Decimal(data['ir_value']) == Decimal('0.00')
        assert Decimal(data['iva_ibs_value']) == Decimal('250.00')

    def test_missing_rent_returns_400(self, authenticated_client):
        response = authenticated_client.get(reverse('tax:tax_calculate'))

        assert response.status_code == 400
        assert 'rent' in response.json()['details']

    def test_rate_above_100_returns_400(self, authenticated_client):
        response = authenticated_client.get(
            reverse('tax:tax_calculate'), {'rent': '1000', 'iva_ibs_rate': '150'}
        )
        assert response.status_code == 400


@pytest.mark.django_db
class TestTaxReportView:

    @pytest.fixture
    def year_payments(self, contract):
        """2024년 납부 2건 + 미납 1건"""
        Payment.objects.create(
            contract=contract, reference_month='2024-01', due_date=date(2024, 1, 10),
            payment_date=date(2024, 1, 10), value=Decimal('2000.00'),
        )
        Payment.objects.create(
            contract=contract, reference_month='2024-02', due_date=date(2024, 2, 10),
            payment_date=date(2024, 2, 9), value=Decimal('4000.00'),
        )
        Payment.objects.create(
            contract=contract, reference_month='2024-03', due_date=date(2024, 3, 10),
            value=Decimal('2700.00'),
        )

    def test_report_for_year(self, authenticated_client, year_payments):
        response = authenticated_client.get(reverse('tax:tax_report'), {'year': 2024})

        assert response.status_code == 200
        data = response.json()
        assert data['year'] == 2024
        assert data['payment_count'] == 2
        assert Decimal(data['annual_total']) == Decimal('6000.00')
        assert Decimal(data['average_monthly']) == Decimal('3000.00')
        assert Decimal(data['annual_tax']) == Decimal('822.72')
        assert data['next_bracket']['is_max'] is False
        assert len(data['brackets']) == 5
        assert data['brackets'][-1]['limit'] is None

    def test_other_users_payments_are_ignored(self, other_client, year_payments):
        response = other_client.get(reverse('tax:tax_report'), {'year': 2024})

        data = response.json()
        assert data['payment_count'] == 0
        assert Decimal(data['annual_total']) == Decimal('0')

    def test_defaults_to_current_year(self, authenticated_client, today):
        response = authenticated_client.get(reverse('tax:tax_report'))

        assert response.status_code == 200
        assert response.json()['year'] == today.year

    def test_invalid_year(self, authenticated_client):
        response = authenticated_client.get(reverse('tax:tax_report'), {'year': '1900'})
        assert response.status_code == 400
