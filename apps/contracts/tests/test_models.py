"""
Contract 모델 테스트
"""
from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError
from django.db.models import ProtectedError
from django.utils import timezone

from apps.contracts.models import Contract, parse_reference_month


class TestParseReferenceMonth:

    def test_parse(self):
        assert parse_reference_month('2025-03') == (2025, 3)


@pytest.mark.django_db
class TestContractModel:

    def test_rent_base_value_defaults_to_rent_value(self, contract):
        assert contract.rent_base_value == Decimal('2500.00')

    def test_gross_monthly_charge(self, contract):
        contract.condominium_value = Decimal('400.00')
        assert contract.get_gross_monthly_charge() == Decimal('3100.00')

    def test_tax_breakdown(self, contract):
        taxes = contract.get_tax_breakdown()

        assert taxes['gross_income'] == Decimal('2700.00')
        assert taxes['taxable_income'] == Decimal('2160.00')
        assert taxes['ir_value'] == Decimal('0.00')

    @pytest.mark.parametrize("due_day,reference_month,expected", [
        (10, '2025-03', date(2025, 3, 10)),
        (31, '2025-02', date(2025, 2, 28)),
        (31, '2024-02', date(2024, 2, 29)),
        (31, '2025-04', date(2025, 4, 30)),
    ])
    def test_due_date_for(self, contract, due_day, reference_month, expected):
        contract.due_day = due_day
        assert contract.due_date_for(reference_month) == expected

    def test_is_expired(self, contract):
        assert contract.is_expired() is (contract.end_date < timezone.localdate())

        contract.end_date = timezone.localdate() - timedelta(days=1)
        assert contract.is_expired() is True

    def test_clean_rejects_end_before_start(self, contract):
        contract.end_date = contract.start_date - timedelta(days=1)

        with pytest.raises(ValidationError) as exc_info:
            contract.full_clean()
        assert 'end_date' in exc_info.value.message_dict

    def test_db_rejects_end_before_start(self, property_obj):
        with pytest.raises(IntegrityError):
            Contract.objects.create(
                property=property_obj, tenant='X', tenant_document='11122233344',
                start_date=date(2025, 1, 1), end_date=date(2024, 1, 1),
                due_day=5, rent_value=Decimal('1000.00'),
            )

    def test_delete_with_payment_is_protected(self, contract, paid_payment):
        with pytest.raises(ProtectedError):
            contract.delete()
