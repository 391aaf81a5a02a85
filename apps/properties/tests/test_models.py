"""
Property 모델 테스트
"""
from decimal import Decimal

import pytest
from django.db import IntegrityError
from django.db.models import ProtectedError

from apps.properties.models import Property


@pytest.mark.django_db
class TestPropertyModel:

    def test_str(self, property_obj):
        assert str(property_obj) == property_obj.address

    @pytest.mark.parametrize("document,expected", [
        ('123.456.789-00', '123.456.***-**'),
        ('12.345.678/0001-90', '12.345.678/0***-**'),
        ('', '-'),
        ('123', '*****'),
    ])
    def test_masked_owner_document(self, user, document, expected):
        prop = Property(user=user, owner_document=document)
        assert prop.get_masked_owner_document() == expected

    def test_negative_rent_rejected_by_db(self, user):
        with pytest.raises(IntegrityError):
            Property.objects.create(
                user=user, address='Rua X', owner='Fulano',
                owner_document='12345678900', rent_value=Decimal('-1.00')
            )

    def test_active_contract(self, property_obj, contract):
        assert property_obj.get_active_contract() == contract

        contract.status = 'cancelled'
        contract.save()
        assert property_obj.get_active_contract() is None

    def test_delete_with_contract_is_protected(self, property_obj, contract):
        with pytest.raises(ProtectedError):
            property_obj.delete()
