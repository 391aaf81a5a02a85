import json

import pytest
from django.urls import reverse


PROTECTED_URLS = [
    ('properties:property_collection', {}),
    ('contracts:contract_collection', {}),
    ('payments:payment_collection', {}),
    ('dashboard:dashboard', {}),
    ('tax:tax_calculate', {}),
    ('tax:tax_report', {}),
    ('reports:export_payments_csv', {}),
    ('reports:export_payments_xlsx', {}),
    ('reports:export_backup', {}),
    ('accounts:me', {}),
]


@pytest.mark.django_db
class TestSecurity:

    # --- 1. 인증 테스트 (Authentication) ---

    @pytest.mark.parametrize('name,kwargs', PROTECTED_URLS)
    def test_unauthenticated_user_gets_401(self, client, name, kwargs):
        """로그인 안 한 사용자는 리다이렉트 없이 401 JSON 응답"""
        response = client.get(reverse(name, kwargs=kwargs))

        assert response.status_code == 401
        assert response.json()['error'] == 'Autenticação necessária'

    # --- 2. 인가/권한 테스트 (Authorization) ---

    def test_user_cannot_see_others_records(self, authenticated_client, other_contract):
        """A 사용자가 B 사용자의 부동산/계약을 볼 수 없는지 (보안 핵심)"""
        prop_url = reverse('properties:property_detail', kwargs={'pk': other_contract.property_id})
        contract_url = reverse('contracts:contract_detail', kwargs={'pk': other_contract.pk})

        assert authenticated_client.get(prop_url).status_code == 404
        assert authenticated_client.get(contract_url).status_code == 404

    def test_user_cannot_delete_others_property(self, authenticated_client, other_property):
        url = reverse('properties:property_detail', kwargs={'pk': other_property.pk})

        assert authenticated_client.delete(url).status_code == 404
        other_property.refresh_from_db()

    def test_user_cannot_create_payment_on_others_contract(self, authenticated_client, other_contract):
        """남의 계약으로 납부 등록 시도 → 400"""
        response = authenticated_client.post(
            reverse('payments:payment_collection'),
            data=json.dumps({
                'contract': other_contract.pk,
                'reference_month': '2024-05',
                'value': '5000.00',
            }),
            content_type='application/json',
        )

        assert response.status_code == 400
        assert 'contract' in response.json()['details']

    def test_lists_are_isolated(self, authenticated_client, other_contract):
        response = authenticated_client.get(reverse('properties:property_collection'))

        assert response.status_code == 200
        assert response.json() == []

    # --- 3. 요청 형식 ---

    def test_invalid_json_body(self, authenticated_client):
        response = authenticated_client.post(
            reverse('properties:property_collection'),
            data='{not json',
            content_type='application/json',
        )

        assert response.status_code == 400
        assert response.json()['error'] == 'JSON inválido'

    def test_method_not_allowed(self, authenticated_client):
        response = authenticated_client.delete(reverse('dashboard:dashboard'))

        assert response.status_code == 405
