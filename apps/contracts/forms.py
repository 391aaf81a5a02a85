"""계약 입력 폼 (JSON 본문 검증용)"""

import re

from django import forms
from django.core.exceptions import ValidationError

from apps.properties.models import Property
from .models import Contract


class ContractForm(forms.ModelForm):
    """계약 생성/수정 폼"""

    class Meta:
        model = Contract
        fields = [
            'property', 'tenant', 'tenant_document', 'tenant_email', 'tenant_phone',
            'tenant_type', 'start_date', 'end_date', 'due_day', 'status', 'rent_value',
            'rent_base_value', 'iptu_value', 'condominium_value',
            'iptu_reimbursable', 'condominium_reimbursable',
            'iva_ibs_subject', 'iva_ibs_rate', 'notes',
        ]
        labels = {
            'property': 'Imóvel',
            'tenant': 'Inquilino',
            'tenant_document': 'CPF/CNPJ do inquilino',
            'tenant_type': 'Tipo de inquilino',
            'start_date': 'Início',
            'end_date': 'Término',
            'due_day': 'Dia de vencimento',
            'rent_value': 'Valor do aluguel',
            'iva_ibs_rate': 'Alíquota IVA/IBS (%)',
        }
        error_messages = {
            'property': {
                'invalid_choice': 'Imóvel não encontrado',
            },
        }

    def __init__(self, *args, **kwargs):
        self.user = kwargs.pop('user', None)
        super().__init__(*args, **kwargs)

        # 부동산 선택지: 본인의 부동산만
        if self.user:
            self.fields['property'].queryset = Property.objects.filter(user=self.user)

        # JSON에서 생략 가능한 필드 (모델 기본값 사용)
        for name in ['tenant_type', 'status', 'iptu_value', 'condominium_value', 'iva_ibs_rate']:
            self.fields[name].required = False

    def _data_has(self, name):
        return name in self.data and self.data.get(name) not in (None, '')

    def clean_tenant_document(self):
        document = (self.cleaned_data.get('tenant_document') or '').strip()
        digits = re.sub(r'[^0-9]', '', document)
        if len(digits) not in (11, 14):
            raise ValidationError('CPF deve ter 11 dígitos ou CNPJ 14 dígitos.')
        return document

    def clean(self):
        """폼 전체 검증 + 생략된 필드에 모델 기본값 채우기"""
        cleaned_data = super().clean()

        for name in ['tenant_type', 'status', 'iptu_value', 'condominium_value', 'iva_ibs_rate']:
            if not self._data_has(name):
                cleaned_data[name] = Contract._meta.get_field(name).get_default()

        # BooleanField는 값이 없으면 False가 되므로, IVA/IBS 과세 대상은 기본 True 유지
        if 'iva_ibs_subject' not in self.data:
            cleaned_data['iva_ibs_subject'] = True

        return cleaned_data
