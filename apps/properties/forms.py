"""부동산 입력 폼 (JSON 본문 검증용)"""

import re

from django import forms
from django.core.exceptions import ValidationError

from .models import Property


class PropertyForm(forms.ModelForm):
    """부동산 생성/수정 폼"""

    class Meta:
        model = Property
        fields = ['address', 'type', 'description', 'owner', 'owner_document', 'rent_value']
        labels = {
            'address': 'Endereço',
            'type': 'Tipo',
            'description': 'Descrição',
            'owner': 'Proprietário',
            'owner_document': 'CPF/CNPJ do proprietário',
            'rent_value': 'Valor do aluguel',
        }

    def clean_address(self):
        address = (self.cleaned_data.get('address') or '').strip()
        if not address:
            raise ValidationError('Informe o endereço do imóvel.')
        return address

    def clean_owner_document(self):
        """CPF(11자리) 또는 CNPJ(14자리) 숫자 개수 검증"""
        document = (self.cleaned_data.get('owner_document') or '').strip()
        digits = re.sub(r'[^0-9]', '', document)

        if len(digits) not in (11, 14):
            raise ValidationError('CPF deve ter 11 dígitos ou CNPJ 14 dígitos.')

        return document
