"""
세금 계산 폼 (쿼리 파라미터 검증)
"""
from decimal import Decimal

from django import forms
from django.utils import timezone

from .utils import TENANT_ENTITY, TENANT_INDIVIDUAL


class TaxCalculationForm(forms.Form):
    """월 임대료 세금 계산기 입력"""

    rent = forms.DecimalField(label='Aluguel', max_digits=12, decimal_places=2)
    iptu = forms.DecimalField(label='IPTU', max_digits=12, decimal_places=2, required=False)
    condominium = forms.DecimalField(label='Condomínio', max_digits=12, decimal_places=2, required=False)
    iptu_reimbursable = forms.BooleanField(required=False)
    condominium_reimbursable = forms.BooleanField(required=False)
    tenant_type = forms.ChoiceField(
        label='Tipo de inquilino',
        choices=[(TENANT_INDIVIDUAL, 'Pessoa Física'), (TENANT_ENTITY, 'Pessoa Jurídica')],
        required=False,
    )
    iva_ibs_subject = forms.BooleanField(required=False)
    iva_ibs_rate = forms.DecimalField(
        label='Alíquota IVA/IBS (%)',
        max_digits=5,
        decimal_places=2,
        required=False,
        min_value=Decimal('0'),
        max_value=Decimal('100'),
    )

    def clean(self):
        cleaned_data = super().clean()
        for name in ['iptu', 'condominium', 'iva_ibs_rate']:
            if cleaned_data.get(name) is None:
                cleaned_data[name] = Decimal('0')
        if not cleaned_data.get('tenant_type'):
            cleaned_data['tenant_type'] = TENANT_INDIVIDUAL
        return cleaned_data


class TaxReportForm(forms.Form):
    """연간 리포트 연도 선택"""

    year = forms.IntegerField(label='Ano', required=False)

    def clean_year(self):
        """연도 검증 (비어 있으면 올해)"""
        year = self.cleaned_data.get('year')
        current_year = timezone.localdate().year

        if year is None:
            return current_year

        if year < 2000 or year > current_year + 1:
            raise forms.ValidationError(f'Ano deve estar entre 2000 e {current_year + 1}.')

        return year
