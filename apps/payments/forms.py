"""납부 입력 폼 (JSON 본문 검증용) + 증빙 파일 업로드 폼"""

from decimal import Decimal

from django import forms
from django.conf import settings
from django.core.exceptions import ValidationError

from apps.contracts.models import Contract
from .models import Payment, PaymentAttachment


class PaymentForm(forms.ModelForm):
    """납부 생성/수정 폼"""

    class Meta:
        model = Payment
        fields = [
            'contract', 'reference_month', 'due_date', 'payment_date', 'value',
            'rent_amount', 'iptu_amount', 'condominium_amount', 'other_charges',
            'payment_method', 'receipt_type', 'notes',
        ]
        labels = {
            'contract': 'Contrato',
            'reference_month': 'Mês de referência',
            'due_date': 'Vencimento',
            'payment_date': 'Data de pagamento',
            'value': 'Valor',
        }
        error_messages = {
            'contract': {
                'invalid_choice': 'Contrato não encontrado',
            },
        }

    # 생략 시 모델 기본값을 쓰는 필드
    OPTIONAL_DEFAULT_FIELDS = ['iptu_amount', 'condominium_amount', 'other_charges', 'receipt_type']

    def __init__(self, *args, **kwargs):
        self.user = kwargs.pop('user', None)
        super().__init__(*args, **kwargs)

        # 계약 선택지: 본인 부동산의 계약만
        if self.user:
            self.fields['contract'].queryset = Contract.objects.filter(property__user=self.user)

        self.fields['value'].required = False  # 내역 합계로 계산 가능
        self.fields['due_date'].required = False  # 계약 납부일로 계산 가능
        for name in self.OPTIONAL_DEFAULT_FIELDS:
            self.fields[name].required = False

    def _data_has(self, name):
        return name in self.data and self.data.get(name) not in (None, '')

    def clean(self):
        cleaned_data = super().clean()

        for name in self.OPTIONAL_DEFAULT_FIELDS:
            if not self._data_has(name):
                cleaned_data[name] = Payment._meta.get_field(name).get_default()

        # 금액이 없으면 청구 내역 합계
        if not cleaned_data.get('value') and 'value' not in self.errors:
            total = sum(
                (cleaned_data.get(name) or Decimal('0')
                 for name in ['rent_amount', 'iptu_amount', 'condominium_amount', 'other_charges']),
                Decimal('0')
            )
            if total <= 0:
                self.add_error('value', 'Informe o valor ou a composição do pagamento')
            else:
                cleaned_data['value'] = total

        # 납부 기한이 없으면 계약 납부일 기준
        contract = cleaned_data.get('contract')
        reference_month = cleaned_data.get('reference_month')
        if not cleaned_data.get('due_date') and 'due_date' not in self.errors:
            if contract and reference_month:
                cleaned_data['due_date'] = contract.due_date_for(reference_month)
            elif 'contract' not in self.errors and 'reference_month' not in self.errors:
                self.add_error('due_date', 'Informe a data de vencimento')

        return cleaned_data


class PaymentAttachmentForm(forms.ModelForm):
    """납부 증빙 파일 업로드 폼"""

    class Meta:
        model = PaymentAttachment
        fields = ['file']
        labels = {
            'file': 'Comprovante',
        }

    def clean_file(self):
        # 교체 시에도 새 파일 필수
        if 'file' not in self.files:
            raise ValidationError('Selecione um arquivo para enviar')

        file = self.cleaned_data.get('file')
        max_size = settings.PAYMENT_ATTACHMENT_MAX_SIZE
        if file and file.size > max_size:
            raise ValidationError(f'O arquivo não pode exceder {max_size // (1024 * 1024)}MB')
        return file
