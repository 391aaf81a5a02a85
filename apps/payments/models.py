# =============================================================================
# payments/models.py - 월 임대료 납부
# =============================================================================

"""
임대료 납부 (Pagamento)

상태(status)는 저장하지 않고 날짜로 계산합니다:
    - paid:    payment_date 있음
    - overdue: 미납 + 납부 기한(due_date)이 오늘 이전
    - pending: 그 외 미납

ir_value / iva_ibs_value는 저장 시점의 세금 계산 결과(스냅샷)입니다.
"""
import logging
import os
import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import FileExtensionValidator, MinValueValidator
from django.db import models
from django.db.models.signals import post_delete, pre_save
from django.dispatch import receiver
from django.utils import timezone

from apps.contracts.models import REFERENCE_MONTH_VALIDATOR, Contract
from apps.core.models import TimeStampedModel
from apps.tax.utils import calculate_payment_taxes

logger = logging.getLogger(__name__)

STATUS_PAID = 'paid'
STATUS_PENDING = 'pending'
STATUS_OVERDUE = 'overdue'

STATUS_CHOICES = [
    (STATUS_PAID, 'Pago'),
    (STATUS_PENDING, 'Pendente'),
    (STATUS_OVERDUE, 'Atrasado'),
]


def get_payment_status(due_date, payment_date, today=None):
    """납부 상태 계산 (paid / overdue / pending)"""
    if payment_date:
        return STATUS_PAID
    if today is None:
        today = timezone.localdate()
    if due_date and due_date < today:
        return STATUS_OVERDUE
    return STATUS_PENDING


class PaymentQuerySet(models.QuerySet):
    """Payment 전용 QuerySet (상태 필터 헬퍼)"""
    def owned_by(self, user): return self.filter(contract__property__user=user)
    def paid(self): return self.filter(payment_date__isnull=False)
    def unpaid(self): return self.filter(payment_date__isnull=True)
    def by_month(self, reference_month): return self.filter(reference_month=reference_month)
    def by_year(self, year): return self.filter(reference_month__startswith=f"{year}-")
    def with_relations(self): return self.select_related('contract', 'contract__property')

    def overdue(self, today=None):
        today = today or timezone.localdate()
        return self.unpaid().filter(due_date__lt=today)

    def pending(self, today=None):
        today = today or timezone.localdate()
        return self.unpaid().filter(due_date__gte=today)

    def with_status(self, status, today=None):
        if status == STATUS_PAID:
            return self.paid()
        if status == STATUS_OVERDUE:
            return self.overdue(today)
        if status == STATUS_PENDING:
            return self.pending(today)
        return self.none()


class Payment(TimeStampedModel):
    """월 임대료 납부"""

    PAYMENT_METHOD_CHOICES = [
        ('pix', 'PIX'),
        ('transfer', 'Transferência'),
        ('boleto', 'Boleto'),
        ('cash', 'Dinheiro'),
        ('card', 'Cartão'),
        ('other', 'Outro'),
    ]

    RECEIPT_TYPE_CHOICES = [
        ('rent', 'Aluguel'),
        ('deposit', 'Caução'),
        ('other', 'Outro'),
    ]

    contract = models.ForeignKey(Contract, on_delete=models.PROTECT, related_name='payments')

    reference_month = models.CharField(max_length=7, validators=[REFERENCE_MONTH_VALIDATOR], db_index=True)
    due_date = models.DateField(db_index=True)
    payment_date = models.DateField(null=True, blank=True, db_index=True)  # 없으면 미납

    value = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal('0.01'))])

    # 청구 내역 (선택)
    rent_amount = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    iptu_amount = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    condominium_amount = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    other_charges = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    # 세금 스냅샷 (저장 시 자동 계산)
    ir_value = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    iva_ibs_value = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))

    payment_method = models.CharField(max_length=20, choices=PAYMENT_METHOD_CHOICES, blank=True)
    receipt_type = models.CharField(max_length=20, choices=RECEIPT_TYPE_CHOICES, default='rent')
    notes = models.TextField(blank=True)

    objects = PaymentQuerySet.as_manager()

    class Meta:
        db_table = 'payments'
        ordering = ['-due_date']
        indexes = [
            models.Index(fields=['contract', 'reference_month'], name='payment_contract_month_idx'),
            models.Index(fields=['payment_date', 'due_date'], name='payment_paid_due_idx'),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(value__gt=0), name='payment_value_positive'),
        ]

    def __str__(self):
        return f"{self.contract.tenant} {self.reference_month} R$ {self.value:,.2f}"

    @property
    def status(self):
        return get_payment_status(self.due_date, self.payment_date)

    def get_status_display(self):
        return dict(STATUS_CHOICES)[self.status]

    @property
    def is_paid(self):
        return self.payment_date is not None

    def get_breakdown_total(self):
        """청구 내역 합계 (임대료 + IPTU + 관리비 + 기타)"""
        return (
            (self.rent_amount or Decimal('0'))
            + (self.iptu_amount or Decimal('0'))
            + (self.condominium_amount or Decimal('0'))
            + (self.other_charges or Decimal('0'))
        )

    def get_tax_breakdown(self):
        return calculate_payment_taxes(self, self.contract)

    def clean(self):
        errors = {}
        if not self.value and self.get_breakdown_total() <= 0:
            errors['value'] = 'Informe o valor ou a composição do pagamento'
        if errors:
            raise ValidationError(errors)

    def save(self, *args, **kwargs):
        # 금액이 없으면 청구 내역 합계로 채움
        if not self.value:
            self.value = self.get_breakdown_total()

        # 세금 스냅샷 갱신
        if self.contract_id:
            taxes = calculate_payment_taxes(self, self.contract)
            self.ir_value = taxes['ir_value']
            self.iva_ibs_value = taxes['iva_ibs_value']

        super().save(*args, **kwargs)


def attachment_upload_path(instance, filename):
    """
    고유한 파일명 생성

    원본: comprovante.jpg
    저장: payments/2025/01/a1b2c3d4e5f6.jpg  (기준월 폴더)
    """
    ext = os.path.splitext(filename)[1].lower()
    unique_filename = f"{uuid.uuid4().hex}{ext}"
    year, month = instance.payment.reference_month.split('-')
    return f'payments/{year}/{month}/{unique_filename}'


class PaymentAttachment(TimeStampedModel):
    """납부 증빙 파일 (이체 확인증, 영수증 스캔 등)"""

    payment = models.OneToOneField(Payment, on_delete=models.CASCADE, related_name='attachment')
    file = models.FileField(
        upload_to=attachment_upload_path,
        validators=[FileExtensionValidator(allowed_extensions=['jpg', 'jpeg', 'png', 'pdf'])]
    )
    original_name = models.CharField(max_length=255)
    size = models.PositiveIntegerField()
    content_type = models.CharField(max_length=100)

    class Meta:
        db_table = 'payment_attachments'
        ordering = ['-created_at']

    def __str__(self):
        return self.original_name

    def clean(self):
        max_size = settings.PAYMENT_ATTACHMENT_MAX_SIZE
        if self.file and hasattr(self.file, 'size') and self.file.size > max_size:
            raise ValidationError({'file': f'O arquivo não pode exceder {max_size // (1024 * 1024)}MB'})


@receiver(pre_save, sender=PaymentAttachment)
def auto_delete_file_on_change(sender, instance, **kwargs):
    """파일이 교체될 때 기존 물리 파일 삭제"""
    if not instance.pk:
        return

    try:
        old_file = sender.objects.get(pk=instance.pk).file
    except sender.DoesNotExist:
        return

    if old_file and old_file != instance.file:
        old_file.delete(save=False)
        logger.info(f"기존 증빙 파일 삭제 (교체됨): {old_file.name}")


@receiver(post_delete, sender=PaymentAttachment)
def auto_delete_file_on_delete(sender, instance, **kwargs):
    """레코드 삭제 후 물리 파일 삭제"""
    if instance.file:
        instance.file.delete(save=False)
        logger.info(f"증빙 파일 삭제 (레코드 삭제됨): {instance.file.name}")
