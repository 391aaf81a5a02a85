# =============================================================================
# contracts/models.py - 임대 계약
# =============================================================================

"""
임대 계약 (Contrato de locação)

부동산 1건에 여러 계약이 순차적으로 연결될 수 있습니다.
월 청구액 구성(기본 임대료 + IPTU + 관리비)과 세금 관련 플래그를 보관하며,
납부(Payment)가 연결된 계약은 삭제할 수 없습니다.
"""
import calendar
import logging
from datetime import date
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator, RegexValidator
from django.db import models
from django.utils import timezone

from apps.core.models import TimeStampedModel
from apps.properties.models import Property
from apps.tax.utils import TENANT_ENTITY, TENANT_INDIVIDUAL, calculate_taxes

logger = logging.getLogger(__name__)


# 기준월 형식: YYYY-MM
REFERENCE_MONTH_VALIDATOR = RegexValidator(
    regex=r'^\d{4}-(0[1-9]|1[0-2])$',
    message='Mês de referência deve estar no formato AAAA-MM'
)


def parse_reference_month(reference_month):
    """'2025-01' → (2025, 1)"""
    year, month = reference_month.split('-')
    return int(year), int(month)


class Contract(TimeStampedModel):
    """임대 계약"""

    STATUS_CHOICES = [
        ('active', 'Ativo'),
        ('expired', 'Expirado'),
        ('cancelled', 'Cancelado'),
    ]

    TENANT_TYPE_CHOICES = [
        (TENANT_INDIVIDUAL, 'Pessoa Física'),
        (TENANT_ENTITY, 'Pessoa Jurídica'),
    ]

    property = models.ForeignKey(Property, on_delete=models.PROTECT, related_name='contracts')

    # 임차인
    tenant = models.CharField(max_length=100, db_index=True)
    tenant_document = models.CharField(max_length=20, verbose_name="CPF/CNPJ")
    tenant_email = models.EmailField(blank=True)
    tenant_phone = models.CharField(max_length=20, blank=True)
    tenant_type = models.CharField(max_length=2, choices=TENANT_TYPE_CHOICES, default=TENANT_INDIVIDUAL)

    # 계약 기간 / 납부일
    start_date = models.DateField()
    end_date = models.DateField()
    due_day = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(31)]
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active', db_index=True)

    rent_value = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    # 월 청구액 구성
    rent_base_value = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    iptu_value = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    condominium_value = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    iptu_reimbursable = models.BooleanField(default=False)
    condominium_reimbursable = models.BooleanField(default=False)

    # IVA/IBS (세제 개편안)
    iva_ibs_subject = models.BooleanField(default=True)
    iva_ibs_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00')), MaxValueValidator(Decimal('100.00'))]
    )

    notes = models.TextField(blank=True)

    class Meta:
        db_table = 'contracts'
        ordering = ['-start_date']
        indexes = [
            models.Index(fields=['property', 'status'], name='contract_property_status_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gte=models.F('start_date')),
                name='contract_end_after_start'
            ),
            models.CheckConstraint(
                condition=models.Q(due_day__gte=1) & models.Q(due_day__lte=31),
                name='contract_due_day_range'
            ),
        ]

    def __str__(self):
        return f"{self.tenant} - {self.property}"

    def clean(self):
        errors = {}
        if self.start_date and self.end_date and self.end_date < self.start_date:
            errors['end_date'] = 'A data de término deve ser posterior à data de início'
        if errors:
            raise ValidationError(errors)

    def save(self, *args, **kwargs):
        # 구성 필드가 비어 있으면 계약 임대료를 기본 임대료로 사용
        if self.rent_base_value is None:
            self.rent_base_value = self.rent_value
        super().save(*args, **kwargs)

    def is_expired(self):
        """계약 기간 종료 여부 (status와 별개로 날짜 기준)"""
        return self.end_date < timezone.localdate()

    def get_gross_monthly_charge(self):
        """월 총 청구액 = 기본 임대료 + IPTU + 관리비"""
        base = self.rent_base_value if self.rent_base_value is not None else self.rent_value
        return base + (self.iptu_value or 0) + (self.condominium_value or 0)

    def get_tax_breakdown(self):
        """계약 구성 기준 월 세금 내역"""
        base = self.rent_base_value if self.rent_base_value is not None else self.rent_value
        return calculate_taxes(
            base,
            self.iptu_value,
            self.condominium_value,
            iptu_reimbursable=self.iptu_reimbursable,
            condominium_reimbursable=self.condominium_reimbursable,
            tenant_type=self.tenant_type,
            iva_ibs_subject=self.iva_ibs_subject,
            iva_ibs_rate=self.iva_ibs_rate,
        )

    def due_date_for(self, reference_month):
        """
        기준월의 납부 기한

        납부일이 해당 월의 마지막 날보다 크면 마지막 날로 조정
        (예: due_day=31, 2025-02 → 2025-02-28)
        """
        year, month = parse_reference_month(reference_month)
        last_day = calendar.monthrange(year, month)[1]
        return date(year, month, min(self.due_day, last_day))
