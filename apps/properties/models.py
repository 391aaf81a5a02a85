# =============================================================================
# properties/models.py - 임대 부동산 관리
# =============================================================================

"""
임대 부동산(Imóvel)

임대인(로그인 사용자) 소유의 부동산 목록. 계약(Contract)이 연결된
부동산은 삭제할 수 없습니다 (on_delete=PROTECT + 뷰에서 409).
"""
import logging
import re
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from apps.core.models import UserOwnedModel

logger = logging.getLogger(__name__)


class Property(UserOwnedModel):
    """임대 부동산"""

    TYPE_CHOICES = [
        ('apartment', 'Apartamento'),
        ('house', 'Casa'),
        ('commercial', 'Comercial'),
        ('land', 'Terreno'),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='properties',
        db_index=True
    )
    address = models.CharField(max_length=255, db_index=True)
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default='apartment', db_index=True)
    description = models.TextField(blank=True)

    # 임대인 (소유자) 정보 - 영수증 발행에 사용
    owner = models.CharField(max_length=100)
    owner_document = models.CharField(max_length=20, verbose_name="CPF/CNPJ")

    rent_value = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )

    class Meta:
        db_table = 'properties'
        ordering = ['address']
        verbose_name = 'Imóvel'
        verbose_name_plural = 'Imóveis'
        indexes = [
            models.Index(fields=['user', 'type'], name='property_user_type_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(rent_value__gte=0),
                name='property_rent_value_non_negative'
            ),
        ]

    def __str__(self):
        return self.address

    def get_masked_owner_document(self):
        """
        CPF/CNPJ 마스킹 (입력 형식 유지)
        규칙: 마지막 5개 숫자를 '*'로 치환
        """
        if not self.owner_document:
            return "-"

        original = str(self.owner_document)
        nums_only = re.sub(r"[^0-9]", "", original)
        if len(nums_only) < 5:
            return "*****"

        count = 0
        masked_list = list(original)
        for i in range(len(masked_list) - 1, -1, -1):
            if masked_list[i].isdigit():
                masked_list[i] = "*"
                count += 1
            if count == 5:
                break

        return "".join(masked_list)

    def get_active_contract(self):
        """현재 유효한(active) 계약 1건"""
        return self.contracts.filter(status='active').order_by('-start_date').first()
