"""
프로젝트 공통 추상 모델

- TimeStampedModel: 생성/수정 시간 자동 추적
- UserOwnedModel: 사용자 소유 + 타임스탬프
"""

from django.db import models
from django.conf import settings


class TimeStampedModel(models.Model):
    """생성/수정 시간 자동 추적"""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class UserOwnedModel(TimeStampedModel):
    """
    사용자 소유 리소스 (타임스탬프 포함)

    임대인(로그인 사용자) 한 명이 자신의 데이터만 조회/수정합니다.
    별도의 조직(멀티테넌트) 계층은 없습니다.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='%(class)s_set',
        db_index=True
    )

    class Meta:
        abstract = True
