# =============================================================================
# conftest.py - pytest 공통 Fixtures
# =============================================================================
#
# 테스트 DB: SQLite는 pytest-django가 인메모리 DB를 자동 생성
# 메일: pytest-django가 locmem 백엔드로 교체 (mailoutbox fixture)

from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.contrib.auth.models import User
from django.test import Client
from django.utils import timezone

from apps.contracts.models import Contract
from apps.payments.models import Payment
from apps.properties.models import Property


# =============================================================================
# 사용자 / 클라이언트
# =============================================================================

@pytest.fixture
def client():
    """테스트 클라이언트"""
    return Client()


@pytest.fixture
def user(db):
    """기본 테스트 사용자 (임대인)"""
    return User.objects.create_user(
        username='testuser',
        email='test@example.com',
        password='testpass123'
    )


@pytest.fixture
def other_user(db):
    """다른 테스트 사용자"""
    return User.objects.create_user(
        username='otheruser',
        email='other@example.com',
        password='testpass123'
    )


@pytest.fixture
def authenticated_client(client, user):
    """로그인된 클라이언트"""
    client.login(username='testuser', password='testpass123')
    client.user = user  # 편의를 위해 user 속성 추가
    return client


@pytest.fixture
def other_client(other_user):
    """다른 사용자로 로그인된 클라이언트"""
    client = Client()
    client.login(username='otheruser', password='testpass123')
    client.user = other_user
    return client


@pytest.fixture
def media_root(settings, tmp_path):
    """업로드 파일을 임시 폴더에 저장"""
    settings.MEDIA_ROOT = tmp_path
    return tmp_path


# =============================================================================
# 부동산 / 계약 / 납부
# =============================================================================

@pytest.fixture
def property_obj(db, user):
    """기본 테스트 부동산"""
    return Property.objects.create(
        user=user,
        address='Rua Augusta, 1500, Apto 42 - São Paulo/SP',
        type='apartment',
        description='Apartamento 2 quartos',
        owner='Carlos Silva',
        owner_document='123.456.789-00',
        rent_value=Decimal('2500.00')
    )


@pytest.fixture
def other_property(db, other_user):
    """다른 사용자의 부동산"""
    return Property.objects.create(
        user=other_user,
        address='Av. Paulista, 1000 - São Paulo/SP',
        type='commercial',
        owner='João Oliveira',
        owner_document='12.345.678/0001-90',
        rent_value=Decimal('5000.00')
    )


@pytest.fixture
def contract(db, property_obj):
    """기본 테스트 계약 (개인 임차인, IPTU 포함)"""
    return Contract.objects.create(
        property=property_obj,
        tenant='Fernanda Lima',
        tenant_document='111.222.333-44',
        tenant_email='fernanda@example.com',
        tenant_phone='(11) 99999-0000',
        tenant_type='pf',
        start_date=date(2024, 1, 1),
        end_date=date(2026, 12, 31),
        due_day=10,
        rent_value=Decimal('2500.00'),
        iptu_value=Decimal('200.00'),
        iva_ibs_subject=False,
    )


@pytest.fixture
def other_contract(db, other_property):
    """다른 사용자의 계약"""
    return Contract.objects.create(
        property=other_property,
        tenant='Padaria Ltda',
        tenant_document='98.765.432/0001-10',
        tenant_type='pj',
        start_date=date(2024, 1, 1),
        end_date=date(2025, 12, 31),
        due_day=5,
        rent_value=Decimal('5000.00'),
    )


@pytest.fixture
def today():
    return timezone.localdate()


@pytest.fixture
def paid_payment(db, contract):
    """납부 완료"""
    return Payment.objects.create(
        contract=contract,
        reference_month='2024-03',
        due_date=date(2024, 3, 10),
        payment_date=date(2024, 3, 8),
        value=Decimal('2700.00'),
        rent_amount=Decimal('2500.00'),
        iptu_amount=Decimal('200.00'),
        payment_method='pix',
    )


@pytest.fixture
def overdue_payment(db, contract, today):
    """연체 (기한 지남 + 미납)"""
    due_date = today - timedelta(days=10)
    return Payment.objects.create(
        contract=contract,
        reference_month=due_date.strftime('%Y-%m'),
        due_date=due_date,
        value=Decimal('2700.00'),
    )


@pytest.fixture
def pending_payment(db, contract, today):
    """미납 (기한 3일 남음)"""
    due_date = today + timedelta(days=3)
    return Payment.objects.create(
        contract=contract,
        reference_month=due_date.strftime('%Y-%m'),
        due_date=due_date,
        value=Decimal('2700.00'),
    )
