from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction as db_transaction
from django.utils import timezone

from apps.contracts.models import Contract
from apps.payments.models import Payment
from apps.properties.models import Property

User = get_user_model()


class Command(BaseCommand):
    help = '데모 임대인 데이터 생성 (부동산 + 계약 + 최근 12개월 납부)'

    PROPERTIES = [
        {
            'address': 'Rua Augusta, 1500, Apto 42 - Jardim Paulista, São Paulo/SP',
            'type': 'apartment',
            'description': 'Apartamento 2 quartos, 1 vaga',
            'rent_value': Decimal('2500.00'),
            'owner': 'Carlos Silva',
            'owner_document': '123.456.789-00',
            'contract': {
                'tenant': 'Fernanda Lima',
                'tenant_document': '111.222.333-44',
                'tenant_email': 'fernanda.lima@example.com',
                'tenant_type': 'pf',
                'due_day': 5,
                'iptu_value': Decimal('180.00'),
                'condominium_value': Decimal('650.00'),
                'condominium_reimbursable': True,
            },
        },
        {
            'address': 'Rua Pamplona, 300 - Bela Vista, São Paulo/SP',
            'type': 'house',
            'description': 'Casa 3 quartos com quintal',
            'rent_value': Decimal('3500.00'),
            'owner': 'Maria Santos',
            'owner_document': '987.654.321-00',
            'contract': {
                'tenant': 'Ricardo Souza',
                'tenant_document': '222.333.444-55',
                'tenant_email': 'ricardo.souza@example.com',
                'tenant_type': 'pf',
                'due_day': 10,
                'iptu_value': Decimal('250.00'),
                'iptu_reimbursable': True,
            },
        },
        {
            'address': 'Av. Paulista, 1000, Loja 5 - Centro, São Paulo/SP',
            'type': 'commercial',
            'description': 'Loja comercial 80m²',
            'rent_value': Decimal('5000.00'),
            'owner': 'João Oliveira',
            'owner_document': '456.789.123-00',
            'contract': {
                'tenant': 'Padaria Paulista Ltda',
                'tenant_document': '12.345.678/0001-90',
                'tenant_email': 'financeiro@padariapaulista.com.br',
                'tenant_type': 'pj',
                'due_day': 15,
                'iva_ibs_rate': Decimal('8.50'),
            },
        },
        {
            'address': 'Rua da Consolação, 2800, Apto 101 - Consolação, São Paulo/SP',
            'type': 'apartment',
            'description': 'Apartamento 3 quartos, 2 vagas',
            'rent_value': Decimal('3200.00'),
            'owner': 'Ana Ferreira',
            'owner_document': '321.654.987-00',
            'contract': None,  # 공실
        },
    ]

    def add_arguments(self, parser):
        parser.add_argument('--username', type=str, default='demo', help='사용자명')
        parser.add_argument('--password', type=str, default='demo1234', help='비밀번호 (신규 사용자만)')
        parser.add_argument('--months', type=int, default=12, help='생성할 납부 개월 수')

    @db_transaction.atomic
    def handle(self, *args, **options):
        username = options['username']
        months = options['months']

        user, created = User.objects.get_or_create(
            username=username,
            defaults={'email': f'{username}@example.com'}
        )
        if created:
            user.set_password(options['password'])
            user.save()
        elif Property.objects.filter(user=user).exists():
            self.stdout.write(self.style.WARNING(f"'{username}' 사용자에게 이미 데이터가 있습니다. 건너뜁니다."))
            return

        today = timezone.localdate()
        reference_months = self._recent_months(today, months)
        start_date = date(*map(int, reference_months[-1].split('-')), 1)

        property_count = contract_count = payment_count = 0

        for item in self.PROPERTIES:
            item = dict(item)
            contract_data = item.pop('contract')
            prop = Property.objects.create(user=user, **item)
            property_count += 1

            if contract_data is None:
                continue

            contract = Contract.objects.create(
                property=prop,
                start_date=start_date,
                end_date=date(start_date.year + 2, start_date.month, 1),
                rent_value=prop.rent_value,
                **contract_data
            )
            contract_count += 1

            for reference_month in reference_months:
                due_date = contract.due_date_for(reference_month)
                Payment.objects.create(
                    contract=contract,
                    reference_month=reference_month,
                    due_date=due_date,
                    payment_date=due_date if due_date < today else None,  # 지난 달은 납부 완료
                    rent_amount=contract.rent_value,
                    iptu_amount=contract.iptu_value,
                    condominium_amount=contract.condominium_value,
                    value=contract.get_gross_monthly_charge(),
                    payment_method='pix',
                )
                payment_count += 1

        self.stdout.write(self.style.SUCCESS(
            f"✅ 완료: 부동산 {property_count}건, 계약 {contract_count}건, 납부 {payment_count}건 "
            f"(사용자: {username})"
        ))

    @staticmethod
    def _recent_months(today, count):
        """이번 달부터 과거로 count개월 ('YYYY-MM', 최근 월이 먼저)"""
        result = []
        year, month = today.year, today.month
        for _ in range(count):
            result.append(f"{year}-{month:02d}")
            month -= 1
            if month == 0:
                year, month = year - 1, 12
        return result
