from datetime import timedelta

from django.conf import settings
from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.payments.models import STATUS_OVERDUE, Payment
from apps.payments.notifications import send_due_soon_notification, send_overdue_notification


class Command(BaseCommand):
    help = '미납 건 임차인에게 연체/기한 임박 알림 메일 발송'

    def add_arguments(self, parser):
        parser.add_argument(
            '--days', type=int, default=settings.RENTAL_DUE_SOON_DAYS,
            help='기한 임박 기준 일수 (기본: RENTAL_DUE_SOON_DAYS)'
        )
        parser.add_argument('--dry-run', action='store_true', help='발송하지 않고 대상만 출력')

    def handle(self, *args, **options):
        days = options['days']
        dry_run = options['dry_run']
        today = timezone.localdate()

        payments = (
            Payment.objects.unpaid()
            .filter(due_date__lte=today + timedelta(days=days))
            .exclude(contract__tenant_email='')
            .with_relations()
            .order_by('due_date')
        )

        sent = failed = 0
        for payment in payments:
            is_overdue = payment.status == STATUS_OVERDUE
            days_until_due = (payment.due_date - today).days
            label = '연체' if is_overdue else f'D-{days_until_due}'

            if dry_run:
                self.stdout.write(
                    f"[DRY-RUN] {label} {payment.reference_month} "
                    f"{payment.contract.tenant} <{payment.contract.tenant_email}>"
                )
                continue

            if is_overdue:
                result = send_overdue_notification(payment)
            else:
                result = send_due_soon_notification(payment, days_until_due)

            if result['success']:
                sent += 1
            else:
                failed += 1
                self.stdout.write(self.style.ERROR(f"❌ payment={payment.pk}: {result['message']}"))

        if dry_run:
            self.stdout.write(self.style.SUCCESS(f"대상 {payments.count()}건 (발송 안 함)"))
        else:
            self.stdout.write(self.style.SUCCESS(f"✅ 발송 {sent}건, 실패 {failed}건"))
