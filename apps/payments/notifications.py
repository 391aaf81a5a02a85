"""
임차인 납부 알림 메일

- 연체 알림 (overdue)
- 납부 기한 임박 알림 (due soon)

발송 결과는 {'success': bool, 'message': str} 형식으로 반환합니다.
메일 백엔드는 설정(EMAIL_BACKEND)을 따릅니다. (개발: 콘솔 출력)
"""
import logging
from smtplib import SMTPException

from django.conf import settings
from django.core.mail import send_mail
from django.template.loader import render_to_string
from django.utils.html import strip_tags

from .receipts import format_brl, format_date

logger = logging.getLogger(__name__)

MONTH_NAMES = [
    'Janeiro', 'Fevereiro', 'Março', 'Abril', 'Maio', 'Junho',
    'Julho', 'Agosto', 'Setembro', 'Outubro', 'Novembro', 'Dezembro',
]


def format_reference_month(reference_month):
    """'2025-03' → 'Março/2025'"""
    year, month = reference_month.split('-')
    return f"{MONTH_NAMES[int(month) - 1]}/{year}"


def _build_context(payment, **extra):
    contract = payment.contract
    context = {
        'tenant': contract.tenant or 'Inquilino',
        'address': contract.property.address,
        'month_label': format_reference_month(payment.reference_month),
        'due_date': format_date(payment.due_date),
        'value': format_brl(payment.value),
    }
    context.update(extra)
    return context


def _send(payment, subject, template_name, context):
    tenant_email = payment.contract.tenant_email
    if not tenant_email:
        return {'success': False, 'message': 'Email do inquilino não cadastrado'}

    html_message = render_to_string(template_name, context)
    try:
        send_mail(
            subject,
            strip_tags(html_message),
            settings.DEFAULT_FROM_EMAIL,
            [tenant_email],
            html_message=html_message,
        )
    except (SMTPException, OSError) as e:
        logger.error(f"알림 메일 발송 실패: payment={payment.pk}, to={tenant_email}, error={e}")
        return {'success': False, 'message': f'Erro ao enviar email: {e}'}

    logger.info(f"알림 메일 발송: payment={payment.pk}, to={tenant_email}, subject={subject}")
    return {'success': True, 'message': 'Email enviado com sucesso'}


def send_overdue_notification(payment):
    """연체 알림"""
    return _send(
        payment,
        'Lembrete de Pagamento - Aluguel Vencido',
        'payments/emails/overdue.html',
        _build_context(payment),
    )


def send_due_soon_notification(payment, days_until_due):
    """납부 기한 임박 알림"""
    return _send(
        payment,
        f'Lembrete de Pagamento - Vencimento em {days_until_due} dias',
        'payments/emails/due_soon.html',
        _build_context(payment, days_until_due=days_until_due),
    )
