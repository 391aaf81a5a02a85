"""
납부 API 뷰

- GET    /api/payments/                     목록 (기한 내림차순, 필터: ?status=, ?contract=, ?month=, ?year=)
- POST   /api/payments/                     생성 (계약이 없으면 400)
- GET    /api/payments/<pk>/                상세 (상태 + 세금 내역 포함)
- PUT    /api/payments/<pk>/                수정
- DELETE /api/payments/<pk>/                삭제
- GET    /api/payments/<pk>/receipt/        영수증 PDF (미납이면 400)
- POST   /api/payments/<pk>/notify/         임차인 알림 메일 (납부 완료/메일 없음이면 400)
- GET    /api/payments/<pk>/attachment/     증빙 파일 다운로드
- POST   /api/payments/<pk>/attachment/     증빙 파일 업로드 (multipart, 기존 파일 교체)
- DELETE /api/payments/<pk>/attachment/     증빙 파일 삭제
"""
import logging
import mimetypes

from django.http import FileResponse, HttpResponse, JsonResponse
from django.utils import timezone
from django.utils.encoding import escape_uri_path

from apps.core.http import (
    ApiError,
    NotFoundError,
    api_view,
    form_error_response,
    get_object_or_404_json,
    parse_json_body,
)
from .forms import PaymentAttachmentForm, PaymentForm
from .models import STATUS_OVERDUE, Payment, PaymentAttachment
from .notifications import send_due_soon_notification, send_overdue_notification
from .receipts import generate_receipt
from .serializers import serialize_attachment, serialize_payment

logger = logging.getLogger(__name__)


def _user_payments(user):
    return Payment.objects.owned_by(user).with_relations()


def _get_payment(request, pk):
    return get_object_or_404_json(
        _user_payments(request.user),
        'Pagamento não encontrado',
        pk=pk
    )


@api_view(['GET', 'POST'])
def payment_collection(request):
    if request.method == 'POST':
        return payment_create(request)

    payments = _user_payments(request.user).order_by('-due_date', '-id')

    status = request.GET.get('status', '')
    if status:
        payments = payments.with_status(status)

    contract_id = request.GET.get('contract', '')
    if contract_id.isdigit():
        payments = payments.filter(contract_id=int(contract_id))

    month = request.GET.get('month', '')
    if month:
        payments = payments.by_month(month)

    year = request.GET.get('year', '')
    if year.isdigit():
        payments = payments.by_year(year)

    data = [serialize_payment(p) for p in payments]
    return JsonResponse(data, safe=False)


def payment_create(request):
    form = PaymentForm(parse_json_body(request), user=request.user)
    if not form.is_valid():
        return form_error_response(form)

    payment = form.save()
    logger.info(
        f"납부 생성: user={request.user.id}, payment={payment.pk}, "
        f"contract={payment.contract_id}, month={payment.reference_month}"
    )
    return JsonResponse(serialize_payment(payment, include_contract=True, include_taxes=True), status=201)


@api_view(['GET', 'PUT', 'DELETE'])
def payment_detail(request, pk):
    payment = _get_payment(request, pk)

    if request.method == 'PUT':
        form = PaymentForm(parse_json_body(request), instance=payment, user=request.user)
        if not form.is_valid():
            return form_error_response(form)
        payment = form.save()
        logger.info(f"납부 수정: user={request.user.id}, payment={payment.pk}")
        return JsonResponse(serialize_payment(payment, include_contract=True, include_taxes=True))

    if request.method == 'DELETE':
        payment_id = payment.pk
        payment.delete()  # 증빙 파일은 CASCADE + 시그널로 함께 삭제
        logger.info(f"납부 삭제: user={request.user.id}, payment={payment_id}")
        return HttpResponse(status=204)

    return JsonResponse(serialize_payment(payment, include_contract=True, include_taxes=True))


@api_view(['GET'])
def payment_receipt(request, pk):
    """납부 영수증 PDF"""
    payment = _get_payment(request, pk)

    if not payment.is_paid:
        raise ApiError('Recibo disponível apenas para pagamentos realizados')

    pdf_bytes = generate_receipt(payment)
    filename = f"recibo_{payment.reference_month}_{payment.pk}.pdf"

    response = HttpResponse(pdf_bytes, content_type='application/pdf')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    logger.info(f"영수증 발행: user={request.user.id}, payment={payment.pk}")
    return response


@api_view(['POST'])
def payment_notify(request, pk):
    """
    임차인 알림 메일

    연체 → 연체 알림, 그 외 미납 → 기한 임박 알림 (남은 일수 포함)
    """
    payment = _get_payment(request, pk)

    if payment.is_paid:
        raise ApiError('Pagamento já realizado')
    if not payment.contract.tenant_email:
        raise ApiError('Email do inquilino não cadastrado')

    if payment.status == STATUS_OVERDUE:
        result = send_overdue_notification(payment)
    else:
        days_until_due = (payment.due_date - timezone.localdate()).days
        result = send_due_soon_notification(payment, days_until_due)

    if not result['success']:
        return JsonResponse(result, status=502)
    return JsonResponse(result)


@api_view(['GET', 'POST', 'DELETE'])
def payment_attachment(request, pk):
    payment = _get_payment(request, pk)

    try:
        attachment = payment.attachment
    except PaymentAttachment.DoesNotExist:
        attachment = None

    if request.method == 'POST':
        return attachment_upload(request, payment, attachment)

    if attachment is None:
        raise NotFoundError('Comprovante não encontrado')

    if request.method == 'DELETE':
        attachment_name = attachment.original_name
        attachment.delete()  # 시그널이 물리 파일도 삭제
        logger.info(f"증빙 파일 삭제: {attachment_name} (payment={payment.pk})")
        return HttpResponse(status=204)

    return attachment_download(attachment)


def attachment_upload(request, payment, attachment):
    """증빙 파일 업로드 (이미 있으면 교체)"""
    is_update = attachment is not None
    form = PaymentAttachmentForm(request.POST, request.FILES, instance=attachment)
    if not form.is_valid():
        return form_error_response(form)

    attachment = form.save(commit=False)
    attachment.payment = payment

    uploaded_file = form.cleaned_data['file']
    attachment.original_name = uploaded_file.name
    attachment.size = uploaded_file.size
    attachment.content_type = (
        uploaded_file.content_type
        or mimetypes.guess_type(uploaded_file.name)[0]
        or 'application/octet-stream'
    )
    attachment.save()

    logger.info(
        f"증빙 파일 {'교체' if is_update else '업로드'}: "
        f"{attachment.original_name} (payment={payment.pk}, size={attachment.size})"
    )
    return JsonResponse(serialize_attachment(attachment), status=200 if is_update else 201)


def attachment_download(attachment):
    """증빙 파일 다운로드 (물리 파일 존재 확인)"""
    if not attachment.file or not attachment.file.storage.exists(attachment.file.name):
        logger.warning(f"증빙 파일 없음 (DB 기록만 존재): attachment={attachment.pk}")
        raise NotFoundError('Arquivo não encontrado no servidor')

    response = FileResponse(attachment.file.open('rb'))
    response['Content-Type'] = (
        attachment.content_type
        or mimetypes.guess_type(attachment.original_name)[0]
        or 'application/octet-stream'
    )
    encoded_filename = escape_uri_path(attachment.original_name)
    response['Content-Disposition'] = (
        f'attachment; filename="{encoded_filename}"; filename*=UTF-8\'\'{encoded_filename}'
    )
    return response
