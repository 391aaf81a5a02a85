"""납부 → JSON dict 변환"""

from apps.contracts.serializers import serialize_contract


def serialize_attachment(attachment):
    return {
        'id': attachment.pk,
        'original_name': attachment.original_name,
        'size': attachment.size,
        'content_type': attachment.content_type,
        'created_at': attachment.created_at,
    }


def serialize_payment(payment, include_contract=False, include_taxes=False):
    data = {
        'id': payment.pk,
        'contract_id': payment.contract_id,
        'reference_month': payment.reference_month,
        'due_date': payment.due_date,
        'payment_date': payment.payment_date,
        'value': payment.value,
        'rent_amount': payment.rent_amount,
        'iptu_amount': payment.iptu_amount,
        'condominium_amount': payment.condominium_amount,
        'other_charges': payment.other_charges,
        'ir_value': payment.ir_value,
        'iva_ibs_value': payment.iva_ibs_value,
        'payment_method': payment.payment_method,
        'receipt_type': payment.receipt_type,
        'notes': payment.notes,
        'status': payment.status,
        'status_display': payment.get_status_display(),
        'created_at': payment.created_at,
        'updated_at': payment.updated_at,
    }
    if include_contract:
        data['contract'] = serialize_contract(payment.contract, include_property=True)
    if include_taxes:
        data['taxes'] = payment.get_tax_breakdown()
        attachment = getattr(payment, 'attachment', None) if payment.pk else None
        data['attachment'] = serialize_attachment(attachment) if attachment else None
    return data
