"""계약 → JSON dict 변환"""

from apps.properties.serializers import serialize_property


def serialize_contract(contract, include_property=False, include_taxes=False):
    data = {
        'id': contract.pk,
        'property_id': contract.property_id,
        'tenant': contract.tenant,
        'tenant_document': contract.tenant_document,
        'tenant_email': contract.tenant_email,
        'tenant_phone': contract.tenant_phone,
        'tenant_type': contract.tenant_type,
        'start_date': contract.start_date,
        'end_date': contract.end_date,
        'due_day': contract.due_day,
        'status': contract.status,
        'status_display': contract.get_status_display(),
        'is_expired': contract.is_expired(),
        'rent_value': contract.rent_value,
        'rent_base_value': contract.rent_base_value,
        'iptu_value': contract.iptu_value,
        'condominium_value': contract.condominium_value,
        'iptu_reimbursable': contract.iptu_reimbursable,
        'condominium_reimbursable': contract.condominium_reimbursable,
        'iva_ibs_subject': contract.iva_ibs_subject,
        'iva_ibs_rate': contract.iva_ibs_rate,
        'notes': contract.notes,
        'created_at': contract.created_at,
        'updated_at': contract.updated_at,
    }
    if include_property:
        data['property'] = serialize_property(contract.property)
    if include_taxes:
        data['gross_monthly_charge'] = contract.get_gross_monthly_charge()
        data['taxes'] = contract.get_tax_breakdown()
    return data
