"""부동산 → JSON dict 변환"""


def serialize_property(prop):
    return {
        'id': prop.pk,
        'address': prop.address,
        'type': prop.type,
        'type_display': prop.get_type_display(),
        'description': prop.description,
        'owner': prop.owner,
        'owner_document': prop.owner_document,
        'rent_value': prop.rent_value,
        'created_at': prop.created_at,
        'updated_at': prop.updated_at,
    }
