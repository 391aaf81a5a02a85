"""
부동산 API 뷰

- GET    /api/properties/          목록 (검색: ?search=, ?type=)
- POST   /api/properties/          생성
- GET    /api/properties/<pk>/     상세 (연결된 계약 + 현재 유효 계약 포함)
- PUT    /api/properties/<pk>/     수정
- DELETE /api/properties/<pk>/     삭제 (계약이 연결되어 있으면 409)
"""
import logging

from django.db import transaction
from django.db.models import Count, Q
from django.http import HttpResponse, JsonResponse

from apps.core.http import (
    ConflictError,
    api_view,
    form_error_response,
    get_object_or_404_json,
    parse_json_body,
)
from apps.contracts.serializers import serialize_contract
from .forms import PropertyForm
from .models import Property
from .serializers import serialize_property

logger = logging.getLogger(__name__)


@api_view(['GET', 'POST'])
def property_collection(request):
    if request.method == 'POST':
        return property_create(request)

    properties = Property.objects.filter(user=request.user).annotate(
        contract_count=Count('contracts'),
        active_contract_count=Count('contracts', filter=Q(contracts__status='active')),
    )

    search = request.GET.get('search', '').strip()
    if search:
        properties = properties.filter(
            Q(address__icontains=search) | Q(owner__icontains=search) | Q(description__icontains=search)
        )

    property_type = request.GET.get('type', '')
    if property_type:
        properties = properties.filter(type=property_type)

    data = []
    for prop in properties:
        item = serialize_property(prop)
        item['contract_count'] = prop.contract_count
        item['is_rented'] = prop.active_contract_count > 0
        data.append(item)

    return JsonResponse(data, safe=False)


def property_create(request):
    form = PropertyForm(parse_json_body(request))
    if not form.is_valid():
        return form_error_response(form)

    prop = form.save(commit=False)
    prop.user = request.user
    prop.save()

    logger.info(f"부동산 생성: user={request.user.id}, property={prop.pk}")
    return JsonResponse(serialize_property(prop), status=201)


@api_view(['GET', 'PUT', 'DELETE'])
def property_detail(request, pk):
    prop = get_object_or_404_json(
        Property.objects.filter(user=request.user),
        'Imóvel não encontrado',
        pk=pk
    )

    if request.method == 'PUT':
        form = PropertyForm(parse_json_body(request), instance=prop)
        if not form.is_valid():
            return form_error_response(form)
        prop = form.save()
        logger.info(f"부동산 수정: user={request.user.id}, property={prop.pk}")
        return JsonResponse(serialize_property(prop))

    if request.method == 'DELETE':
        return property_delete(request, prop)

    active_contract = prop.get_active_contract()

    data = serialize_property(prop)
    data['active_contract_id'] = active_contract.pk if active_contract else None
    data['contracts'] = [serialize_contract(c) for c in prop.contracts.all()]
    return JsonResponse(data)


@transaction.atomic
def property_delete(request, prop):
    """계약이 연결된 부동산은 삭제 불가 (409)"""
    contract_count = prop.contracts.count()
    if contract_count > 0:
        logger.warning(
            f"부동산 삭제 거부: property={prop.pk}, 연결 계약 {contract_count}건"
        )
        raise ConflictError(
            'Não é possível excluir este imóvel pois existem contratos vinculados',
            details=f"{contract_count} contrato(s) encontrado(s)"
        )

    prop_id = prop.pk
    prop.delete()
    logger.info(f"부동산 삭제: user={request.user.id}, property={prop_id}")
    return HttpResponse(status=204)
