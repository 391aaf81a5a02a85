"""
계약 API 뷰

- GET    /api/contracts/           목록 (필터: ?status=, ?property=)
- POST   /api/contracts/           생성 (부동산이 없으면 400)
- GET    /api/contracts/<pk>/      상세 (부동산 + 월 세금 내역 포함)
- PUT    /api/contracts/<pk>/      수정
- DELETE /api/contracts/<pk>/      삭제 (납부 내역이 있으면 409)
"""
import logging

from django.db import transaction
from django.http import HttpResponse, JsonResponse

from apps.core.http import (
    ConflictError,
    api_view,
    form_error_response,
    get_object_or_404_json,
    parse_json_body,
)
from .forms import ContractForm
from .models import Contract
from .serializers import serialize_contract

logger = logging.getLogger(__name__)


def _user_contracts(user):
    return Contract.objects.filter(property__user=user).select_related('property')


@api_view(['GET', 'POST'])
def contract_collection(request):
    if request.method == 'POST':
        return contract_create(request)

    contracts = _user_contracts(request.user)

    status = request.GET.get('status', '')
    if status:
        contracts = contracts.filter(status=status)

    property_id = request.GET.get('property', '')
    if property_id.isdigit():
        contracts = contracts.filter(property_id=int(property_id))

    data = [serialize_contract(c, include_property=True) for c in contracts]
    return JsonResponse(data, safe=False)


def contract_create(request):
    form = ContractForm(parse_json_body(request), user=request.user)
    if not form.is_valid():
        return form_error_response(form)

    contract = form.save()
    logger.info(
        f"계약 생성: user={request.user.id}, contract={contract.pk}, property={contract.property_id}"
    )
    return JsonResponse(serialize_contract(contract, include_property=True), status=201)


@api_view(['GET', 'PUT', 'DELETE'])
def contract_detail(request, pk):
    contract = get_object_or_404_json(
        _user_contracts(request.user),
        'Contrato não encontrado',
        pk=pk
    )

    if request.method == 'PUT':
        form = ContractForm(parse_json_body(request), instance=contract, user=request.user)
        if not form.is_valid():
            return form_error_response(form)
        contract = form.save()
        logger.info(f"계약 수정: user={request.user.id}, contract={contract.pk}")
        return JsonResponse(serialize_contract(contract, include_property=True, include_taxes=True))

    if request.method == 'DELETE':
        return contract_delete(request, contract)

    return JsonResponse(serialize_contract(contract, include_property=True, include_taxes=True))


@transaction.atomic
def contract_delete(request, contract):
    """납부 내역이 연결된 계약은 삭제 불가 (409)"""
    payment_count = contract.payments.count()
    if payment_count > 0:
        logger.warning(
            f"계약 삭제 거부: contract={contract.pk}, 연결 납부 {payment_count}건"
        )
        raise ConflictError(
            'Não é possível excluir este contrato pois existem pagamentos vinculados',
            details=f"{payment_count} pagamento(s) encontrado(s)"
        )

    contract_id = contract.pk
    contract.delete()
    logger.info(f"계약 삭제: user={request.user.id}, contract={contract_id}")
    return HttpResponse(status=204)
