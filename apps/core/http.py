"""
JSON API 공통 유틸리티

- api_view: 허용 메서드 검사, 로그인 검사(401), 예외 → JSON 에러 응답
- parse_json_body: 요청 본문(JSON) 파싱
- get_object_or_404_json: 소유자 필터가 걸린 단건 조회

에러 응답 형식:
    {"error": "메시지", "details": ...}

상태 코드 규칙:
    400 - 입력값 오류 (폼 검증 실패, 잘못된 JSON)
    401 - 로그인 필요
    404 - 대상 없음 (또는 다른 사용자 소유)
    405 - 허용되지 않은 메서드
    409 - 참조 무결성 위반 (연결된 데이터가 있어 삭제 불가)
    500 - 그 외 서버 오류
"""
import json
import logging
from functools import wraps

from django.db.models import ProtectedError
from django.http import Http404, JsonResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """뷰에서 바로 HTTP 에러 응답으로 변환되는 예외"""

    status_code = 400

    def __init__(self, message, status_code=None, details=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details


class NotFoundError(ApiError):
    status_code = 404


class ConflictError(ApiError):
    status_code = 409


def error_response(message, status=400, details=None):
    payload = {'error': message}
    if details is not None:
        payload['details'] = details
    return JsonResponse(payload, status=status)


def form_error_response(form):
    """폼 검증 실패 → 400"""
    return error_response('Dados inválidos', status=400, details=form.errors.get_json_data())


def parse_json_body(request):
    """요청 본문을 dict로 파싱 (본문이 비어 있으면 빈 dict)"""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ApiError('JSON inválido')
    if not isinstance(data, dict):
        raise ApiError('O corpo da requisição deve ser um objeto JSON')
    return data


def get_object_or_404_json(queryset, message, **kwargs):
    try:
        return queryset.get(**kwargs)
    except (queryset.model.DoesNotExist, ValueError, TypeError):
        raise NotFoundError(message)


def api_view(methods, login_required=True):
    """
    JSON API 뷰 데코레이터

    Args:
        methods: 허용 HTTP 메서드 목록 (예: ['GET', 'POST'])
        login_required: True면 비로그인 요청에 401 반환

    Example:
        @api_view(['GET', 'POST'])
        def property_collection(request):
            ...
    """
    allowed = [m.upper() for m in methods]

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if request.method not in allowed:
                response = error_response('Método não permitido', status=405)
                response['Allow'] = ', '.join(allowed)
                return response

            if login_required and not request.user.is_authenticated:
                return error_response('Autenticação necessária', status=401)

            try:
                return view_func(request, *args, **kwargs)
            except ApiError as e:
                return error_response(e.message, status=e.status_code, details=e.details)
            except Http404:
                return error_response('Não encontrado', status=404)
            except ProtectedError as e:
                # 뷰의 사전 검사를 통과했어도 DB 레벨 PROTECT에서 막힌 경우
                logger.warning(f"참조 무결성 위반으로 삭제 거부: {e}")
                return error_response(
                    'Não é possível excluir: existem registros vinculados',
                    status=409,
                    details=f"{len(e.protected_objects)} registro(s) vinculado(s)"
                )
            except Exception as e:
                logger.error(f"API 처리 중 오류 ({request.method} {request.path}): {e}", exc_info=True)
                return error_response('Erro interno do servidor', status=500)

        return wrapper

    return decorator
