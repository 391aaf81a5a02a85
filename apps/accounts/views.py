"""
세션 기반 인증 API

- GET  /api/auth/csrf/      CSRF 쿠키 발급
- POST /api/auth/register/  회원가입 (가입 즉시 로그인)
- POST /api/auth/login/     로그인
- POST /api/auth/logout/    로그아웃
- GET  /api/auth/me/        현재 사용자 (비로그인 401)
"""
import logging

from django.contrib.auth import login as auth_login, logout as auth_logout
from django.contrib.auth.forms import AuthenticationForm
from django.http import HttpResponse, JsonResponse
from django.views.decorators.csrf import ensure_csrf_cookie

from apps.core.http import api_view, error_response, form_error_response, parse_json_body
from .forms import RegisterForm

logger = logging.getLogger(__name__)


def serialize_user(user):
    return {
        'id': user.pk,
        'username': user.username,
        'email': user.email,
        'date_joined': user.date_joined,
    }


@ensure_csrf_cookie
@api_view(['GET'], login_required=False)
def csrf(request):
    """SPA가 첫 요청 전에 호출해 csrftoken 쿠키를 받음"""
    return JsonResponse({'detail': 'CSRF cookie set'})


@api_view(['POST'], login_required=False)
def register(request):
    data = parse_json_body(request)
    password = data.get('password', '')
    form = RegisterForm({
        'username': data.get('username', ''),
        'email': data.get('email', ''),
        'password1': password,
        'password2': data.get('password_confirm', password),
    })
    if not form.is_valid():
        return form_error_response(form)

    user = form.save()
    auth_login(request, user)
    logger.info(f"신규 회원가입: {user.username} (ID: {user.id})")
    return JsonResponse(serialize_user(user), status=201)


@api_view(['POST'], login_required=False)
def login(request):
    data = parse_json_body(request)
    form = AuthenticationForm(request, data={
        'username': data.get('username', ''),
        'password': data.get('password', ''),
    })
    if not form.is_valid():
        logger.warning(f"로그인 실패: username={data.get('username', '')}")
        return error_response('Usuário ou senha inválidos', status=401)

    user = form.get_user()
    auth_login(request, user)
    logger.info(f"로그인: {user.username} (ID: {user.id})")
    return JsonResponse(serialize_user(user))


@api_view(['POST'], login_required=False)
def logout(request):
    if request.user.is_authenticated:
        logger.info(f"로그아웃: {request.user.username} (ID: {request.user.id})")
    auth_logout(request)
    return HttpResponse(status=204)


@api_view(['GET'])
def me(request):
    return JsonResponse(serialize_user(request.user))
