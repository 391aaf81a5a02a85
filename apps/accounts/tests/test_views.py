"""
인증 API 테스트 (세션 기반)
"""
import json

import pytest
from django.contrib.auth.models import User
from django.urls import reverse


def send_json(client, url, data):
    return client.post(url, data=json.dumps(data), content_type='application/json')


@pytest.mark.django_db
class TestRegister:

    def test_register_logs_in(self, client):
        response = send_json(client, reverse('accounts:register'), {
            'username': 'novo_locador',
            'email': 'novo@example.com',
            'password': 'Senha!Forte2024',
        })

        assert response.status_code == 201
        assert response.json()['username'] == 'novo_locador'
        assert User.objects.filter(username='novo_locador').exists()

        me = client.get(reverse('accounts:me'))
        assert me.status_code == 200
        assert me.json()['email'] == 'novo@example.com'

    def test_duplicate_username(self, client, user):
        response = send_json(client, reverse('accounts:register'), {
            'username': 'TestUser',
            'password': 'Senha!Forte2024',
        })

        assert response.status_code == 400
        assert 'username' in response.json()['details']

    def test_weak_password(self, client):
        response = send_json(client, reverse('accounts:register'), {
            'username': 'fraco',
            'password': '12345678',
        })

        assert response.status_code == 400
        assert 'password2' in response.json()['details']

    def test_password_confirmation_mismatch(self, client):
        response = send_json(client, reverse('accounts:register'), {
            'username': 'confuso',
            'password': 'Senha!Forte2024',
            'password_confirm': 'Outra!Senha2024',
        })

        assert response.status_code == 400


@pytest.mark.django_db
class TestLoginLogout:

    def test_login(self, client, user):
        response = send_json(client, reverse('accounts:login'), {
            'username': 'testuser',
            'password': 'testpass123',
        })

        assert response.status_code == 200
        assert response.json()['id'] == user.pk
        assert client.get(reverse('accounts:me')).status_code == 200

    def test_wrong_password(self, client, user):
        response = send_json(client, reverse('accounts:login'), {
            'username': 'testuser',
            'password': 'errada',
        })

        assert response.status_code == 401
        assert response.json()['error'] == 'Usuário ou senha inválidos'

    def test_logout(self, authenticated_client):
        response = authenticated_client.post(reverse('accounts:logout'))

        assert response.status_code == 204
        assert authenticated_client.get(reverse('accounts:me')).status_code == 401

    def test_me_requires_login(self, client):
        assert client.get(reverse('accounts:me')).status_code == 401


@pytest.mark.django_db
def test_csrf_cookie(client):
    response = client.get(reverse('accounts:csrf'))

    assert response.status_code == 200
    assert 'csrftoken' in response.cookies
