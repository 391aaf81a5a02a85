from django import forms
from django.contrib.auth.forms import UserCreationForm
from django.contrib.auth.models import User
from django.core.exceptions import ValidationError


class RegisterForm(UserCreationForm):
    """
    회원가입 폼
    - JSON 본문의 password 하나로 password1/password2를 채움 (뷰에서 처리)
    - 이메일은 선택, 입력 시 중복 검사
    - 비밀번호 강도는 AUTH_PASSWORD_VALIDATORS 기준
    """
    email = forms.EmailField(required=False, label='Email')

    class Meta:
        model = User
        fields = ('username', 'email')

    def clean_username(self):
        """아이디 검증"""
        username = (self.cleaned_data.get('username') or '').strip()

        if len(username) < 3:
            raise ValidationError('O nome de usuário deve ter pelo menos 3 caracteres.')

        # 중복 검증 (대소문자 무시)
        if User.objects.filter(username__iexact=username).exists():
            raise ValidationError('Este nome de usuário já está em uso.')

        return username

    def clean_email(self):
        """이메일 중복 확인"""
        email = (self.cleaned_data.get('email') or '').strip()

        if email and User.objects.filter(email__iexact=email).exists():
            raise ValidationError('Este email já está cadastrado.')

        return email

    def save(self, commit=True):
        """이메일 포함하여 사용자 저장"""
        user = super().save(commit=False)
        user.email = self.cleaned_data.get('email', '')

        if commit:
            user.save()

        return user
