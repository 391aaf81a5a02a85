from django.apps import AppConfig


class DashboardConfig(AppConfig):
    """
    대시보드 앱은 자체 모델을 가지지 않습니다.
    부동산/계약/납부 데이터를 ORM 집계로 요약합니다.
    """
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.dashboard'
    verbose_name = 'Painel'
