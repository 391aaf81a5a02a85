from django.urls import path
from . import views

app_name = 'reports'

urlpatterns = [
    path('payments/', views.export_payments_csv, name='export_payments_csv'),
    path('payments.xlsx', views.export_payments_xlsx, name='export_payments_xlsx'),
    path('backup/', views.export_backup, name='export_backup'),
]
