from django.urls import path
from . import views

app_name = 'tax'

urlpatterns = [
    path('calculate/', views.tax_calculate, name='tax_calculate'),
    path('report/', views.tax_report, name='tax_report'),
]
