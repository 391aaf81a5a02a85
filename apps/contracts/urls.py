from django.urls import path
from . import views

app_name = 'contracts'

urlpatterns = [
    path('', views.contract_collection, name='contract_collection'),
    path('<int:pk>/', views.contract_detail, name='contract_detail'),
]
