from django.urls import path
from . import views

app_name = 'properties'

urlpatterns = [
    path('', views.property_collection, name='property_collection'),
    path('<int:pk>/', views.property_detail, name='property_detail'),
]
