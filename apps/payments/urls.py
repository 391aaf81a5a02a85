from django.urls import path
from . import views

app_name = 'payments'

urlpatterns = [
    path('', views.payment_collection, name='payment_collection'),
    path('<int:pk>/', views.payment_detail, name='payment_detail'),
    path('<int:pk>/receipt/', views.payment_receipt, name='payment_receipt'),
    path('<int:pk>/notify/', views.payment_notify, name='payment_notify'),
    path('<int:pk>/attachment/', views.payment_attachment, name='payment_attachment'),
]
