from django.urls import path
from . import views

app_name = 'dashboard'

urlpatterns = [
    path('users/', views.users_list, name='users'),
    path('users/<uuid:user_id>/', views.user_detail, name='user-detail'),
    path('users/<uuid:user_id>/password/', views.user_password, name='user-password'),
    path('stats/', views.system_stats, name='stats'),
    path('unused/stock/', views.unused_stock, name='unused-stock'),
    path('unused/clients/', views.unused_clients, name='unused-clients'),
    path('unused/documents/', views.admin_documents, name='documents'),
]
