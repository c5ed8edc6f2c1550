"""
URL configuration for the Invoice Manager API.

Every resource lives under /api/. Authentication endpoints are public,
everything else requires a JWT access token.
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenRefreshView

from config.views import health_check

urlpatterns = [
    # Health check (for Render)
    path('api/health/', health_check, name='health-check'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # Authentication
    path('api/auth/', include('apps.accounts.urls')),
    path('api/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # API endpoints
    path('api/clients/', include('apps.clients.urls')),
    path('api/suppliers/', include('apps.suppliers.urls')),
    path('api/stock/', include('apps.stock.urls')),
    path('api/documents/', include('apps.documents.urls')),
    path('api/payments/', include('apps.payments.urls')),
    path('api/expenses/', include('apps.expenses.urls')),
    path('api/settings/', include('apps.preferences.urls')),
    path('api/admin/', include('apps.dashboard.urls')),
]


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
