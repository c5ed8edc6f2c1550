from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import StockItemViewSet

app_name = 'stock'

router = DefaultRouter()
router.register(r'', StockItemViewSet, basename='stockitem')

urlpatterns = [
    # GET    /api/stock/              - List items (search, category, supplier, low_stock)
    # POST   /api/stock/              - Create item
    # GET    /api/stock/{id}/         - Item with supplier
    # PUT    /api/stock/{id}/         - Update item
    # PATCH  /api/stock/{id}/         - Partial update
    # DELETE /api/stock/{id}/         - Delete item
    # POST   /api/stock/batch/        - Bulk import
    # GET    /api/stock/categories/   - Distinct categories
    path('', include(router.urls)),
]
