from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import DocumentViewSet

app_name = 'documents'

router = DefaultRouter()
router.register(r'', DocumentViewSet, basename='document')

urlpatterns = [
    # GET    /api/documents/                         - List (type, status, client, date range, search)
    # POST   /api/documents/                         - Create
    # GET    /api/documents/{id}/                    - Detail with items and payments
    # PUT    /api/documents/{id}/                    - Update (items replaced when sent)
    # DELETE /api/documents/{id}/                    - Delete with items and payments
    # POST   /api/documents/{id}/convert/            - Proforma -> invoice
    # POST   /api/documents/{id}/cancel/             - Cancel
    # POST   /api/documents/{id}/restore/            - Restore cancelled
    # POST   /api/documents/batch/                   - Bulk import
    # GET    /api/documents/next-number/{type}/      - Reserve next number
    # GET    /api/documents/summary/                 - Totals
    path('', include(router.urls)),
]
