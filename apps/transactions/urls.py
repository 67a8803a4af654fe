from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'transactions'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.TransactionViewSet, basename='transaction')

urlpatterns = [
    # Transaction ViewSet routes
    # GET    /api/transactions/              - List entries (?person=<id>)
    # POST   /api/transactions/              - Record entry
    # GET    /api/transactions/{id}/         - Get entry
    # PATCH  /api/transactions/{id}/         - Edit entry
    # DELETE /api/transactions/{id}/         - Delete entry

    # Include router URLs
    path('', include(router.urls)),
]
