from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'people'

# Router for ViewSets; nested resources before the person routes
router = DefaultRouter()
router.register(r'contacts', views.ContactViewSet, basename='contact')
router.register(r'documents', views.DocumentViewSet, basename='document')
router.register(r'', views.PersonViewSet, basename='person')

urlpatterns = [
    # Person ViewSet routes
    # GET    /api/people/                      - List people (?group, ?search, ?sort)
    # POST   /api/people/                      - Create person
    # GET    /api/people/summary/              - Totals
    # GET    /api/people/{id}/                 - Profile
    # PATCH  /api/people/{id}/                 - Edit person
    # GET    /api/people/{id}/contacts/        - List contacts
    # POST   /api/people/{id}/contacts/        - Add contact
    # GET    /api/people/{id}/transactions/    - Ledger
    # GET    /api/people/{id}/documents/       - List documents
    # POST   /api/people/{id}/documents/       - Upload document

    # Contact ViewSet routes
    # PATCH  /api/people/contacts/{id}/        - Edit contact
    # DELETE /api/people/contacts/{id}/        - Delete contact

    # Document ViewSet routes
    # GET    /api/people/documents/{id}/           - Document with payload
    # DELETE /api/people/documents/{id}/           - Delete document
    # GET    /api/people/documents/{id}/download/  - Download file

    # Include router URLs
    path('', include(router.urls)),
]
