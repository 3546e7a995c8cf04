from rest_framework.routers import DefaultRouter

from .views.catalog_views import (
    ProfessionalProfileViewSet,
    ServiceCategoryViewSet,
    ServiceViewSet,
)
from .views.core_views import (
    AppointmentViewSet,
    OrganizationViewSet,
    ReviewViewSet,
    UserViewSet,
)

# lista de (rota, ViewSet)
RESOURCES = [
    ("users",         UserViewSet),
    ("organizations", OrganizationViewSet),
    ("professionals", ProfessionalProfileViewSet),
    ("categories",    ServiceCategoryViewSet),
    ("services",      ServiceViewSet),
    ("appointments",  AppointmentViewSet),
    ("reviews",       ReviewViewSet),
]

def build_router() -> DefaultRouter:
    router = DefaultRouter()
    for prefix, viewset in RESOURCES:
        router.register(prefix, viewset, basename=prefix.replace('-', '_'))
    return router
