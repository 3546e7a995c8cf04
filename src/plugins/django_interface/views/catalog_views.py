# ╭────────────────────────────────────────────────────────────────────────────╮
# │  ViewSets REST – Perfis profissionais, Serviços e Categorias               │
# │                                                                            │
# │  • Navegação pública  → listagens, busca, rankings e detalhes              │
# │  • Escrita            → autenticada; dono / papel checados nos handlers    │
# ╰────────────────────────────────────────────────────────────────────────────╯
from __future__ import annotations

from quezi_core.adapters.observability.decorators import track_http
from quezi_core.core.application.commands.professional_profile_commands import (
    CreateProfessionalProfileCommand,
    DeleteProfessionalProfileCommand,
    UpdateProfessionalProfileCommand,
)
from quezi_core.core.application.commands.service_commands import (
    CreateCategoryCommand,
    CreateServiceCommand,
    DeleteCategoryCommand,
    DeleteServiceCommand,
    UpdateCategoryCommand,
    UpdateServiceCommand,
)
from quezi_core.core.application.dtos.professional_profile_dto import (
    CreateProfessionalProfileDTO,
    ProfileFilterDTO,
    SearchProfilesDTO,
    ToggleActiveDTO,
    UpdatePortfolioDTO,
    UpdateProfessionalProfileDTO,
    UpdateWorkingHoursDTO,
)
from quezi_core.core.application.dtos.service_dto import (
    CategoryFilterDTO,
    CreateCategoryDTO,
    CreateServiceDTO,
    ServiceFilterDTO,
    UpdateCategoryDTO,
    UpdateServiceDTO,
)
from quezi_core.core.application.queries.professional_profile_queries import (
    GetProfessionalProfileQuery,
    ListProfessionalProfilesQuery,
    TopRatedProfessionalsQuery,
)
from quezi_core.core.application.queries.service_queries import (
    GetCategoryBySlugQuery,
    GetCategoryQuery,
    GetServiceQuery,
    ListCategoriesQuery,
    ListServicesQuery,
    PopularServicesQuery,
)
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from ..serializers.core_serializers import (
    CategorySummarySerializer,
    PopularServiceSerializer,
    ProfessionalProfileDetailsSerializer,
    ProfessionalProfileSerializer,
    ServiceCategorySerializer,
    ServiceSerializer,
)
from .core_views import (
    PaginationFilterMixin,
    command_bus,
    optional_requester,
    parse_id,
    query_bus,
    requester_of,
)


class _PublicReadMixin:
    permission_classes = [permissions.IsAuthenticated]
    PUBLIC_ACTIONS: tuple[str, ...] = ()

    def get_permissions(self):
        if self.action in self.PUBLIC_ACTIONS:
            return [permissions.AllowAny()]
        return super().get_permissions()


# ╭──────────────────────────────────────────────╮
# │  Perfis profissionais  (chave: id do usuário)│
# ╰──────────────────────────────────────────────╯
class ProfessionalProfileViewSet(_PublicReadMixin, PaginationFilterMixin, viewsets.ViewSet):
    PUBLIC_ACTIONS = ("list", "retrieve", "search", "top_rated")

    def _update(self, request, pk, payload):
        profile = command_bus.dispatch(
            UpdateProfessionalProfileCommand(
                user_id=parse_id(pk, "Perfil profissional"), payload=payload, requester=requester_of(request)
            )
        )
        return Response(ProfessionalProfileSerializer(profile).data)

    @track_http("ProfessionalProfileViewSet_list")
    def list(self, request):
        filtros = ProfileFilterDTO(**self._filters(request)).model_dump(exclude_none=True)
        page, page_size = self._pagination(request)
        res = query_bus.dispatch(ListProfessionalProfilesQuery(filtros=filtros, page=page, page_size=page_size))
        return self._paged_response(res, ProfessionalProfileDetailsSerializer)

    @track_http("ProfessionalProfileViewSet_search")
    @action(detail=False, methods=["get"])
    def search(self, request):
        filtros = SearchProfilesDTO(**self._filters(request)).model_dump(exclude_none=True)
        page, page_size = self._pagination(request)
        res = query_bus.dispatch(ListProfessionalProfilesQuery(filtros=filtros, page=page, page_size=page_size))
        return self._paged_response(res, ProfessionalProfileDetailsSerializer)

    @track_http("ProfessionalProfileViewSet_top_rated")
    @action(detail=False, methods=["get"], url_path="top-rated")
    def top_rated(self, request):
        profiles = query_bus.dispatch(TopRatedProfessionalsQuery(limit=self._ranking_limit(request)))
        return Response(ProfessionalProfileDetailsSerializer(profiles, many=True).data)

    @track_http("ProfessionalProfileViewSet_me")
    @action(detail=False, methods=["get"])
    def me(self, request):
        details = query_bus.dispatch(
            GetProfessionalProfileQuery(user_id=request.user.id, requester=requester_of(request))
        )
        return Response(ProfessionalProfileDetailsSerializer(details).data)

    @track_http("ProfessionalProfileViewSet_retrieve")
    def retrieve(self, request, pk=None):
        details = query_bus.dispatch(
            GetProfessionalProfileQuery(
                user_id=parse_id(pk, "Perfil profissional"), requester=optional_requester(request)
            )
        )
        return Response(ProfessionalProfileDetailsSerializer(details).data)

    @track_http("ProfessionalProfileViewSet_create")
    def create(self, request):
        dto = CreateProfessionalProfileDTO(**request.data)
        profile = command_bus.dispatch(CreateProfessionalProfileCommand(payload=dto, requester=requester_of(request)))
        return Response(ProfessionalProfileSerializer(profile).data, status=status.HTTP_201_CREATED)

    @track_http("ProfessionalProfileViewSet_update")
    def partial_update(self, request, pk=None):
        return self._update(request, pk, UpdateProfessionalProfileDTO(**request.data))

    update = partial_update

    @track_http("ProfessionalProfileViewSet_destroy")
    def destroy(self, request, pk=None):
        command_bus.dispatch(
            DeleteProfessionalProfileCommand(
                user_id=parse_id(pk, "Perfil profissional"), requester=requester_of(request)
            )
        )
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ─── operações específicas ─────────────────────
    @track_http("ProfessionalProfileViewSet_portfolio")
    @action(detail=True, methods=["put"])
    def portfolio(self, request, pk=None):
        return self._update(request, pk, UpdatePortfolioDTO(**request.data))

    @track_http("ProfessionalProfileViewSet_working_hours")
    @action(detail=True, methods=["put"], url_path="working-hours")
    def working_hours(self, request, pk=None):
        return self._update(request, pk, UpdateWorkingHoursDTO(**request.data))

    @track_http("ProfessionalProfileViewSet_active")
    @action(detail=True, methods=["patch"])
    def active(self, request, pk=None):
        return self._update(request, pk, ToggleActiveDTO(**request.data))


# ╭──────────────────────────────────────────────╮
# │  Serviços                                    │
# ╰──────────────────────────────────────────────╯
class ServiceViewSet(_PublicReadMixin, PaginationFilterMixin, viewsets.ViewSet):
    PUBLIC_ACTIONS = ("list", "retrieve", "popular")

    @track_http("ServiceViewSet_list")
    def list(self, request):
        filtros = ServiceFilterDTO(**self._filters(request)).model_dump(exclude_none=True)
        page, page_size = self._pagination(request)
        res = query_bus.dispatch(ListServicesQuery(filtros=filtros, page=page, page_size=page_size))
        return self._paged_response(res, ServiceSerializer)

    @track_http("ServiceViewSet_popular")
    @action(detail=False, methods=["get"])
    def popular(self, request):
        services = query_bus.dispatch(PopularServicesQuery(limit=self._ranking_limit(request)))
        return Response(PopularServiceSerializer(services, many=True).data)

    @track_http("ServiceViewSet_retrieve")
    def retrieve(self, request, pk=None):
        service = query_bus.dispatch(GetServiceQuery(service_id=parse_id(pk, "Serviço")))
        return Response(ServiceSerializer(service).data)

    @track_http("ServiceViewSet_create")
    def create(self, request):
        dto = CreateServiceDTO(**request.data)
        service = command_bus.dispatch(CreateServiceCommand(payload=dto, requester=requester_of(request)))
        return Response(ServiceSerializer(service).data, status=status.HTTP_201_CREATED)

    @track_http("ServiceViewSet_update")
    def partial_update(self, request, pk=None):
        dto = UpdateServiceDTO(**request.data)
        service = command_bus.dispatch(
            UpdateServiceCommand(service_id=parse_id(pk, "Serviço"), payload=dto, requester=requester_of(request))
        )
        return Response(ServiceSerializer(service).data)

    update = partial_update

    @track_http("ServiceViewSet_destroy")
    def destroy(self, request, pk=None):
        command_bus.dispatch(DeleteServiceCommand(service_id=parse_id(pk, "Serviço"), requester=requester_of(request)))
        return Response(status=status.HTTP_204_NO_CONTENT)


# ╭──────────────────────────────────────────────╮
# │  Categorias                                  │
# ╰──────────────────────────────────────────────╯
class ServiceCategoryViewSet(_PublicReadMixin, PaginationFilterMixin, viewsets.ViewSet):
    PUBLIC_ACTIONS = ("list", "retrieve", "by_slug")

    @track_http("ServiceCategoryViewSet_list")
    def list(self, request):
        filtros = CategoryFilterDTO(**self._filters(request)).model_dump(exclude_none=True)
        page, page_size = self._pagination(request)
        res = query_bus.dispatch(ListCategoriesQuery(filtros=filtros, page=page, page_size=page_size))
        return self._paged_response(res, CategorySummarySerializer)

    @track_http("ServiceCategoryViewSet_by_slug")
    @action(detail=False, methods=["get"], url_path=r"slug/(?P<slug>[^/.]+)")
    def by_slug(self, request, slug=None):
        category = query_bus.dispatch(GetCategoryBySlugQuery(slug=slug))
        return Response(ServiceCategorySerializer(category).data)

    @track_http("ServiceCategoryViewSet_retrieve")
    def retrieve(self, request, pk=None):
        category = query_bus.dispatch(GetCategoryQuery(category_id=parse_id(pk, "Categoria")))
        return Response(ServiceCategorySerializer(category).data)

    @track_http("ServiceCategoryViewSet_create")
    def create(self, request):
        dto = CreateCategoryDTO(**request.data)
        category = command_bus.dispatch(CreateCategoryCommand(payload=dto, requester=requester_of(request)))
        return Response(ServiceCategorySerializer(category).data, status=status.HTTP_201_CREATED)

    @track_http("ServiceCategoryViewSet_update")
    def partial_update(self, request, pk=None):
        dto = UpdateCategoryDTO(**request.data)
        category = command_bus.dispatch(
            UpdateCategoryCommand(category_id=parse_id(pk, "Categoria"), payload=dto, requester=requester_of(request))
        )
        return Response(ServiceCategorySerializer(category).data)

    update = partial_update

    @track_http("ServiceCategoryViewSet_destroy")
    def destroy(self, request, pk=None):
        command_bus.dispatch(
            DeleteCategoryCommand(category_id=parse_id(pk, "Categoria"), requester=requester_of(request))
        )
        return Response(status=status.HTTP_204_NO_CONTENT)
