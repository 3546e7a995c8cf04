# ╭────────────────────────────────────────────────────────────────────────────╮
# │  ViewSets REST – Usuários, Organizações, Agendamentos e Avaliações         │
# │                                                                            │
# │  • Entrada        → DTOs pydantic (erros viram 400 no exception handler)   │
# │  • Paginação DRY  → mix-in centralizado (page + page_size | limit)         │
# │  • Métrica trace  → decorator `track_http`                                 │
# ╰────────────────────────────────────────────────────────────────────────────╯
from __future__ import annotations

import uuid

from quezi_core.adapters.config.composition_root import container as core_container
from quezi_core.adapters.observability.decorators import track_http
from quezi_core.core.application.commands.appointment_commands import (
    ChangeAppointmentStatusCommand,
    CreateAppointmentCommand,
)
from quezi_core.core.application.commands.organization_commands import (
    AcceptInviteCommand,
    CreateOrganizationCommand,
    DeleteOrganizationCommand,
    InviteMemberCommand,
    RemoveMemberCommand,
    UpdateMemberRoleCommand,
    UpdateOrganizationCommand,
)
from quezi_core.core.application.commands.review_commands import (
    CreateReviewCommand,
    DeleteReviewCommand,
    UpdateReviewCommand,
)
from quezi_core.core.application.commands.user_commands import DeleteUserCommand, UpdateUserCommand
from quezi_core.core.application.cqrs import CommandBusImpl, PagedResult, QueryBusImpl, Requester
from quezi_core.core.application.dtos.appointment_dto import AppointmentFilterDTO, CreateAppointmentDTO
from quezi_core.core.application.dtos.organization_dto import (
    CreateOrganizationDTO,
    InviteMemberDTO,
    OrganizationFilterDTO,
    UpdateMemberRoleDTO,
    UpdateOrganizationDTO,
)
from quezi_core.core.application.dtos.pagination_dto import PaginationParamsDTO, RankingParamsDTO
from quezi_core.core.application.dtos.review_dto import CreateReviewDTO, ReviewFilterDTO, UpdateReviewDTO
from quezi_core.core.application.dtos.user_dto import UpdateUserDTO, UserFilterDTO
from quezi_core.core.application.queries.appointment_queries import (
    GetAppointmentQuery,
    ListAppointmentsQuery,
)
from quezi_core.core.application.queries.organization_queries import (
    GetOrganizationBySlugQuery,
    GetOrganizationQuery,
    ListOrganizationMembersQuery,
    ListOrganizationsQuery,
)
from quezi_core.core.application.queries.review_queries import (
    GetProfessionalReviewStatsQuery,
    GetReviewByAppointmentQuery,
    GetReviewQuery,
    ListReviewsQuery,
)
from quezi_core.core.application.queries.user_queries import (
    GetAdminStatsQuery,
    GetUserQuery,
    ListUsersQuery,
)
from quezi_core.core.domain.exceptions import NotFoundError, UnauthorizedError
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from plugins.django_interface.permissions import IsAdminUser

from ..serializers.core_serializers import (
    AdminStatsSerializer,
    AppointmentSerializer,
    MemberDetailsSerializer,
    OrganizationInviteSerializer,
    OrganizationMemberSerializer,
    OrganizationSerializer,
    ProfessionalReviewStatsSerializer,
    ReviewSerializer,
    UserSerializer,
)

# ───────────────────────────────  CQRS Buses  ────────────────────────────────
command_bus: CommandBusImpl = core_container.command_bus()
query_bus: QueryBusImpl = core_container.query_bus()

PAGINATION_PARAMS = ("page", "page_size", "limit")


# ╭──────────────────────────────────────────────────────────────────────────╮
# │ Helpers                                                                  │
# ╰──────────────────────────────────────────────────────────────────────────╯
def requester_of(request) -> Requester:
    return Requester(id=request.user.id, role=request.user.role)


def optional_requester(request) -> Requester | None:
    """Rotas públicas: usuário anônimo vira None."""
    user = request.user
    if not user or not user.is_authenticated:
        return None
    return requester_of(request)


def parse_id(value, resource: str) -> uuid.UUID:
    """IDs malformados na URL respondem 404, como um id inexistente."""
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise NotFoundError(resource) from None


class PaginationFilterMixin:
    """Separa paginação (page + page_size | limit) dos filtros da query string."""

    @staticmethod
    def _pagination(request) -> tuple[int, int]:
        params = request.query_params
        raw = {"page": params.get("page"), "page_size": params.get("page_size") or params.get("limit")}
        dto = PaginationParamsDTO(**{k: v for k, v in raw.items() if v not in (None, "")})
        return dto.page, dto.page_size

    @staticmethod
    def _filters(request) -> dict[str, str]:
        return {
            key: request.query_params.get(key)
            for key in request.query_params
            if key not in PAGINATION_PARAMS and request.query_params.get(key) != ""
        }

    @staticmethod
    def _ranking_limit(request) -> int:
        limit = request.query_params.get("limit")
        return RankingParamsDTO(**({"limit": limit} if limit else {})).limit

    @staticmethod
    def _paged_response(res: PagedResult, serializer_cls) -> Response:
        payload = {
            "results": serializer_cls(res.items, many=True).data,
            "total_items": res.total,
            "page": res.page,
            "page_size": res.page_size,
            "total_pages": res.total_pages,
            "items_on_page": len(res.items),
        }
        return Response(payload, status=status.HTTP_200_OK)


# ╭──────────────────────────────────────────────╮
# │  Usuários                                    │
# ╰──────────────────────────────────────────────╯
class UserViewSet(PaginationFilterMixin, viewsets.ViewSet):
    permission_classes = [permissions.IsAuthenticated]

    def get_permissions(self):
        if self.action == "list":
            return [permissions.IsAuthenticated(), IsAdminUser()]
        return super().get_permissions()

    @track_http("UserViewSet_list")
    def list(self, request):
        filtros = UserFilterDTO(**self._filters(request)).model_dump(exclude_none=True)
        page, page_size = self._pagination(request)
        res = query_bus.dispatch(ListUsersQuery(filtros=filtros, page=page, page_size=page_size))
        return self._paged_response(res, UserSerializer)

    @track_http("UserViewSet_retrieve")
    def retrieve(self, request, pk=None):
        user = query_bus.dispatch(
            GetUserQuery(user_id=parse_id(pk, "Usuário"), requester=requester_of(request))
        )
        return Response(UserSerializer(user).data)

    @track_http("UserViewSet_update")
    def partial_update(self, request, pk=None):
        dto = UpdateUserDTO(**request.data)
        user = command_bus.dispatch(
            UpdateUserCommand(user_id=parse_id(pk, "Usuário"), payload=dto, requester=requester_of(request))
        )
        return Response(UserSerializer(user).data)

    update = partial_update

    @track_http("UserViewSet_destroy")
    def destroy(self, request, pk=None):
        command_bus.dispatch(DeleteUserCommand(user_id=parse_id(pk, "Usuário"), requester=requester_of(request)))
        return Response(status=status.HTTP_204_NO_CONTENT)


class AdminStatsView(APIView):
    permission_classes = [permissions.IsAuthenticated, IsAdminUser]

    @track_http("AdminStatsView_get")
    def get(self, request):
        stats = query_bus.dispatch(GetAdminStatsQuery())
        return Response(AdminStatsSerializer(stats).data)


# ╭──────────────────────────────────────────────╮
# │  Organizações                                │
# ╰──────────────────────────────────────────────╯
class OrganizationViewSet(PaginationFilterMixin, viewsets.ViewSet):
    permission_classes = [permissions.IsAuthenticated]
    PUBLIC_ACTIONS = ("list", "retrieve", "by_slug")

    def get_permissions(self):
        if self.action in self.PUBLIC_ACTIONS:
            return [permissions.AllowAny()]
        return super().get_permissions()

    @track_http("OrganizationViewSet_list")
    def list(self, request):
        dto = OrganizationFilterDTO(**self._filters(request))
        page, page_size = self._pagination(request)

        filtros: dict = {"search": dto.search}
        if dto.mine:
            if not request.user or not request.user.is_authenticated:
                raise UnauthorizedError("Autenticação necessária para listar suas organizações")
            filtros["member_id"] = request.user.id

        res = query_bus.dispatch(ListOrganizationsQuery(filtros=filtros, page=page, page_size=page_size))
        return self._paged_response(res, OrganizationSerializer)

    @track_http("OrganizationViewSet_retrieve")
    def retrieve(self, request, pk=None):
        org = query_bus.dispatch(GetOrganizationQuery(organization_id=parse_id(pk, "Organização")))
        return Response(OrganizationSerializer(org).data)

    @track_http("OrganizationViewSet_by_slug")
    @action(detail=False, methods=["get"], url_path=r"slug/(?P<slug>[^/.]+)")
    def by_slug(self, request, slug=None):
        org = query_bus.dispatch(GetOrganizationBySlugQuery(slug=slug))
        return Response(OrganizationSerializer(org).data)

    @track_http("OrganizationViewSet_create")
    def create(self, request):
        dto = CreateOrganizationDTO(**request.data)
        org = command_bus.dispatch(CreateOrganizationCommand(payload=dto, requester=requester_of(request)))
        return Response(OrganizationSerializer(org).data, status=status.HTTP_201_CREATED)

    @track_http("OrganizationViewSet_update")
    def partial_update(self, request, pk=None):
        dto = UpdateOrganizationDTO(**request.data)
        org = command_bus.dispatch(
            UpdateOrganizationCommand(
                organization_id=parse_id(pk, "Organização"), payload=dto, requester=requester_of(request)
            )
        )
        return Response(OrganizationSerializer(org).data)

    update = partial_update

    @track_http("OrganizationViewSet_destroy")
    def destroy(self, request, pk=None):
        command_bus.dispatch(
            DeleteOrganizationCommand(organization_id=parse_id(pk, "Organização"), requester=requester_of(request))
        )
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ─── membros ───────────────────────────────────
    @track_http("OrganizationViewSet_members")
    @action(detail=True, methods=["get"])
    def members(self, request, pk=None):
        members = query_bus.dispatch(
            ListOrganizationMembersQuery(organization_id=parse_id(pk, "Organização"), requester=requester_of(request))
        )
        return Response(MemberDetailsSerializer(members, many=True).data)

    @track_http("OrganizationViewSet_invite")
    @action(detail=True, methods=["post"])
    def invite(self, request, pk=None):
        dto = InviteMemberDTO(**request.data)
        invite = command_bus.dispatch(
            InviteMemberCommand(
                organization_id=parse_id(pk, "Organização"), payload=dto, requester=requester_of(request)
            )
        )
        return Response(OrganizationInviteSerializer(invite).data, status=status.HTTP_201_CREATED)

    @track_http("OrganizationViewSet_accept_invite")
    @action(detail=False, methods=["post"], url_path=r"invites/(?P<invite_id>[^/.]+)/accept")
    def accept_invite(self, request, invite_id=None):
        member = command_bus.dispatch(
            AcceptInviteCommand(invite_id=parse_id(invite_id, "Convite"), requester=requester_of(request))
        )
        return Response(OrganizationMemberSerializer(member).data, status=status.HTTP_201_CREATED)

    @track_http("OrganizationViewSet_member_role")
    @action(detail=True, methods=["patch"], url_path=r"members/(?P<member_id>[^/.]+)/role")
    def member_role(self, request, pk=None, member_id=None):
        dto = UpdateMemberRoleDTO(**request.data)
        member = command_bus.dispatch(
            UpdateMemberRoleCommand(
                organization_id=parse_id(pk, "Organização"),
                member_id=parse_id(member_id, "Membro"),
                payload=dto,
                requester=requester_of(request),
            )
        )
        return Response(OrganizationMemberSerializer(member).data)

    @track_http("OrganizationViewSet_remove_member")
    @action(detail=True, methods=["delete"], url_path=r"members/(?P<user_id>[^/.]+)")
    def remove_member(self, request, pk=None, user_id=None):
        command_bus.dispatch(
            RemoveMemberCommand(
                organization_id=parse_id(pk, "Organização"),
                user_id=parse_id(user_id, "Membro"),
                requester=requester_of(request),
            )
        )
        return Response(status=status.HTTP_204_NO_CONTENT)


# ╭──────────────────────────────────────────────╮
# │  Agendamentos                                │
# ╰──────────────────────────────────────────────╯
class AppointmentViewSet(PaginationFilterMixin, viewsets.ViewSet):
    permission_classes = [permissions.IsAuthenticated]

    @track_http("AppointmentViewSet_list")
    def list(self, request):
        dto = AppointmentFilterDTO(**self._filters(request))
        page, page_size = self._pagination(request)

        filtros = dto.model_dump(exclude_none=True)
        # admin vê todos; demais só os próprios (cliente ou profissional)
        if request.user.role != "ADMIN":
            filtros["participant_id"] = request.user.id

        res = query_bus.dispatch(ListAppointmentsQuery(filtros=filtros, page=page, page_size=page_size))
        return self._paged_response(res, AppointmentSerializer)

    @track_http("AppointmentViewSet_retrieve")
    def retrieve(self, request, pk=None):
        appt = query_bus.dispatch(
            GetAppointmentQuery(appointment_id=parse_id(pk, "Agendamento"), requester=requester_of(request))
        )
        return Response(AppointmentSerializer(appt).data)

    @track_http("AppointmentViewSet_create")
    def create(self, request):
        dto = CreateAppointmentDTO(**request.data)
        appt = command_bus.dispatch(CreateAppointmentCommand(payload=dto, requester=requester_of(request)))
        return Response(AppointmentSerializer(appt).data, status=status.HTTP_201_CREATED)

    @track_http("AppointmentViewSet_transition")
    @action(detail=True, methods=["post"], url_path=r"(?P<transition>accept|reject|complete|cancel)")
    def transition(self, request, pk=None, transition=None):
        appt = command_bus.dispatch(
            ChangeAppointmentStatusCommand(
                appointment_id=parse_id(pk, "Agendamento"),
                action=transition,
                requester=requester_of(request),
            )
        )
        return Response(AppointmentSerializer(appt).data)


# ╭──────────────────────────────────────────────╮
# │  Avaliações                                  │
# ╰──────────────────────────────────────────────╯
class ReviewViewSet(PaginationFilterMixin, viewsets.ViewSet):
    permission_classes = [permissions.IsAuthenticated]
    PUBLIC_ACTIONS = ("list", "professional_stats")

    def get_permissions(self):
        if self.action in self.PUBLIC_ACTIONS:
            return [permissions.AllowAny()]
        return super().get_permissions()

    @track_http("ReviewViewSet_list")
    def list(self, request):
        filtros = ReviewFilterDTO(**self._filters(request)).model_dump(exclude_none=True)
        page, page_size = self._pagination(request)
        res = query_bus.dispatch(ListReviewsQuery(filtros=filtros, page=page, page_size=page_size))
        return self._paged_response(res, ReviewSerializer)

    @track_http("ReviewViewSet_retrieve")
    def retrieve(self, request, pk=None):
        review = query_bus.dispatch(
            GetReviewQuery(review_id=parse_id(pk, "Avaliação"), requester=requester_of(request))
        )
        return Response(ReviewSerializer(review).data)

    @track_http("ReviewViewSet_create")
    def create(self, request):
        dto = CreateReviewDTO(**request.data)
        review = command_bus.dispatch(CreateReviewCommand(payload=dto, requester=requester_of(request)))
        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)

    @track_http("ReviewViewSet_update")
    def partial_update(self, request, pk=None):
        dto = UpdateReviewDTO(**request.data)
        review = command_bus.dispatch(
            UpdateReviewCommand(review_id=parse_id(pk, "Avaliação"), payload=dto, requester=requester_of(request))
        )
        return Response(ReviewSerializer(review).data)

    update = partial_update

    @track_http("ReviewViewSet_destroy")
    def destroy(self, request, pk=None):
        command_bus.dispatch(DeleteReviewCommand(review_id=parse_id(pk, "Avaliação"), requester=requester_of(request)))
        return Response(status=status.HTTP_204_NO_CONTENT)

    @track_http("ReviewViewSet_by_appointment")
    @action(detail=False, methods=["get"], url_path=r"appointment/(?P<appointment_id>[^/.]+)")
    def by_appointment(self, request, appointment_id=None):
        review = query_bus.dispatch(
            GetReviewByAppointmentQuery(
                appointment_id=parse_id(appointment_id, "Agendamento"), requester=requester_of(request)
            )
        )
        return Response(ReviewSerializer(review).data)

    @track_http("ReviewViewSet_professional_stats")
    @action(detail=False, methods=["get"], url_path=r"professional/(?P<professional_id>[^/.]+)/stats")
    def professional_stats(self, request, professional_id=None):
        stats = query_bus.dispatch(
            GetProfessionalReviewStatsQuery(professional_id=parse_id(professional_id, "Profissional"))
        )
        return Response(ProfessionalReviewStatsSerializer(stats).data)
