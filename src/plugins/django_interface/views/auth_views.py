from django.utils import timezone
from quezi_core.adapters.config.composition_root import container as core_container
from quezi_core.adapters.observability.decorators import track_http
from quezi_core.adapters.security.jwt_service import JWTService
from quezi_core.core.application.commands.auth_commands import (
    AuthenticateUserCommand,
    RegisterUserCommand,
    RequestPasswordResetCommand,
    ResetPasswordCommand,
    VerifyEmailCommand,
)
from quezi_core.core.application.cqrs import CommandBusImpl, QueryBusImpl, Requester
from quezi_core.core.application.dtos.auth_dto import (
    ForgotPasswordDTO,
    LoginDTO,
    RegisterDTO,
    ResetPasswordDTO,
    TokenDTO,
)
from quezi_core.core.application.queries.auth_queries import VerifyResetTokenQuery
from quezi_core.core.application.queries.user_queries import GetUserQuery
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from config import settings
from plugins.django_interface.serializers.core_serializers import (
    AuthResultSerializer,
    TokenCheckSerializer,
    UserSerializer,
)

command_bus: CommandBusImpl = core_container.command_bus()
query_bus: QueryBusImpl = core_container.query_bus()

FORGOT_PASSWORD_MESSAGE = "Se o email existir, você receberá instruções para redefinir sua senha"


def _set_auth_cookie(resp: Response, token: str) -> Response:
    resp.set_cookie(
        settings.AUTH_COOKIE_NAME,
        token,
        secure=settings.AUTH_COOKIE_SECURE,
        httponly=settings.AUTH_COOKIE_HTTPONLY,
        samesite=settings.AUTH_COOKIE_SAMESITE,
        expires=timezone.now() + timezone.timedelta(seconds=settings.JWT_EXPIRES_IN),
    )
    return resp


class RegisterView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @track_http("RegisterView_post")
    def post(self, request):
        dto = RegisterDTO(**request.data)
        user = command_bus.dispatch(RegisterUserCommand(payload=dto))
        token = JWTService.create_token(subject=str(user.id), role=user.user_type)
        resp = Response(
            {
                "message": "Usuário registrado com sucesso",
                "token": token,
                "user": UserSerializer(user).data,
            },
            status=status.HTTP_201_CREATED,
        )
        return _set_auth_cookie(resp, token)


class LoginView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @track_http("LoginView_post")
    def post(self, request):
        dto = LoginDTO(**request.data)
        result = command_bus.dispatch(AuthenticateUserCommand(payload=dto))
        resp = Response(
            {"message": "Autenticado com sucesso.", **AuthResultSerializer(result).data},
            status=status.HTTP_200_OK,
        )
        return _set_auth_cookie(resp, result.token)


class LogoutView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        resp = Response({"message": "Logout realizado."}, status=status.HTTP_200_OK)
        # Destroi cookie
        resp.delete_cookie(settings.AUTH_COOKIE_NAME)
        return resp


class MeView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @track_http("MeView_get")
    def get(self, request):
        requester = Requester(id=request.user.id, role=request.user.role)
        user = query_bus.dispatch(GetUserQuery(user_id=request.user.id, requester=requester))
        return Response(UserSerializer(user).data)


class ForgotPasswordView(APIView):
    """Sempre responde 200 para não revelar quais e-mails existem."""
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @track_http("ForgotPasswordView_post")
    def post(self, request):
        dto = ForgotPasswordDTO(**request.data)
        command_bus.dispatch(RequestPasswordResetCommand(payload=dto))
        return Response({"message": FORGOT_PASSWORD_MESSAGE}, status=status.HTTP_200_OK)


class VerifyResetTokenView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def post(self, request):
        dto = TokenDTO(**request.data)
        check = query_bus.dispatch(VerifyResetTokenQuery(token=dto.token))
        return Response(TokenCheckSerializer(check).data, status=status.HTTP_200_OK)


class ResetPasswordView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @track_http("ResetPasswordView_post")
    def post(self, request):
        dto = ResetPasswordDTO(**request.data)
        command_bus.dispatch(ResetPasswordCommand(payload=dto))
        return Response({"message": "Senha redefinida com sucesso"}, status=status.HTTP_200_OK)


class VerifyEmailView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def post(self, request):
        dto = TokenDTO(**request.data)
        user = command_bus.dispatch(VerifyEmailCommand(token=dto.token))
        return Response(
            {"message": "E-mail verificado com sucesso", "user": UserSerializer(user).data},
            status=status.HTTP_200_OK,
        )


class HealthCheckView(APIView):
    """
    Rota GET /api/healthz/ — retorna status 200 se a API estiver viva.
    """
    permission_classes = []
    authentication_classes = []

    def get(self, request):
        return Response({"status": "ok", "service": "quezi-api"}, status=status.HTTP_200_OK)
