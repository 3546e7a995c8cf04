from django.urls import include, path
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework import permissions

from config import settings

from .routers import build_router
from .views.auth_views import (
    ForgotPasswordView,
    HealthCheckView,
    LoginView,
    LogoutView,
    MeView,
    RegisterView,
    ResetPasswordView,
    VerifyEmailView,
    VerifyResetTokenView,
)
from .views.core_views import AdminStatsView

swagger_permissions = [permissions.IsAdminUser] if not settings.DEBUG else [permissions.AllowAny]

schema_view = get_schema_view(
    openapi.Info(
        title="Quezi API",
        default_version="v1",
        description="Marketplace de beleza – camada HTTP da arquitetura CQRS + Bus",
        contact=openapi.Contact(email="suporte@quezi.com.br"),
    ),
    public=settings.DEBUG,
    permission_classes=swagger_permissions,
)

router = build_router()

auth_patterns = [
    path("register/",           RegisterView.as_view(),         name="register"),
    path("login/",              LoginView.as_view(),            name="login"),
    path("logout/",             LogoutView.as_view(),           name="logout"),
    path("me/",                 MeView.as_view(),               name="me"),
    path("forgot-password/",    ForgotPasswordView.as_view(),   name="forgot-password"),
    path("verify-reset-token/", VerifyResetTokenView.as_view(), name="verify-reset-token"),
    path("reset-password/",     ResetPasswordView.as_view(),    name="reset-password"),
    path("verify-email/",       VerifyEmailView.as_view(),      name="verify-email"),
]

urlpatterns = [
    path("auth/", include(auth_patterns)),
    path("healthz/", HealthCheckView.as_view(), name="healthz"),
    path("admin/stats/", AdminStatsView.as_view(), name="admin-stats"),

    path("swagger/",     schema_view.with_ui("swagger", cache_timeout=0), name="swagger-ui"),
    path("swagger.json", schema_view.without_ui(cache_timeout=0),         name="swagger-json"),
    path("redoc/",       schema_view.with_ui("redoc",   cache_timeout=0), name="redoc-ui"),

    path("", include(router.urls)),
]
