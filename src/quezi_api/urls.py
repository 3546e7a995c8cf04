"""Rotas raiz: admin do Django, API REST (/api/) e métricas Prometheus."""
from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView
from django_prometheus import exports

admin.site.site_header = "Quezi – Administração"

urlpatterns = [
    path("", RedirectView.as_view(url="/api/swagger/", permanent=False)),
    path("django-admin/", admin.site.urls),
    path("api/", include("plugins.django_interface.urls")),
    path("metrics/", exports.ExportToDjangoView, name="metrics"),
]
