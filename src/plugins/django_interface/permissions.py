from rest_framework.permissions import BasePermission


class _RolePermission(BasePermission):
    role: str = ""
    message = "Acesso negado"

    def has_permission(self, request, view):
        return bool(request.user and getattr(request.user, "role", None) == self.role)


class IsAdminUser(_RolePermission):
    """Allows access only to users with role 'ADMIN'."""
    role = "ADMIN"
    message = "Acesso restrito a administradores"


class IsProfessionalUser(_RolePermission):
    """Allows access only to users with role 'PROFESSIONAL'."""
    role = "PROFESSIONAL"
    message = "Acesso restrito a profissionais"


class IsClientUser(_RolePermission):
    """Allows access only to users with role 'CLIENT'."""
    role = "CLIENT"
    message = "Acesso restrito a clientes"
