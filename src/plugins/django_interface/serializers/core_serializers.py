# =========================================================
# Serializers de saída compatíveis com as *entities* (e não
# com os modelos Django). Entrada é validada pelos DTOs
# pydantic; aqui só renderizamos.
# =========================================================
from rest_framework import serializers


# ───────────────────────────────────────────────
# Usuários
# ───────────────────────────────────────────────
class UserSerializer(serializers.Serializer):
    id                = serializers.UUIDField()
    email             = serializers.EmailField()
    name              = serializers.CharField()
    phone             = serializers.CharField(allow_blank=True, allow_null=True)
    user_type         = serializers.CharField()
    is_email_verified = serializers.BooleanField()
    is_active         = serializers.BooleanField()
    created_at        = serializers.DateTimeField()
    updated_at        = serializers.DateTimeField()


class PublicUserSerializer(serializers.Serializer):
    """Dados mínimos de um usuário exibidos a terceiros."""
    id        = serializers.UUIDField()
    name      = serializers.CharField()
    email     = serializers.EmailField()
    user_type = serializers.CharField()


class AuthResultSerializer(serializers.Serializer):
    token = serializers.CharField()
    user  = UserSerializer()


class TokenCheckSerializer(serializers.Serializer):
    valid   = serializers.BooleanField()
    message = serializers.CharField(allow_null=True, required=False)
    error   = serializers.CharField(allow_null=True, required=False)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        return {k: v for k, v in data.items() if v is not None}


# ───────────────────────────────────────────────
# Organizações  &  Membros
# ───────────────────────────────────────────────
class OrganizationSerializer(serializers.Serializer):
    id          = serializers.UUIDField()
    name        = serializers.CharField()
    slug        = serializers.CharField()
    description = serializers.CharField(allow_blank=True, allow_null=True)
    logo_url    = serializers.CharField(allow_null=True)
    owner_id    = serializers.UUIDField()
    created_at  = serializers.DateTimeField()
    updated_at  = serializers.DateTimeField()


class OrganizationMemberSerializer(serializers.Serializer):
    id              = serializers.UUIDField()
    organization_id = serializers.UUIDField()
    user_id         = serializers.UUIDField()
    role            = serializers.CharField()
    joined_at       = serializers.DateTimeField()


class MemberDetailsSerializer(serializers.Serializer):
    """Achata `MemberDetails` (membro + usuário) em um único objeto."""

    def to_representation(self, instance):
        data = OrganizationMemberSerializer(instance.member).data
        data["user"] = PublicUserSerializer(instance.user).data
        return data


class OrganizationInviteSerializer(serializers.Serializer):
    id              = serializers.UUIDField()
    organization_id = serializers.UUIDField()
    email           = serializers.EmailField()
    role            = serializers.CharField()
    invited_by_id   = serializers.UUIDField()
    expires_at      = serializers.DateTimeField()
    accepted_at     = serializers.DateTimeField(allow_null=True)
    created_at      = serializers.DateTimeField()


# ───────────────────────────────────────────────
# Agendamentos
# ───────────────────────────────────────────────
class AppointmentSerializer(serializers.Serializer):
    id              = serializers.UUIDField()
    client_id       = serializers.UUIDField()
    professional_id = serializers.UUIDField()
    service_id      = serializers.UUIDField(allow_null=True)
    service_name    = serializers.CharField()
    scheduled_date  = serializers.DateTimeField()
    status          = serializers.CharField()
    location_type   = serializers.CharField()
    client_address  = serializers.CharField(allow_blank=True, allow_null=True)
    client_notes    = serializers.CharField(allow_blank=True, allow_null=True)
    price           = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    created_at      = serializers.DateTimeField()
    updated_at      = serializers.DateTimeField()


# ───────────────────────────────────────────────
# Avaliações
# ───────────────────────────────────────────────
class ReviewSerializer(serializers.Serializer):
    id              = serializers.UUIDField()
    appointment_id  = serializers.UUIDField()
    reviewer_id     = serializers.UUIDField()
    professional_id = serializers.UUIDField()
    rating          = serializers.IntegerField()
    comment         = serializers.CharField(allow_blank=True, allow_null=True)
    created_at      = serializers.DateTimeField()
    updated_at      = serializers.DateTimeField()


class ProfessionalReviewStatsSerializer(serializers.Serializer):
    professional_id     = serializers.UUIDField()
    total_reviews       = serializers.IntegerField()
    average_rating      = serializers.FloatField()
    rating_distribution = serializers.DictField(child=serializers.IntegerField())
    recent_reviews      = ReviewSerializer(many=True)


class AdminStatsSerializer(serializers.Serializer):
    users_by_type          = serializers.DictField(child=serializers.IntegerField())
    total_users            = serializers.IntegerField()
    total_organizations    = serializers.IntegerField()
    appointments_by_status = serializers.DictField(child=serializers.IntegerField())
    total_reviews          = serializers.IntegerField()
    average_rating         = serializers.FloatField(allow_null=True)


# ───────────────────────────────────────────────
# Catálogo  (categorias & serviços)
# ───────────────────────────────────────────────
class ServiceCategorySerializer(serializers.Serializer):
    id         = serializers.UUIDField()
    name       = serializers.CharField()
    slug       = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class CategorySummarySerializer(serializers.Serializer):
    """Achata `CategorySummary` (categoria + contagem de serviços)."""

    def to_representation(self, instance):
        data = ServiceCategorySerializer(instance.category).data
        data["services_count"] = instance.services_count
        return data


class ServiceSerializer(serializers.Serializer):
    id               = serializers.UUIDField()
    professional_id  = serializers.UUIDField()
    category_id      = serializers.UUIDField()
    name             = serializers.CharField()
    description      = serializers.CharField(allow_blank=True, allow_null=True)
    price            = serializers.DecimalField(max_digits=10, decimal_places=2)
    price_type       = serializers.CharField()
    duration_minutes = serializers.IntegerField()
    created_at       = serializers.DateTimeField()
    updated_at       = serializers.DateTimeField()


class PopularServiceSerializer(serializers.Serializer):
    def to_representation(self, instance):
        data = ServiceSerializer(instance.service).data
        data["appointments_count"] = instance.appointments_count
        return data


# ───────────────────────────────────────────────
# Perfis profissionais
# ───────────────────────────────────────────────
class ProfessionalProfileSerializer(serializers.Serializer):
    id                  = serializers.UUIDField()
    user_id             = serializers.UUIDField()
    bio                 = serializers.CharField(allow_blank=True, allow_null=True)
    city                = serializers.CharField()
    address             = serializers.CharField(allow_blank=True, allow_null=True)
    service_mode        = serializers.CharField()
    photo_url           = serializers.CharField(allow_null=True)
    portfolio_images    = serializers.ListField(child=serializers.CharField())
    working_hours       = serializers.JSONField(allow_null=True)
    years_of_experience = serializers.IntegerField(allow_null=True)
    specialties         = serializers.ListField(child=serializers.CharField())
    certifications      = serializers.ListField(child=serializers.CharField())
    languages           = serializers.ListField(child=serializers.CharField())
    is_active           = serializers.BooleanField()
    is_verified         = serializers.BooleanField()
    created_at          = serializers.DateTimeField()
    updated_at          = serializers.DateTimeField()


class ProfessionalProfileDetailsSerializer(serializers.Serializer):
    """Perfil + nome do profissional, agregados de avaliação e serviços."""

    def to_representation(self, instance):
        data = ProfessionalProfileSerializer(instance.profile).data
        data["name"] = instance.name
        data["average_rating"] = instance.average_rating
        data["total_reviews"] = instance.total_reviews
        data["services"] = ServiceSerializer(instance.services, many=True).data
        return data
