"""Tests for the request validation schemas."""

import uuid
from datetime import UTC, datetime, timedelta
from decimal import Decimal

from django.test import SimpleTestCase
from pydantic import ValidationError

from quezi_core.core.application.dtos.appointment_dto import CreateAppointmentDTO
from quezi_core.core.application.dtos.auth_dto import LoginDTO, RegisterDTO, ResetPasswordDTO
from quezi_core.core.application.dtos.organization_dto import CreateOrganizationDTO, UpdateOrganizationDTO
from quezi_core.core.application.dtos.pagination_dto import PaginationParamsDTO, RankingParamsDTO
from quezi_core.core.application.dtos.professional_profile_dto import (
    CreateProfessionalProfileDTO,
    SearchProfilesDTO,
    TimeSlotDTO,
    UpdatePortfolioDTO,
    UpdateProfessionalProfileDTO,
    UpdateWorkingHoursDTO,
)
from quezi_core.core.application.dtos.review_dto import CreateReviewDTO, ReviewFilterDTO, UpdateReviewDTO
from quezi_core.core.application.dtos.service_dto import (
    CreateCategoryDTO,
    CreateServiceDTO,
    ServiceFilterDTO,
    UpdateCategoryDTO,
    UpdateServiceDTO,
)
from quezi_core.core.application.dtos.validators import (
    normalize_phone,
    validate_cep,
    validate_cpf,
    validate_password,
)


def _messages(exc: ValidationError) -> list[str]:
    return [e["msg"] for e in exc.errors()]


class ValidatorTests(SimpleTestCase):
    def test_password_rules(self) -> None:
        self.assertEqual(validate_password("Senha123"), "Senha123")
        for weak in ("Ab1", "senha123", "SENHA123", "SenhaSenha"):
            with self.subTest(weak=weak), self.assertRaises(ValueError):
                validate_password(weak)

    def test_phone_is_normalized_to_digits(self) -> None:
        self.assertEqual(normalize_phone("(11) 98765-4321"), "11987654321")
        self.assertIsNone(normalize_phone("  "))
        with self.assertRaises(ValueError):
            normalize_phone("123")

    def test_cpf_check_digits(self) -> None:
        self.assertEqual(validate_cpf("529.982.247-25"), "52998224725")
        for bad in ("529.982.247-26", "111.111.111-11", "5299822"):
            with self.subTest(bad=bad), self.assertRaises(ValueError):
                validate_cpf(bad)

    def test_cep(self) -> None:
        self.assertEqual(validate_cep("01310-100"), "01310100")
        with self.assertRaises(ValueError):
            validate_cep("0131")


class AuthSchemaTests(SimpleTestCase):
    def _register(self, **overrides):
        data = {
            "name": "Maria Silva",
            "email": "Maria@Example.com",
            "password": "Senha123",
            "confirm_password": "Senha123",
        }
        data.update(overrides)
        return RegisterDTO(**data)

    def test_valid_registration_normalizes_fields(self) -> None:
        dto = self._register(phone="(11) 98765-4321", user_type="PROFESSIONAL")
        self.assertEqual(dto.email, "maria@example.com")
        self.assertEqual(dto.phone, "11987654321")

    def test_passwords_must_match(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            self._register(confirm_password="Outra123")
        self.assertIn("As senhas não coincidem", " ".join(_messages(ctx.exception)))

    def test_admin_cannot_self_register(self) -> None:
        with self.assertRaises(ValidationError):
            self._register(user_type="ADMIN")

    def test_name_must_be_letters(self) -> None:
        with self.assertRaises(ValidationError):
            self._register(name="M4ria")

    def test_login_requires_password(self) -> None:
        with self.assertRaises(ValidationError):
            LoginDTO(email="maria@example.com", password="")

    def test_reset_password_rules(self) -> None:
        with self.assertRaises(ValidationError):
            ResetPasswordDTO(token="t", password="fraca", confirm_password="fraca")


class OrganizationSchemaTests(SimpleTestCase):
    def test_slug_is_derived_from_name(self) -> None:
        dto = CreateOrganizationDTO(name="Salão Beleza & Cia")
        self.assertEqual(dto.slug, "salao-beleza-cia")

    def test_invalid_slug_is_rejected(self) -> None:
        for slug in ("Bad Slug", "ab", "-inicio"):
            with self.subTest(slug=slug), self.assertRaises(ValidationError):
                CreateOrganizationDTO(name="Salão", slug=slug)

    def test_short_name_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            CreateOrganizationDTO(name="  ab ", slug="abc")

    def test_logo_url_must_be_url(self) -> None:
        with self.assertRaises(ValidationError):
            UpdateOrganizationDTO(logo_url="não é url")


class ReviewSchemaTests(SimpleTestCase):
    def test_rating_range_and_type(self) -> None:
        appointment_id = uuid.uuid4()
        self.assertEqual(CreateReviewDTO(appointment_id=appointment_id, rating=5).rating, 5)
        for rating in (0, 6, 4.5, "5", True):
            with self.subTest(rating=rating), self.assertRaises(ValidationError):
                CreateReviewDTO(appointment_id=appointment_id, rating=rating)

    def test_comment_length(self) -> None:
        with self.assertRaises(ValidationError):
            CreateReviewDTO(appointment_id=uuid.uuid4(), rating=4, comment="x" * 1001)

    def test_update_requires_some_field(self) -> None:
        with self.assertRaises(ValidationError):
            UpdateReviewDTO()
        self.assertEqual(UpdateReviewDTO(comment="ok").comment, "ok")

    def test_filter_rating_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            ReviewFilterDTO(min_rating=5, max_rating=2)
        self.assertEqual(ReviewFilterDTO(min_rating="3").min_rating, 3)


class AppointmentSchemaTests(SimpleTestCase):
    def _payload(self, **overrides):
        data = {
            "professional_id": uuid.uuid4(),
            "service_id": uuid.uuid4(),
            "scheduled_date": datetime.now(UTC) + timedelta(days=1),
        }
        data.update(overrides)
        return data

    def test_date_must_be_in_future(self) -> None:
        with self.assertRaises(ValidationError):
            CreateAppointmentDTO(**self._payload(scheduled_date=datetime.now(UTC) - timedelta(hours=1)))

    def test_domicile_requires_address(self) -> None:
        with self.assertRaises(ValidationError):
            CreateAppointmentDTO(**self._payload(location_type="AT_DOMICILE"))
        dto = CreateAppointmentDTO(
            **self._payload(location_type="AT_DOMICILE", client_address="Rua A, 10", client_zip_code="01310-100")
        )
        self.assertEqual(dto.client_zip_code, "01310100")


class PaginationParamsTests(SimpleTestCase):
    def test_defaults_and_bounds(self) -> None:
        dto = PaginationParamsDTO()
        self.assertEqual((dto.page, dto.page_size), (1, 10))
        for params in ({"page": 0}, {"page_size": 0}, {"page_size": 101}):
            with self.subTest(params=params), self.assertRaises(ValidationError):
                PaginationParamsDTO(**params)

    def test_ranking_limit_bounds(self) -> None:
        self.assertEqual(RankingParamsDTO().limit, 10)
        for limit in (0, 51):
            with self.subTest(limit=limit), self.assertRaises(ValidationError):
                RankingParamsDTO(limit=limit)


class ProfessionalProfileSchemaTests(SimpleTestCase):
    def test_create_requires_city_and_mode(self) -> None:
        with self.assertRaises(ValidationError):
            CreateProfessionalProfileDTO(city="São Paulo")
        with self.assertRaises(ValidationError):
            CreateProfessionalProfileDTO(city="S", service_mode="BOTH")
        dto = CreateProfessionalProfileDTO(city="  Recife ", service_mode="AT_DOMICILE", specialties=[" Unhas "])
        self.assertEqual((dto.city, dto.specialties), ("Recife", ["Unhas"]))

    def test_update_requires_some_field(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            UpdateProfessionalProfileDTO()
        self.assertIn("Informe ao menos um campo para atualizar", " ".join(_messages(ctx.exception)))
        self.assertEqual(UpdateProfessionalProfileDTO(bio=None).model_fields_set, {"bio"})

    def test_experience_and_list_limits(self) -> None:
        for payload in (
            {"years_of_experience": -1},
            {"years_of_experience": 71},
            {"specialties": ["x"]},
            {"languages": [f"idioma {i}" for i in range(11)]},
        ):
            with self.subTest(payload=payload), self.assertRaises(ValidationError):
                UpdateProfessionalProfileDTO(**payload)

    def test_time_slot_format_and_order(self) -> None:
        self.assertEqual(TimeSlotDTO(start="09:00", end="18:30").end, "18:30")
        for start, end in (("9:00", "18:00"), ("24:00", "25:00"), ("18:00", "09:00"), ("10:00", "10:00")):
            with self.subTest(start=start, end=end), self.assertRaises(ValidationError):
                TimeSlotDTO(start=start, end=end)

    def test_working_hours_keys_are_weekdays(self) -> None:
        dto = UpdateWorkingHoursDTO(
            working_hours={"MONDAY": {"is_open": True, "slots": [{"start": "09:00", "end": "12:00"}]}}
        )
        self.assertEqual(dto.working_hours["MONDAY"].slots[0].start, "09:00")
        with self.assertRaises(ValidationError):
            UpdateWorkingHoursDTO(working_hours={"HOLIDAY": {"is_open": False}})

    def test_portfolio_size(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            UpdatePortfolioDTO(portfolio_images=[])
        self.assertIn("Pelo menos uma imagem é necessária", " ".join(_messages(ctx.exception)))
        with self.assertRaises(ValidationError):
            UpdatePortfolioDTO(portfolio_images=[f"https://img.example.com/{i}.jpg" for i in range(21)])
        with self.assertRaises(ValidationError):
            UpdatePortfolioDTO(portfolio_images=["nao-e-url"])

    def test_search_needs_two_characters(self) -> None:
        with self.assertRaises(ValidationError):
            SearchProfilesDTO(query=" a ")
        self.assertEqual(SearchProfilesDTO(query=" tr ").query, "tr")


class ServiceSchemaTests(SimpleTestCase):
    def _payload(self, **overrides):
        data = {"category_id": uuid.uuid4(), "name": "Manicure", "price": "45.9", "duration_minutes": 60}
        data.update(overrides)
        return data

    def test_price_is_rounded_to_cents(self) -> None:
        dto = CreateServiceDTO(**self._payload())
        self.assertEqual(dto.price, Decimal("45.90"))
        self.assertEqual(dto.price_type, "FIXED")

    def test_price_and_duration_bounds(self) -> None:
        cases = {
            "price": ("0", "-10", "1000000"),
            "duration_minutes": (10, 481),
            "name": ("   ",),
        }
        for field, values in cases.items():
            for value in values:
                with self.subTest(field=field, value=value), self.assertRaises(ValidationError):
                    CreateServiceDTO(**self._payload(**{field: value}))

    def test_update_requires_some_field(self) -> None:
        with self.assertRaises(ValidationError):
            UpdateServiceDTO()
        self.assertEqual(UpdateServiceDTO(duration_minutes=90).duration_minutes, 90)

    def test_filter_price_range(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            ServiceFilterDTO(min_price="100", max_price="50")
        self.assertIn("Preço mínimo não pode ser maior que o máximo", " ".join(_messages(ctx.exception)))
        self.assertEqual(ServiceFilterDTO(min_price="10").sort_by, "created_at")

    def test_category_slug_is_derived_from_name(self) -> None:
        self.assertEqual(CreateCategoryDTO(name="Maquiagem Artística").slug, "maquiagem-artistica")
        self.assertEqual(CreateCategoryDTO(name="Unhas", slug="unhas-gel").slug, "unhas-gel")
        for payload in ({"name": "X"}, {"name": "Cabelo", "slug": "Com Espaço"}):
            with self.subTest(payload=payload), self.assertRaises(ValidationError):
                CreateCategoryDTO(**payload)

    def test_category_update_requires_name_or_slug(self) -> None:
        with self.assertRaises(ValidationError):
            UpdateCategoryDTO()
        self.assertEqual(UpdateCategoryDTO(slug="cabelo").slug, "cabelo")
