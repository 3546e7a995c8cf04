import re
from typing import Literal

from pydantic import BaseModel, Field, HttpUrl, field_validator, model_validator

ServiceMode = Literal["AT_LOCATION", "AT_DOMICILE", "BOTH"]
DayOfWeek = Literal["MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", "SATURDAY", "SUNDAY"]

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
BIO_MAX_LENGTH = 1000
PORTFOLIO_MAX_IMAGES = 20
MAX_YEARS_OF_EXPERIENCE = 70


def _check_time(value: str) -> str:
    if not isinstance(value, str) or not TIME_PATTERN.match(value):
        raise ValueError("Horário deve estar no formato HH:MM (ex: 09:00)")
    return value


def _text_list(values: list[str] | None, *, min_length: int, max_items: int, short: str, many: str):
    if values is None:
        return None
    cleaned = [v.strip() for v in values]
    if any(len(v) < min_length for v in cleaned):
        raise ValueError(short)
    if len(cleaned) > max_items:
        raise ValueError(many)
    return cleaned


def _check_city(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if len(value) < 2:
        raise ValueError("Cidade deve ter pelo menos 2 caracteres")
    return value


def _check_experience(value: int | None) -> int | None:
    if value is None:
        return None
    if value < 0:
        raise ValueError("Anos de experiência não pode ser negativo")
    if value > MAX_YEARS_OF_EXPERIENCE:
        raise ValueError("Anos de experiência muito alto")
    return value


# ——— HORÁRIOS ——————————————————————————————————————————————

class TimeSlotDTO(BaseModel):
    start: str
    end: str

    @field_validator("start", "end", mode="before")
    @classmethod
    def check_format(cls, v):
        return _check_time(v)

    @model_validator(mode="after")
    def start_before_end(self):
        # HH:MM ordena igual em texto e em tempo
        if self.start >= self.end:
            raise ValueError("Horário inicial deve ser anterior ao final")
        return self


class DayScheduleDTO(BaseModel):
    is_open: bool
    slots: list[TimeSlotDTO] = Field(default_factory=list)


class UpdateWorkingHoursDTO(BaseModel):
    working_hours: dict[DayOfWeek, DayScheduleDTO]


# ——— PERFIL ————————————————————————————————————————————————

class _ProfileFields(BaseModel):
    bio: str | None = Field(default=None, max_length=BIO_MAX_LENGTH)
    address: str | None = Field(default=None, max_length=255)
    photo_url: HttpUrl | None = None
    portfolio_images: list[HttpUrl] | None = Field(default=None, max_length=PORTFOLIO_MAX_IMAGES)
    working_hours: dict[DayOfWeek, DayScheduleDTO] | None = None
    years_of_experience: int | None = None
    specialties: list[str] | None = None
    certifications: list[str] | None = None
    languages: list[str] | None = None

    @field_validator("years_of_experience")
    @classmethod
    def check_experience(cls, v):
        return _check_experience(v)

    @field_validator("specialties")
    @classmethod
    def check_specialties(cls, v):
        return _text_list(v, min_length=2, max_items=20,
                          short="Especialidade muito curta", many="Máximo de 20 especialidades")

    @field_validator("certifications")
    @classmethod
    def check_certifications(cls, v):
        return _text_list(v, min_length=3, max_items=15,
                          short="Certificação muito curta", many="Máximo de 15 certificações")

    @field_validator("languages")
    @classmethod
    def check_languages(cls, v):
        return _text_list(v, min_length=2, max_items=10,
                          short="Idioma muito curto", many="Máximo de 10 idiomas")


class CreateProfessionalProfileDTO(_ProfileFields):
    city: str
    service_mode: ServiceMode

    @field_validator("city")
    @classmethod
    def check_city(cls, v):
        return _check_city(v)


class UpdateProfessionalProfileDTO(_ProfileFields):
    city: str | None = None
    service_mode: ServiceMode | None = None

    @field_validator("city")
    @classmethod
    def check_city(cls, v):
        return _check_city(v)

    @model_validator(mode="after")
    def not_empty(self):
        if not self.model_fields_set:
            raise ValueError("Informe ao menos um campo para atualizar")
        return self


class UpdatePortfolioDTO(BaseModel):
    portfolio_images: list[HttpUrl]

    @field_validator("portfolio_images")
    @classmethod
    def check_size(cls, v):
        if not v:
            raise ValueError("Pelo menos uma imagem é necessária")
        if len(v) > PORTFOLIO_MAX_IMAGES:
            raise ValueError(f"Máximo de {PORTFOLIO_MAX_IMAGES} imagens no portfólio")
        return v


class ToggleActiveDTO(BaseModel):
    is_active: bool


# ——— CONSULTAS —————————————————————————————————————————————

class ProfileFilterDTO(BaseModel):
    city: str | None = None
    service_mode: ServiceMode | None = None
    min_rating: float | None = Field(default=None, ge=0, le=5)
    specialty: str | None = None
    is_verified: bool | None = None
    sort_by: Literal["rating", "experience", "reviews", "created_at"] = "rating"
    sort_order: Literal["asc", "desc"] = "desc"


class SearchProfilesDTO(BaseModel):
    query: str
    city: str | None = None
    service_mode: ServiceMode | None = None

    @field_validator("query")
    @classmethod
    def check_query(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Busca deve ter pelo menos 2 caracteres")
        return v
