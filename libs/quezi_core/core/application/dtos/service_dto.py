import uuid
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from quezi_core.core.application.dtos.validators import validate_slug
from quezi_core.core.utils.formatters import BrazilianFormatter

PriceType = Literal["FIXED", "HOURLY", "DAILY", "NEGOTIABLE"]

MAX_PRICE = Decimal("999999.99")
MIN_DURATION, MAX_DURATION = 15, 480
CATEGORY_SLUG_MIN, CATEGORY_SLUG_MAX = 2, 50


def _check_name(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError("Nome do serviço é obrigatório")
    return value


def _check_price(value: Decimal | None) -> Decimal | None:
    if value is None:
        return None
    if value <= 0:
        raise ValueError("Preço deve ser um valor positivo")
    if value > MAX_PRICE:
        raise ValueError("Preço muito alto")
    return value.quantize(Decimal("0.01"))


def _check_duration(value: int | None) -> int | None:
    if value is None:
        return None
    if value < MIN_DURATION:
        raise ValueError("Duração mínima é de 15 minutos")
    if value > MAX_DURATION:
        raise ValueError("Duração máxima é de 8 horas")
    return value


# ——— SERVIÇOS ——————————————————————————————————————————————

class CreateServiceDTO(BaseModel):
    category_id: uuid.UUID
    name: str = Field(max_length=100)
    description: str | None = Field(default=None, max_length=500)
    price: Decimal
    price_type: PriceType = "FIXED"
    duration_minutes: int

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return _check_name(v)

    @field_validator("price")
    @classmethod
    def check_price(cls, v):
        return _check_price(v)

    @field_validator("duration_minutes")
    @classmethod
    def check_duration(cls, v):
        return _check_duration(v)


class UpdateServiceDTO(BaseModel):
    category_id: uuid.UUID | None = None
    name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    price: Decimal | None = None
    price_type: PriceType | None = None
    duration_minutes: int | None = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return _check_name(v)

    @field_validator("price")
    @classmethod
    def check_price(cls, v):
        return _check_price(v)

    @field_validator("duration_minutes")
    @classmethod
    def check_duration(cls, v):
        return _check_duration(v)

    @model_validator(mode="after")
    def not_empty(self):
        if not self.model_fields_set:
            raise ValueError("Informe ao menos um campo para atualizar")
        return self


class ServiceFilterDTO(BaseModel):
    category_id: uuid.UUID | None = None
    professional_id: uuid.UUID | None = None
    price_type: PriceType | None = None
    min_price: Decimal | None = Field(default=None, gt=0)
    max_price: Decimal | None = Field(default=None, gt=0)
    search: str | None = None
    sort_by: Literal["name", "price", "created_at"] = "created_at"
    sort_order: Literal["asc", "desc"] = "desc"

    @model_validator(mode="after")
    def price_range(self):
        if self.min_price and self.max_price and self.min_price > self.max_price:
            raise ValueError("Preço mínimo não pode ser maior que o máximo")
        return self


# ——— CATEGORIAS ————————————————————————————————————————————

def _check_category_name(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError("Nome da categoria é obrigatório")
    return value


class CreateCategoryDTO(BaseModel):
    name: str = Field(max_length=50)
    slug: str

    @model_validator(mode="before")
    @classmethod
    def default_slug(cls, data):
        if isinstance(data, dict) and not data.get("slug") and isinstance(data.get("name"), str):
            data = {**data, "slug": BrazilianFormatter.slugify(data["name"])}
        return data

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return _check_category_name(v)

    @field_validator("slug")
    @classmethod
    def check_slug(cls, v: str) -> str:
        return validate_slug(v, CATEGORY_SLUG_MIN, CATEGORY_SLUG_MAX)


class UpdateCategoryDTO(BaseModel):
    name: str | None = Field(default=None, max_length=50)
    slug: str | None = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return _check_category_name(v)

    @field_validator("slug")
    @classmethod
    def check_slug(cls, v: str | None) -> str | None:
        return None if v is None else validate_slug(v, CATEGORY_SLUG_MIN, CATEGORY_SLUG_MAX)

    @model_validator(mode="after")
    def not_empty(self):
        if self.name is None and self.slug is None:
            raise ValueError("Informe o nome ou o slug")
        return self


class CategoryFilterDTO(BaseModel):
    search: str | None = None
