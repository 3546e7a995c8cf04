"""
Regras de validação compartilhadas pelos DTOs de entrada.

Cada função recebe o valor bruto e devolve o valor normalizado ou levanta
`ValueError` com a mensagem exibida ao usuário.
"""
from __future__ import annotations

import re

import phonenumbers
from phonenumbers import NumberParseException

from quezi_core.core.domain.entities.organization_entity import SLUG_PATTERN

NAME_PATTERN = re.compile(r"^[a-zA-ZÀ-ÿ\s'-]+$")
PHONE_MASK_PATTERN = re.compile(r"^\(\d{2}\) \d{4,5}-\d{4}$")
CPF_PATTERN = re.compile(r"^\d{3}\.\d{3}\.\d{3}-\d{2}$|^\d{11}$")
CEP_PATTERN = re.compile(r"^\d{5}-?\d{3}$")

PASSWORD_MIN_LENGTH = 8
NAME_MIN_LENGTH, NAME_MAX_LENGTH = 3, 100
SLUG_MIN_LENGTH, SLUG_MAX_LENGTH = 3, 60


def validate_password(value: str) -> str:
    if len(value) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Senha deve ter no mínimo {PASSWORD_MIN_LENGTH} caracteres")
    if not re.search(r"[A-Z]", value):
        raise ValueError("Senha deve conter pelo menos uma letra maiúscula")
    if not re.search(r"[a-z]", value):
        raise ValueError("Senha deve conter pelo menos uma letra minúscula")
    if not re.search(r"\d", value):
        raise ValueError("Senha deve conter pelo menos um número")
    return value


def validate_person_name(value: str) -> str:
    value = " ".join(value.split())
    if len(value) < NAME_MIN_LENGTH:
        raise ValueError(f"Nome deve ter no mínimo {NAME_MIN_LENGTH} caracteres")
    if len(value) > NAME_MAX_LENGTH:
        raise ValueError(f"Nome deve ter no máximo {NAME_MAX_LENGTH} caracteres")
    if not NAME_PATTERN.match(value):
        raise ValueError("Nome deve conter apenas letras")
    return value


def normalize_phone(value: str | None) -> str | None:
    """
    Aceita "(11) 98765-4321" ou só dígitos e devolve DDD + número
    ("11987654321"). Vazio vira None.
    """
    if value is None or not value.strip():
        return None
    raw = value.strip()
    digits = re.sub(r"\D", "", raw)
    if not PHONE_MASK_PATTERN.match(raw) and len(digits) not in (10, 11, 12, 13):
        raise ValueError("Telefone deve estar no formato (99) 99999-9999")
    try:
        number = phonenumbers.parse(raw, "BR")
    except NumberParseException:
        raise ValueError("Telefone inválido") from None
    if not phonenumbers.is_possible_number(number):
        raise ValueError("Telefone inválido")
    return phonenumbers.national_significant_number(number)


def validate_slug(value: str, min_length: int = SLUG_MIN_LENGTH, max_length: int = SLUG_MAX_LENGTH) -> str:
    value = value.strip()
    if len(value) < min_length:
        raise ValueError(f"Slug deve ter no mínimo {min_length} caracteres")
    if len(value) > max_length:
        raise ValueError(f"Slug deve ter no máximo {max_length} caracteres")
    if not SLUG_PATTERN.match(value):
        raise ValueError("Slug deve conter apenas letras minúsculas, números e hífens")
    return value


def validate_cpf(value: str) -> str:
    """Valida formato e dígitos verificadores; devolve só os dígitos."""
    if not CPF_PATTERN.match(value):
        raise ValueError("CPF deve estar no formato 999.999.999-99")
    digits = re.sub(r"\D", "", value)
    if digits == digits[0] * 11:
        raise ValueError("CPF inválido")
    for size in (9, 10):
        total = sum(int(d) * w for d, w in zip(digits[:size], range(size + 1, 1, -1), strict=True))
        check = (total * 10 % 11) % 10
        if check != int(digits[size]):
            raise ValueError("CPF inválido")
    return digits


def validate_cep(value: str) -> str:
    if not CEP_PATTERN.match(value):
        raise ValueError("CEP deve estar no formato 99999-999")
    return re.sub(r"\D", "", value)
