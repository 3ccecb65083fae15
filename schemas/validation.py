"""
Field rules for loan applications.

One rule table serves both the public registration wizard and the admin edit form;
the only difference between the two is the character set accepted for names.
Each rule answers validate(value) with None (ok) or a user-facing message. A field's
rules run in order and the first violation is reported.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

REQUIRED_MSG = "Este campo é obrigatório"
NAME_TOO_SHORT_MSG = "Este campo deve conter pelo menos 3 caracteres."
NAME_TOO_LONG_MSG = "Você excedeu o limite de caracteres, abrevie o nome caso seja grande."
NAME_CHARS_MSG = "Não é permitido caracteres especiais e números."
EMAIL_MSG = "Insira um email válido!"
EMAIL_LENGTH_MSG = "O email deve conter entre 4 e 100 caracteres."
PHONE_MSG = "Insira um número válido!"
CPF_MSG = "Insira um CPF válido!"
DATE_LENGTH_MSG = "Insira uma data válida!"
DATE_MSG = "Data inválida ou menor de 18 anos"
CEP_MSG = "Insira um CEP válido!"

# Birth years accepted; the upper bound is the age-18 cutoff.
MIN_BIRTH_YEAR = 1900
MAX_BIRTH_YEAR = 2007

PUBLIC_NAME_RE = re.compile(r"[a-zA-Z\s]*")
ADMIN_NAME_RE = re.compile(r"[a-zA-Z\s.áéíóúâêîôûãõçÁÉÍÓÚÂÊÎÔÛÃÕÇàèìòùÀÈÌÒÙ]*")
EMAIL_RE = re.compile(
    r"(?!\.)(?!.*\.\.)[A-Z0-9_'+\-.]*[A-Z0-9_+-]@([A-Z0-9][A-Z0-9\-]*\.)+[A-Z]{2,}",
    re.IGNORECASE,
)
DATE_RE = re.compile(r"([0-9]{2})/([0-9]{2})/([0-9]{4})")
# Shapes produced by the input masks; ASCII digits only.
PHONE_RE = re.compile(r"\([0-9]{2}\) [0-9]{5}-[0-9]{4}")
CPF_RE = re.compile(r"[0-9]{3}\.[0-9]{3}\.[0-9]{3}-[0-9]{2}")
CEP_RE = re.compile(r"[0-9]{5}-[0-9]{3}")

IDENTITY_FIELDS = ("nome", "email", "telefone", "cpf", "nascimento", "cep")
PROFILE_FIELDS = ("renda", "ocupacao", "motivo")
GUARANTEE_FIELDS = ("garantia",)
FIELD_NAMES = IDENTITY_FIELDS + PROFILE_FIELDS + GUARANTEE_FIELDS


class SchemaVariant(str, Enum):
    PUBLIC = "public"
    ADMIN = "admin"


class UnknownFieldError(KeyError):
    """Raised when a value is addressed to a field the schema does not know."""

    def __init__(self, field: str):
        super().__init__(field)
        self.field = field

    def __str__(self) -> str:
        return f"Unknown field: {self.field}"


class Rule:
    message: str

    def validate(self, value: str) -> Optional[str]:
        raise NotImplementedError


@dataclass(frozen=True)
class Required(Rule):
    message: str = REQUIRED_MSG

    def validate(self, value: str) -> Optional[str]:
        return None if value else self.message


@dataclass(frozen=True)
class MinLength(Rule):
    length: int
    message: str

    def validate(self, value: str) -> Optional[str]:
        return None if len(value) >= self.length else self.message


@dataclass(frozen=True)
class MaxLength(Rule):
    length: int
    message: str

    def validate(self, value: str) -> Optional[str]:
        return None if len(value) <= self.length else self.message


@dataclass(frozen=True)
class Pattern(Rule):
    pattern: re.Pattern
    message: str

    def validate(self, value: str) -> Optional[str]:
        return None if self.pattern.fullmatch(value) else self.message


@dataclass(frozen=True)
class CalendarDate(Rule):
    """DD/MM/YYYY that exists on the calendar and falls within [min_year, max_year]."""

    min_year: int
    max_year: int
    message: str = DATE_MSG

    def validate(self, value: str) -> Optional[str]:
        m = DATE_RE.fullmatch(value)
        if not m:
            return self.message
        day, month, year = (int(g) for g in m.groups())
        if not self.min_year <= year <= self.max_year:
            return self.message
        try:
            date(year, month, day)
        except ValueError:
            return self.message
        return None


def build_rules(variant: SchemaVariant) -> dict[str, tuple[Rule, ...]]:
    name_re = ADMIN_NAME_RE if variant == SchemaVariant.ADMIN else PUBLIC_NAME_RE
    return {
        "nome": (
            Required(),
            MinLength(3, NAME_TOO_SHORT_MSG),
            MaxLength(50, NAME_TOO_LONG_MSG),
            Pattern(name_re, NAME_CHARS_MSG),
        ),
        "email": (
            Required(),
            Pattern(EMAIL_RE, EMAIL_MSG),
            MinLength(4, EMAIL_LENGTH_MSG),
            MaxLength(100, EMAIL_LENGTH_MSG),
        ),
        "telefone": (Required(), MinLength(15, PHONE_MSG), Pattern(PHONE_RE, PHONE_MSG)),
        "cpf": (MinLength(14, CPF_MSG), Pattern(CPF_RE, CPF_MSG)),
        "nascimento": (
            Required(),
            MinLength(10, DATE_LENGTH_MSG),
            CalendarDate(MIN_BIRTH_YEAR, MAX_BIRTH_YEAR),
        ),
        "cep": (Required(), MinLength(9, CEP_MSG), Pattern(CEP_RE, CEP_MSG)),
        "renda": (Required(),),
        "ocupacao": (Required(),),
        "motivo": (Required(),),
        "garantia": (Required(),),
    }


class ValidationSchema:
    def __init__(self, variant: SchemaVariant = SchemaVariant.PUBLIC):
        self.variant = variant
        self.rules = build_rules(variant)

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(self.rules)

    def validate_field(self, field: str, value: Any) -> Optional[str]:
        """Return the first violated rule's message for one field, or None."""
        rules = self.rules.get(field)
        if rules is None:
            raise UnknownFieldError(field)
        text = "" if value is None else str(value)
        for rule in rules:
            message = rule.validate(text)
            if message:
                return message
        return None

    def validate(self, values: Mapping[str, Any], fields: Iterable[str] | None = None) -> dict[str, str]:
        """Validate every field (or the given subset); missing values count as empty."""
        errors: dict[str, str] = {}
        for field in fields if fields is not None else self.fields:
            message = self.validate_field(field, values.get(field))
            if message:
                errors[field] = message
        return errors

    def is_valid(self, values: Mapping[str, Any]) -> bool:
        return not self.validate(values)


PUBLIC_SCHEMA = ValidationSchema(SchemaVariant.PUBLIC)
ADMIN_SCHEMA = ValidationSchema(SchemaVariant.ADMIN)


def schema_for(variant: SchemaVariant) -> ValidationSchema:
    return ADMIN_SCHEMA if variant == SchemaVariant.ADMIN else PUBLIC_SCHEMA
