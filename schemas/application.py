from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from schemas.validation import FIELD_NAMES, SchemaVariant, schema_for


class IncomeBracket(str, Enum):
    UNDER_1K = "Menos de R$1.000"
    FROM_1K = "Entre R$1.000 e R$2.000"
    FROM_2_5K = "Entre R$2.500 e R$4.000"
    FROM_4_5K = "Entre R$4.500 e R$7.000"
    FROM_7_5K = "Entre R$7.500 e R$12.000"
    FROM_12_5K = "Entre R$12.500 e R$20.000"
    FROM_20_5K = "Entre R$20.500 e R$40.000+"


class Occupation(str, Enum):
    SALARIED = "Assalariado(a) (CLT)"
    SELF_EMPLOYED = "Autônomo(a)"
    BUSINESS_OWNER = "Empresário(a)"
    CIVIL_SERVANT = "Funcionário(a) Público(a)"
    RETIRED = "Aposentado(a)"
    LIBERAL_PROFESSIONAL = "Profissional Liberal"
    UNEMPLOYED = "Desempregado"


class LoanPurpose(str, Enum):
    PAY_DEBTS = "Pagar dívidas"
    RENOVATE_HOME = "Reformar a Casa"
    INVEST = "Investir"
    FINANCE_VEHICLE = "Financiar meu veículo"
    BUY_GOODS = "Adquirir bens"
    REFINANCE = "Refinanciar dívidas"
    SIMULATING = "Só estou simulando"
    OTHER = "Outro"


class GuaranteeType(str, Enum):
    NONE = "Não"
    REAL_ESTATE = "Ímovel"
    VEHICLE = "Veículo"


# Options offered by the selection controls; the schema only checks non-emptiness.
FIELD_OPTIONS: dict[str, list[str]] = {
    "renda": [e.value for e in IncomeBracket],
    "ocupacao": [e.value for e in Occupation],
    "motivo": [e.value for e in LoanPurpose],
    "garantia": [e.value for e in GuaranteeType],
}


class DocumentFile(BaseModel):
    url: str = ""
    key: str = ""


class DocumentSet(BaseModel):
    identidade: list[DocumentFile] = Field(default_factory=list)
    comprovante_renda: list[DocumentFile] = Field(default_factory=list)
    residencia: list[DocumentFile] = Field(default_factory=list)

    model_config = {"extra": "ignore"}


class ApplicationFieldsBase(BaseModel):
    """The ten user-supplied fields, under their wire names."""

    name: str = Field("", alias="nome")
    email: str = ""
    phone: str = Field("", alias="telefone")
    cpf: str = ""
    birth_date: str = Field("", alias="nascimento")
    postal_code: str = Field("", alias="cep")
    monthly_income: str = Field("", alias="renda")
    occupation: str = Field("", alias="ocupacao")
    loan_purpose: str = Field("", alias="motivo")
    guarantee: str = Field("", alias="garantia")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    def to_wire(self) -> dict[str, str]:
        data = self.model_dump(by_alias=True)
        return {k: data[k] for k in FIELD_NAMES}


class ApplicationCreate(ApplicationFieldsBase):
    """Field set sent to /cadastros/register; every field must pass the public rules."""

    variant: ClassVar[SchemaVariant] = SchemaVariant.PUBLIC

    model_config = {"populate_by_name": True, "extra": "ignore", "validate_default": True}

    @field_validator("*")
    @classmethod
    def _apply_rules(cls, value: Any, info: ValidationInfo) -> Any:
        field = cls.model_fields[info.field_name]
        message = schema_for(cls.variant).validate_field(field.alias or info.field_name, value)
        if message:
            raise ValueError(message)
        return value


class ApplicationUpdate(ApplicationCreate):
    """Field set sent on admin edits; names may carry accents and periods."""

    variant: ClassVar[SchemaVariant] = SchemaVariant.ADMIN


class ApplicationEdit(BaseModel):
    """Admin edit form body. Blank fields keep the record's current value."""

    name: Optional[str] = Field(None, alias="nome")
    email: Optional[str] = None
    phone: Optional[str] = Field(None, alias="telefone")
    cpf: Optional[str] = None
    birth_date: Optional[str] = Field(None, alias="nascimento")
    postal_code: Optional[str] = Field(None, alias="cep")
    monthly_income: Optional[str] = Field(None, alias="renda")
    occupation: Optional[str] = Field(None, alias="ocupacao")
    loan_purpose: Optional[str] = Field(None, alias="motivo")
    guarantee: Optional[str] = Field(None, alias="garantia")

    model_config = {"populate_by_name": True}

    def provided(self) -> dict[str, str]:
        """Wire-named values the admin actually filled in."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        return {k: v for k, v in data.items() if v.strip()}


class ApplicationRecord(ApplicationFieldsBase):
    """A stored application as returned by /cadastros/find_user_unique."""

    id: str = Field(..., alias="_id")
    documents: list[DocumentSet] = Field(default_factory=list, alias="documentos")

    def first_document(self, slot: str) -> Optional[DocumentFile]:
        """Only the first document set and the first file in each slot are used."""
        if not self.documents:
            return None
        files: list[DocumentFile] = getattr(self.documents[0], slot)
        return files[0] if files else None

    def with_fields(self, fields: dict[str, str]) -> "ApplicationRecord":
        data = self.model_dump(by_alias=True)
        data.update(fields)
        return ApplicationRecord.model_validate(data)
