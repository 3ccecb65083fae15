from schemas.application import (
    FIELD_OPTIONS,
    ApplicationCreate,
    ApplicationEdit,
    ApplicationRecord,
    ApplicationUpdate,
    DocumentFile,
    DocumentSet,
    GuaranteeType,
    IncomeBracket,
    LoanPurpose,
    Occupation,
)
from schemas.validation import (
    ADMIN_SCHEMA,
    FIELD_NAMES,
    PUBLIC_SCHEMA,
    SchemaVariant,
    UnknownFieldError,
    ValidationSchema,
    schema_for,
)

__all__ = [
    "ADMIN_SCHEMA",
    "ApplicationCreate",
    "ApplicationEdit",
    "ApplicationRecord",
    "ApplicationUpdate",
    "DocumentFile",
    "DocumentSet",
    "FIELD_NAMES",
    "FIELD_OPTIONS",
    "GuaranteeType",
    "IncomeBracket",
    "LoanPurpose",
    "Occupation",
    "PUBLIC_SCHEMA",
    "SchemaVariant",
    "UnknownFieldError",
    "ValidationSchema",
    "schema_for",
]
