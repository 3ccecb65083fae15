"""
Three-step registration wizard.

Step 0 collects identity fields, step 1 the financial profile, step 2 the guarantee.
Navigation between steps is never gated on validity; only submit() checks the rules,
and it checks all of them.
"""
from __future__ import annotations

import logging
from typing import Optional

from config import settings
from schemas.application import ApplicationCreate
from schemas.validation import (
    GUARANTEE_FIELDS,
    IDENTITY_FIELDS,
    PROFILE_FIELDS,
    PUBLIC_SCHEMA,
    UnknownFieldError,
    ValidationSchema,
)
from services.api_client import ApiError, CadastroApiClient
from services.notifications import Notifications
from utils.masks import mask_field

logger = logging.getLogger(__name__)

STEP_TITLES = ("Informações Gerais", "Análise de Perfil", "Análise de Garantia")
STEP_FIELDS = (IDENTITY_FIELDS, PROFILE_FIELDS, GUARANTEE_FIELDS)
LAST_STEP = len(STEP_TITLES) - 1

CONFIRMATION_WARNING = (
    "Atenção: Caso não conclua o registro após apertar Concluir, "
    "volte as etapas e verifique se está tudo certo!"
)


class WizardController:
    def __init__(
        self,
        api: CadastroApiClient,
        *,
        schema: ValidationSchema = PUBLIC_SCHEMA,
        listing_path: Optional[str] = None,
    ):
        self.api = api
        self.schema = schema
        self.listing_path = listing_path or settings.public_listing_path
        self.notifications = Notifications()
        self._clear()

    def _clear(self) -> None:
        self.step = 0
        self.values: dict[str, str] = {f: "" for f in self.schema.fields}
        self.errors: dict[str, str] = {}
        self.loading = False
        self.completed = False
        self.redirect_to: Optional[str] = None

    @property
    def step_title(self) -> str:
        return STEP_TITLES[self.step]

    @property
    def step_fields(self) -> tuple[str, ...]:
        return STEP_FIELDS[self.step]

    @property
    def warning(self) -> Optional[str]:
        """Shown only alongside the final submit button."""
        return CONFIRMATION_WARNING if self.step == LAST_STEP else None

    @property
    def submit_disabled(self) -> bool:
        return self.loading or self.completed

    def set_field(self, field: str, value: Optional[str]) -> Optional[str]:
        """Store a typed value (masked when the field has a mask) and validate it."""
        if field not in self.values:
            raise UnknownFieldError(field)
        masked = mask_field(field, value or "")
        self.values[field] = masked
        message = self.schema.validate_field(field, masked)
        if message:
            self.errors[field] = message
        else:
            self.errors.pop(field, None)
        return message

    def advance(self) -> int:
        if self.step < LAST_STEP:
            self.step += 1
        return self.step

    def retreat(self) -> int:
        if self.step > 0:
            self.step -= 1
        return self.step

    async def submit(self) -> bool:
        """
        Register the application. Returns True once the upstream accepted it.
        Blocked (no request issued) while any field is invalid, while a request is
        outstanding, or after a successful submission.
        """
        if self.submit_disabled:
            logger.debug("Submit ignored: loading=%s completed=%s", self.loading, self.completed)
            return False
        self.errors = self.schema.validate(self.values)
        if self.errors:
            logger.debug("Submit blocked by invalid fields: %s", sorted(self.errors))
            return False

        self.loading = True
        try:
            payload = ApplicationCreate.model_validate(self.values).to_wire()
            message = await self.api.register(payload)
        except ApiError as e:
            self.notifications.error(e.message)
            return False
        finally:
            self.loading = False

        self.completed = True
        self.notifications.success(message)
        self.redirect_to = self.listing_path
        return True

    def reset(self) -> None:
        """Start a fresh registration, e.g. after a completed one."""
        self._clear()
