"""
Admin review of one stored application: load, read-only/edit toggle, save, delete,
and classification of the attached documents for display.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Literal, Optional
from urllib.parse import urlsplit

from config import settings
from schemas.application import ApplicationRecord, ApplicationUpdate
from schemas.validation import ADMIN_SCHEMA, UnknownFieldError, ValidationSchema
from services.api_client import ApiError, CadastroApiClient, Credentials
from services.notifications import Notifications
from utils.masks import mask_field

logger = logging.getLogger(__name__)

DOCUMENT_SLOTS = (
    ("identidade", "Identidade"),
    ("comprovante_renda", "Comprovante de Renda"),
    ("residencia", "Comprovante de Residência"),
)

_PDF_RE = re.compile(r"pdf", re.IGNORECASE)

DocumentKind = Literal["pdf", "image", "missing"]


def looks_like_pdf(url: str) -> bool:
    """
    Decide by the file extension of the URL path when there is one;
    extensionless URLs fall back to a 'pdf' keyword match anywhere in the URL.
    """
    if not url:
        return False
    suffix = PurePosixPath(urlsplit(url).path).suffix
    if suffix:
        return suffix.lower() == ".pdf"
    return bool(_PDF_RE.search(url))


@dataclass(frozen=True)
class DocumentView:
    slot: str
    label: str
    url: Optional[str]
    kind: DocumentKind


class RecordNotLoaded(RuntimeError):
    pass


class RecordEditController:
    def __init__(
        self,
        api: CadastroApiClient,
        *,
        schema: ValidationSchema = ADMIN_SCHEMA,
        listing_path: Optional[str] = None,
    ):
        self.api = api
        self.schema = schema
        self.listing_path = listing_path or settings.admin_listing_path
        self.notifications = Notifications()
        self.record: Optional[ApplicationRecord] = None
        self.edit_mode = True
        self.deleting = False
        self.saving = False
        self.errors: dict[str, str] = {}
        self.load_error: Optional[str] = None
        self.load_status: Optional[int] = None
        self.redirect_to: Optional[str] = None

    async def load(self, record_id: str, credentials: Credentials) -> Optional[ApplicationRecord]:
        """Fetch the record. On failure the record stays None and the error is surfaced."""
        try:
            self.record = await self.api.find_record(record_id, credentials)
        except ApiError as e:
            logger.error("Could not load application %s: %s", record_id, e.message)
            self.record = None
            self.load_error = e.message
            self.load_status = e.status_code
            self.notifications.error(e.message)
            return None
        self.load_error = None
        self.load_status = None
        self.edit_mode = True
        return self.record

    def toggle_edit(self, on: Optional[bool] = None) -> bool:
        self.edit_mode = (not self.edit_mode) if on is None else on
        return self.edit_mode

    def placeholders(self) -> dict[str, str]:
        """Current values shown as placeholders in the edit form."""
        return self._require_record().to_wire()

    async def save(self, values: dict[str, str], credentials: Credentials) -> bool:
        """
        Persist edits through the update endpoint.
        Blank values keep the current ones; the merged field set must pass the admin rules.
        """
        record = self._require_record()
        if self.saving:
            return False
        merged = record.to_wire()
        for field, value in values.items():
            if field not in merged:
                raise UnknownFieldError(field)
            if value and value.strip():
                merged[field] = mask_field(field, value.strip())

        self.errors = self.schema.validate(merged)
        if self.errors:
            return False

        self.saving = True
        payload = ApplicationUpdate.model_validate(merged).to_wire()
        try:
            message = await self.api.update_record(record.id, payload, credentials)
        except ApiError as e:
            self.notifications.error(e.message)
            return False
        finally:
            self.saving = False

        self.record = record.with_fields(payload)
        self.edit_mode = False
        self.notifications.success(message)
        return True

    async def delete(self, record_id: str, credentials: Credentials) -> bool:
        if self.deleting:
            return False
        self.deleting = True
        try:
            message = await self.api.delete_record(record_id, credentials)
        except ApiError as e:
            logger.error("Could not delete application %s: %s", record_id, e.message)
            self.notifications.error(e.message)
            return False
        finally:
            self.deleting = False
        self.notifications.success(message)
        self.redirect_to = self.listing_path
        return True

    def documents(self) -> list[DocumentView]:
        record = self._require_record()
        views = []
        for slot, label in DOCUMENT_SLOTS:
            doc = record.first_document(slot)
            if doc is None or not doc.url:
                views.append(DocumentView(slot, label, None, "missing"))
            elif looks_like_pdf(doc.url):
                views.append(DocumentView(slot, label, doc.url, "pdf"))
            else:
                views.append(DocumentView(slot, label, doc.url, "image"))
        return views

    def _require_record(self) -> ApplicationRecord:
        if self.record is None:
            raise RecordNotLoaded("No application loaded")
        return self.record
