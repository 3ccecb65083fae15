from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from deps import get_api_client, get_credentials
from schemas.application import ApplicationEdit
from services.api_client import CadastroApiClient, Credentials
from services.record_edit import RecordEditController

router = APIRouter(prefix="/api/admin/cadastros", tags=["admin"])


def _review_to_response(ctrl: RecordEditController) -> dict[str, Any]:
    """Serialize the review screen; camelCase keys, wire-named record fields."""
    record = ctrl.record
    return {
        "id": record.id if record else None,
        "record": record.to_wire() if record else None,
        "editMode": ctrl.edit_mode,
        "placeholders": ctrl.placeholders() if record and ctrl.edit_mode else None,
        "documents": [
            {"slot": d.slot, "label": d.label, "url": d.url, "kind": d.kind}
            for d in ctrl.documents()
        ] if record else [],
        "errors": dict(ctrl.errors),
        "loadError": ctrl.load_error,
        "redirectTo": ctrl.redirect_to,
        "notifications": ctrl.notifications.drain(),
    }


async def _load(ctrl: RecordEditController, record_id: str, credentials: Credentials) -> None:
    if await ctrl.load(record_id, credentials) is None:
        raise HTTPException(status_code=ctrl.load_status or 502, detail=ctrl.load_error)


@router.get("/{record_id}")
async def review_application(
    record_id: str,
    edit: bool = True,
    api: CadastroApiClient = Depends(get_api_client),
    credentials: Credentials = Depends(get_credentials),
):
    ctrl = RecordEditController(api)
    await _load(ctrl, record_id, credentials)
    ctrl.toggle_edit(edit)
    return _review_to_response(ctrl)


@router.put("/{record_id}")
async def save_application(
    record_id: str,
    body: ApplicationEdit,
    api: CadastroApiClient = Depends(get_api_client),
    credentials: Credentials = Depends(get_credentials),
):
    ctrl = RecordEditController(api)
    await _load(ctrl, record_id, credentials)
    saved = await ctrl.save(body.provided(), credentials)
    return {"ok": saved, **_review_to_response(ctrl)}


@router.delete("/{record_id}")
async def delete_application(
    record_id: str,
    api: CadastroApiClient = Depends(get_api_client),
    credentials: Credentials = Depends(get_credentials),
):
    ctrl = RecordEditController(api)
    deleted = await ctrl.delete(record_id, credentials)
    return {
        "ok": deleted,
        "redirectTo": ctrl.redirect_to,
        "notifications": ctrl.notifications.drain(),
    }
