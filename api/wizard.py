from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from deps import get_api_client, get_wizard_sessions
from schemas.validation import UnknownFieldError
from services.api_client import CadastroApiClient
from services.sessions import SessionNotFound, WizardSessionStore
from services.wizard import LAST_STEP, WizardController

router = APIRouter(prefix="/api/wizard", tags=["wizard"])

MSG_SESSION_NOT_FOUND = "Wizard session not found"


def _wizard_to_response(session_id: str, wizard: WizardController) -> dict[str, Any]:
    """Serialize wizard state with camelCase keys for the front end. Drains notifications."""
    return {
        "sessionId": session_id,
        "step": wizard.step,
        "lastStep": LAST_STEP,
        "stepTitle": wizard.step_title,
        "stepFields": list(wizard.step_fields),
        "values": dict(wizard.values),
        "errors": dict(wizard.errors),
        "warning": wizard.warning,
        "loading": wizard.loading,
        "completed": wizard.completed,
        "submitDisabled": wizard.submit_disabled,
        "redirectTo": wizard.redirect_to,
        "notifications": wizard.notifications.drain(),
    }


def _get_wizard(sessions: WizardSessionStore, session_id: str) -> WizardController:
    try:
        return sessions.get(session_id)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail=MSG_SESSION_NOT_FOUND)


@router.post("", status_code=201)
async def create_session(
    api: CadastroApiClient = Depends(get_api_client),
    sessions: WizardSessionStore = Depends(get_wizard_sessions),
):
    session_id, wizard = sessions.create(lambda: WizardController(api))
    return _wizard_to_response(session_id, wizard)


@router.get("/{session_id}")
async def get_session(session_id: str, sessions: WizardSessionStore = Depends(get_wizard_sessions)):
    return _wizard_to_response(session_id, _get_wizard(sessions, session_id))


@router.delete("/{session_id}", status_code=204)
async def discard_session(session_id: str, sessions: WizardSessionStore = Depends(get_wizard_sessions)):
    try:
        sessions.discard(session_id)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail=MSG_SESSION_NOT_FOUND)
    return None


@router.patch("/{session_id}/fields")
async def update_fields(
    session_id: str,
    body: dict[str, str] = Body(..., description="Field values keyed by wire name"),
    sessions: WizardSessionStore = Depends(get_wizard_sessions),
):
    """On-change validation: each given field is masked, stored and re-validated."""
    wizard = _get_wizard(sessions, session_id)
    try:
        for field, value in body.items():
            wizard.set_field(field, value)
    except UnknownFieldError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _wizard_to_response(session_id, wizard)


@router.post("/{session_id}/advance")
async def advance(session_id: str, sessions: WizardSessionStore = Depends(get_wizard_sessions)):
    wizard = _get_wizard(sessions, session_id)
    wizard.advance()
    return _wizard_to_response(session_id, wizard)


@router.post("/{session_id}/retreat")
async def retreat(session_id: str, sessions: WizardSessionStore = Depends(get_wizard_sessions)):
    wizard = _get_wizard(sessions, session_id)
    wizard.retreat()
    return _wizard_to_response(session_id, wizard)


@router.post("/{session_id}/submit")
async def submit(session_id: str, sessions: WizardSessionStore = Depends(get_wizard_sessions)):
    """Outcome is reported in the state: errors, notifications and redirectTo."""
    wizard = _get_wizard(sessions, session_id)
    await wizard.submit()
    return _wizard_to_response(session_id, wizard)


@router.post("/{session_id}/reset")
async def reset(session_id: str, sessions: WizardSessionStore = Depends(get_wizard_sessions)):
    wizard = _get_wizard(sessions, session_id)
    wizard.reset()
    return _wizard_to_response(session_id, wizard)
