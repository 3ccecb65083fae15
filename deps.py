from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from services.api_client import CadastroApiClient, Credentials
from services.sessions import WizardSessionStore, wizard_sessions

bearer_scheme = HTTPBearer(description="Token issued by the cadastros auth service")


def get_api_client(request: Request) -> CadastroApiClient:
    """Shared upstream client opened in the app lifespan."""
    return request.app.state.api_client


def get_wizard_sessions() -> WizardSessionStore:
    return wizard_sessions


def get_credentials(
    auth: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> Credentials:
    """Forward the caller's bearer token to the upstream API."""
    return Credentials(token=auth.credentials)
