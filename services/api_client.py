"""
Async client for the upstream cadastros API.

Every authenticated call takes explicit Credentials; the client keeps no token of its own.
All failures (transport errors, non-2xx answers, unreadable bodies) surface as ApiError
carrying the server's `error` message when one was sent.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from config import settings
from schemas.application import ApplicationRecord

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Não foi possível concluir a requisição. Tente novamente."
REGISTER_OK = "Cadastro realizado com sucesso!"
UPDATE_OK = "Cadastro atualizado com sucesso!"
DELETE_OK = "Cadastro deletado com sucesso!"


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass(frozen=True)
class Credentials:
    """Bearer token issued by the external auth service."""

    token: str

    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return GENERIC_ERROR
    if isinstance(data, dict) and isinstance(data.get("error"), str) and data["error"]:
        return data["error"]
    return GENERIC_ERROR


def _success_message(data: Any, default: str) -> str:
    if isinstance(data, dict) and isinstance(data.get("success"), str) and data["success"]:
        return data["success"]
    return default


class CadastroApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.api_root,
            timeout=timeout if timeout is not None else settings.request_timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def register(self, fields: dict[str, str]) -> str:
        """POST /cadastros/register. Returns the server's success message."""
        data = await self._request("POST", "/cadastros/register", json=fields)
        logger.info("Registered new application")
        return _success_message(data, REGISTER_OK)

    async def find_record(self, record_id: str, credentials: Credentials) -> ApplicationRecord:
        data = await self._request(
            "GET",
            "/cadastros/find_user_unique",
            params={"id": record_id},
            credentials=credentials,
        )
        try:
            return ApplicationRecord.model_validate(data)
        except ValidationError as e:
            logger.error("Malformed record %s from upstream: %s", record_id, e)
            raise ApiError(GENERIC_ERROR) from e

    async def update_record(
        self, record_id: str, fields: dict[str, str], credentials: Credentials
    ) -> str:
        data = await self._request(
            "PUT",
            f"/cadastros/update/{quote(record_id, safe='')}",
            json=fields,
            credentials=credentials,
        )
        logger.info("Updated application %s", record_id)
        return _success_message(data, UPDATE_OK)

    async def delete_record(self, record_id: str, credentials: Credentials) -> str:
        data = await self._request(
            "DELETE",
            f"/cadastros/delete/{quote(record_id, safe='')}",
            credentials=credentials,
        )
        logger.info("Deleted application %s", record_id)
        return _success_message(data, DELETE_OK)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        credentials: Optional[Credentials] = None,
        **kwargs: Any,
    ) -> Any:
        headers = credentials.headers() if credentials else None
        logger.debug("%s %s", method, path)
        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiError(GENERIC_ERROR) from e
        if response.is_error:
            message = _error_message(response)
            logger.warning("%s %s -> %s: %s", method, path, response.status_code, message)
            raise ApiError(message, response.status_code)
        try:
            return response.json()
        except ValueError as e:
            raise ApiError(GENERIC_ERROR, response.status_code) from e
