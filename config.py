from typing import Optional

from pydantic import PrivateAttr
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Cadastro Intake API"
    debug: bool = False
    log_level: str = "INFO"

    # Upstream cadastros API (the only backend this service talks to)
    api_base_url: str = "http://localhost:3000"
    request_timeout: Optional[float] = None

    cors_origins: str = "http://localhost:5173,http://127.0.0.1:5173"

    # In-memory wizard sessions: idle expiry and hard cap
    wizard_session_ttl_seconds: float = 60 * 60
    wizard_session_max: int = 1000

    public_listing_path: str = "/"
    admin_listing_path: str = "/admin/cadastros"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    _api_root: str = PrivateAttr(default="")

    def model_post_init(self, __context: object) -> None:
        object.__setattr__(self, "_api_root", self.api_base_url.rstrip("/"))

    @property
    def api_root(self) -> str:
        return self._api_root

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
