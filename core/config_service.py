from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from exchanges.clevercoin.http_client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, CleverHttpClient


class ApiKeys(BaseModel):
    api_key: str = ""
    api_secret: str = ""

    def masked(self) -> "ApiKeys":
        def _mask(value: str) -> str:
            return value[:3] + "***" if value else ""

        return ApiKeys(api_key=_mask(self.api_key), api_secret=_mask(self.api_secret))


class AppSettings(BaseModel):
    log_level: str = "INFO"
    log_path: str = "logs/app.log"


class ClientSettings(BaseModel):
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = Field(DEFAULT_TIMEOUT, gt=0)
    verify_certificate: bool = Field(True, description="disable only against test servers")


class Config(BaseModel):
    app: AppSettings = AppSettings()
    api_keys: ApiKeys = ApiKeys()
    client: ClientSettings = ClientSettings()


class ConfigService:
    def __init__(self, default_path: Path = Path("config/config.yaml")) -> None:
        self.default_path = default_path
        self.config = Config()
        self.last_loaded: Optional[Path] = None

    def has_required_keys(self) -> bool:
        keys = self.config.api_keys
        return bool(keys.api_key and keys.api_secret)

    def load(self, path: Optional[Path] = None) -> Config:
        path = path or self.default_path
        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")

        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}

        try:
            self.config = Config(**data)
            self.last_loaded = path
            return self.config
        except ValidationError as exc:
            raise ValueError(f"Config validation error: {exc}") from exc

    def save(self, path: Optional[Path] = None) -> Path:
        path = path or self.default_path
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fh:
            yaml.safe_dump(self.config.model_dump(), fh, allow_unicode=True)
        self.last_loaded = path
        return path

    def build_client(self, logger=None) -> CleverHttpClient:
        cfg = self.config
        return CleverHttpClient(
            cfg.api_keys.api_key,
            cfg.api_keys.api_secret,
            base_url=cfg.client.base_url,
            timeout=cfg.client.timeout_seconds,
            verify_certificate=cfg.client.verify_certificate,
            logger=logger,
        )
