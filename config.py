# file: config.py
from __future__ import annotations

import json
from typing import List, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Aceita lista separada por vírgulas, array JSON, lista ou vazio
    ALLOWED_ORIGINS: Union[str, List[str], None] = None
    ALLOWED_ORIGIN_REGEX: Optional[str] = None

    PERSIST_BACKEND: str = "memory"  # memory|redis
    REDIS_URL: Optional[str] = None
    SESSION_TTL_SECONDS: int = 1800

    SERVICE_TIMEOUT_SEC: float = 10.0
    MAX_MESSAGE_CHARS: int = 2000

    TICKET_API_URL: Optional[str] = None

    AI_BACKEND: str = "simulated"  # simulated|openai
    OPENAI_MODEL: str = "gpt-4.1-mini"

    # Ignora variáveis extras (OPENAI_API_KEY, SERVICE_BEARER_TOKEN etc.)
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def _parse_origins(cls, v):
        if v is None or v == "":
            return []
        if isinstance(v, list):
            return v
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("[") and s.endswith("]"):
                try:
                    parsed = json.loads(s)
                    if isinstance(parsed, list):
                        return [str(x).strip() for x in parsed if str(x).strip()]
                except ValueError:
                    pass
            return [s2.strip() for s2 in s.split(",") if s2.strip()]
        return v
