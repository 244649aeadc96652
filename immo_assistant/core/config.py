"""Application settings and configuration helpers."""

from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strongly-typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    app_name: str = Field(default="Immo Locatif Assistant", description="Human-readable service name.")
    environment: str = Field(default="local", description="Deployment environment identifier.")
    log_level: str = Field(default="INFO", description="Application log level.")

    frontend_origin: AnyHttpUrl | None = Field(
        default=None,
        description="Allowed frontend origin (CORS). If omitted, defaults to localhost dev server.",
    )
    additional_origins: List[AnyHttpUrl] = Field(
        default_factory=list,
        description="Additional allowed CORS origins for multi-client deployments.",
    )

    auth_enabled: bool = Field(default=True, description="Reject /chat calls without a valid API key.")
    api_keys: List[str] = Field(
        default_factory=list,
        description="Accepted API keys (X-API-Key header or Bearer token).",
    )

    openrouter_api_key: str | None = Field(
        default=None,
        description="OpenRouter API key used for generative calls.",
    )
    openrouter_base_url: str = Field(
        default="https://openrouter.ai/api/v1",
        description="Base URL of the OpenAI-compatible chat completions API.",
    )
    openrouter_model: str = Field(
        default="mistralai/mistral-small-3.2-24b-instruct",
        description="OpenRouter model identifier.",
    )
    openrouter_referer: str | None = Field(
        default=None,
        description="Referer header required by OpenRouter (your app URL).",
    )
    openrouter_title: str | None = Field(
        default="Immo Locatif Assistant",
        description="Title header sent to OpenRouter.",
    )
    llm_timeout_seconds: float = Field(
        default=90.0,
        gt=0,
        description="Upper bound for a single generative call.",
    )

    communes_api_url: str = Field(
        default="https://geo.api.gouv.fr/communes?fields=nom,code,codesPostaux&format=json",
        description="Public commune directory returning names and postal codes.",
    )
    communes_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for the commune directory lookup.",
    )
    market_base_url: str = Field(
        default="https://www.meilleursagents.com/prix-immobilier/",
        description="Base of the market price page locator.",
    )

    history_window: int = Field(default=8, ge=1, description="Turns of history used for extraction.")
    grounding_window: int = Field(default=6, ge=1, description="Turns of history used for the grounding check.")

    @property
    def cors_origins(self) -> list[str]:
        """Return the full list of allowed CORS origins."""

        origins: list[str] = []

        if self.frontend_origin:
            origins.append(str(self.frontend_origin).rstrip("/"))
        else:
            origins.extend([
                "http://localhost:5173",
                "http://127.0.0.1:5173",
            ])

        for origin in self.additional_origins:
            origins.append(str(origin).rstrip("/"))

        seen: set[str] = set()
        unique: list[str] = []
        for origin in origins:
            if origin not in seen:
                seen.add(origin)
                unique.append(origin)

        return unique

    @property
    def llm_enabled(self) -> bool:
        return bool(self.openrouter_api_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()
