from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_UPSTREAM_BASE_URL = "https://api.groq.com/openai/v1"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CURL_TESTER_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    app_env: str = Field(default="development")
    log_level: str = Field(default="INFO")

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, ge=1, le=65535)

    upstream_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("CURL_TESTER_UPSTREAM_API_KEY", "API_KEY_GROQ_API_KEY"),
    )
    upstream_base_url: str = Field(default=DEFAULT_UPSTREAM_BASE_URL)
    upstream_timeout_sec: float = Field(default=60.0, ge=1.0, le=600.0)
    chat_model: str = Field(default="mixtral-8x7b-32768")
    validator_model: str = Field(default="llama-3.3-70b-versatile")

    cors_allow_origins: str = Field(default="")

    def resolved_api_key(self) -> str | None:
        return self.upstream_api_key.strip() or None

    def parsed_cors_allow_origins(self) -> list[str]:
        return [value.strip() for value in self.cors_allow_origins.split(",") if value.strip()]

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    @staticmethod
    def _contains_placeholder(value: str) -> bool:
        return "replace-with" in value.strip().lower()

    def production_safety_errors(self) -> list[str]:
        # A missing upstream key is reported per request, not at startup.
        if not self.is_production():
            return []

        errors: list[str] = []

        if "*" in self.parsed_cors_allow_origins():
            errors.append("CURL_TESTER_CORS_ALLOW_ORIGINS must not contain `*` in production")

        if self._contains_placeholder(self.upstream_api_key):
            errors.append("CURL_TESTER_UPSTREAM_API_KEY must not use placeholder values in production")

        if not self.upstream_base_url.strip().lower().startswith("https://"):
            errors.append("CURL_TESTER_UPSTREAM_BASE_URL must use https in production")

        return errors


def get_settings() -> Settings:
    return Settings()
