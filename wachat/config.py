from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # WaChat relay
    API_BASE: str = "https://whatsapp.taptapp.xyz"
    API_TOKEN: str | None = None  # Bearer token; operations refuse to run without it
    SESSION_ID: str | None = None

    # HTTP
    HTTP_TIMEOUT_SECONDS: float = 10.0

    # HTTP host (wachat.main); empty means no auth
    HOST_API_KEY: str = ""

    # Observability
    LOG_LEVEL: str = "INFO"

    model_config = {
        "env_prefix": "WACHAT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "frozen": True,
    }

    @field_validator("API_BASE")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("API_TOKEN", "SESSION_ID")
    @classmethod
    def _blank_is_absent(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @property
    def has_credentials(self) -> bool:
        return bool(self.API_TOKEN and self.SESSION_ID)


settings = Settings()
