import json

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str

    REDIS_URL: str = "redis://redis:6379/0"

    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    FRONTEND_URL: str = "http://localhost:5173"

    BACKEND_CORS_ORIGINS: str = (
        '["http://localhost:5173","http://localhost:3000","http://localhost:3001"]'
    )

    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "Course Certificates API"
    DEBUG: bool = False

    # Credential IDs look like CERT-2026-7K3QX9M2PA4HD8RB
    CERTIFICATE_CREDENTIAL_PREFIX: str = "CERT"
    CERTIFICATE_CREDENTIAL_LENGTH: int = 16
    CERTIFICATE_ISSUE_MAX_ATTEMPTS: int = 5

    # Public verification endpoint throttling (slowapi syntax)
    VERIFY_RATE_LIMIT: str = "30/minute"
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str = "memory://"  # e.g. redis://redis:6379/1 in production

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def cors_origins(self) -> list[str]:
        if isinstance(self.BACKEND_CORS_ORIGINS, str):
            try:
                parsed: list[str] = json.loads(self.BACKEND_CORS_ORIGINS)
                return parsed
            except json.JSONDecodeError:
                return ["http://localhost:5173", "http://localhost:3000"]
        return self.BACKEND_CORS_ORIGINS

    @property
    def verification_base_url(self) -> str:
        return f"{self.FRONTEND_URL.rstrip('/')}/certificates/verify"


settings = Settings()
