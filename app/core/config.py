from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env from project root so it loads regardless of cwd
_BACKEND_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _BACKEND_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(str(_ENV_FILE), ".env", "../.env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str

    # Admin session (JWT in bearer header or httpOnly cookie)
    secret_key: str
    access_token_expire_minutes: int = 24 * 60
    algorithm: str = "HS256"
    admin_cookie_name: str = "admin-auth-token"
    initial_admin_username: str = "admin"
    initial_admin_password: str = ""

    # CORS
    cors_origins: str = "http://localhost:3000"

    # Booking rules
    # Stored booking dates sit at this hour so the calendar day survives timezone shifts
    booking_date_hour: int = 12
    medium_demand_threshold: int = 2

    # Recommendations: "rules" (deterministic) or "llm" (Anthropic)
    suggestion_backend: str = "rules"
    recommendation_timeout_seconds: float = 10.0
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-5-20250929"
    anthropic_max_tokens: int = 600

    # Startup
    create_tables_on_startup: bool = False
    seed_on_startup: bool = False

    # Env
    env: str = "development"

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def llm_enabled(self) -> bool:
        return self.suggestion_backend == "llm" and bool(self.anthropic_api_key)


settings = Settings()
