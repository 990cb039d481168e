"""
Application configuration from environment variables.
Loads .env from the backend directory so API keys are found regardless of cwd.
"""
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"

# Models that return 404 or are unsupported. Normalized at config load to _DEFAULT_GEMINI_MODEL.
_UNSUPPORTED_GEMINI_MODELS = frozenset({
    "gemini-1.5-flash-002", "gemini-1.5-flash-001", "gemini-1.5-flash",
    "gemini-1.5-pro", "gemini-1.5-pro-001", "gemini-1.5-pro-002",
    "gemini-2.0-flash", "gemini-2.0-flash-001", "gemini-2.0-flash-lite", "gemini-2.0-flash-lite-001",
})

DEFAULT_SESSION_SECRET = "change-me-in-production"


def normalize_gen_model(v: str) -> str:
    """Ensure gen_model_name is supported by generateContent (avoids 404 from old .env)."""
    s = (v or _DEFAULT_GEMINI_MODEL).strip()
    if not s:
        return _DEFAULT_GEMINI_MODEL
    if s in _UNSUPPORTED_GEMINI_MODELS or s.startswith("gemini-1.5-") or s.startswith("gemini-2.0-flash"):
        return _DEFAULT_GEMINI_MODEL
    return s


# .env next to backend/ (parent of app/)
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_ENV_FILE = _BACKEND_DIR / ".env"

if _ENV_FILE.exists():
    from dotenv import load_dotenv
    load_dotenv(_ENV_FILE, override=False)


class Settings(BaseSettings):
    """Load and validate config from env."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database: sqlite for local runs and tests, postgresql for production
    database_url: str = "sqlite:///./wisely_dev.db"

    # Environment: set ENV=production in production; enforces SESSION_SECRET and secure cookies.
    env: str = ""

    # Session cookie (signed with python-jose). Server-side record lives in the sessions table.
    session_secret: str = DEFAULT_SESSION_SECRET
    session_algorithm: str = "HS256"
    session_cookie_name: str = "wisely.sid"
    session_ttl_days: int = 7

    # Identity oracle: "firebase" (firebase-admin) or "dev" (local only, refused in production)
    identity_provider: str = "firebase"
    firebase_credentials_path: Path = Path("./firebase-service-account.json")
    firebase_project_id: str = ""
    identity_timeout_seconds: float = 10.0

    # Text oracle: "gemini" or "openai". Mock is used when the selected provider has no key.
    llm_provider: str = "gemini"
    gen_model_name: str = _DEFAULT_GEMINI_MODEL
    gemini_api_key: str = ""
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    # Deadline for one oracle call; generation is on the request's critical path.
    llm_timeout_seconds: float = 60.0
    gemini_max_output_tokens: int = 8192

    @field_validator("gen_model_name", mode="before")
    @classmethod
    def _resolve_gen_model(cls, v: str) -> str:
        return normalize_gen_model(v) if isinstance(v, str) else _DEFAULT_GEMINI_MODEL

    # English test: 2 minutes per question, capped
    minutes_per_question: int = 2
    max_questions: int = 25

    # Reference data
    seed_on_startup: bool = True

    # CORS: comma-separated origins
    cors_origins: str = "http://localhost:5173"

    debug: bool = False

    @property
    def is_production(self) -> bool:
        return (self.env or "").strip().lower() == "production"

    @property
    def active_llm_model(self) -> str:
        """Model name for display/logging."""
        if (self.llm_provider or "").strip().lower() == "openai":
            return (self.openai_model or "").strip()
        return (self.gen_model_name or _DEFAULT_GEMINI_MODEL).strip()


settings = Settings()
