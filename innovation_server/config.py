import os
from dataclasses import dataclass
from typing import Optional

# Optional: load a local .env file if present.
try:
    from dotenv import load_dotenv

    load_dotenv()
except ImportError:
    # python-dotenv missing is fine; plain environment variables still work.
    pass


def _env_bool(name: str, default: Optional[bool] = None) -> Optional[bool]:
    """Parse a boolean environment variable.

    Returns:
      - True/False if the env var is set to a recognizable value
      - default if unset or unrecognized

    Accepted truthy: 1, true, yes, y, on
    Accepted falsy:  0, false, no, n, off
    """

    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in ("1", "true", "yes", "y", "on"):
        return True
    if v in ("0", "false", "no", "n", "off"):
        return False
    return default


@dataclass(frozen=True)
class Config:
    """Runtime configuration.

    IMPORTANT: Provide the token secret and Mongo connection string via
    environment variables or a .env file. Do not hardcode secrets in source code.
    """

    # -----------------
    # HTTP
    # -----------------
    API_HOST: str = os.environ.get("API_HOST", "0.0.0.0")
    PORT: int = int(os.environ.get("PORT", "9100"))

    # Comma separated. "*" allows any origin (no credentials).
    CORS_ALLOW_ORIGINS: str = os.environ.get("CORS_ALLOW_ORIGINS", "*")

    # -----------------
    # Auth (JWT)
    # -----------------
    # NOTE: In dev, this defaults to a fixed string so you can get started.
    # In production, you MUST set ACCESS_TOKEN_SECRET to a strong random value.
    ACCESS_TOKEN_SECRET: str = os.environ.get("ACCESS_TOKEN_SECRET", "dev_change_me")
    ACCESS_TOKEN_EXPIRE_DAYS: int = int(os.environ.get("ACCESS_TOKEN_EXPIRE_DAYS", "7"))

    # Promote (or create) this user as admin on startup when no admin exists yet.
    AUTH_BOOTSTRAP_ADMIN_EMAIL: str = (os.environ.get("AUTH_BOOTSTRAP_ADMIN_EMAIL") or "").strip()

    # -----------------
    # MongoDB
    # -----------------
    # `Mongo_URI` is the legacy variable name used by older deployments.
    MONGO_URI: str = (
        os.environ.get("MONGO_URI")
        or os.environ.get("Mongo_URI")
        or "mongodb://localhost:27017"
    )
    MONGO_DB_NAME: str = os.environ.get("MONGO_DB_NAME", "innovationBD")
    MONGO_SERVER_API_STRICT: bool = _env_bool("MONGO_SERVER_API_STRICT", True) is True

    def cors_origins(self) -> list[str]:
        return [o.strip() for o in (self.CORS_ALLOW_ORIGINS or "").split(",") if o.strip()]


def load_config() -> Config:
    return Config()
