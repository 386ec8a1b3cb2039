import os
from pathlib import Path

from pydantic_settings import BaseSettings

DEFAULT_RULES_PATH = Path(__file__).resolve().parent / "data" / "ats_rules.yaml"


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    cors_origins: list[str] = ["*"]
    max_upload_size_mb: int = 5
    max_resume_chars: int = 50000
    max_job_description_chars: int = 20000
    rate_limit: str = "30/minute"
    rules_path: str = str(DEFAULT_RULES_PATH)
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "ATS_"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
