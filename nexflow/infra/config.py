"""Configuration management loaded from the environment."""

import os
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv

from nexflow.infra.errors import ConfigurationError

# Load .env file from project root
# This ensures dotenv works regardless of where the script is run from
project_root = Path(__file__).parent.parent.parent
env_file = project_root / ".env"

# override=False means existing environment variables take precedence
load_dotenv(dotenv_path=env_file, override=False)


def _optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number of seconds, got {raw!r}")


class Config:
    """Application configuration."""
    # Tool provider (VeyraX)
    VEYRAX_API_KEY: Optional[str] = os.getenv("VEYRAX_API_KEY")
    VEYRAX_BASE_URL: str = os.getenv("VEYRAX_BASE_URL", "https://veyraxapp.com").rstrip("/")

    # OpenAI
    OPENAI_API_KEY: Optional[str] = os.getenv("OPENAI_API_KEY")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

    # Outbound calls wait indefinitely unless a timeout is configured
    UPSTREAM_TIMEOUT: Optional[float] = _optional_float("UPSTREAM_TIMEOUT")

    # Application
    APP_ENV: str = os.getenv("APP_ENV", "development")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "4000"))

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    def require_credentials(self) -> None:
        """
        Fail fast when an upstream credential is missing.

        Raises:
            ConfigurationError: If VEYRAX_API_KEY or OPENAI_API_KEY is unset
        """
        missing = [
            name for name in ("VEYRAX_API_KEY", "OPENAI_API_KEY")
            if not getattr(self, name)
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            )


config = Config()
