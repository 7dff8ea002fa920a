"""Process-wide settings, read once from the environment at startup."""
from __future__ import annotations
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_MAX_UPLOAD_MB = 4

_TRUTHY = {"1", "true", "yes", "on"}

def parse_origins(raw: str | None) -> tuple[str, ...]:
    """
    Split a comma-separated origin list.

    Args:
        raw: Value such as "https://a.example, https://b.example".

    Returns:
        Trimmed origins with blanks dropped.
    """
    if not raw:
        return ()
    return tuple(o.strip() for o in raw.split(",") if o.strip())

@dataclass(frozen=True)
class Settings:
    gemini_api_key: str | None = None
    gemini_model: str = DEFAULT_MODEL
    allowed_origins: tuple[str, ...] = field(default_factory=tuple)
    cors_strict: bool = True
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_MB * 1024 * 1024
    prompts_path: str = "configs/prompts.yaml"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            load_env_file: Load a `.env` file from the working directory first.
        """
        if load_env_file:
            load_dotenv()
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL") or DEFAULT_MODEL,
            allowed_origins=parse_origins(os.getenv("FRONTEND_URL")),
            cors_strict=os.getenv("CORS_STRICT", "true").strip().lower() in _TRUTHY,
            max_upload_bytes=int(float(os.getenv("MAX_UPLOAD_MB", str(DEFAULT_MAX_UPLOAD_MB))) * 1024 * 1024),
            prompts_path=os.getenv("PROMPTS_PATH", "configs/prompts.yaml"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def origin_allowed(self, origin: str | None) -> bool:
        """Requests without an Origin header and an empty allow-list always pass."""
        if not origin:
            return True
        return not self.allowed_origins or origin in self.allowed_origins
