"""Launch the proxy under uvicorn."""
from __future__ import annotations
import logging

import uvicorn

from genai_proxy.common.config import Settings
from genai_proxy.common.logging_setup import setup_logging
from genai_proxy.serve.fastapi_app import create_app

LOGGER = logging.getLogger("genai_proxy.server")

def main() -> None:
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    LOGGER.info(
        "Starting on %s:%s (model=%s, strict_cors=%s, origins=%s)",
        settings.host,
        settings.port,
        settings.gemini_model,
        settings.cors_strict,
        ",".join(settings.allowed_origins) or "*",
    )
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)

if __name__ == "__main__":
    main()
