"""Server configuration: reads settings from environment variables.

All settings have defaults suitable for local development.
"""

import os
from dataclasses import dataclass, field

# --- Pagination defaults ---
# Read at import time so FastAPI Query() defaults can reference them.
DEFAULT_PAGE_LIMIT = int(os.getenv("DEFAULT_PAGE_LIMIT", "20"))
MAX_PAGE_LIMIT = int(os.getenv("MAX_PAGE_LIMIT", "100"))


@dataclass(frozen=True)
class ServerSettings:
    """Immutable server configuration read from environment at startup."""

    # Network
    host: str = "0.0.0.0"
    port: int = 8080

    # CORS: comma-separated origins, or "*" for embeds on any site
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    log_level: str = "INFO"

    # Base URL the server is reachable under; used in embed snippets
    public_url: str = "http://localhost:8080"

    # Uploaded files are written here and served under upload_url
    upload_dir: str = "uploads"
    upload_url: str = "/uploads"


def load_settings() -> ServerSettings:
    """Build settings from ``SERVER_*`` / ``FORMFLOW_*`` environment variables."""
    raw_origins = os.getenv("SERVER_CORS_ORIGINS", "*")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    port = int(os.getenv("SERVER_PORT", "8080"))

    return ServerSettings(
        host=os.getenv("SERVER_HOST", "0.0.0.0"),
        port=port,
        cors_origins=origins,
        log_level=os.getenv("SERVER_LOG_LEVEL", "INFO").upper(),
        public_url=os.getenv("FORMFLOW_PUBLIC_URL", f"http://localhost:{port}").rstrip("/"),
        upload_dir=os.getenv("FORMFLOW_UPLOAD_DIR", "uploads"),
        upload_url=os.getenv("FORMFLOW_UPLOAD_URL", "/uploads").rstrip("/"),
    )
