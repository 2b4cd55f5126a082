import os
from functools import lru_cache
from typing import List, Optional, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()  # Load environment variables from .env file

# Use webhook-test while editing the workflow in n8n, webhook once it is activated
N8N_TEST_WEBHOOK_URL = "http://localhost:5678/webhook-test/upload-marksheet"
N8N_PROD_WEBHOOK_URL = "http://localhost:5678/webhook/upload-marksheet"

ALLOWED_CONTENT_TYPES = ("image/jpeg", "image/png", "image/webp", "application/pdf")
MAX_UPLOAD_BYTES = 10 * 1024 * 1024

TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Process-wide configuration, resolved once at startup."""

    model_config = {"frozen": True}

    n8n_prod: bool = False
    n8n_test_url: str = N8N_TEST_WEBHOOK_URL
    n8n_prod_url: str = N8N_PROD_WEBHOOK_URL
    upload_dir: str = "uploads"
    max_upload_bytes: int = MAX_UPLOAD_BYTES
    allowed_content_types: Tuple[str, ...] = ALLOWED_CONTENT_TYPES
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: List[str] = ["*"]
    log_level: str = "info"

    @property
    def webhook_url(self) -> str:
        return self.n8n_prod_url if self.n8n_prod else self.n8n_test_url


def _flag(raw: Optional[str]) -> bool:
    return (raw or "").strip().lower() in TRUTHY


def _origins(raw: Optional[str]) -> List[str]:
    if not raw:
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


def load_settings(environ=None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        n8n_prod=_flag(env.get("N8N_PROD")),
        n8n_test_url=env.get("N8N_WEBHOOK_TEST_URL") or N8N_TEST_WEBHOOK_URL,
        n8n_prod_url=env.get("N8N_WEBHOOK_PROD_URL") or N8N_PROD_WEBHOOK_URL,
        upload_dir=env.get("UPLOAD_DIR") or "uploads",
        host=env.get("HOST") or "0.0.0.0",
        port=int(env.get("PORT") or 3000),
        cors_origins=_origins(env.get("CORS_ORIGINS")),
        log_level=(env.get("LOG_LEVEL") or "info").lower(),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
