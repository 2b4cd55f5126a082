import json
import logging
import math
from typing import Any, Dict

import requests

from .errors import TransportError, UpstreamError
from .uploads import StagedUpload

logger = logging.getLogger("uvicorn.error")

WEBHOOK_FILE_FIELD = "data"


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"{literal} does not fit in a float")
    return value


def parse_webhook_body(text: str) -> Any:
    """
    JSON body as-is; anything else is kept verbatim under "raw". NaN,
    Infinity and numbers too large for a float also go to "raw" so no value
    is rewritten on the way out.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)
    except ValueError:
        return {"raw": text}


class WebhookRelay:
    """
    Forwards staged marksheets to the n8n webhook. One attempt per call, no
    retry, transport default timeout.
    """

    def __init__(self, webhook_url: str):
        self.webhook_url = webhook_url

    # ===================== EXTRACTION ===========================
    def extract(self, upload: StagedUpload) -> Any:
        logger.info(f"Sending {upload.filename} to n8n webhook...")
        try:
            with open(upload.path, "rb") as fh:
                files = {WEBHOOK_FILE_FIELD: (upload.filename, fh, upload.content_type)}
                response = requests.post(self.webhook_url, files=files)
        except requests.RequestException as e:
            logger.error(f"n8n webhook unreachable: {e}")
            raise TransportError(str(e), cause=e) from e

        text = response.text
        logger.info(f"N8N Response status: {response.status_code}")

        if not response.ok:
            logger.error(f"N8N Error: {text}")
            raise UpstreamError(response.status_code, text)

        result = parse_webhook_body(text)
        logger.info("Extraction complete")
        return result

    # ===================== DIAGNOSTICS ===========================
    def probe(self) -> Dict[str, Any]:
        """Connectivity check; failures come back in the result, never raised."""
        try:
            response = requests.post(self.webhook_url, json={"test": True})
        except Exception as e:
            logger.warning(f"n8n probe failed: {e}")
            return {"error": str(e)}
        return {
            "status": response.status_code,
            "ok": response.ok,
            "response": response.text,
        }
