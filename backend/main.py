import sys
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

# Add current directory to path
sys.path.append(str(Path(__file__).parent))

import uvicorn
from fastapi import FastAPI, File, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from marksheet_core.config import Settings, get_settings
from marksheet_core.errors import MarksheetError
from marksheet_core.models import ErrorResponse, ExtractResponse, HealthResponse, ProbeResult, RenderRequest
from marksheet_core.relay import WebhookRelay
from marksheet_core.uploads import staged_upload
from marksheet_core.view import ResultsView, render_result

logger = logging.getLogger("uvicorn.error")

PUBLIC_DIR = Path(__file__).parent / "public"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    relay = WebhookRelay(settings.webhook_url)

    app = FastAPI(title="Marksheet Extractor")
    app.state.settings = settings
    app.state.relay = relay

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    async def startup_event():
        logger.info("Marksheet Extractor Server")
        logger.info("=======================================")
        logger.info(f"Frontend:     http://localhost:{settings.port}")
        logger.info(f"N8N Webhook:  {settings.webhook_url}")
        logger.info("=======================================")
        for route in app.routes:
            logger.debug(f"PATH: {route.path} | NAME: {route.name}")
        logger.info("Make sure the n8n workflow is ACTIVATED!")

    # ================= ERRORS =================
    @app.exception_handler(MarksheetError)
    async def marksheet_error_handler(request: Request, exc: MarksheetError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    # ================= ROUTES =================
    @app.post(
        "/api/extract",
        response_model=ExtractResponse,
        responses={
            400: {"model": ErrorResponse},
            413: {"model": ErrorResponse},
            500: {"model": ErrorResponse},
            502: {"model": ErrorResponse},
        },
    )
    def extract(marksheet: Optional[UploadFile] = File(None)):
        if marksheet is None:
            logger.warning("Extract request without a file")
        else:
            logger.info(f"File uploaded: {marksheet.filename} | Type: {marksheet.content_type}")
        try:
            with staged_upload(
                marksheet.file if marksheet else None,
                marksheet.filename if marksheet else None,
                marksheet.content_type if marksheet else None,
                settings.upload_dir,
                settings.allowed_content_types,
                settings.max_upload_bytes,
            ) as upload:
                data = relay.extract(upload)
        except MarksheetError as e:
            logger.error(f"Extraction failed: {e.message}")
            raise
        except Exception as e:
            logger.exception("Unexpected error while relaying marksheet")
            return JSONResponse(status_code=500, content={"error": "Server error", "message": str(e)})
        return ExtractResponse(success=True, data=data)

    @app.get("/api/test-n8n", response_model=ProbeResult, response_model_exclude_none=True)
    def test_n8n():
        return relay.probe()

    @app.get("/api/health", response_model=HealthResponse)
    def health():
        return HealthResponse(status="ok", timestamp=utc_timestamp())

    @app.post("/api/render", response_model=ResultsView)
    def render(req: RenderRequest):
        return render_result(req.data)

    # ================= FRONTEND =================
    @app.get("/", include_in_schema=False)
    def index():
        return FileResponse(PUBLIC_DIR / "index.html")

    app.mount("/static", StaticFiles(directory=PUBLIC_DIR), name="static")

    return app


app = create_app()


def run():
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level)


if __name__ == "__main__":
    run()
