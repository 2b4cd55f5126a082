"""Error kinds raised by the relay and turned into JSON envelopes by the app."""

from typing import Any, Dict, Optional


class MarksheetError(Exception):
    status_code = 500
    error = "Server error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.error, "message": self.message}


# ================= VALIDATION =================
class UploadValidationError(MarksheetError):
    status_code = 400
    error = "Invalid upload"


class MissingFile(UploadValidationError):
    error = "No file uploaded"

    def __init__(self, message: str = "No file uploaded"):
        super().__init__(message)


class InvalidFileType(UploadValidationError):
    error = "Invalid file type"


class FileTooLarge(UploadValidationError):
    status_code = 413
    error = "File too large"


# ================= WEBHOOK =================
class UpstreamError(MarksheetError):
    """Webhook answered, but not with a 2xx."""

    status_code = 502
    error = "Failed to process marksheet"

    def __init__(self, status: int, details: str):
        super().__init__(f"Webhook returned HTTP {status}")
        self.status = status
        self.details = details

    def to_payload(self) -> Dict[str, Any]:
        return {
            "error": self.error,
            "message": self.message,
            "status": self.status,
            "details": self.details,
        }


class TransportError(MarksheetError):
    """Webhook could not be reached or the request died mid-flight."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
