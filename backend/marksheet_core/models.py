from pydantic import BaseModel
from typing import Any, Dict, List, Optional


class ExtractResponse(BaseModel):
    success: bool = True
    data: Any


class ErrorResponse(BaseModel):
    error: str
    message: Optional[str] = None
    status: Optional[int] = None
    details: Optional[str] = None


class ProbeResult(BaseModel):
    status: Optional[int] = None
    ok: Optional[bool] = None
    response: Optional[str] = None
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str


class RenderRequest(BaseModel):
    data: Any = None


class MarkRow(BaseModel):
    subject: str
    value: str
    band: str  # "high", "medium", "low"


class StudentCard(BaseModel):
    name: str
    roll_no: str
    initials: str
    marks: List[MarkRow]

