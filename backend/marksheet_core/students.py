"""
Turns an opaque extraction result into display-only student cards.

The webhook's payload shape is not versioned, so student detection is a
compatibility shim: it looks in the few places the workflow has been seen to
put the list and otherwise reports nothing. Values are never corrected.
"""

import math
import re
from html import escape
from typing import Any, Dict, List, Mapping

from .models import MarkRow, StudentCard

HIGH_BAND = 75
LOW_BAND = 40

STUDENT_FIELDS = ("name", "roll_no", "rollNo", "id", "marks", "subjects")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def find_students(data: Any) -> List[Dict[str, Any]]:
    if isinstance(data, list):
        candidates = data
    elif isinstance(data, Mapping):
        nested = data.get("data")
        if isinstance(data.get("students"), list):
            candidates = data["students"]
        elif isinstance(nested, Mapping) and isinstance(nested.get("students"), list):
            candidates = nested["students"]
        elif any(key in data for key in STUDENT_FIELDS):
            candidates = [data]
        else:
            candidates = []
    else:
        candidates = []
    return [s for s in candidates if isinstance(s, Mapping)]


def score_value(value: Any) -> int:
    """Leading integer of a score, 0 when there is none ("85/100" -> 85)."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def score_band(value: Any) -> str:
    score = score_value(value)
    if score >= HIGH_BAND:
        return "high"
    if score < LOW_BAND:
        return "low"
    return "medium"


def initials(name: str) -> str:
    letters = [part[0] for part in name.split() if part]
    return "".join(letters)[:2].upper()


def _display(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_card(student: Mapping[str, Any], index: int) -> StudentCard:
    name = _display(student.get("name")) or f"Student {index + 1}"
    roll_no = ""
    for key in ("roll_no", "rollNo", "id"):
        roll_no = _display(student.get(key))
        if roll_no:
            break
    marks = student.get("marks") or student.get("subjects") or {}
    rows = []
    if isinstance(marks, Mapping):
        rows = [
            MarkRow(subject=str(subject), value=_display(value), band=score_band(value))
            for subject, value in marks.items()
        ]
    return StudentCard(
        name=name,
        roll_no=roll_no or "N/A",
        initials=initials(name),
        marks=rows,
    )


def build_cards(data: Any) -> List[StudentCard]:
    return [build_card(student, i) for i, student in enumerate(find_students(data))]


# ================= HTML =================
def render_card(card: StudentCard) -> str:
    if card.marks:
        marks_html = "".join(
            '<div class="mark-row">'
            f'<span class="mark-subject">{escape(row.subject)}</span>'
            f'<span class="mark-value {row.band}">{escape(row.value)}</span>'
            "</div>"
            for row in card.marks
        )
    else:
        marks_html = '<p class="placeholder">No marks data</p>'
    return (
        '<div class="student-card">'
        '<div class="student-header">'
        f'<div class="student-avatar">{escape(card.initials)}</div>'
        "<div>"
        f'<div class="student-name">{escape(card.name)}</div>'
        f'<div class="student-id">Roll No: {escape(card.roll_no)}</div>'
        "</div>"
        "</div>"
        f'<div class="marks-table">{marks_html}</div>'
        "</div>"
    )


def render_cards(cards: List[StudentCard]) -> str:
    if not cards:
        return '<p class="placeholder empty-results">No student data found</p>'
    return "".join(render_card(card) for card in cards)
