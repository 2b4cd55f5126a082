import json
from typing import Any

from pydantic import BaseModel

from .students import build_cards, render_cards

DOWNLOAD_NAME = "marksheet-data.json"


def format_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


class ResultsView(BaseModel):
    """What the results section shows after a successful extract."""

    cards_html: str
    raw_json: str
    download_name: str = DOWNLOAD_NAME


def render_result(data: Any) -> ResultsView:
    return ResultsView(
        cards_html=render_cards(build_cards(data)),
        raw_json=format_json(data),
    )
