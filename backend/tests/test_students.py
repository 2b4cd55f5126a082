from __future__ import annotations

import pytest

from marksheet_core.students import (
    build_cards,
    find_students,
    initials,
    render_cards,
    score_band,
    score_value,
)


def test_asha_card() -> None:
    data = {"students": [{"name": "Asha", "roll_no": "12", "marks": {"Math": 80, "Eng": 35}}]}

    cards = build_cards(data)

    assert len(cards) == 1
    card = cards[0]
    assert card.initials == "A"
    assert card.roll_no == "12"
    assert [(row.subject, row.value, row.band) for row in card.marks] == [
        ("Math", "80", "high"),
        ("Eng", "35", "low"),
    ]


def test_students_nested_under_data() -> None:
    data = {"data": {"students": [{"name": "Ravi Kumar"}]}}

    assert find_students(data) == [{"name": "Ravi Kumar"}]


def test_empty_nested_list_renders_placeholder() -> None:
    cards = build_cards({"data": {"students": []}})

    assert cards == []
    assert "No student data found" in render_cards(cards)


def test_single_student_payload() -> None:
    data = {"name": "Meera", "subjects": {"Science": "91"}}

    cards = build_cards(data)

    assert len(cards) == 1
    assert cards[0].marks[0].band == "high"


def test_top_level_list() -> None:
    assert len(find_students([{"name": "A"}, {"name": "B"}, "junk"])) == 2


@pytest.mark.parametrize("data", [{"raw": "Workflow was started"}, None, "text", 42])
def test_unrecognised_payload_has_no_students(data) -> None:
    assert find_students(data) == []


def test_missing_fields_get_placeholders() -> None:
    cards = build_cards({"students": [{}, {"rollNo": 7}]})

    assert cards[0].name == "Student 1"
    assert cards[0].roll_no == "N/A"
    assert cards[1].name == "Student 2"
    assert cards[1].roll_no == "7"
    assert "No marks data" in render_cards(cards)


@pytest.mark.parametrize(
    "value,expected",
    [(75, "high"), (74, "medium"), (40, "medium"), (39.9, "low"), ("88/100", "high"), ("AB", "low"), (None, "low"), (float("inf"), "low"), (float("nan"), "low")],
)
def test_score_band(value, expected) -> None:
    assert score_band(value) == expected


def test_non_numeric_score_shown_verbatim() -> None:
    card = build_cards({"students": [{"name": "X", "marks": {"Art": "Absent"}}]})[0]

    assert score_value("Absent") == 0
    assert card.marks[0].value == "Absent"
    assert card.marks[0].band == "low"


def test_initials_take_first_two_words() -> None:
    assert initials("asha rani devi") == "AR"
    assert initials("  ") == ""


def test_card_html_is_escaped() -> None:
    html = render_cards(build_cards({"students": [{"name": "<b>Eve</b>", "marks": {"<i>": 50}}]}))

    assert "<b>Eve</b>" not in html
    assert "&lt;b&gt;Eve&lt;/b&gt;" in html
    assert 'class="mark-value medium">50<' in html
