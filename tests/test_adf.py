from datetime import date

from jira_app.core.adf import (
    NO_DESCRIPTION,
    REPORT_SECTIONS,
    daily_report_doc,
    extract_text,
    paragraph_doc,
    render_text,
)


def test_extract_text_nested():
    doc = {
        "type": "doc",
        "content": [
            {"type": "paragraph", "content": [{"type": "text", "text": "Hello "}, {"type": "text", "text": "world"}]},
            {"type": "paragraph", "content": [{"type": "text", "text": "!"}]},
        ],
    }
    assert extract_text(doc) == "Hello world!"
    assert extract_text("plain") == "plain"
    assert extract_text(None) == ""


def test_render_text_placeholder():
    assert render_text(None) == NO_DESCRIPTION
    assert render_text({"type": "doc", "content": []}, empty="") == ""


def test_paragraph_doc_shape():
    doc = paragraph_doc("Looks good")
    assert doc["type"] == "doc"
    assert doc["version"] == 1
    assert doc["content"][0]["content"][0] == {"type": "text", "text": "Looks good"}


def test_daily_report_doc():
    doc = daily_report_doc(date(2024, 9, 4), "Observatory", "Calibrate camera")
    text = extract_text(doc)
    assert "Fecha: 04/09/2024" in text
    assert "Proyecto: Observatory" in text
    assert "Subtarea asignada: Calibrate camera" in text
    assert "Estado actual: Por iniciar" in text
    assert "Tiempo invertido: 00:00" in text

    types = [node["type"] for node in doc["content"]]
    assert types[:5] == ["paragraph"] * 5
    assert types.count("rule") == len(REPORT_SECTIONS)
    assert types.count("heading") == len(REPORT_SECTIONS)
    # the last section has no bullets
    assert types.count("bulletList") == len(REPORT_SECTIONS) - 1
    assert types[-1] == "paragraph"
    heading = next(node for node in doc["content"] if node["type"] == "heading")
    assert heading["attrs"] == {"level": 3}
    assert heading["content"][0]["marks"] == [{"type": "strong"}]


def _text_nodes(node):
    if isinstance(node, dict):
        if node.get("type") == "text":
            yield node
        for child in node.get("content") or []:
            yield from _text_nodes(child)


def test_daily_report_doc_without_project_has_no_empty_text():
    doc = daily_report_doc(date(2024, 1, 2), None, "x")
    project_line = doc["content"][1]["content"]
    assert [n["text"] for n in project_line] == ["🔹 ", "Proyecto: "]
    assert all(n["text"] for n in _text_nodes(doc))
