"""Atlassian Document Format (ADF) helpers: plain-text extraction and document builders."""

from __future__ import annotations

from datetime import date
from typing import Any

NO_DESCRIPTION = "No description"

# Daily report subtask template content.
REPORT_INITIAL_STATE = "Por iniciar"
REPORT_INITIAL_TIME = "00:00"
REPORT_SECTIONS: tuple[tuple[str, str, tuple[str, ...]], ...] = (
    (
        "1️⃣ Avances del día",
        "Descripción detallada de lo realizado:",
        (
            "[Explicar en qué consistió el trabajo realizado]",
            "[Incluir enlaces a PRs, commits o documentación generada]",
            "[Mencionar pruebas realizadas y resultados obtenidos]",
        ),
    ),
    (
        "2️⃣ Retos o dificultades encontradas",
        "Problemas identificados y cómo se resolvieron:",
        (
            "[Describir cualquier bloqueo técnico, error o duda surgida]",
            "[Explicar si se encontró una solución y cuál fue]",
        ),
    ),
    (
        "3️⃣ Plan para el siguiente día",
        "Tareas previstas y próximos pasos:",
        (
            "[Listar lo que se trabajará mañana]",
            "[Incluir dependencias de otros miembros del equipo si aplica]",
        ),
    ),
    (
        "4️⃣ Comentarios adicionales",
        "Observaciones generales, feedback recibido o cualquier otra nota relevante.",
        (),
    ),
)


def extract_text(node: Any) -> str:
    """Flatten an ADF node (or plain string) into its concatenated text."""
    if not node:
        return ""
    if isinstance(node, str):
        return node
    if isinstance(node, dict):
        if node.get("text"):
            return str(node["text"])
        content = node.get("content")
        if isinstance(content, list):
            return "".join(extract_text(child) for child in content)
    return ""


def render_text(node: Any, empty: str = NO_DESCRIPTION) -> str:
    return extract_text(node) or empty


def _text(value: str, *, strong: bool = False) -> dict[str, Any]:
    node: dict[str, Any] = {"type": "text", "text": value}
    if strong:
        node["marks"] = [{"type": "strong"}]
    return node


def _paragraph(*nodes: dict[str, Any]) -> dict[str, Any]:
    return {"type": "paragraph", "content": list(nodes)}


def _doc(content: list[dict[str, Any]]) -> dict[str, Any]:
    return {"type": "doc", "version": 1, "content": content}


def paragraph_doc(text: str) -> dict[str, Any]:
    """Single-paragraph document, the shape Jira expects for comment and worklog bodies."""
    return _doc([_paragraph(_text(text))])


def format_report_date(day: date) -> str:
    return day.strftime("%d/%m/%Y")


def daily_report_doc(day: date, project_name: str | None, summary: str) -> dict[str, Any]:
    """Daily report comment posted on freshly created subtasks."""

    def labelled(label: str, value: str | None) -> dict[str, Any]:
        nodes = [_text("🔹 ", strong=True), _text(label, strong=True)]
        # Jira rejects empty text nodes
        if value:
            nodes.append(_text(value))
        return _paragraph(*nodes)

    content: list[dict[str, Any]] = [
        labelled("Fecha: ", format_report_date(day)),
        labelled("Proyecto: ", project_name),
        labelled("Subtarea asignada: ", summary),
        labelled("Estado actual: ", REPORT_INITIAL_STATE),
        labelled("Tiempo invertido: ", REPORT_INITIAL_TIME),
    ]
    for heading, prompt, bullets in REPORT_SECTIONS:
        content.append({"type": "rule"})
        content.append(
            {
                "type": "heading",
                "attrs": {"level": 3},
                "content": [_text(heading, strong=True)],
            }
        )
        content.append(_paragraph(_text("📌 ", strong=True), _text(prompt, strong=True)))
        if bullets:
            content.append(
                {
                    "type": "bulletList",
                    "content": [{"type": "listItem", "content": [_paragraph(_text(b))]} for b in bullets],
                }
            )
    return _doc(content)
