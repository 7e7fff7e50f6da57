"""
Builders y lectores de objetos de propiedad de Notion.

Notion representa cada valor como {"<tipo>": ...}; aquí se concentra ese
formato para que el resto del pipeline trabaje con strings.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import HttpUrl, TypeAdapter, ValidationError

# Límite de Notion para el contenido de un text object
NOTION_TEXT_LIMIT = 2000

_HTTP_URL = TypeAdapter(HttpUrl)


def _text_objects(value: str) -> list[dict[str, Any]]:
    if not value:
        return []
    return [{"type": "text", "text": {"content": value[:NOTION_TEXT_LIMIT]}}]


def title_value(value: str) -> dict[str, Any]:
    return {"title": _text_objects(value)}


def rich_text_value(value: str) -> dict[str, Any]:
    return {"rich_text": _text_objects(value)}


def url_value(value: Optional[str]) -> dict[str, Any]:
    return {"url": value or None}


def stringify(value: Any) -> str:
    """Valor escalar de HubSpot -> texto para una columna rich_text ("" si falta)."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def read_url_property(prop: Any) -> Optional[str]:
    """
    Retorna el valor de una propiedad url de Notion si es una URL http(s) válida.

    None si la propiedad falta, no es de tipo url, está vacía o no parsea.
    """
    if not isinstance(prop, dict) or prop.get("type") != "url":
        return None
    raw = prop.get("url")
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        _HTTP_URL.validate_python(raw.strip())
    except ValidationError:
        return None
    return raw.strip()
