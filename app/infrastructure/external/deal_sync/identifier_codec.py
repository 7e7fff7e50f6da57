"""
Codec de referencias: deal id de HubSpot <-> URL guardada en Notion.

La URL es la misma que abre el deal en la UI de HubSpot, así la columna de
referencia sirve tanto para el matching como para navegar desde Notion.
"""

from __future__ import annotations

import re

from app.shared.exceptions.domain import (
    InvalidIdentifierException,
    NamespaceMismatchException,
)

DEAL_URL_TEMPLATE = "https://app.hubspot.com/contacts/{namespace}/deal/{source_id}"

_NUMERIC_RE = re.compile(r"[0-9]+")
_DEAL_URL_RE = re.compile(
    r"https://app\.hubspot\.com/contacts/(?P<namespace>[0-9]+)/deal/(?P<source_id>[0-9]+)/?"
)


def is_valid_namespace(value: str) -> bool:
    """True si `value` es un namespace válido (solo dígitos ASCII)."""
    return isinstance(value, str) and _NUMERIC_RE.fullmatch(value) is not None


def _require_numeric(value: str, label: str) -> str:
    if not isinstance(value, str) or not _NUMERIC_RE.fullmatch(value):
        raise InvalidIdentifierException(str(value), f"{label} debe ser numérico")
    return value


def encode(namespace: str, source_id: str) -> str:
    """Construye la URL de referencia para el deal `source_id` del portal `namespace`."""
    _require_numeric(namespace, "namespace")
    _require_numeric(source_id, "source_id")
    return DEAL_URL_TEMPLATE.format(namespace=namespace, source_id=source_id)


def decode(namespace: str, ref: str) -> str:
    """
    Extrae el deal id de una URL de referencia.

    Raises:
        InvalidIdentifierException: namespace no numérico o URL con otra forma.
        NamespaceMismatchException: la URL apunta a otro portal.
    """
    _require_numeric(namespace, "namespace")
    match = _DEAL_URL_RE.fullmatch(ref.strip()) if isinstance(ref, str) else None
    if not match:
        raise InvalidIdentifierException(str(ref), "no es una URL de deal de HubSpot")

    found = match.group("namespace")
    if found != namespace:
        raise NamespaceMismatchException(expected=namespace, found=found)
    return match.group("source_id")
