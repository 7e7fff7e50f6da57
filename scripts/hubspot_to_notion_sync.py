"""
CLI: HubSpot deals -> Notion (one-way sync).

Uso recomendado:
  - Ejecutar como job (cron/systemd timer).
  - Cada corrida es un full scan; es seguro ejecutarlo N veces.

Variables de entorno requeridas:
  - HUBSPOT_API_KEY
  - HUBSPOT_PORTAL_ID
  - NOTION_TOKEN
  - NOTION_INTCUBE_PROJECT_DB

Ejecución:
  python scripts/hubspot_to_notion_sync.py
  python scripts/hubspot_to_notion_sync.py --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger
from dotenv import load_dotenv
from pydantic import ValidationError

# Permite ejecutar este script desde cualquier cwd sin configurar PYTHONPATH.
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from app.core.config import Settings
from app.core.events import configure_logging
from app.infrastructure.external.deal_sync.sync_service import run_sync_from_settings
from app.shared.exceptions.base import AppException


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Sincroniza deals de HubSpot hacia Notion.")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Calcula esquema/matching/partición sin escribir nada en Notion.",
    )
    args = parser.parse_args(argv)

    load_dotenv(_PROJECT_ROOT / ".env", override=False)
    try:
        settings = Settings()
    except ValidationError as e:
        logger.error(f"Sync abortado [CONFIG_INVALIDA]: {e}")
        return 1
    configure_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    logger.info("Iniciando HubSpot -> Notion sync...")
    try:
        result = asyncio.run(run_sync_from_settings(settings, dry_run=args.dry_run))
    except AppException as e:
        logger.error(f"Sync abortado [{e.error_code}]: {e.message}")
        return 1
    except Exception as e:
        logger.exception(f"Sync abortado por error inesperado: {e}")
        return 1

    logger.info(
        f"Sync OK: creadas={result.created_rows}, actualizadas={result.updated_rows}, "
        f"archivadas={result.archived_rows}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
