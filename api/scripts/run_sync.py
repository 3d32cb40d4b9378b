"""
CLI: una corrida de sincronizacion del registro de sponsors.

Uso recomendado:
  - Ejecutar como job diario (cron/systemd timer), fuera del proceso del API.
  - Re-ejecutar es siempre seguro: una corrida sobre el mismo feed no cambia nada.

Ejecución:
  python scripts/run_sync.py
  python scripts/run_sync.py --csv-file ./register.csv

Codigos de salida:
  0  corrida completa sin errores
  1  corrida completa con errores por registro (conviene re-ejecutar)
  2  corrida abortada (feed o marcador de bootstrap)
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

# Permite ejecutar este script desde cualquier cwd sin configurar PYTHONPATH.
_API_ROOT = Path(__file__).resolve().parents[1]
if str(_API_ROOT) not in sys.path:
    sys.path.insert(0, str(_API_ROOT))

from sponsor_register.application.use_cases.sync_use_cases import SyncUseCases  # noqa: E402
from sponsor_register.domain.repositories.feed_source import IFeedSource  # noqa: E402
from sponsor_register.infrastructure.database.session import close_db, init_db, session_scope  # noqa: E402
from sponsor_register.infrastructure.external.govuk_register.feed_source import LocalCsvFeedSource  # noqa: E402
from sponsor_register.shared.exceptions.sync import SyncFatalError  # noqa: E402


async def _run(feed: Optional[IFeedSource], create_tables: bool) -> int:
    try:
        if create_tables:
            await init_db()

        async with session_scope() as session:
            try:
                result = await SyncUseCases(session, feed=feed).run_sync()
            except SyncFatalError as e:
                logger.error(f"Sync abortado: {e.message}")
                return 2
    finally:
        await close_db()

    print(json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False))
    if result.errors:
        logger.warning(f"Sync completado con {len(result.errors)} errores; se recomienda re-ejecutar")
        return 1
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Sincroniza el registro de sponsors del Home Office.")
    parser.add_argument(
        "--csv-file",
        type=Path,
        help="Usa un CSV local en vez de descargarlo de gov.uk.",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Crea las tablas si no existen antes de sincronizar.",
    )
    args = parser.parse_args()

    feed = LocalCsvFeedSource(args.csv_file) if args.csv_file else None
    logger.info("Iniciando sync del registro de sponsors...")
    return asyncio.run(_run(feed, args.create_tables))


if __name__ == "__main__":
    raise SystemExit(main())
