"""
Adaptador IFeedSource sobre el cliente de gov.uk.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List

from sponsor_register.core.config import settings
from sponsor_register.domain.entities.feed_record import FeedRecord
from sponsor_register.domain.repositories.feed_source import IFeedSource

from .client import GovUkRegisterClient
from .parser import parse_register_csv


class GovUkFeedSource(IFeedSource):
    """Ejecuta el cliente sincrono en un thread para no bloquear el event loop."""

    def __init__(self, client: GovUkRegisterClient) -> None:
        self._client = client

    async def fetch_records(self) -> List[FeedRecord]:
        return await asyncio.to_thread(self._client.fetch_records)


def build_from_settings() -> GovUkFeedSource:
    """Constructor del feed leyendo la configuracion de la aplicacion."""
    client = GovUkRegisterClient(
        page_url=settings.SPONSOR_REGISTER_PAGE_URL,
        csv_url=settings.SPONSOR_CSV_URL or None,
        timeout_s=settings.FEED_HTTP_TIMEOUT_S,
        max_retries=settings.FEED_MAX_RETRIES,
    )
    return GovUkFeedSource(client)


class LocalCsvFeedSource(IFeedSource):
    """Lee un CSV del registro ya descargado (reprocesos y pruebas manuales)."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    async def fetch_records(self) -> List[FeedRecord]:
        text = await asyncio.to_thread(self._path.read_text, encoding="utf-8-sig")
        return parse_register_csv(text)
