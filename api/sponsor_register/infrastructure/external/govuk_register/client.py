"""
Cliente HTTP mínimo para la publicacion del registro de sponsors en gov.uk.

Requisitos cubiertos:
- requests
- timeout por request
- rate-limit/backoff (429, 5xx)
"""

from __future__ import annotations

import time
from typing import List, Optional

import requests
from loguru import logger

from sponsor_register.domain.entities.feed_record import FeedRecord
from sponsor_register.shared.exceptions.sync import FeedFetchError

from .parser import extract_csv_url, parse_register_csv


class GovUkRegisterClient:
    """
    Cliente HTTP del registro. Descubre el CSV vigente y lo descarga.

    Importante:
    - Es sincrono; quien lo use desde asyncio debe llamarlo via to_thread.
    - Si csv_url viene configurado, no se consulta la pagina de publicacion.
    """

    def __init__(
        self,
        *,
        page_url: str,
        csv_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout_s: int = 30,
        max_retries: int = 3,
        min_backoff_s: float = 0.8,
        max_backoff_s: float = 20.0,
    ) -> None:
        self._page_url = page_url
        self._csv_url = csv_url or None
        self._timeout_s = timeout_s
        self._max_retries = max_retries
        self._min_backoff_s = min_backoff_s
        self._max_backoff_s = max_backoff_s
        self._session = session or requests.Session()

    def discover_csv_url(self) -> str:
        """Obtiene el enlace al CSV desde la pagina de la publicacion."""
        if self._csv_url:
            return self._csv_url
        page = self._get(self._page_url)
        url = extract_csv_url(page.text)
        logger.info(f"CSV del registro descubierto: {url}")
        return url

    def download_csv(self, url: str) -> str:
        """Descarga el CSV y lo decodifica (UTF-8, tolera BOM)."""
        resp = self._get(url)
        return resp.content.decode("utf-8-sig", errors="replace")

    def fetch_records(self) -> List[FeedRecord]:
        """Descubre, descarga y parsea el snapshot completo."""
        url = self.discover_csv_url()
        return parse_register_csv(self.download_csv(url))

    def _get(self, url: str) -> requests.Response:
        """
        GET con backoff para 429/5xx.

        Estrategia:
        - 429: respeta Retry-After si existe, si no exponencial con jitter simple.
        - 5xx y errores de red: exponencial con jitter.
        - 4xx (no 429): error inmediato.
        """
        for attempt in range(self._max_retries + 1):
            try:
                resp = self._session.get(url, timeout=self._timeout_s)
            except requests.RequestException as e:
                if attempt >= self._max_retries:
                    raise FeedFetchError(f"No se pudo descargar {url}: {e}") from e
                self._sleep_backoff(attempt, None)
                continue

            if 200 <= resp.status_code < 300:
                return resp

            # Errores recuperables
            if resp.status_code == 429 or 500 <= resp.status_code < 600:
                if attempt >= self._max_retries:
                    raise FeedFetchError(
                        f"gov.uk error {resp.status_code} tras {attempt} reintentos: {url}"
                    )
                self._sleep_backoff(attempt, resp.headers.get("Retry-After"))
                continue

            # Errores no recuperables
            raise FeedFetchError(f"gov.uk request falló {resp.status_code}: {url}")

        raise FeedFetchError(f"No se pudo descargar {url}")

    def _sleep_backoff(self, attempt: int, retry_after: Optional[str]) -> None:
        if retry_after:
            try:
                sleep_s = float(retry_after)
            except ValueError:
                sleep_s = self._min_backoff_s
        else:
            # Exponencial simple + jitter proporcional
            base = min(self._max_backoff_s, self._min_backoff_s * (2**attempt))
            sleep_s = base + (0.15 * base)
        logger.warning(f"Reintentando descarga de gov.uk en {sleep_s:.1f}s (intento {attempt + 1})")
        time.sleep(sleep_s)
