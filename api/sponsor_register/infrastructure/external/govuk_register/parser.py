"""
Parseo del CSV "Worker and Temporary Worker" del Home Office.

Columnas esperadas (la primera fila es cabecera):
    Organisation Name, Town/City, County, Type & Rating, Route
"""

from __future__ import annotations

import csv
import io
import re
from typing import Iterable, List, Sequence, Tuple

from loguru import logger

from sponsor_register.domain.entities.feed_record import FeedRecord
from sponsor_register.shared.exceptions.sync import FeedFetchError

EXPECTED_COLUMNS = 5

CSV_URL_PATTERN = re.compile(r'https://assets\.publishing\.service\.gov\.uk/[^"]+\.csv')


def extract_csv_url(html: str) -> str:
    """
    Busca en el HTML de la publicacion el primer enlace al CSV.

    Raises:
        FeedFetchError: si la pagina no contiene ningun enlace .csv
    """
    match = CSV_URL_PATTERN.search(html)
    if not match:
        raise FeedFetchError("No se encontro el enlace al CSV en la pagina de gov.uk")
    return match.group(0)


def split_type_and_rating(value: str) -> Tuple[str, str]:
    """
    Separa "Worker (A rating)" en ("Worker", "A rating").

    Sin parentesis, todo el valor es el tipo y el rating queda vacio.
    """
    value = value.strip()
    paren_index = value.find("(")
    if paren_index == -1:
        return value, ""

    licence_type = value[:paren_index].strip()
    rating = value[paren_index + 1:].strip()
    if rating.endswith(")"):
        rating = rating[:-1]
    return licence_type, rating


def parse_row(row: Sequence[str]) -> FeedRecord:
    """
    Convierte una fila del CSV en FeedRecord.

    Raises:
        ValueError: si la fila tiene menos columnas de las esperadas
    """
    if len(row) < EXPECTED_COLUMNS:
        raise ValueError(f"row has {len(row)} columns, expected {EXPECTED_COLUMNS}")

    licence_type, rating = split_type_and_rating(row[3])
    return FeedRecord(
        organisation_name=row[0].strip(),
        town_city=row[1].strip(),
        county=row[2].strip(),
        licence_type=licence_type,
        rating=rating,
        route=row[4].strip(),
    )


def parse_rows(rows: Iterable[Sequence[str]]) -> List[FeedRecord]:
    """
    Parsea las filas de datos (sin cabecera). Las filas malformadas se
    registran en el log y se omiten.
    """
    records: List[FeedRecord] = []
    # La cabecera es la linea 1
    for line_number, row in enumerate(rows, start=2):
        if not row:
            continue
        try:
            records.append(parse_row(row))
        except ValueError as e:
            logger.warning(f"Fila malformada omitida (linea {line_number}): {e} | {list(row)}")
    return records


def parse_register_csv(text: str) -> List[FeedRecord]:
    """
    Parsea el contenido completo del CSV.

    Raises:
        FeedFetchError: si el CSV esta vacio o no tiene cabecera
    """
    reader = csv.reader(io.StringIO(text))
    try:
        next(reader)
    except StopIteration:
        raise FeedFetchError("El CSV del registro esta vacio (sin cabecera)") from None
    except csv.Error as e:
        raise FeedFetchError(f"No se pudo leer la cabecera del CSV: {e}") from e

    try:
        return parse_rows(reader)
    except csv.Error as e:
        raise FeedFetchError(f"CSV malformado en linea {reader.line_num}: {e}") from e
