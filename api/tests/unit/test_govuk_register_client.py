"""
Tests unitarios para GovUkRegisterClient (requests mockeado, sin red).
"""
from unittest.mock import Mock

import pytest
import requests

from sponsor_register.infrastructure.external.govuk_register import client as client_module
from sponsor_register.infrastructure.external.govuk_register.client import GovUkRegisterClient
from sponsor_register.infrastructure.external.govuk_register.feed_source import GovUkFeedSource
from sponsor_register.shared.exceptions.sync import FeedFetchError


PAGE_URL = "https://www.gov.uk/government/publications/register-of-licensed-sponsors-workers"
CSV_URL = "https://assets.publishing.service.gov.uk/media/abc/Worker_and_Temporary_Worker.csv"
CSV_BODY = (
    "\ufeffOrganisation Name,Town/City,County,Type & Rating,Route\n"
    "Acme Ltd,London,,Worker (A rating),Skilled Worker\n"
)


def _response(status_code=200, text="", content=b"", headers=None):
    resp = Mock()
    resp.status_code = status_code
    resp.text = text
    resp.content = content
    resp.headers = headers or {}
    return resp


@pytest.fixture
def sleeps(monkeypatch):
    calls = []
    monkeypatch.setattr(client_module.time, "sleep", lambda s: calls.append(s))
    return calls


def test_fetch_records_discovers_and_parses(sleeps):
    session = Mock()
    session.get.side_effect = [
        _response(text=f'<a href="{CSV_URL}">Worker and Temporary Worker</a>'),
        _response(content=CSV_BODY.encode("utf-8")),
    ]
    client = GovUkRegisterClient(page_url=PAGE_URL, session=session, timeout_s=5)

    records = client.fetch_records()

    assert [r.organisation_name for r in records] == ["Acme Ltd"]
    assert session.get.call_args_list[0].args == (PAGE_URL,)
    assert session.get.call_args_list[1].args == (CSV_URL,)
    assert session.get.call_args_list[1].kwargs == {"timeout": 5}
    assert sleeps == []


def test_configured_csv_url_skips_discovery(sleeps):
    session = Mock()
    session.get.return_value = _response(content=CSV_BODY.encode("utf-8"))
    client = GovUkRegisterClient(page_url=PAGE_URL, csv_url=CSV_URL, session=session)

    records = client.fetch_records()

    assert len(records) == 1
    session.get.assert_called_once_with(CSV_URL, timeout=30)


def test_retries_on_server_error_then_succeeds(sleeps):
    session = Mock()
    session.get.side_effect = [
        _response(status_code=503),
        _response(status_code=429, headers={"Retry-After": "2"}),
        _response(content=CSV_BODY.encode("utf-8")),
    ]
    client = GovUkRegisterClient(page_url=PAGE_URL, csv_url=CSV_URL, session=session, max_retries=3)

    records = client.fetch_records()

    assert len(records) == 1
    assert session.get.call_count == 3
    assert len(sleeps) == 2
    assert sleeps[1] == 2.0


def test_retries_on_network_error(sleeps):
    session = Mock()
    session.get.side_effect = [
        requests.ConnectionError("reset"),
        _response(content=CSV_BODY.encode("utf-8")),
    ]
    client = GovUkRegisterClient(page_url=PAGE_URL, csv_url=CSV_URL, session=session)

    assert len(client.fetch_records()) == 1
    assert len(sleeps) == 1


def test_gives_up_after_max_retries(sleeps):
    session = Mock()
    session.get.return_value = _response(status_code=500)
    client = GovUkRegisterClient(page_url=PAGE_URL, csv_url=CSV_URL, session=session, max_retries=2)

    with pytest.raises(FeedFetchError):
        client.fetch_records()

    assert session.get.call_count == 3
    assert len(sleeps) == 2


def test_client_error_is_not_retried(sleeps):
    session = Mock()
    session.get.return_value = _response(status_code=404)
    client = GovUkRegisterClient(page_url=PAGE_URL, csv_url=CSV_URL, session=session)

    with pytest.raises(FeedFetchError):
        client.fetch_records()

    assert session.get.call_count == 1
    assert sleeps == []


def test_page_without_csv_link_fails(sleeps):
    session = Mock()
    session.get.return_value = _response(text="<html></html>")
    client = GovUkRegisterClient(page_url=PAGE_URL, session=session)

    with pytest.raises(FeedFetchError):
        client.fetch_records()


@pytest.mark.asyncio
async def test_feed_source_runs_client_in_thread():
    client = Mock()
    client.fetch_records.return_value = ["record"]

    records = await GovUkFeedSource(client).fetch_records()

    assert records == ["record"]
    client.fetch_records.assert_called_once_with()
