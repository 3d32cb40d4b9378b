"""
Tests del contrato HTTP (use cases mockeados via dependency_overrides).
"""
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from sponsor_register.api.v1.dependencies.use_case_deps import get_register_use_cases, get_sync_use_cases
from sponsor_register.application.dto.register_dto import (
    LicenceDTO,
    LicenceHistoryDTO,
    OrganisationDTO,
    RegisterPageDTO,
)
from sponsor_register.application.dto.sync_dto import SyncErrorDTO, SyncResultDTO
from sponsor_register.shared.exceptions.domain import EntityNotFoundException, ValidationException
from sponsor_register.shared.exceptions.sync import SyncFatalError, SyncInProgressError


NOW = datetime(2026, 10, 17, 9, 0, tzinfo=timezone.utc)


def _sync_result() -> SyncResultDTO:
    return SyncResultDTO(
        bootstrap=False,
        started_at=NOW,
        finished_at=NOW,
        new_organisations=1,
        changed_licences=2,
        errors=[SyncErrorDTO(stage="licence", message="licence 'Acme Ltd': timeout", organisation="Acme Ltd")],
    )


def _page() -> RegisterPageDTO:
    return RegisterPageDTO(
        initial_run_time="2026-10-01T06:00:00Z",
        total_organisations=1,
        from_position=1,
        to_position=50,
        organisations=[OrganisationDTO(id=1, name="Acme Ltd", town_city="London")],
        licences=[LicenceDTO(id=1, organisation_id=1, licence_type="Worker", rating="A rating",
                             route="Skilled Worker")],
    )


@pytest.fixture
def sync_use_cases() -> AsyncMock:
    uc = AsyncMock()
    uc.run_sync = AsyncMock(return_value=_sync_result())
    uc.list_runs = AsyncMock(return_value=[])
    return uc


@pytest.fixture
def register_use_cases() -> AsyncMock:
    uc = AsyncMock()
    uc.get_page = AsyncMock(return_value=_page())
    return uc


@pytest.fixture
def app_with_mocks(sync_use_cases: AsyncMock, register_use_cases: AsyncMock):
    """Crea la app FastAPI con los use cases mockeados via dependency_overrides."""
    from main import create_application
    app = create_application()
    app.dependency_overrides[get_sync_use_cases] = lambda: sync_use_cases
    app.dependency_overrides[get_register_use_cases] = lambda: register_use_cases
    yield app
    app.dependency_overrides.clear()


async def _request(app, method: str, url: str):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.request(method, url)


@pytest.mark.asyncio
async def test_sync_returns_stats(app_with_mocks) -> None:
    response = await _request(app_with_mocks, "POST", "/api/v1/sync")

    assert response.status_code == 200
    data = response.json()
    assert data["new_organisations"] == 1
    assert data["changed_licences"] == 2
    assert data["bootstrap"] is False
    assert data["errors"][0]["organisation"] == "Acme Ltd"


@pytest.mark.asyncio
async def test_sync_fatal_error_is_502(app_with_mocks, sync_use_cases) -> None:
    sync_use_cases.run_sync.side_effect = SyncFatalError("fetch", "gov.uk 503")

    response = await _request(app_with_mocks, "POST", "/api/v1/sync")

    assert response.status_code == 502
    assert response.json() == {
        "error": "SYNC_FAILED",
        "message": "fetch: gov.uk 503",
        "details": {"stage": "fetch"},
    }


@pytest.mark.asyncio
async def test_sync_in_progress_is_409(app_with_mocks, sync_use_cases) -> None:
    sync_use_cases.run_sync.side_effect = SyncInProgressError()

    response = await _request(app_with_mocks, "POST", "/api/v1/sync")

    assert response.status_code == 409
    assert response.json()["error"] == "SYNC_IN_PROGRESS"


@pytest.mark.asyncio
async def test_sync_runs_limit_is_validated(app_with_mocks, sync_use_cases) -> None:
    ok = await _request(app_with_mocks, "GET", "/api/v1/sync/runs?limit=5")
    too_many = await _request(app_with_mocks, "GET", "/api/v1/sync/runs?limit=500")

    assert ok.status_code == 200
    assert ok.json() == []
    sync_use_cases.list_runs.assert_awaited_once_with(limit=5)
    assert too_many.status_code == 422


@pytest.mark.asyncio
async def test_data_uses_from_and_to(app_with_mocks, register_use_cases) -> None:
    response = await _request(app_with_mocks, "GET", "/api/v1/data?from=1&to=50&search=acme")

    assert response.status_code == 200
    data = response.json()
    assert data["from"] == 1
    assert data["to"] == 50
    assert data["initial_run_time"] == "2026-10-01T06:00:00Z"
    assert data["organisations"][0]["name"] == "Acme Ltd"
    assert data["licences"][0]["rating"] == "A rating"
    register_use_cases.get_page.assert_awaited_once_with(1, 50, "acme")


@pytest.mark.asyncio
async def test_data_requires_integer_bounds(app_with_mocks, register_use_cases) -> None:
    missing = await _request(app_with_mocks, "GET", "/api/v1/data?from=1")
    not_a_number = await _request(app_with_mocks, "GET", "/api/v1/data?from=a&to=2")

    assert missing.status_code == 422
    assert not_a_number.status_code == 422
    register_use_cases.get_page.assert_not_awaited()


@pytest.mark.asyncio
async def test_data_validation_error_is_422(app_with_mocks, register_use_cases) -> None:
    register_use_cases.get_page.side_effect = ValidationException("'to' debe ser mayor o igual que 'from'", field="to")

    response = await _request(app_with_mocks, "GET", "/api/v1/data?from=5&to=1")

    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"
    assert response.json()["details"] == {"field": "to"}


@pytest.mark.asyncio
async def test_licence_history(app_with_mocks, register_use_cases) -> None:
    register_use_cases.get_licence_history = AsyncMock(return_value=LicenceHistoryDTO(
        organisation=OrganisationDTO(id=1, name="Acme Ltd"),
        licences=[LicenceDTO(id=1, organisation_id=1, licence_type="Worker", rating="A rating",
                             route="Skilled Worker", valid_to=NOW)],
    ))

    response = await _request(app_with_mocks, "GET", "/api/v1/organisations/1/licences")

    assert response.status_code == 200
    assert response.json()["licences"][0]["valid_to"] is not None


@pytest.mark.asyncio
async def test_licence_history_not_found(app_with_mocks, register_use_cases) -> None:
    register_use_cases.get_licence_history = AsyncMock(side_effect=EntityNotFoundException("Organisation", 9))

    response = await _request(app_with_mocks, "GET", "/api/v1/organisations/9/licences")

    assert response.status_code == 404
    assert response.json()["error"] == "ENTITY_NOT_FOUND"


@pytest.mark.asyncio
async def test_health(app_with_mocks) -> None:
    response = await _request(app_with_mocks, "GET", "/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["sync_running"] is False


@pytest.mark.asyncio
async def test_lifespan_initialises_and_closes_database(monkeypatch, tmp_path) -> None:
    from main import create_application
    from sponsor_register.core import events
    from sponsor_register.core.config import settings

    init_db = AsyncMock()
    close_db = AsyncMock()
    monkeypatch.setattr(events, "init_db", init_db)
    monkeypatch.setattr(events, "close_db", close_db)
    monkeypatch.setattr(settings, "LOG_FILE", str(tmp_path / "sponsor_register.log"))
    app = create_application()

    async with events.lifespan(app):
        init_db.assert_awaited_once()
        close_db.assert_not_awaited()
        assert app.state.log_sink_id is not None
        response = await _request(app, "GET", "/health")
        assert response.status_code == 200

    close_db.assert_awaited_once()
    assert app.state.log_sink_id is None
