"""
Endpoints para sincronizar el registro de sponsors con la base de datos.

La corrida se ejecuta dentro del request: la respuesta trae las estadisticas
completas. Una segunda peticion mientras hay una corrida en curso recibe 409.
"""
from typing import List

from fastapi import APIRouter, Depends, Query, status

from sponsor_register.application.dto.sync_dto import SyncResultDTO, SyncRunDTO
from sponsor_register.application.use_cases.sync_use_cases import SyncUseCases
from sponsor_register.api.v1.dependencies.use_case_deps import get_sync_use_cases


router = APIRouter(prefix="/sync", tags=["Sync"])


@router.post(
    "",
    response_model=SyncResultDTO,
    status_code=status.HTTP_200_OK,
    summary="Ejecutar una corrida de sincronizacion del registro"
)
async def run_sync(
    use_cases: SyncUseCases = Depends(get_sync_use_cases),
) -> SyncResultDTO:
    """
    Descarga el registro vigente y lo reconcilia contra el historial.

    Los errores por registro vienen en `errors`; un fallo del feed o del
    marcador de bootstrap responde 502.
    """
    return await use_cases.run_sync()


@router.get(
    "/runs",
    response_model=List[SyncRunDTO],
    summary="Listar las ultimas corridas"
)
async def list_sync_runs(
    limit: int = Query(20, ge=1, le=100, description="Cantidad maxima de corridas"),
    use_cases: SyncUseCases = Depends(get_sync_use_cases),
) -> List[SyncRunDTO]:
    return await use_cases.list_runs(limit=limit)
