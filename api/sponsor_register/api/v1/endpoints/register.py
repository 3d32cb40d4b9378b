"""
Endpoints de lectura del estado actual del registro.
"""
from fastapi import APIRouter, Depends, Query

from sponsor_register.application.dto.register_dto import LicenceHistoryDTO, RegisterPageDTO
from sponsor_register.application.use_cases.register_use_cases import RegisterUseCases
from sponsor_register.api.v1.dependencies.use_case_deps import get_register_use_cases


router = APIRouter(tags=["Register"])


@router.get(
    "/data",
    response_model=RegisterPageDTO,
    summary="Pagina de organizaciones activas con sus licencias"
)
async def get_register_page(
    from_position: int = Query(..., alias="from", description="Posicion inicial (1-based, inclusiva)"),
    to_position: int = Query(..., alias="to", description="Posicion final (inclusiva)"),
    search: str = Query("", description="Filtro por nombre o ciudad"),
    use_cases: RegisterUseCases = Depends(get_register_use_cases),
) -> RegisterPageDTO:
    """
    Retorna las organizaciones activas ordenadas por nombre entre `from` y `to`,
    el total de organizaciones que cumplen el filtro y la fecha del bootstrap.
    """
    return await use_cases.get_page(from_position, to_position, search)


@router.get(
    "/organisations/{organisation_id}/licences",
    response_model=LicenceHistoryDTO,
    summary="Historial de licencias de una organizacion"
)
async def get_licence_history(
    organisation_id: int,
    use_cases: RegisterUseCases = Depends(get_register_use_cases),
) -> LicenceHistoryDTO:
    return await use_cases.get_licence_history(organisation_id)
