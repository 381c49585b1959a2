from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from isdapresyo.api.deps import get_fish_price_service, require_admin
from isdapresyo.api.schemas.errors import MessageResponse, ValidationErrorResponse
from isdapresyo.api.schemas.fish_prices import FishPriceResponse, OkResponse
from isdapresyo.domain.errors import RecordNotFound
from isdapresyo.domain.models.auth import AdminClaims
from isdapresyo.services.fish_price_service import FishPriceService
from isdapresyo.validation import FishPriceInput, validate_fish_type

router = APIRouter(prefix="/api", tags=["fish-prices"])

ServiceDep = Annotated[FishPriceService, Depends(get_fish_price_service)]
AdminDep = Annotated[AdminClaims, Depends(require_admin)]
RecordId = Annotated[int, Path(ge=1)]

_ADMIN_RESPONSES = {
    400: {"model": ValidationErrorResponse},
    403: {"model": MessageResponse},
    404: {"model": MessageResponse},
}


@router.get("/fish-types", response_model=list[str])
async def list_fish_types(service: ServiceDep) -> list[str]:
    """Distinct fish types, ascending."""
    return await service.list_fish_types()


@router.get("/fish-prices", response_model=list[FishPriceResponse])
async def list_latest_fish_prices(service: ServiceDep) -> list[FishPriceResponse]:
    """Latest record per fish type."""
    records = await service.list_latest()
    return [FishPriceResponse.model_validate(r) for r in records]


@router.get(
    "/fish-prices/{fish_type}",
    response_model=FishPriceResponse,
    responses={404: {"model": MessageResponse}},
)
async def get_latest_fish_price(fish_type: str, service: ServiceDep) -> FishPriceResponse:
    record = await service.get_latest(validate_fish_type(fish_type))
    if record is None:
        raise RecordNotFound(fish_type)
    return FishPriceResponse.model_validate(record)


@router.post(
    "/fish-prices",
    response_model=FishPriceResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ADMIN_RESPONSES,
)
async def create_fish_price(admin: AdminDep, body: FishPriceInput, service: ServiceDep) -> FishPriceResponse:
    record = await service.create(body.to_draft())
    return FishPriceResponse.model_validate(record)


@router.put("/fish-prices/{record_id}", response_model=FishPriceResponse, responses=_ADMIN_RESPONSES)
async def update_fish_price(
    admin: AdminDep, record_id: RecordId, body: FishPriceInput, service: ServiceDep
) -> FishPriceResponse:
    """Full replace. date_updated is kept when the payload omits it."""
    record = await service.update(record_id, body.to_draft())
    if record is None:
        raise RecordNotFound(record_id)
    return FishPriceResponse.model_validate(record)


@router.delete("/fish-prices/{record_id}", response_model=OkResponse, responses=_ADMIN_RESPONSES)
async def delete_fish_price(admin: AdminDep, record_id: RecordId, service: ServiceDep) -> OkResponse:
    deleted = await service.delete(record_id)
    if not deleted:
        raise RecordNotFound(record_id)
    return OkResponse(ok=True)
