from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, status

from equip_bridge.bridge.bone_resolver import resolve
from equip_bridge.bridge.catalog import ItemCatalog, default_catalog
from equip_bridge.bridge.equipment_state import EquipmentState
from equip_bridge.config import get_settings
from equip_bridge.models import (
    AttachmentResponse,
    AttachmentsRequest,
    EquipmentResponse,
    EquipRequest,
    OverridesRequest,
    ResolutionResponse,
    ResolveRequest,
)
from equip_bridge.services.attachment import AttachmentService

router = APIRouter()


@lru_cache(maxsize=1)
def get_catalog() -> ItemCatalog:
    """Return the session's item catalog, validated on first use."""
    return default_catalog(get_settings().catalog_path)


@lru_cache(maxsize=1)
def get_equipment_state() -> EquipmentState:
    """Return the session's equipment state."""
    return EquipmentState()


@router.get("/health", status_code=status.HTTP_200_OK)
async def health() -> dict[str, str]:
    """Simple liveness probe."""
    return {"status": "ok"}


@router.get("/catalog")
async def list_catalog(catalog: ItemCatalog = Depends(get_catalog)) -> list[dict]:
    return [item.to_dict() for item in catalog]


@router.get("/equipment", response_model=EquipmentResponse)
async def read_equipment(state: EquipmentState = Depends(get_equipment_state)) -> dict:
    return state.to_dict()


@router.post("/equipment", response_model=EquipmentResponse)
async def equip(
    request: EquipRequest,
    catalog: ItemCatalog = Depends(get_catalog),
    state: EquipmentState = Depends(get_equipment_state),
) -> dict:
    """Equip a catalog item, replacing whatever occupies its slot."""
    try:
        item = catalog.get(request.name)
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown item: {request.name}") from exc
    state.equip(item)
    return state.to_dict()


@router.delete("/equipment", response_model=EquipmentResponse)
async def clear_equipment(state: EquipmentState = Depends(get_equipment_state)) -> dict:
    state.clear_all()
    return state.to_dict()


@router.delete("/equipment/{slot}", response_model=EquipmentResponse)
async def unequip(slot: str, state: EquipmentState = Depends(get_equipment_state)) -> dict:
    try:
        state.unequip(slot)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return state.to_dict()


@router.put("/overrides", response_model=EquipmentResponse)
async def set_overrides(
    request: OverridesRequest,
    state: EquipmentState = Depends(get_equipment_state),
) -> dict:
    """Replace all transform overrides; omitted values are cleared."""
    try:
        state.set_rotation_override(request.rotation)
        state.set_position_override(request.position)
        state.set_scale_override(request.scale)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return state.to_dict()


@router.post("/resolve", response_model=ResolutionResponse)
async def resolve_bone(request: ResolveRequest) -> dict:
    """Resolve a target bone against a skeleton's bone names."""
    return resolve(request.bone_names, request.target_bone).to_dict()


@router.post("/attachments", response_model=list[AttachmentResponse])
async def plan_attachments(
    request: AttachmentsRequest,
    state: EquipmentState = Depends(get_equipment_state),
) -> list[dict]:
    """Resolved bones and effective transforms for every equipped item."""
    service = AttachmentService(state)
    return [plan.to_dict() for plan in service.plan(request.bone_names)]
