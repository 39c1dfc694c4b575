from typing import Optional

from pydantic import BaseModel, Field, field_validator

from equip_bridge.bridge.types import Vector3


class EquipRequest(BaseModel):
    name: str = Field(description="Catalog name of the item to equip")


class OverridesRequest(BaseModel):
    rotation: Optional[Vector3] = Field(default=None, description="Euler angles in radians")
    position: Optional[Vector3] = None
    scale: Optional[float] = Field(default=None, gt=0.0)


class ResolveRequest(BaseModel):
    bone_names: list[str] = Field(description="Bone names of the loaded skeleton, in skeleton order")
    target_bone: str

    @field_validator("target_bone")
    @classmethod
    def validate_target_bone(cls, value: str) -> str:
        if not value:
            msg = "target_bone must not be empty"
            raise ValueError(msg)
        return value


class AttachmentsRequest(BaseModel):
    bone_names: list[str] = Field(description="Bone names of the loaded skeleton, in skeleton order")


class ResolutionResponse(BaseModel):
    target: str
    bone_name: Optional[str] = None
    tier: str
    found: bool
    trace: list[str]


class OverridesResponse(BaseModel):
    rotation: Optional[list[float]] = None
    position: Optional[list[float]] = None
    scale: Optional[float] = None


class EquipmentResponse(BaseModel):
    equipped: dict[str, Optional[dict]]
    items: list[dict]
    overrides: OverridesResponse


class AttachmentResponse(BaseModel):
    item: dict
    slot: str
    requested_bone: str
    resolution: ResolutionResponse
    attached: bool
    position: list[float]
    rotation: list[float]
    scale: float
