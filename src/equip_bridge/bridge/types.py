"""
Data models and types for the Equipment Bridge.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

Vector3 = Tuple[float, float, float]

ZERO_VECTOR: Vector3 = (0.0, 0.0, 0.0)


class ItemType(str, Enum):
    """Item classification. Does not affect bone resolution."""

    WEAPON = "weapon"
    SHIELD = "shield"
    ARMOR = "armor"
    ACCESSORY = "accessory"


class EquipmentSlot(str, Enum):
    """Equipment slots, in canonical attachment order."""

    MAIN_HAND = "mainHand"
    OFF_HAND = "offHand"
    BACK = "back"


class MatchTier(str, Enum):
    """Resolution tier that produced a bone match."""

    EXACT = "exact"
    ALIAS = "alias"
    RIGHT_HAND = "right_hand"
    LEFT_HAND = "left_hand"
    SUBSTRING = "substring"
    NONE = "none"


class ItemDefinition(BaseModel):
    """Catalog entry for an equippable item."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    path: str = Field(min_length=1, description="Opaque reference to the item's 3D asset")
    type: ItemType
    slot: EquipmentSlot
    attach_bone: str = Field(min_length=1, description="Canonical bone the item attaches to")
    scale: float = Field(default=1.0, gt=0.0)
    position_offset: Vector3 = ZERO_VECTOR
    rotation_offset: Vector3 = Field(default=ZERO_VECTOR, description="Euler angles in radians")

    @field_validator("name", "path", "attach_bone")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "value must not be blank"
            raise ValueError(msg)
        return value

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return self.model_dump(mode="json")


@dataclass
class EquippedItem:
    """An equipped item paired with the bone it requests."""

    item: ItemDefinition
    bone_name: str

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "item": self.item.to_dict(),
            "bone_name": self.bone_name,
        }


@dataclass
class ResolutionResult:
    """Outcome of resolving a target bone against a skeleton."""

    target: str
    bone_name: Optional[str] = None
    tier: MatchTier = MatchTier.NONE
    trace: List[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.bone_name is not None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "target": self.target,
            "bone_name": self.bone_name,
            "tier": self.tier.value,
            "found": self.found,
            "trace": self.trace,
        }


@dataclass
class AttachmentPlan:
    """Resolved bone and effective transform for one equipped item."""

    item: ItemDefinition
    slot: EquipmentSlot
    requested_bone: str
    resolution: ResolutionResult
    position: Vector3 = ZERO_VECTOR
    rotation: Vector3 = ZERO_VECTOR
    scale: float = 1.0

    @property
    def attached(self) -> bool:
        return self.resolution.found

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "item": self.item.to_dict(),
            "slot": self.slot.value,
            "requested_bone": self.requested_bone,
            "resolution": self.resolution.to_dict(),
            "attached": self.attached,
            "position": list(self.position),
            "rotation": list(self.rotation),
            "scale": self.scale,
        }
