"""
Bone resolution, item catalog and equipment state.
"""

from equip_bridge.bridge.bone_resolver import BoneResolver
from equip_bridge.bridge.catalog import CatalogError, ItemCatalog
from equip_bridge.bridge.equipment_state import EquipmentState
from equip_bridge.bridge.types import AttachmentPlan, ResolutionResult

__all__ = [
    "AttachmentPlan",
    "BoneResolver",
    "CatalogError",
    "EquipmentState",
    "ItemCatalog",
    "ResolutionResult",
]
