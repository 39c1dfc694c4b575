"""
Equipment Bridge

Attaches equipment meshes to the right joint of arbitrarily named character
skeletons and tracks what a character has equipped.
"""

from equip_bridge.bridge.bone_resolver import BONE_ALIASES, BoneResolver, resolve
from equip_bridge.bridge.catalog import ITEM_CATALOG, ItemCatalog
from equip_bridge.bridge.equipment_state import EquipmentState
from equip_bridge.bridge.types import EquipmentSlot, ItemDefinition, ItemType, MatchTier

__all__ = [
    "BONE_ALIASES",
    "BoneResolver",
    "EquipmentSlot",
    "EquipmentState",
    "ITEM_CATALOG",
    "ItemCatalog",
    "ItemDefinition",
    "ItemType",
    "MatchTier",
    "resolve",
]
