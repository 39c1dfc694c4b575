"""
Item Catalog Module

Static registry of equippable items. Entries are validated when the catalog
is built so a malformed entry fails at load time rather than at equip time.
"""

import json
import math
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Union

from loguru import logger
from pydantic import ValidationError

from equip_bridge.bridge.types import EquipmentSlot, ItemDefinition, ItemType

DEG_35 = math.radians(35)

ASSET_ROOT = "/assets/Ultimate RPG Items Bundle-glb"

# Scale compensates for differing root scale conventions between item and
# avatar assets.
ITEM_CATALOG = (
    ItemDefinition(
        name="Sword",
        path=f"{ASSET_ROOT}/Sword.glb",
        type=ItemType.WEAPON,
        slot=EquipmentSlot.MAIN_HAND,
        attach_bone="WristR",
        scale=0.5,
        position_offset=(0.0, 0.0, 0.0),
        rotation_offset=(0.0, 0.0, 0.0),
    ),
    ItemDefinition(
        name="Claymore",
        path=f"{ASSET_ROOT}/Claymore.glb",
        type=ItemType.WEAPON,
        slot=EquipmentSlot.MAIN_HAND,
        attach_bone="WristR",
        scale=0.5,
        position_offset=(0.0, 0.0, 0.0),
        rotation_offset=(DEG_35, 0.0, 0.0),
    ),
    ItemDefinition(
        name="Shield",
        path=f"{ASSET_ROOT}/Shield Round.glb",
        type=ItemType.SHIELD,
        slot=EquipmentSlot.OFF_HAND,
        attach_bone="WristL",
        scale=0.5,
        position_offset=(0.0, 0.0, 0.0),
        rotation_offset=(DEG_35, 0.0, 0.0),
    ),
    ItemDefinition(
        name="Spear",
        path=f"{ASSET_ROOT}/Spear.glb",
        type=ItemType.WEAPON,
        slot=EquipmentSlot.MAIN_HAND,
        attach_bone="WristR",
        scale=0.5,
        position_offset=(0.0, 0.0, 0.0),
        rotation_offset=(DEG_35, 0.0, 0.0),
    ),
    ItemDefinition(
        name="Knife",
        path=f"{ASSET_ROOT}/Knife.glb",
        type=ItemType.WEAPON,
        slot=EquipmentSlot.MAIN_HAND,
        attach_bone="WristR",
        scale=0.5,
        position_offset=(0.0, 0.0, 0.0),
        rotation_offset=(DEG_35, 0.0, 0.0),
    ),
)


class CatalogError(ValueError):
    """Raised when catalog data is malformed or inconsistent."""


class ItemCatalog:
    """
    Read-only collection of item definitions keyed by name and path.

    Names and paths must be unique across the catalog.
    """

    def __init__(self, items: Iterable[Union[ItemDefinition, Mapping]]):
        self._items: List[ItemDefinition] = []
        self._by_name: Dict[str, ItemDefinition] = {}
        self._by_path: Dict[str, ItemDefinition] = {}

        for index, entry in enumerate(items):
            item = self._coerce(index, entry)
            if item.name in self._by_name:
                raise CatalogError(f"Duplicate item name in catalog: {item.name!r}")
            if item.path in self._by_path:
                raise CatalogError(f"Duplicate item path in catalog: {item.path!r}")
            self._items.append(item)
            self._by_name[item.name] = item
            self._by_path[item.path] = item

    def _coerce(self, index: int, entry: Union[ItemDefinition, Mapping]) -> ItemDefinition:
        if isinstance(entry, ItemDefinition):
            return entry
        if not isinstance(entry, Mapping):
            raise CatalogError(f"Catalog entry {index} must be an object, got {type(entry).__name__}")
        try:
            return ItemDefinition.model_validate(dict(entry))
        except ValidationError as exc:
            raise CatalogError(f"Malformed catalog entry {index}: {exc}") from exc

    def get(self, name: str) -> ItemDefinition:
        """Return the item called ``name``; raises KeyError if unknown."""
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"Unknown item: {name}") from None

    def by_path(self, path: str) -> Optional[ItemDefinition]:
        return self._by_path.get(path)

    def for_slot(self, slot: Union[EquipmentSlot, str]) -> List[ItemDefinition]:
        slot = EquipmentSlot(slot)
        return [item for item in self._items if item.slot == slot]

    def __iter__(self) -> Iterator[ItemDefinition]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name


def load_catalog(path: Path) -> ItemCatalog:
    """
    Load an item catalog from a JSON file.

    The file must hold a list of item objects using ItemDefinition field names.

    Args:
        path: JSON file to read

    Returns:
        Validated ItemCatalog
    """
    path = Path(path)
    if not path.exists():
        msg = f"Catalog file does not exist: {path}"
        raise FileNotFoundError(msg)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Catalog file {path} is not valid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise CatalogError(f"Catalog file {path} must contain a list of items")

    catalog = ItemCatalog(data)
    logger.info("Loaded {count} item(s) from {path}", count=len(catalog), path=str(path))
    return catalog


def default_catalog(catalog_path: Optional[Path] = None) -> ItemCatalog:
    """Return the catalog at ``catalog_path``, or the built-in one."""
    if catalog_path is not None:
        return load_catalog(catalog_path)
    return ItemCatalog(ITEM_CATALOG)


__all__ = [
    "CatalogError",
    "ITEM_CATALOG",
    "ItemCatalog",
    "default_catalog",
    "load_catalog",
]
