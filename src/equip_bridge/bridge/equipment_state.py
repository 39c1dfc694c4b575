"""
Equipment State Module

Per-session record of which item occupies each slot, plus the global
transform overrides used while calibrating assets.
"""

from threading import RLock
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Union

from loguru import logger

from equip_bridge.bridge.types import EquipmentSlot, EquippedItem, ItemDefinition, Vector3

Listener = Callable[["EquipmentState"], None]


def _as_slot(slot: Union[EquipmentSlot, str]) -> EquipmentSlot:
    try:
        return EquipmentSlot(slot)
    except ValueError:
        valid = ", ".join(s.value for s in EquipmentSlot)
        raise ValueError(f"Unknown equipment slot {slot!r} (expected one of: {valid})") from None


def _as_vector(value: Optional[Sequence[float]], label: str) -> Optional[Vector3]:
    if value is None:
        return None
    components = tuple(float(component) for component in value)
    if len(components) != 3:
        raise ValueError(f"{label} override must have 3 components, got {len(components)}")
    return components  # type: ignore[return-value]


class EquipmentState:
    """
    Mutable equipment state for one viewer session.

    Holds at most one item per slot. Overrides, when set, replace the
    per-item offsets for every equipped item.
    """

    def __init__(self):
        self._lock = RLock()
        self._equipped: Dict[EquipmentSlot, Optional[ItemDefinition]] = {
            slot: None for slot in EquipmentSlot
        }
        self._rotation_override: Optional[Vector3] = None
        self._position_override: Optional[Vector3] = None
        self._scale_override: Optional[float] = None
        self._listeners: List[Listener] = []

    @property
    def equipped(self) -> Mapping[EquipmentSlot, Optional[ItemDefinition]]:
        """Read-only view of slot contents."""
        return MappingProxyType(self._equipped)

    @property
    def rotation_override(self) -> Optional[Vector3]:
        return self._rotation_override

    @property
    def position_override(self) -> Optional[Vector3]:
        return self._position_override

    @property
    def scale_override(self) -> Optional[float]:
        return self._scale_override

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback invoked after every state change.

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # Equipment ------------------------------------------------------

    def equip(self, item: ItemDefinition) -> None:
        """Place ``item`` in its slot, replacing any current occupant."""
        with self._lock:
            previous = self._equipped[item.slot]
            self._equipped[item.slot] = item
        if previous is not None and previous.path != item.path:
            logger.debug(
                "Replaced {previous} with {item} in {slot}",
                previous=previous.name,
                item=item.name,
                slot=item.slot.value,
            )
        else:
            logger.debug("Equipped {item} in {slot}", item=item.name, slot=item.slot.value)
        self._notify()

    def unequip(self, slot: Union[EquipmentSlot, str]) -> None:
        """Empty ``slot``. No-op if it is already empty."""
        slot = _as_slot(slot)
        with self._lock:
            self._equipped[slot] = None
        logger.debug("Unequipped {slot}", slot=slot.value)
        self._notify()

    def is_equipped(self, item: ItemDefinition) -> bool:
        """True if the item in ``item``'s slot has the same asset path."""
        current = self._equipped[item.slot]
        return current is not None and current.path == item.path

    def get_equipped_items(self) -> List[EquippedItem]:
        """Equipped items in slot declaration order."""
        items: List[EquippedItem] = []
        with self._lock:
            for slot in EquipmentSlot:
                item = self._equipped[slot]
                if item is not None:
                    items.append(EquippedItem(item=item, bone_name=item.attach_bone))
        return items

    def clear_all(self) -> None:
        """Empty every slot. Overrides are left as they are."""
        with self._lock:
            for slot in EquipmentSlot:
                self._equipped[slot] = None
        logger.debug("Cleared all equipment slots")
        self._notify()

    # Overrides ------------------------------------------------------

    def set_rotation_override(self, rotation: Optional[Sequence[float]]) -> None:
        value = _as_vector(rotation, "Rotation")
        with self._lock:
            self._rotation_override = value
        logger.debug("Rotation override set to {value}", value=value)
        self._notify()

    def set_position_override(self, position: Optional[Sequence[float]]) -> None:
        value = _as_vector(position, "Position")
        with self._lock:
            self._position_override = value
        logger.debug("Position override set to {value}", value=value)
        self._notify()

    def set_scale_override(self, scale: Optional[float]) -> None:
        value = None if scale is None else float(scale)
        if value is not None and value <= 0.0:
            raise ValueError(f"Scale override must be positive, got {value}")
        with self._lock:
            self._scale_override = value
        logger.debug("Scale override set to {value}", value=value)
        self._notify()

    def clear_overrides(self) -> None:
        """Unset the rotation, position and scale overrides."""
        with self._lock:
            self._rotation_override = None
            self._position_override = None
            self._scale_override = None
        logger.debug("Cleared transform overrides")
        self._notify()

    def overrides_dict(self) -> dict:
        """Convert the current overrides to a dictionary for serialization."""
        return {
            "rotation": list(self._rotation_override) if self._rotation_override else None,
            "position": list(self._position_override) if self._position_override else None,
            "scale": self._scale_override,
        }

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        with self._lock:
            return {
                "equipped": {
                    slot.value: item.to_dict() if item else None
                    for slot, item in self._equipped.items()
                },
                "items": [entry.to_dict() for entry in self.get_equipped_items()],
                "overrides": self.overrides_dict(),
            }


__all__ = [
    "EquipmentState",
]
