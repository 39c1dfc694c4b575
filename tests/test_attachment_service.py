from __future__ import annotations

import pytest

from equip_bridge.bridge.catalog import ItemCatalog, ITEM_CATALOG
from equip_bridge.bridge.equipment_state import EquipmentState
from equip_bridge.bridge.types import EquipmentSlot, MatchTier
from equip_bridge.services.attachment import AttachmentService

SKELETON = ["Hips", "Torso", "Hand_R", "Hand_L", "Head"]


@pytest.fixture
def catalog() -> ItemCatalog:
    return ItemCatalog(ITEM_CATALOG)


@pytest.fixture
def state(catalog: ItemCatalog) -> EquipmentState:
    state = EquipmentState()
    state.equip(catalog.get("Claymore"))
    state.equip(catalog.get("Shield"))
    return state


def test_plan_resolves_bones_in_slot_order(state: EquipmentState):
    plans = AttachmentService(state).plan(SKELETON)

    assert [plan.slot for plan in plans] == [EquipmentSlot.MAIN_HAND, EquipmentSlot.OFF_HAND]
    assert [plan.requested_bone for plan in plans] == ["WristR", "WristL"]
    assert [plan.resolution.bone_name for plan in plans] == ["Hand_R", "Hand_L"]
    assert all(plan.resolution.tier == MatchTier.ALIAS for plan in plans)
    assert all(plan.attached for plan in plans)


def test_plan_uses_item_offsets_without_overrides(state: EquipmentState, catalog: ItemCatalog):
    claymore_plan = AttachmentService(state).plan(SKELETON)[0]
    claymore = catalog.get("Claymore")

    assert claymore_plan.position == claymore.position_offset
    assert claymore_plan.rotation == claymore.rotation_offset
    assert claymore_plan.scale == 0.5


def test_overrides_apply_to_every_item(state: EquipmentState, catalog: ItemCatalog):
    state.set_scale_override(0.01)
    state.set_rotation_override((0.0, 1.5, 0.0))

    plans = AttachmentService(state).plan(SKELETON)

    assert [plan.scale for plan in plans] == [0.01, 0.01]
    assert [plan.rotation for plan in plans] == [(0.0, 1.5, 0.0), (0.0, 1.5, 0.0)]
    # Position override unset, item offsets still apply
    assert [plan.position for plan in plans] == [
        catalog.get("Claymore").position_offset,
        catalog.get("Shield").position_offset,
    ]


def test_unresolved_bone_is_skipped_not_raised(state: EquipmentState):
    plans = AttachmentService(state).plan({"Tail": object()})

    assert len(plans) == 2
    assert not any(plan.attached for plan in plans)
    assert plans[0].to_dict()["resolution"]["tier"] == "none"


def test_empty_state_plans_nothing():
    assert AttachmentService(EquipmentState()).plan(SKELETON) == []
