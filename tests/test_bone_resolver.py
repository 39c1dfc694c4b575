from __future__ import annotations

import pytest

from equip_bridge.bridge.bone_resolver import BONE_ALIASES, BoneResolver, resolve
from equip_bridge.bridge.types import MatchTier


def test_exact_match_wins_over_alias_family():
    # WristR is listed before Hand_R in the rightHand family, but Hand_R is present verbatim.
    result = resolve(["WristR", "Hand_R"], "Hand_R")

    assert result.bone_name == "Hand_R"
    assert result.tier == MatchTier.EXACT
    assert result.found


def test_alias_match_before_heuristics():
    result = resolve({"Hand_R"}, "WristR")

    assert result.bone_name == "Hand_R"
    assert result.tier == MatchTier.ALIAS


def test_alias_variants_tried_in_declared_order():
    result = resolve(["RightHand", "Wrist.R"], "hand.R")

    assert result.bone_name == "Wrist.R"
    assert result.tier == MatchTier.ALIAS


def test_right_hand_heuristic_for_unknown_rig():
    result = resolve({"RHand_Custom"}, "righthand")

    assert result.bone_name == "RHand_Custom"
    assert result.tier == MatchTier.RIGHT_HAND


def test_right_hand_heuristic_is_permissive():
    # "forearm_hand" contains "hand" and an "r", which is enough for the loose fallback.
    result = resolve(["Chest", "Forearm_Hand"], "RightHand")

    assert result.bone_name == "Forearm_Hand"
    assert result.tier == MatchTier.RIGHT_HAND


def test_left_hand_heuristic_scans_skeleton_order():
    result = resolve(["Spine", "L_Hand_Custom", "LeftHandIndex1"], "LeftHand")

    assert result.bone_name == "L_Hand_Custom"
    assert result.tier == MatchTier.LEFT_HAND


def test_generic_substring_strips_rig_prefix():
    result = resolve(["Armature", "mixamorig:Spine2"], "mixamorigSpine")

    assert result.bone_name == "mixamorig:Spine2"
    assert result.tier == MatchTier.SUBSTRING


def test_generic_substring_is_case_insensitive():
    result = resolve(["Head", "NeckTwist01"], "MixamoRigNeck")

    assert result.bone_name == "NeckTwist01"
    assert result.tier == MatchTier.SUBSTRING


def test_no_match_returns_sentinel():
    result = resolve({"Tail"}, "WristR")

    assert result.bone_name is None
    assert result.tier == MatchTier.NONE
    assert not result.found
    assert result.trace[-1] == "heuristic: no partial match"


def test_accepts_mapping_of_bone_handles():
    skeleton = {"Hips": object(), "Spine": object()}

    result = resolve(skeleton, "Spine")

    assert result.bone_name == "Spine"
    assert result.tier == MatchTier.EXACT


def test_trace_records_each_tier():
    result = resolve(["Hand_R"], "WristR")

    assert result.trace[0].startswith("exact:")
    assert result.trace[-1] == "alias: matched 'Hand_R'"
    assert result.to_dict()["tier"] == "alias"


def test_custom_alias_table():
    resolver = BoneResolver(aliases={"tail": ["TailBase", "Tail_01"]})

    result = resolver.resolve(["Root", "Tail_01"], "TailBase")

    assert result.bone_name == "Tail_01"
    assert result.tier == MatchTier.ALIAS


def test_alias_table_is_read_only():
    with pytest.raises(TypeError):
        BONE_ALIASES["tail"] = ("Tail",)  # type: ignore[index]

    assert BONE_ALIASES["rightHand"][0] == "WristR"
    assert "pelvis" in BONE_ALIASES["hips"]
