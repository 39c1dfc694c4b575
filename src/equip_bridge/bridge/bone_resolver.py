"""
Bone Resolver Module

Maps a requested attachment bone onto the bone names of an arbitrary
skeleton. Different rig authoring tools name the same joint differently
(``WristR``, ``mixamorigRightHand``, ``Hand_R``...), so resolution tries an
exact match, then a table of known aliases, then a permissive substring
heuristic for unknown rigs.
"""

from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple, Union

from loguru import logger

from equip_bridge.bridge.types import MatchTier, ResolutionResult

SkeletonBones = Union[Mapping[str, object], Iterable[str]]

# Format: {canonical_joint: (variant names, tried in order)}
# Three.js strips dots from bone names, so Wrist.R is loaded as WristR.
BONE_ALIASES: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        "rightHand": (
            "WristR",
            "Wrist.R",
            "mixamorigRightHand",
            "RightHand",
            "Hand_R",
            "hand_r",
            "hand.R",
        ),
        "leftHand": (
            "WristL",
            "Wrist.L",
            "mixamorigLeftHand",
            "LeftHand",
            "Hand_L",
            "hand_l",
            "hand.L",
        ),
        "spine": ("Torso", "mixamorigSpine", "Spine", "spine", "Spine1"),
        "head": ("Head", "mixamorigHead", "head"),
        "hips": ("Hips", "mixamorigHips", "hips", "pelvis"),
    }
)

RIGHT_HAND_FRAGMENTS: Tuple[str, ...] = ("righthand", "right_hand", "hand_r", "handr")
LEFT_HAND_FRAGMENTS: Tuple[str, ...] = ("lefthand", "left_hand", "hand_l", "handl")
RIG_PREFIX = "mixamorig"


class BoneResolver:
    """
    Resolves canonical attachment bones against a skeleton's bone names.

    Tiers, first hit wins:
    1. Exact name match
    2. Alias table: the target belongs to a known alias family and one of the
       family's variants exists in the skeleton
    3. Substring heuristics (right hand, left hand, generic), case-insensitive
    """

    def __init__(self, aliases: Optional[Mapping[str, Iterable[str]]] = None):
        """
        Initialize the resolver.

        Args:
            aliases: Alias table to consult, defaults to BONE_ALIASES
        """
        source = BONE_ALIASES if aliases is None else aliases
        self.aliases: Mapping[str, Tuple[str, ...]] = MappingProxyType(
            {canonical: tuple(variants) for canonical, variants in source.items()}
        )

    def resolve(self, skeleton_bones: SkeletonBones, target_bone: str) -> ResolutionResult:
        """
        Find the skeleton bone that best matches ``target_bone``.

        Args:
            skeleton_bones: Bone names, or a mapping from bone name to bone handle
            target_bone: Requested attachment bone

        Returns:
            ResolutionResult; ``bone_name`` is None when no tier matched
        """
        bone_names = self._bone_names(skeleton_bones)
        present = set(bone_names)
        result = ResolutionResult(target=target_bone)

        # Tier 1: exact
        if target_bone in present:
            return self._hit(result, target_bone, MatchTier.EXACT, f"exact: matched {target_bone!r}")
        result.trace.append(f"exact: {target_bone!r} not in skeleton")

        # Tier 2: alias families containing the target
        alias_match = self._match_alias(target_bone, present, result.trace)
        if alias_match is not None:
            return self._hit(result, alias_match, MatchTier.ALIAS, f"alias: matched {alias_match!r}")

        # Tier 3: substring heuristics
        heuristic = self._match_heuristic(target_bone, bone_names)
        if heuristic is not None:
            bone_name, tier = heuristic
            return self._hit(result, bone_name, tier, f"{tier.value}: matched {bone_name!r}")
        result.trace.append("heuristic: no partial match")

        logger.warning(
            "No bone found for {target}. Available: {bones}",
            target=target_bone,
            bones=bone_names,
        )
        return result

    def _bone_names(self, skeleton_bones: SkeletonBones) -> List[str]:
        """Extract bone names, preserving the skeleton's iteration order."""
        if isinstance(skeleton_bones, Mapping):
            return list(skeleton_bones.keys())
        return list(skeleton_bones)

    def _hit(
        self,
        result: ResolutionResult,
        bone_name: str,
        tier: MatchTier,
        message: str,
    ) -> ResolutionResult:
        result.bone_name = bone_name
        result.tier = tier
        result.trace.append(message)
        logger.info(
            "Bone {bone} resolved for {target} via {tier} match",
            bone=bone_name,
            target=result.target,
            tier=tier.value,
        )
        return result

    def _match_alias(
        self,
        target_bone: str,
        present: set,
        trace: List[str],
    ) -> Optional[str]:
        families = [
            canonical for canonical, variants in self.aliases.items() if target_bone in variants
        ]
        if not families:
            trace.append(f"alias: {target_bone!r} is not a known alias")
            return None

        for canonical in families:
            for variant in self.aliases[canonical]:
                if variant in present:
                    logger.debug(
                        "Alias family {family} maps {target} to {variant}",
                        family=canonical,
                        target=target_bone,
                        variant=variant,
                    )
                    return variant
            trace.append(f"alias: no variant of {canonical!r} in skeleton")
        return None

    def _match_heuristic(
        self,
        target_bone: str,
        bone_names: List[str],
    ) -> Optional[Tuple[str, MatchTier]]:
        """
        Permissive last-resort matching for unknown rigs.

        For each bone, in skeleton order, the right-hand, left-hand and
        generic checks run in that order. May produce false positives.
        """
        lower_target = target_bone.lower()
        wants_right = "right" in lower_target and "hand" in lower_target
        wants_left = "left" in lower_target and "hand" in lower_target
        generic = lower_target.replace(RIG_PREFIX, "")

        for name in bone_names:
            lower_name = name.lower()

            if wants_right and (
                any(fragment in lower_name for fragment in RIGHT_HAND_FRAGMENTS)
                or ("hand" in lower_name and "r" in lower_name)
            ):
                return name, MatchTier.RIGHT_HAND

            if wants_left and (
                any(fragment in lower_name for fragment in LEFT_HAND_FRAGMENTS)
                or ("hand" in lower_name and "l" in lower_name)
            ):
                return name, MatchTier.LEFT_HAND

            if generic in lower_name:
                return name, MatchTier.SUBSTRING

        return None


_default_resolver = BoneResolver()


def resolve(skeleton_bones: SkeletonBones, target_bone: str) -> ResolutionResult:
    """Resolve ``target_bone`` with the built-in alias table."""
    return _default_resolver.resolve(skeleton_bones, target_bone)


__all__ = [
    "BONE_ALIASES",
    "BoneResolver",
    "LEFT_HAND_FRAGMENTS",
    "RIGHT_HAND_FRAGMENTS",
    "resolve",
]
