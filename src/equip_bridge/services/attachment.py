from __future__ import annotations

from typing import Optional

from loguru import logger

from equip_bridge.bridge.bone_resolver import BoneResolver, SkeletonBones
from equip_bridge.bridge.equipment_state import EquipmentState
from equip_bridge.bridge.types import AttachmentPlan, ItemDefinition, Vector3


class AttachmentService:
    """Combine equipment state and bone resolution into attachment plans."""

    def __init__(
        self,
        state: EquipmentState,
        resolver: Optional[BoneResolver] = None,
    ) -> None:
        self.state = state
        self.resolver = resolver or BoneResolver()

    def effective_transform(self, item: ItemDefinition) -> tuple[Vector3, Vector3, float]:
        """Position, rotation and scale for ``item`` with global overrides applied."""
        position = self.state.position_override
        rotation = self.state.rotation_override
        scale = self.state.scale_override
        return (
            position if position is not None else item.position_offset,
            rotation if rotation is not None else item.rotation_offset,
            scale if scale is not None else item.scale,
        )

    def plan(self, skeleton_bones: SkeletonBones) -> list[AttachmentPlan]:
        # Materialise once so generators and mappings are both read in order.
        bone_names = list(skeleton_bones.keys()) if hasattr(skeleton_bones, "keys") else list(skeleton_bones)

        plans: list[AttachmentPlan] = []
        for entry in self.state.get_equipped_items():
            resolution = self.resolver.resolve(bone_names, entry.bone_name)
            position, rotation, scale = self.effective_transform(entry.item)
            plan = AttachmentPlan(
                item=entry.item,
                slot=entry.item.slot,
                requested_bone=entry.bone_name,
                resolution=resolution,
                position=position,
                rotation=rotation,
                scale=scale,
            )
            if not plan.attached:
                logger.warning(
                    "Skipping attachment of {item}: bone {bone} not found",
                    item=entry.item.name,
                    bone=entry.bone_name,
                )
            plans.append(plan)

        logger.info(
            "Planned {attached}/{total} attachment(s)",
            attached=sum(1 for plan in plans if plan.attached),
            total=len(plans),
        )
        return plans


__all__ = [
    "AttachmentService",
]
