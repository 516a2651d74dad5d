"""
Turns a league's lineup settings into the ordered slot instances the optimizer fills.
"""

from typing import Dict, List, Iterable

from ..data.models import SlotRequirement
from ..data.slots import is_bench_slot, eligible_positions_for_slot


def parse_slot_requirements(slot_counts: Dict[str, int]) -> List[SlotRequirement]:
    """Build one requirement per started slot type, skipping bench/IR and empty counts."""
    requirements = []
    for slot, count in slot_counts.items():
        if is_bench_slot(slot):
            continue
        if count <= 0:
            continue
        requirements.append(SlotRequirement(
            slot=slot,
            count=count,
            eligible_positions=eligible_positions_for_slot(slot)
        ))
    return requirements


def expand_slots(requirements: Iterable[SlotRequirement]) -> List[SlotRequirement]:
    """Split each requirement into `count` single-player slot instances."""
    expanded = []
    for req in requirements:
        for _ in range(req.count):
            expanded.append(SlotRequirement(
                slot=req.slot,
                count=1,
                eligible_positions=req.eligible_positions
            ))
    return expanded


def sort_slots_by_restrictiveness(slots: Iterable[SlotRequirement]) -> List[SlotRequirement]:
    # Stable, so slots with equal restrictiveness keep league order
    return sorted(slots, key=lambda s: len(s.eligible_positions))


def build_slot_instances(slot_counts: Dict[str, int]) -> List[SlotRequirement]:
    """Slot instances to fill, most restrictive first."""
    return sort_slots_by_restrictiveness(expand_slots(parse_slot_requirements(slot_counts)))
