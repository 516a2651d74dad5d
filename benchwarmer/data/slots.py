"""
Lineup slot rules for the Benchwarmer engine.
Maps ESPN lineup slot labels to the player positions that may fill them.
"""

from typing import Dict, Iterable, Tuple


# ESPN lineup slot -> positions eligible to fill it
SLOT_ELIGIBILITY: Dict[str, Tuple[str, ...]] = {
    'QB': ('QB',),
    'RB': ('RB',),
    'WR': ('WR',),
    'TE': ('TE',),
    'K': ('K',),
    'D/ST': ('D/ST',),
    'FLEX': ('RB', 'WR', 'TE'),
    'RB/WR': ('RB', 'WR'),
    'WR/TE': ('WR', 'TE'),
    'RB/WR/TE': ('RB', 'WR', 'TE'),
    'OP': ('QB', 'RB', 'WR', 'TE'),  # SUPERFLEX
    'DL': ('DT', 'DE'),
    'LB': ('LB',),
    'DB': ('CB', 'S'),
    'DP': ('DT', 'DE', 'LB', 'CB', 'S'),  # defensive flex
}

BENCH_SLOTS = ('Bench', 'IR')

SLOT_DISPLAY_NAMES: Dict[str, str] = {
    'RB/WR/TE': 'FLEX',
    'RB/WR': 'FLEX',
    'WR/TE': 'FLEX',
    'OP': 'SUPERFLEX',
    'D/ST': 'D/ST',
}


def is_bench_slot(slot: str) -> bool:
    """Return True for roster labels that do not count as started."""
    return slot in BENCH_SLOTS


def eligible_positions_for_slot(slot: str) -> Tuple[str, ...]:
    """
    Positions allowed in a slot.

    Slots missing from the table only accept a player whose position matches
    the slot label itself.
    """
    return SLOT_ELIGIBILITY.get(slot, (slot,))


def is_eligible(player_positions: Iterable[str], slot_positions: Iterable[str]) -> bool:
    """A player fits a slot when any of their positions is one the slot accepts."""
    allowed = set(slot_positions)
    return any(pos in allowed for pos in player_positions)


def display_slot_name(slot: str) -> str:
    return SLOT_DISPLAY_NAMES.get(slot, slot)
