"""
Explains the gap between an actual and an optimal lineup as lineup swaps.

Flex-style slots mean an improvement is not always a one-for-one swap: starting a
bench player can push a starter into another slot, which pushes someone else to
the bench. Each bench player who should have started is traced through those
moves to the starter who ends up benched.
"""

import logging
from dataclasses import dataclass
from typing import List, Dict, Optional, Sequence, Set, Tuple

from ..data.models import (
    Player, PlayerSlotAssignment, OptimalLineup, SimpleSwap, ChainSwap,
    IntermediateMove, LineupSwap,
)
from ..data.slots import is_bench_slot


logger = logging.getLogger(__name__)

DEFAULT_MAX_CHAIN_DEPTH = 10

BENCH = "Bench"


class LineupDataError(ValueError):
    """Actual and optimal lineups disagree with the roster they came from."""


@dataclass(frozen=True)
class PlayerChange:
    """Where a player sat in the actual lineup and where the optimal one puts them."""
    player: Player
    actual_slot: str
    optimal_slot: str


@dataclass
class ChainTrace:
    moves: List[PlayerChange]
    benched: Optional[PlayerChange]


def _slot_map(lineup: Sequence[PlayerSlotAssignment], roster_ids: Set[int],
              label: str) -> Dict[int, str]:
    slots: Dict[int, str] = {}
    for assignment in lineup:
        player_id = assignment.player.player_id
        if player_id not in roster_ids:
            raise LineupDataError(
                f"{label} lineup references player {player_id} "
                f"({assignment.player.full_name}) who is not on the roster"
            )
        if player_id in slots:
            raise LineupDataError(f"{label} lineup uses player {player_id} more than once")
        slots[player_id] = assignment.slot
    return slots


def _is_benched(slot: str) -> bool:
    return slot == BENCH or is_bench_slot(slot)


class SwapChainBuilder:
    """Reconstructs simple and chain swaps from actual vs optimal lineups."""

    def __init__(self, max_chain_depth: Optional[int] = None):
        if max_chain_depth is not None and max_chain_depth <= 0:
            raise ValueError("max_chain_depth must be positive")
        self.max_chain_depth = max_chain_depth

    def build_swap_chains(self, actual_lineup: Sequence[PlayerSlotAssignment],
                          optimal_lineup: OptimalLineup,
                          roster: Sequence[Player]) -> List[LineupSwap]:
        """Swaps that move the actual lineup to the optimal one, biggest gain first."""
        roster_ids = {p.player_id for p in roster}
        actual_slots = _slot_map(actual_lineup, roster_ids, "Actual")
        optimal_slots = _slot_map(optimal_lineup.starters, roster_ids, "Optimal")

        bench_to_starter, benched_by_slot, movers_by_slot = self._classify(
            roster, actual_slots, optimal_slots
        )

        depth = self._depth_for(optimal_lineup)
        used_movers: Set[int] = set()
        used_benched: Set[int] = set()
        swaps: List[LineupSwap] = []

        # Stable sort keeps roster order among equal scorers
        bench_to_starter.sort(key=lambda c: -c.player.total_points)

        for change in bench_to_starter:
            trace = self._trace_chain(change.optimal_slot, benched_by_slot, movers_by_slot,
                                      used_movers, used_benched, depth)
            if trace.benched is None:
                logger.debug(
                    f"No swap chain for {change.player.full_name} into {change.optimal_slot}"
                )
                continue

            used_benched.add(trace.benched.player.player_id)
            swaps.append(self._make_swap(change, trace))

        meaningful = [s for s in swaps if s.points_gained > 0]
        meaningful.sort(key=lambda s: (-s.points_gained, s.bench_player.player_id))
        return meaningful

    def _depth_for(self, optimal_lineup: OptimalLineup) -> int:
        if self.max_chain_depth is not None:
            return self.max_chain_depth
        return max(DEFAULT_MAX_CHAIN_DEPTH, len(optimal_lineup.starters))

    @staticmethod
    def _classify(roster: Sequence[Player], actual_slots: Dict[int, str],
                  optimal_slots: Dict[int, str]
                  ) -> Tuple[List[PlayerChange], Dict[str, List[PlayerChange]],
                             Dict[str, List[PlayerChange]]]:
        """Split roster players into bench->starter, starter->bench and slot movers."""
        bench_to_starter: List[PlayerChange] = []
        benched_by_slot: Dict[str, List[PlayerChange]] = {}
        movers_by_slot: Dict[str, List[PlayerChange]] = {}

        for player in roster:
            actual = actual_slots.get(player.player_id, BENCH)
            optimal = optimal_slots.get(player.player_id, BENCH)
            actual_bench = _is_benched(actual)
            optimal_bench = _is_benched(optimal)

            if actual_bench and not optimal_bench:
                bench_to_starter.append(PlayerChange(player, BENCH, optimal))
            elif not actual_bench and optimal_bench:
                benched_by_slot.setdefault(actual, []).append(PlayerChange(player, actual, BENCH))
            elif not actual_bench and not optimal_bench and actual != optimal:
                movers_by_slot.setdefault(actual, []).append(PlayerChange(player, actual, optimal))

        return bench_to_starter, benched_by_slot, movers_by_slot

    @staticmethod
    def _trace_chain(start_slot: str, benched_by_slot: Dict[str, List[PlayerChange]],
                     movers_by_slot: Dict[str, List[PlayerChange]],
                     used_movers: Set[int], used_benched: Set[int],
                     max_depth: int) -> ChainTrace:
        """
        Follow moves from start_slot until reaching a starter who lost their spot.

        Movers are claimed as soon as they are followed, even if the trace later
        dead-ends.
        """
        moves: List[PlayerChange] = []
        current_slot = start_slot

        for _ in range(max_depth):
            benched = next(
                (c for c in benched_by_slot.get(current_slot, ())
                 if c.player.player_id not in used_benched),
                None
            )
            if benched is not None:
                return ChainTrace(moves, benched)

            mover = next(
                (c for c in movers_by_slot.get(current_slot, ())
                 if c.player.player_id not in used_movers),
                None
            )
            if mover is None:
                return ChainTrace(moves, None)

            moves.append(mover)
            used_movers.add(mover.player.player_id)
            current_slot = mover.optimal_slot

        logger.debug(f"Swap chain from {start_slot} exceeded depth {max_depth}")
        return ChainTrace(moves, None)

    @staticmethod
    def _make_swap(change: PlayerChange, trace: ChainTrace) -> LineupSwap:
        benched = trace.benched
        points_gained = change.player.total_points - benched.player.total_points

        if not trace.moves:
            return SimpleSwap(
                bench_player=change.player,
                benched_player=benched.player,
                slot=change.optimal_slot,
                points_gained=points_gained
            )

        # If the bench player could have taken the benched player's slot outright,
        # the reshuffle in between doesn't change what the manager should have done.
        if change.player.is_eligible_for(benched.actual_slot):
            return SimpleSwap(
                bench_player=change.player,
                benched_player=benched.player,
                slot=benched.actual_slot,
                points_gained=points_gained
            )

        last_move = trace.moves[-1]
        return ChainSwap(
            bench_player=change.player,
            target_slot=last_move.actual_slot,
            intermediate_move=IntermediateMove(
                player=last_move.player,
                from_slot=last_move.actual_slot,
                to_slot=last_move.optimal_slot
            ),
            benched_player=benched.player,
            points_gained=points_gained
        )


def build_swap_chains(actual_lineup: Sequence[PlayerSlotAssignment],
                      optimal_lineup: OptimalLineup, roster: Sequence[Player],
                      max_chain_depth: Optional[int] = None) -> List[LineupSwap]:
    return SwapChainBuilder(max_chain_depth).build_swap_chains(actual_lineup, optimal_lineup, roster)
