"""
Optimal lineup engine for Benchwarmer.
Finds the highest-scoring lineup a roster allowed for a week, and reads back the
lineup the manager actually set.
"""

import logging
from typing import List, Dict, Optional, Tuple, Sequence, FrozenSet

from ..data.models import Player, PlayerSlotAssignment, OptimalLineup, SlotRequirement
from ..data.slots import is_bench_slot, is_eligible
from .slot_requirements import build_slot_instances


logger = logging.getLogger(__name__)

# (score, assignment) of the best lineup found so far
SearchState = Tuple[float, Tuple[PlayerSlotAssignment, ...]]


def select_candidates(roster: Sequence[Player]) -> List[Player]:
    """
    Players the optimizer may start, best scorers first.

    Everyone who actually started stays in the pool whatever they scored; bench
    and IR players only matter when they scored points. Ties on points go to the
    lower player id.
    """
    pool = [
        p for p in roster
        if not is_bench_slot(p.rostered_position) or p.total_points > 0
    ]
    return sorted(pool, key=lambda p: (-p.total_points, p.player_id))


def get_actual_lineup(roster: Sequence[Player]) -> List[PlayerSlotAssignment]:
    """Lineup the manager set: every player not parked on the bench or IR."""
    return [
        PlayerSlotAssignment(player=p, slot=p.rostered_position, points=p.total_points)
        for p in roster
        if not is_bench_slot(p.rostered_position)
    ]


def lineup_points(lineup: Sequence[PlayerSlotAssignment]) -> float:
    return sum(a.points for a in lineup)


class LineupOptimizer:
    """Exact branch-and-bound search for the best player-to-slot assignment."""

    def compute_optimal_lineup(self, roster: Sequence[Player],
                               slot_counts: Dict[str, int]) -> OptimalLineup:
        """Compute the optimal lineup for a roster under a league's slot counts."""
        slots = build_slot_instances(slot_counts)
        candidates = select_candidates(roster)

        starters = self.find_optimal_assignment(candidates, slots)
        total = lineup_points(starters)

        logger.debug(
            f"Optimal lineup: {len(starters)}/{len(slots)} slots filled from "
            f"{len(candidates)} candidates, {total:.2f} points"
        )
        return OptimalLineup(starters=tuple(starters), total_points=total)

    def find_optimal_assignment(self, candidates: Sequence[Player],
                                slots: Sequence[SlotRequirement]) -> List[PlayerSlotAssignment]:
        """
        Assign candidates to slot instances maximizing total points.

        `candidates` must already be in tie-break order (see select_candidates);
        among equally scoring assignments the first one reached in that order wins.
        A slot instance with no eligible unused candidate is left out.
        """
        best_score, best_assignment = self._search(
            tuple(candidates), tuple(slots), 0, frozenset(), (), 0.0,
            (float('-inf'), ())
        )
        return list(best_assignment)

    def _search(self, candidates: Tuple[Player, ...], slots: Tuple[SlotRequirement, ...],
                slot_index: int, used_ids: FrozenSet[int],
                assignment: Tuple[PlayerSlotAssignment, ...], score: float,
                best: SearchState) -> SearchState:
        best_score = best[0]

        if slot_index == len(slots):
            if score > best_score:
                return score, assignment
            return best

        remaining_slots = len(slots) - slot_index
        if score + self._upper_bound(candidates, used_ids, remaining_slots) <= best_score:
            return best

        slot = slots[slot_index]
        found_any = False

        for player in candidates:
            if player.player_id in used_ids:
                continue
            if not is_eligible(player.eligible_positions, slot.eligible_positions):
                continue

            found_any = True
            placed = PlayerSlotAssignment(player=player, slot=slot.slot, points=player.total_points)
            best = self._search(
                candidates, slots, slot_index + 1,
                used_ids | {player.player_id},
                assignment + (placed,),
                score + player.total_points,
                best
            )

        if not found_any:
            # Nobody left who can play this slot; it stays empty
            best = self._search(candidates, slots, slot_index + 1, used_ids,
                                assignment, score, best)

        return best

    @staticmethod
    def _upper_bound(candidates: Tuple[Player, ...], used_ids: FrozenSet[int],
                     remaining_slots: int) -> float:
        """Most points the remaining slots could add, ignoring eligibility."""
        bound = 0.0
        taken = 0
        for player in candidates:
            if taken == remaining_slots:
                break
            if player.player_id in used_ids:
                continue
            if player.total_points <= 0:
                # Sorted descending, so nothing further can add points
                break
            bound += player.total_points
            taken += 1
        return bound


def compute_optimal_lineup(roster: Sequence[Player], slot_counts: Dict[str, int],
                           optimizer: Optional[LineupOptimizer] = None) -> OptimalLineup:
    """Convenience wrapper around LineupOptimizer.compute_optimal_lineup."""
    return (optimizer or LineupOptimizer()).compute_optimal_lineup(roster, slot_counts)
