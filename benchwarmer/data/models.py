"""
Data models for the Benchwarmer lineup hindsight engine.
Defines the structure for players, lineups, swaps and season reports.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Tuple, Union
from enum import Enum

from .slots import is_eligible, eligible_positions_for_slot


class SwapType(Enum):
    """Kinds of lineup swap explanations."""
    SIMPLE = "simple"
    CHAIN = "chain"


@dataclass(frozen=True)
class Player:
    """A rostered player and what they scored for one week."""
    player_id: int
    full_name: str
    pro_team: str
    default_position: str
    eligible_positions: Tuple[str, ...]
    rostered_position: str
    total_points: float = 0.0
    projected_points: Optional[float] = None

    def is_eligible_for(self, slot: str) -> bool:
        """Check whether the player may fill the given lineup slot."""
        return is_eligible(self.eligible_positions, eligible_positions_for_slot(slot))


@dataclass(frozen=True)
class SlotRequirement:
    """A lineup slot and how many of it the league starts."""
    slot: str
    count: int
    eligible_positions: Tuple[str, ...]


@dataclass(frozen=True)
class PlayerSlotAssignment:
    """One player placed in one lineup slot."""
    player: Player
    slot: str
    points: float


@dataclass(frozen=True)
class OptimalLineup:
    """Best achievable starters for a week."""
    starters: Tuple[PlayerSlotAssignment, ...]
    total_points: float

    def player_ids(self) -> List[int]:
        return [a.player.player_id for a in self.starters]


@dataclass(frozen=True)
class IntermediateMove:
    """A started player shifted from one slot to another."""
    player: Player
    from_slot: str
    to_slot: str


@dataclass(frozen=True)
class SimpleSwap:
    """Start the bench player in the slot the benched player occupied."""
    bench_player: Player
    benched_player: Player
    slot: str
    points_gained: float
    swap_type: SwapType = field(default=SwapType.SIMPLE, init=False)


@dataclass(frozen=True)
class ChainSwap:
    """
    Start the bench player in target_slot after moving another starter out of it.

    The intermediate move vacates target_slot and pushes the benched player out
    of the slot it moves into.
    """
    bench_player: Player
    target_slot: str
    intermediate_move: IntermediateMove
    benched_player: Player
    points_gained: float
    swap_type: SwapType = field(default=SwapType.CHAIN, init=False)


LineupSwap = Union[SimpleSwap, ChainSwap]


@dataclass(frozen=True)
class TeamInfo:
    """Fantasy team in a league."""
    team_id: int
    name: str
    owner_name: str = "Unknown Owner"
    abbreviation: str = ""
    logo_url: Optional[str] = None
    final_standings_position: Optional[int] = None


@dataclass(frozen=True)
class LeagueSettings:
    """League rules needed to analyze a season."""
    name: str
    slot_counts: Dict[str, int] = field(default_factory=dict)
    regular_season_weeks: int = 0
    playoff_weeks: int = 0

    @property
    def total_weeks(self) -> int:
        return self.regular_season_weeks + self.playoff_weeks

    @property
    def playoff_start_week(self) -> int:
        return self.regular_season_weeks + 1


@dataclass(frozen=True)
class Boxscore:
    """One matchup for one week, with both rosters."""
    home_team_id: int
    away_team_id: int
    home_score: Optional[float]
    away_score: Optional[float]
    home_roster: Tuple[Player, ...] = ()
    away_roster: Tuple[Player, ...] = ()

    def involves(self, team_id: int) -> bool:
        return team_id in (self.home_team_id, self.away_team_id)


@dataclass(frozen=True)
class WeekAnalysis:
    """Engine output for one team-week."""
    optimal_lineup: OptimalLineup
    actual_lineup: Tuple[PlayerSlotAssignment, ...]
    actual_points: float
    points_missed: float
    swaps: Tuple[LineupSwap, ...] = ()


@dataclass(frozen=True)
class WeekResult:
    """Outcome of one week of the season for the analyzed team."""
    week: int
    is_playoffs: bool
    opponent_name: str
    actual_score: float
    opponent_score: float
    won: bool
    lost: bool
    optimal_score: float
    points_missed: float
    is_blown_win: bool
    blown_win_margin: float
    swaps: Tuple[LineupSwap, ...] = ()


@dataclass
class SeasonReport:
    """Season summary for one team."""
    team_name: str
    owner_name: str
    league_name: str
    league_size: int
    season_id: int
    team_logo_url: Optional[str] = None
    final_standings_position: Optional[int] = None
    total_points_left_on_bench: float = 0.0
    blown_wins: int = 0
    regular_season_wins: int = 0
    regular_season_losses: int = 0
    playoff_wins: int = 0
    playoff_losses: int = 0
    weeks: List[WeekResult] = field(default_factory=list)
    worst_week: Optional[WeekResult] = None

    def points_per_week(self) -> float:
        """Average points left on the bench per analyzed week."""
        if not self.weeks:
            return 0.0
        return self.total_points_left_on_bench / len(self.weeks)

    def regular_season_win_pct(self) -> float:
        games = self.regular_season_wins + self.regular_season_losses
        if games == 0:
            return 0.0
        return self.regular_season_wins / games


@dataclass(frozen=True)
class SeasonSnapshot:
    """Everything needed to analyze one league season, already fetched."""
    season_id: int
    league: LeagueSettings
    teams: Tuple[TeamInfo, ...] = ()
    boxscores_by_week: Dict[int, Tuple[Boxscore, ...]] = field(default_factory=dict)
