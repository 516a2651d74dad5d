"""
ESPN fantasy football payload conversion.

Validates the JSON shapes returned by the ESPN fantasy football client and turns
them into Benchwarmer models once, at the edge. ESPN reports some lineup slot
labels (e.g. "RB/WR") as player positions; those are corrected here using the
payload section of the config.
"""

import json
import logging
from pathlib import Path
from typing import List, Dict, Optional, Any, Iterable, Tuple

from ..data.models import Player, Boxscore, LeagueSettings, TeamInfo, SeasonSnapshot
from ..config.settings import PayloadConfig, get_config


logger = logging.getLogger(__name__)


class PayloadError(ValueError):
    """A provider payload is missing a field or has the wrong shape."""


def _require(payload: Dict[str, Any], key: str, context: str) -> Any:
    if not isinstance(payload, dict):
        raise PayloadError(f"{context} payload must be an object, got {type(payload).__name__}")
    if payload.get(key) is None:
        raise PayloadError(f"{context} payload is missing '{key}'")
    return payload[key]


def _as_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise PayloadError(f"'{field_name}' must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise PayloadError(f"'{field_name}' must be an integer, got {value!r}")


def _as_float(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise PayloadError(f"'{field_name}' must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise PayloadError(f"'{field_name}' must be a number, got {value!r}")


def _optional_float(value: Any, field_name: str) -> Optional[float]:
    if value is None:
        return None
    return _as_float(value, field_name)


def sanitize_positions(default_position: str, eligible_positions: Iterable[str],
                       payload_config: Optional[PayloadConfig] = None) -> Tuple[str, Tuple[str, ...]]:
    """Remap bogus default positions and drop slot labels from eligible positions."""
    cfg = payload_config or get_config().payload
    fixed_default = cfg.default_position_fixes.get(default_position, default_position)
    invalid = set(cfg.invalid_positions)
    eligible = tuple(pos for pos in eligible_positions if pos not in invalid)
    return fixed_default, eligible


def parse_player(payload: Dict[str, Any],
                 payload_config: Optional[PayloadConfig] = None) -> Player:
    """Convert a boxscore player payload into a Player."""
    player_id = _as_int(_require(payload, 'id', 'Player'), 'id')
    context = f"Player {player_id}"

    default_position = str(_require(payload, 'defaultPosition', context))
    eligible_raw = _require(payload, 'eligiblePositions', context)
    if not isinstance(eligible_raw, list):
        raise PayloadError(f"{context} 'eligiblePositions' must be a list")
    rostered_position = str(_require(payload, 'rosteredPosition', context))

    full_name = payload.get('fullName')
    if not full_name:
        full_name = " ".join(
            part for part in (payload.get('firstName'), payload.get('lastName')) if part
        ) or f"Player {player_id}"

    pro_team = payload.get('proTeamAbbreviation') or payload.get('proTeam') or ""

    default_position, eligible_positions = sanitize_positions(
        default_position, [str(p) for p in eligible_raw], payload_config
    )

    return Player(
        player_id=player_id,
        full_name=full_name,
        pro_team=str(pro_team),
        default_position=default_position,
        eligible_positions=eligible_positions,
        rostered_position=rostered_position,
        total_points=_as_float(payload.get('totalPoints') or 0, 'totalPoints'),
        projected_points=_optional_float(payload.get('projectedPoints'), 'projectedPoints')
    )


def parse_roster(payloads: Optional[List[Dict[str, Any]]],
                 payload_config: Optional[PayloadConfig] = None) -> Tuple[Player, ...]:
    if not payloads:
        return ()
    return tuple(parse_player(p, payload_config) for p in payloads)


def parse_boxscore(payload: Dict[str, Any],
                   payload_config: Optional[PayloadConfig] = None) -> Boxscore:
    """Convert a weekly matchup payload into a Boxscore."""
    return Boxscore(
        home_team_id=_as_int(_require(payload, 'homeTeamId', 'Boxscore'), 'homeTeamId'),
        away_team_id=_as_int(_require(payload, 'awayTeamId', 'Boxscore'), 'awayTeamId'),
        home_score=_optional_float(payload.get('homeScore'), 'homeScore'),
        away_score=_optional_float(payload.get('awayScore'), 'awayScore'),
        home_roster=parse_roster(payload.get('homeRoster'), payload_config),
        away_roster=parse_roster(payload.get('awayRoster'), payload_config)
    )


def parse_league_settings(payload: Dict[str, Any]) -> LeagueSettings:
    """Convert a league info payload into LeagueSettings."""
    roster_settings = _require(payload, 'rosterSettings', 'League')
    counts_raw = _require(roster_settings, 'lineupPositionCount', 'League rosterSettings')
    if not isinstance(counts_raw, dict):
        raise PayloadError("League 'lineupPositionCount' must be an object")
    slot_counts = {
        str(slot): _as_int(count, f'lineupPositionCount.{slot}')
        for slot, count in counts_raw.items()
    }

    schedule = _require(payload, 'scheduleSettings', 'League')
    regular_weeks = _as_int(
        _require(schedule, 'numberOfRegularSeasonMatchups', 'League scheduleSettings'),
        'numberOfRegularSeasonMatchups'
    )
    playoff_weeks = _as_int(schedule.get('numberOfPlayoffMatchups') or 0,
                            'numberOfPlayoffMatchups')

    return LeagueSettings(
        name=str(payload.get('name') or "Unnamed League"),
        slot_counts=slot_counts,
        regular_season_weeks=regular_weeks,
        playoff_weeks=playoff_weeks
    )


def parse_teams(payloads: Iterable[Dict[str, Any]]) -> List[TeamInfo]:
    """Convert team payloads into TeamInfo records."""
    teams = []
    for payload in payloads:
        team_id = _as_int(_require(payload, 'id', 'Team'), 'id')
        standing = payload.get('finalStandingsPosition')
        teams.append(TeamInfo(
            team_id=team_id,
            name=str(payload.get('name') or f"Team {team_id}"),
            owner_name=payload.get('ownerName') or "Unknown Owner",
            abbreviation=payload.get('abbreviation') or "",
            logo_url=payload.get('logoURL'),
            # ESPN reports 0 before the season is final
            final_standings_position=_as_int(standing, 'finalStandingsPosition') if standing else None
        ))
    return teams


def parse_season_snapshot(payload: Dict[str, Any],
                          payload_config: Optional[PayloadConfig] = None) -> SeasonSnapshot:
    """Convert a saved season payload (league, teams, boxscores per week)."""
    season_id = _as_int(_require(payload, 'seasonId', 'Season'), 'seasonId')
    league = parse_league_settings(_require(payload, 'league', 'Season'))
    teams = parse_teams(payload.get('teams') or [])

    boxscores_by_week: Dict[int, Tuple[Boxscore, ...]] = {}
    for week_key, week_boxscores in (payload.get('boxscores') or {}).items():
        week = _as_int(week_key, 'boxscores week')
        boxscores_by_week[week] = tuple(
            parse_boxscore(b, payload_config) for b in week_boxscores or []
        )

    logger.info(
        f"Loaded season {season_id} for {league.name}: {len(teams)} teams, "
        f"{len(boxscores_by_week)} weeks of boxscores"
    )
    return SeasonSnapshot(
        season_id=season_id,
        league=league,
        teams=tuple(teams),
        boxscores_by_week=boxscores_by_week
    )


def load_season_snapshot(path: str,
                         payload_config: Optional[PayloadConfig] = None) -> SeasonSnapshot:
    """Load a season snapshot previously saved as JSON."""
    snapshot_path = Path(path)
    if not snapshot_path.exists():
        raise FileNotFoundError(f"Season snapshot not found: {snapshot_path}")

    with open(snapshot_path, 'r', encoding='utf-8') as file:
        try:
            payload = json.load(file)
        except json.JSONDecodeError as e:
            raise PayloadError(f"Season snapshot is not valid JSON: {e}") from e

    return parse_season_snapshot(payload, payload_config)
