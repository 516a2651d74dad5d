"""
Season report generation for Benchwarmer.
Runs the lineup engine for every week a team played and rolls the results up.
"""

import logging
from typing import Dict, Optional, Sequence

from ..data.models import (
    Player, WeekAnalysis, WeekResult, SeasonReport, SeasonSnapshot, Boxscore, TeamInfo,
)
from ..config.settings import get_config
from .lineup_optimizer import LineupOptimizer, get_actual_lineup, lineup_points
from .swap_chains import SwapChainBuilder


logger = logging.getLogger(__name__)


class ReportGenerator:
    """Builds per-week lineup analyses and a season summary for one team."""

    def __init__(self, max_chain_depth: Optional[int] = None):
        self.config = get_config()
        if max_chain_depth is None:
            max_chain_depth = self.config.analysis.max_chain_depth
        self.optimizer = LineupOptimizer()
        self.swap_builder = SwapChainBuilder(max_chain_depth)

    def analyze_week(self, roster: Sequence[Player], slot_counts: Dict[str, int]) -> WeekAnalysis:
        """Compare the lineup a team started against its best possible lineup."""
        optimal = self.optimizer.compute_optimal_lineup(roster, slot_counts)
        actual = get_actual_lineup(roster)
        actual_points = lineup_points(actual)

        points_missed = max(0.0, optimal.total_points - actual_points)

        swaps = []
        if points_missed > 0:
            swaps = self.swap_builder.build_swap_chains(actual, optimal, roster)

        return WeekAnalysis(
            optimal_lineup=optimal,
            actual_lineup=tuple(actual),
            actual_points=actual_points,
            points_missed=points_missed,
            swaps=tuple(swaps)
        )

    def generate_report(self, team_id: int, snapshot: SeasonSnapshot) -> SeasonReport:
        """Generate the season report for a team from a season snapshot."""
        team = next((t for t in snapshot.teams if t.team_id == team_id), None)
        if team is None:
            raise ValueError(f"Team not found: {team_id}")

        team_names = {t.team_id: t.name for t in snapshot.teams}
        league = snapshot.league

        report = SeasonReport(
            team_name=team.name,
            owner_name=team.owner_name or "Unknown Owner",
            league_name=league.name,
            league_size=len(snapshot.teams),
            season_id=snapshot.season_id,
            team_logo_url=team.logo_url,
            final_standings_position=team.final_standings_position
        )

        for week in range(1, league.total_weeks + 1):
            boxscores = snapshot.boxscores_by_week.get(week)
            if not boxscores:
                continue

            result = self._analyze_matchup(week, team, boxscores, team_names, snapshot)
            if result is None:
                continue

            self._record_week(report, result)

        logger.info(
            f"{team.name}: {len(report.weeks)} weeks analyzed, "
            f"{report.total_points_left_on_bench:.2f} points left on bench, "
            f"{report.blown_wins} blown wins"
        )
        return report

    def _analyze_matchup(self, week: int, team: TeamInfo, boxscores: Sequence[Boxscore],
                         team_names: Dict[int, str],
                         snapshot: SeasonSnapshot) -> Optional[WeekResult]:
        matchup = next((b for b in boxscores if b.involves(team.team_id)), None)
        if matchup is None:
            logger.debug(f"Week {week}: no matchup for {team.name}")
            return None

        is_home = matchup.home_team_id == team.team_id
        roster = matchup.home_roster if is_home else matchup.away_roster
        our_score = matchup.home_score if is_home else matchup.away_score
        opponent_score = matchup.away_score if is_home else matchup.home_score
        opponent_id = matchup.away_team_id if is_home else matchup.home_team_id

        # Bye weeks and unfinished matchups come back without rosters or scores
        if not roster:
            logger.debug(f"Week {week}: no roster data for {team.name}")
            return None
        if our_score is None or opponent_score is None:
            logger.debug(f"Week {week}: scores missing for {team.name}")
            return None

        analysis = self.analyze_week(roster, snapshot.league.slot_counts)
        optimal_score = analysis.optimal_lineup.total_points

        won = our_score > opponent_score
        lost = our_score < opponent_score
        is_blown_win = lost and optimal_score > opponent_score

        return WeekResult(
            week=week,
            is_playoffs=week >= snapshot.league.playoff_start_week,
            opponent_name=team_names.get(opponent_id, "Unknown Team"),
            actual_score=our_score,
            opponent_score=opponent_score,
            won=won,
            lost=lost,
            optimal_score=optimal_score,
            points_missed=analysis.points_missed,
            is_blown_win=is_blown_win,
            blown_win_margin=optimal_score - opponent_score if is_blown_win else 0.0,
            swaps=analysis.swaps
        )

    @staticmethod
    def _record_week(report: SeasonReport, result: WeekResult) -> None:
        if result.won:
            if result.is_playoffs:
                report.playoff_wins += 1
            else:
                report.regular_season_wins += 1
        if result.lost:
            if result.is_playoffs:
                report.playoff_losses += 1
            else:
                report.regular_season_losses += 1
        if result.is_blown_win:
            report.blown_wins += 1

        report.weeks.append(result)
        report.total_points_left_on_bench += result.points_missed

        if report.worst_week is None or result.points_missed > report.worst_week.points_missed:
            report.worst_week = result

        logger.info(
            f"Week {result.week} vs {result.opponent_name}: {result.actual_score:.2f}-"
            f"{result.opponent_score:.2f}, optimal {result.optimal_score:.2f}, "
            f"{len(result.swaps)} swaps"
        )
