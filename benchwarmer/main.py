"""
Main application entry point for Benchwarmer.
Loads a saved league season, runs the lineup hindsight report for one team and
prints it.
"""

import logging
import logging.handlers
from typing import Optional, List
import sys
import argparse

from .config.settings import get_config, use_config_file, AppConfig
from .api.espn_payload import load_season_snapshot
from .analysis.season_report import ReportGenerator
from .analysis import roast_copy
from .data.models import SeasonReport, WeekResult


def setup_logging(config: AppConfig, verbose: bool = False) -> None:
    """Setup logging configuration."""
    log_config = config.logging

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else getattr(logging, log_config.level))

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # File handler with rotation
    file_handler = logging.handlers.RotatingFileHandler(
        log_config.file,
        maxBytes=log_config.max_size_mb * 1024 * 1024,
        backupCount=log_config.backup_count
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # Console only gets warnings; the report itself goes to stdout
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.addHandler(console_handler)


class BenchReport:
    """Runs and renders a season lineup report."""

    def __init__(self, config: AppConfig):
        self.config = config
        self.generator = ReportGenerator()
        self.logger = logging.getLogger(__name__)

    def run(self, snapshot_path: str, team_id: int) -> SeasonReport:
        self.logger.info(f"Generating report for team {team_id} from {snapshot_path}")
        snapshot = load_season_snapshot(snapshot_path, self.config.payload)
        return self.generator.generate_report(team_id, snapshot)

    def render(self, report: SeasonReport, week: Optional[int] = None) -> List[str]:
        """Render the report as printable lines."""
        lines = [
            f"{report.team_name} ({report.owner_name}) - {report.league_name} {report.season_id}",
            roast_copy.get_season_summary(report),
            f"Regular season: {roast_copy.format_record(report.regular_season_wins, report.regular_season_losses)}"
            f"   Playoffs: {roast_copy.format_record(report.playoff_wins, report.playoff_losses)}",
            "",
            f"Points left on bench: {report.total_points_left_on_bench:.2f}",
            f"  {roast_copy.get_bench_points_summary(report)}",
            f"Blown wins: {report.blown_wins}",
            f"  {roast_copy.get_blown_wins_summary(report)}",
            "",
        ]

        weeks = [w for w in report.weeks if week is None or w.week == week]
        for result in weeks:
            lines.extend(self._render_week(result))

        if report.worst_week is not None and week is None:
            lines.append(
                f"Worst week: {report.worst_week.week} "
                f"({report.worst_week.points_missed:.2f} points missed)"
            )
        lines.append(roast_copy.get_verdict(report))
        return lines

    @staticmethod
    def _render_week(result: WeekResult) -> List[str]:
        outcome = "W" if result.won else "L" if result.lost else "T"
        label = "Playoffs " if result.is_playoffs else ""
        lines = [
            f"{label}Week {result.week} vs {result.opponent_name}: {outcome} "
            f"{result.actual_score:.2f}-{result.opponent_score:.2f} "
            f"(optimal {result.optimal_score:.2f}, missed {result.points_missed:.2f})",
            f"  {roast_copy.get_week_headline(result.points_missed, result.week)}",
        ]
        if result.is_blown_win:
            lines.append(f"  {roast_copy.get_blown_win_message(result.blown_win_margin, result.week)}")
        for description in roast_copy.describe_swaps(result.swaps):
            lines.append(f"  - {description}")
        lines.append("")
        return lines


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Benchwarmer season lineup report")
    parser.add_argument("snapshot", help="Season snapshot JSON file")
    parser.add_argument("--team", type=int, required=True, help="Team id to report on")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--week", type=int, help="Only print this week")
    parser.add_argument("--verbose", action="store_true", help="Debug logging to the console")

    args = parser.parse_args(argv)

    try:
        config = use_config_file(args.config) if args.config else get_config()
        setup_logging(config, args.verbose)

        runner = BenchReport(config)
        report = runner.run(args.snapshot, args.team)
        print("\n".join(runner.render(report, args.week)))
        sys.exit(0)

    except KeyboardInterrupt:
        print("\nStopped by user")
        sys.exit(0)
    except Exception as e:
        logging.getLogger(__name__).error(f"Report failed: {e}")
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
