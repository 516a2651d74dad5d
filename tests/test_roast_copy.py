"""
Tests for report copy.
"""

from benchwarmer.data.models import (
    Player, SimpleSwap, ChainSwap, IntermediateMove, SeasonReport, WeekResult,
)
from benchwarmer.analysis import roast_copy


def make_player(player_id, name, points):
    return Player(
        player_id=player_id,
        full_name=name,
        pro_team="FA",
        default_position="WR",
        eligible_positions=("WR",),
        rostered_position="Bench",
        total_points=points
    )


def make_report(**overrides):
    fields = dict(
        team_name="Sunday Scaries",
        owner_name="Pat",
        league_name="Office League",
        league_size=10,
        season_id=2024,
    )
    fields.update(overrides)
    return SeasonReport(**fields)


def make_week(week, points_missed):
    return WeekResult(
        week=week, is_playoffs=False, opponent_name="Them", actual_score=90.0,
        opponent_score=100.0, won=False, lost=True, optimal_score=90.0 + points_missed,
        points_missed=points_missed, is_blown_win=False, blown_win_margin=0.0
    )


class TestHashing:
    """Test cases for deterministic copy selection."""

    def test_hash_string_small_values(self):
        """Short strings hash to the plain rolling value."""
        assert roast_copy.hash_string("") == 0
        assert roast_copy.hash_string("a") == 97
        assert roast_copy.hash_string("ab") == 97 * 31 + 98

    def test_hash_string_wraps_to_32_bits(self):
        """Long strings stay within 32 bits and are non-negative."""
        value = roast_copy.hash_string("The Commissioner's Revenge 2024" * 10)
        assert 0 <= value <= 2 ** 31
        assert value == roast_copy.hash_string("The Commissioner's Revenge 2024" * 10)

    def test_pick_one(self):
        assert roast_copy.pick_one(["a", "b", "c"], 4) == "b"


class TestSeasonCopy:
    """Test cases for season-level copy."""

    def test_verdict_is_stable(self):
        """The same report always gets the same verdict."""
        report = make_report(weeks=[make_week(1, 20.0)], total_points_left_on_bench=20.0)
        assert roast_copy.get_verdict(report) == roast_copy.get_verdict(report)
        assert roast_copy.get_verdict(report).startswith("Final verdict:")

    def test_verdict_for_empty_season(self):
        """No weeks does not divide by zero."""
        assert roast_copy.get_verdict(make_report()).startswith("Final verdict:")
        assert roast_copy.get_bench_points_summary(make_report())

    def test_blown_wins_summary_mentions_count(self):
        report = make_report(blown_wins=5)
        assert "5" in roast_copy.get_blown_wins_summary(report)

    def test_format_record(self):
        assert roast_copy.format_record(9, 5) == "9-5"


class TestWeekCopy:
    """Test cases for per-week copy."""

    def test_perfect_week_gets_praise(self):
        assert roast_copy.get_week_headline(0.0, 3) == roast_copy.get_week_praise(3)

    def test_blown_win_message_has_margin(self):
        assert "12.50" in roast_copy.get_blown_win_message(12.5, 2)

    def test_describe_simple_swap(self):
        """Simple swaps name both players and the display slot."""
        swap = SimpleSwap(
            bench_player=make_player(1, "Bench Guy", 20.0),
            benched_player=make_player(2, "Starter Guy", 5.0),
            slot="RB/WR/TE",
            points_gained=15.0
        )
        text = roast_copy.describe_swap(swap)

        assert "Start Bench Guy" in text
        assert "Starter Guy" in text
        assert "FLEX" in text
        assert "+15.00" in text

    def test_describe_chain_swap(self):
        """Chain swaps show the intermediate move."""
        mover = make_player(3, "Mover", 12.0)
        swap = ChainSwap(
            bench_player=make_player(1, "Bench Guy", 15.0),
            target_slot="OP",
            intermediate_move=IntermediateMove(player=mover, from_slot="OP", to_slot="WR"),
            benched_player=make_player(2, "Starter Guy", 4.0),
            points_gained=11.0
        )
        text = roast_copy.describe_swap(swap)

        assert "Move Mover SUPERFLEX -> WR" in text
        assert "start Bench Guy at SUPERFLEX" in text
        assert "+11.00" in text


class TestSeasonSummary:
    """Test cases for the season summary line."""

    def test_champion_with_blown_wins(self):
        report = make_report(final_standings_position=1, blown_wins=2)
        assert roast_copy.get_season_summary(report) in (
            "A title won on vibes and good fortune.",
            "You tripped into a championship. The trophy can't tell.",
        )

    def test_champion_with_heavy_bench(self):
        """Over ten bench points a week flags a lucky title."""
        report = make_report(
            final_standings_position=1,
            weeks=[make_week(1, 14.0), make_week(2, 12.0)],
            total_points_left_on_bench=26.0
        )
        assert roast_copy.get_season_summary(report) in (
            "Champion in spite of the chaos. The rest of the league was worse.",
            "A title won around your lineup decisions, not with them.",
        )

    def test_last_place(self):
        """Finishing at the league size means last place."""
        report = make_report(final_standings_position=10)
        assert roast_copy.get_season_summary(report) in (
            "Rough from the opening week to the last.",
            "Some seasons are cursed. This was one.",
        )

    def test_playoff_team_with_blown_wins(self):
        report = make_report(final_standings_position=6, blown_wins=3)
        assert roast_copy.get_season_summary(report) in (
            "A playoff team despite your best efforts.",
            "Playoffs, with plenty of self-inflicted wounds.",
        )

    def test_winning_record_outside_playoffs(self):
        """Seventh place with a winning record falls to the record branch."""
        report = make_report(
            final_standings_position=7,
            regular_season_wins=8,
            regular_season_losses=6
        )
        assert roast_copy.get_season_summary(report) in (
            "A respectable season with room to grow.",
            "Not embarrassing. Not impressive either.",
        )

    def test_losing_record_unknown_standing(self):
        """No final standing and a losing record."""
        report = make_report(regular_season_wins=3, regular_season_losses=11, blown_wins=2)
        assert roast_copy.get_season_summary(report) in (
            "A losing season made worse by your own choices.",
            "Below .500, and some of that is on you.",
        )

    def test_seeded_by_team_and_season(self):
        """The same team and season always read the same way."""
        report = make_report(regular_season_wins=2, regular_season_losses=12)
        options = (
            "A forgettable season. There's always next year.",
            "Not your year. The numbers agree.",
            "A season best left behind.",
        )
        seed = roast_copy.hash_string("Sunday Scaries2024")
        assert roast_copy.get_season_summary(report) == options[seed % 3]
