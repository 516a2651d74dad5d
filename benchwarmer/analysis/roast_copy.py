"""
Report copy for Benchwarmer.

All the playful text in a report comes from here. Lines are picked with a stable
hash of the team name and season, so the same report always reads the same way.
"""

from typing import List, Sequence, TypeVar

from ..data.models import SeasonReport, LineupSwap, ChainSwap
from ..data.slots import display_slot_name


T = TypeVar("T")


def hash_string(text: str) -> int:
    """32-bit rolling string hash (h * 31 + c), returned as a non-negative int."""
    h = 0
    for ch in text:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def pick_one(options: Sequence[T], seed: int) -> T:
    return options[seed % len(options)]


def _season_seed(report: SeasonReport) -> int:
    return hash_string(f"{report.team_name}{report.season_id}")


def format_record(wins: int, losses: int) -> str:
    return f"{wins}-{losses}"


def get_verdict(report: SeasonReport) -> str:
    """One-line verdict on the whole season."""
    per_week = report.points_per_week()
    win_pct = report.regular_season_win_pct()
    seed = _season_seed(report)
    champion = report.final_standings_position == 1
    last_place = (
        report.final_standings_position is not None
        and report.final_standings_position == report.league_size
    )

    if champion and report.blown_wins > 0:
        return pick_one([
            "Final verdict: You won the league while trying very hard not to.",
            "Final verdict: A title earned by luck, not lineups.",
        ], seed)
    if champion and report.total_points_left_on_bench < 50:
        return pick_one([
            "Final verdict: A clean championship run. Nothing to see here.",
            "Final verdict: Annoyingly well managed. Congratulations.",
        ], seed)
    if champion:
        return "Final verdict: Champion, with a bench that deserved more credit."
    if last_place:
        return pick_one([
            "Final verdict: Last place. At least it was a team effort.",
            "Final verdict: The basement was yours from the start.",
        ], seed)
    if report.blown_wins >= 3:
        return pick_one([
            f"Final verdict: {report.blown_wins} blown wins. That takes commitment.",
            "Final verdict: You didn't lose those games, you gave them away.",
        ], seed)
    if per_week > 15:
        return pick_one([
            "Final verdict: Your bench could have fielded its own team.",
            f"Final verdict: {per_week:.1f} points a week on the bench. Remarkable.",
        ], seed)
    if per_week > 10:
        return "Final verdict: Your bench outscored some starting lineups."
    if win_pct < 0.4 and report.blown_wins >= 2:
        return "Final verdict: Your record could have been respectable. It isn't."
    if report.blown_wins == 2:
        return "Final verdict: Two wins walked out the door on your watch."
    if report.blown_wins == 1:
        return "Final verdict: One win thrown away. It happens. It happened to you."
    if win_pct >= 0.6 and per_week > 8:
        return "Final verdict: You won despite your lineups, not because of them."
    if win_pct >= 0.6 and per_week < 5:
        return "Final verdict: Competent. Boring, but competent."
    if per_week > 5:
        return pick_one([
            "Final verdict: Room for improvement. Plenty of room.",
            "Final verdict: Not a disaster, not anything to brag about.",
        ], seed)
    return pick_one([
        "Final verdict: Solid lineup management. Where's the fun in that?",
        "Final verdict: Not much to criticize. How disappointing.",
    ], seed)


def get_season_summary(report: SeasonReport) -> str:
    """Season summary line keyed on where the team finished."""
    per_week = report.points_per_week()
    win_pct = report.regular_season_win_pct()
    seed = _season_seed(report)
    position = report.final_standings_position

    if position == 1:
        if report.blown_wins >= 2:
            return pick_one([
                "A title won on vibes and good fortune.",
                "You tripped into a championship. The trophy can't tell.",
            ], seed)
        if per_week > 10:
            return pick_one([
                "Champion in spite of the chaos. The rest of the league was worse.",
                "A title won around your lineup decisions, not with them.",
            ], seed)
        return pick_one([
            "An earned championship. Dull, but respectable.",
            "You managed your way to a title. Fair play.",
        ], seed)

    if position is not None and position == report.league_size:
        if report.blown_wins >= 2:
            return pick_one([
                "Last place, and it never had to go this way.",
                "The basement, built by your own lineup calls.",
            ], seed)
        return pick_one([
            "Rough from the opening week to the last.",
            "Some seasons are cursed. This was one.",
        ], seed)

    if position is not None and position <= 6:
        if report.blown_wins >= 2:
            return pick_one([
                "A playoff team despite your best efforts.",
                "Playoffs, with plenty of self-inflicted wounds.",
            ], seed)
        if per_week > 10:
            return pick_one([
                "A playoff record with bench-warmer management.",
                "You made the playoffs. Your lineups nearly stopped you.",
            ], seed)
        return pick_one([
            "A solid playoff run. Cleaner lineups would have gone further.",
            "Playoff team. Not bad, not great.",
        ], seed)

    if win_pct >= 0.5:
        if report.blown_wins >= 2:
            return pick_one([
                "A winning record, and a few more that got away.",
                "Above .500, but the blown wins will stick with you.",
            ], seed)
        return pick_one([
            "A respectable season with room to grow.",
            "Not embarrassing. Not impressive either.",
        ], seed)

    if report.blown_wins >= 2:
        return pick_one([
            "A losing season made worse by your own choices.",
            "Below .500, and some of that is on you.",
        ], seed)
    return pick_one([
        "A forgettable season. There's always next year.",
        "Not your year. The numbers agree.",
        "A season best left behind.",
    ], seed)


def get_bench_points_summary(report: SeasonReport) -> str:
    per_week = report.points_per_week()
    seed = hash_string(report.team_name)

    if per_week > 15:
        return pick_one([
            "That's not a bench, that's a second lineup.",
            "Those points were begging to play.",
        ], seed)
    if per_week > 10:
        return "Double digits a week, just sitting there."
    if per_week > 6:
        return "Not catastrophic, but it adds up over a season."
    if per_week > 3:
        return "Some missed chances, nothing egregious."
    return pick_one([
        "Your bench management was actually solid.",
        "Very little left behind. Well done, we suppose.",
    ], seed)


def get_blown_wins_summary(report: SeasonReport) -> str:
    blown = report.blown_wins
    seed = hash_string(report.team_name)

    if blown == 0:
        return pick_one([
            "At least your losses were legitimate.",
            "No games thrown away. Small consolation.",
        ], seed)
    if blown == 1:
        return "One game you should have won. One game you didn't."
    if blown == 2:
        return "Two blown wins. That's a pattern, not a fluke."
    if blown == 3:
        return "Three wins given away. A hat trick of regret."
    return f"{blown} wins thrown away. Were you even trying?"


def get_week_praise(week: int) -> str:
    return pick_one([
        "Perfect lineup. Mark your calendar.",
        "No points left on the bench. A rare sight.",
        "Optimal decisions all around. Who are you?",
        "Nothing to roast this week. Enjoy it.",
    ], week)


def get_week_headline(points_missed: float, week: int) -> str:
    if points_missed <= 0:
        return get_week_praise(week)
    if points_missed > 40:
        return pick_one([
            "Did you even look at your lineup this week?",
            "This is how championships get lost.",
        ], week)
    if points_missed > 25:
        return "A lot of wasted potential on that bench."
    if points_missed > 15:
        return "Your bench quietly outplayed your starters."
    if points_missed > 8:
        return "Room for improvement in the lineup department."
    return "Minor, but every point counts."


def get_blown_win_message(margin: float, week: int) -> str:
    if margin > 30:
        return pick_one([
            f"You could have won by {margin:.2f} points. Instead, you lost.",
            f"A {margin:.2f} point win, thrown in the trash.",
        ], week)
    if margin > 15:
        return f"{margin:.2f} points was your margin of victory. You blew it."
    if margin > 5:
        return f"A comfortable {margin:.2f} point win was right there."
    return f"You could have squeaked out a {margin:.2f} point win."


def describe_swap(swap: LineupSwap) -> str:
    """Human readable instruction for one swap."""
    bench = swap.bench_player
    benched = swap.benched_player

    if isinstance(swap, ChainSwap):
        move = swap.intermediate_move
        return (
            f"Move {move.player.full_name} {display_slot_name(move.from_slot)} -> "
            f"{display_slot_name(move.to_slot)} (replacing {benched.full_name}), "
            f"start {bench.full_name} at {display_slot_name(swap.target_slot)}: "
            f"+{swap.points_gained:.2f}"
        )

    return (
        f"Start {bench.full_name} ({bench.total_points:.2f}) over "
        f"{benched.full_name} ({benched.total_points:.2f}) at "
        f"{display_slot_name(swap.slot)}: +{swap.points_gained:.2f}"
    )


def describe_swaps(swaps: Sequence[LineupSwap]) -> List[str]:
    return [describe_swap(s) for s in swaps]
