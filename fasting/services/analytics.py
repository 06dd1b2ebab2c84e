"""
Summary statistics over a user's completed fasting sessions.
"""
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class FastingSummary:
    total_sessions: int = 0
    average_duration: float = 0
    success_rate: float = 0
    longest_fast: int = 0
    total_hours_fasted: float = 0

    def as_dict(self):
        return asdict(self)


def summarize(sessions):
    """
    Count, average duration (seconds), success rate (%), longest fast
    (seconds) and total hours fasted. Order of the input does not matter.
    An empty history yields all zeros.
    """
    sessions = list(sessions)
    if not sessions:
        return FastingSummary()

    total_sessions = len(sessions)
    total_duration = sum(session.duration for session in sessions)
    successful = sum(1 for session in sessions if session.goal_reached)

    return FastingSummary(
        total_sessions=total_sessions,
        average_duration=total_duration / total_sessions,
        success_rate=successful / total_sessions * 100,
        longest_fast=max(session.duration for session in sessions),
        total_hours_fasted=total_duration / 3600,
    )


def goal_progress(elapsed_seconds, goal_hours):
    """Percentage of the goal covered so far, capped at 100."""
    goal_seconds = goal_hours * 3600
    if goal_seconds <= 0:
        return 100.0
    return min(max(elapsed_seconds, 0) / goal_seconds * 100, 100.0)
