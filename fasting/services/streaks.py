"""
Consecutive-day streaks of successful fasts.

Only sessions that reached their goal count. Unsuccessful sessions are
skipped entirely rather than breaking a streak. Calendar days are taken in
the supplied timezone.
"""
from dataclasses import asdict, dataclass

from fasttracker.timezone_utils import local_date


@dataclass(frozen=True)
class Streaks:
    current: int = 0
    longest: int = 0

    def as_dict(self):
        return asdict(self)


def calculate_streaks(sessions, tz):
    """
    Return Streaks(current, longest) for a session history in any order.

    Walks successful sessions newest first. A session on the calendar day
    before the previous one extends the running streak; a larger gap starts
    a new run of 1 and ends the current streak, which keeps the length it had
    reached from the most recent session. Several successes on the same day
    leave the counts unchanged.
    """
    ordered = sorted(sessions, key=lambda session: session.start_time, reverse=True)

    current = 0
    longest = 0
    running = 0
    extending_current = True
    last_day = None

    for session in ordered:
        if not session.goal_reached:
            continue

        day = local_date(session.start_time, tz)
        if last_day is None:
            running = 1
            current = 1
        else:
            days_diff = (last_day - day).days
            if days_diff == 1:
                running += 1
                if extending_current:
                    current += 1
            elif days_diff > 1:
                extending_current = False
                running = 1

        longest = max(longest, running)
        last_day = day

    return Streaks(current=current, longest=longest)
