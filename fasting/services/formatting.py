"""
Display formatting for fasting durations and timestamps.
"""


def _whole_seconds(seconds):
    # Negative input (e.g. a start time slightly in the future) shows as zero
    return max(int(seconds or 0), 0)


def clock_parts(seconds):
    """
    Split a second count into zero-padded clock parts.

    Hours have no upper bound: 100 hours is {'hours': '100', ...}.
    """
    total = _whole_seconds(seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60
    return {
        'hours': str(hours).zfill(2),
        'minutes': str(minutes).zfill(2),
        'seconds': str(secs).zfill(2),
    }


def format_clock(seconds):
    """Format seconds as HH:MM:SS, e.g. 3661 -> '01:01:01'."""
    parts = clock_parts(seconds)
    return f"{parts['hours']}:{parts['minutes']}:{parts['seconds']}"


def format_duration(seconds):
    """Format seconds as '<H>h <M>m', dropping the sub-minute remainder."""
    total = _whole_seconds(seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60
    return f"{hours}h {minutes}m"


def format_datetime(value, tz):
    """Format an aware datetime like 'Oct 19, 02:30 PM' in the given timezone."""
    if value is None:
        return ''
    local = value.astimezone(tz)
    return f"{local.strftime('%b')} {local.day}, {local.strftime('%I:%M %p')}"
