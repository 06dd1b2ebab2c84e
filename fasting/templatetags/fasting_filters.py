from django import template

from fasting.services.formatting import format_clock, format_duration

register = template.Library()


@register.filter
def duration(seconds):
    """
    Format a second count as '<H>h <M>m'.
    Usage: {{ session.duration|duration }}
    """
    return format_duration(seconds)


@register.filter
def clock(seconds):
    """
    Format a second count as HH:MM:SS.
    Usage: {{ status.elapsed_seconds|clock }}
    """
    return format_clock(seconds)


@register.filter
def hours(seconds):
    """Seconds to hours with one decimal place."""
    if not seconds:
        return 0
    return round(seconds / 3600, 1)
