"""
Physiological fasting stages keyed to elapsed hours.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class Stage:
    hours: float
    key: str
    label: str
    description: str
    color: str

    def as_dict(self):
        return {
            'key': self.key,
            'label': self.label,
            'hours': self.hours,
            'description': self.description,
            'color': self.color,
        }


# Sorted ascending by threshold
STAGES = (
    Stage(0, 'rising', 'Blood Sugar Rising',
          'Your body is processing your last meal. Insulin levels are rising.', '#7c9885'),
    Stage(4, 'falling', 'Blood Sugar Falling',
          'Insulin levels start to drop. Your body begins to look for other energy sources.', '#a8bfad'),
    Stage(12, 'ketosis', 'Ketosis Starts',
          'Your body starts burning fat for energy. Ketone levels begin to rise.', '#60a5fa'),
    Stage(18, 'fat-burning', 'Accelerated Fat Burning',
          'Fat burning is in full swing. Growth hormone levels are increasing.', '#3b82f6'),
    Stage(24, 'autophagy', 'Autophagy',
          'Cells start cleaning out damaged components. Peak anti-aging happens here.', '#1d4ed8'),
    Stage(48, 'growth-hormone', 'Growth Hormone Peak',
          'Metabolism is optimized, and growth hormone is at its highest level.', '#1e3a8a'),
)


@dataclass(frozen=True)
class StageStatus:
    current: Stage
    next: Optional[Stage]
    progress: float
    elapsed_hours: float
    timeline: Tuple[Tuple[Stage, bool], ...] = field(default_factory=tuple)

    def as_dict(self):
        return {
            'current': self.current.as_dict(),
            'next': self.next.as_dict() if self.next else None,
            'progress': round(self.progress, 1),
            'elapsed_hours': round(self.elapsed_hours, 2),
            'timeline': [
                {'key': stage.key, 'label': stage.label, 'hours': stage.hours, 'reached': reached}
                for stage, reached in self.timeline
            ],
        }


def current_stage_index(elapsed_hours, stages=STAGES):
    """Index of the last stage whose threshold is <= elapsed_hours (0 if none)."""
    index = 0
    for position, stage in enumerate(stages):
        if elapsed_hours >= stage.hours:
            index = position
    return index


def classify(elapsed_seconds, stages=STAGES) -> StageStatus:
    """
    Work out which stage a fast is in and how far along it is.

    Progress is the linear position between the current stage's threshold and
    the next one, clamped to [0, 100]. The final stage is always 100.
    """
    elapsed_hours = max(elapsed_seconds or 0, 0) / 3600
    index = current_stage_index(elapsed_hours, stages)
    current = stages[index]
    next_stage = stages[index + 1] if index + 1 < len(stages) else None

    if next_stage is None:
        progress = 100.0
    else:
        span = next_stage.hours - current.hours
        progress = (elapsed_hours - current.hours) / span * 100
        progress = min(max(progress, 0.0), 100.0)

    timeline = tuple((stage, elapsed_hours >= stage.hours) for stage in stages)
    return StageStatus(
        current=current,
        next=next_stage,
        progress=progress,
        elapsed_hours=elapsed_hours,
        timeline=timeline,
    )
