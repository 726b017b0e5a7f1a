"""Severity classification for readout values."""
from enum import Enum

from constants import NORMAL_COLORS, COLORBLIND_COLORS


class Severity(Enum):
    GOOD = "success"
    WARNING = "warning"
    DANGER = "danger"


class Direction(Enum):
    STANDARD = "standard"   # high is bad
    INVERTED = "inverted"   # low is bad (frame rate)


def classify(value, warn_at, danger_at, direction=Direction.STANDARD):
    """
    Map a value to a Severity given two cutoffs.

    Standard: value >= danger_at is DANGER, value >= warn_at is WARNING.
    Inverted: value < warn_at is DANGER, value < danger_at is WARNING.
    """
    if direction is Direction.INVERTED:
        if value < warn_at:
            return Severity.DANGER
        if value < danger_at:
            return Severity.WARNING
        return Severity.GOOD

    if value >= danger_at:
        return Severity.DANGER
    if value >= warn_at:
        return Severity.WARNING
    return Severity.GOOD


def severity_color(severity, colorblind_mode=False):
    """Palette color for a tier; None (no tier) gets the neutral 'info' color."""
    scheme = COLORBLIND_COLORS if colorblind_mode else NORMAL_COLORS
    if severity is None:
        return scheme['info']
    return scheme[severity.value]
