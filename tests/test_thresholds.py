import pytest

from constants import COLORBLIND_COLORS, NORMAL_COLORS
from thresholds import Direction, Severity, classify, severity_color


@pytest.mark.parametrize("value, expected", [
    (0, Severity.GOOD),
    (69.9, Severity.GOOD),
    (70, Severity.WARNING),
    (84.9, Severity.WARNING),
    (85, Severity.DANGER),
    (100, Severity.DANGER),
])
def test_standard_direction(value, expected):
    assert classify(value, 70, 85) is expected


@pytest.mark.parametrize("value, expected", [
    (0, Severity.DANGER),
    (29, Severity.DANGER),
    (30, Severity.WARNING),
    (54, Severity.WARNING),
    (55, Severity.GOOD),
    (144, Severity.GOOD),
])
def test_inverted_direction(value, expected):
    assert classify(value, 30, 55, Direction.INVERTED) is expected


def test_chart_example_values():
    assert classify(90, 70, 85) is Severity.DANGER
    assert classify(10, 70, 85) is Severity.GOOD


def test_severity_colors():
    assert severity_color(Severity.DANGER) == NORMAL_COLORS["danger"]
    assert severity_color(Severity.GOOD, colorblind_mode=True) == COLORBLIND_COLORS["success"]
    assert severity_color(None) == NORMAL_COLORS["info"]
