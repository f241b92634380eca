from datetime import date

from teacher_registry import models
from teacher_registry.utils.stats import mean_classes, round_half_up


def test_round_half_up():
    assert round_half_up(3.666666, 2) == 3.67
    assert round_half_up(2.675, 2) == 2.68
    assert round_half_up(2.5, 0) == 3.0
    assert round_half_up(4.0, 2) == 4.0


def test_mean_classes():
    teachers = [
        models.Teacher(id=i, full_name=f"T {i}", date_of_birth=date(1980, 1, 1), number_of_classes=c)
        for i, c in enumerate([3, 4, 4], start=1)
    ]
    assert abs(mean_classes(teachers) - 11 / 3) < 1e-9
    assert mean_classes([]) is None
