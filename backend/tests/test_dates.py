from datetime import date

from teacher_registry import models, schemas
from teacher_registry.utils.dates import date_of_birth_range, minus_years, years_between


def test_years_between_counts_birthdays():
    dob = date(1990, 6, 15)
    assert years_between(dob, date(2024, 6, 14)) == 33
    assert years_between(dob, date(2024, 6, 15)) == 34


def test_age_changes_by_birthdays_crossed():
    t = models.Teacher(full_name="Ada Lovelace", date_of_birth=date(1980, 3, 10), number_of_classes=3)
    d1 = date(2020, 1, 1)
    d2 = date(2022, 12, 31)
    # birthdays on 2020-03-10, 2021-03-10 and 2022-03-10
    assert t.age_on(d2) - t.age_on(d1) == 3


def test_leap_day_birthday():
    dob = date(2000, 2, 29)
    assert years_between(dob, date(2001, 2, 28)) == 0
    assert years_between(dob, date(2001, 3, 1)) == 1
    assert years_between(dob, date(2004, 2, 29)) == 4


def test_minus_years_clamps_leap_day():
    assert minus_years(date(2024, 2, 29), 1) == date(2023, 2, 28)
    assert minus_years(date(2024, 2, 29), 4) == date(2020, 2, 29)
    assert minus_years(date(2024, 6, 1), 30) == date(1994, 6, 1)


def test_date_of_birth_range():
    today = date(2024, 6, 1)
    assert date_of_birth_range(30, 40, today) == (date(1983, 6, 1), date(1994, 6, 1))
    assert date_of_birth_range(None, None, today) == (None, None)
    assert date_of_birth_range(30, None, today) == (None, date(1994, 6, 1))
    assert date_of_birth_range(None, 40, today) == (date(1983, 6, 1), None)


def test_inverted_age_range_is_empty():
    start, end = date_of_birth_range(50, 20, date(2024, 6, 1))
    assert start > end


def test_extreme_ages_saturate_at_calendar_limits():
    today = date(2024, 6, 1)
    assert minus_years(today, 5001) == date.min
    assert minus_years(today, -20000) == date.max
    assert date_of_birth_range(-20000, 5000, today) == (date.min, date.max)


def test_response_age_on_fixed_day():
    t = models.Teacher(id=1, full_name="Ada Lovelace", date_of_birth=date(1990, 6, 2), number_of_classes=3)
    assert schemas.TeacherOut.from_model(t, today=date(2024, 6, 1)).age == 33
    assert schemas.TeacherOut.from_model(t, today=date(2024, 6, 2)).age == 34
