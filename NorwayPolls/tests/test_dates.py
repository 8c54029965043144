from datetime import date, timedelta

import pytest

from NorwayPolls.dates import DateLabelResolver, month_range, week_range
from NorwayPolls.errors import TableCountError
from NorwayPolls.models import DateRange


@pytest.fixture
def resolver(config):
    return DateLabelResolver(
        months=config.months,
        corrections=config.label_corrections,
        table_years=config.grid_table_years,
    )


def test_week_label_is_iso_week_monday_to_sunday(resolver):
    r = resolver.resolve("Uke 37-2015")
    assert r == DateRange(start=date(2015, 9, 7), end=date(2015, 9, 13))


@pytest.mark.parametrize("year", [2009, 2012, 2014, 2015, 2020])
@pytest.mark.parametrize("week", [1, 2, 26, 52])
def test_week_labels_span_seven_days_inside_the_labelled_week(resolver, week, year):
    r = resolver.resolve(f"Uke {week}-{year}")
    assert r.end - r.start == timedelta(days=6)
    assert tuple(r.end.isocalendar())[:2] == (year, week)


def test_week_one_can_end_in_the_labelled_year_while_starting_the_year_before(resolver):
    r = resolver.resolve("Uke 1-2015")
    assert r.start == date(2014, 12, 29)
    assert r.end == date(2015, 1, 4)


def test_week_that_does_not_exist_is_unresolvable():
    # 2014 has 52 ISO weeks, 2015 has 53
    assert week_range(53, 2014) is None
    assert week_range(53, 2015) is not None


def test_known_typo_is_corrected_from_previous_label(resolver):
    assert resolver.correct_label("Uke 1-2014", "Uke 2-2015") == "Uke 1-2015"
    assert resolver.correct_label("Uke 1-2013", "Uke 2-2014") == "Uke 1-2014"
    assert resolver.resolve("Uke 1-2014", previous_label="Uke 2-2015") == resolver.resolve("Uke 1-2015")


def test_correction_needs_the_matching_previous_label(resolver):
    assert resolver.correct_label("Uke 1-2014", None) == "Uke 1-2014"
    assert resolver.correct_label("Uke 1-2014", "Uke 2-2014") == "Uke 1-2014"
    assert resolver.resolve("Uke 1-2014").end == date(2014, 1, 5)


def test_month_label_resolves_to_whole_month(resolver):
    assert resolver.resolve("Aug '15") == DateRange(start=date(2015, 8, 1), end=date(2015, 8, 31))
    assert resolver.resolve("Des '14") == DateRange(start=date(2014, 12, 1), end=date(2014, 12, 31))
    assert resolver.resolve("februar '12").end == date(2012, 2, 29)
    assert resolver.resolve("Sept ’13").start == date(2013, 9, 1)


def test_unknown_month_name_is_unresolvable(resolver):
    assert resolver.resolve("Foo '15") is None


def test_literal_date_is_the_fallback(resolver):
    d = date(2015, 5, 1)
    assert resolver.resolve("Siste måling", literal_date=d) == DateRange(end=d)
    # A recognised label wins over the page date
    assert resolver.resolve("Aug '15", literal_date=d).start == date(2015, 8, 1)


def test_unrecognised_label_without_literal_date_is_none(resolver):
    assert resolver.resolve("Valg 2013") is None
    assert resolver.resolve("") is None


def test_month_range_handles_december():
    assert month_range(2015, 12) == DateRange(start=date(2015, 12, 1), end=date(2015, 12, 31))


def test_column_headers_with_august_halves(resolver):
    assert resolver.resolve_column("Aug I", 2013) == DateRange(end=date(2013, 8, 1))
    assert resolver.resolve_column("Aug II", 2013) == DateRange(end=date(2013, 8, 15))
    assert resolver.resolve_column("Mars", 2013) == DateRange(start=date(2013, 3, 1), end=date(2013, 3, 31))
    assert resolver.resolve_column("Total", 2013) is None


def test_table_year_follows_position(resolver):
    assert resolver.table_year(0) == 2015
    assert resolver.table_year(6) == 2009
    with pytest.raises(TableCountError):
        resolver.table_year(7)
