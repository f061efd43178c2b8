"""Vimshottari Maha Dasha and Antardasha periods."""

from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given, strategies as st

from kundali_calc.core.dasha import (
    DASHA_YEARS, DAYS_PER_YEAR, TOTAL_YEARS, compute_antardashas,
    compute_vimshottari_dasha, dasha_balance, dasha_sequence_from, get_current_dasha,
)
from kundali_calc.core.zodiac import DASHA_ORDER, NAKSHATRA_SPAN

BIRTH = datetime(2000, 1, 1, 0, 0)
DAY = timedelta(days=1)


def test_allocations_total_120_years():
    assert sum(DASHA_YEARS.values()) == TOTAL_YEARS == 120.0
    assert set(DASHA_YEARS) == set(DASHA_ORDER)


def test_sequence_wraps():
    assert dasha_sequence_from("Saturn") == [
        "Saturn", "Mercury", "Ketu", "Venus", "Sun", "Moon", "Mars", "Rahu", "Jupiter"]


@pytest.mark.parametrize("moon", [NAKSHATRA_SPAN, 13.3333])
def test_nakshatra_boundary_gives_full_first_period(moon):
    periods = compute_vimshottari_dasha(moon, BIRTH)
    assert periods[0].lord == "Venus"
    assert periods[0].duration_years == 20.0
    assert periods[0].start == BIRTH


def test_balance_halfway_through_ashwini():
    lord, years = dasha_balance(NAKSHATRA_SPAN / 2.0)
    assert lord == "Ketu"
    assert years == pytest.approx(3.5)


@given(st.floats(0.0, 360.0, exclude_max=True))
def test_structure(moon):
    periods = compute_vimshottari_dasha(moon, BIRTH)
    assert len(periods) == 9
    assert [p.lord for p in periods] == dasha_sequence_from(periods[0].lord)
    assert 0.0 < periods[0].duration_years <= DASHA_YEARS[periods[0].lord]
    for period in periods[1:]:
        assert period.duration_years == DASHA_YEARS[period.lord]
    for period in periods:
        assert len(period.antardashas) == 9
        assert period.antardashas[0].lord == period.lord


@given(st.floats(0.0, 360.0, exclude_max=True))
def test_periods_are_contiguous(moon):
    periods = compute_vimshottari_dasha(moon, BIRTH)
    for prev, nxt in zip(periods, periods[1:]):
        assert prev.end == nxt.start
    for period in periods:
        assert period.antardashas[0].start == period.start
        assert abs(period.antardashas[-1].end - period.end) < timedelta(seconds=1)
        for prev, nxt in zip(period.antardashas, period.antardashas[1:]):
            assert prev.end == nxt.start


@given(st.floats(0.0, 360.0, exclude_max=True))
def test_antardashas_sum_to_mahadasha(moon):
    for period in compute_vimshottari_dasha(moon, BIRTH):
        total = sum(a.duration_years for a in period.antardashas)
        assert total == pytest.approx(period.duration_years)


def test_antardasha_lengths():
    subs = compute_antardashas("Ketu", BIRTH, 7.0)
    assert subs[0].duration_years == pytest.approx(7.0 * 7.0 / 120.0)
    assert subs[1].lord == "Venus"
    assert subs[1].duration_years == pytest.approx(7.0 * 20.0 / 120.0)


def test_dates_advance_by_julian_years():
    periods = compute_vimshottari_dasha(0.0, BIRTH)
    assert periods[0].lord == "Ketu"
    assert periods[0].end == BIRTH + timedelta(days=7 * DAYS_PER_YEAR)


# ── Current dasha ──────────────────────────────────────────────

def test_current_dasha():
    periods = compute_vimshottari_dasha(0.0, BIRTH)
    current = get_current_dasha(periods, datetime(2003, 6, 1))
    assert current.mahadasha.lord == "Ketu"
    assert current.antardasha.lord == "Rahu"


def test_aware_moment_read_on_birth_clock():
    # BIRTH in IST is 1999-12-31 18:30 UTC, so an hour later is 01:00 local
    periods = compute_vimshottari_dasha(0.0, BIRTH)
    an_hour_later = datetime(1999, 12, 31, 19, 30, tzinfo=timezone.utc)
    current = get_current_dasha(periods, an_hour_later, utc_offset=5.5)
    assert current.mahadasha == periods[0]
    assert get_current_dasha(periods, an_hour_later).mahadasha is None


def test_aware_and_naive_moments_agree_at_utc_birth():
    periods = compute_vimshottari_dasha(0.0, BIRTH)
    aware = get_current_dasha(periods, datetime(2003, 6, 1, tzinfo=timezone.utc))
    assert aware == get_current_dasha(periods, datetime(2003, 6, 1))


def test_period_boundary_belongs_to_next_period():
    periods = compute_vimshottari_dasha(0.0, BIRTH)
    current = get_current_dasha(periods, periods[1].start)
    assert current.mahadasha.lord == "Venus"
    assert current.antardasha.lord == "Venus"


def test_outside_the_cycle():
    periods = compute_vimshottari_dasha(0.0, BIRTH)
    assert get_current_dasha(periods, BIRTH - DAY).mahadasha is None
    assert get_current_dasha(periods, periods[-1].end + DAY).antardasha is None


def test_to_dict():
    data = compute_vimshottari_dasha(0.0, BIRTH)[0].to_dict()
    assert data["lord"] == "Ketu"
    assert data["start"] == "2000-01-01"
    assert len(data["antardashas"]) == 9
    assert "antardashas" not in data["antardashas"][0]
