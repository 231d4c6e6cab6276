# phl_dashboard/tests/test_formatting.py
# PHL DASHBOARD - DISPLAY FORMATTING TESTS

import pytest

from config import settings
from data_processing import (display_hos_name, fmt_hour_minute, fmt_number, format_bed_code,
                             level_color, rate_band)


def test_fmt_number_groups_thousands_and_fixes_decimals():
    assert fmt_number(1234567) == "1,234,567"
    assert fmt_number(1234.5, 2) == "1,234.50"
    assert fmt_number(None) == "-"
    assert fmt_number(float("nan"), 4) == "-"


@pytest.mark.parametrize("minutes, expected", [
    (125, "2 ชม 5 นาที"),
    (45, "0 ชม 45 นาที"),
    (59.6, "1 ชม 0 นาที"),
    (0, "0 ชม 0 นาที"),
    (None, "-"),
])
def test_fmt_hour_minute(minutes, expected):
    assert fmt_hour_minute(minutes) == expected


def test_display_hos_name_rules():
    assert display_hos_name("โรงพยาบาลวังทอง") == "รพ.วังทอง"
    assert display_hos_name("โรงพยาบาลวังทอง", "รพ.วท.") == "รพ.วท."
    assert display_hos_name("โรงพยาบาลสมเด็จพระยุพราชนครไทย") == "รพร.นครไทย"
    assert display_hos_name("โรงพยาบาลพุทธชินราช พิษณุโลก") == "รพศ.พุทธชินราช"
    assert display_hos_name(None, fallback="11251") == "11251"
    assert display_hos_name(None) == "-"


def test_format_bed_code_keeps_last_six_characters():
    assert format_bed_code("11251201001") == "201001"
    assert format_bed_code(None) == "-"


def test_level_color_falls_back_for_unknown_levels():
    assert level_color("a") == settings.SP_LEVEL_COLORS["A"]
    assert level_color("Z9") == settings.SP_LEVEL_FALLBACK_COLOR
    assert level_color(None) == settings.SP_LEVEL_FALLBACK_COLOR


def test_rate_band_higher_and_lower_is_better():
    assert rate_band(85, 80, 60) == "good"
    assert rate_band(80, 80, 60) == "good"
    assert rate_band(60, 80, 60) == "warning"
    assert rate_band(59.9, 80, 60) == "poor"
    assert rate_band(None, 80, 60) is None
    assert rate_band(30, 30, 90, higher_is_better=False) == "good"
    assert rate_band(45, 30, 90, higher_is_better=False) == "warning"
    assert rate_band(120, 30, 90, higher_is_better=False) == "poor"
