from datetime import date, time

from driver_eta.models import Role
from driver_eta.utils import format_minutes, json_dumps, round_half_up


def test_round_half_up_differs_from_bankers_rounding():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(0.5) == 1
    assert round_half_up(2.4999) == 2
    assert round_half_up(0.0) == 0


def test_format_minutes():
    assert format_minutes(5) == "5m"
    assert format_minutes(60) == "1h 0m"
    assert format_minutes(135) == "2h 15m"


def test_json_dumps_normalises_dates_and_enums():
    text = json_dumps({"d": date(2025, 1, 2), "t": time(8, 30), "r": Role.RIDER, "p": (1, 2)})
    assert text == '{"d":"2025-01-02","t":"08:30:00","r":"rider","p":[1,2]}'
