import pytest

from payoff_calc.engine import build_schedule
from payoff_calc.formatter import chart_series, format_currency, paginate

SCHEDULE = build_schedule(10000, 0.05 / 12, 60, 0)


@pytest.mark.parametrize(
    "value,expected",
    [(188.7123, "188.71"), (1322.7399, "1,322.74"), (0, "0.00"), (1234567.891, "1,234,567.89")],
)
def test_format_currency(value, expected):
    assert format_currency(value) == expected


class TestPaginate:
    def test_first_page(self):
        page = paginate(SCHEDULE, 1, 12)
        assert [e.month for e in page.items] == list(range(1, 13))
        assert page.total_pages == 5
        assert not page.has_prev
        assert page.has_next

    def test_last_partial_page(self):
        page = paginate(SCHEDULE, 4, 16)
        assert [e.month for e in page.items] == list(range(49, 61))
        assert page.has_prev
        assert not page.has_next

    def test_page_is_clamped(self):
        assert paginate(SCHEDULE, 99, 12).page == 5
        assert paginate(SCHEDULE, -3, 12).page == 1

    def test_empty_schedule(self):
        page = paginate((), 3, 12)
        assert page.items == ()
        assert page.page == 1
        assert page.total_pages == 1

    def test_invalid_page_size_uses_default(self):
        assert len(paginate(SCHEDULE, 1, 0).items) == 12


def test_chart_series_covers_longer_schedule():
    accelerated = build_schedule(10000, 0.05 / 12, 60, 100)
    payload = chart_series(SCHEDULE, accelerated)

    assert payload["labels"] == list(range(1, 61))
    standard_data, extra_data = (d["data"] for d in payload["datasets"])
    assert len(standard_data) == 60
    assert len(extra_data) == len(accelerated)
    assert extra_data[-1] == 0
    assert [d["label"] for d in payload["datasets"]] == ["Standard Payment", "With Extra Payment"]
