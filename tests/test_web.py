import pytest

from payoff_calc_web.app import _page_size_from_env, app

FORM = {"principal": "10000", "rate": "5", "term_years": "5", "extra": "100", "page": "1"}


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


def test_index_uses_default_loan(client):
    response = client.get("/")
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "$188.71" in body
    assert "$1,322.74" in body
    assert "Page 1 of 5" in body
    assert "balance-chart" in body


def test_post_with_extra_payment(client):
    body = client.post("/", data=FORM).get_data(as_text=True)
    assert "3.2 years" in body
    assert "1.8 years" in body
    assert "Page 1 of 4" in body
    assert "(with extra payment)" in body


def test_pagination(client):
    body = client.post("/", data={**FORM, "goto_page": "4"}).get_data(as_text=True)
    assert "Page 4 of 4" in body
    assert "<td>38</td>" in body
    assert "<td>1</td>" not in body


def test_page_beyond_schedule_is_clamped(client):
    body = client.post("/", data={**FORM, "goto_page": "9"}).get_data(as_text=True)
    assert "Page 4 of 4" in body


def test_standard_schedule_toggle(client):
    body = client.post("/", data={**FORM, "show_standard": "1"}).get_data(as_text=True)
    assert "Page 1 of 5" in body
    assert "(standard)" in body


def test_theme_is_carried_per_request(client):
    dark = client.post("/", data={**FORM, "theme": "dark"}).get_data(as_text=True)
    assert 'class="theme-dark"' in dark
    unknown = client.post("/", data={**FORM, "theme": "neon"}).get_data(as_text=True)
    assert 'class="theme-system"' in unknown


def test_blank_field_skips_calculation(client):
    body = client.post("/", data={**FORM, "rate": ""}).get_data(as_text=True)
    assert "must be greater than zero" in body
    assert "balance-chart" not in body


def test_invalid_number_shows_error(client):
    response = client.post("/", data={**FORM, "principal": "ten thousand"})
    assert response.status_code == 200
    assert "Invalid numeric value" in response.get_data(as_text=True)


@pytest.mark.parametrize("term_years", ["100000", "1e9", "100.1"])
def test_term_beyond_cap_is_rejected(client, term_years):
    body = client.post("/", data={**FORM, "term_years": term_years}).get_data(as_text=True)
    assert "Loan term cannot exceed 100 years." in body
    assert "balance-chart" not in body


def test_hundred_year_term_is_calculated(client):
    body = client.post("/", data={**FORM, "term_years": "100", "extra": "0"}).get_data(as_text=True)
    assert "Page 1 of 100" in body


def test_negative_extra_is_rejected(client):
    body = client.post("/", data={**FORM, "extra": "-5"}).get_data(as_text=True)
    assert "The extra payment cannot be negative." in body


@pytest.mark.parametrize("raw,expected", [("24", 24), ("twelve", 12), ("", 12)])
def test_page_size_from_env(monkeypatch, raw, expected):
    monkeypatch.setenv("PAYOFF_PAGE_SIZE", raw)
    assert _page_size_from_env() == expected
