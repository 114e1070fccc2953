import pytest

import app as web
import config as cfg


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(cfg, "PDF_PATH", str(tmp_path / "report.pdf"))
    monkeypatch.setattr(cfg, "SUMMARY_PATH", str(tmp_path / "summary.txt"))
    web.app.config["TESTING"] = True
    with web.app.test_client() as c:
        yield c


FORM = {
    "capital": "40,00,000",
    "fd_rate": "7",
    "nifty_rate": "12",
    "withdrawal": "25,000",
    "tax_rate": "12.5",
}


def test_parse_form_normalises_junk():
    inp = web.parse_form({"capital": "1 Cr", "fd_rate": "abc", "withdrawal": ""})
    assert inp.capital == 10_000_000
    assert inp.fd_rate_pct == 0
    assert inp.monthly_withdrawal == 0
    assert inp.nifty_rate_pct == 0
    assert inp.tax_rate_pct == 0


def test_get_shows_form(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"Your Details" in resp.data
    assert b"Fixed Deposit (Survival Duration)" not in resp.data


def test_exports_missing_before_first_run(client):
    assert client.get("/download-summary").status_code == 404
    assert client.get("/download-pdf").status_code == 404


def test_post_runs_projection_and_exports(client):
    resp = client.post("/", data=FORM)
    assert resp.status_code == 200
    page = resp.get_data(as_text=True)
    assert "Fixed Deposit (Survival Duration)" in page
    assert "Forty Lakh" in page
    assert "data:image/png;base64," in page

    summary = client.get("/download-summary")
    assert summary.status_code == 200
    assert summary.get_data(as_text=True).startswith("FINANCIAL PROJECTION SUMMARY")

    pdf = client.get("/download-pdf")
    assert pdf.status_code == 200
    assert pdf.data.startswith(b"%PDF")


def test_api_with_form_names(client):
    resp = client.post("/api/project", json={"capital": "10,00,000", "withdrawal": "0",
                                             "nifty_rate": "0"})
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["is_indefinite"] is True
    assert body["elapsed_months"] == cfg.MAX_MONTHS
    assert body["nifty_net"] == pytest.approx(500_000)
    assert body["summary"].startswith("FINANCIAL PROJECTION SUMMARY")


def test_api_with_input_names_and_nan(client):
    resp = client.post("/api/project", json={
        "capital": 200_000, "fd_rate_pct": 7, "nifty_rate_pct": -150,
        "monthly_withdrawal": 60_000, "tax_rate_pct": 10,
    })
    body = resp.get_json()
    assert body["elapsed_months"] == 2
    assert body["nifty_net"] is None
    assert body["nifty_net_ok"] is False
    assert "Net Value: N/A" in body["summary"]


def test_api_empty_body_is_all_zero(client):
    body = client.post("/api/project", json={}).get_json()
    assert body["capital"] == 0
    assert body["elapsed_months"] == 1
    assert body["nifty_net"] == 0


def test_blank_field_stays_blank_after_post(client):
    page = client.post("/", data=dict(FORM, withdrawal="")).get_data(as_text=True)
    assert 'name="withdrawal" value=""' in page
    assert 'name="capital" value="40,00,000"' in page


def test_get_prefills_defaults(client):
    page = client.get("/").get_data(as_text=True)
    assert f'name="capital" value="{cfg.DEFAULTS["capital"]}"' in page


@pytest.mark.parametrize("payload", [[1, 2], "10,00,000", 42, None])
def test_api_non_object_body_is_all_zero(client, payload):
    resp = client.post("/api/project", json=payload)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["capital"] == 0
    assert body["withdrawal"] == 0
    assert body["elapsed_months"] == 1


def test_api_input_names_accept_formatted_amounts(client):
    body = client.post("/api/project", json={
        "capital": "10,00,000", "fd_rate_pct": "7%", "monthly_withdrawal": "Rs 5,000",
        "nifty_rate_pct": 12, "tax_rate_pct": 10,
    }).get_json()
    assert body["capital"] == 1_000_000
    assert body["fd_rate"] == 7
    assert body["withdrawal"] == 5_000


def test_api_input_names_win_over_form_names(client):
    body = client.post("/api/project", json={"withdrawal": 1, "monthly_withdrawal": 2}).get_json()
    assert body["withdrawal"] == 2


def test_api_reports_losses_as_zero_gains(client):
    body = client.post("/api/project", json={
        "capital": 200_000, "nifty_rate": -10, "fd_rate": 7,
        "withdrawal": 5_000, "tax_rate": 30,
    }).get_json()
    assert body["nifty_gains"] == 0
    assert body["nifty_tax"] == 0
    assert body["nifty_net"] < 100_000
