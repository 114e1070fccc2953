import base64

import pytest

import report
from cli import compute_display_data, summary_text
from projection import ProjectionInput, project


@pytest.fixture
def finite_out():
    return project(ProjectionInput(
        capital=4_000_000, fd_rate_pct=7.0, nifty_rate_pct=12.0,
        monthly_withdrawal=25_000, tax_rate_pct=12.5,
    ))


@pytest.fixture
def nan_out():
    return project(ProjectionInput(
        capital=200_000, fd_rate_pct=7.0, nifty_rate_pct=-150.0,
        monthly_withdrawal=60_000, tax_rate_pct=10.0,
    ))


def test_web_charts_are_png(finite_out):
    images = report.get_web_charts(finite_out)
    assert len(images) == 2
    for b64 in images:
        assert base64.b64decode(b64).startswith(b"\x89PNG")


def test_web_charts_survive_nan_growth(nan_out):
    assert len(report.get_web_charts(nan_out)) == 2


def test_generate_pdf(tmp_path, finite_out):
    d = compute_display_data(finite_out)
    path = report.generate_pdf(finite_out, d, summary_text(d), str(tmp_path / "r.pdf"))
    with open(path, "rb") as f:
        assert f.read(4) == b"%PDF"


def test_inr_axis_labels():
    assert report._inr_fmt(2.5e7, None) == "Rs 2.5Cr"
    assert report._inr_fmt(3.5e5, None) == "Rs 3.5L"
    assert report._inr_fmt(5_000, None) == "Rs 5k"
    assert report._inr_fmt(500, None) == "Rs 500"
