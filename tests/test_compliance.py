import pytest

from zklense.analysis.compliance import (
    validate,
    compute_suggestion,
    estimate_transaction_size,
    shortvec_length,
)
from zklense.analysis.models import ComputeBudgetOverrides


def test_usage_and_approaching_tier(make_view):
    report = validate(make_view(), 400, ComputeBudgetOverrides(), 150_000)
    assert report.compute_usage_percent == 75.0
    assert "approaching budget limit" in report.compute_suggestion
    assert report.exceeds_max_compute is False
    assert report.compute_warning is None


@pytest.mark.parametrize("usage,phrase", [
    (0.0, "within acceptable range"),
    (70.0, "within acceptable range"),
    (70.01, "approaching budget limit"),
    (90.0, "approaching budget limit"),
    (90.5, "near budget limit"),
    (250.0, "near budget limit"),
])
def test_suggestion_tiers(usage, phrase):
    assert phrase in compute_suggestion(usage)


def test_zero_limit_has_zero_usage(make_view):
    for consumed in (0, 1, 10_000_000):
        report = validate(make_view(), 100, ComputeBudgetOverrides(cu_limit=0), consumed)
        assert report.compute_usage_percent == 0


def test_exceeding_max_compute(make_view):
    report = validate(make_view(), 100, ComputeBudgetOverrides(cu_limit=1_500_000), 10)
    assert report.exceeds_max_compute is True
    assert report.compute_warning == "CU limit (1500000) exceeds maximum allowed (1400000)"
    assert report.within_compute_budget is False


def test_max_compute_itself_is_allowed(make_view):
    report = validate(make_view(), 100, ComputeBudgetOverrides(cu_limit=1_400_000), 10)
    assert report.exceeds_max_compute is False


def test_size_limit(make_view):
    assert validate(make_view(), 1232, ComputeBudgetOverrides(), 0).within_size_limit is True

    over = validate(make_view(), 1300, ComputeBudgetOverrides(), 0)
    assert over.within_size_limit is False
    assert over.size_suggestion == "Transaction size (1300) exceeds maximum (1232)"


def test_transaction_size_given_or_estimated(make_view):
    assert validate(make_view(), 500, ComputeBudgetOverrides(), 0, transaction_size=777).transaction_size == 777
    assert validate(make_view(), 500, ComputeBudgetOverrides(), 0).transaction_size == 1 + 64 + 500
    assert validate(make_view(signature_count=2), 500, ComputeBudgetOverrides(), 0).transaction_size == 1 + 128 + 500


def test_shortvec_length():
    assert shortvec_length(0) == 1
    assert shortvec_length(127) == 1
    assert shortvec_length(128) == 2
    assert shortvec_length(16_384) == 3
    assert estimate_transaction_size(10, 0) == 11
