from decimal import Decimal

import pytest

from zklense.analysis.fees import calculate, priority_fee_lamports
from zklense.analysis.models import ComputeBudgetOverrides


def test_default_budget_single_signature():
    cost = calculate(ComputeBudgetOverrides(), 1)
    assert cost.base_fee == 5000
    assert cost.priority_fee == 0
    assert cost.total_fee == 5000
    assert cost.cost_in_sol == Decimal("0.000005")
    assert cost.priority == 0


def test_priority_fee_with_price():
    cost = calculate(ComputeBudgetOverrides(cu_limit=200_000, cu_price_microlamports=10_000), 1)
    assert cost.priority_fee == 2000
    assert cost.total_fee == 7000
    assert cost.priority == Decimal("0.01")
    assert cost.fee_suggestion == "Priority fee is set"


def test_priority_fee_truncates():
    # 3 * 333_333 / 1_000_000 = 0.999999 -> 0
    assert priority_fee_lamports(3, 333_333) == 0
    assert priority_fee_lamports(1_400_000, 1) == 1
    assert priority_fee_lamports(1_999_999, 1) == 1


def test_zero_signatures_are_charged_as_one():
    assert calculate(ComputeBudgetOverrides(), 0).base_fee == 5000
    assert calculate(ComputeBudgetOverrides(), 0).signature_count == 1


def test_multiple_signatures():
    assert calculate(ComputeBudgetOverrides(), 3).base_fee == 15_000


@pytest.mark.parametrize("cu_limit,price,sigs", [
    (0, 0, 1),
    (0, 5_000_000, 2),
    (1_400_000, 123_456, 1),
    (2**32 - 1, 2**64 - 1, 4),
])
def test_total_is_base_plus_priority(cu_limit, price, sigs):
    cost = calculate(ComputeBudgetOverrides(cu_limit, price), sigs)
    assert cost.total_fee == cost.base_fee + cost.priority_fee
    assert cost.cost_in_sol == Decimal(cost.total_fee) / Decimal(1_000_000_000)


def test_priority_zero_when_limit_zero():
    assert calculate(ComputeBudgetOverrides(0, 1000), 1).priority == 0


def test_fee_suggestion_without_priority():
    cost = calculate(ComputeBudgetOverrides(), 1)
    assert cost.fee_suggestion == "Consider adding priority fee for faster confirmation"
