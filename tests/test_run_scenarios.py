"""Tests for the scenario driver."""

import io

import pytest

import run_scenarios


@pytest.fixture
def output():
    stream = io.StringIO()
    assert run_scenarios.main(stream=stream) == 0
    return stream.getvalue().splitlines()


def test_every_scenario_is_reported(output):
    headers = [line for line in output if line.startswith("===== TEST CASE")]

    assert len(headers) == 8
    assert headers[0] == "===== TEST CASE 1: Normal purchase ====="
    assert output.count(run_scenarios.SEPARATOR) == 8


def test_passed_and_failed_counts(output):
    assert output.count(" Checkout passed.") == 4
    assert [line for line in output if line.startswith("Checkout failed:")] == [
        "Checkout failed: Milk is expired.",
        "Checkout failed: Invalid quantity for product: Chips",
        "Checkout failed: Total 330 is greater than balance 50",
        "Checkout failed: Cart is empty",
    ]


def test_normal_purchase_receipt(output):
    assert "Total package weight 1.1kg" in output
    assert "Customer Remaining Balance 170" in output
    assert "Customer Remaining Balance 0" in output


def test_non_shippable_case_has_no_notice(output):
    start = output.index("===== TEST CASE 6: Only scratch card (non-shippable) =====")
    end = output.index("===== TEST CASE 7: All items are shippable =====")

    assert "** Shipment notice **" not in output[start:end]
    assert "Customer Remaining Balance 20" in output[start:end]
