"""
Tests for the call analyzer.
"""
import json
import math

import pytest

from govaudit.analyzers.call_analyzer import (
    CallAnalyzer,
    Penalties,
    analyze_call,
    coerce_value,
    has_value,
)
from govaudit.analyzers.rules import Rule, RuleEngine
from govaudit.analyzers.selectors import build_selector_index
from govaudit.analyzers.types import QueuedCall

MINT = "0x40c10f19"
GRANT_ROLE = "0x2f2ff15d"
TRANSFER = "0xa9059cbb"
TARGET = "0x1111111111111111111111111111111111111111"

ABI = [
    {
        "type": "function",
        "name": "mint",
        "inputs": [{"type": "address"}, {"type": "uint256"}],
        "stateMutability": "nonpayable",
    },
    {
        "type": "function",
        "name": "grantRole",
        "inputs": [{"type": "bytes32"}, {"type": "address"}],
        "stateMutability": "payable",
    },
    {
        "type": "function",
        "name": "transfer",
        "inputs": [{"type": "address"}, {"type": "uint256"}],
    },
]


def calldata(selector, args_words=2):
    return selector + "00" * 32 * args_words


class TestCallAnalyzer:
    """Scenarios for CallAnalyzer.analyze."""

    @pytest.fixture
    def analyzer(self):
        return CallAnalyzer(build_selector_index(ABI))

    def test_mint_without_value(self, analyzer):
        result = analyzer.analyze({"to": TARGET, "data": calldata(MINT), "value": 0})
        assert result.selector == MINT
        assert result.target == TARGET
        assert result.risk == 20
        assert result.reasons == ("Token minting",)

    def test_mint_with_value(self, analyzer):
        result = analyzer.analyze({"to": TARGET, "data": calldata(MINT), "value": 1})
        assert result.risk == 25
        assert result.reasons == ("Token minting", "ETH value attached")

    def test_payable_grant_role(self, analyzer):
        result = analyzer.analyze({"to": TARGET, "data": calldata(GRANT_ROLE), "value": 0})
        assert result.risk == 20
        assert result.reasons == ("Role change", "Payable call")

    def test_payable_grant_role_with_value(self, analyzer):
        result = analyzer.analyze({"to": TARGET, "data": calldata(GRANT_ROLE), "value": "5"})
        assert result.risk == 25
        assert result.reasons == ("Role change", "Payable call", "ETH value attached")

    def test_known_harmless_function(self, analyzer):
        result = analyzer.analyze({"to": TARGET, "data": calldata(TRANSFER)})
        assert result.risk == 0
        assert result.reasons == ()

    def test_unknown_selector(self, analyzer):
        result = analyzer.analyze({"to": TARGET, "data": "0xdeadbeef", "value": 0})
        assert result.risk == 10
        assert result.reasons == ("Unknown selector (not in ABI)",)

    def test_unknown_selector_with_value(self, analyzer):
        result = analyzer.analyze({"to": TARGET, "data": "0xdeadbeef", "value": "1000"})
        assert result.risk == 15
        assert result.reasons == ("Unknown selector (not in ABI)", "ETH value attached")

    @pytest.mark.parametrize("data", ["", "0x", "0x40c1", None])
    def test_short_or_missing_data_is_unknown(self, analyzer, data):
        result = analyzer.analyze({"to": TARGET, "data": data})
        assert result.risk == 10
        assert result.reasons == ("Unknown selector (not in ABI)",)

    def test_uppercase_calldata_is_not_normalised(self, analyzer):
        result = analyzer.analyze({"to": TARGET, "data": "0x40C10F19"})
        assert result.selector == "0x40C10F19"
        assert result.reasons == ("Unknown selector (not in ABI)",)

    def test_missing_target(self, analyzer):
        result = analyzer.analyze({"data": MINT})
        assert result.target is None
        assert result.risk == 20

    def test_accepts_queued_call(self, analyzer):
        result = analyzer.analyze(QueuedCall(to=TARGET, data=MINT, value="0"))
        assert result.reasons == ("Token minting",)

    def test_call_is_not_mutated(self, analyzer):
        call = {"to": TARGET, "data": calldata(MINT), "value": 1}
        snapshot = dict(call)
        analyzer.analyze(call)
        assert call == snapshot

    def test_custom_penalties(self):
        analyzer = CallAnalyzer(
            build_selector_index(ABI),
            penalties=Penalties(unknown_selector=50, payable=1, value_attached=2),
        )
        assert analyzer.analyze({"to": TARGET, "data": "0x00000000"}).risk == 50
        assert analyzer.analyze({"to": TARGET, "data": GRANT_ROLE, "value": 1}).risk == 18

    def test_custom_rules_see_function_name_only(self):
        engine = RuleEngine([Rule("transfer", lambda name: name == "transfer", 3, "Transfer")])
        result = analyze_call(build_selector_index(ABI), {"to": TARGET, "data": TRANSFER}, engine)
        assert result.risk == 3
        assert result.reasons == ("Transfer",)

    def test_empty_index(self):
        result = analyze_call(build_selector_index([]), {"to": TARGET, "data": MINT})
        assert result.reasons == ("Unknown selector (not in ABI)",)


class TestValueCoercion:
    """Test cases for coerce_value / has_value."""

    @pytest.mark.parametrize("value, expected", [
        (None, 0.0),
        (0, 0.0),
        (7, 7.0),
        (0.5, 0.5),
        (True, 1.0),
        ("", 0.0),
        ("   ", 0.0),
        ("42", 42.0),
        (" 1e18 ", 1e18),
        ("0x10", 16.0),
        ("0x0", 0.0),
        ("abc", 0.0),
        ("0xzz", 0.0),
        ([1], 0.0),
    ])
    def test_coerce_value(self, value, expected):
        assert coerce_value(value) == expected

    @pytest.mark.parametrize("value, expected", [
        ("0b101", 5.0),
        ("0B1", 1.0),
        ("0o17", 15.0),
        ("0X1f", 31.0),
        ("0b12", 0.0),
        ("0o8", 0.0),
        ("-0x10", 0.0),
        ("1_000", 0.0),
        ("inf", 0.0),
        ("infinity", 0.0),
        ("nan", 0.0),
        ("Infinity", math.inf),
        ("+1.5", 1.5),
        ("1.", 1.0),
        (".5", 0.5),
        ("1e400", math.inf),
        ("12abc", 0.0),
    ])
    def test_numeric_string_grammar(self, value, expected):
        assert coerce_value(value) == expected

    def test_huge_hex_value(self):
        assert coerce_value("0x" + "f" * 300) == math.inf
        assert has_value("0x" + "f" * 300)

    def test_huge_integer_from_json(self):
        """A JSON integer beyond float range counts as attached value."""
        call = json.loads('{"to": "0xA", "data": "0xdeadbeef", "value": 1' + "0" * 400 + '}')
        assert coerce_value(call["value"]) == math.inf

        result = analyze_call(build_selector_index(ABI), call)
        assert result.risk == 15
        assert result.reasons == ("Unknown selector (not in ABI)", "ETH value attached")

    def test_underscored_string_is_not_value(self):
        call = {"to": TARGET, "data": "0xdeadbeef", "value": "1_000"}
        result = analyze_call(build_selector_index(ABI), call)
        assert result.risk == 10
        assert result.reasons == ("Unknown selector (not in ABI)",)

    @pytest.mark.parametrize("value", [0, "0", None, "", "nan", "-1", -3, "garbage"])
    def test_no_value(self, value):
        assert not has_value(value)

    @pytest.mark.parametrize("value", [1, "1", "0x1", 0.001, "1000000000000000000"])
    def test_has_value(self, value):
        assert has_value(value)
