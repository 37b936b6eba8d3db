"""
Call Analyzer

This module scores a single queued call against a selector index and a rule
engine. Analysis never fails: an unresolved selector is itself a scored
condition.
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Union

from .rules import RuleEngine
from .selectors import SelectorIndex
from .types import AnalysisResult, CallValue, QueuedCall

logger = logging.getLogger(__name__)

UNKNOWN_SELECTOR_REASON = "Unknown selector (not in ABI)"
PAYABLE_REASON = "Payable call"
VALUE_ATTACHED_REASON = "ETH value attached"

_DECIMAL_LITERAL = re.compile(
    r'^[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)$'
)
_PREFIXED_INTEGER = re.compile(r'^0([xXoObB])([0-9a-fA-F]+)$')
_RADIX = {'x': 16, 'o': 8, 'b': 2}


@dataclass(frozen=True)
class Penalties:
    """Fixed risk contributions applied outside the rule table."""
    unknown_selector: int = 10
    payable: int = 5
    value_attached: int = 5

    @classmethod
    def from_settings(cls, settings: Any) -> 'Penalties':
        return cls(
            unknown_selector=settings.UNKNOWN_SELECTOR_PENALTY,
            payable=settings.PAYABLE_PENALTY,
            value_attached=settings.VALUE_PENALTY,
        )


def _to_float(number: Union[int, float]) -> float:
    try:
        return float(number)
    except OverflowError:
        return math.inf


def coerce_value(value: CallValue) -> float:
    """Interpret a call's ``value`` field as a number.

    Numbers pass through, booleans count as 0/1. Strings follow the JSON/JS
    numeric-string grammar: optional sign, decimal or exponent notation,
    ``Infinity``, or unsigned ``0x``/``0o``/``0b`` integers. Missing, empty
    and unparsable values are 0. Integers too large for a float are infinite.
    """
    if value is None:
        return 0.0
    if isinstance(value, (bool, int, float)):
        return _to_float(value)
    if not isinstance(value, str):
        return 0.0
    text = value.strip()
    if not text:
        return 0.0
    prefixed = _PREFIXED_INTEGER.match(text)
    if prefixed:
        base = _RADIX[prefixed.group(1).lower()]
        try:
            return _to_float(int(prefixed.group(2), base))
        except ValueError:
            return 0.0
    if _DECIMAL_LITERAL.match(text):
        # float() maps overflowing exponents such as "1e400" to inf
        return float(text)
    return 0.0


def has_value(value: CallValue) -> bool:
    number = coerce_value(value)
    return not math.isnan(number) and number > 0


class CallAnalyzer:
    """Scores queued calls against one ABI."""

    def __init__(
        self,
        index: SelectorIndex,
        engine: Optional[RuleEngine] = None,
        penalties: Optional[Penalties] = None
    ) -> None:
        """Initialize the analyzer.

        Args:
            index: Selector index built from the target ABI
            engine: Rule engine to apply (default: default rule table)
            penalties: Fixed penalties (default: 10/5/5)
        """
        self.index = index
        self.engine = engine or RuleEngine()
        self.penalties = penalties or Penalties()

    def analyze(self, call: Union[QueuedCall, Mapping[str, Any]]) -> AnalysisResult:
        """Score one call.

        Args:
            call: Queued call, or its raw mapping form

        Returns:
            AnalysisResult: Selector, target, total risk and ordered reasons
        """
        if not isinstance(call, QueuedCall):
            call = QueuedCall.from_dict(call)

        selector = call.selector
        risk = 0
        reasons: List[str] = []

        descriptor = self.index.lookup(selector)
        if descriptor is None:
            risk += self.penalties.unknown_selector
            reasons.append(UNKNOWN_SELECTOR_REASON)
        else:
            for match in self.engine.evaluate(descriptor.name):
                risk += match.weight
                reasons.append(match.reason)
            if descriptor.is_payable:
                risk += self.penalties.payable
                reasons.append(PAYABLE_REASON)

        if has_value(call.value):
            risk += self.penalties.value_attached
            reasons.append(VALUE_ATTACHED_REASON)

        logger.debug("Call to %s via %s scored %d", call.to, selector or "<empty>", risk)
        return AnalysisResult(
            selector=selector,
            target=call.to,
            risk=risk,
            reasons=tuple(reasons),
        )


def analyze_call(
    index: SelectorIndex,
    call: Union[QueuedCall, Mapping[str, Any]],
    engine: Optional[RuleEngine] = None
) -> AnalysisResult:
    """Score a single call with the default penalties."""
    return CallAnalyzer(index, engine).analyze(call)
