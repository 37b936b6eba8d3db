"""
Report aggregation and the end-to-end audit pipeline.
"""

import logging
from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple, Union

from .call_analyzer import CallAnalyzer, Penalties
from .rules import RuleEngine
from .selectors import build_selector_index
from .types import ABIEntry, AnalysisResult, QueuedCall, Report

logger = logging.getLogger(__name__)

_CENTS = Decimal('0.01')


def format_average(risks: Sequence[int]) -> str:
    """Mean of ``risks`` with exactly two fraction digits, ``"0.00"`` if empty."""
    if not risks:
        return "0.00"
    mean = Decimal(sum(risks)) / Decimal(len(risks))
    return str(mean.quantize(_CENTS, rounding=ROUND_HALF_UP))


def build_report(results: Iterable[AnalysisResult]) -> Report:
    """Fold per-call results into a report, preserving their order."""
    items = tuple(results)
    return Report(
        avg_risk=format_average([item.risk for item in items]),
        items=items,
    )


def aggregate(pairs: Iterable[Tuple[Union[QueuedCall, Mapping[str, Any]], AnalysisResult]]) -> Report:
    """Fold (call, result) pairs into a report.

    Each result takes its target from the call it was produced for, so the
    report always reflects the queue entry's ``to`` field.
    """
    results = []
    for call, result in pairs:
        if not isinstance(call, QueuedCall):
            call = QueuedCall.from_dict(call)
        results.append(replace(result, target=call.to))
    return build_report(results)


def audit(
    abi: Iterable[ABIEntry],
    calls: Iterable[Any],
    engine: Optional[RuleEngine] = None,
    penalties: Optional[Penalties] = None
) -> Report:
    """Audit a call queue against an ABI.

    Args:
        abi: Parsed ABI entries
        calls: Queued calls, as QueuedCall values or raw mappings
        engine: Rule engine to apply (default: default rule table)
        penalties: Fixed penalties (default: 10/5/5)

    Returns:
        Report: Average risk and one result per call, in queue order
    """
    index = build_selector_index(abi)
    analyzer = CallAnalyzer(index, engine, penalties)
    report = aggregate((call, analyzer.analyze(call)) for call in calls)
    logger.info("Audited %d calls against %d functions, average risk %s",
                len(report.items), len(index), report.avg_risk)
    return report
