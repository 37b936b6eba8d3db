"""
govaudit Analyzers Package

This package contains the decode-and-score pipeline:
- Selectors: selector derivation and the ABI selector index
- Rules: weighted name patterns for dangerous operations
- Call Analyzer: per-call risk scoring
- Report: aggregation into a batch report
"""

from .call_analyzer import CallAnalyzer, Penalties, analyze_call
from .report import aggregate, audit, build_report, format_average
from .rules import DEFAULT_RULES, Rule, RuleEngine, RuleMatch, load_rules
from .selectors import SelectorIndex, build_selector_index, derive_selector, function_signature
from .types import AnalysisResult, FunctionDescriptor, Mutability, QueuedCall, Report

__all__ = [
    'AnalysisResult',
    'CallAnalyzer',
    'DEFAULT_RULES',
    'FunctionDescriptor',
    'Mutability',
    'Penalties',
    'QueuedCall',
    'Report',
    'Rule',
    'RuleEngine',
    'RuleMatch',
    'SelectorIndex',
    'aggregate',
    'analyze_call',
    'audit',
    'build_report',
    'build_selector_index',
    'derive_selector',
    'format_average',
    'function_signature',
    'load_rules',
]
