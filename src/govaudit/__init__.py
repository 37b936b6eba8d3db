"""
govaudit - offline risk auditing of queued contract calls.
"""

from .analyzers import (
    AnalysisResult,
    CallAnalyzer,
    DEFAULT_RULES,
    Report,
    Rule,
    RuleEngine,
    audit,
    build_selector_index,
    derive_selector,
)

__version__ = "0.1.0"

__all__ = [
    'AnalysisResult',
    'CallAnalyzer',
    'DEFAULT_RULES',
    'Report',
    'Rule',
    'RuleEngine',
    'audit',
    'build_selector_index',
    'derive_selector',
]
