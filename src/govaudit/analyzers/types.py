"""
Type definitions for the call auditor.

This module contains the data structures passed between the selector index,
the rule engine, the call analyzer and the report aggregator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

# Raw ABI entries and queue entries as parsed from JSON
ABIEntry = Mapping[str, Any]
CallValue = Union[int, float, str, None]


class Mutability(str, Enum):
    """Declared state mutability of a contract function."""
    PURE = "pure"
    VIEW = "view"
    NONPAYABLE = "nonpayable"
    PAYABLE = "payable"

    @classmethod
    def from_abi(cls, entry: ABIEntry) -> 'Mutability':
        """Resolve mutability for an ABI function entry.

        Entries without a recognised ``stateMutability`` are ``nonpayable``;
        legacy ``payable``/``constant`` flags are not consulted.
        """
        value = entry.get('stateMutability')
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                return cls.NONPAYABLE
        return cls.NONPAYABLE


@dataclass(frozen=True)
class FunctionDescriptor:
    """Decoded metadata for one ABI function."""
    name: str
    parameter_types: Tuple[str, ...] = ()
    mutability: Mutability = Mutability.NONPAYABLE

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.parameter_types)})"

    @property
    def is_payable(self) -> bool:
        return self.mutability is Mutability.PAYABLE


@dataclass(frozen=True)
class QueuedCall:
    """A pending call awaiting execution."""
    to: Optional[str]
    data: str = ""
    value: CallValue = 0

    @property
    def selector(self) -> str:
        """Leading 10 characters of the calldata (``0x`` + 4 bytes)."""
        return self.data[:10]

    @classmethod
    def from_dict(cls, entry: Mapping[str, Any]) -> 'QueuedCall':
        """Build a call from a raw queue entry, tolerating missing fields."""
        data = entry.get('data')
        return cls(
            to=entry.get('to'),
            data=data if isinstance(data, str) else "",
            value=entry.get('value', 0),
        )


@dataclass(frozen=True)
class AnalysisResult:
    """Risk assessment of a single queued call."""
    selector: str
    target: Optional[str]
    risk: int
    reasons: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """JSON form; a call without a ``to`` field has no ``target`` key."""
        data: Dict[str, Any] = {'selector': self.selector}
        if self.target is not None:
            data['target'] = self.target
        data['risk'] = self.risk
        data['reasons'] = list(self.reasons)
        return data


@dataclass(frozen=True)
class Report:
    """Batch summary over all analysed calls."""
    avg_risk: str
    items: Tuple[AnalysisResult, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'avgRisk': self.avg_risk,
            'items': [item.to_dict() for item in self.items],
        }

    @property
    def max_risk(self) -> int:
        return max((item.risk for item in self.items), default=0)

    def flagged(self, threshold: int = 1) -> List[AnalysisResult]:
        """Items whose risk meets or exceeds ``threshold``."""
        return [item for item in self.items if item.risk >= threshold]
