"""
Pattern rules for dangerous function names.

Each rule tests the lowercased function name only. All rules are checked in
declaration order and every match contributes its weight, so the order of
reasons in a result always follows the order of the rule table.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)

NamePredicate = Callable[[str], bool]


@dataclass(frozen=True)
class Rule:
    """A weighted test over a lowercased function name."""
    id: str
    predicate: NamePredicate
    weight: int
    description: str

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationError("Rule id must not be empty")
        if not isinstance(self.weight, int) or isinstance(self.weight, bool) or self.weight < 0:
            raise ValidationError(f"Rule {self.id!r} weight must be a non-negative integer")

    @classmethod
    def from_pattern(cls, id: str, pattern: str, weight: int, description: str) -> 'Rule':
        """Create a rule that matches when ``pattern`` occurs anywhere in the name."""
        try:
            regex = re.compile(pattern, re.IGNORECASE)
        except re.error as e:
            raise ValidationError(f"Rule {id!r} has an invalid pattern {pattern!r}: {e}") from e
        return cls(id=id, predicate=lambda name: regex.search(name) is not None,
                   weight=weight, description=description)

    def matches(self, name: str) -> bool:
        return bool(self.predicate(name))


@dataclass(frozen=True)
class RuleMatch:
    """One rule that fired for a function name."""
    rule_id: str
    weight: int
    reason: str


DEFAULT_RULES: Tuple[Rule, ...] = (
    Rule.from_pattern('delegatecall', r'delegatecall', 40, 'Potential delegatecall use'),
    Rule.from_pattern('upgrade-proxy', r'upgrade.*(implementation|proxy)', 25, 'Proxy upgrade'),
    Rule.from_pattern('role-admin', r'(grant|revoke).*role', 15, 'Role change'),
    Rule.from_pattern('pause', r'pause|unpause', 10, 'Pausing contract'),
    Rule.from_pattern('mint', r'mint', 20, 'Token minting'),
)


class RuleEngine:
    """Evaluates an ordered rule table against function names."""

    def __init__(self, rules: Optional[Iterable[Rule]] = None) -> None:
        """Initialize the engine.

        Args:
            rules: Rule table in evaluation order (default: DEFAULT_RULES)

        Raises:
            ValidationError: If two rules share an id
        """
        self.rules: Tuple[Rule, ...] = tuple(DEFAULT_RULES if rules is None else rules)
        seen = set()
        for rule in self.rules:
            if rule.id in seen:
                raise ValidationError(f"Duplicate rule id: {rule.id!r}")
            seen.add(rule.id)

    def evaluate(self, name: str) -> List[RuleMatch]:
        """Return every rule matching ``name``, in rule order."""
        lowered = name.lower()
        return [
            RuleMatch(rule.id, rule.weight, rule.description)
            for rule in self.rules
            if rule.matches(lowered)
        ]

    def extended(self, extra: Iterable[Rule]) -> 'RuleEngine':
        """Return a new engine with ``extra`` appended to this rule table."""
        return RuleEngine(self.rules + tuple(extra))

    def __len__(self) -> int:
        return len(self.rules)

    def __repr__(self) -> str:
        return f"RuleEngine({[rule.id for rule in self.rules]!r})"


def rule_from_dict(entry: Mapping[str, Any]) -> Rule:
    """Build a pattern rule from a ``{id, pattern, weight, description}`` mapping."""
    if not isinstance(entry, Mapping):
        raise ValidationError(f"Rule definition must be an object, got {type(entry).__name__}")
    missing = [key for key in ('id', 'pattern', 'weight') if key not in entry]
    if missing:
        raise ValidationError(f"Rule definition missing fields: {', '.join(missing)}")
    rule_id = str(entry['id'])
    return Rule.from_pattern(
        id=rule_id,
        pattern=str(entry['pattern']),
        weight=entry['weight'],
        description=str(entry.get('description', rule_id)),
    )


def load_rules(document: Any) -> Tuple[Rule, ...]:
    """Build a rule table from a parsed JSON document.

    The document is either a list of rule definitions or an object with a
    ``rules`` list.
    """
    if isinstance(document, Mapping):
        document = document.get('rules')
    if not isinstance(document, Sequence) or isinstance(document, (str, bytes)):
        raise ValidationError("Rule document must be a list of rule definitions")
    rules = tuple(rule_from_dict(entry) for entry in document)
    logger.debug("Loaded %d custom rules", len(rules))
    return rules
