"""
Function selector derivation and ABI selector index.

A selector is the first 4 bytes of keccak256 over a function's canonical
signature, rendered as a lowercase ``0x``-prefixed hex string.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from eth_utils import keccak

from .types import ABIEntry, FunctionDescriptor, Mutability

logger = logging.getLogger(__name__)

SELECTOR_LENGTH = 10  # "0x" + 8 hex digits


def function_signature(name: str, parameter_types: Sequence[str] = ()) -> str:
    """Build the canonical ``name(type1,type2,...)`` signature string."""
    return f"{name}({','.join(parameter_types)})"


def derive_selector(signature: str) -> str:
    """Compute the 4-byte selector for a canonical function signature.

    Args:
        signature: Canonical signature such as ``"transfer(address,uint256)"``

    Returns:
        str: Lowercase selector such as ``"0xa9059cbb"``
    """
    return "0x" + keccak(text=signature)[:4].hex()


@dataclass(frozen=True)
class SelectorCollision:
    """Two different signatures that hash to the same selector."""
    selector: str
    replaced: str
    winner: str


class SelectorIndex:
    """Lookup from selector to the function declared under it.

    Later ABI entries replace earlier ones under the same selector. Each
    replacement between different signatures is kept in :attr:`collisions`.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, FunctionDescriptor] = {}
        self.collisions: List[SelectorCollision] = []

    def add(self, descriptor: FunctionDescriptor) -> str:
        """Insert a descriptor and return its selector."""
        signature = descriptor.signature
        selector = derive_selector(signature)
        previous = self._entries.get(selector)
        if previous is not None and previous.signature != signature:
            collision = SelectorCollision(selector, previous.signature, signature)
            self.collisions.append(collision)
            logger.warning(
                "Selector collision on %s: %s replaced by %s",
                selector, previous.signature, signature
            )
        self._entries[selector] = descriptor
        return selector

    def lookup(self, selector: str) -> Optional[FunctionDescriptor]:
        return self._entries.get(selector)

    def items(self) -> Iterable[Tuple[str, FunctionDescriptor]]:
        return self._entries.items()

    def __contains__(self, selector: object) -> bool:
        return selector in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"SelectorIndex({len(self)} functions, {len(self.collisions)} collisions)"


def canonical_type(param: Mapping) -> Optional[str]:
    """Canonical type string of an ABI parameter.

    Tuple types are expanded from their ``components``, keeping any array
    suffix: ``tuple[]`` over ``(address,uint256)`` becomes
    ``(address,uint256)[]``.
    """
    abi_type = param.get('type')
    if not isinstance(abi_type, str):
        return None
    if not abi_type.startswith('tuple'):
        return abi_type
    components = param.get('components')
    if not isinstance(components, list):
        return None
    inner = _canonical_types(components)
    if inner is None:
        return None
    return f"({','.join(inner)}){abi_type[len('tuple'):]}"


def _canonical_types(params: List) -> Optional[Tuple[str, ...]]:
    types = []
    for param in params:
        if not isinstance(param, Mapping):
            return None
        canonical = canonical_type(param)
        if canonical is None:
            return None
        types.append(canonical)
    return tuple(types)


def _parameter_types(entry: ABIEntry) -> Optional[Tuple[str, ...]]:
    inputs = entry.get('inputs')
    if inputs is None:
        return ()
    if not isinstance(inputs, list):
        return None
    return _canonical_types(inputs)


def descriptor_from_abi(entry: ABIEntry) -> Optional[FunctionDescriptor]:
    """Decode one ABI entry, or return None if it is not a usable function.

    Constructors, events, errors, fallback and receive entries are skipped,
    as are function entries without a name or with malformed inputs.
    """
    if not isinstance(entry, Mapping) or entry.get('type') != 'function':
        return None
    name = entry.get('name')
    if not isinstance(name, str) or not name:
        return None
    parameter_types = _parameter_types(entry)
    if parameter_types is None:
        logger.debug("Skipping function %s with malformed inputs", name)
        return None
    return FunctionDescriptor(
        name=name,
        parameter_types=parameter_types,
        mutability=Mutability.from_abi(entry),
    )


def build_selector_index(abi: Iterable[ABIEntry]) -> SelectorIndex:
    """Build a selector index from a parsed ABI.

    Args:
        abi: Sequence of ABI entries in declaration order

    Returns:
        SelectorIndex: Index covering every function entry
    """
    index = SelectorIndex()
    skipped = 0
    for entry in abi:
        descriptor = descriptor_from_abi(entry)
        if descriptor is None:
            skipped += 1
            continue
        index.add(descriptor)
    logger.debug("Indexed %d functions (%d entries skipped)", len(index), skipped)
    return index
