"""
NeuroWiki: Rule Table Evaluator
===============================
Every banded lookup in the library (drug weight tiers, score risk bands,
imaging interpretation tiers) is an ordered list of half-open bands:

    x < bound_0        -> result_0
    bound_0 <= x < b_1 -> result_1
    ...
    x >= bound_n       -> default

New protocols are added as data, not code.
"""

import bisect
import logging
from dataclasses import dataclass
from typing import Any, Generic, List, Sequence, Tuple, TypeVar

from models import RuleTableError

logger = logging.getLogger(__name__)

T = TypeVar("T")

@dataclass(frozen=True)
class Rule(Generic[T]):
    upper_bound: Any   # Exclusive
    result: T

class RuleTable(Generic[T]):
    """
    Ordered (upper_bound_exclusive, result) rules plus a catch-all default.
    Bounds must be strictly ascending. Lookup is a binary search over bounds.
    """

    def __init__(self, rules: Sequence[Tuple[Any, T]], default: T, name: str = "rule_table"):
        if not rules:
            raise RuleTableError(f"{name}: at least one rule is required")
        bounds = [bound for bound, _ in rules]
        for lower, upper in zip(bounds, bounds[1:]):
            if not lower < upper:
                raise RuleTableError(
                    f"{name}: bounds must be strictly ascending, got {lower} then {upper}"
                )
        self.name = name
        self.rules: Tuple[Rule[T], ...] = tuple(Rule(bound, result) for bound, result in rules)
        self.default = default
        self._bounds: List[Any] = bounds

    def evaluate(self, value) -> T:
        # bisect_right: a value equal to a bound belongs to the next band
        idx = bisect.bisect_right(self._bounds, value)
        if idx < len(self.rules):
            result = self.rules[idx].result
        else:
            result = self.default
        logger.debug("%s: %s -> %s", self.name, value, result)
        return result

    __call__ = evaluate

    def results(self) -> List[T]:
        """Every reachable result in band order, default last."""
        return [rule.result for rule in self.rules] + [self.default]

    def __len__(self) -> int:
        return len(self.rules) + 1

    def __repr__(self) -> str:
        return f"RuleTable(name={self.name!r}, rules={len(self.rules)}, default={self.default!r})"
