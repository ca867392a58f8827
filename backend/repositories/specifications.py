"""
Specification Pattern Implementation

Selection rules for entity collections (payments of a contract, overdue
payments, relations of a user, ...) as small composable objects. Repositories
and aggregation services apply them to collections that were already fetched.

    overdue_elsewhere = OverduePaymentSpec(now) & ~BelongsToApartmentSpec("APT002")
    late_payments = overdue_elsewhere.filter(payments)

Chained ``&`` and ``|`` flatten into a single AllOf/AnyOf node.
"""

from abc import ABC, abstractmethod
from typing import Generic, Iterable, List, Optional, Tuple, TypeVar


T = TypeVar('T')


class Specification(ABC, Generic[T]):
    """A single selection rule over entities of type T."""

    @abstractmethod
    def is_satisfied_by(self, candidate: T) -> bool:
        """
        Check if a candidate entity satisfies this rule.

        Args:
            candidate: Entity to check

        Returns:
            True if the entity is selected
        """

    def filter(self, candidates: Iterable[T]) -> List[T]:
        """Candidates satisfying this rule, in input order."""
        return [c for c in candidates if self.is_satisfied_by(c)]

    def first(self, candidates: Iterable[T]) -> Optional[T]:
        """First satisfying candidate, or None."""
        return next((c for c in candidates if self.is_satisfied_by(c)), None)

    def count(self, candidates: Iterable[T]) -> int:
        return sum(1 for c in candidates if self.is_satisfied_by(c))

    def __and__(self, other: "Specification[T]") -> "AllOf[T]":
        return AllOf(self, other)

    def __or__(self, other: "Specification[T]") -> "AnyOf[T]":
        return AnyOf(self, other)

    def __invert__(self) -> "Not[T]":
        return Not(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({vars(self)})"


class _Composite(Specification[T]):
    def __init__(self, *specs: Specification[T]):
        flattened: List[Specification[T]] = []
        for spec in specs:
            if type(spec) is type(self):
                flattened.extend(spec.specs)
            else:
                flattened.append(spec)
        self.specs: Tuple[Specification[T], ...] = tuple(flattened)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(repr(s) for s in self.specs)})"


class AllOf(_Composite[T]):
    """Selected when every member rule selects the candidate."""

    def is_satisfied_by(self, candidate: T) -> bool:
        return all(spec.is_satisfied_by(candidate) for spec in self.specs)


class AnyOf(_Composite[T]):
    """Selected when at least one member rule selects the candidate."""

    def is_satisfied_by(self, candidate: T) -> bool:
        return any(spec.is_satisfied_by(candidate) for spec in self.specs)


class Not(Specification[T]):
    """Inverts another rule."""

    def __init__(self, spec: Specification[T]):
        self.spec = spec

    def is_satisfied_by(self, candidate: T) -> bool:
        return not self.spec.is_satisfied_by(candidate)

    def __repr__(self) -> str:
        return f"Not({self.spec!r})"
