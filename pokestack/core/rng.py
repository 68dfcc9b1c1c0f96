"""Random variate source shared by the generators and engines.

Everything that rolls dice takes an optional ``rng`` argument implementing
:class:`RandomSource`; when omitted the process-wide :func:`default_rng` is
used. Tests pass a seeded :class:`StdRandomSource` or a tiny stub.
"""
from __future__ import annotations
import random
from typing import List, Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")

class RandomSource(Protocol):
    def uniform(self, a: float, b: float) -> float: ...
    def bernoulli(self, p: float) -> bool: ...
    def chisquare(self, df: float = 1) -> float: ...
    def choice(self, seq: Sequence[T]) -> T: ...
    def randint(self, a: int, b: int) -> int: ...
    def sample(self, seq: Sequence[T], k: int) -> List[T]: ...


class StdRandomSource:
    """:class:`random.Random` backed source.

    Chi-square with ``df`` degrees of freedom is drawn as Gamma(df/2, 2).
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random(seed)

    def uniform(self, a: float, b: float) -> float:
        return self.rng.uniform(a, b)

    def bernoulli(self, p: float) -> bool:
        return self.rng.random() < p

    def chisquare(self, df: float = 1) -> float:
        return self.rng.gammavariate(df / 2.0, 2.0)

    def choice(self, seq: Sequence[T]) -> T:
        return self.rng.choice(seq)

    def randint(self, a: int, b: int) -> int:
        return self.rng.randint(a, b)

    def sample(self, seq: Sequence[T], k: int) -> List[T]:
        """Up to ``k`` distinct elements; fewer when ``seq`` is shorter."""
        items = list(seq)
        return self.rng.sample(items, min(max(k, 0), len(items)))


_DEFAULT: StdRandomSource = StdRandomSource()

def default_rng() -> StdRandomSource:
    return _DEFAULT

def seed(value: Optional[int]) -> None:
    """Reseed the process-wide source (used by the CLI ``--seed`` flag)."""
    _DEFAULT.rng.seed(value)

__all__ = ["RandomSource", "StdRandomSource", "default_rng", "seed"]
