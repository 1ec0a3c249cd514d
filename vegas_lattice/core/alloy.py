"""
Weighted random selection of site kinds.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ..errors import InvalidRatiosError


class Alloy:
    """
    Weighted categorical distribution over site kinds.

    Parameters
    ----------
    kinds : Sequence[str]
        Candidate labels. Repeated labels are allowed; their weights add up.
    ratios : Sequence[int]
        Non-negative integer weight for each label

    Raises
    ------
    InvalidRatiosError
        If the lengths differ, a ratio is negative or not an integer, or all
        ratios are zero (this includes an empty alloy).

    Examples
    --------
    >>> alloy = Alloy(['Fe', 'Ni'], [80, 20])
    >>> alloy.pick(np.random.default_rng(0)) in ('Fe', 'Ni')
    True
    """

    def __init__(self, kinds: Sequence[str], ratios: Sequence[int]):
        kinds = list(kinds)
        ratios = list(ratios)

        if len(kinds) != len(ratios):
            raise InvalidRatiosError(
                f"Alloy needs one ratio per kind: got {len(kinds)} kinds "
                f"and {len(ratios)} ratios"
            )
        for ratio in ratios:
            if isinstance(ratio, bool) or not isinstance(ratio, (int, np.integer)):
                raise InvalidRatiosError(f"Alloy ratios must be integers, got {ratio!r}")
            if ratio < 0:
                raise InvalidRatiosError(f"Alloy ratios must be non-negative, got {ratio}")
        if sum(ratios) <= 0:
            raise InvalidRatiosError("Alloy ratios must not all be zero")

        self._kinds = tuple(str(kind) for kind in kinds)
        self._ratios = tuple(int(ratio) for ratio in ratios)
        weights = np.array(self._ratios, dtype=float)
        self._probabilities = weights / weights.sum()

    @classmethod
    def from_targets(cls, targets: Iterable[Tuple[str, int]]) -> 'Alloy':
        """Build from ``(kind, ratio)`` pairs, e.g. ``[('Fe', 3), ('Ni', 1)]``."""
        targets = list(targets)
        return cls([kind for kind, _ in targets], [ratio for _, ratio in targets])

    @property
    def kinds(self) -> Tuple[str, ...]:
        return self._kinds

    @property
    def ratios(self) -> Tuple[int, ...]:
        return self._ratios

    @property
    def probabilities(self) -> np.ndarray:
        """Normalized selection probability of each entry."""
        return self._probabilities.copy()

    def pick(self, rng: Optional[np.random.Generator] = None) -> str:
        """Draw a single kind."""
        return self.pick_many(1, rng)[0]

    def pick_many(self, count: int, rng: Optional[np.random.Generator] = None) -> List[str]:
        """
        Draw ``count`` independent kinds.

        Zero-weight entries are never returned.
        """
        if rng is None:
            rng = np.random.default_rng()
        if count <= 0:
            return []
        choices = rng.choice(len(self._kinds), size=count, p=self._probabilities)
        return [self._kinds[i] for i in choices]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Alloy):
            return NotImplemented
        return self._kinds == other._kinds and self._ratios == other._ratios

    def __repr__(self) -> str:
        pairs = ', '.join(f"{kind}:{ratio}" for kind, ratio in zip(self._kinds, self._ratios))
        return f"Alloy({pairs})"
