"""Overall rank of every item in a fully sorted collection."""

from __future__ import annotations

from typing import Callable, Dict, Hashable, Iterable, Iterator, Optional, Tuple


def item_identity(item) -> Hashable:
    return item.id


class RankIndex:
    """Immutable ``identity -> 1-based position`` map.

    Built eagerly from the sorted, unfiltered collection so lookups stay
    O(1) and ranks do not shift while the user searches or scrolls.  If the
    collection holds the same identity twice, the first (best) position wins
    and the duplicate is not ranked separately.
    """

    __slots__ = ("_ranks", "_identity")

    def __init__(
        self,
        ranks: Optional[Dict[Hashable, int]] = None,
        identity: Callable[[object], Hashable] = item_identity,
    ) -> None:
        self._ranks: Dict[Hashable, int] = dict(ranks or {})
        self._identity = identity

    @classmethod
    def build(
        cls,
        sorted_items: Iterable,
        identity: Callable[[object], Hashable] = item_identity,
    ) -> "RankIndex":
        ranks: Dict[Hashable, int] = {}
        for item in sorted_items:
            key = identity(item)
            if key not in ranks:
                ranks[key] = len(ranks) + 1
        return cls(ranks, identity)

    def rank_of(self, item) -> Optional[int]:
        """Return the rank of *item*, or ``None`` once it has left the collection."""
        return self._ranks.get(self._identity(item))

    def rank_of_id(self, key: Hashable) -> Optional[int]:
        return self._ranks.get(key)

    def __len__(self) -> int:
        return len(self._ranks)

    def __contains__(self, item) -> bool:
        return self._identity(item) in self._ranks

    def __iter__(self) -> Iterator[Tuple[Hashable, int]]:
        return iter(self._ranks.items())
