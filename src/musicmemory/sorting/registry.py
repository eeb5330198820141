"""Comparator registry: one ordering function per sort option of an item kind."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Callable, Dict, Generic, Iterable, List, Type, TypeVar

from ..errors import MissingSortHandlerError, UnknownSortOptionError
from .options import SortOption

T = TypeVar("T")
OptionT = TypeVar("OptionT", bound=SortOption)

#: ``comparator(a, b)`` is true when *a* outranks *b* in the option's
#: default (descending) direction.
Comparator = Callable[[T, T], bool]


def invert(comparator: Comparator) -> Comparator:
    """Return the ascending counterpart of *comparator*.

    Swapping the arguments rather than negating the result keeps equal keys
    equal, so ties stay in their stable order under both directions.
    """

    def ascending(a, b) -> bool:
        return comparator(b, a)

    return ascending


def as_cmp(comparator: Comparator) -> Callable[[T, T], int]:
    """Adapt an "outranks" predicate to a three-way ``cmp`` function."""

    def compare(a, b) -> int:
        if comparator(a, b):
            return -1
        if comparator(b, a):
            return 1
        return 0

    return compare


class ComparatorRegistry(Generic[T, OptionT]):
    """Total mapping from every member of *option_type* to a comparator.

    Registries are read-only once :meth:`validate` has passed and hold no
    per-screen state, so one instance can back any number of controllers.
    """

    def __init__(self, option_type: Type[OptionT]) -> None:
        self._option_type = option_type
        self._handlers: Dict[OptionT, Comparator] = {}

    @property
    def option_type(self) -> Type[OptionT]:
        return self._option_type

    @property
    def options(self) -> List[OptionT]:
        return list(self._option_type)

    def register(self, option: OptionT, comparator: Comparator) -> None:
        if not isinstance(option, self._option_type):
            raise UnknownSortOptionError(
                f"{option!r} is not a {self._option_type.__name__}"
            )
        self._handlers[option] = comparator

    def validate(self) -> "ComparatorRegistry[T, OptionT]":
        missing = [option for option in self._option_type if option not in self._handlers]
        if missing:
            names = ", ".join(option.value for option in missing)
            raise MissingSortHandlerError(
                f"{self._option_type.__name__} has no comparator for: {names}"
            )
        return self

    def __contains__(self, option: object) -> bool:
        return isinstance(option, self._option_type) and option in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def comparator(self, option: OptionT, ascending: bool = False) -> Comparator:
        if option not in self:
            raise UnknownSortOptionError(
                f"No comparator registered for {option!r} in {self._option_type.__name__}"
            )
        handler = self._handlers[option]
        return invert(handler) if ascending else handler

    def sort(self, items: Iterable[T], option: OptionT, ascending: bool = False) -> List[T]:
        """Return *items* ordered by *option*.

        ``sorted`` is stable, so items the comparator considers equal keep
        the order in which the library delivered them.
        """
        return sorted(items, key=cmp_to_key(as_cmp(self.comparator(option, ascending))))


__all__ = ["Comparator", "ComparatorRegistry", "as_cmp", "invert"]
