"""Delegation — one (preference, name) forwarding alternative."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Tuple

from ._constants import PREFERENCE_MAX
from ._name import NameKey, NameTuple, make_name, name_key, name_to_str


def check_preference(preference: Any) -> int:
    # bool is a subclass of int; True must not silently become preference 1.
    if isinstance(preference, bool) or not isinstance(preference, int):
        raise TypeError("preference must be int, not {}".format(type(preference).__name__))
    if preference < 0 or preference > PREFERENCE_MAX:
        raise ValueError("preference {} outside 0..2**64-1".format(preference))
    return preference


@functools.total_ordering
@dataclass(frozen=True)
class Delegation:
    """A forwarding hint: a name and its preference (lower is preferred).

    Delegations order by preference, then by the NDN canonical order of
    their names.  ``name`` accepts anything ``make_name`` does and is
    stored as a tuple of encoded components.
    """

    preference: int
    name: NameTuple

    def __post_init__(self) -> None:
        check_preference(self.preference)
        object.__setattr__(self, "name", make_name(self.name))

    def sort_key(self) -> Tuple[int, NameKey]:
        return (self.preference, name_key(self.name))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Delegation):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        return "{}({})".format(name_to_str(self.name), self.preference)

    def __repr__(self) -> str:
        return "Delegation(preference={}, name={!r})".format(
            self.preference, name_to_str(self.name))
