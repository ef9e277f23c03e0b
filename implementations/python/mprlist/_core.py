"""MPRList — an ordered list of Delegations with a TLV wire form.

The list is either sorted or unsorted.  A sorted list keeps its entries in
ascending Delegation order after every mutation; an unsorted list keeps
them in the order they were inserted (or decoded).  The mode only changes
where ``_insert_impl`` puts a new entry; storage is always a plain list,
since lists are expected to hold fewer than seven entries.

Decoding does not apply a conflict policy: duplicate names on the wire are
kept as they are.  ``insert`` is the only path that consults a policy.
"""

from __future__ import annotations

import bisect
import enum
import logging
from typing import Any, Iterable, Iterator, List, Optional, Union

from ._codec import check_list_type, decode_delegations, encode_delegations
from ._constants import TLV_MPR_LIST
from ._delegation import Delegation, check_preference
from ._errors import ERR_EMPTY_LIST, ERR_TLV_FORMAT, MprListError, TlvError
from ._name import NameTuple, make_name
from ._tlv import BinaryStr, Block, Encoder, Estimator, _PrependEncoder

logger = logging.getLogger(__name__)


class InsertConflictResolution(enum.IntEnum):
    """What ``insert`` does when the name is already present."""

    # Existing delegation(s) with the same name are replaced.
    INS_REPLACE = 0
    # Duplicates are kept.  NOT RECOMMENDED by the Link specification.
    INS_APPEND = 1
    # The new delegation is dropped.
    INS_SKIP = 2


INS_REPLACE = InsertConflictResolution.INS_REPLACE
INS_APPEND = InsertConflictResolution.INS_APPEND
INS_SKIP = InsertConflictResolution.INS_SKIP


def _check_policy(on_conflict: Any) -> InsertConflictResolution:
    # bool is a subclass of int; True must not silently select INS_APPEND.
    if isinstance(on_conflict, bool) or not isinstance(on_conflict, int):
        raise ValueError("Unknown InsertConflictResolution {!r}".format(on_conflict))
    try:
        return InsertConflictResolution(on_conflict)
    except ValueError:
        raise ValueError("Unknown InsertConflictResolution {!r}".format(on_conflict)) from None


class MPRList:
    """Ordered collection of Delegations.

    ``MPRList()`` is empty and sorted.  ``MPRList(dels)`` inserts each
    delegation with INS_REPLACE, so the result is sorted and later entries
    win over earlier ones with the same name.  Entries may be Delegation
    objects or (preference, name) pairs.
    """

    def __init__(self, dels: Optional[Iterable[Any]] = None) -> None:
        self._is_sorted = True
        self._dels: List[Delegation] = []
        for d in dels or ():
            if not isinstance(d, Delegation):
                d = Delegation(*d)
            self.insert(d, INS_REPLACE)

    @classmethod
    def unsorted(cls, dels: Iterable[Any] = ()) -> "MPRList":
        """An unsorted list holding dels in the given order, duplicates kept."""
        lst = cls()
        lst._is_sorted = False
        for d in dels:
            if not isinstance(d, Delegation):
                d = Delegation(*d)
            lst.insert(d, INS_APPEND)
        return lst

    @classmethod
    def from_block(cls, block: Block, want_sort: bool = True) -> "MPRList":
        lst = cls()
        lst.wire_decode(block, want_sort)
        return lst

    @classmethod
    def from_wire(cls, buf: BinaryStr, want_sort: bool = True) -> "MPRList":
        """Decode from raw bytes holding exactly one list element."""
        try:
            block = Block.from_wire(buf)
        except TlvError as e:
            raise MprListError(ERR_TLV_FORMAT, "Cannot parse MPRList TLV") from e
        return cls.from_block(block, want_sort)

    # ── Read-only API ─────────────────────────────────────────

    @property
    def is_sorted(self) -> bool:
        return self._is_sorted

    def __len__(self) -> int:
        return len(self._dels)

    def __bool__(self) -> bool:
        return bool(self._dels)

    def empty(self) -> bool:
        return not self._dels

    def __iter__(self) -> Iterator[Delegation]:
        return iter(self._dels)

    def __getitem__(self, i: int) -> Delegation:
        """Get the i-th delegation.  Precondition: 0 <= i < len(self).

        This is the unchecked form.  Negative indices such as ``lst[-1]``
        are not supported; under ``python -O`` the check is skipped and a
        negative index counts from the end.  Use ``at(i)`` when the index
        is not known to be valid.
        """
        assert 0 <= i < len(self._dels), "index out of range"
        return self._dels[i]

    def at(self, i: int) -> Delegation:
        """Get the i-th delegation; IndexError if i is not in 0..len-1."""
        if not 0 <= i < len(self._dels):
            raise IndexError("MPRList index {} out of range (size {})".format(i, len(self._dels)))
        return self._dels[i]

    def __eq__(self, other: object) -> bool:
        # Order matters: equal entries in different order compare unequal.
        if not isinstance(other, MPRList):
            return NotImplemented
        return self._dels == other._dels

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "[" + ",".join(str(d) for d in self._dels) + "]"

    def __repr__(self) -> str:
        return "MPRList({!r}, sorted={})".format(self._dels, self._is_sorted)

    # ── Modifiers ─────────────────────────────────────────────

    def sort(self) -> None:
        """Sort in place.  Post: is_sorted is True.

        Entries are replayed through the sorted insertion in their current
        order, so entries of equal rank keep their relative order.
        """
        if self._is_sorted:
            return
        dels = self._dels
        self._dels = []
        self._is_sorted = True
        for d in dels:
            self._insert_impl(d)
        logger.debug("sorted MPRList of %d delegations", len(self._dels))

    def insert(self, preference: Union[int, Delegation], name: Any = None,
               on_conflict: InsertConflictResolution = INS_REPLACE) -> bool:
        """Insert a delegation.  Returns whether it was inserted.

        Call as ``insert(preference, name[, on_conflict])`` or
        ``insert(delegation[, on_conflict])``.
        """
        if isinstance(preference, Delegation):
            if name is not None:
                on_conflict = name
            d = preference
        else:
            d = Delegation(preference, name)
        on_conflict = _check_policy(on_conflict)

        if on_conflict == INS_REPLACE:
            self._erase_impl(None, d.name)
            self._insert_impl(d)
            return True
        if on_conflict == INS_APPEND:
            self._insert_impl(d)
            return True
        if on_conflict == INS_SKIP:
            if any(x.name == d.name for x in self._dels):
                return False
        self._insert_impl(d)
        return True

    def erase(self, *args: Any) -> int:
        """Delete matching delegations.  Returns the count erased.

        ``erase(preference, name)`` and ``erase(delegation)`` match both
        fields; ``erase(name)`` matches every preference.
        """
        if len(args) == 2:
            return self._erase_impl(check_preference(args[0]), make_name(args[1]))
        if len(args) == 1:
            target = args[0]
            if isinstance(target, Delegation):
                return self._erase_impl(target.preference, target.name)
            return self._erase_impl(None, make_name(target))
        raise TypeError("erase() takes 1 or 2 arguments ({} given)".format(len(args)))

    def _insert_impl(self, d: Delegation) -> None:
        if not self._is_sorted:
            self._dels.append(d)
            return
        # Upper bound: after every entry that compares equal.
        bisect.insort_right(self._dels, d)

    def _erase_impl(self, preference: Optional[int], name: NameTuple) -> int:
        kept = [d for d in self._dels
                if not ((preference is None or d.preference == preference) and d.name == name)]
        n_erased = len(self._dels) - len(kept)
        self._dels = kept
        return n_erased

    # ── Wire format ───────────────────────────────────────────

    def wire_encode(self, encoder: _PrependEncoder, tlv_type: int = TLV_MPR_LIST) -> int:
        """Prepend this list to an Encoder or Estimator.

        Entries are written in current order; encoding never sorts.
        Raises ValueError if tlv_type is neither Content nor MPRList, and
        MprListError if the list is empty.
        """
        return encode_delegations(encoder, self._dels, tlv_type)

    def encoded_length(self, tlv_type: int = TLV_MPR_LIST) -> int:
        return self.wire_encode(Estimator(), tlv_type)

    def encode(self, tlv_type: int = TLV_MPR_LIST) -> bytes:
        encoder = Encoder()
        self.wire_encode(encoder, tlv_type)
        wire = encoder.getvalue()
        logger.debug("encoded %d delegations into %d bytes", len(self._dels), len(wire))
        return wire

    def wire_decode(self, block: Block, want_sort: bool = True) -> None:
        """Replace the contents with the delegations in block.

        Not atomic: on failure the list holds whatever was decoded before
        the offending element.
        """
        check_list_type(block)

        self._is_sorted = want_sort
        self._dels = []

        for d in decode_delegations(block):
            self._insert_impl(d)

        if not self._dels:
            raise MprListError(ERR_EMPTY_LIST, "Empty MPRList")
