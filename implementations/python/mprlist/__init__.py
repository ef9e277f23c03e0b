"""mprlist — NDN delegation lists (MPRList) and their TLV wire format.

An MPRList is an ordered set of forwarding hints, each a Name with a
preference; lower preference values are preferred.

Quick start:
    >>> from mprlist import MPRList, INS_APPEND, TLV_CONTENT
    >>> lst = MPRList([(10, "/a"), (5, "/b")])
    >>> str(lst)
    '[/b(5),/a(10)]'
    >>> lst.encode(TLV_CONTENT).hex()
    '15141f081e010507030801621f081e010a0703080161'
    >>> str(MPRList.from_wire(lst.encode(TLV_CONTENT)))
    '[/b(5),/a(10)]'

Lists decoded with ``want_sort=False`` keep wire order until ``sort()``.
"""

from __future__ import annotations

from ._constants import (
    PREFERENCE_MAX,
    TLV_CONTENT,
    TLV_FORWARDING_HINT,
    TLV_LINK_DELEGATION,
    TLV_LINK_PREFERENCE,
    TLV_MPR_LIST,
    TLV_NAME,
)
from ._core import (
    INS_APPEND,
    INS_REPLACE,
    INS_SKIP,
    InsertConflictResolution,
    MPRList,
)
from ._delegation import Delegation
from ._errors import (
    ERR_EMPTY_LIST,
    ERR_INVALID_NAME,
    ERR_INVALID_PREFERENCE,
    ERR_MISSING_NAME,
    ERR_MISSING_PREFERENCE,
    ERR_TLV_FORMAT,
    ERR_TLV_TYPE,
    MprListError,
    TlvError,
)
from ._name import make_name, name_to_str
from ._tlv import Block, Encoder, Estimator

__version__ = "0.1.0"

__all__ = [
    # Container and entries
    "MPRList",
    "Delegation",
    "InsertConflictResolution",
    "INS_REPLACE",
    "INS_APPEND",
    "INS_SKIP",
    # Wire helpers
    "Block",
    "Encoder",
    "Estimator",
    "make_name",
    "name_to_str",
    # TLV-TYPE numbers
    "TLV_CONTENT",
    "TLV_MPR_LIST",
    "TLV_FORWARDING_HINT",
    "TLV_LINK_DELEGATION",
    "TLV_LINK_PREFERENCE",
    "TLV_NAME",
    "PREFERENCE_MAX",
    # Exceptions
    "MprListError",
    "TlvError",
    # Error codes
    "ERR_TLV_FORMAT",
    "ERR_TLV_TYPE",
    "ERR_MISSING_PREFERENCE",
    "ERR_INVALID_PREFERENCE",
    "ERR_MISSING_NAME",
    "ERR_INVALID_NAME",
    "ERR_EMPTY_LIST",
]
