"""MPRList constants — TLV-TYPE numbers and value limits.

TLV-TYPE numbers follow the NDN packet format.  LinkPreference and
MPRList share the number 30; they never appear at the same nesting level.
"""

from __future__ import annotations

from typing import Tuple

# ── Name ──────────────────────────────────────────────────────
TLV_NAME: int = 0x07
TLV_GENERIC_NAME_COMPONENT: int = 0x08

# Component TLV-TYPE must fall in this range (0 is reserved).
NAME_COMPONENT_TYPE_MIN: int = 0x0001
NAME_COMPONENT_TYPE_MAX: int = 0xFFFF

# ── Outer list types ──────────────────────────────────────────
# Content carries the list inside a Link object; MPRList (ForwardingHint)
# carries it inside an Interest.
TLV_CONTENT: int = 0x15
TLV_MPR_LIST: int = 0x1E
TLV_FORWARDING_HINT: int = TLV_MPR_LIST

VALID_LIST_TYPES: Tuple[int, ...] = (TLV_CONTENT, TLV_MPR_LIST)

# ── Delegation ────────────────────────────────────────────────
TLV_LINK_PREFERENCE: int = 0x1E
TLV_LINK_DELEGATION: int = 0x1F

# Preference is a nonNegativeInteger, at most 8 octets on the wire.
PREFERENCE_MAX: int = 2**64 - 1

# nonNegativeInteger payloads are exactly 1, 2, 4 or 8 octets.
NNI_LENGTHS: Tuple[int, ...] = (1, 2, 4, 8)
