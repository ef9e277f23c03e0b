"""Name adapter over python-ndn.

python-ndn represents a Name as a list of encoded components.  Lists are
not hashable and Delegation is a value type, so names are held here as a
tuple of ``bytes``, one item per encoded component (TLV-TYPE, TLV-LENGTH
and value included).  Components are stored with minimal VAR-NUMBER
framing, so two encodings of the same component compare equal.

Ordering is the NDN canonical order: components compare by TLV-TYPE,
then TLV-LENGTH, then octets; a name that is a proper prefix of another
sorts first.  Note this is NOT plain memcmp of the URI: "/b" < "/aa".
"""

from __future__ import annotations

from typing import Any, Iterable, Tuple

from ndn.encoding import Name as NdnName

from ._constants import NAME_COMPONENT_TYPE_MAX, NAME_COMPONENT_TYPE_MIN, TLV_NAME
from ._errors import TlvError
from ._tlv import Block, Encoder, _PrependEncoder

NameTuple = Tuple[bytes, ...]
NameKey = Tuple[Tuple[int, int, bytes], ...]

URI_SCHEME = "ndn:"


def _check_component(wire: bytes) -> Block:
    comp = Block.from_wire(wire)
    if not NAME_COMPONENT_TYPE_MIN <= comp.type <= NAME_COMPONENT_TYPE_MAX:
        raise TlvError("invalid name component TLV-TYPE {}".format(comp.type))
    return comp


def _canonical_component(comp: Block) -> bytes:
    # Re-frame with minimal VAR-NUMBERs: fd0008 0161 becomes 08 0161.
    enc = Encoder()
    enc.prepend_bytes(comp.value)
    enc.prepend_var_number(len(comp.value))
    enc.prepend_var_number(comp.type)
    return enc.getvalue()


def make_name(value: Any) -> NameTuple:
    """Normalize a URI string, Name wire, or component iterable.

    Components may be given as str (escaped URI form) or as encoded
    component bytes.  A leading ``ndn:`` scheme is dropped.  Raises
    ValueError for malformed components.
    """
    if isinstance(value, str):
        if value.startswith(URI_SCHEME):
            value = value[len(URI_SCHEME):]
        comps: Iterable[Any] = NdnName.from_str(value)
    elif isinstance(value, (bytes, bytearray, memoryview)):
        # A full Name TLV, e.g. taken from another packet.
        try:
            return decode_name(Block.from_wire(value))
        except TlvError as e:
            raise ValueError("invalid Name wire: {}".format(e)) from e
    else:
        comps = NdnName.normalize(list(value))

    out = []
    for c in comps:
        try:
            out.append(_canonical_component(_check_component(bytes(c))))
        except TlvError as e:
            raise ValueError("invalid name component: {}".format(e)) from e
    return tuple(out)


def name_key(name: NameTuple) -> NameKey:
    """Sort key implementing the NDN canonical order."""
    key = []
    for c in name:
        comp = Block.from_wire(c)
        value = comp.value
        key.append((comp.type, len(value), value))
    return tuple(key)


def name_to_str(name: NameTuple) -> str:
    return NdnName.to_str(list(name))


def encode_name(encoder: _PrependEncoder, name: NameTuple) -> int:
    """Prepend the full Name TLV.  Returns bytes written."""
    return encoder.prepend_bytes(NdnName.encode(list(name)))


def decode_name(block: Block) -> NameTuple:
    """Decode a Name element.  Raises TlvError on malformed input."""
    if block.type != TLV_NAME:
        raise TlvError("expected Name TLV-TYPE {}, got {}".format(TLV_NAME, block.type))
    comps = []
    for child in block.parse():
        if not NAME_COMPONENT_TYPE_MIN <= child.type <= NAME_COMPONENT_TYPE_MAX:
            raise TlvError("invalid name component TLV-TYPE {}".format(child.type))
        comps.append(_canonical_component(child))
    return tuple(comps)
