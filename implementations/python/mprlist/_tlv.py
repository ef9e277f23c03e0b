"""TLV primitives — VAR-NUMBER reading, Block parsing, prepend encoders.

Wire framing (NDN packet format):

    TLV  ::= TLV-TYPE TLV-LENGTH TLV-VALUE
    TLV-TYPE, TLV-LENGTH ::= VAR-NUMBER

    VAR-NUMBER first octet   total size
        0x00..0xFC           1  (the octet itself is the value)
        0xFD                 3  (uint16 big-endian follows)
        0xFE                 5  (uint32 big-endian follows)
        0xFF                 9  (uint64 big-endian follows)

The number codecs come from python-ndn; this module adds the bounds
checking and the nested-element view the list decoder needs.

Encoding is length-prefix-first: values are written before the TLV-LENGTH
that describes them, so encoders grow backwards.  ``Estimator`` only counts
bytes, ``Encoder`` materializes them.  Both return the same numbers for the
same call sequence.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple, Union

from ndn.encoding import get_tl_num_size, pack_uint_bytes, parse_tl_num, write_tl_num

from ._constants import NNI_LENGTHS
from ._errors import TlvError

BinaryStr = Union[bytes, bytearray, memoryview]


# ── VAR-NUMBER ────────────────────────────────────────────────
# parse_tl_num trusts its input; a short buffer surfaces as IndexError or
# struct.error depending on where it runs out.  Check the length first.

def _var_number_size(first: int) -> int:
    if first < 0xFD:
        return 1
    if first == 0xFD:
        return 3
    if first == 0xFE:
        return 5
    return 9


def read_var_number(buf: BinaryStr, offset: int = 0) -> Tuple[int, int]:
    """Read one VAR-NUMBER at offset.  Returns (value, encoded size)."""
    if offset >= len(buf):
        raise TlvError("truncated VAR-NUMBER")
    size = _var_number_size(buf[offset])
    if offset + size > len(buf):
        raise TlvError("truncated VAR-NUMBER")
    value, _ = parse_tl_num(buf, offset)
    return value, size


# ── Block ─────────────────────────────────────────────────────

class Block:
    """A TLV element with lazily parsed children.

    ``wire`` holds the whole element; ``value`` is the TLV-VALUE part.
    Children are only parsed on ``parse()``, since Preference and Name
    payloads are leaves as far as the list is concerned.
    """

    __slots__ = ("type", "wire", "_value_offset", "_elements")

    def __init__(self, tlv_type: int, wire: bytes, value_offset: int) -> None:
        self.type = tlv_type
        self.wire = wire
        self._value_offset = value_offset
        self._elements: Optional[List["Block"]] = None

    @classmethod
    def from_wire(cls, buf: BinaryStr) -> "Block":
        """Parse exactly one top-level element; trailing bytes are an error."""
        block, end = _read_block(buf, 0)
        if end != len(buf):
            raise TlvError("{} trailing bytes after TLV element".format(len(buf) - end))
        return block

    @property
    def value(self) -> bytes:
        return self.wire[self._value_offset:]

    @property
    def size(self) -> int:
        return len(self.wire)

    def parse(self) -> List["Block"]:
        """Split TLV-VALUE into child elements.  Idempotent."""
        if self._elements is None:
            value = self.value
            children: List[Block] = []
            off = 0
            while off < len(value):
                child, off = _read_block(value, off)
                children.append(child)
            self._elements = children
        return self._elements

    @property
    def elements(self) -> List["Block"]:
        return self.parse()

    def __iter__(self) -> Iterator["Block"]:
        return iter(self.parse())

    def __repr__(self) -> str:
        return "Block(type={}, length={})".format(self.type, len(self.value))


def _read_block(buf: BinaryStr, offset: int) -> Tuple[Block, int]:
    tlv_type, n = read_var_number(buf, offset)
    length, m = read_var_number(buf, offset + n)
    end = offset + n + m + length
    if end > len(buf):
        raise TlvError("TLV-LENGTH {} exceeds remaining buffer".format(length))
    return Block(tlv_type, bytes(buf[offset:end]), n + m), end


# ── nonNegativeInteger ────────────────────────────────────────

def read_non_negative_integer(block: Block) -> int:
    """Decode a nonNegativeInteger payload (1, 2, 4 or 8 octets, big-endian)."""
    value = block.value
    if len(value) not in NNI_LENGTHS:
        raise TlvError("invalid length {} for nonNegativeInteger".format(len(value)))
    return int.from_bytes(value, "big")


# ── Prepend encoders ──────────────────────────────────────────

class _PrependEncoder:
    """Shared interface.  Every method returns the byte count it adds."""

    def prepend_bytes(self, data: BinaryStr) -> int:
        raise NotImplementedError

    def prepend_var_number(self, value: int) -> int:
        raise NotImplementedError

    def prepend_non_negative_integer(self, value: int) -> int:
        return self.prepend_bytes(pack_uint_bytes(value))

    def prepend_non_negative_integer_block(self, tlv_type: int, value: int) -> int:
        length = self.prepend_non_negative_integer(value)
        length += self.prepend_var_number(length)
        length += self.prepend_var_number(tlv_type)
        return length


class Estimator(_PrependEncoder):
    """Size-estimation mode: computes lengths, writes nothing."""

    def prepend_bytes(self, data: BinaryStr) -> int:
        return len(data)

    def prepend_var_number(self, value: int) -> int:
        return get_tl_num_size(value)


class Encoder(_PrependEncoder):
    """Materializing mode: a buffer that grows towards the front."""

    def __init__(self) -> None:
        # Stored back-to-front; getvalue() reverses once.
        self._chunks: List[bytes] = []

    def prepend_bytes(self, data: BinaryStr) -> int:
        self._chunks.append(bytes(data))
        return len(data)

    def prepend_var_number(self, value: int) -> int:
        buf = bytearray(get_tl_num_size(value))
        write_tl_num(value, buf)
        return self.prepend_bytes(buf)

    def getvalue(self) -> bytes:
        return b"".join(reversed(self._chunks))

    def __len__(self) -> int:
        return sum(len(c) for c in self._chunks)
