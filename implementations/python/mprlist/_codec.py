"""MPRList wire codec.

    List        ::= (Content | MPRList) TLV-LENGTH Delegation+
    Delegation  ::= LinkDelegation TLV-LENGTH Preference Name
    Preference  ::= LinkPreference TLV-LENGTH nonNegativeInteger

Encoding walks the delegations last-to-first because each TLV-LENGTH is
prepended after the value it measures.  Decoding checks one constraint at
a time and stops at the first failure.

Only the list level is strict about child types.  Inside a Delegation,
Preference must come first and Name second; anything after the Name is
not inspected.
"""

from __future__ import annotations

import logging
from typing import Iterator, Sequence

from ._constants import (
    TLV_LINK_DELEGATION,
    TLV_LINK_PREFERENCE,
    TLV_NAME,
    VALID_LIST_TYPES,
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
from ._name import decode_name, encode_name
from ._tlv import Block, _PrependEncoder, read_non_negative_integer

logger = logging.getLogger(__name__)


def is_valid_tlv_type(tlv_type: int) -> bool:
    return tlv_type in VALID_LIST_TYPES


def encode_delegations(encoder: _PrependEncoder, dels: Sequence[Delegation],
                       tlv_type: int) -> int:
    """Prepend the whole list element.  Returns total bytes written.

    Raises ValueError for an unknown outer TLV-TYPE and MprListError for
    an empty sequence.
    """
    if not is_valid_tlv_type(tlv_type):
        raise ValueError("Unexpected TLV-TYPE {} while encoding MPRList".format(tlv_type))
    if len(dels) == 0:
        raise MprListError(ERR_EMPTY_LIST, "Empty MPRList")

    total_len = 0
    for d in reversed(dels):
        del_len = encode_name(encoder, d.name)
        del_len += encoder.prepend_non_negative_integer_block(TLV_LINK_PREFERENCE, d.preference)
        del_len += encoder.prepend_var_number(del_len)
        del_len += encoder.prepend_var_number(TLV_LINK_DELEGATION)
        total_len += del_len
    total_len += encoder.prepend_var_number(total_len)
    total_len += encoder.prepend_var_number(tlv_type)
    return total_len


def check_list_type(block: Block) -> None:
    if not is_valid_tlv_type(block.type):
        raise MprListError(
            ERR_TLV_TYPE,
            "Unexpected TLV-TYPE {} while decoding MPRList".format(block.type))


def decode_delegations(block: Block) -> Iterator[Delegation]:
    """Yield the delegations of a list element in wire order.

    A generator, so a consumer that inserts as it goes ends up holding
    whatever was decoded before a failure.  The outer TLV-TYPE and the
    empty-list rule are the caller's to check.
    """
    try:
        children = block.parse()
    except TlvError as e:
        raise MprListError(ERR_TLV_FORMAT, "Cannot parse MPRList elements") from e

    for child in children:
        if child.type != TLV_LINK_DELEGATION:
            raise MprListError(
                ERR_TLV_TYPE,
                "Unexpected TLV-TYPE {} while decoding Delegation".format(child.type))
        try:
            fields = child.parse()
        except TlvError as e:
            raise MprListError(ERR_TLV_FORMAT, "Cannot parse Delegation elements") from e

        if len(fields) < 1 or fields[0].type != TLV_LINK_PREFERENCE:
            raise MprListError(ERR_MISSING_PREFERENCE, "Missing Preference field in Delegation")
        try:
            preference = read_non_negative_integer(fields[0])
        except TlvError as e:
            raise MprListError(ERR_INVALID_PREFERENCE,
                               "Invalid Preference field in Delegation") from e

        if len(fields) < 2 or fields[1].type != TLV_NAME:
            raise MprListError(ERR_MISSING_NAME, "Missing Name field in Delegation")
        try:
            name = decode_name(fields[1])
        except TlvError as e:
            raise MprListError(ERR_INVALID_NAME, "Invalid Name field in Delegation") from e

        yield Delegation(preference, name)

    logger.debug("decoded %d delegations from TLV-TYPE %d", len(children), block.type)
