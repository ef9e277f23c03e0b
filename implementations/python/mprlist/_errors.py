"""MPRList error codes and exception classes.

Two layers of format errors exist.  ``TlvError`` is raised by the low-level
TLV, VAR-NUMBER and nonNegativeInteger readers.  ``MprListError`` is the
list's own error and always carries one of the ERR_* codes below.  When a
lower layer rejects a Preference or Name payload, the list re-raises with
``raise MprListError(...) from exc`` so the original error stays attached.

Caller mistakes that don't involve wire data (unknown outer TLV-TYPE at
encode time, unknown conflict policy) are plain ``ValueError``.
"""

from __future__ import annotations

from typing import Optional

# ── Error codes ───────────────────────────────────────────────
# Grep-friendly; the conformance vectors compare against these strings.

ERR_TLV_FORMAT: str = "ERR_TLV_FORMAT"                  # outer framing unparsable
ERR_TLV_TYPE: str = "ERR_TLV_TYPE"                      # unexpected TLV-TYPE
ERR_MISSING_PREFERENCE: str = "ERR_MISSING_PREFERENCE"
ERR_INVALID_PREFERENCE: str = "ERR_INVALID_PREFERENCE"
ERR_MISSING_NAME: str = "ERR_MISSING_NAME"
ERR_INVALID_NAME: str = "ERR_INVALID_NAME"
ERR_EMPTY_LIST: str = "ERR_EMPTY_LIST"


class TlvError(Exception):
    """Malformed TLV element, VAR-NUMBER or nonNegativeInteger."""


class MprListError(TlvError):
    """Exception for MPRList encoding and decoding errors.

    The `.code` attribute is one of the ERR_* strings above.
    """

    def __init__(self, code: str, msg: str = "") -> None:
        super().__init__(msg or code)
        self.code = code

    @property
    def cause(self) -> Optional[BaseException]:
        """The lower-layer error this one wraps, if any."""
        return self.__cause__
