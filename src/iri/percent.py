"""iri.percent
Percent-encoding normalization for IRI components (RFC 3986 section 2, RFC 3987 section 3.1).
Malformed input is repaired rather than rejected.
"""

import re

from . import abnf

# sub-delims = "!" / "$" / "&" / "'" / "(" / ")" / "*" / "+" / "," / ";" / "="
SUB_DELIMS: str = "!$&'()*+,;="

USERINFO_CHARS: str = SUB_DELIMS + ":"
HOST_CHARS: str = SUB_DELIMS
PATH_CHARS: str = SUB_DELIMS + "@:/"
QUERY_CHARS: str = SUB_DELIMS + ":@/?"
FRAGMENT_CHARS: str = QUERY_CHARS

_UNRESERVED_PAT: re.Pattern[str] = re.compile(abnf.UNRESERVED)
_UCSCHAR_PAT: re.Pattern[str] = re.compile(abnf.UCSCHAR)
_IPRIVATE_PAT: re.Pattern[str] = re.compile(abnf.IPRIVATE)

# A "%" that does not start a pct-encoded triplet
_STRAY_PERCENT_PAT: re.Pattern[str] = re.compile(rf"%(?!{abnf.HEXDIG}{{2}})")

# A maximal run of pct-encoded triplets
_PCT_RUN_PAT: re.Pattern[str] = re.compile(rf"(?:{abnf.PCT_ENCODED})+")


def _is_noncharacter(codepoint: int) -> bool:
    return (codepoint & 0xFFFE) == 0xFFFE or 0xFDD0 <= codepoint <= 0xFDEF


def _is_unicode_allowed(char: str, iprivate: bool) -> bool:
    """Whether a non-ASCII character may appear unescaped: ucschar, or iprivate where the component permits it."""
    if _is_noncharacter(ord(char)):
        return False
    if _UCSCHAR_PAT.fullmatch(char) is not None:
        return True
    return iprivate and _IPRIVATE_PAT.fullmatch(char) is not None


def _pct_encode(char: str) -> str:
    """Percent-encode the UTF-8 octets of char, uppercase hex.
    Surrogate escapes (from bytes decoded with "surrogateescape") become the octet they stand for.
    """
    octets: bytes
    try:
        octets = char.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        octets = char.encode("utf-8", "surrogatepass")
    return "".join(f"%{octet:02X}" for octet in octets)


def _decode_run(run: str, iprivate: bool) -> str:
    """Decode a run of triplets, keeping only the characters that never need escaping.
    Python's UTF-8 codec rejects overlong forms, encoded surrogates and out-of-range values,
    so surrogateescape leaves every octet of such a sequence to be re-encoded individually.
    """
    octets: bytes = bytes.fromhex(run.replace("%", ""))
    result: str = ""
    for char in octets.decode("utf-8", "surrogateescape"):
        if _UNRESERVED_PAT.fullmatch(char) is not None or (ord(char) >= 0x80 and _is_unicode_allowed(char, iprivate)):
            result += char
        else:
            result += _pct_encode(char)
    return result


def normalize(string: str, allowed: str, iprivate: bool = False) -> str:
    """Normalize the percent-encoding of one component.

    allowed holds the ASCII characters, beyond unreserved, that the component accepts unescaped.
    iprivate admits the RFC 3987 private-use ranges (only the query does this).
    """
    # Stray "%" signs are escaped first so they can never pair up with a later triplet.
    string = _STRAY_PERCENT_PAT.sub("%25", string)

    encoded: str = ""
    for char in string:
        if char == "%" or char in allowed or _UNRESERVED_PAT.fullmatch(char) is not None:
            encoded += char
        elif ord(char) >= 0x80 and _is_unicode_allowed(char, iprivate):
            encoded += char
        else:
            encoded += _pct_encode(char)

    return _PCT_RUN_PAT.sub(lambda m: _decode_run(m[0], iprivate), encoded)


def to_ascii(string: str) -> str:
    """Percent-encode every non-ASCII character, as needed to turn an IRI into a URI (RFC 3987 section 3.1)"""
    return "".join(char if char.isascii() else _pct_encode(char) for char in string)
