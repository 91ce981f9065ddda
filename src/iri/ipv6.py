"""iri.ipv6
Validation, compression and expansion of IPv6 address text (RFC 4291 section 2.2, RFC 5952 section 4),
as found inside the brackets of an IP-literal host.
An address may carry a trailing "/" prefix length, which every function passes through untouched.
"""

import re

from . import abnf

_IPV6_PAT: re.Pattern[str] = re.compile(rf"\A{abnf.IPV6ADDRESS}(?:/{abnf.PREFIX_LENGTH})?\Z")


def validate(address: str) -> bool:
    """Whether address is an IPv6address, optionally followed by "/" and a prefix length of 0 to 128"""
    return _IPV6_PAT.match(address) is not None


def split_prefix(address: str) -> tuple[str, str | None]:
    """Separate the prefix length, if any, from the address.
    e.g. split_prefix("ff00::/8") == ("ff00::", "8")
    """
    addr, slash, prefix = address.partition("/")
    if len(slash) == 0:
        return addr, None
    return addr, prefix


def _join_prefix(address: str, prefix: str | None) -> str:
    if prefix is None:
        return address
    return f"{address}/{prefix}"


def uncompress(address: str) -> str:
    """Expand "::" to the zero groups it stands for.
    e.g. uncompress("ff01::101") == "ff01:0:0:0:0:0:0:101"
    The input is expected to be valid. A trailing dotted quad counts as two groups.
    """
    addr, prefix = split_prefix(address)
    if "::" not in addr:
        return address

    head, _, tail = addr.partition("::")
    head_groups: list[str] = head.split(":") if len(head) > 0 else []
    tail_groups: list[str] = tail.split(":") if len(tail) > 0 else []

    width: int = len(head_groups) + len(tail_groups)
    if len(tail_groups) > 0 and "." in tail_groups[-1]:
        width += 1

    return _join_prefix(":".join(head_groups + ["0"] * (8 - width) + tail_groups), prefix)


def split_v64(address: str) -> tuple[str, str]:
    """Split an address into its uncompressed IPv6 groups and its dotted-quad tail ("" when absent).
    e.g. split_v64("::13.1.68.3") == ("0:0:0:0:0:0", "13.1.68.3")
    """
    addr: str = uncompress(split_prefix(address)[0])
    if "." not in addr:
        return addr, ""
    ipv6_part, _, ipv4_part = addr.rpartition(":")
    return ipv6_part, ipv4_part


def _longest_zero_run(groups: list[str]) -> tuple[int, int]:
    """(start, length) of the longest run of zero groups; the first one wins a tie."""
    best_start: int = -1
    best_length: int = 0
    run_start: int = 0
    run_length: int = 0
    for i, group in enumerate(groups):
        if group != "0":
            run_length = 0
            continue
        if run_length == 0:
            run_start = i
        run_length += 1
        if run_length > best_length:
            best_start, best_length = run_start, run_length
    return best_start, best_length


def compress(address: str) -> str:
    """Render an address in its shortest form.
    e.g. compress("2010:0588:0000:faef:1428:0000:0000:57ab") == "2010:588:0:faef:1428::57ab"

    Groups lose their leading zeros and are written in lowercase. The longest run of zero groups,
    even a run of one, becomes "::". Invalid input is returned unchanged.
    """
    if not validate(address):
        return address

    addr, prefix = split_prefix(address)
    ipv6_part, ipv4_part = split_v64(addr)
    groups: list[str] = [format(int(group, base=16), "x") for group in ipv6_part.split(":")]

    start, length = _longest_zero_run(groups)
    result: str
    if length > 0:
        result = ":".join(groups[:start]) + "::" + ":".join(groups[start + length :])
    else:
        result = ":".join(groups)

    if len(ipv4_part) > 0:
        if not result.endswith("::"):
            result += ":"
        result += ipv4_part

    return _join_prefix(result, prefix)
