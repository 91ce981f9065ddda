import pytest

from iri import ipv6

VALID_ADDRESSES: list[str] = [
    "2001:ec8:1:1:1:1:1:1",
    "ffff::FFFF:129.144.52.38",
    "ffff:0:0:0:0:FFFF:129.144.52.38",
    "2010:0588:0000:faef:1428:0000:0000:57ab",
    "0000:0000:0000:588:0000:FAEF:1428:57AB",
    "0:0:0:0588:0:FAEF:1428:57AB",
    "2001:4abc:abcd:0000:3744:0000:0000:0000/120",
    "FF01:0:0:0:0:0:0:101",
    "0:0:0:0:0:0:0:1",
    "1:0:0:0:0:0:0:0",
    "2001:4abc:abcd:0:3744::/120",
    "ff01::101",
    "::1",
    "1::",
    "::",
    "2001:0DB8:0000:CD30:0000:0000:0000:0000/60",
    "2001:0DB8::CD30:0:0:0:0/60",
    "2001:0DB8:0:CD30::/60",
    "::/128",
    "::1/128",
    "FF00::/8",
    "FE80::/10",
    "0:0:0:0:0:0:13.1.68.3",
    "0:0:0:0:0:FFFF:129.144.52.38",
    "::13.1.68.3",
    "::FFFF:129.144.52.38",
    "1:2:3:4:5:6:7::",
    "::2:3:4:5:6:7:8",
]


@pytest.mark.parametrize("address", VALID_ADDRESSES)
def test_valid(address: str) -> None:
    assert ipv6.validate(address)


@pytest.mark.parametrize(
    "address",
    [
        "",
        ":",
        ":::",
        "2001:ec8:1:1:1:1:1:1:1",
        "1:2:3:4:5:6:7",
        "1::2::3",
        "12345::",
        "g::",
        "1.2.3.4",
        "::256.1.1.1",
        "::1.2.3",
        "1:2:3:4:5:6:7:1.2.3.4",
        "::1/129",
        "::1/",
        "::1/-1",
        "fe80::1%25eth0",
    ],
)
def test_invalid(address: str) -> None:
    assert not ipv6.validate(address)


@pytest.mark.parametrize(
    "address, expected",
    [
        ("2001:ec8:1:1:1:1:1:1", "2001:ec8:1:1:1:1:1:1"),
        ("ffff::FFFF:129.144.52.38", "ffff::ffff:129.144.52.38"),
        ("ffff:0:0:0:0:FFFF:129.144.52.38", "ffff::ffff:129.144.52.38"),
        ("2010:0588:0000:faef:1428:0000:0000:57ab", "2010:588:0:faef:1428::57ab"),
        ("0000:0000:0000:588:0000:FAEF:1428:57AB", "::588:0:faef:1428:57ab"),
        ("0:0:0:0588:0:FAEF:1428:57AB", "::588:0:faef:1428:57ab"),
        ("2001:4abc:abcd:0000:3744:0000:0000:0000/120", "2001:4abc:abcd:0:3744::/120"),
        ("FF01:0:0:0:0:0:0:101", "ff01::101"),
        ("0:0:0:0:0:0:0:1", "::1"),
        ("1:0:0:0:0:0:0:0", "1::"),
        ("0:0:0:0:0:0:0:0", "::"),
        ("0:0:0:0:0:0:13.1.68.3", "::13.1.68.3"),
        ("1:0:0:0:0:0:1.2.3.4", "1::1.2.3.4"),
        # a lone zero group is compressed too
        ("1:0:1:1:1:1:1:1", "1::1:1:1:1:1:1"),
        # the first of two equally long runs wins
        ("1:0:0:1:0:0:1:1", "1::1:0:0:1:1"),
    ],
)
def test_compress(address: str, expected: str) -> None:
    assert ipv6.compress(address) == expected


def test_compress_leaves_invalid_input_alone() -> None:
    assert ipv6.compress("not-an-address") == "not-an-address"
    assert ipv6.compress("1::2::3") == "1::2::3"


@pytest.mark.parametrize(
    "address, expected",
    [
        ("2001:4abc:abcd:0:3744::/120", "2001:4abc:abcd:0:3744:0:0:0/120"),
        ("ff01::101", "ff01:0:0:0:0:0:0:101"),
        ("::1", "0:0:0:0:0:0:0:1"),
        ("1::", "1:0:0:0:0:0:0:0"),
        ("::", "0:0:0:0:0:0:0:0"),
        ("::13.1.68.3", "0:0:0:0:0:0:13.1.68.3"),
        ("ffff::FFFF:129.144.52.38", "ffff:0:0:0:0:FFFF:129.144.52.38"),
        ("2001:ec8:1:1:1:1:1:1", "2001:ec8:1:1:1:1:1:1"),
    ],
)
def test_uncompress(address: str, expected: str) -> None:
    assert ipv6.uncompress(address) == expected


@pytest.mark.parametrize("address", VALID_ADDRESSES)
def test_compress_ignores_prior_expansion(address: str) -> None:
    assert ipv6.compress(ipv6.uncompress(address)) == ipv6.compress(address)


@pytest.mark.parametrize("address", VALID_ADDRESSES)
def test_compressed_form_is_valid(address: str) -> None:
    assert ipv6.validate(ipv6.compress(address))


def test_split_prefix() -> None:
    assert ipv6.split_prefix("ff00::/8") == ("ff00::", "8")
    assert ipv6.split_prefix("ff00::") == ("ff00::", None)


def test_split_v64() -> None:
    assert ipv6.split_v64("::13.1.68.3") == ("0:0:0:0:0:0", "13.1.68.3")
    assert ipv6.split_v64("::FFFF:129.144.52.38/96") == ("0:0:0:0:0:FFFF", "129.144.52.38")
    assert ipv6.split_v64("ff01::101") == ("ff01:0:0:0:0:0:0:101", "")
