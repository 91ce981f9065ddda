"""iri.abnf
Regex renditions of the RFC 3986 and RFC 3987 rules used by the rest of the package.
Each constant is preceded by the ABNF it encodes.
"""

# ALPHA = %x41-5A / %x61-7A
ALPHA: str = r"[A-Za-z]"

# DIGIT = %x30-39
DIGIT: str = r"[0-9]"

# HEXDIG = DIGIT / "A" / "B" / "C" / "D" / "E" / "F"
HEXDIG: str = rf"(?:{DIGIT}|[A-Fa-f])"

# ucschar = %xA0-D7FF / %xF900-FDCF / %xFDF0-FFEF
#         / %x10000-1FFFD / %x20000-2FFFD / %x30000-3FFFD
#         / %x40000-4FFFD / %x50000-5FFFD / %x60000-6FFFD
#         / %x70000-7FFFD / %x80000-8FFFD / %x90000-9FFFD
#         / %xA0000-AFFFD / %xB0000-BFFFD / %xC0000-CFFFD
#         / %xD0000-DFFFD / %xE1000-EFFFD
UCSCHAR: str = "[\xa0-\ud7ff\uf900-\ufdcf\ufdf0-\uffef\U00010000-\U0001FFFD\U00020000-\U0002FFFD\U00030000-\U0003FFFD\U00040000-\U0004FFFD\U00050000-\U0005FFFD\U00060000-\U0006FFFD\U00070000-\U0007FFFD\U00080000-\U0008FFFD\U00090000-\U0009FFFD\U000A0000-\U000AFFFD\U000B0000-\U000BFFFD\U000C0000-\U000CFFFD\U000D0000-\U000DFFFD\U000E1000-\U000EFFFD]"

# iprivate = %xE000-F8FF / %xF0000-FFFFD / %x100000-10FFFD
IPRIVATE: str = "[\ue000-\uf8ff\U000F0000-\U000FFFFD\U00100000-\U0010FFFD]"

# unreserved = ALPHA / DIGIT / "-" / "." / "_" / "~"
UNRESERVED: str = rf"(?:{ALPHA}|{DIGIT}|[-._~])"

# pct-encoded = "%" HEXDIG HEXDIG
PCT_ENCODED: str = rf"%{HEXDIG}{HEXDIG}"

# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
SCHEME: str = rf"(?P<scheme>{ALPHA}(?:{ALPHA}|{DIGIT}|[+\-.])*)"

# port = *DIGIT
PORT: str = rf"{DIGIT}*"

# dec-octet = DIGIT / %x31-39 DIGIT / "1" 2DIGIT / "2" %x30-34 DIGIT / "25" %x30-35
DEC_OCTET: str = rf"(?:25[0-5]|2[0-4]{DIGIT}|1{DIGIT}{{2}}|[1-9]{DIGIT}|{DIGIT})"

# IPv4address = dec-octet "." dec-octet "." dec-octet "." dec-octet
IPV4ADDRESS: str = rf"{DEC_OCTET}\.{DEC_OCTET}\.{DEC_OCTET}\.{DEC_OCTET}"

# h16 = 1*4HEXDIG
H16: str = rf"(?:{HEXDIG}{{1,4}})"

# ls32 = ( h16 ":" h16 ) / IPv4address
LS32: str = rf"(?:{H16}:{H16}|{IPV4ADDRESS})"

# IPv6address =                                      6( h16 ":" ) ls32
#                       /                       "::" 5( h16 ":" ) ls32
#                       / [               h16 ] "::" 4( h16 ":" ) ls32
#                       / [ *1( h16 ":" ) h16 ] "::" 3( h16 ":" ) ls32
#                       / [ *2( h16 ":" ) h16 ] "::" 2( h16 ":" ) ls32
#                       / [ *3( h16 ":" ) h16 ] "::"    h16 ":"   ls32
#                       / [ *4( h16 ":" ) h16 ] "::"              ls32
#                       / [ *5( h16 ":" ) h16 ] "::"              h16
#                       / [ *6( h16 ":" ) h16 ] "::"
IPV6ADDRESS: str = (
    "(?:"
    + r"|".join(
        (
                                           rf"(?:{H16}:){{6}}{LS32}",
                                         rf"::(?:{H16}:){{5}}{LS32}",
                              rf"(?:{H16})?::(?:{H16}:){{4}}{LS32}",
            rf"(?:(?:{H16}:){{0,1}}{H16})?::(?:{H16}:){{3}}{LS32}",
            rf"(?:(?:{H16}:){{0,2}}{H16})?::(?:{H16}:){{2}}{LS32}",
            rf"(?:(?:{H16}:){{0,3}}{H16})?::(?:{H16}:){LS32}",
            rf"(?:(?:{H16}:){{0,4}}{H16})?::{LS32}",
            rf"(?:(?:{H16}:){{0,5}}{H16})?::{H16}",
            rf"(?:(?:{H16}:){{0,6}}{H16})?::",
        )
    )
    + ")"
)

# prefix-length = DIGIT / %x31-39 DIGIT / "1" %x30-31 DIGIT / "12" %x30-38
# (RFC 4291 section 2.3, decimal value 0 to 128)
PREFIX_LENGTH: str = rf"(?P<prefix>12[0-8]|1[01]{DIGIT}|[1-9]{DIGIT}|{DIGIT})"

# The generic splitting expression of RFC 3986 appendix B, with the scheme held to its grammar.
IRI_REFERENCE: str = (
    rf"\A(?:{SCHEME}:)?(?://(?P<authority>[^/?#]*))?(?P<path>[^?#]*)"
    r"(?:\?(?P<query>[^#]*))?(?:#(?P<fragment>.*))?\Z"
)
