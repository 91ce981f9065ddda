"""iri.schemes
Registered defaults of well-known schemes. A component equal to its scheme's default is redundant
and is dropped during normalization (RFC 3986 section 6.2.3).
"""

import dataclasses
import types

from typing import Mapping


@dataclasses.dataclass(frozen=True)
class SchemeDefaults:
    host: str | None = None
    port: int | None = None
    path: str | None = None


_NO_DEFAULTS: SchemeDefaults = SchemeDefaults()

SCHEME_DEFAULTS: Mapping[str, SchemeDefaults] = types.MappingProxyType(
    {
        "acap": SchemeDefaults(port=674),
        "dict": SchemeDefaults(port=2628),
        "file": SchemeDefaults(host="localhost"),
        "http": SchemeDefaults(port=80, path="/"),
        "https": SchemeDefaults(port=443, path="/"),
    }
)


def defaults_for(scheme: str | None) -> SchemeDefaults:
    """The defaults of scheme; every field is None for an unknown or absent scheme."""
    if scheme is None:
        return _NO_DEFAULTS
    return SCHEME_DEFAULTS.get(scheme, _NO_DEFAULTS)
