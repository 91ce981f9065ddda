"""iri.iri
The IRI value type (RFC 3987) and its parser.
Each component is normalized as it is set, so two equivalent IRIs compare equal field by field.
"""

import copy
import dataclasses
import logging
import re

from typing import Self

from . import abnf, ipv6, lexer, paths, percent, schemes

logger = logging.getLogger(__name__)

_SCHEME_PAT: re.Pattern[str] = re.compile(rf"\A{abnf.SCHEME}\Z")
_PORT_PAT: re.Pattern[str] = re.compile(rf"\A{abnf.PORT}\Z")

# An uppercase ASCII run, or a triplet that must keep its uppercase hex digits
_HOST_CASE_PAT: re.Pattern[str] = re.compile(rf"({abnf.PCT_ENCODED})|[A-Z]+")


def _lowercase_outside_triplets(host: str) -> str:
    return _HOST_CASE_PAT.sub(lambda m: m[0] if m[1] is not None else m[0].lower(), host)


@dataclasses.dataclass
class IRI:
    """A normalized IRI-reference. Build one with parse(), or start from IRI() and use the set_* methods.

    The raw_* fields hold what is serialized. The like-named properties read the same values,
    except that an absent host, port or path reads as its scheme default.
    """

    raw_scheme: str | None = None
    raw_userinfo: str | None = None
    raw_host: str | None = None
    raw_port: int | None = None
    raw_path: str | None = None
    raw_query: str | None = None
    raw_fragment: str | None = None

    # Components whose last set_* call was rejected
    _failures: set[str] = dataclasses.field(default_factory=set, repr=False, compare=False)

    def __str__(self: Self) -> str:
        return self.to_iri_string()

    @property
    def scheme(self: Self) -> str | None:
        return self.raw_scheme

    @property
    def userinfo(self: Self) -> str | None:
        return self.raw_userinfo

    @property
    def host(self: Self) -> str | None:
        if self.raw_host is None:
            return schemes.defaults_for(self.raw_scheme).host
        return self.raw_host

    @property
    def port(self: Self) -> int | None:
        if self.raw_port is None:
            return schemes.defaults_for(self.raw_scheme).port
        return self.raw_port

    @property
    def path(self: Self) -> str | None:
        if self.raw_path is None:
            return schemes.defaults_for(self.raw_scheme).path
        return self.raw_path

    @property
    def query(self: Self) -> str | None:
        return self.raw_query

    @property
    def fragment(self: Self) -> str | None:
        return self.raw_fragment

    @property
    def has_authority(self: Self) -> bool:
        return self.raw_userinfo is not None or self.raw_host is not None or self.raw_port is not None

    @property
    def authority(self: Self) -> str | None:
        """userinfo@host:port, from the stored components only"""
        if not self.has_authority:
            return None
        result: str = ""
        if self.raw_userinfo is not None:
            result += f"{self.raw_userinfo}@"
        if self.raw_host is not None:
            result += self.raw_host
        if self.raw_port is not None:
            result += f":{self.raw_port}"
        return result

    def to_iri_string(self: Self) -> str:
        """Recomposition as in RFC 3986 section 5.3"""
        result: str = ""
        if self.raw_scheme is not None:
            result += f"{self.raw_scheme}:"
        if self.has_authority:
            result += f"//{self.authority}"
        if self.raw_path is not None:
            result += self.raw_path
        if self.raw_query is not None:
            result += f"?{self.raw_query}"
        if self.raw_fragment is not None:
            result += f"#{self.raw_fragment}"
        return result

    def to_uri_string(self: Self) -> str:
        """The IRI mapped to a URI (RFC 3987 section 3.1)"""
        return percent.to_ascii(self.to_iri_string())

    def is_valid(self: Self) -> bool:
        """Whether every component was accepted and the components fit together (RFC 3986 section 3)."""
        if len(self._failures) > 0:
            return False
        path: str = self.raw_path if self.raw_path is not None else ""
        if self.has_authority:
            # path-abempty
            if len(path) > 0 and not path.startswith("/"):
                return False
        elif path.startswith("//"):
            return False
        if self.raw_scheme is None:
            # path-noscheme: a colon in the first segment would read back as a scheme
            first_seg: str = path.partition("/")[0]
            if ":" in first_seg:
                return False
        return True

    def copy(self: Self) -> Self:
        result: Self = copy.copy(self)
        result._failures = set(self._failures)
        return result

    def _accept(self: Self, component: str) -> bool:
        self._failures.discard(component)
        return True

    def _reject(self: Self, component: str, value: object) -> bool:
        logger.debug("rejected %s %r", component, value)
        self._failures.add(component)
        return False

    def _needs_authority(self: Self) -> bool:
        """Whether the other components only serialize correctly behind an authority"""
        return (
            self.raw_userinfo is not None
            or self.raw_port is not None
            or (self.raw_path is not None and self.raw_path.startswith("//"))
        )

    def _apply_scheme_defaults(self: Self) -> None:
        """Implementation of scheme-based normalization from RFC 3986 section 6.2.3

        A default host is left out only when no authority is needed without it.
        Where one is needed, an absent host is written out as the default instead.
        """
        defaults: schemes.SchemeDefaults = schemes.defaults_for(self.raw_scheme)
        if defaults.port is not None and self.raw_port == defaults.port:
            self.raw_port = None
        if defaults.path is not None and self.raw_path == defaults.path:
            self.raw_path = None
        if defaults.host is not None:
            if self._needs_authority():
                if self.raw_host is None:
                    self.raw_host = defaults.host
            elif self.raw_host == defaults.host:
                self.raw_host = None

    def set_scheme(self: Self, scheme: str | None) -> bool:
        if scheme is None or len(scheme) == 0:
            self.raw_scheme = None
            return self._accept("scheme")
        if _SCHEME_PAT.match(scheme) is None:
            self.raw_scheme = None
            return self._reject("scheme", scheme)
        self.raw_scheme = scheme.lower()
        # Dot segments are only removed under a scheme, so a path set earlier gets them removed now.
        if self.raw_path is not None:
            self.raw_path = paths.remove_dot_segments(self.raw_path) or None
        self._apply_scheme_defaults()
        return self._accept("scheme")

    def set_authority(self: Self, authority: str | None) -> bool:
        """Split authority into userinfo, host and port, and set each of them."""
        userinfo: str | None = None
        host: str | None = authority
        port: str | None = None
        if host is not None:
            if "@" in host:
                userinfo, _, host = host.rpartition("@")
            # The port colon comes after any IP-literal, which has colons of its own.
            colon: int = host.find(":", max(host.find("]"), 0))
            if colon != -1:
                host, port = host[:colon], host[colon + 1 :]

        # All three are set even if one is rejected.
        results: tuple[bool, ...] = (self.set_userinfo(userinfo), self.set_host(host), self.set_port(port))
        return all(results)

    def set_userinfo(self: Self, userinfo: str | None) -> bool:
        if userinfo is None:
            self.raw_userinfo = None
        else:
            self.raw_userinfo = percent.normalize(userinfo, percent.USERINFO_CHARS)
        self._apply_scheme_defaults()
        return self._accept("userinfo")

    def set_host(self: Self, host: str | None) -> bool:
        if host is None:
            self.raw_host = None
        elif host.startswith("[") and host.endswith("]"):
            address: str = host[1:-1]
            if not ipv6.validate(address):
                self.raw_host = None
                return self._reject("host", host)
            self.raw_host = f"[{ipv6.compress(address)}]"
        else:
            # Lowercasing follows percent normalization, which may have decoded letters.
            self.raw_host = _lowercase_outside_triplets(percent.normalize(host, percent.HOST_CHARS))
        self._apply_scheme_defaults()
        return self._accept("host")

    def set_port(self: Self, port: str | int | None) -> bool:
        if isinstance(port, bool):
            self.raw_port = None
            return self._reject("port", port)
        if isinstance(port, int):
            if port < 0:
                self.raw_port = None
                return self._reject("port", port)
            self.raw_port = port
        elif port is None or len(port) == 0:
            self.raw_port = None
        elif _PORT_PAT.match(port) is None:
            self.raw_port = None
            return self._reject("port", port)
        else:
            self.raw_port = int(port, base=10)
        self._apply_scheme_defaults()
        return self._accept("port")

    def set_path(self: Self, path: str | None) -> bool:
        if path is None or len(path) == 0:
            self.raw_path = None
            self._apply_scheme_defaults()
            return self._accept("path")
        normalized: str = percent.normalize(path, percent.PATH_CHARS)
        if self.raw_scheme is not None:
            normalized = paths.remove_dot_segments(normalized)
        # Would serialize as an authority, unless the scheme has a default host to write out in front of it.
        if (
            normalized.startswith("//")
            and not self.has_authority
            and schemes.defaults_for(self.raw_scheme).host is None
        ):
            self.raw_path = None
            return self._reject("path", path)
        self.raw_path = normalized or None
        self._apply_scheme_defaults()
        return self._accept("path")

    def set_query(self: Self, query: str | None) -> bool:
        if query is None:
            self.raw_query = None
        else:
            self.raw_query = percent.normalize(query, percent.QUERY_CHARS, iprivate=True)
        return self._accept("query")

    def set_fragment(self: Self, fragment: str | None) -> bool:
        if fragment is None:
            self.raw_fragment = None
        else:
            self.raw_fragment = percent.normalize(fragment, percent.FRAGMENT_CHARS)
        return self._accept("fragment")


def parse(data: str | bytes) -> IRI:
    """Parse an IRI-reference. This never fails: check is_valid() on the result.
    bytes are read as UTF-8; octets that are not valid UTF-8 end up percent-encoded.
    """
    if isinstance(data, bytes):
        data = data.decode("utf-8", "surrogateescape")
    elif not isinstance(data, str):
        raise TypeError(f"expected str or bytes, got {type(data).__name__}")

    components: lexer.Components = lexer.split(data)
    result: IRI = IRI()
    result.set_scheme(components.scheme)
    result.set_authority(components.authority)
    result.set_path(components.path)
    result.set_query(components.query)
    result.set_fragment(components.fragment)
    return result
