"""iri.lexer
Splits an IRI-reference into its five top-level components without validating their contents.
"""

import functools
import re

from typing import NamedTuple

from . import abnf

# Entries kept by the memo on split(); the function is pure, so this only trades memory for speed.
LEX_CACHE_SIZE: int = 1024

_IRI_REFERENCE_PAT: re.Pattern[str] = re.compile(abnf.IRI_REFERENCE, re.DOTALL)


class Components(NamedTuple):
    scheme: str | None
    authority: str | None
    path: str
    query: str | None
    fragment: str | None


@functools.lru_cache(maxsize=LEX_CACHE_SIZE)
def split(data: str) -> Components:
    """Split data on the delimiters of RFC 3986 appendix B.

    A leading "scheme:" counts only if it satisfies the scheme grammar; otherwise it stays in the path.
    A missing "?" or "#" yields None, whereas a present but empty query or fragment yields "".
    """
    m: re.Match[str] | None = _IRI_REFERENCE_PAT.match(data)
    if m is None:
        # Every string matches the expression above; this is only a safety net.
        return Components(scheme=None, authority=None, path=data, query=None, fragment=None)
    return Components(
        scheme=m["scheme"],
        authority=m["authority"],
        path=m["path"],
        query=m["query"],
        fragment=m["fragment"],
    )
