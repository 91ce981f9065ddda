"""iri.resolve
Resolution of a relative reference against a base IRI (RFC 3986 section 5.2).
"""

import logging

from . import paths
from .iri import IRI, parse

logger = logging.getLogger(__name__)


def absolutize(base: IRI, relative: str | bytes | IRI) -> IRI:
    """Implementation of the "Transform References" algorithm from RFC 3986 section 5.2.2.

    The result is always a new IRI. Resolution itself never fails; an unusable base or reference
    shows up as is_valid() being False on the result.
    """
    if isinstance(relative, IRI):
        if len(relative.to_iri_string()) == 0:
            return base.copy()
        r: IRI = relative.copy()
    else:
        if len(relative) == 0:
            return base.copy()
        r = parse(relative)

    if r.raw_scheme is not None:
        return r

    if len(base.to_iri_string()) == 0:
        logger.debug("no base to resolve %r against", str(r))
        return r

    target: IRI
    if r.has_authority:
        target = r
        # Also removes the reference's dot segments, now that there is a scheme.
        target.set_scheme(base.raw_scheme)
    else:
        target = IRI()
        target.set_scheme(base.raw_scheme)
        target.set_userinfo(base.raw_userinfo)
        target.set_host(base.raw_host)
        target.set_port(base.raw_port)
        if r.raw_path is not None:
            merged: str = paths.merge(base.raw_path, base.has_authority, r.raw_path)
            target.set_path(paths.remove_dot_segments(merged))
            target.set_query(r.raw_query)
        else:
            target.set_path(base.raw_path)
            if r.raw_query is not None:
                target.set_query(r.raw_query)
            else:
                target.set_query(base.raw_query)

    target.set_fragment(r.raw_fragment)
    # A component the reference failed to set leaves the result invalid too.
    target._failures |= r._failures
    return target
