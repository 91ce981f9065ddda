__version__ = "0.1"

from . import ipv6, paths, percent, schemes
from .iri import IRI, parse
from .lexer import Components, split
from .resolve import absolutize
