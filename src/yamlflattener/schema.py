"""PyYAML loader that resolves plain scalars with the YAML 1.2 core schema.

PyYAML's default resolver follows YAML 1.1, where ``yes``/``on`` become
booleans, ``1:30`` is a sexagesimal integer and ``0755`` is octal.  Flattened
values must keep those as the strings they look like, so this module
registers the 1.2 core schema rules instead.  Only the composition stages
(reader, scanner, parser, composer) are used: the flattener works on nodes,
not on constructed Python objects.
"""

from __future__ import annotations

import re

from yaml.composer import Composer
from yaml.parser import Parser
from yaml.reader import Reader
from yaml.resolver import BaseResolver
from yaml.scanner import Scanner

NULL_TAG = "tag:yaml.org,2002:null"
BOOL_TAG = "tag:yaml.org,2002:bool"
INT_TAG = "tag:yaml.org,2002:int"
FLOAT_TAG = "tag:yaml.org,2002:float"
STR_TAG = "tag:yaml.org,2002:str"
MERGE_TAG = "tag:yaml.org,2002:merge"


class CoreSchemaResolver(BaseResolver):
    """Implicit tag resolution per the YAML 1.2 core schema, plus ``<<``."""


# Order matters: for a shared first character the earlier rule wins, so
# integers are registered before floats.
CoreSchemaResolver.add_implicit_resolver(
    NULL_TAG,
    re.compile(r"^(?:~|null|Null|NULL|)$"),
    ["~", "n", "N", ""],
)
CoreSchemaResolver.add_implicit_resolver(
    BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)
CoreSchemaResolver.add_implicit_resolver(
    INT_TAG,
    re.compile(r"^(?:[-+]?[0-9]+|0o[0-7]+|0x[0-9a-fA-F]+)$"),
    list("-+0123456789"),
)
CoreSchemaResolver.add_implicit_resolver(
    FLOAT_TAG,
    re.compile(
        r"""^(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?
        |[-+]?\.(?:inf|Inf|INF)
        |\.(?:nan|NaN|NAN))$""",
        re.X,
    ),
    list("-+0123456789."),
)
CoreSchemaResolver.add_implicit_resolver(
    MERGE_TAG,
    re.compile(r"^(?:<<)$"),
    ["<"],
)


class FlattenerLoader(Reader, Scanner, Parser, Composer, CoreSchemaResolver):
    """Composing loader used by :func:`yaml.compose` for flattening."""

    def __init__(self, stream) -> None:
        Reader.__init__(self, stream)
        Scanner.__init__(self)
        Parser.__init__(self)
        Composer.__init__(self)
        CoreSchemaResolver.__init__(self)
