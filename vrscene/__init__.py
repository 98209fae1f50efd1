# vrscene/__init__.py
#
# Reader for .vr world files: text -> scene graph.

from vrscene.core.errors import (
    GeometryError, NestingTooDeepError, VrParseError, VrSyntaxError,
)
from vrscene.core.preferences import ParserParams
from vrscene.parsers.vr_parser.lexer import Token, tokenize
from vrscene.parsers.vr_parser.materials import MATERIAL_TABLE
from vrscene.parsers.vr_parser.parse_vr_to_scene import (
    make_empty_scene, parse_into, parse_vr,
)
from vrscene.parsers.vr_parser.scene_nodes import scene_to_dict

__version__ = "0.1.0"

__all__ = [
    "GeometryError", "NestingTooDeepError", "VrParseError", "VrSyntaxError",
    "ParserParams", "Token", "tokenize", "MATERIAL_TABLE",
    "make_empty_scene", "parse_into", "parse_vr", "scene_to_dict",
]
