# parse_context.py
#
# Per-call settings threaded through the grammar rules. Nothing here
# outlives one parse_into() call.

from dataclasses import dataclass, field
from typing import Dict

from vrscene.core.preferences import ParserParams
from vrscene.parsers.vr_parser.materials import MATERIAL_TABLE
from vrscene.parsers.vr_parser.scene_nodes import Material


@dataclass
class ParseContext:
    params: ParserParams = field(default_factory=ParserParams)
    material_table: Dict[str, Material] = field(default_factory=lambda: MATERIAL_TABLE)
