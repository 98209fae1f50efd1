# parse_material.py
#
#   material "name"                 looked up in the material table
#   material "name" { ... }         named base, block overrides
#   material rgb r g b              ambient and diffuse both set
#   material { ambient v r g b  diffuse ...  emission ...  specular ...
#              spec_power x  transparency x }

from vrscene.core.errors import VrParseError, VrSyntaxError
from vrscene.logger.scene_logger import write_log
from vrscene.parsers.vr_parser.lexer import EOF, IDENT, PUNCT, STRING
from vrscene.parsers.vr_parser.materials import lookup_material
from vrscene.parsers.vr_parser.rule_helpers import (
    keyword, read_number, read_vector, skip_member, skip_stray, skip_value,
)
from vrscene.parsers.vr_parser.scene_nodes import Material

COLOR_KEYS = ("ambient", "diffuse", "emission", "specular")
SCALAR_KEYS = ("spec_power", "transparency")


def _unit(value, what, line):
    if 0.0 <= value <= 1.0:
        return value
    clamped = min(1.0, max(0.0, value))
    write_log("Warning", f"line {line}: material {what} {value:g} clamped to {clamped:g}")
    return clamped


def _read_color(cursor, what):
    line = cursor.line
    return [_unit(c, what, line) for c in read_vector(cursor)]


def parse_material_block(cursor, material):
    cursor.expect(PUNCT, "{")
    while True:
        tok = cursor.peek()
        if tok.kind == EOF:
            write_log("Warning", f"line {tok.line}: unterminated material block")
            return material
        if tok.kind == PUNCT and tok.value == "}":
            cursor.next()
            return material
        key = keyword(tok)
        if key is None:
            skip_stray(cursor, "material")
            continue

        cursor.next()
        mark = cursor.mark()
        try:
            if key in COLOR_KEYS:
                setattr(material, key, _read_color(cursor, key))
            elif key in SCALAR_KEYS:
                setattr(material, key, _unit(read_number(cursor), key, tok.line))
            else:
                skip_member(cursor, key, tok.line)
        except VrParseError as e:
            write_log("Warning", f"material property '{key}' skipped: {e}")
            cursor.reset(mark)
            skip_value(cursor)


def parse_material(ctx, cursor):
    """Parse one material declaration; the 'material' keyword is consumed."""
    tok = cursor.peek()

    if tok.kind == STRING:
        cursor.next()
        material = lookup_material(tok.value, ctx.material_table)
        if cursor.check(PUNCT, "{"):
            parse_material_block(cursor, material)
        return material

    if tok.kind == IDENT and keyword(tok) == "rgb":
        cursor.next()
        color = _read_color(cursor, "rgb")
        return Material(ambient=list(color), diffuse=list(color))

    if tok.kind == PUNCT and tok.value == "{":
        return parse_material_block(cursor, Material())

    raise VrSyntaxError("material name, 'rgb' or '{'", tok.describe(), tok.line)
