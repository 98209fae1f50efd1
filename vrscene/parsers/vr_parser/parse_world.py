# parse_world.py
#
#   world ["name"] { WorldProp* }
#
# Each property is parsed on its own: a property with the wrong arity is
# logged and skipped, and the rest of the block still applies.

from vrscene.core.errors import VrParseError
from vrscene.logger.scene_logger import write_log
from vrscene.parsers.vr_parser.lexer import EOF, PUNCT, STRING
from vrscene.parsers.vr_parser.rule_helpers import (
    keyword, read_number, read_string, read_vector, skip_member, skip_stray,
    skip_value,
)


# keyword -> (World attribute, reader)
WORLD_PROPS = {
    "background": ("background", read_vector),
    "start": ("start", read_vector),
    "fog": ("fog", read_number),
    "ambient": ("ambient", read_vector),
    "light": ("light_position", read_vector),
    "light_position": ("light_position", read_vector),
    "terrain": ("terrain", read_string),
    "info": ("info", read_string),
}


def parse_world(ctx, cursor, world):
    """Fill `world` in place; the 'world' keyword is already consumed."""
    name = cursor.accept(STRING)
    if name is not None:
        world.name = name.value
    opener = cursor.expect(PUNCT, "{")

    while True:
        tok = cursor.peek()
        if tok.kind == EOF:
            write_log("Warning", f"line {opener.line}: world block not closed before end of input")
            return world
        if tok.kind == PUNCT and tok.value == "}":
            cursor.next()
            break
        key = keyword(tok)
        if key is None:
            skip_stray(cursor, "world")
            continue

        cursor.next()
        prop = WORLD_PROPS.get(key)
        if prop is None:
            skip_member(cursor, key, tok.line)
            continue

        attr, reader = prop
        mark = cursor.mark()
        try:
            setattr(world, attr, reader(cursor))
        except VrParseError as e:
            write_log("Warning", f"world property '{key}' skipped: {e}")
            cursor.reset(mark)
            skip_value(cursor)

    write_log("Info", f"World '{world.name or ''}' parsed")
    return world
