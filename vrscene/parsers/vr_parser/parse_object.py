# -*- coding: utf-8 -*-
"""
Object rule
-----------

    object ["name"] { ObjectMember* }

Members may come in any order. Each member is parsed under its own
recovery: on an error the cursor is rewound to just after the member
keyword, the member's value is skipped and the next member is tried.
Nested objects become children of the enclosing object.
"""

from vrscene.core.errors import NestingTooDeepError, VrParseError
from vrscene.logger.scene_logger import write_log
from vrscene.parsers.vr_parser.lexer import EOF, IDENT, NUMBER, PUNCT, STRING
from vrscene.parsers.vr_parser.parse_material import parse_material
from vrscene.parsers.vr_parser.parse_views import parse_view
from vrscene.parsers.vr_parser.rule_helpers import (
    accept_separator, at_tcl_begin, keyword, read_int, read_string,
    read_vector, skip_member, skip_stray, skip_tcl_block, skip_value,
)
from vrscene.parsers.vr_parser.scene_nodes import (
    EulerXYZ, FixedXYZ, Gateway, Rotation, SceneObject, Translate,
)


# -----------------------------
# Member handlers
# -----------------------------

def _member_id(ctx, cursor, obj, depth):
    obj.id = read_int(cursor)


def _member_name(ctx, cursor, obj, depth):
    obj.name = read_string(cursor)


def _member_material(ctx, cursor, obj, depth):
    obj.materials.append(parse_material(ctx, cursor))


def _member_texture(ctx, cursor, obj, depth):
    obj.textures.append(read_string(cursor))


def _member_translation(ctx, cursor, obj, depth):
    obj.transforms.append(Translate(read_vector(cursor)))


def _member_eulerxyz(ctx, cursor, obj, depth):
    obj.transforms.append(EulerXYZ(read_vector(cursor)))


def _member_fixedxyz(ctx, cursor, obj, depth):
    obj.transforms.append(FixedXYZ(read_vector(cursor)))


def _member_rotation(ctx, cursor, obj, depth):
    rows = []
    for _ in range(3):
        rows.append(read_vector(cursor))
        accept_separator(cursor)
    obj.transforms.append(Rotation(rows))


def _member_view(ctx, cursor, obj, depth):
    parse_view(ctx, cursor, obj)


def _member_object(ctx, cursor, obj, depth):
    obj.children.append(parse_object(ctx, cursor, depth + 1))


def _member_gateway(ctx, cursor, obj, depth):
    url = read_string(cursor)
    position = None
    if cursor.check(NUMBER) or (cursor.check(IDENT, "v") and cursor.check(NUMBER, offset=1)):
        position = read_vector(cursor)
    obj.gateways.append(Gateway(url, position))


def _member_begin(ctx, cursor, obj, depth):
    if at_tcl_begin(cursor):
        skip_tcl_block(cursor)
    else:
        skip_member(cursor, "begin", cursor.line)


OBJECT_MEMBERS = {
    "id": _member_id,
    "name": _member_name,
    "material": _member_material,
    "texture": _member_texture,
    "translation": _member_translation,
    "eulerxyz": _member_eulerxyz,
    "fixedxyz": _member_fixedxyz,
    "rotation": _member_rotation,
    "view": _member_view,
    "object": _member_object,
    "gateway": _member_gateway,
    "begin": _member_begin,
}


# -----------------------------
# Rule
# -----------------------------

def parse_object(ctx, cursor, depth=1):
    """
    Parse one object; the 'object' keyword is already consumed.
    `depth` is 1 for a top-level object.
    """
    limit = ctx.params.max_nesting_depth
    if depth > limit:
        raise NestingTooDeepError(depth, limit, cursor.line)

    obj = SceneObject()
    name = cursor.accept(STRING)
    if name is not None:
        obj.name = name.value
    opener = cursor.expect(PUNCT, "{")

    while True:
        tok = cursor.peek()
        if tok.kind == EOF:
            write_log("Warning",
                      f"line {opener.line}: object not closed before end of input, keeping it")
            break
        if tok.kind == PUNCT and tok.value == "}":
            cursor.next()
            break
        key = keyword(tok)
        if key is None:
            skip_stray(cursor, "object")
            continue

        cursor.next()
        handler = OBJECT_MEMBERS.get(key)
        if handler is None:
            skip_member(cursor, key, tok.line)
            continue

        mark = cursor.mark()
        try:
            handler(ctx, cursor, obj, depth)
        except VrParseError as e:
            write_log("Warning", f"object member '{key}' skipped: {e}")
            cursor.reset(mark)
            skip_value(cursor)

    write_log("Debug",
              f"object '{obj.name or ''}' at line {opener.line}: "
              f"{len(obj.views)} views, {len(obj.children)} children")
    return obj
