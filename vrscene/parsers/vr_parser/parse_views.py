# parse_views.py
#
#   view [N] WrapperProp* ( '{' ViewBody '}' | InlinePrimitive )
#
# Wrapper props (name, material_index, texture_index, texture_mode) may
# appear before the body and anywhere inside it. A body holds exactly one
# primitive; a failing primitive drops the whole view and parsing resumes
# after the body.

from vrscene.core.errors import VrParseError, VrSyntaxError
from vrscene.logger.scene_logger import write_log
from vrscene.parsers.vr_parser.geometry import validate_arrays
from vrscene.parsers.vr_parser.lexer import EOF, IDENT, NUMBER, PUNCT, STRING
from vrscene.parsers.vr_parser.parse_primitives import BLOCK_ONLY, PRIMITIVES
from vrscene.parsers.vr_parser.rule_helpers import (
    format_number, keyword, read_int, read_string, skip_block, skip_member, skip_stray,
    skip_value,
)
from vrscene.parsers.vr_parser.scene_nodes import LinesView, MeshView


def _read_texture_mode(cursor):
    tok = cursor.peek()
    if tok.kind in (IDENT, STRING):
        return str(cursor.next().value)
    if tok.kind == NUMBER:
        return format_number(cursor.next().value)
    raise VrSyntaxError("texture mode", tok.describe(), tok.line)


WRAPPER_PROPS = {
    "name": read_string,
    "material_index": read_int,
    "texture_index": read_int,
    "texture_mode": _read_texture_mode,
}


def _parse_wrapper_prop(cursor, key, props):
    line = cursor.next().line
    mark = cursor.mark()
    try:
        props[key] = WRAPPER_PROPS[key](cursor)
    except VrParseError as e:
        write_log("Warning", f"view property '{key}' skipped: {e}")
        cursor.reset(mark)
        skip_value(cursor)
        return
    if key in ("material_index", "texture_index") and props[key] < 0:
        write_log("Warning", f"line {line}: negative {key} {props[key]}")


def _parse_primitive(ctx, cursor):
    tok = cursor.next()
    view = PRIMITIVES[keyword(tok)](ctx, cursor)
    if isinstance(view, MeshView):
        validate_arrays(view.positions, view.indices, 3)
    elif isinstance(view, LinesView):
        validate_arrays(view.positions, view.indices, 2)
    return view


def _parse_body(ctx, cursor, props):
    opener = cursor.expect(PUNCT, "{")
    view = None
    while True:
        tok = cursor.peek()
        if tok.kind == EOF:
            write_log("Warning", f"line {opener.line}: view body not closed before end of input")
            break
        if tok.kind == PUNCT and tok.value == "}":
            cursor.next()
            break
        key = keyword(tok)
        if key in WRAPPER_PROPS:
            _parse_wrapper_prop(cursor, key, props)
        elif key in PRIMITIVES:
            parsed = _parse_primitive(ctx, cursor)
            if view is None:
                view = parsed
            else:
                write_log("Warning",
                          f"line {tok.line}: extra {tok.value} in view body ignored, "
                          f"a view holds one primitive")
        elif key is not None:
            cursor.next()
            skip_member(cursor, key, tok.line)
        else:
            skip_stray(cursor, "view")

    if view is None:
        write_log("Warning", f"line {opener.line}: view without a primitive, no view produced")
    return view


def parse_view(ctx, cursor, obj):
    """
    View rule; the 'view' keyword is consumed. Appends at most one view to
    obj.views and returns it (None when the view was dropped).
    """
    start = cursor.line
    props = {}

    index = cursor.accept(NUMBER)
    if index is not None:
        props["view_index"] = int(index.value) if float(index.value).is_integer() else index.value

    while keyword(cursor.peek()) in WRAPPER_PROPS:
        _parse_wrapper_prop(cursor, keyword(cursor.peek()), props)

    tok = cursor.peek()
    key = keyword(tok)
    if tok.kind == PUNCT and tok.value == "{":
        body = cursor.mark()
        try:
            view = _parse_body(ctx, cursor, props)
        except VrParseError as e:
            write_log("Warning", f"view at line {start} dropped: {e}")
            cursor.reset(body)
            skip_block(cursor)
            return None
    elif key in PRIMITIVES and key not in BLOCK_ONLY:
        try:
            view = _parse_primitive(ctx, cursor)
        except VrParseError as e:
            write_log("Warning", f"view at line {start} dropped: {e}")
            return None
    else:
        raise VrSyntaxError("'{' or primitive", tok.describe(), tok.line)

    if view is None:
        return None
    for attr, value in props.items():
        setattr(view, attr, value)
    obj.views.append(view)
    write_log("Debug", f"line {start}: {view.kind} view added")
    return view
