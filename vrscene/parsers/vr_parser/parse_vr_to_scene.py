# -*- coding: utf-8 -*-
"""
parse_vr_to_scene.py
====================

Public entry points: .vr source text -> Scene.

    File := [ WorldDecl ] ( ObjectDecl | OtherTopLevel )*

parse_into() never raises for document content. Anything that escapes the
top-level rule is recorded in scene.error and the partial scene is
returned; every Warning / Error logged during the call is copied into
scene.warnings.
"""

from vrscene.core.errors import VrParseError
from vrscene.core.preferences import ParserParams
from vrscene.logger.scene_logger import capture_log, log_settings, write_log
from vrscene.parsers.vr_parser.lexer import PUNCT, tokenize
from vrscene.parsers.vr_parser.materials import MATERIAL_TABLE
from vrscene.parsers.vr_parser.parse_context import ParseContext
from vrscene.parsers.vr_parser.parse_object import parse_object
from vrscene.parsers.vr_parser.parse_world import parse_world
from vrscene.parsers.vr_parser.rule_helpers import (
    at_tcl_begin, keyword, skip_member, skip_stray, skip_tcl_block, skip_value,
)
from vrscene.parsers.vr_parser.scene_nodes import Scene
from vrscene.parsers.vr_parser.scene_pass import finish_scene
from vrscene.parsers.vr_parser.token_cursor import TokenCursor

REPORTED_LEVELS = ("Warning", "Error")


def make_empty_scene():
    """Scene with a default World and no objects."""
    return Scene()


# ------------------------------------------------------------------
# Top-level rule
# ------------------------------------------------------------------

def _top_level(cursor, key, parse_rule):
    mark = cursor.mark()
    try:
        return parse_rule()
    except VrParseError as e:
        write_log("Warning", f"top-level '{key}' skipped: {e}")
        cursor.reset(mark)
        skip_value(cursor)
        return None


def parse_file(ctx, cursor, scene):
    seen_world = False

    while not cursor.at_end():
        tok = cursor.peek()
        key = keyword(tok)

        if key is None:
            if tok.kind == PUNCT and tok.value == "}":
                write_log("Warning", f"line {tok.line}: unmatched '}}' at top level skipped")
                cursor.next()
            else:
                skip_stray(cursor, "file")
            continue

        cursor.next()
        if key == "world":
            if seen_world:
                write_log("Warning", f"line {tok.line}: second world block merged into the first")
            seen_world = True
            _top_level(cursor, key, lambda: parse_world(ctx, cursor, scene.world))
        elif key == "object":
            obj = _top_level(cursor, key, lambda: parse_object(ctx, cursor))
            if obj is not None:
                scene.objects.append(obj)
        elif key == "begin" and at_tcl_begin(cursor):
            skip_tcl_block(cursor)
        else:
            skip_member(cursor, key, tok.line)

    return scene


# ------------------------------------------------------------------
# Public entry points
# ------------------------------------------------------------------

def parse_into(scene, text, material_table=None, params=None):
    """
    Parse `text` into `scene` and return it.

    material_table: name -> Material for `material "name"` lookups,
                    defaults to MATERIAL_TABLE.
    params:         ParserParams, defaults to ParserParams.from_environment().
                    Its log_file / verbose apply for the duration of the call.
    """
    if params is None:
        params = ParserParams.from_environment()
    if material_table is None:
        material_table = MATERIAL_TABLE
    ctx = ParseContext(params=params, material_table=material_table)

    with log_settings(params.log_file, params.verbose):
        with capture_log() as records:
            try:
                cursor = TokenCursor(tokenize(text))
                write_log("Debug", f"{len(cursor.tokens)} tokens")
                parse_file(ctx, cursor, scene)
            except Exception as e:
                scene.error = str(e)
                write_log("Error", f"Parse aborted: {e}")
            finish_scene(scene, params)

        scene.warnings.extend(msg for level, msg in records if level in REPORTED_LEVELS)
        write_log("Info",
                  f"Parsed {len(scene.objects)} top-level objects, "
                  f"{len(scene.warnings)} warnings")
    return scene


def parse_vr(text, material_table=None, params=None):
    """Parse into a fresh scene."""
    return parse_into(make_empty_scene(), text, material_table, params)
