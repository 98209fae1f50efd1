# -*- coding: utf-8 -*-
#***************************************************************************
#*                                                                         *
#*   .vr World Importer                                                    *
#*                                                                         *
#*   Responsibilities:                                                     *
#*   - Read a .vr file from disk                                           *
#*   - Hand the text to the parser and return the Scene                    *
#*   - vrscene-dump: print a summary, the token stream or JSON             *
#*                                                                         *
#*   NOTE:                                                                 *
#*   This file is the only place the package touches the filesystem       *
#*   apart from the log file.                                              *
#*                                                                         *
#***************************************************************************

import argparse
import json
import sys
from pathlib import Path

from vrscene.core.preferences import ParserParams
from vrscene.logger.scene_logger import init, write_log
from vrscene.parsers.vr_parser.lexer import tokenize
from vrscene.parsers.vr_parser.parse_vr_to_scene import parse_vr
from vrscene.parsers.vr_parser.scene_nodes import scene_to_dict


# -------------------------------------------------------------------------
# Public entry point
# -------------------------------------------------------------------------

def open(filename, material_table=None, params=None):
    """Parse a .vr file and return its Scene."""
    path = Path(filename)
    write_log("Info", f"Importing .vr file: {path}")
    text = path.read_text(encoding="utf-8", errors="replace")
    scene = parse_vr(text, material_table, params)
    if scene.error:
        write_log("Error", f"{path}: {scene.error}")
    return scene


# -------------------------------------------------------------------------
# Dump output
# -------------------------------------------------------------------------

def _format_token(tok):
    return f"{tok.line:5d}  {tok.kind:<8} {tok.value!r}"


def _summary_lines(scene):
    world = scene.world
    yield f"world {world.name or '-'}"
    yield f"  background {world.background}  start {world.start}"

    def _object(obj, indent):
        pad = "  " * indent
        label = obj.name or (f"#{obj.id}" if obj.id is not None else "-")
        yield (f"{pad}object {label}: {len(obj.materials)} materials, "
               f"{len(obj.textures)} textures, {len(obj.transforms)} transforms")
        for view in obj.views:
            extra = ""
            if hasattr(view, "triangle_count"):
                extra = f" ({view.triangle_count} triangles)"
            yield f"{pad}  view {view.kind}{extra}"
        for child in obj.children:
            yield from _object(child, indent + 1)

    for obj in scene.objects:
        yield from _object(obj, 0)
    for msg in scene.warnings:
        yield f"warning: {msg}"
    if scene.error:
        yield f"error: {scene.error}"


# -------------------------------------------------------------------------
# Command line
# -------------------------------------------------------------------------

def _build_arg_parser():
    parser = argparse.ArgumentParser(
        prog="vrscene-dump",
        description="Parse a .vr world file and print what was found.")
    parser.add_argument("file", help=".vr file to read")
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--tokens", action="store_true",
                        help="print the token stream instead of the scene")
    output.add_argument("--json", action="store_true",
                        help="print the scene as JSON")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="echo log lines (including Debug) to stderr")
    parser.add_argument("--log-file", help="append log lines to this file")
    parser.add_argument("--inherit-materials", action="store_true",
                        help="materialless objects copy their parent's materials")
    parser.add_argument("--max-depth", type=int,
                        help="maximum object nesting depth")
    return parser


def main(argv=None):
    args = _build_arg_parser().parse_args(argv)

    params = ParserParams.from_environment()
    if args.verbose:
        params.verbose = True
    if args.log_file:
        params.log_file = args.log_file
    if args.inherit_materials:
        params.inherit_materials = True
    if args.max_depth is not None:
        params.max_nesting_depth = args.max_depth
    init(params.log_file, params.verbose)

    path = Path(args.file)
    if not path.is_file():
        print(f"vrscene-dump: no such file: {path}", file=sys.stderr)
        return 2

    if args.tokens:
        for tok in tokenize(path.read_text(encoding="utf-8", errors="replace")):
            print(_format_token(tok))
        return 0

    scene = open(path, params=params)
    if args.json:
        print(json.dumps(scene_to_dict(scene), indent=2))
    else:
        for line in _summary_lines(scene):
            print(line)
    return 1 if scene.error else 0


if __name__ == "__main__":
    sys.exit(main())
