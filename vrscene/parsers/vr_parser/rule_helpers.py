# rule_helpers.py
#
# Small readers shared by the grammar rules, plus the generic skipping used
# for constructs no rule knows about.

from vrscene.core.errors import VrSyntaxError
from vrscene.logger.scene_logger import write_log
from vrscene.parsers.vr_parser.lexer import (
    EOF, IDENT, NUMBER, PUNCT, STRING, UNKNOWN,
)

CLOSERS = {"{": "}", "(": ")"}


# -----------------------------
# Value readers
# -----------------------------

def keyword(tok):
    """Lower-cased identifier text, or None for any other token."""
    if tok.kind == IDENT:
        return tok.value.lower()
    return None


def read_number(cursor):
    return cursor.expect(NUMBER).value


def read_int(cursor):
    tok = cursor.expect(NUMBER)
    if not float(tok.value).is_integer():
        raise VrSyntaxError("integer", tok.describe(), tok.line)
    return int(tok.value)


def read_count(cursor, minimum):
    tok = cursor.peek()
    count = read_int(cursor)
    if count < minimum:
        raise VrSyntaxError(f"count >= {minimum}", tok.describe(), tok.line)
    return count


def read_vector(cursor):
    """Vector := ['v'] Number Number Number"""
    cursor.accept(IDENT, "v")
    return [read_number(cursor), read_number(cursor), read_number(cursor)]


def read_string(cursor):
    return cursor.expect(STRING).value


def accept_separator(cursor):
    return cursor.accept(PUNCT, ",") or cursor.accept(PUNCT, ";")


def number_run(cursor):
    """Count consecutive NUMBER tokens from the cursor position."""
    n = 0
    while cursor.check(NUMBER, offset=n):
        n += 1
    return n


def format_number(value):
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


# -----------------------------
# Generic skipping
# -----------------------------

def skip_block(cursor):
    """
    Skip a balanced '{ ... }' or '( ... )' block; the opener must be next.
    An unterminated block runs to end of input with a warning.
    """
    opener = cursor.next()
    close = CLOSERS[opener.value]
    depth = 1
    while depth:
        tok = cursor.next()
        if tok.kind == EOF:
            write_log("Warning", f"line {opener.line}: unterminated '{opener.value}' block")
            return
        if tok.kind == PUNCT:
            if tok.value == opener.value:
                depth += 1
            elif tok.value == close:
                depth -= 1


def skip_value(cursor):
    """
    Skip whatever follows an unknown keyword: an optional 'v' marker and
    any run of numbers / strings, then a balanced block if one opens.
    """
    if cursor.check(IDENT, "v") and cursor.check(NUMBER, offset=1):
        cursor.next()
    while cursor.check(NUMBER) or cursor.check(STRING):
        cursor.next()
    if cursor.check(PUNCT, "{") or cursor.check(PUNCT, "("):
        skip_block(cursor)


def skip_directive_line(cursor):
    """Skip a '#...' preprocessor line; these are never evaluated."""
    hash_tok = cursor.next()
    while not cursor.at_end() and cursor.peek().line == hash_tok.line:
        cursor.next()
    write_log("Debug", f"line {hash_tok.line}: skipped preprocessor directive")


def at_tcl_begin(cursor):
    """True when the cursor sits on '.tcl' right after a consumed 'begin'."""
    return cursor.check(UNKNOWN, ".") and cursor.check(IDENT, "tcl", offset=1)


def skip_tcl_block(cursor):
    """Skip an embedded 'begin.tcl ... end.tcl' script; 'begin' already consumed."""
    start = cursor.peek().line
    cursor.next()
    cursor.next()
    while not cursor.at_end():
        if (cursor.check(IDENT, "end") and cursor.check(UNKNOWN, ".", offset=1)
                and cursor.check(IDENT, "tcl", offset=2)):
            for _ in range(3):
                cursor.next()
            write_log("Debug", f"line {start}: skipped tcl block")
            return
        cursor.next()
    write_log("Warning", f"line {start}: 'begin.tcl' without matching 'end.tcl'")


def skip_stray(cursor, context):
    """
    Consume one token that cannot start a member of `context`.
    Separators are dropped silently, blocks skipped whole.
    """
    tok = cursor.peek()
    if tok.kind == PUNCT and tok.value in (";", ","):
        cursor.next()
    elif tok.kind == PUNCT and tok.value in CLOSERS:
        write_log("Debug", f"line {tok.line}: skipped anonymous block in {context}")
        skip_block(cursor)
    elif tok.kind == UNKNOWN and tok.value == "#":
        skip_directive_line(cursor)
    else:
        write_log("Debug", f"line {tok.line}: ignored {tok.describe()} in {context}")
        cursor.next()


def skip_member(cursor, key, line):
    """Skip the value of an unrecognised keyword inside a block."""
    write_log("Debug", f"line {line}: skipping unknown keyword '{key}'")
    skip_value(cursor)
