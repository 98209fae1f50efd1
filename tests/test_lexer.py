"""Tokenizer and comment elision."""

from vrscene import tokenize
from vrscene.logger import capture_log
from vrscene.parsers.vr_parser.lexer import (
    EOF, IDENT, NUMBER, PUNCT, STRING, UNKNOWN, strip_comments,
)


def _kinds(tokens):
    return [t.kind for t in tokens]


def test_world_header_token_kinds():
    tokens = tokenize('world "T" { background 0.1 0.2 0.3; }')
    assert _kinds(tokens) == [
        IDENT, STRING, PUNCT, IDENT, NUMBER, NUMBER, NUMBER, PUNCT, PUNCT, EOF,
    ]
    assert tokens[1].value == "T"
    assert tokens[4].value == 0.1


def test_all_punctuation():
    tokens = tokenize("{ } ( ) , ;")
    assert [t.value for t in tokens[:-1]] == ["{", "}", "(", ")", ",", ";"]
    assert all(t.kind == PUNCT for t in tokens[:-1])


def test_number_forms():
    tokens = tokenize("-1 +2.5 .5 3. 1e3 -2.5E-2")
    assert [t.value for t in tokens[:-1]] == [-1.0, 2.5, 0.5, 3.0, 1000.0, -0.025]
    assert all(isinstance(t.value, float) for t in tokens[:-1])


def test_identifiers_allow_hyphen_and_underscore():
    tokens = tokenize("indexed_poly light-1 _x")
    assert [t.value for t in tokens[:-1]] == ["indexed_poly", "light-1", "_x"]
    assert all(t.kind == IDENT for t in tokens[:-1])


def test_hyphen_after_identifier_is_part_of_it():
    tokens = tokenize("v-1 v -1")
    assert _kinds(tokens) == [IDENT, IDENT, NUMBER, EOF]
    assert [t.value for t in tokens[:-1]] == ["v-1", "v", -1.0]


def test_string_escape_keeps_next_character():
    tokens = tokenize(r'"a\"b\\c"')
    assert tokens[0].kind == STRING
    assert tokens[0].value == 'a"b\\c'


def test_unknown_character_becomes_single_token():
    tokens = tokenize("a @ b")
    assert _kinds(tokens) == [IDENT, UNKNOWN, IDENT, EOF]
    assert tokens[1].value == "@"


def test_comments_are_elided():
    source = "a /* x\ny */ b // c\nd % e\nf"
    tokens = tokenize(source)
    assert [t.value for t in tokens[:-1]] == ["a", "b", "d", "f"]
    assert [t.line for t in tokens[:-1]] == [1, 2, 3, 4]


def test_comment_markers_inside_strings_survive():
    tokens = tokenize('"http://host/a%20b" z')
    assert tokens[0].value == "http://host/a%20b"
    assert tokens[1].value == "z"


def test_strip_comments_preserves_offsets():
    source = 'a /* long\ncomment */ "s // x" % tail\nb'
    stripped = strip_comments(source)
    assert len(stripped) == len(source)
    assert stripped.count("\n") == source.count("\n")
    assert stripped.index("b", 10) == source.index("\nb") + 1
    assert '"s // x"' in stripped


def test_unterminated_block_comment_runs_to_end():
    with capture_log() as records:
        tokens = tokenize("a /* b c")
    assert _kinds(tokens) == [IDENT, EOF]
    assert any(level == "Warning" for level, _ in records)


def test_token_positions_index_original_text():
    source = "/* c */ world"
    tokens = tokenize(source)
    assert source[tokens[0].pos:tokens[0].pos + 5] == "world"


def test_multiline_string_advances_line_count():
    tokens = tokenize('"one\ntwo" next')
    assert tokens[0].line == 1
    assert tokens[1].line == 2


def test_empty_input_is_just_eof():
    tokens = tokenize("")
    assert _kinds(tokens) == [EOF]


def test_tcl_markers_lex_as_ident_dot_ident():
    tokens = tokenize("begin.tcl")
    assert _kinds(tokens) == [IDENT, UNKNOWN, IDENT, EOF]


def test_separate_calls_do_not_share_line_numbers():
    tokenize("a\nb\nc\n")
    tokens = tokenize("x")
    assert tokens[0].line == 1
