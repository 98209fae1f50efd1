# lexer.py
# PLY-based lexer for .vr world files.
#
# Comments are blanked out before lexing so token positions still index
# into the original text. The lexer never fails: a character no rule
# matches becomes a one-character UNKNOWN token and the grammar decides
# what to do with it.
#
# Identifiers may contain hyphens, so "v-1" is one IDENT. A vector marker
# needs whitespace before a negative number: "v -1 0 0".

import re
from dataclasses import dataclass
from typing import List, Any

import ply.lex as lex

from vrscene.logger.scene_logger import write_log

# ----------------------------------------------------
# TOKEN KINDS (as seen by the grammar rules)
# ----------------------------------------------------

PUNCT = "PUNCT"
STRING = "STRING"
NUMBER = "NUMBER"
IDENT = "IDENT"
UNKNOWN = "UNKNOWN"
EOF = "EOF"


@dataclass
class Token:
    kind: str
    value: Any
    pos: int = 0
    line: int = 0

    def describe(self):
        if self.kind == EOF:
            return "end of input"
        if self.kind == STRING:
            return f'{self.kind} "{self.value}"'
        if self.kind == NUMBER:
            return f"{self.kind} {self.value:g}"
        return f"{self.kind} {self.value!r}"


# ----------------------------------------------------
# COMMENT ELISION
# ----------------------------------------------------

# String literals are matched first so comment markers inside them survive.
_COMMENT_RE = re.compile(
    r'"(?:[^"\\]|\\[\s\S])*"'
    r'|/\*[\s\S]*?(?:\*/|\Z)'
    r'|//[^\n]*'
    r'|%[^\n]*'
)
_NOT_NEWLINE_RE = re.compile(r"[^\n]")


def strip_comments(text):
    """Replace /* */, // and % comments with spaces, keeping newlines and offsets."""

    def _blank(m):
        s = m.group(0)
        if s.startswith('"'):
            return s
        if s.startswith("/*") and not s.endswith("*/"):
            write_log("Warning", f"Unterminated block comment at offset {m.start()}")
        return _NOT_NEWLINE_RE.sub(" ", s)

    return _COMMENT_RE.sub(_blank, text)


# ----------------------------------------------------
# LEXER SETUP
# ----------------------------------------------------

tokens = (
    'LBRACE', 'RBRACE', 'LPAREN', 'RPAREN', 'COMMA', 'SEMI',
    'STRING', 'NUMBER', 'IDENT',
)

t_LBRACE = r'\{'
t_RBRACE = r'\}'
t_LPAREN = r'\('
t_RPAREN = r'\)'
t_COMMA = r','
t_SEMI = r';'

t_ignore = ' \t\r\f\v'

_PUNCT_TYPES = {'LBRACE', 'RBRACE', 'LPAREN', 'RPAREN', 'COMMA', 'SEMI'}

_ESCAPE_RE = re.compile(r'\\([\s\S])')


def t_STRING(t):
    r'"(?:[^"\\]|\\[\s\S])*"'
    t.value = _ESCAPE_RE.sub(r'\1', t.value[1:-1])
    t.lexer.lineno += t.value.count("\n")
    return t


def t_NUMBER(t):
    r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?'
    t.value = float(t.value)
    return t


def t_IDENT(t):
    r'[A-Za-z_][A-Za-z0-9_\-]*'
    return t


def t_newline(t):
    r'\n+'
    t.lexer.lineno += len(t.value)


def t_error(t):
    t.type = UNKNOWN
    t.value = t.value[0]
    t.lexer.skip(1)
    return t


_lexer = lex.lex()


# ----------------------------------------------------
# PUBLIC API
# ----------------------------------------------------

def tokenize(text) -> List[Token]:
    """
    Convert .vr source text into a flat token list ending with an EOF token.
    """
    lexer = _lexer.clone()
    lexer.lineno = 1
    lexer.input(strip_comments(text))

    result = []
    while True:
        tok = lexer.token()
        if not tok:
            break
        if tok.type in _PUNCT_TYPES:
            result.append(Token(PUNCT, tok.value, tok.lexpos, tok.lineno))
        else:
            result.append(Token(tok.type, tok.value, tok.lexpos, tok.lineno))

    result.append(Token(EOF, None, len(text), lexer.lineno))
    return result
