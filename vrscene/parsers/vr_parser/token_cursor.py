# token_cursor.py
#
# Positional reader over a token list. Every grammar rule reads tokens
# through this class and nothing else.

from vrscene.core.errors import VrSyntaxError
from vrscene.parsers.vr_parser.lexer import EOF, IDENT, Token


def _matches(tok, kind, value):
    if tok.kind != kind:
        return False
    if value is None:
        return True
    if kind == IDENT:
        return str(tok.value).lower() == str(value).lower()
    return tok.value == value


def _describe_expected(kind, value):
    if value is None:
        return kind
    return f"{kind} {value!r}"


class TokenCursor:
    def __init__(self, tokens):
        tokens = list(tokens)
        if not tokens or tokens[-1].kind != EOF:
            last = tokens[-1] if tokens else None
            tokens.append(Token(EOF, None,
                                last.pos + 1 if last else 0,
                                last.line if last else 1))
        self.tokens = tokens
        self.index = 0

    def peek(self, offset=0):
        i = self.index + offset
        if i >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[i]

    def next(self):
        tok = self.tokens[self.index]
        if tok.kind != EOF:
            self.index += 1
        return tok

    def at_end(self):
        return self.tokens[self.index].kind == EOF

    def check(self, kind, value=None, offset=0):
        """True when the token at offset matches, without consuming anything."""
        return _matches(self.peek(offset), kind, value)

    def accept(self, kind, value=None):
        tok = self.peek()
        if _matches(tok, kind, value):
            return self.next()
        return None

    def expect(self, kind, value=None):
        tok = self.peek()
        if _matches(tok, kind, value):
            return self.next()
        raise VrSyntaxError(_describe_expected(kind, value), tok.describe(), tok.line)

    def mark(self):
        return self.index

    def reset(self, mark):
        self.index = mark

    @property
    def line(self):
        return self.peek().line
