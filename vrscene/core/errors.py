# errors.py
#
# Error taxonomy for the .vr parser.
#
#   VrParseError          base, never raised directly
#   VrSyntaxError         token of the wrong kind / value
#   GeometryError         malformed primitive data
#   NestingTooDeepError   object recursion bound exceeded


class VrParseError(Exception):
    def __init__(self, value, line=None):
        super().__init__(value)
        self.value = value
        self.line = line

    def __str__(self):
        if self.line is not None:
            return f"line {self.line}: {self.value}"
        return str(self.value)


class VrSyntaxError(VrParseError):
    """Raised by the token cursor when expect() sees the wrong token."""

    def __init__(self, expected, actual, line=None):
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected {expected}, got {actual}", line)


class GeometryError(VrParseError):
    pass


class NestingTooDeepError(VrParseError):
    def __init__(self, depth, limit, line=None):
        self.depth = depth
        self.limit = limit
        super().__init__(f"object nesting too deep ({depth} > {limit})", line)
