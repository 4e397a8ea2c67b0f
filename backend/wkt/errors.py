from __future__ import annotations


END_OF_INPUT = "end of input"


class WktError(ValueError):
    """
    Base class for everything the WKT reader raises on bad input.

    `position` is a 0-based character offset into the parsed text (None when the
    failure is not tied to a single place, e.g. an empty document).
    """

    kind = "wkt"

    def __init__(self, message: str, *, position: int | None = None):
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at position {self.position})"


class LexicalError(WktError):
    kind = "lexical"


class WktSyntaxError(WktError):
    """
    A token showed up where something else was required.
    """

    kind = "syntax"

    def __init__(self, expected: str, found: str, *, position: int | None = None):
        super().__init__(f"expected {expected}, found {found}", position=position)
        self.expected = expected
        self.found = found


class DimensionError(WktError):
    kind = "dimension"


class ArityError(WktError):
    kind = "arity"


class NestingError(WktError):
    kind = "nesting"
