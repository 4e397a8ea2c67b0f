from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, TypeVar

from wkt.config import ParseOptions, default_options
from wkt.errors import (
    END_OF_INPUT,
    ArityError,
    DimensionError,
    NestingError,
    WktError,
    WktSyntaxError,
)
from wkt.tokenizer import TokenKind, TokenStream, token_stream
from wkt.types import (
    Coordinate,
    Dimension,
    Geometry,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    PolyhedralSurface,
    Ring,
    Tin,
    Triangle,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_GEOMETRY_KEYWORDS = (
    "POINT",
    "LINESTRING",
    "POLYGON",
    "MULTIPOINT",
    "MULTILINESTRING",
    "MULTIPOLYGON",
    "GEOMETRYCOLLECTION",
    "POLYHEDRALSURFACE",
    "TRIANGLE",
    "TIN",
)


@dataclass
class _DimState:
    """
    Dimension of the geometry being parsed.

    `dim` stays None only while an untagged geometry waits for its first coordinate
    (infer_dimensions mode).
    """

    dim: Dimension | None

    def resolved(self) -> Dimension:
        return self.dim or Dimension.XY


def loads(text: str, options: ParseOptions | None = None) -> Geometry:
    """
    Parse one WKT geometry.

    Raises a `WktError` subclass describing the first problem found; nothing is
    returned for partially valid input.
    """
    if not isinstance(text, str):
        raise TypeError(f"WKT input must be a str, got {type(text).__name__}")
    opts = options if options is not None else default_options()
    try:
        try:
            return _Parser(text, opts).parse_document()
        except RecursionError:
            # Only reachable when the interpreter limit was lowered below what max_depth needs.
            raise NestingError(
                f"geometry nesting exceeds the interpreter recursion limit (max_depth={opts.max_depth})"
            ) from None
    except WktError as e:
        logger.debug("rejected WKT input: kind=%s position=%s message=%s", e.kind, e.position, e.message)
        raise


class _Parser:
    def __init__(self, text: str, options: ParseOptions):
        self.options = options
        self.tokens: TokenStream = token_stream(
            text,
            allow_exponent=options.allow_exponent,
            allow_plus_sign=options.allow_plus_sign,
        )

    def parse_document(self) -> Geometry:
        geom = self.geometry(depth=1)
        if not self.options.allow_trailing and not self.tokens.at_end():
            self._fail(END_OF_INPUT)
        return geom

    # --- token helpers -------------------------------------------------

    def _fail(self, expected: str):
        raise WktSyntaxError(expected, self.tokens.found(), position=self.tokens.position())

    def _peek_word(self) -> str | None:
        tok = self.tokens.peek()
        if tok is not None and tok.kind == TokenKind.word:
            return tok.upper()
        return None

    def _peek_kind(self) -> TokenKind | None:
        tok = self.tokens.peek()
        return tok.kind if tok is not None else None

    def _expect(self, kind: TokenKind, expected: str) -> None:
        if self._peek_kind() != kind:
            self._fail(expected)
        self.tokens.advance()

    def _take_empty(self) -> bool:
        if self._peek_word() == "EMPTY":
            self.tokens.advance()
            return True
        return False

    def _body(self, element: Callable[[], T]) -> list[T]:
        """
        Body := 'EMPTY' | '(' element (',' element)* ')'
        """
        if self._take_empty():
            return []
        self._expect(TokenKind.lparen, "'(' or 'EMPTY'")
        items = [element()]
        while self._peek_kind() == TokenKind.comma:
            self.tokens.advance()
            items.append(element())
        self._expect(TokenKind.rparen, "',' or ')'")
        return items

    # --- dispatch ------------------------------------------------------

    def geometry(self, depth: int) -> Geometry:
        keyword = self._peek_word()
        if keyword not in _GEOMETRY_KEYWORDS:
            self._fail("geometry type keyword")
        if depth > self.options.max_depth:
            raise NestingError(
                f"geometry nesting deeper than {self.options.max_depth} levels",
                position=self.tokens.position(),
            )
        self.tokens.advance()

        state = self._dimension_tag()
        if keyword == "POINT":
            return self.point(state)
        if keyword == "LINESTRING":
            return LineString(coords=self._coords(state), dim=state.resolved())
        if keyword == "POLYGON":
            rings = self._rings(state)
            return Polygon(rings=rings, dim=state.resolved())
        if keyword == "TRIANGLE":
            rings = self._rings(state)
            return Triangle(rings=rings, dim=state.resolved())
        if keyword == "POLYHEDRALSURFACE":
            polygons = self._patches(state)
            return PolyhedralSurface(polygons=polygons, dim=state.resolved())
        if keyword == "TIN":
            polygons = self._patches(state)
            return Tin(polygons=polygons, dim=state.resolved())
        if keyword == "MULTIPOINT":
            points = self._body(lambda: self._multipoint_member(state))
            return MultiPoint(points=_redim(points, state), dim=state.resolved())
        if keyword == "MULTILINESTRING":
            lines = self._body(lambda: self._coords(state))
            d = state.resolved()
            return MultiLineString(lines=[LineString(coords=c, dim=d) for c in lines], dim=d)
        if keyword == "MULTIPOLYGON":
            polygons = self._body(lambda: self._rings(state))
            d = state.resolved()
            return MultiPolygon(polygons=[Polygon(rings=r, dim=d) for r in polygons], dim=d)
        return self.collection(state, depth)

    def _dimension_tag(self) -> _DimState:
        word = self._peek_word()
        if word is not None:
            dim = Dimension.from_tag(word)
            if dim is not None:
                self.tokens.advance()
                return _DimState(dim=dim)
        if self.options.infer_dimensions:
            return _DimState(dim=None)
        return _DimState(dim=Dimension.XY)

    # --- coordinates ---------------------------------------------------

    def coordinate(self, state: _DimState) -> Coordinate:
        start = self.tokens.position()
        values: list[float] = []
        while self._peek_kind() == TokenKind.number:
            tok = self.tokens.advance()
            v = float(tok.text)
            if not math.isfinite(v):
                raise WktSyntaxError("finite number", tok.describe(), position=tok.position)
            values.append(v)

        if not values:
            self._fail("coordinate")
        if len(values) < 2 or len(values) > 4:
            raise ArityError(
                f"coordinate has {len(values)} ordinate(s), expected 2 to 4",
                position=start,
            )

        if state.dim is None:
            state.dim = Dimension.from_size(len(values))
        elif len(values) != state.dim.size:
            raise DimensionError(
                f"coordinate has {len(values)} ordinates but the geometry is "
                f"{state.dim.value} ({state.dim.size} ordinates)",
                position=start,
            )
        return Coordinate.from_ordinates(values, state.dim)

    def _coords(self, state: _DimState) -> tuple[Coordinate, ...]:
        return tuple(self._body(lambda: self.coordinate(state)))

    def _rings(self, state: _DimState) -> tuple[Ring, ...]:
        return tuple(self._body(lambda: self._coords(state)))

    def _patches(self, state: _DimState) -> list[Polygon]:
        rings = self._body(lambda: self._rings(state))
        d = state.resolved()
        return [Polygon(rings=r, dim=d) for r in rings]

    # --- per-type bodies -----------------------------------------------

    def point(self, state: _DimState) -> Point:
        if self._take_empty():
            return Point(coord=None, dim=state.resolved())
        self._expect(TokenKind.lparen, "'(' or 'EMPTY'")
        coord = self.coordinate(state)
        self._expect(TokenKind.rparen, "')'")
        return Point(coord=coord, dim=state.resolved())

    def _multipoint_member(self, state: _DimState) -> Point:
        # Accepts "EMPTY", "(x y)" and the bare "x y" form.
        if self._take_empty():
            return Point(coord=None)
        if self._peek_kind() == TokenKind.lparen:
            self.tokens.advance()
            coord = self.coordinate(state)
            self._expect(TokenKind.rparen, "')'")
            return Point(coord=coord, dim=state.resolved())
        if self._peek_kind() != TokenKind.number:
            self._fail("point, '(' or 'EMPTY'")
        coord = self.coordinate(state)
        return Point(coord=coord, dim=state.resolved())

    def collection(self, state: _DimState, depth: int) -> GeometryCollection:
        def member() -> Geometry:
            position = self.tokens.position()
            geom = self.geometry(depth + 1)
            if geom.is_empty:
                return geom
            if state.dim is None:
                state.dim = geom.dim
            elif geom.dim != state.dim:
                raise DimensionError(
                    f"{geom.geom_type} member is {geom.dim.value} but the collection is {state.dim.value}",
                    position=position,
                )
            return geom

        members = self._body(member)
        return GeometryCollection(geometries=members, dim=state.resolved())


def _redim(points: list[Point], state: _DimState) -> list[Point]:
    # Empty members are built before an inferred dimension is known; stamp the final one.
    d = state.resolved()
    return [Point(coord=p.coord, dim=d) for p in points]
