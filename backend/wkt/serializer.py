from __future__ import annotations

import math
from decimal import Decimal
from typing import Callable, Iterable

from wkt.types import (
    GEOMETRY_TYPES,
    Coordinate,
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
    Wkt,
)


def format_number(v: float) -> str:
    """
    Shortest decimal text that reads back as the same float.

    Always positional (no exponent), so the output parses even with exponents
    disabled. Integral values drop the fraction: 10.0 -> "10".
    """
    if v == 0:
        return "-0" if math.copysign(1.0, v) < 0 else "0"
    # repr() is the shortest round-tripping form; Decimal only re-spells it positionally.
    text = format(Decimal(repr(float(v))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _coord(c: Coordinate) -> str:
    return " ".join(format_number(v) for v in c.ordinates())


def _seq(items: Iterable[str]) -> str:
    parts = list(items)
    if not parts:
        return "EMPTY"
    return "(" + ", ".join(parts) + ")"


def _coords(coords: Iterable[Coordinate]) -> str:
    return _seq(_coord(c) for c in coords)


def _rings(rings: Iterable[Ring]) -> str:
    return _seq(_coords(r) for r in rings)


def _point_body(p: Point) -> str:
    if p.coord is None:
        return "EMPTY"
    return f"({_coord(p.coord)})"


_BODY_WRITERS: dict[str, Callable[..., str]] = {
    Point.geom_type: _point_body,
    LineString.geom_type: lambda g: _coords(g.coords),
    Polygon.geom_type: lambda g: _rings(g.rings),
    Triangle.geom_type: lambda g: _rings(g.rings),
    PolyhedralSurface.geom_type: lambda g: _seq(_rings(p.rings) for p in g.polygons),
    Tin.geom_type: lambda g: _seq(_rings(p.rings) for p in g.polygons),
    MultiPoint.geom_type: lambda g: _seq(_point_body(p) for p in g.points),
    MultiLineString.geom_type: lambda g: _seq(_coords(ls.coords) for ls in g.lines),
    MultiPolygon.geom_type: lambda g: _seq(_rings(p.rings) for p in g.polygons),
    GeometryCollection.geom_type: lambda g: _seq(dumps(m) for m in g.geometries),
}


def dumps(geom: Geometry | Wkt) -> str:
    """
    Canonical WKT for a geometry: upper-case keyword, dimension tag when not XY,
    then `EMPTY` or the parenthesised body with ", " between siblings.
    """
    if isinstance(geom, Wkt):
        geom = geom.item
    if not isinstance(geom, GEOMETRY_TYPES):
        raise TypeError(f"not a WKT geometry: {type(geom).__name__}")
    writer = _BODY_WRITERS[geom.geom_type]
    head = geom.geom_type
    if geom.dim.tag:
        head = f"{head} {geom.dim.tag}"
    return f"{head} {writer(geom)}"
