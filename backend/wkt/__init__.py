"""
Well-Known Text reader and writer.

    >>> from wkt import loads, dumps
    >>> dumps(loads("point z (1 2 3)"))
    'POINT Z (1 2 3)'

By default the whole input must be one geometry: anything after it is a
`WktSyntaxError`. Older readers stopped at the first complete geometry and so
accepted text such as ``GEOMETRYCOLLECTION (POINT (8 4)))``; pass
``ParseOptions(allow_trailing=True)`` (or set ``WKT_ALLOW_TRAILING=1``) for that
behaviour.

Shapely conversion lives in `wkt.interop` and is imported only on demand.
"""

from wkt.config import ParseOptions, clear_options_cache, default_options
from wkt.errors import (
    ArityError,
    DimensionError,
    LexicalError,
    NestingError,
    WktError,
    WktSyntaxError,
)
from wkt.parser import loads
from wkt.serializer import dumps, format_number
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
    Tin,
    Triangle,
    Wkt,
)

__all__ = [
    "ArityError",
    "Coordinate",
    "Dimension",
    "DimensionError",
    "Geometry",
    "GeometryCollection",
    "LexicalError",
    "LineString",
    "MultiLineString",
    "MultiPoint",
    "MultiPolygon",
    "NestingError",
    "ParseOptions",
    "Point",
    "Polygon",
    "PolyhedralSurface",
    "Tin",
    "Triangle",
    "Wkt",
    "WktError",
    "WktSyntaxError",
    "clear_options_cache",
    "default_options",
    "dumps",
    "format_number",
    "loads",
]
