from __future__ import annotations

from shapely import geometry as sg
from shapely.geometry.base import BaseGeometry

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
    Wkt,
)


def to_shapely(geom: Geometry | Wkt) -> BaseGeometry:
    """
    Convert to the matching shapely geometry.

    Lossy where shapely has no equivalent type: TRIANGLE becomes a Polygon and
    POLYHEDRALSURFACE / TIN become a MultiPolygon. Measures have no place in a
    shapely geometry, so XYM / XYZM input is rejected rather than truncated.
    """
    if isinstance(geom, Wkt):
        geom = geom.item
    if geom.dim.has_m:
        raise ValueError(f"shapely geometries cannot carry measures ({geom.dim.value} {geom.geom_type})")

    if isinstance(geom, Point):
        if geom.coord is None:
            return sg.Point()
        return sg.Point(_xyz(geom.coord))
    if isinstance(geom, LineString):
        return sg.LineString([_xyz(c) for c in geom.coords])
    if isinstance(geom, (Polygon, Triangle)):
        return _polygon(geom.rings)
    if isinstance(geom, (PolyhedralSurface, Tin, MultiPolygon)):
        return sg.MultiPolygon([_polygon(p.rings) for p in geom.polygons])
    if isinstance(geom, MultiPoint):
        if any(p.coord is None for p in geom.points):
            raise ValueError("shapely MultiPoint cannot hold empty points")
        return sg.MultiPoint([_xyz(p.coord) for p in geom.points])
    if isinstance(geom, MultiLineString):
        return sg.MultiLineString([[_xyz(c) for c in ls.coords] for ls in geom.lines])
    if isinstance(geom, GeometryCollection):
        return sg.GeometryCollection([to_shapely(g) for g in geom.geometries])
    raise TypeError(f"not a WKT geometry: {type(geom).__name__}")


def from_shapely(geom: BaseGeometry) -> Geometry:
    dim = Dimension.XYZ if geom.has_z else Dimension.XY
    kind = geom.geom_type

    if kind == "Point":
        if geom.is_empty:
            return Point(coord=None, dim=dim)
        return Point(coord=_coord(geom.coords[0], dim), dim=dim)
    if kind in ("LineString", "LinearRing"):
        return LineString(coords=_coords(geom.coords, dim), dim=dim)
    if kind == "Polygon":
        return Polygon(rings=_rings(geom, dim), dim=dim)
    if kind == "MultiPoint":
        return MultiPoint(
            points=[Point(coord=_coord(p.coords[0], dim), dim=dim) for p in geom.geoms],
            dim=dim,
        )
    if kind == "MultiLineString":
        return MultiLineString(
            lines=[LineString(coords=_coords(ls.coords, dim), dim=dim) for ls in geom.geoms],
            dim=dim,
        )
    if kind == "MultiPolygon":
        return MultiPolygon(
            polygons=[Polygon(rings=_rings(p, dim), dim=dim) for p in geom.geoms],
            dim=dim,
        )
    if kind == "GeometryCollection":
        members = [from_shapely(g) for g in geom.geoms]
        # shapely reports has_z if any member has z; the collection follows its members.
        dims = {g.dim for g in members if not g.is_empty}
        return GeometryCollection(geometries=members, dim=dims.pop() if len(dims) == 1 else Dimension.XY)
    raise TypeError(f"unsupported shapely geometry type: {kind}")


def _xyz(c: Coordinate) -> tuple[float, ...]:
    if c.z is None:
        return (c.x, c.y)
    return (c.x, c.y, c.z)


def _polygon(rings: tuple[Ring, ...]) -> sg.Polygon:
    if not rings:
        return sg.Polygon()
    shell = [_xyz(c) for c in rings[0]]
    holes = [[_xyz(c) for c in r] for r in rings[1:]]
    return sg.Polygon(shell, holes=holes or None)


def _coord(values, dim: Dimension) -> Coordinate:
    return Coordinate.from_ordinates(tuple(values)[: dim.size], dim)


def _coords(seq, dim: Dimension) -> tuple[Coordinate, ...]:
    return tuple(_coord(v, dim) for v in seq)


def _rings(poly, dim: Dimension) -> tuple[Ring, ...]:
    if poly.is_empty:
        return ()
    return (_coords(poly.exterior.coords, dim), *[_coords(r.coords, dim) for r in poly.interiors])
