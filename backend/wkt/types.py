from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Iterable, TypeAlias, Union

if TYPE_CHECKING:
    from wkt.config import ParseOptions


class Dimension(str, Enum):
    """
    Ordinate layout shared by every coordinate of one geometry.
    """

    XY = "XY"
    XYZ = "XYZ"
    XYM = "XYM"
    XYZM = "XYZM"

    @property
    def size(self) -> int:
        return len(self.value)

    @property
    def has_z(self) -> bool:
        return "Z" in self.value

    @property
    def has_m(self) -> bool:
        return "M" in self.value

    @property
    def tag(self) -> str:
        # The WKT marker written between keyword and body ("" for plain XY).
        return self.value[2:]

    @classmethod
    def from_tag(cls, tag: str) -> "Dimension | None":
        return _TAGS.get(tag.upper())

    @classmethod
    def from_size(cls, size: int) -> "Dimension":
        # Untagged 3-ordinate input is read as XYZ, which is what PostGIS does too.
        if size == 3:
            return cls.XYZ
        if size == 4:
            return cls.XYZM
        return cls.XY


_TAGS = {"Z": Dimension.XYZ, "M": Dimension.XYM, "ZM": Dimension.XYZM}


@dataclass(frozen=True)
class Coordinate:
    x: float
    y: float
    z: float | None = None
    m: float | None = None

    def __post_init__(self) -> None:
        for name in ("x", "y", "z", "m"):
            v = getattr(self, name)
            if v is None:
                if name in ("x", "y"):
                    raise ValueError(f"coordinate is missing its {name} ordinate")
                continue
            v = float(v)
            if not math.isfinite(v):
                raise ValueError(f"coordinate {name} ordinate must be finite, got {v!r}")
            object.__setattr__(self, name, v)

    @property
    def dimension(self) -> Dimension:
        if self.z is not None and self.m is not None:
            return Dimension.XYZM
        if self.z is not None:
            return Dimension.XYZ
        if self.m is not None:
            return Dimension.XYM
        return Dimension.XY

    def ordinates(self) -> tuple[float, ...]:
        return tuple(v for v in (self.x, self.y, self.z, self.m) if v is not None)

    @classmethod
    def from_ordinates(cls, values: Iterable[float], dim: Dimension) -> "Coordinate":
        vals = [float(v) for v in values]
        if len(vals) != dim.size:
            raise ValueError(f"{dim.value} coordinate needs {dim.size} ordinates, got {len(vals)}")
        x, y = vals[0], vals[1]
        z = vals[2] if dim.has_z else None
        if dim == Dimension.XYM:
            m = vals[2]
        elif dim == Dimension.XYZM:
            m = vals[3]
        else:
            m = None
        return cls(x=x, y=y, z=z, m=m)


Ring: TypeAlias = tuple[Coordinate, ...]


def _freeze_rings(rings) -> tuple[Ring, ...]:
    return tuple(tuple(r) for r in rings)


def _check_coords(geom_type: str, dim: Dimension, coords: Iterable[Coordinate]) -> None:
    # One ordinate layout per geometry; a tag that disagrees with the data would
    # serialize to text that reads back differently.
    for c in coords:
        if c.dimension != dim:
            raise ValueError(
                f"{geom_type} is {dim.value} but holds a {c.dimension.value} coordinate"
            )


def _check_rings(geom_type: str, dim: Dimension, rings: Iterable[Ring]) -> None:
    for r in rings:
        _check_coords(geom_type, dim, r)


def _check_members(geom_type: str, dim: Dimension, members: Iterable, *, skip_empty: bool = False) -> None:
    for g in members:
        if skip_empty and g.is_empty:
            continue
        if g.dim != dim:
            raise ValueError(f"{geom_type} is {dim.value} but holds a {g.dim.value} {g.geom_type}")


@dataclass(frozen=True)
class Point:
    coord: Coordinate | None = None
    dim: Dimension = Dimension.XY

    geom_type: ClassVar[str] = "POINT"

    def __post_init__(self) -> None:
        if self.coord is not None:
            _check_coords(self.geom_type, self.dim, (self.coord,))

    @property
    def is_empty(self) -> bool:
        return self.coord is None


@dataclass(frozen=True)
class LineString:
    coords: tuple[Coordinate, ...] = ()
    dim: Dimension = Dimension.XY

    geom_type: ClassVar[str] = "LINESTRING"

    def __post_init__(self) -> None:
        object.__setattr__(self, "coords", tuple(self.coords))
        _check_coords(self.geom_type, self.dim, self.coords)

    @property
    def is_empty(self) -> bool:
        return not self.coords


@dataclass(frozen=True)
class Polygon:
    """
    Exterior ring first, then holes. Closure and winding are not checked.
    """

    rings: tuple[Ring, ...] = ()
    dim: Dimension = Dimension.XY

    geom_type: ClassVar[str] = "POLYGON"

    def __post_init__(self) -> None:
        object.__setattr__(self, "rings", _freeze_rings(self.rings))
        _check_rings(self.geom_type, self.dim, self.rings)

    @property
    def is_empty(self) -> bool:
        return not self.rings


@dataclass(frozen=True)
class Triangle:
    rings: tuple[Ring, ...] = ()
    dim: Dimension = Dimension.XY

    geom_type: ClassVar[str] = "TRIANGLE"

    def __post_init__(self) -> None:
        object.__setattr__(self, "rings", _freeze_rings(self.rings))
        _check_rings(self.geom_type, self.dim, self.rings)

    @property
    def is_empty(self) -> bool:
        return not self.rings


@dataclass(frozen=True)
class PolyhedralSurface:
    polygons: tuple[Polygon, ...] = ()
    dim: Dimension = Dimension.XY

    geom_type: ClassVar[str] = "POLYHEDRALSURFACE"

    def __post_init__(self) -> None:
        object.__setattr__(self, "polygons", tuple(self.polygons))
        _check_members(self.geom_type, self.dim, self.polygons)

    @property
    def is_empty(self) -> bool:
        return not self.polygons


@dataclass(frozen=True)
class Tin:
    polygons: tuple[Polygon, ...] = ()
    dim: Dimension = Dimension.XY

    geom_type: ClassVar[str] = "TIN"

    def __post_init__(self) -> None:
        object.__setattr__(self, "polygons", tuple(self.polygons))
        _check_members(self.geom_type, self.dim, self.polygons)

    @property
    def is_empty(self) -> bool:
        return not self.polygons


@dataclass(frozen=True)
class MultiPoint:
    # Members may be empty points ("MULTIPOINT (EMPTY, (1 2))").
    points: tuple[Point, ...] = ()
    dim: Dimension = Dimension.XY

    geom_type: ClassVar[str] = "MULTIPOINT"

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))
        _check_members(self.geom_type, self.dim, self.points)

    @property
    def is_empty(self) -> bool:
        return not self.points


@dataclass(frozen=True)
class MultiLineString:
    lines: tuple[LineString, ...] = ()
    dim: Dimension = Dimension.XY

    geom_type: ClassVar[str] = "MULTILINESTRING"

    def __post_init__(self) -> None:
        object.__setattr__(self, "lines", tuple(self.lines))
        _check_members(self.geom_type, self.dim, self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines


@dataclass(frozen=True)
class MultiPolygon:
    polygons: tuple[Polygon, ...] = ()
    dim: Dimension = Dimension.XY

    geom_type: ClassVar[str] = "MULTIPOLYGON"

    def __post_init__(self) -> None:
        object.__setattr__(self, "polygons", tuple(self.polygons))
        _check_members(self.geom_type, self.dim, self.polygons)

    @property
    def is_empty(self) -> bool:
        return not self.polygons


@dataclass(frozen=True)
class GeometryCollection:
    # Members carry their own tag; empty members may have any dimension.
    geometries: tuple["Geometry", ...] = ()
    dim: Dimension = Dimension.XY

    geom_type: ClassVar[str] = "GEOMETRYCOLLECTION"

    def __post_init__(self) -> None:
        object.__setattr__(self, "geometries", tuple(self.geometries))
        _check_members(self.geom_type, self.dim, self.geometries, skip_empty=True)

    @property
    def is_empty(self) -> bool:
        return not self.geometries


Geometry: TypeAlias = Union[
    Point,
    LineString,
    Polygon,
    Triangle,
    PolyhedralSurface,
    Tin,
    MultiPoint,
    MultiLineString,
    MultiPolygon,
    GeometryCollection,
]

GEOMETRY_TYPES: tuple[type, ...] = (
    Point,
    LineString,
    Polygon,
    Triangle,
    PolyhedralSurface,
    Tin,
    MultiPoint,
    MultiLineString,
    MultiPolygon,
    GeometryCollection,
)


@dataclass(frozen=True)
class Wkt:
    """
    A complete WKT document: exactly one geometry.

    Build it with `Wkt.from_str(...)`; render it back with `str(wkt)`.
    """

    item: Geometry

    @classmethod
    def from_str(cls, text: str, options: "ParseOptions | None" = None) -> "Wkt":
        from wkt.parser import loads

        return cls(item=loads(text, options=options))

    def to_wkt(self) -> str:
        from wkt.serializer import dumps

        return dumps(self.item)

    def __str__(self) -> str:
        return self.to_wkt()
