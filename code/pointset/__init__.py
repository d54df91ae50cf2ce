from ._version import __version__
from .geometry import Axis, Point, Rect
from .index import OrderedPointSet, PointSet, SpatialPointSet, create_point_set
from .io import PointsFileError, load_points, parse_points, write_points

__all__ = (
    "__version__",
    "Axis",
    "Point",
    "Rect",
    "PointSet",
    "OrderedPointSet",
    "SpatialPointSet",
    "create_point_set",
    "PointsFileError",
    "load_points",
    "parse_points",
    "write_points",
)
