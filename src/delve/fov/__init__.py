from .visibility import LineOfSightVisibility, TransparencyMap, VisibilityService, bresenham_line

__all__ = [
    "LineOfSightVisibility",
    "TransparencyMap",
    "VisibilityService",
    "bresenham_line",
]
