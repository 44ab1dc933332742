from .normalize import normalize_instant, normalize_coordinate, normalize_reference
from .assemble import assemble, assemble_many
from .collection import filter_and_sort

__all__ = [
    "normalize_instant",
    "normalize_coordinate",
    "normalize_reference",
    "assemble",
    "assemble_many",
    "filter_and_sort",
]
