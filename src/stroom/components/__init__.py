# stroom.components
# Stages that read one conduit into another, the terminal fold, and the
# source generators.

from .filter import filter_
from .io import from_text_lines, from_text_words
from .map import map_values
from .reduce import reduce_
from .sources import values, integer_range, from_sequence

__all__ = [
    "filter_",
    "map_values",
    "reduce_",
    "values",
    "integer_range",
    "from_sequence",
    "from_text_lines",
    "from_text_words",
]
