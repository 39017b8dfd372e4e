from .fundamental import stddev, average
from .range import Range, Box, MinMax
from .mcmc import SliceSampler

__all__ = [
    "stddev",
    "average",
    "Range",
    "Box",
    "MinMax",
    "SliceSampler",
]
