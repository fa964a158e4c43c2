#!/usr/bin/env python
"""cluster: multidimensional scaling of large data sets
"""

__all__ = [
    "alignment",
    "divide_conquer_mds",
    "eigen",
    "fast_mds",
    "goodness_of_fit",
    "metric_scaling",
    "partition",
    "procrustes",
    "settings",
]

__copyright__ = "Copyright 2024-date, The bigmds Project"
__license__ = "BSD-3"
