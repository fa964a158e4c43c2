#!/usr/bin/env python
"""Goodness of fit of Multidimensional Scaling

Implements several functions that measure the degree of correspondence
between an MDS and its coordinates and the original input distances.

See for example: * Johnson & Wichern (2002): Applied Multivariate
Statistical Analysis
"""

import numpy

from bigmds.cluster.metric_scaling import squared_distances

__copyright__ = "Copyright 2024-date, The bigmds Project"
__license__ = "BSD-3"


def pairwise_distances(coords):
    """full symmetric matrix of Euclidean distances between rows of coords"""
    coords = numpy.ascontiguousarray(coords, dtype=float)
    return numpy.sqrt(squared_distances(coords))


class Stress:
    """Degree of correspondence between input distances and an MDS

    Stress measures the goodness of fit or degree of correspondence
    between distances implied by an MDS mapping and the original
    distances. There are many different variants of Stress; Kruskal's
    Stress or Stress-1 probably being the most popular one.
    """

    def __init__(self, orig_distmat, mds_coords, apply_scaling=True):
        """
        Parameters
        ----------
        orig_distmat
            original distance matrix, square
        mds_coords
            mds coordinates, one row per row of orig_distmat
        apply_scaling
            scale distances implied by an MDS mapping to match
            those of original distance matrix, using the ratio of maxima
        """
        orig_distmat = numpy.asarray(orig_distmat, dtype=float)
        mds_coords = numpy.asarray(mds_coords, dtype=float)
        if orig_distmat.ndim != 2 or orig_distmat.shape[0] != orig_distmat.shape[1]:
            raise ValueError("orig_distmat is not a square 2D array")
        if mds_coords.ndim != 2:
            raise ValueError("mds_coords is not a 2D array")
        if orig_distmat.shape[0] != mds_coords.shape[0]:
            raise ValueError(
                "orig_distmat and mds_coords do not have the same number of rows"
            )

        self._orig_distmat = orig_distmat
        self._reproduced_distmat = pairwise_distances(mds_coords)
        if apply_scaling:
            scale = self._reproduced_distmat.max() / self._orig_distmat.max()
            if scale != 1.0:
                self._reproduced_distmat = self._reproduced_distmat / scale

    def calc_kruskal_stress(self):
        """Calculate Kruskal's Stress AKA Stress-1

        Kruskal's Stress or Stress-1 is defined as:
        sqrt( SUM_ij (d'(i,j) - d(i,j))^2 / SUM_ij d(i,j)^2 for i<j

        where d(i,j) is the distance between i and j in the original distance
        matrix, and d'(i,j) the distance implied by an mds mapping.

        According to Johnson & Wichern (2002), citing Kruskal (1964), the
        informal interpretation of stress1 is:

        Stress [%]  Goodness of fit
        20          Poor
        10          Fair
        5           Good
        2.5         Excellent
        0           Perfect
        """
        numerator = numpy.sum((self._reproduced_distmat - self._orig_distmat) ** 2)
        denominator = numpy.sum(self._orig_distmat**2)
        return numpy.sqrt(numerator / denominator)

    def calc_sstress(self):
        """Calculate SStress

        SStress (Takane, 1977) is defined as
        sqrt( SUM_ij (d'(i,j)^2 - d(i,j)^2)^2 / SUM_ij d(i,j)^4 for i<j

        Value of SStress is always between 0 and 1. Values less then
        0.1 mean good representation.
        """
        numerator = self._reproduced_distmat**2 - self._orig_distmat**2
        numerator = numpy.sum(numerator**2)
        denominator = numpy.sum(self._orig_distmat**4)
        return numpy.sqrt(numerator / denominator)


def sampled_stress(x, points, num, rng=None, apply_scaling=False):
    """Kruskal stress between the rows of x and of points for a random
    subset of num rows

    Parameters
    ----------
    x
        n x k input data
    points
        n x r MDS configuration of x, in the same row order
    num
        number of rows to compare, all rows if num >= n
    rng
        numpy Generator or seed
    apply_scaling
        as per Stress
    """
    x = numpy.asarray(x, dtype=float)
    points = numpy.asarray(points, dtype=float)
    if x.shape[0] != points.shape[0]:
        raise ValueError("x and points do not have the same number of rows")

    rng = numpy.random.default_rng(rng)
    n = x.shape[0]
    rows = numpy.arange(n) if num >= n else rng.choice(n, size=num, replace=False)
    stress = Stress(pairwise_distances(x[rows]), points[rows], apply_scaling=apply_scaling)
    return stress.calc_kruskal_stress()
