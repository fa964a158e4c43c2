#!/usr/bin/env python
"""Combining the eigenvalues of MDS solutions of separate partitions."""

import numpy

__copyright__ = "Copyright 2024-date, The bigmds Project"
__license__ = "BSD-3"


def _as_eigen_vectors(eigens):
    eigens = [numpy.asarray(eigen, dtype=float) for eigen in eigens]
    if not eigens:
        raise ValueError("no eigenvalues to combine")
    lengths = {len(eigen) for eigen in eigens}
    if len(lengths) != 1:
        raise ValueError(f"eigenvalue vectors differ in length {sorted(lengths)}")
    return eigens


def mean_eigenvalues(eigens):
    """unweighted mean of eigenvalue vectors

    used by fast MDS, whose partition eigenvalues have already been divided
    by the partition size
    """
    eigens = _as_eigen_vectors(eigens)
    total = numpy.zeros(len(eigens[0]))
    for eigen in eigens:
        total += eigen
    return total / len(eigens)


def weighted_mean_eigenvalues(eigens, sizes):
    """partition size weighted mean of eigenvalue vectors

    sum(n_j * eigen_j) / sum(n_j), used by divide and conquer MDS on the
    eigenvalues as returned by classical MDS
    """
    eigens = _as_eigen_vectors(eigens)
    if len(sizes) != len(eigens):
        raise ValueError(f"{len(sizes)} sizes for {len(eigens)} eigenvalue vectors")

    total = numpy.zeros(len(eigens[0]))
    for size, eigen in zip(sizes, eigens):
        total += size * eigen
    return total / sum(sizes)
