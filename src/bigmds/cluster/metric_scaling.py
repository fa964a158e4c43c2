#!/usr/bin/env python
"""Classical (metric) multidimensional scaling, also known as principal
coordinates analysis.

Calculations performed as described in:

Principles of Multivariate analysis: A User's Perspective. W.J. Krzanowski
Oxford University Press, 2000. p106.

Note: The signs of individual axes are not determined by the decomposition
and may differ from other implementations (e.g. R's cmdscale). They are
reflections and do not affect distances between points.
"""

from collections import namedtuple

import numba
import numpy

from numpy import argsort, isfinite, newaxis, sqrt
from numpy.linalg import LinAlgError, eigh

from bigmds.cluster.partition import InvalidConfigurationError

__copyright__ = "Copyright 2024-date, The bigmds Project"
__license__ = "BSD-3"


MDSResult = namedtuple("MDSResult", ["points", "eigen"])


class MDSNumericalError(ArithmeticError):
    """the eigendecomposition of a configuration could not be computed"""


@numba.jit(cache=True)
def squared_distances(coords):  # pragma: no cover
    """returns the matrix of squared Euclidean distances between rows"""
    num = coords.shape[0]
    result = numpy.zeros((num, num))
    for i in range(num):
        for j in range(i + 1, num):
            total = 0.0
            for k in range(coords.shape[1]):
                diff = coords[i, k] - coords[j, k]
                total += diff * diff
            result[i, j] = total
            result[j, i] = total
    return result


def make_E_matrix(dist_matrix, squared=False):
    """takes a distance matrix (dissimilarity matrix) and returns an E matrix

    squares (unless already squared) and divides by -2 each element
    """
    if squared:
        return dist_matrix / -2.0
    return (dist_matrix * dist_matrix) / -2.0


def make_F_matrix(E_matrix):
    """takes an E matrix and returns an F matrix

    for each element in matrix subtract mean of corresponding row and
    column and add the mean of all elements in the matrix
    """
    row_means = E_matrix.mean(axis=1)[:, newaxis]
    column_means = E_matrix.mean(axis=0)[newaxis, :]
    matrix_mean = E_matrix.mean()
    return E_matrix - row_means - column_means + matrix_mean


def run_eig(F_matrix):
    """returns eigenvalues and eigenvectors sorted by decreasing eigenvalue

    eigenvectors are the columns of the returned matrix
    """
    if not isfinite(F_matrix).all():
        raise MDSNumericalError("matrix contains non-finite values")

    try:
        eigvals, eigvecs = eigh(F_matrix)
    except LinAlgError as err:
        raise MDSNumericalError(f"eigendecomposition failed: {err}") from err

    order = argsort(eigvals)[::-1]
    return eigvals[order], eigvecs[:, order]


def get_principal_coordinates(eigvals, eigvecs):
    """converts eigvals and eigvecs to point matrix

    each column of eigvecs scaled by the square root of the absolute
    value of its eigenvalue
    """
    return eigvecs * sqrt(abs(eigvals))[newaxis, :]


def principal_coordinates_analysis(distance_matrix, squared=False, num_axes=None):
    """Takes a distance matrix and returns principal coordinate results

    Parameters
    ----------
    distance_matrix
        square matrix of distances between points
    squared
        whether the distances are already squared
    num_axes
        number of leading axes to return, all if None

    Returns
    -------
    point_matrix
        each row is a point, columns are the axes
    eigvals
        sorted in decreasing order, indicating the amount of the variation
        the corresponding axis accounts for
    """
    distance_matrix = numpy.asarray(distance_matrix, dtype=float)
    F_matrix = make_F_matrix(make_E_matrix(distance_matrix, squared=squared))
    eigvals, eigvecs = run_eig(F_matrix)
    eigvals = eigvals[:num_axes]
    point_matrix = get_principal_coordinates(eigvals, eigvecs[:, :num_axes])
    return point_matrix, eigvals


def classical_mds(x, r):
    """classical MDS of the Euclidean distances between the rows of x

    Parameters
    ----------
    x
        n x k matrix, rows are individuals
    r
        number of principal coordinates to return, must not exceed n

    Returns
    -------
    MDSResult with points (n x r) and the largest r eigenvalues of the
    double centred squared distance matrix, in decreasing order
    """
    x = numpy.ascontiguousarray(x, dtype=float)
    if x.ndim != 2:
        raise InvalidConfigurationError(f"x must be 2D, not {x.ndim}D")

    num_rows = x.shape[0]
    if not 1 <= r <= num_rows:
        raise InvalidConfigurationError(
            f"r={r} must be between 1 and the number of rows ({num_rows})"
        )

    if not isfinite(x).all():
        raise MDSNumericalError("x contains non-finite values")

    points, eigvals = principal_coordinates_analysis(
        squared_distances(x), squared=True, num_axes=r
    )
    return MDSResult(points=points, eigen=eigvals)
