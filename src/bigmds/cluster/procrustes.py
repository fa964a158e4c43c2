#!/usr/bin/env python
"""Procrustes analysis and alignment of MDS configurations.

``procrustes`` measures how similar two configurations of the same points
are. ``align`` finds the orthogonal transform that best superimposes anchor
points of one configuration onto the same anchors in a reference
configuration and applies it to the whole of the first configuration.

See for example:
Principles of Multivariate analysis, by Krzanowski
"""

from numpy import (
    any,
    append,
    array,
    dot,
    mean,
    shape,
    sqrt,
    square,
    sum,
    trace,
    transpose,
    zeros,
)
from numpy.linalg import svd

__copyright__ = "Copyright 2024-date, The bigmds Project"
__license__ = "BSD-3"


def procrustes(data1, data2):
    """Procrustes analysis, a similarity test for two data sets.

    Each input matrix is a set of points or vectors (the rows of the matrix)
    The dimension of the space is the number of columns of each matrix.
    Given two identically sized matrices, procrustes standardizes both
    such that:
    - trace(AA') = 1  (A' is the transpose, and the product is
    a standard matrix product).
    - Both sets of points are centered around the origin

    Procrustes then applies the optimal transform to the second matrix
    (including scaling/dilation, rotations, and reflections) to minimize
    M^2 = sum(square(mtx1 - mtx2)), or the sum of the squares of the pointwise
    differences between the two input datasets

    Parameters
    ----------
    data1
        matrix, n rows represent points in k (columns) space. data1 is the
        reference data, after it is standardised, the data from data2 will
        be transformed to fit the pattern in data1
    data2
        n rows of data in k space to be fit to data1. Must be the same
        shape (numrows, numcols) as data1. Both must have >1 unique points

    Returns
    -------
    mtx1
        a standardized version of data1
    mtx2
        the orientation of data2 that best fits data1. Centered, but not
        necessarily trace(mtx2*mtx2') = 1
    disparity
        M^2 defined above

    Notes
    -----
    The disparity does not depend on the order of the input matrices, but
    the output matrices will, as only the first output matrix is guaranteed
    to be scaled such that trace(AA') = 1.
    """
    SMALL_NUM = 1e-6  # used to check for zero values in added dimension

    num_rows, num_cols = shape(data1)
    if (num_rows, num_cols) != shape(data2):
        raise ValueError("input matrices must be of same shape")
    if num_rows == 0 or num_cols == 0:
        raise ValueError("input matrices must be >0 rows, >0 cols")

    # add a dimension to allow reflections (rotations in n + 1 dimensions)
    mtx1 = append(data1, zeros((num_rows, 1)), 1)
    mtx2 = append(data2, zeros((num_rows, 1)), 1)

    # standardize each matrix
    mtx1 = center(mtx1)
    mtx2 = center(mtx2)

    if (not any(mtx1)) or (not any(mtx2)):
        raise ValueError("input matrices must contain >1 unique points")

    mtx1 = normalize(mtx1)
    mtx2 = normalize(mtx2)

    # transform mtx2 to minimize disparity (sum( (mtx1[i,j] - mtx2[i,j])^2) )
    mtx2 = match_points(mtx1, mtx2)

    if any(abs(mtx2[:, -1]) > SMALL_NUM):
        raise ArithmeticError(
            "matched points have nonzero components in the added dimension"
        )

    # strip extra dimension which was added to allow reflections
    mtx1 = mtx1[:, :-1]
    mtx2 = mtx2[:, :-1]

    disparity = get_disparity(mtx1, mtx2)

    return mtx1, mtx2, disparity


def center(mtx):
    """translate all data (rows of the matrix) to center on the origin

    returns a shifted version of the input data.  The new matrix is such that
    the center of mass of the row vectors is centered at the origin.
    Returns a numpy float ('d') array
    """
    result = array(mtx, "d")
    result -= mean(result, 0)
    return result


def normalize(mtx):
    """change scaling of data (in rows) such that trace(mtx*mtx') = 1

    mtx' denotes the transpose of mtx"""
    result = array(mtx, "d")
    mag = trace(dot(result, transpose(result)))
    result /= sqrt(mag)
    return result


def get_rotation(reference, data):
    """orthogonal matrix q minimising sum(square(reference - data.q))

    q may include a reflection"""
    u, _, vh = svd(dot(transpose(reference), data))
    return dot(transpose(vh), transpose(u))


def match_points(mtx1, mtx2):
    """returns a transformed mtx2 that matches mtx1.

    returns a new matrix which is a transform of mtx2.  Scales and rotates
    a copy of mtx 2.  See procrustes docs for details.
    """
    u, s, vh = svd(dot(transpose(mtx1), mtx2))
    q = dot(transpose(vh), transpose(u))
    new_mtx2 = dot(mtx2, q)
    new_mtx2 *= sum(s)

    return new_mtx2


def get_disparity(mtx1, mtx2):
    """returns a measure of the dissimilarity between two data sets

    returns M^2 = sum(square(mtx1 - mtx2)), the pointwise sum of squared
    differences"""
    return sum(square(mtx1 - mtx2))


def align(source_anchors, target_anchors, full_source, translate=False, dilate=False):
    """transforms full_source so its anchors best match target_anchors

    Parameters
    ----------
    source_anchors
        s x r configuration of the anchor points, a subset of full_source
    target_anchors
        s x r configuration of the same anchor points in the reference frame
    full_source
        m x r configuration to transform
    translate
        if True, the transform includes a translation. Otherwise the
        translation is fixed at zero and the fit is computed on the
        uncentred anchors.
    dilate
        if True, the transform includes an isotropic scaling

    Returns
    -------
    m x r array, scale * full_source . rotation + translation
    """
    source_anchors = array(source_anchors, "d")
    target_anchors = array(target_anchors, "d")
    full_source = array(full_source, "d")
    if source_anchors.ndim != 2 or source_anchors.shape != target_anchors.shape:
        raise ValueError(
            f"anchor shapes differ {source_anchors.shape} != {target_anchors.shape}"
        )
    num_anchors, num_dims = source_anchors.shape
    if num_anchors == 0:
        raise ValueError("no anchor points")
    if full_source.ndim != 2 or full_source.shape[1] != num_dims:
        raise ValueError(
            f"full_source must have {num_dims} columns, not shape {full_source.shape}"
        )

    if translate:
        source = center(source_anchors)
        target = center(target_anchors)
    else:
        source = source_anchors
        target = target_anchors

    rotation = get_rotation(target, source)
    scale = 1.0
    if dilate:
        scale = trace(dot(transpose(target), dot(source, rotation)))
        scale /= trace(dot(transpose(source), source))

    shift = zeros(num_dims)
    if translate:
        shift = mean(target_anchors - scale * dot(source_anchors, rotation), 0)

    return scale * dot(full_source, rotation) + shift
