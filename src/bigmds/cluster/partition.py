#!/usr/bin/env python
"""Splitting the rows of a data set into partitions small enough for
classical MDS.

Two policies are provided. ``get_partitions_for_fast`` serves the recursive
fast MDS solver: it uses as many partitions as anchors fit in the size limit,
reducing the number until every partition is large enough to be aligned.
``get_partitions_for_divide_conquer`` serves the single level divide and
conquer solver, where every partition after the first shares a set of rows
drawn from the first.

All indices are 0-based and partitions are numpy integer arrays.
"""

from math import ceil

import numpy

__copyright__ = "Copyright 2024-date, The bigmds Project"
__license__ = "BSD-3"


class InvalidConfigurationError(ValueError):
    """parameters that cannot produce a valid MDS configuration"""


def sample_without_replacement(size, num, rng):
    """returns num distinct positions drawn uniformly from range(size)

    Raises
    ------
    InvalidConfigurationError if num exceeds size
    """
    if num > size:
        raise InvalidConfigurationError(
            f"cannot sample {num} points from a partition of {size}"
        )
    return rng.choice(size, size=num, replace=False)


def get_min_partition_size(s_points, r):
    """smallest partition that can be aligned using s_points anchors"""
    return max(r + 2, s_points)


def get_partition_sizes(n, p):
    """size of the first p-1 partitions and of the last one"""
    size = n // p
    return size, n - (p - 1) * size


def needs_fewer_partitions(p, size, last_size, min_size):
    """whether the number of partitions p must be reduced

    True while there are partitions left to remove, at least one of the
    partition sizes is below min_size, and the last partition is not empty.
    """
    partitions_left = p >= 1
    too_small = size < min_size
    last_too_small = last_size < min_size
    last_not_empty = last_size > 0
    return partitions_left and (too_small or last_too_small) and last_not_empty


def get_num_partitions_for_fast(n, l, s_points, r):
    """number of partitions, and their sizes, for fast MDS

    Returns
    -------
    p, size, last_size. p <= 1 means no valid partitioning exists and the
    data must be solved as a whole.
    """
    p = l // s_points
    min_size = get_min_partition_size(s_points, r)
    if p < 1:
        return p, n, n

    size, last_size = get_partition_sizes(n, p)
    while needs_fewer_partitions(p, size, last_size, min_size):
        p -= 1
        if p < 1:
            break
        size, last_size = get_partition_sizes(n, p)

    return p, size, last_size


def get_partitions_for_fast(n, l, s_points, r, rng):
    """random partitions of range(n) for fast MDS

    Parameters
    ----------
    n
        number of rows
    l
        largest number of rows classical MDS is applied to
    s_points
        number of anchor points drawn from each partition
    r
        number of principal coordinates
    rng
        numpy Generator

    Returns
    -------
    list of index arrays. The first p-1 have the same size, the last
    absorbs the remainder. A single partition holding range(n), in the
    original order, is returned when no valid partitioning exists.
    """
    p, size, _ = get_num_partitions_for_fast(n, l, s_points, r)
    if p <= 1:
        return [numpy.arange(n)]

    permutation = rng.permutation(n)
    boundary = (p - 1) * size
    partitions = [
        permutation[start : start + size] for start in range(0, boundary, size)
    ]
    partitions.append(permutation[boundary:])
    return partitions


def get_partition_sizes_for_divide_conquer(n, l, c_points):
    """sizes of partitions for divide and conquer MDS

    The first partition has l rows, the rest l - c_points (the c_points rows
    shared with the first partition are added later), the last absorbing
    the remainder.
    """
    if n <= l:
        return [n]

    step = l - c_points
    p = 1 + ceil((n - l) / step)
    sizes = [l] + [step] * (p - 2)
    sizes.append(n - sum(sizes))
    return sizes


def get_partitions_for_divide_conquer(n, l, c_points, r, rng):
    """random partitions of range(n) for divide and conquer MDS

    Parameters
    ----------
    n
        number of rows
    l
        largest number of rows classical MDS is applied to
    c_points
        number of rows from the first partition shared with all others
    r
        number of principal coordinates
    rng
        numpy Generator

    Returns
    -------
    partitions, shared_positions. The partitions are disjoint index arrays
    covering range(n). shared_positions are positions within the first
    partition, the rows to append to every other partition. It is empty
    when there is a single partition.
    """
    if c_points >= l:
        raise InvalidConfigurationError(
            f"c_points={c_points} must be smaller than l={l}"
        )
    if l < r:
        raise InvalidConfigurationError(f"l={l} is too small for r={r}")
    if c_points < r:
        raise InvalidConfigurationError(
            f"c_points={c_points} is too few shared rows to align r={r} dimensions"
        )

    sizes = get_partition_sizes_for_divide_conquer(n, l, c_points)
    permutation = rng.permutation(n)
    bounds = numpy.cumsum([0] + sizes)
    partitions = [permutation[start:end] for start, end in zip(bounds, bounds[1:])]
    if len(partitions) == 1:
        return partitions, numpy.array([], dtype=int)

    shared_positions = sample_without_replacement(len(partitions[0]), c_points, rng)
    return partitions, shared_positions


def with_shared_rows(partitions, shared_positions):
    """index arrays of the partitions after the first, each followed by
    the rows of the first partition at shared_positions"""
    shared = partitions[0][shared_positions]
    return [numpy.concatenate((indices, shared)) for indices in partitions[1:]]
