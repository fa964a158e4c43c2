#!/usr/bin/env python
"""Fast MDS: recursive divide and conquer multidimensional scaling.

The data set of n rows is randomly split into p = l/s_points partitions.
Partitions of at most l rows are solved with classical MDS, larger ones by
applying fast MDS to them recursively. s_points rows sampled from every
partition form an alignment set, whose classical MDS configuration serves as
the reference every partition's configuration is aligned to with a
Procrustes transformation.

References
----------
Delicado P. and C. Pachon-Garcia (2021). Multidimensional Scaling for Big
Data. https://arxiv.org/abs/2007.11919

Yang, T., J. Liu, L. McMillan and W. Wang (2006). A fast approximation to
multidimensional scaling. In Proceedings of the ECCV Workshop on
Computation Intensive Methods for Computer Vision (CIMCV).
"""

import time

import numpy

from bigmds.cluster.alignment import (
    AnchorSet,
    restore_row_order,
    rotate_to_principal_axes,
)
from bigmds.cluster.eigen import mean_eigenvalues
from bigmds.cluster.metric_scaling import MDSResult, classical_mds
from bigmds.cluster.partition import get_partitions_for_fast
from bigmds.cluster.settings import (
    check_logger,
    check_run_params,
    get_run_settings,
    log_run,
)
from bigmds.util import parallel
from bigmds.util.misc import get_seed_sequence

__copyright__ = "Copyright 2024-date, The bigmds Project"
__license__ = "BSD-3"


def is_small_enough(n, l, s_points, r):
    """whether n rows are solved directly with classical MDS

    True when n fits the size limit, when there are not more rows than
    anchors, or when partitions would be too small to align r dimensions
    """
    return n <= l or n <= s_points or (n * s_points) / l <= r


def _solve_directly(x, r):
    mds = classical_mds(x, r)
    return MDSResult(points=mds.points, eigen=mds.eigen / x.shape[0])


def _solve_partition(args):
    x, l, s_points, r, n_cores, seed_seq, translate = args
    return _fast_mds(x, l, s_points, r, n_cores, seed_seq, translate)


def _fast_mds(x, l, s_points, r, n_cores, seed_seq, translate, show_progress=False):
    n = x.shape[0]
    if is_small_enough(n, l, s_points, r):
        return _solve_directly(x, r)

    plan_seq, anchor_seq, partition_seq = seed_seq.spawn(3)
    partitions = get_partitions_for_fast(
        n, l, s_points, r, numpy.random.default_rng(plan_seq)
    )
    if len(partitions) == 1:
        return _solve_directly(x, r)

    tasks = [
        (x[indices], l, s_points, r, n_cores, child_seq, translate)
        for indices, child_seq in zip(partitions, partition_seq.spawn(len(partitions)))
    ]
    results = parallel.map(
        _solve_partition, tasks, max_workers=n_cores, show_progress=show_progress
    )

    anchors = AnchorSet.from_partitions(
        x, partitions, s_points, numpy.random.default_rng(anchor_seq)
    )
    reference = classical_mds(anchors.points, r).points
    aligned = anchors.align(
        reference, [result.points for result in results], translate=translate
    )
    points = rotate_to_principal_axes(restore_row_order(aligned, partitions))
    eigen = mean_eigenvalues([result.eigen for result in results])
    return MDSResult(points=points, eigen=eigen)


def fast_mds(
    x,
    l,
    s_points,
    r,
    n_cores=None,
    seed=None,
    translate=False,
    logger=None,
    show_progress=False,
):
    """MDS configuration of a large data set by recursive divide and conquer

    Parameters
    ----------
    x
        n x k matrix, rows are individuals, columns are variables
    l
        the number of rows for which classical MDS can be computed
        efficiently
    s_points
        number of points drawn from each partition to align the partial
        solutions. Recommended value is 5 * r.
    r
        number of principal coordinates to extract
    n_cores
        number of worker processes. Partitions at every recursion level are
        solved by this many workers, nested levels run inside the workers.
        Defaults to the BIGMDS_SETTINGS environment variable or 1.
    seed
        integer or numpy SeedSequence controlling all random choices.
        Results for a given seed do not depend on n_cores.
    translate
        include a translation when aligning partitions. Off by default,
        partition configurations are all centred on their own mean.
    logger
        a scitrack CachingLogger on which the run is recorded
    show_progress
        display progress of the partitions at the top level

    Returns
    -------
    MDSResult, points is n x r in the row order of x, eigen the r largest
    eigenvalues averaged over partitions, each divided by its partition
    size

    Notes
    -----
    Data with n <= l is solved by classical MDS, the eigenvalues divided by
    n, and the points returned as is.
    """
    n_cores, seed = get_run_settings(n_cores=n_cores, seed=seed)
    x = check_run_params(x, l, s_points, r, n_cores, points_name="s_points")
    check_logger(logger)

    start = time.time()
    result = _fast_mds(
        x,
        l,
        s_points,
        r,
        n_cores,
        get_seed_sequence(seed),
        translate,
        show_progress=show_progress,
    )
    params = dict(l=l, s_points=s_points, r=r, n_cores=n_cores, seed=seed)
    log_run(logger, "fast_mds", params, x.shape, time.time() - start)
    return result
