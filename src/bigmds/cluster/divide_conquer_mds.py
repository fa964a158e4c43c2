#!/usr/bin/env python
"""Divide and conquer MDS.

The data set is randomly split into partitions, the first of l rows and the
rest of l - c_points rows. c_points rows of the first partition are added to
every other partition, so that classical MDS is always applied to at most l
rows. The configuration of the first partition is the reference: every other
partition is aligned to it through the c_points rows they share.

References
----------
Delicado P. and C. Pachon-Garcia (2021). Multidimensional Scaling for Big
Data. https://arxiv.org/abs/2007.11919
"""

import time

import numpy

from bigmds.cluster.alignment import restore_row_order
from bigmds.cluster.eigen import weighted_mean_eigenvalues
from bigmds.cluster.metric_scaling import MDSResult, classical_mds
from bigmds.cluster.partition import (
    InvalidConfigurationError,
    get_partitions_for_divide_conquer,
    with_shared_rows,
)
from bigmds.cluster.procrustes import align
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


def _solve_and_align(args):
    """classical MDS of a partition whose last rows are the shared rows,
    aligned onto the reference configuration of those rows"""
    x, r, reference, translate = args
    mds = classical_mds(x, r)
    num_own = x.shape[0] - reference.shape[0]
    points = align(
        mds.points[num_own:],
        reference,
        mds.points[:num_own],
        translate=translate,
    )
    return points, mds.eigen


def _divide_conquer_mds(x, l, c_points, r, n_cores, seed_seq, translate, show_progress):
    n = x.shape[0]
    if n <= l:
        return classical_mds(x, r)

    partitions, shared_positions = get_partitions_for_divide_conquer(
        n, l, c_points, r, numpy.random.default_rng(seed_seq)
    )
    first = classical_mds(x[partitions[0]], r)

    reference = first.points[shared_positions]
    others = with_shared_rows(partitions, shared_positions)
    tasks = [(x[indices], r, reference, translate) for indices in others]
    results = parallel.map(
        _solve_and_align, tasks, max_workers=n_cores, show_progress=show_progress
    )

    blocks = [first.points] + [points for points, _ in results]
    points = restore_row_order(blocks, partitions)
    eigens = [first.eigen] + [eigen for _, eigen in results]
    sizes = [len(partitions[0])] + [len(indices) for indices in others]
    eigen = weighted_mean_eigenvalues(eigens, sizes)
    return MDSResult(points=points, eigen=eigen)


def divide_conquer_mds(
    x,
    l,
    c_points,
    r,
    n_cores=None,
    seed=None,
    translate=False,
    logger=None,
    show_progress=False,
):
    """MDS configuration of a large data set from overlapping partitions

    Parameters
    ----------
    x
        n x k matrix, rows are individuals, columns are variables
    l
        the number of rows for which classical MDS can be computed
        efficiently
    c_points
        number of rows of the first partition shared with every other
        partition, used to align them. Must be smaller than l and at
        least r.
    r
        number of principal coordinates to extract
    n_cores
        number of worker processes. Defaults to the BIGMDS_SETTINGS
        environment variable or 1.
    seed
        integer or numpy SeedSequence controlling all random choices
    translate
        include a translation when aligning partitions
    logger
        a scitrack CachingLogger on which the run is recorded
    show_progress
        display progress of the partitions

    Returns
    -------
    MDSResult, points is n x r in the row order of x, eigen the r largest
    eigenvalues as returned by classical MDS, averaged over partitions
    weighted by the number of rows each partition was solved on

    Notes
    -----
    Eigenvalues are not divided by the partition size, unlike fast_mds, so
    they scale with l.
    """
    n_cores, seed = get_run_settings(n_cores=n_cores, seed=seed)
    x = check_run_params(x, l, c_points, r, n_cores, points_name="c_points")
    if c_points >= l:
        raise InvalidConfigurationError(
            f"c_points={c_points} must be smaller than l={l}"
        )
    if c_points < r:
        raise InvalidConfigurationError(
            f"c_points={c_points} must be at least r={r} to align partitions"
        )
    check_logger(logger)

    start = time.time()
    result = _divide_conquer_mds(
        x,
        l,
        c_points,
        r,
        n_cores,
        get_seed_sequence(seed),
        translate,
        show_progress,
    )
    params = dict(l=l, c_points=c_points, r=r, n_cores=n_cores, seed=seed)
    log_run(logger, "divide_conquer_mds", params, x.shape, time.time() - start)
    return result
