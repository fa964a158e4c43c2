#!/usr/bin/env python
"""Combining MDS configurations of separate partitions into one.

Each partition contributes the same number of randomly chosen anchor
points to an alignment set. Classical MDS of the alignment set gives a
reference configuration, and every partition's configuration is rigidly
transformed so that its anchors best match their reference positions.
"""

import numpy

from bigmds.cluster.partition import sample_without_replacement
from bigmds.cluster.procrustes import align

__copyright__ = "Copyright 2024-date, The bigmds Project"
__license__ = "BSD-3"


class AnchorSet:
    """anchor points sampled from every partition

    Attributes
    ----------
    points
        rows of the original data for every anchor, in partition order
    local_positions
        per partition, the positions of its anchors within the partition
    spans
        per partition, the slice of points holding its anchors
    """

    def __init__(self, points, local_positions, spans):
        self.points = points
        self.local_positions = local_positions
        self.spans = spans

    def __len__(self):
        return len(self.points)

    def __repr__(self):
        return (
            f"{self.__class__.__name__}(num_partitions={len(self.spans)}, "
            f"num_points={len(self)})"
        )

    @classmethod
    def from_partitions(cls, x, partitions, num_anchors, rng):
        """samples num_anchors rows of x from every partition

        Parameters
        ----------
        x
            the data the partitions index into
        partitions
            series of index arrays
        num_anchors
            number of anchors per partition, drawn without replacement
        rng
            numpy Generator, one independent draw is made per partition
        """
        local_positions = [
            sample_without_replacement(len(indices), num_anchors, rng)
            for indices in partitions
        ]
        spans = get_anchor_spans([num_anchors] * len(partitions))
        rows = numpy.concatenate(
            [indices[pos] for indices, pos in zip(partitions, local_positions)]
        )
        return cls(x[rows], local_positions, spans)

    def align(self, reference, configurations, translate=False):
        """aligns each partition configuration onto the reference

        Parameters
        ----------
        reference
            MDS configuration of self.points
        configurations
            per partition MDS configurations, in partition order
        translate
            whether the rigid transform includes a translation

        Returns
        -------
        list of aligned configurations
        """
        if len(configurations) != len(self.spans):
            raise ValueError(
                f"{len(configurations)} configurations for {len(self.spans)} partitions"
            )
        return [
            align(
                config[positions],
                reference[span],
                config,
                translate=translate,
            )
            for config, positions, span in zip(
                configurations, self.local_positions, self.spans
            )
        ]


def get_anchor_spans(counts):
    """contiguous slices, one per partition, of a concatenated anchor set"""
    bounds = numpy.cumsum([0] + list(counts))
    return [slice(start, end) for start, end in zip(bounds, bounds[1:])]


def restore_row_order(blocks, partitions):
    """stacks blocks and returns rows in the original order

    Parameters
    ----------
    blocks
        matrices, block i holding the rows listed in partitions[i]
    partitions
        index arrays that together cover range(n) exactly once
    """
    order = numpy.concatenate(partitions)
    stacked = numpy.concatenate(blocks, axis=0)
    if len(order) != len(stacked):
        raise ValueError(f"{len(stacked)} rows for {len(order)} indices")
    result = numpy.empty_like(stacked)
    result[order] = stacked
    return result


def rotate_to_principal_axes(points):
    """rotates points onto the eigenvectors of their covariance

    axes are ordered by decreasing variance, distances are unchanged
    """
    cov = numpy.atleast_2d(numpy.cov(points, rowvar=False))
    eigvals, eigvecs = numpy.linalg.eigh(cov)
    order = numpy.argsort(eigvals)[::-1]
    return points @ eigvecs[:, order]
