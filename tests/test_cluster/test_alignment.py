import numpy
import pytest

from numpy.testing import assert_allclose, assert_equal

from bigmds.cluster.alignment import (
    AnchorSet,
    get_anchor_spans,
    restore_row_order,
    rotate_to_principal_axes,
)
from bigmds.cluster.goodness_of_fit import pairwise_distances
from bigmds.cluster.metric_scaling import classical_mds
from bigmds.cluster.partition import InvalidConfigurationError


@pytest.fixture
def partitioned():
    rng = numpy.random.default_rng(21)
    x = rng.normal(size=(60, 3)) * [4, 2, 1]
    order = rng.permutation(60)
    partitions = [order[:20], order[20:40], order[40:]]
    return x, partitions


def test_anchor_spans():
    spans = get_anchor_spans([3, 3, 3])
    assert spans == [slice(0, 3), slice(3, 6), slice(6, 9)]
    assert get_anchor_spans([]) == []


def test_anchor_set_from_partitions(partitioned):
    x, partitions = partitioned
    anchors = AnchorSet.from_partitions(x, partitions, 5, numpy.random.default_rng(1))
    assert len(anchors) == 15
    assert anchors.points.shape == (15, 3)
    assert len(anchors.local_positions) == 3
    for indices, positions, span in zip(
        partitions, anchors.local_positions, anchors.spans
    ):
        assert len(set(positions)) == 5
        assert_equal(anchors.points[span], x[indices[positions]])
    assert "num_partitions=3" in repr(anchors)


def test_anchor_set_too_many(partitioned):
    x, partitions = partitioned
    with pytest.raises(InvalidConfigurationError):
        AnchorSet.from_partitions(x, partitions, 21, numpy.random.default_rng(1))


def test_anchor_set_align(partitioned):
    """separately solved partitions are aligned into a single configuration"""
    x, partitions = partitioned
    anchors = AnchorSet.from_partitions(x, partitions, 5, numpy.random.default_rng(1))
    reference = classical_mds(anchors.points, 3).points
    configs = [classical_mds(x[indices], 3).points for indices in partitions]
    aligned = anchors.align(reference, configs, translate=True)
    assert [len(a) for a in aligned] == [20, 20, 20]
    points = restore_row_order(aligned, partitions)
    # full rank data, so the combined configuration reproduces all distances
    assert_allclose(pairwise_distances(points), pairwise_distances(x), atol=1e-8)


def test_anchor_set_align_mismatch(partitioned):
    x, partitions = partitioned
    anchors = AnchorSet.from_partitions(x, partitions, 5, numpy.random.default_rng(1))
    reference = classical_mds(anchors.points, 3).points
    configs = [classical_mds(x[indices], 3).points for indices in partitions]
    with pytest.raises(ValueError):
        anchors.align(reference, configs[:2])


def test_restore_row_order():
    partitions = [numpy.array([3, 0]), numpy.array([2, 1, 4])]
    blocks = [numpy.array([[3.0], [0.0]]), numpy.array([[2.0], [1.0], [4.0]])]
    got = restore_row_order(blocks, partitions)
    assert_equal(got, numpy.arange(5.0).reshape(5, 1))


def test_restore_row_order_mismatch():
    with pytest.raises(ValueError):
        restore_row_order([numpy.zeros((2, 1))], [numpy.arange(3)])


def test_rotate_to_principal_axes():
    """axes are ordered by decreasing variance, distances unchanged"""
    rng = numpy.random.default_rng(8)
    points = rng.normal(size=(200, 2)) * [1, 5]
    rotation, _ = numpy.linalg.qr(rng.normal(size=(2, 2)))
    points = points @ rotation
    got = rotate_to_principal_axes(points)
    cov = numpy.cov(got, rowvar=False)
    assert_allclose(cov[0, 1], 0, atol=1e-10)
    assert cov[0, 0] > cov[1, 1]
    assert_allclose(pairwise_distances(got), pairwise_distances(points), atol=1e-10)


def test_rotate_to_principal_axes_single_dimension():
    points = numpy.arange(10.0).reshape(10, 1)
    got = rotate_to_principal_axes(points)
    assert got.shape == (10, 1)
    assert_allclose(numpy.abs(got), points)
