__all__ = [
    "test_alignment",
    "test_divide_conquer_mds",
    "test_eigen",
    "test_fast_mds",
    "test_goodness_of_fit",
    "test_metric_scaling",
    "test_partition",
    "test_procrustes",
    "test_settings",
]
