"""bigmds: multidimensional scaling for data sets too large for classical
MDS, by recursively splitting, solving and realigning partial solutions."""

import logging
import typing
from importlib import import_module

from bigmds._version import __version__

__copyright__ = "Copyright 2024-date, The bigmds Project"
__license__ = "BSD-3"


def __getattr__(name: str) -> typing.Any:  # noqa: ANN401
    if (attr := globals().get(name)) is not None:
        return attr

    if name not in _import_mapping:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module_name = _import_mapping[name]
    module = import_module(f".{module_name}", package=__name__)
    attr = getattr(module, name)
    globals()[name] = attr
    return attr


_import_mapping = {
    "fast_mds": "cluster.fast_mds",
    "divide_conquer_mds": "cluster.divide_conquer_mds",
    "classical_mds": "cluster.metric_scaling",
    "MDSResult": "cluster.metric_scaling",
    "MDSNumericalError": "cluster.metric_scaling",
    "InvalidConfigurationError": "cluster.partition",
    "Stress": "cluster.goodness_of_fit",
}


def __dir__() -> list[str]:
    return list(_import_mapping.keys()) + list(globals().keys())


__all__ = list(_import_mapping.keys())

version = __version__
version_info = tuple(int(v) for v in version.split(".") if v.isdigit())


# suppress numba warnings
__numba_logger = logging.getLogger("numba")
__numba_logger.setLevel(logging.WARNING)
