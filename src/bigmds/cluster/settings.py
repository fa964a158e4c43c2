#!/usr/bin/env python
"""Argument checking, defaults and run logging shared by the MDS solvers.

Defaults for n_cores and seed can be set through the environment, e.g.

    export BIGMDS_SETTINGS="n_cores=4,seed=123"

Arguments passed explicitly always take precedence.
"""

import numbers

import numpy

from scitrack import CachingLogger

from bigmds.cluster.partition import InvalidConfigurationError
from bigmds.util.misc import get_setting_from_environ

__copyright__ = "Copyright 2024-date, The bigmds Project"
__license__ = "BSD-3"

SETTINGS_ENVIRON = "BIGMDS_SETTINGS"
_setting_types = {"n_cores": int, "seed": int}


def get_run_settings(n_cores=None, seed=None):
    """returns n_cores, seed after applying environment defaults"""
    env_vals = get_setting_from_environ(SETTINGS_ENVIRON, _setting_types)
    if n_cores is None:
        n_cores = env_vals.get("n_cores", 1)
    if seed is None:
        seed = env_vals.get("seed", None)
    return n_cores, seed


def check_run_params(x, l, num_points, r, n_cores, points_name="s_points"):
    """validates solver arguments, returns x as a float array"""
    x = numpy.asarray(x, dtype=float)
    if x.ndim != 2 or x.shape[0] == 0:
        raise InvalidConfigurationError(
            f"x must be a 2D matrix with at least one row, not shape {x.shape}"
        )
    checks = [
        ("l", l, 1),
        (points_name, num_points, 1),
        ("r", r, 1),
        ("n_cores", n_cores, 1),
    ]
    for name, value, minimum in checks:
        if not isinstance(value, numbers.Integral) or value < minimum:
            raise InvalidConfigurationError(
                f"{name} must be an integer >= {minimum}, not {value!r}"
            )
    return x


def check_logger(logger):
    if logger is not None and not isinstance(logger, CachingLogger):
        raise TypeError(f"logger must be of type CachingLogger not {type(logger)}")


def log_run(logger, label, params, shape, taken):
    """records a solver run on a scitrack logger, if one is provided"""
    if logger is None:
        return

    logger.log_versions(["bigmds", "numpy"])
    settings = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.log_message(settings, label=label)
    logger.log_message(f"{shape[0]} x {shape[1]}", label="input shape")
    logger.log_message(f"{taken}", label="TIME TAKEN")
