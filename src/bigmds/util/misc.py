"""Generally useful utility functions."""

import os
import warnings

import numpy

__copyright__ = "Copyright 2024-date, The bigmds Project"
__license__ = "BSD-3"


def extend_docstring_from(source, pre=False):
    def docstring_inheriting_decorator(dest):
        parts = [source.__doc__, dest.__doc__ or ""]
        # trim leading/trailing blank lines from parts
        for i, part in enumerate(parts):
            part = part.split("\n")
            if not part[0].strip():
                part.pop(0)
            if part and not part[-1].strip():
                part.pop(-1)

            parts[i] = "\n".join(part)

        if pre:
            parts.reverse()
        dest.__doc__ = "\n".join(parts)
        return dest

    return docstring_inheriting_decorator


def get_setting_from_environ(environ_var, params_types):
    """extract settings from environment variable

    Parameters
    ----------
    environ_var : str
        name of an environment variable
    params_types : dict
        {param name: type}, values will be cast to type

    Returns
    -------
    dict

    Notes
    -----
    settings must of form 'param_name1=param_val,param_name2=param_val2'
    """
    var = os.environ.get(environ_var, None)
    if var is None:
        return {}

    var = var.split(",")
    result = {}
    for item in var:
        item = item.split("=")
        if len(item) != 2 or item[0].strip() not in params_types:
            continue

        name, val = item[0].strip(), item[1].strip()
        try:
            val = params_types[name](val)
            result[name] = val
        except ValueError:
            warnings.warn(
                f"could not cast {name}={val} to type {params_types[name]}, skipping"
            )

    return result


def get_seed_sequence(seed=None):
    """returns a numpy SeedSequence

    Parameters
    ----------
    seed
        None, an integer or an existing SeedSequence (returned as is)
    """
    if isinstance(seed, numpy.random.SeedSequence):
        return seed
    return numpy.random.SeedSequence(seed)

