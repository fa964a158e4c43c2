#!/usr/bin/env python
"""Mapping a function over a series of inputs using a pool of processes."""

import builtins
import concurrent.futures as concurrentfutures
import multiprocessing

from tqdm import tqdm

from bigmds.util.misc import extend_docstring_from

__copyright__ = "Copyright 2024-date, The bigmds Project"
__license__ = "BSD-3"


def is_master_process():
    """True if not executing inside a worker of a process pool"""
    return multiprocessing.parent_process() is None


def get_max_workers(max_workers):
    """the number of workers that can actually be used

    Workers never create their own pool, so the result is always 1 inside
    a worker process.
    """
    if max_workers is not None and max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, not {max_workers}")

    if not is_master_process():
        return 1

    available = multiprocessing.cpu_count()
    if not max_workers:
        max_workers = max(available - 1, 1)
    return min(max_workers, available)


class PicklableAndCallable:
    def __init__(self, func):
        self.func = func

    def __call__(self, *args, **kw):
        return self.func(*args, **kw)


def imap(f, s, max_workers=None, chunksize=1, show_progress=False):
    """
    Parameters
    ----------
    f : callable
        function that operates on values in s, must be picklable
    s : sequence
        series of inputs to f
    max_workers : int or None
        maximum number of workers. Defaults to 1-maximum available. Calls
        made from within a worker process always execute serially.
    chunksize : int
        number of items of s sent to a worker at a time
    show_progress : bool
        display a tqdm progress bar

    Returns
    -------
    imap is a generator yielding result of f(s[i]) in the order of s, map
    returns the result series

    Notes
    -----
    The first exception raised by f propagates to the caller and all work
    not yet started is cancelled.
    """
    s = list(s)
    max_workers = get_max_workers(max_workers)
    progress = tqdm(total=len(s), disable=not show_progress, leave=False)

    if max_workers == 1 or len(s) < 2:
        with progress:
            for result in builtins.map(f, s):
                progress.update()
                yield result
        return

    f = PicklableAndCallable(f)
    with progress, concurrentfutures.ProcessPoolExecutor(max_workers) as executor:
        try:
            for result in executor.map(f, s, chunksize=chunksize):
                progress.update()
                yield result
        except BaseException:
            executor.shutdown(wait=False, cancel_futures=True)
            raise


@extend_docstring_from(imap)
def map(f, s, max_workers=None, chunksize=1, show_progress=False):
    return list(imap(f, s, max_workers, chunksize, show_progress))
