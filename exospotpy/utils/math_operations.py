"""
This module provides functions that are useful in computing things.
Line-shape models, array bookkeeping, and the thread map used by the observation pipelines.
"""

import numpy as np
import multiprocessing as multi
from multiprocessing.pool import ThreadPool

__all__ = ['gaussian_line', 'normalize', 'floatrange',
           'default_num_workers', 'ordered_thread_map']

# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #
# Line-shape math


def gaussian_line(x, height, centroid, width, offset):
    """Unnormalized Gaussian with a constant offset, the shape used to fit line profiles

    Parameters
    ----------
    x
        Velocity grid
    height
        Peak height above (or, if negative, depth below) the offset
    centroid
        Center of the Gaussian
    width
        Standard deviation
    offset
        Continuum level

    Returns
    -------
    np.ndarray
    """
    return height * np.exp(-(x - centroid) ** 2 / (2 * width ** 2)) + offset


def normalize(data_array: np.ndarray) -> np.ndarray:
    """Scale an array so its maximum is 1, returns a new array"""
    data_array = np.asarray(data_array, dtype=float)
    max_val = np.max(data_array)
    if max_val == 0:
        return data_array.copy()
    return data_array / max_val


# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #
# Grid helpers

def floatrange(start: float, stop: float, step: float) -> np.ndarray:
    """Values from start to stop (inclusive, within rounding) in increments of step

    Parameters
    ----------
    start
        First value
    stop
        Last value, included if it lands on the step grid
    step
        Spacing between values, must be positive

    Returns
    -------
    np.ndarray
        Empty if stop < start
    """
    if step <= 0:
        raise ValueError("floatrange requires a positive step")
    if stop < start:
        return np.array([])
    num_steps = int(np.floor((stop - start) / step + 1e-9))
    return start + step * np.arange(num_steps + 1)


# ++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++++ #
# Multiprocessing support

def default_num_workers() -> int:
    return max(multi.cpu_count()-1, 1)


def ordered_thread_map(func, iterable, num_workers: int=None, chunksize: int=1) -> list:
    """Map func over iterable with a pool of threads, keeping the input order

    Workers share memory with the caller, so anything func reads must not be modified while the map runs.

    Parameters
    ----------
    func
        Function of a single argument
    iterable
        Values to map over
    num_workers
        Number of threads, defaults to one less than the number of cores
        With a single worker (or a single item) the map runs in the calling thread
    chunksize
        Approximate number of items to pass to a thread at a time

    Returns
    -------
    list
        func(item) for each item, in the order of iterable
    """
    items = list(iterable)
    if num_workers is None:
        num_workers = default_num_workers()
    num_workers = min(num_workers, len(items))
    if num_workers <= 1:
        return [func(item) for item in items]
    with ThreadPool(processes=num_workers) as pool:
        return pool.map(func, items, chunksize=chunksize)
