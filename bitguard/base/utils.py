# Licensed under the GPLv3 - see LICENSE
from collections.abc import Iterator
from operator import index

import numpy as np


__all__ = ['bit_array', 'bit_string', 'like_input', 'is_power_of_two']


def bit_array(pattern):
    """Convert the pattern to an array of bits.

    Parameters
    ----------
    pattern : str, ~numpy.ndarray, sequence or iterator of int
        Pattern to convert.  A `str` should consist of '0' and '1'
        characters (spaces are ignored, so that bits can be grouped).
        Otherwise, all elements should be 0 or 1 (or `bool`).

    Returns
    -------
    bit_array : `~numpy.ndarray` of uint8
        A new one-dimensional array, with one element per bit.
    """
    if isinstance(pattern, str):
        pattern = pattern.replace(' ', '')
        if not set(pattern) <= {'0', '1'}:
            raise ValueError("bit string '{0}' contains characters other "
                             "than '0' and '1'.".format(pattern))
        return np.array([int(bit) for bit in pattern], dtype='u1')

    if isinstance(pattern, Iterator):
        pattern = list(pattern)

    pattern = np.array(pattern, ndmin=1)
    if pattern.ndim != 1:
        raise ValueError('bit patterns have to be one-dimensional.')
    if pattern.size == 0:
        return pattern.astype('u1')

    if (pattern.dtype.kind not in 'biuf'
            or np.any((pattern != 0) & (pattern != 1))):
        raise ValueError('bit patterns can only contain 0 and 1.')
    return pattern.astype('u1')


def bit_string(bits):
    """Represent an array of bits as a string of '0' and '1'."""
    return ''.join('{:d}'.format(bit) for bit in bit_array(bits))


def like_input(bits, pattern):
    """Return bits as a string if pattern was one, else as array."""
    return bit_string(bits) if isinstance(pattern, str) else bits


def is_power_of_two(value):
    """Whether value is a power of two.

    Parameters
    ----------
    value : int or array of int
        Positive integer(s).  Note that 1 is ``2**0`` and thus included.
    """
    try:
        value = index(value)
    except TypeError:
        value = np.asanyarray(value)
        return (value > 0) & ((value & (value - 1)) == 0)

    return value > 0 and value & (value - 1) == 0
