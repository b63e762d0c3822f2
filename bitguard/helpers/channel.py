# Licensed under the GPLv3 - see LICENSE
"""Simulation of an unreliable channel that corrupts transmitted bits."""
from operator import index

import numpy as np

from ..base.utils import bit_array, like_input

__all__ = ['flip_bits', 'corrupt']


def flip_bits(bits, positions):
    """Flip bits at the given positions.

    Parameters
    ----------
    bits : str or array of bits
        Bits as transmitted.  These are not changed.
    positions : int or iterable of int
        1-based positions of the bits to flip.

    Returns
    -------
    flipped : str or array
        Copy of the input, of the same type, with the bits flipped.

    Raises
    ------
    IndexError
        If any position is outside of the bit string.
    """
    flipped = bit_array(bits)
    try:
        positions = [index(positions)]
    except TypeError:
        positions = [index(position) for position in positions]

    for position in positions:
        if not 1 <= position <= len(flipped):
            raise IndexError('position {0} out of range for {1} bits.'
                             .format(position, len(flipped)))
        flipped[position - 1] ^= 1

    return like_input(flipped, bits)


def corrupt(bits, nerrors=1, rng=None):
    """Flip a number of randomly chosen, distinct bits.

    Parameters
    ----------
    bits : str or array of bits
        Bits as transmitted.  These are not changed.
    nerrors : int, optional
        Number of bits to flip.  Default: 1.
    rng : `~numpy.random.Generator`, int, or None, optional
        Random number generator, or seed for it.  Passed on to
        `~numpy.random.default_rng`.

    Returns
    -------
    corrupted : str or array
        Copy of the input, of the same type, with ``nerrors`` bits flipped.
    positions : list of int
        Sorted 1-based positions of the flipped bits.
    """
    nbits = len(bit_array(bits))
    nerrors = index(nerrors)
    if not 0 <= nerrors <= nbits:
        raise ValueError('cannot flip {0} bits out of {1}.'
                         .format(nerrors, nbits))

    rng = np.random.default_rng(rng)
    positions = sorted(int(position) + 1 for position in
                       rng.choice(nbits, size=nerrors, replace=False))
    return flip_bits(bits, positions), positions
