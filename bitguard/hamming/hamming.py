# Licensed under the GPLv3 - see LICENSE
"""Hamming single-error-correcting codes of arbitrary length.

For ``m`` data bits, ``r`` parity bits are added, with ``r`` the smallest
number for which ``2**r >= m + r + 1``.  In the resulting packet of
``n = m + r`` bits, positions (counting from 1) that are powers of two hold
the parity bits, and all other positions the data bits, in order.

Parity bit ``i``, at position ``2**i``, covers all positions which have
bit ``i`` set, and is chosen such that the number of ones in those positions
is even.  On reception, recalculating the parity of each covered set gives
the syndrome, which, read as a binary number with check 0 as the least
significant bit, is the position of a single corrupted bit (or 0 if no bit
was corrupted).

Since the code has a minimum distance of 3, two corrupted bits cannot be
corrected.  They will be noticed if the syndrome points beyond the end
of the packet, but otherwise a wrong bit will be flipped.
"""
import warnings
from collections import namedtuple
from operator import index

import numpy as np
from astropy.table import Table
from astropy.utils import lazyproperty

from ..base.utils import bit_array, like_input, is_power_of_two
from ..base.errors import UncorrectableSyndromeError


__all__ = ['HammingDecoded', 'HammingCode', 'redundant_bits_needed',
           'encode', 'syndrome', 'decode_and_correct', 'decode',
           'extract_data']


HammingDecoded = namedtuple('HammingDecoded',
                            ['packet', 'position', 'syndrome'])
"""Result of decoding a packet.

Attributes
----------
packet : str or `~numpy.ndarray`
    The corrected packet.
position : int
    The 1-based position of the bit that was corrected, or 0 if none was.
syndrome : `~numpy.ndarray`
    The syndrome bits, in check order.
"""


def redundant_bits_needed(m):
    """Number of parity bits required to protect ``m`` data bits.

    This is the smallest ``r`` for which ``2**r >= m + r + 1``, which
    ensures that all ``m + r`` positions, as well as "no error", can be
    encoded in a syndrome.  A packet always has at least one parity bit,
    so even without data bits, ``r = 1``.

    Parameters
    ----------
    m : int
        Number of data bits.

    Returns
    -------
    r : int
    """
    m = index(m)
    if m < 0:
        raise ValueError('number of data bits cannot be negative.')
    r = 1
    while 2 ** r < m + r + 1:
        r += 1
    return r


def _coverage(nbits, nchecks):
    """Which positions each check covers, as a (nchecks, nbits) array."""
    positions = np.arange(1, nbits + 1)
    checks = 1 << np.arange(nchecks)
    return (positions & checks[:, np.newaxis]) != 0


def _syndrome(bits, coverage):
    return (np.count_nonzero(coverage & (bits != 0), axis=1)
            % 2).astype('u1')


def _is_packet_length(nbits):
    """Whether some number of data bits gives packets of ``nbits`` bits."""
    data_bits = nbits - nbits.bit_length()
    return (data_bits >= 0
            and data_bits + redundant_bits_needed(data_bits) == nbits)


def _error_position(syndrome):
    return int((syndrome.astype(int) << np.arange(len(syndrome))).sum())


def _check_nchecks(nbits, nchecks):
    if nchecks != nbits.bit_length():
        warnings.warn("{0} parity checks do not match the layout of a "
                      "{1}-bit packet, which has {2} parity bits."
                      .format(nchecks, nbits, nbits.bit_length()))


class HammingCode:
    """Hamming single-error-correcting code for a given number of data bits.

    Parameters
    ----------
    data_bits : int
        Number of data bits ``m``.  The number of parity bits ``r`` is
        inferred using `redundant_bits_needed`.

    Notes
    -----
    The layout of the packet is calculated when first needed and then
    cached, so it is efficient to reuse an instance to encode or decode
    multiple packets of the same length.
    """

    def __init__(self, data_bits):
        data_bits = index(data_bits)
        self.data_bits = data_bits
        self.parity_bits = redundant_bits_needed(data_bits)

    @classmethod
    def from_packet_length(cls, nbits):
        """Create the code that produces packets of ``nbits`` bits.

        Raises
        ------
        ValueError
            If no number of data bits gives packets of the given length.
        """
        nbits = index(nbits)
        if not _is_packet_length(nbits):
            raise ValueError('no Hamming code has packets of {0} bits.'
                             .format(nbits))
        return cls(nbits - nbits.bit_length())

    def __len__(self):
        return self.data_bits + self.parity_bits

    def __repr__(self):
        return ('<{0} data_bits={1}, parity_bits={2}>'
                .format(type(self).__name__, self.data_bits,
                        self.parity_bits))

    @lazyproperty
    def positions(self):
        """1-based positions of all bits in a packet."""
        return np.arange(1, len(self) + 1)

    @lazyproperty
    def parity_mask(self):
        """`True` for parity positions, i.e., those that are a power of 2."""
        return is_power_of_two(self.positions)

    @lazyproperty
    def coverage(self):
        """Positions covered by each parity check, as a (r, n) boolean array.
        """
        return _coverage(len(self), self.parity_bits)

    def _packet(self, packet):
        bits = bit_array(packet)
        if len(bits) != len(self):
            raise ValueError('packet should have {0} bits, not {1}.'
                             .format(len(self), len(bits)))
        return bits

    def encode(self, data):
        """Encode data bits into a packet with interleaved parity bits.

        Parameters
        ----------
        data : str or array of bits
            Should have ``data_bits`` bits.

        Returns
        -------
        packet : str or array
            Of the same type as the input.
        """
        bits = bit_array(data)
        if len(bits) != self.data_bits:
            raise ValueError('data should have {0} bits, not {1}.'
                             .format(self.data_bits, len(bits)))
        packet = np.zeros(len(self), 'u1')
        packet[~self.parity_mask] = bits
        # Parity positions are still zero, so they do not contribute.
        parity = _syndrome(packet, self.coverage)
        packet[self.parity_mask] = parity
        return like_input(packet, data)

    def syndrome(self, packet):
        """Parity check results for a packet, in check order."""
        return _syndrome(self._packet(packet), self.coverage)

    def decode_and_correct(self, packet):
        """Correct a packet in place, returning the error position.

        Parameters
        ----------
        packet : `~numpy.ndarray` or list of bits
            The received packet.  If a single bit was corrupted, it will
            be flipped back.

        Returns
        -------
        position : int
            The 1-based position of the corrected bit, or 0 if none.

        Raises
        ------
        UncorrectableSyndromeError
            If the syndrome points beyond the end of the packet.
        """
        if isinstance(packet, (str, bytes, tuple)):
            raise TypeError('can only correct mutable packets in place, '
                            'not {0}.'.format(type(packet).__name__))
        syndrome = self.syndrome(packet)
        return _correct(packet, syndrome)

    def decode(self, received):
        """Decode a received packet, without changing it.

        Returns
        -------
        decoded : `HammingDecoded`
            With the corrected packet (of the same type as the input),
            the position of the corrected bit, and the syndrome.
        """
        packet = self._packet(received)
        syndrome = self.syndrome(packet)
        position = _correct(packet, syndrome)
        return HammingDecoded(like_input(packet, received), position,
                              syndrome)

    def extract(self, packet):
        """The data bits in a packet."""
        return like_input(self._packet(packet)[~self.parity_mask], packet)

    def table(self, packet):
        """Table of the packet, labelling each bit as parity or data.

        Parameters
        ----------
        packet : str or array of bits

        Returns
        -------
        table : `~astropy.table.Table`
            With columns 'position' (1-based), 'role' ('P1', 'P2', ...
            for the parity bits at positions 1, 2, 4, ..., and 'D1', 'D2',
            ... for the data bits), and 'bit'.
        """
        bits = self._packet(packet)
        parity_number = np.cumsum(self.parity_mask)
        data_number = np.cumsum(~self.parity_mask)
        roles = ['P{0}'.format(p) if is_parity else 'D{0}'.format(d)
                 for is_parity, p, d in zip(self.parity_mask, parity_number,
                                            data_number)]
        return Table([self.positions, roles, bits],
                     names=('position', 'role', 'bit'))


def _correct(packet, syndrome):
    """Flip the bit the syndrome points to, if any."""
    position = _error_position(syndrome)
    if position > len(packet):
        raise UncorrectableSyndromeError(position, syndrome, len(packet))
    if position:
        # Lists and arrays of floats do not support ^=.
        packet[position - 1] = 1 - packet[position - 1]
    return position


def encode(data):
    """Encode data bits into a Hamming packet.

    Parameters
    ----------
    data : str or array of bits
        Any number of bits, including none.

    Returns
    -------
    packet : str or array
        With ``redundant_bits_needed(len(data))`` parity bits added.
    """
    bits = bit_array(data)
    return like_input(HammingCode(len(bits)).encode(bits), data)


def syndrome(packet, r):
    """The ``r`` parity check results for the packet, in check order."""
    bits = bit_array(packet)
    r = index(r)
    _check_nchecks(len(bits), r)
    return _syndrome(bits, _coverage(len(bits), r))


def decode_and_correct(packet, r):
    """Correct a single corrupted bit of a packet in place.

    Parameters
    ----------
    packet : `~numpy.ndarray` or list of bits
        The received packet.  Immutable types such as `str` cannot be
        corrected in place; use `decode` for those.
    r : int
        Number of parity bits in the packet.  This should match the number
        of powers of two up to the length of the packet.

    Returns
    -------
    position : int
        The 1-based position of the corrected bit, or 0 if the packet
        passed all parity checks.

    Raises
    ------
    UncorrectableSyndromeError
        If the syndrome points beyond the end of the packet, which implies
        that more than one bit was corrupted.  The packet is not changed.
    """
    if isinstance(packet, (str, bytes, tuple)):
        raise TypeError('can only correct mutable packets in place, not {0}.'
                        .format(type(packet).__name__))
    return _correct(packet, syndrome(packet, r))


def decode(received, r=None):
    """Decode a received packet, returning a corrected copy.

    Parameters
    ----------
    received : str or array of bits
        The packet as received.
    r : int, optional
        Number of parity bits.  By default, inferred from the length, with
        a warning if no Hamming code produces packets of that length.

    Returns
    -------
    decoded : `HammingDecoded`
        With the corrected packet (of the same type as the input), the
        1-based position of the corrected bit (0 if none), and the syndrome.
    """
    packet = bit_array(received)
    if r is None:
        if not _is_packet_length(len(packet)):
            warnings.warn("no Hamming code has packets of {0} bits; "
                          "assuming {1} parity bits."
                          .format(len(packet), len(packet).bit_length()))
        r = len(packet).bit_length()
    check_bits = syndrome(packet, r)
    position = _correct(packet, check_bits)
    return HammingDecoded(like_input(packet, received), position, check_bits)


def extract_data(packet):
    """Extract the data bits from a packet, dropping the parity bits."""
    bits = bit_array(packet)
    return like_input(HammingCode.from_packet_length(len(bits))
                      .extract(bits), packet)
