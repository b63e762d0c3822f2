# Licensed under the GPLv3 - see LICENSE
"""Cyclic redundancy checks using modulo-2 polynomial division.

See https://en.wikipedia.org/wiki/Cyclic_redundancy_check

The division is done on arrays of bits, where the leading bit of the
generator is always 1.  For a generator of length ``g``, data are
extended with ``g - 1`` zeros, and the generator is XOR-ed in place onto
the extended data wherever a 1 is found, until all original data bits have
been passed.  The last ``g - 1`` bits are then the remainder, or CRC.
Appending this CRC to the data gives a codeword whose remainder is zero,
which is what is verified on reception.
"""
from operator import index

import numpy as np

from ..base.utils import bit_array, bit_string, like_input
from ..base.errors import (InvalidGeneratorError, InputTooShortError,
                           GeneratorTooShortError)


__all__ = ['CRC4_ITU', 'CRC8_CCITT', 'CRC12', 'CRC16', 'CRC16_CCITT',
           'CRC', 'compute_remainder', 'append_crc', 'verify']


CRC4_ITU = 0x13
"""CRC-4-ITU generator, x^4 + x + 1, i.e., '10011'."""
CRC8_CCITT = 0x107
"""CRC-8-CCITT generator, x^8 + x^2 + x + 1."""
CRC12 = 0x180f
"""CRC-12 generator, x^12 + x^11 + x^3 + x^2 + x + 1.

Used for Mark 4 VLBI headers; see page 4 of
https://www.haystack.mit.edu/tech/vlbi/mark5/docs/230.3.pdf
"""
CRC16 = 0x18005
"""CRC-16-IBM generator, x^16 + x^15 + x^2 + 1, i.e., 0x18005."""
CRC16_CCITT = 0x11021
"""CRC-16-CCITT generator, x^16 + x^12 + x^5 + 1."""


class CRC:
    """Cyclic Redundancy Check.

    Once initialised, the instance can be used as a function that calculates
    the CRC, or one can use the ``check`` method to verify that the CRC at
    the end of a codeword is correct.

    Parameters
    ----------
    generator : str, int, or array of bits
        Generator polynomial.  As a bit string, the leading bit is for the
        highest power; e.g., '10011' for x^4 + x + 1.  If an integer, its
        binary representation is used, i.e., 0x13 for the same polynomial.

    Raises
    ------
    InvalidGeneratorError
        If the generator does not start with a 1.
    GeneratorTooShortError
        If the generator has fewer than two bits.

    Notes
    -----
    Data passed in can be bit strings or arrays, in which case the CRC is
    returned as the same type, or non-negative integers.  For the latter,
    the binary representation is used, and the CRC is returned as integer.
    """

    def __init__(self, generator):
        try:
            generator = '{:b}'.format(index(generator))
        except TypeError:
            pass

        self.generator = bit_array(generator)
        if len(self.generator) < 2:
            raise GeneratorTooShortError(
                'generator should have at least two bits, not {0}.'
                .format(len(self.generator)))
        if self.generator[0] != 1:
            raise InvalidGeneratorError('leading bit of generator must be 1.')

        self.polynomial = int(bit_string(self.generator), base=2)

    def __len__(self):
        return len(self.generator) - 1

    def __repr__(self):
        return "{0}('{1}')".format(type(self).__name__,
                                   bit_string(self.generator))

    def __call__(self, data):
        """Calculate the CRC for the given data.

        Parameters
        ----------
        data : str, array of bits, or int
            The data to calculate the CRC for.  Should contain at least one
            bit.

        Returns
        -------
        crc : str, array, or int
            Of the same type as the input.  For str and array, with a
            length equal to that of the CRC.
        """
        return self._crc(data, extend=True)

    def encode(self, data):
        """Append the CRC to the data, giving the codeword to transmit."""
        try:
            scalar = index(data)
        except TypeError:
            pass
        else:
            return (scalar << len(self)) | self(scalar)

        bits = bit_array(data)
        codeword = np.hstack((bits, self(bits)))
        return like_input(codeword, data)

    def residue(self, received):
        """Remainder of the received codeword.

        This is all zero if the CRC at the end of the codeword is correct.
        If not, it can be useful to show what the remainder was.

        Parameters
        ----------
        received : str, array of bits, or int
            The codeword.  If not an integer, it should be at least as long
            as the generator.

        Returns
        -------
        residue : str, array, or int
            Of the same type as the input.
        """
        return self._crc(received)

    def check(self, received):
        """Check that the CRC at the end of the codeword is correct.

        Parameters
        ----------
        received : str, array of bits, or int
            The codeword, with the CRC as the last ``len(self)`` bits.

        Returns
        -------
        ok : bool
             `True` if the calculated remainder is all zero (which should be
             the case if the codeword was received without errors).

        Notes
        -----
        An integer codeword is not checked for length, since its leading
        zeros are immaterial: ``0`` passes for any generator.  A bit stream,
        in contrast, has an explicit length and raises `InputTooShortError`
        if it is shorter than the generator.
        """
        residue = self._crc(received)
        if isinstance(residue, int):
            return residue == 0
        return not np.any(bit_array(residue))

    def _crc(self, stream, extend=False):
        try:
            scalar = index(stream)
        except TypeError:
            return self._crc_stream(stream, extend=extend)
        else:
            return self._crc_scalar(scalar, extend=extend)

    def _crc_scalar(self, scalar, extend=False):
        """Internal function to calculate the CRC for a scalar."""
        if scalar < 0:
            raise ValueError('cannot calculate a CRC for negative integers.')
        if extend:
            scalar <<= len(self)

        # Use bit_length() to find where the highest remaining set bit is,
        # skipping all the zeros where nothing needs to be done.
        nbp = self.polynomial.bit_length()
        nbs = scalar.bit_length()
        while nbs >= nbp:
            scalar ^= self.polynomial << nbs-nbp
            nbs = scalar.bit_length()

        return scalar

    def _crc_stream(self, stream, extend=False):
        """Internal function to calculate the CRC for a bit stream."""
        bits = bit_array(stream)
        ncrc = len(self)
        if extend:
            if len(bits) < 1:
                raise InputTooShortError('need at least one bit of data.')
            bits = np.hstack((bits, np.zeros(ncrc, bits.dtype)))
        elif len(bits) <= ncrc:
            raise InputTooShortError(
                'codeword of {0} bits cannot hold data and a {1}-bit CRC.'
                .format(len(bits), ncrc))

        # bits is our own copy, so we can XOR in place.  A leading 0 just
        # means moving on to the next bit.
        for i in range(len(bits) - ncrc):
            if bits[i]:
                bits[i:i+ncrc+1] ^= self.generator

        return like_input(bits[-ncrc:], stream)


def compute_remainder(data, generator):
    """Calculate the CRC remainder of data for the given generator.

    Parameters
    ----------
    data : str or array of bits
        Data for which to calculate the CRC.
    generator : str, int, or array of bits
        Generator polynomial, with leading bit 1.

    Returns
    -------
    remainder : str or array
        With length one less than the generator.
    """
    return CRC(generator)(data)


def append_crc(data, generator):
    """Append the CRC remainder to data, giving a codeword."""
    return CRC(generator).encode(data)


def verify(received, generator):
    """Whether a received codeword has zero remainder for the generator."""
    return CRC(generator).check(received)
