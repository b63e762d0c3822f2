# Licensed under the GPLv3 - see LICENSE
"""Exceptions raised by the codecs."""

__all__ = ['BitguardError', 'InvalidGeneratorError', 'InputTooShortError',
           'GeneratorTooShortError', 'UncorrectableSyndromeError']


class BitguardError(Exception):
    """Base class for errors raised while encoding or checking bits."""
    pass


class InvalidGeneratorError(BitguardError, ValueError):
    """CRC generator polynomial is malformed."""
    pass


class InputTooShortError(BitguardError, ValueError):
    """Bit string is too short for the requested operation."""
    pass


class GeneratorTooShortError(InvalidGeneratorError, InputTooShortError):
    """CRC generator has fewer than two bits."""
    pass


class UncorrectableSyndromeError(BitguardError, ValueError):
    """Syndrome points outside of a packet, i.e., more than one bit is bad.

    Parameters
    ----------
    position : int
        The (out of range) 1-based position encoded by the syndrome.
    syndrome : `~numpy.ndarray`
        The syndrome bits, in check order (i.e., least significant first).
    nbits : int
        Length of the packet.
    """
    def __init__(self, position, syndrome, nbits):
        self.position = position
        self.syndrome = syndrome
        self.nbits = nbits
        # Show the syndrome with the most significant check first.
        bits = ''.join('{:d}'.format(bit) for bit in syndrome[::-1])
        super().__init__(
            "syndrome (P{0}...P1) {1} gives position {2}, beyond the "
            "{3}-bit packet; more than one bit must have been corrupted."
            .format(len(syndrome), bits, position, nbits))
