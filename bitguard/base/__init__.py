# Licensed under the GPLv3 - see LICENSE
"""Base implementations shared between the codecs.

Both codecs work on bit strings, i.e., one-dimensional arrays of bits.  The
`~bitguard.base.utils` module contains the routines to convert strings of
'0' and '1', or sequences of integers, to such arrays and back, while
`~bitguard.base.errors` defines the exceptions raised when input cannot be
encoded, or a received string cannot be decoded.
"""
