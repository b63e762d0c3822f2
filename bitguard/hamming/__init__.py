# Licensed under the GPLv3 - see LICENSE
"""Hamming single-error-correcting codec.

Parity bits are interleaved with the data at positions that are powers
of two, such that a single corrupted bit can be located from the syndrome
and flipped back.
"""
from .hamming import (HammingCode, HammingDecoded,  # noqa
                      redundant_bits_needed, encode, syndrome,
                      decode_and_correct, decode, extract_data)
