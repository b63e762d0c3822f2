# Licensed under the GPLv3 - see LICENSE
"""Cyclic redundancy check codec.

Calculates the remainder of data under modulo-2 division by a generator
polynomial, and verifies received codewords by checking that their
remainder is zero.  Errors are only detected, never corrected.
"""
from .crc import (CRC, compute_remainder, append_crc, verify,  # noqa
                  CRC4_ITU, CRC8_CCITT, CRC12, CRC16, CRC16_CCITT)
