# Licensed under the GPLv3 - see LICENSE
"""Binary error control codecs: cyclic redundancy checks and Hamming codes."""
from importlib.metadata import version as _version, PackageNotFoundError

from . import crc, hamming  # noqa
from .base.errors import (BitguardError, InvalidGeneratorError,  # noqa
                          InputTooShortError, GeneratorTooShortError,
                          UncorrectableSyndromeError)

try:
    __version__ = _version('bitguard')
except PackageNotFoundError:
    __version__ = ''

# Define minima for the documentation, but do not bother to explicitly check.
__minimum_python_version__ = '3.10'
__minimum_astropy_version__ = '5.1'
__minimum_numpy_version__ = '1.24'
