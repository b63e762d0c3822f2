# Licensed under the GPLv3 - see LICENSE
"""Helpers for exercising the codecs, such as a simulated noisy channel."""
