"""Exceptions raised by the tagger.

Configuration and input-contract errors derive from `ValueError` and lifecycle
errors from `RuntimeError`, so callers catching the builtin types keep working.
"""
from __future__ import annotations


class TaggerError(Exception):
    """Base class for every error raised by `aptag`."""


class ConfigurationError(TaggerError, ValueError):
    """An invalid epoch count, threshold or random source."""


class InputContractError(TaggerError, ValueError):
    """Malformed training or inference input."""


class NotTrainedError(TaggerError, RuntimeError):
    """The tagger was used before `train` completed."""


class AlreadyTrainedError(TaggerError, RuntimeError):
    """`train` was invoked on a tagger that is already trained."""
