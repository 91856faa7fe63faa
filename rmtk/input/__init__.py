"""Input-layer public API for key decoding and dispatch.

``KeyReader`` turns raw terminal bytes into key tokens; ``KeyDispatcher``
applies those tokens to the navigator.
"""

from .dispatch import DispatchResult, KeyDispatcher
from .key_registry import KeyComboBinding, KeyComboRegistry
from .reader import ESC_SEQUENCE_TIMEOUT_MS, UNKNOWN_KEY, KeyReader

__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "UNKNOWN_KEY",
    "KeyReader",
    "KeyComboBinding",
    "KeyComboRegistry",
    "DispatchResult",
    "KeyDispatcher",
]
