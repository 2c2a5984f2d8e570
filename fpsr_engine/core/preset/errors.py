# ========================
# file: fpsr_engine/core/preset/errors.py
# ========================
class PresetError(Exception):
    """Base error for preset system."""


class ValidationError(PresetError):
    """Raised when a preset fails validation."""


class NotFoundError(PresetError):
    """Raised when a preset id or path cannot be resolved."""


class ReplayError(PresetError):
    """Raised when a recorded trace does not reproduce."""
