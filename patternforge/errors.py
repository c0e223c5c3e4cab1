"""Exceptions raised by the generation engine."""


class PatternForgeError(Exception):
    """Base class for all engine errors."""


class InvalidParameter(PatternForgeError, ValueError):
    """A generation parameter was rejected before any drawing began."""


class GenerationCancelled(PatternForgeError):
    """The caller's cancel hook asked the render to stop."""
