"""Exception types raised by the intimation generator."""


class IntimationError(Exception):
    """Base class for every recoverable error in the application."""


class ExtractionFailure(IntimationError):
    """The extraction collaborator failed or returned an unusable result."""


class ClipboardFailure(IntimationError):
    """The clipboard sink rejected the copied text."""


class InvalidTransition(IntimationError):
    """An action was requested that the current session state does not allow."""
