"""Exception types raised at the system boundary."""


class TypewriterError(Exception):
    """Base class for typewriter errors."""


class CollaboratorError(TypewriterError):
    """A file-system collaborator failed (dialog or write)."""


class DialogCancelled(CollaboratorError):
    """The user dismissed a file dialog."""


class ImageDecodeError(TypewriterError):
    """Image bytes could not be decoded into a displayable surface."""
