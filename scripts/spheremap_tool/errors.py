"""Exceptions raised by spheremap_tool."""


class SpheremapError(Exception):
    """Base class for all spheremap_tool errors."""


class UsageError(SpheremapError):
    """Bad command line: wrong argument count, unknown option or bad value."""


class ImageLoadError(SpheremapError):
    """A cube face image is missing or could not be decoded."""

    def __init__(self, face, path, reason):
        self.face = face
        self.path = path
        self.reason = reason
        super().__init__(
            f"Could not load {face.label} face ({face.suffix}) from {path}: {reason}"
        )
