"""Publish pipeline exceptions"""

from pathlib import Path


class PublishError(Exception):
    """Base class for document-level pipeline failures."""

    def __init__(self, message: str, path: Path = None):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class ExtractionError(PublishError):
    """Required metadata could not be read from a source document."""


class MissingTitleError(ExtractionError):
    """No title directive in the document."""


class MissingOrInvalidDateError(ExtractionError):
    """No date directive, or the first one does not hold a valid timestamp."""


class BodyMarkerNotFoundError(PublishError):
    """A rendered page does not contain the body markers."""


class PublishIOError(PublishError):
    """Reading a source or writing an output file failed."""


class OutputCollisionError(PublishError):
    """Two sources, or a source and an aggregate, would write the same output file."""
