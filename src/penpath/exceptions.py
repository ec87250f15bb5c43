"""Exception hierarchy for penpath.

The interactive core never raises these during an edit; they surface from
document loading, the CLI harness, and direct misuse of the geometry API.
"""


class PenPathError(Exception):
    """Base exception for all penpath errors."""

    pass


class DocumentError(PenPathError):
    """Errors related to loading or saving path documents."""

    pass


class DocumentLoadError(DocumentError):
    """Error loading a path or event-script document."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load document '{path}': {reason}")


class DocumentSaveError(DocumentError):
    """Error saving a path document or SVG export."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save document '{path}': {reason}")


class DocumentFormatError(DocumentError):
    """Document is valid JSON but not a valid penpath document."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid document format '{path}': {details}")


class GeometryError(PenPathError):
    """Errors in geometric calculations."""

    pass


class SegmentError(GeometryError):
    """Invalid segment construction or segment lookup."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class EventScriptError(PenPathError):
    """An entry of an event script could not be interpreted."""

    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        self.reason = reason
        super().__init__(f"Invalid event #{index}: {reason}")
