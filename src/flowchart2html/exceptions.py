"""Custom exceptions for flowchart2html."""


class Flowchart2htmlError(Exception):
    """Base exception for flowchart2html operations."""


class FetchError(Flowchart2htmlError):
    """The flowchart data could not be retrieved or decoded."""


class MalformedTreeError(Flowchart2htmlError):
    """The flowchart payload lacks a usable root or a node lacks required fields."""


class DuplicateIdError(MalformedTreeError):
    """Two or more nodes share the same id."""


class ToggleError(Flowchart2htmlError):
    """A visibility toggle was applied to a node outside the mounted tree."""
