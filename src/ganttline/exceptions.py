"""Custom exceptions for Ganttline.

Only the file-loading and CLI layers raise these. Scheduling itself never
fails: bad dates, dangling references and cycles all fall back silently.
"""


class GanttlineError(Exception):
    """Base exception for all Ganttline errors."""

    pass


class ParseError(GanttlineError):
    """Raised when a project file cannot be read or parsed."""

    pass


class ValidationError(GanttlineError):
    """Raised when project data does not match the expected structure."""

    pass
