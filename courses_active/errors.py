"""Errors raised by the course selection layer.

All of them are contract violations by the caller (bad field list, bad sort,
bad limit). They subclass ValueError so web handlers can answer with a 400.
Storage failures are not wrapped here; SQLAlchemy errors reach the caller as-is.
"""


class CourseQueryError(ValueError):
    """Base class for invalid course query options"""


class InvalidFieldRequest(CourseQueryError):
    """The requested field list has an unsupported shape or names an unknown field"""


class InvalidSortRequest(CourseQueryError):
    """A sort key names an unknown course field or an unknown direction"""


class InvalidLimit(CourseQueryError):
    """The row limit is not a non-negative integer"""
