"""Process execution helpers."""

from relver.platform.process import ProcessError, run

__all__ = ["ProcessError", "run"]
