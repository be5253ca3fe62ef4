"""
Labeler Errors

Exception hierarchy shared by the policy loader, the GitHub client
and the runner.
"""

from typing import Optional


class LabelerError(Exception):
    """Base class for path labeler errors"""


class ConfigurationError(LabelerError):
    """The labeler policy document could not be turned into a Policy"""
    def __init__(self, message: str, label: Optional[str] = None):
        super().__init__(message)
        self.label = label
