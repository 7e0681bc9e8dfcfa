"""
errors.py
Exceptions raised across the query pipeline.
"""

from typing import Optional


class AnalysisError(Exception):
    """The question could not be turned into a valid query intent."""


class LanguageModelError(Exception):
    """The language model call failed or returned nothing usable."""


class PromptNotFoundError(Exception):
    """A prompt template does not exist in the prompt store."""


class ConfigurationError(Exception):
    """Required settings are missing from the environment."""


class ResourceNotFound(Exception):
    """The directory has no such resource in the requested scope."""


class DirectoryError(Exception):
    """Any other failure talking to the cloud directory."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code
