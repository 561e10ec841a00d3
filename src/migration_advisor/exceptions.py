"""
Custom exceptions for the migration advisor.
"""


class MigrationAdvisorError(Exception):
    """Base exception for the migration advisor."""
    pass


class InvalidInventoryError(MigrationAdvisorError, ValueError):
    """Raised when an inventory (or a question about one) is missing or unusable."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class NarrativeGenerationError(MigrationAdvisorError):
    """Raised when the language model fails to produce narrative text."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)
