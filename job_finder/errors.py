"""Exceptions raised across the job finder."""

UNSUPPORTED_FILE_MESSAGE = "Please upload a PDF or Image file."
EMPTY_LOCATION_MESSAGE = "Please enter a location"
ANALYSIS_FAILED_MESSAGE = "We couldn't parse that file. Please try a different PDF or Image."
SEARCH_FAILED_MESSAGE = "Search failed due to a network issue. Please try again."


class JobFinderError(Exception):
    """Base class for all job finder errors."""


class ValidationError(JobFinderError):
    """User input rejected before any remote call is made."""

    message = "Invalid input"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class UnsupportedFileTypeError(ValidationError):
    message = UNSUPPORTED_FILE_MESSAGE


class EmptyLocationError(ValidationError):
    message = EMPTY_LOCATION_MESSAGE


class FileEncodingError(JobFinderError):
    """The uploaded file could not be read or encoded."""


class AnalysisError(JobFinderError):
    """Resume analysis call failed or returned an unusable payload."""


class SearchError(JobFinderError):
    """Grounded job search call failed."""


class InvalidTransitionError(JobFinderError):
    """Wizard operation not permitted from the current step."""

    def __init__(self, operation: str, step):
        super().__init__(f"Cannot {operation} while in step {step.value}")
        self.operation = operation
        self.step = step
