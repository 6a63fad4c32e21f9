class ClauseWiseError(Exception):
    """Base class for failures that are reported to the caller.

    ``message`` is safe to show to the user; the exception chain carries the
    underlying cause for the logs.
    """

    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidInput(ClauseWiseError):
    status_code = 400


class ExtractionError(ClauseWiseError):
    status_code = 400


class EmptyContent(ClauseWiseError):
    status_code = 400


class ContractNotFound(ClauseWiseError):
    status_code = 404

    def __init__(self, message='Contract not found'):
        super().__init__(message)


class GenerationError(ClauseWiseError):
    status_code = 500

    def __init__(self, message='Analysis service unavailable. Please try again.'):
        super().__init__(message)


class AnalysisFormatError(Exception):
    """The model reply could not be parsed into a valid analysis."""
