class AnalysisError(Exception):
    """
    Base class for failures surfaced at the service boundary.
    Rendered as {"error": message} with the class status code.
    """

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingInput(AnalysisError):
    status_code = 400


class InvalidAudio(MissingInput):
    pass


class PayloadTooLarge(AnalysisError):
    status_code = 413


class ProviderUnavailable(AnalysisError):
    status_code = 502


class MalformedProviderResponse(AnalysisError):
    status_code = 502
