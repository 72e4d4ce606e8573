"""Error taxonomy shared by the verification pipeline and its adapters."""


class TruthEngineError(Exception):
    """Base class for every recoverable pipeline error."""


class NetworkError(TruthEngineError):
    """A remote document could not be retrieved."""

    def __init__(self, message: str, url: str = ""):
        super().__init__(message)
        self.url = url


class FetchTimeoutError(NetworkError):
    """The remote host did not answer within the allotted time."""

    def __init__(self, url: str, timeout_ms: int):
        super().__init__(f"Request timeout after {timeout_ms}ms", url)
        self.timeout_ms = timeout_ms


class HttpStatusError(NetworkError):
    """The remote host answered with a non-2xx status."""

    def __init__(self, url: str, status_code: int):
        super().__init__(f"Status code {status_code}", url)
        self.status_code = status_code


class ParseError(TruthEngineError):
    """Model output or document content could not be interpreted."""


class ModelUnavailableError(TruthEngineError):
    """The language-model backend cannot be reached."""


class ModelTimeoutError(TruthEngineError):
    """The language-model backend did not answer in time."""


class InputValidationError(TruthEngineError):
    """A request is missing a required field."""


class DuplicateRecordError(TruthEngineError):
    """A ledger record already exists for the fingerprint."""

    def __init__(self, fingerprint: str):
        super().__init__(f"Verification already recorded for {fingerprint[:10]}...")
        self.fingerprint = fingerprint
