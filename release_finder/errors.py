"""
Exceptions raised while finding releases and fetching their assets
"""


class FetchError(Exception):
    """Base class for every error raised by release_finder"""


class TransportError(FetchError):
    """The HTTP request itself failed (DNS, connection, TLS, timeout)"""

    def __init__(self, url: str, reason):
        self.url = url
        self.reason = reason
        super().__init__(f'Request to {url} failed: {reason}')


class HTTPStatusError(TransportError):
    """The server answered with a non-success status code"""

    def __init__(self, url: str, status_code: int, reason=None):
        self.status_code = status_code
        super().__init__(url, reason or f'HTTP {status_code}')


class MalformedResponse(FetchError):
    def __init__(self, url: str, detail: str):
        self.url = url
        self.detail = detail
        super().__init__(f'Unexpected response from {url}: {detail}')


class MissingField(FetchError):
    """A required field is absent, or has the wrong type, on a JSON record"""

    def __init__(self, field: str, record=None):
        self.field = field
        self.record = record
        super().__init__(f'Record is missing required field {field!r}')


class ConfigConsumed(FetchError):
    def __init__(self):
        super().__init__('ReleaseFinderConfig has already been used to find a release')
