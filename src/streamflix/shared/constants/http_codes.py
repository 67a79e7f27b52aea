"""HTTP status codes the TMDB client branches on."""


class HTTPStatusCodes:
    """Status codes and retry classification for TMDB responses."""

    UNAUTHORIZED = 401
    FORBIDDEN = 403
    TOO_MANY_REQUESTS = 429

    @staticmethod
    def is_client_error(code: int) -> bool:
        return 400 <= code < 500

    @staticmethod
    def is_server_error(code: int) -> bool:
        return 500 <= code < 600

    @classmethod
    def is_retryable(cls, code: int) -> bool:
        """429 and 5xx may succeed later; other 4xx will not.

        ``0`` means no HTTP response was received (timeout, connection).
        """
        if code == cls.TOO_MANY_REQUESTS:
            return True
        return not cls.is_client_error(code)
