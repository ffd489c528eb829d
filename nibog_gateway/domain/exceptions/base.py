"""Base domain exception."""


class DomainException(Exception):
    """
    Base exception for payment and booking errors.

    The code is a stable machine-readable identifier returned to API
    clients; the message is for humans.
    """

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"
