"""
Error types for the YouTube Tag Generator.
"""


class TagGeneratorError(Exception):
    """Base error for tag generation."""

    pass


class InvalidInputError(TagGeneratorError):
    """Raised when the caller's input can't be turned into tags."""

    pass


class JsonRpcError(TagGeneratorError):
    """Error surfaced to the client as a JSON-RPC error object."""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}
