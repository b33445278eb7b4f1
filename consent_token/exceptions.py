"""
Custom Exceptions for the Consent Token package

Two failure families exist when reading a token: input that cannot be
decoded at all, and input that decodes but does not describe a valid token.
Public parse functions report both as ``None``; these exceptions carry the
reason between internal layers and into the logs.
"""

from typing import Optional, Dict, Any

from .constants import ErrorCodes


class TokenError(Exception):
    """
    Base exception for all consent token errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        details: Additional context about the error
    """

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCodes.TOKEN_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary suitable for structured logs"""
        result: Dict[str, Any] = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class MalformedInputError(TokenError):
    """Raised when input is not decodable base64/JSON or has the wrong root type"""

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCodes.MALFORMED_INPUT,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code, details)


class SchemaMismatchError(TokenError):
    """Raised when decoded input violates the token schema"""

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCodes.SCHEMA_MISMATCH,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, error_code, details)


class UnsupportedVersionError(SchemaMismatchError):
    """Raised when the version tag is missing or not a known schema version"""

    def __init__(self, version: Any):
        super().__init__(
            message=f"Unsupported token version: {version!r}",
            error_code=ErrorCodes.UNSUPPORTED_VERSION,
            field="version",
            details={"version": version}
        )
