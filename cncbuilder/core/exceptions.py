"""
CncBuilder - Exceptions
=======================
Exception hierarchy for programmatic misuse of the core.

Expected domain outcomes (pieces that do not fit, inconsistent cut
parameters) are returned as data; these exceptions only signal caller bugs
or broken configuration.
"""


class CncBuilderError(Exception):
    """Base exception for every cncbuilder error"""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"[{self.code}] {self.message} | Details: {self.details}"
        return f"[{self.code}] {self.message}"


# ============================================================
# Validation Errors
# ============================================================

class ValidationError(CncBuilderError):
    """Invalid input data"""
    pass


class InvalidFieldValueError(ValidationError):
    """Field holds a value outside its allowed range"""

    def __init__(self, field: str, value, reason: str = None):
        super().__init__(
            f"Invalid value for field '{field}': {value}" + (f" - {reason}" if reason else ""),
            code="INVALID_FIELD_VALUE",
            details={"field": field, "value": value, "reason": reason}
        )


class InvalidCutParametersError(ValidationError):
    """Depth / feed configuration is numerically inconsistent"""

    def __init__(self, reason: str, errors: list = None):
        super().__init__(
            reason,
            code="INVALID_CUT_PARAMETERS",
            details={"errors": errors or [reason]}
        )
        self.reason = reason
        self.errors = errors or [reason]


# ============================================================
# Nesting Errors
# ============================================================

class NestingError(CncBuilderError):
    """Nesting engine called with arguments no caller should pass"""
    pass


class UnknownNestingMethodError(NestingError):
    """Method tag outside greedy / shelf / guillotine"""

    def __init__(self, method):
        super().__init__(
            f"Unknown nesting method: {method}",
            code="UNKNOWN_NESTING_METHOD",
            details={"method": method}
        )


# ============================================================
# Configuration Errors
# ============================================================

class ConfigurationError(CncBuilderError):
    """Configuration file or environment cannot be used"""

    def __init__(self, message: str, path: str = None):
        super().__init__(
            message,
            code="CONFIGURATION_ERROR",
            details={"path": path} if path else None
        )
