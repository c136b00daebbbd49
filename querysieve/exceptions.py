"""
Exception classes for querysieve.
"""


class QuerySieveError(Exception):
    """Base exception for all querysieve errors."""
    pass


class ConfigurationError(QuerySieveError):
    """Raised when a request does not fit the configured catalogs."""
    pass


class FieldNotAllowedError(ConfigurationError):
    """Raised when a body filter names a field outside the whitelist."""
    def __init__(self, field):
        super().__init__(f"The field '{field}' is not allowed")
        self.field = field


class FilterNotBodyCapableError(ConfigurationError):
    """Raised when a filter that cannot run from a body is used in one."""
    def __init__(self, filter_name: str):
        super().__init__(f"The filter '{filter_name}' does not support body request")
        self.filter_name = filter_name


class InvalidValueError(QuerySieveError, ValueError):
    """Raised when a raw value cannot be parsed or coerced."""
    pass


class BackendError(QuerySieveError):
    """Raised by query builder implementations."""
    pass


class UnsupportedOperatorError(BackendError):
    """Raised when a backend can't express an operator or value shape."""
    def __init__(self, operator, backend: str, detail: str = ""):
        message = f"Operator {operator.name} is not supported by {backend}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.operator = operator
        self.backend = backend
