"""Calculator error types."""


class CalculatorError(ValueError):
    """Base error for calculator tool failures."""


class InvalidArgumentError(CalculatorError):
    """Raised when a tool receives the wrong number or shape of arguments."""


class DomainError(CalculatorError):
    """Raised when an input lies outside a function's mathematical domain."""
