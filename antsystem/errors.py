from __future__ import annotations


class AntSystemError(Exception):
    """Base class for errors raised by the solver."""


class InputError(AntSystemError, ValueError):
    """Malformed coordinate data, bad distance matrix or invalid parameters."""


class DomainError(AntSystemError, ArithmeticError):
    """Arithmetic fault or out-of-order call during tour construction."""
