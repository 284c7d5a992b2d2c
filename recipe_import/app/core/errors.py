"""Errors raised when a caller breaks an argument contract.

Malformed recipe data never raises; it degrades to "not found", an unconverted
amount or a low-confidence conversion. These errors signal programming mistakes.
"""

from typing import Any, Tuple, Type, Union


class InputContractError(TypeError):
    """An argument had the wrong type for the operation it was passed to."""

    def __init__(self, argument: str, expected: str, value: Any):
        self.argument = argument
        self.expected = expected
        super().__init__(f"{argument} must be {expected}, got {type(value).__name__}")


def require_type(
    value: Any,
    argument: str,
    expected: Union[Type, Tuple[Type, ...]],
    description: str,
) -> None:
    """Raise InputContractError unless value is an instance of expected."""
    # bool is an int subclass but never a valid quantity
    if isinstance(value, bool) or not isinstance(value, expected):
        raise InputContractError(argument, description, value)
