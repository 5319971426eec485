"""Exceptions raised by the exercise generator."""


class ConfigurationError(ValueError):
    """Raised when an exercise configuration cannot be generated from.

    Validation happens before any random draws are made, so a failed call
    never returns partial output.
    """
