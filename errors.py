from __future__ import annotations


class VectorPaintError(Exception):
    pass


class UnparsablePathError(VectorPaintError, ValueError):
    def __init__(self, remainder: str):
        self.remainder = remainder
        super().__init__(f"Unrecognized path in {remainder!r}")


class MissingRequiredParameterError(VectorPaintError, ValueError):
    def __init__(self, parameter_name: str, context: str = None):
        self.parameter_name = parameter_name
        message = f"Drawing parameter {parameter_name!r} is not set on the element or any ancestor"
        if context:
            message = f"{message} ({context})"
        super().__init__(message)
