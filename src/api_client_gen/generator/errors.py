"""Exceptions raised while generating client code.

A GenerationError is scoped to a single endpoint: the driver skips that
endpoint and carries on with the rest.
"""


class GenerationError(Exception):
    """Base exception for an endpoint that cannot be generated."""

    pass


class UnknownPathParameterError(GenerationError):
    """Raised when a path template names a part with no declared type."""

    def __init__(self, param: str, template: str):
        self.param = param
        self.template = template
        super().__init__(f"Path '{template}' references undeclared part '{param}'")


class VariantNameCollisionError(GenerationError):
    """Raised when two parameter signatures produce the same variant name."""

    def __init__(self, name: str, template: str, existing: str):
        self.name = name
        self.template = template
        self.existing = existing
        super().__init__(f"Path '{template}' and path '{existing}' both map to variant '{name}'")


class DuplicateFieldError(GenerationError):
    """Raised when distinct parameters of one path share a Python name."""

    def __init__(self, field: str, template: str):
        self.field = field
        self.template = template
        super().__init__(f"Path '{template}' has more than one part named '{field}' in Python")


class UnsupportedParameterTypeError(GenerationError):
    """Raised when a parameter's type has no rule for rendering it."""

    def __init__(self, param: str, raw_type: str):
        self.param = param
        self.raw_type = raw_type
        super().__init__(f"Parameter '{param}' has unsupported type '{raw_type}'")


class UnsupportedMethodsError(GenerationError):
    """Raised when an endpoint's HTTP methods cannot be chosen between."""

    def __init__(self, methods: list[str]):
        self.methods = methods
        super().__init__(f"Unexpected combination of methods: {', '.join(methods)}")


class InvalidOutputError(Exception):
    """Raised when emitted source fails to parse."""

    def __init__(self, errors: dict):
        self.errors = errors
        details = "; ".join(f"{name}: {msg}" for name, msg in errors.items())
        super().__init__(f"Generated code is invalid: {details}")
