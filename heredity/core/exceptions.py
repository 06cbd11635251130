"""Custom exceptions for heredity."""


class HeredityError(Exception):
    """Base exception for all heredity errors."""


class ConfigurationError(HeredityError):
    """Raised when configuration is invalid."""


class MisuseError(HeredityError):
    """Raised when an operation is called with arguments it cannot accept."""


class NotAConstructorError(MisuseError):
    """Raised when a class was expected but something else was given."""

    def __init__(self, message: str, value: object = None) -> None:
        super().__init__(message)
        self.value = value


class NotAMixinError(MisuseError):
    """Raised when a mixin cannot be applied to the given receiver."""


class HandlerError(MisuseError):
    """Raised when an event handler is not callable."""


class EventTypeError(MisuseError):
    """Raised when an event type is not a non-empty string."""


class DuplicateMixinError(MisuseError):
    """Raised when a mixin is applied twice under the ``error`` policy."""


class InheritanceError(HeredityError):
    """Raised when a class cannot be rewired onto a parent."""


class InheritanceCycleError(InheritanceError):
    """Raised when a superclass link would make a class its own ancestor."""

    def __init__(self, message: str, child: type | None = None, parent: type | None = None) -> None:
        super().__init__(message)
        self.child = child
        self.parent = parent
