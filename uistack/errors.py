"""
Exceptions raised by the UI layer stack.

Only registry problems surface as exceptions; the manager recovers from them
locally and reports the failed open as a ``None`` result.
"""


class UIStackError(RuntimeError):
    """Base exception for the UI layer stack"""
    pass


class TemplateNotFoundError(UIStackError):
    """Raised when no factory is registered for a type tag"""
    pass


class DuplicateTemplateError(UIStackError):
    """Raised when a type tag is registered twice"""
    pass


class InvalidTemplateError(UIStackError):
    """
    Raised when a factory does not hand back a fresh UI.

    Treated by the manager exactly like a missing template.
    """
    pass


class CollectionError(UIStackError):
    """Raised when a layer collection would end up holding an instance twice"""
    pass
