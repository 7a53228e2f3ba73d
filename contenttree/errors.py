"""Error taxonomy for content-tree construction.

Every error is local and synchronous: the core performs no I/O, so nothing here
is retryable. Errors carry a JSON-friendly `context` mapping so presentation
layers can render the offending parameter/path and any suggestion verbatim.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def _normalize_context_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(key): _normalize_context_value(val) for key, val in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize_context_value(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


class ContentTreeError(ValueError):
    """Base error for content-tree failures."""

    def __init__(self, message: str, *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context: dict[str, Any] = {
            key: _normalize_context_value(val) for key, val in (context or {}).items()
        }

    @property
    def error_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        """Return a serializable description of the error."""

        return {"type": self.error_type, "message": str(self), "context": self.context}


class InvalidPathError(ContentTreeError):
    """A grouping path could not be parsed into segments."""

    def __init__(self, message: str, *, path: object) -> None:
        super().__init__(message, context={"path": path})
        self.path = path


class UnknownParameterError(ContentTreeError):
    """An item names a parameter its kind does not recognize.

    Attributes:
        parameter: The offending parameter name.
        kind: Item kind whose schema rejected the name.
        suggestion: Closest recognized parameter name, when one exists.
        available: Recognized parameter names, in schema order.
    """

    def __init__(
        self,
        *,
        parameter: str,
        kind: str,
        suggestion: str | None,
        available: Sequence[str] = (),
    ) -> None:
        message = f"Unknown parameter {parameter!r} for {kind}."
        if suggestion is not None:
            message += f" Did you mean {suggestion!r}?"
        if available:
            shown = ", ".join(list(available)[:6])
            message += f" Available parameters: {shown}{', ...' if len(available) > 6 else ''}."
        super().__init__(
            message,
            context={
                "parameter": parameter,
                "kind": kind,
                "suggestion": suggestion,
                "available": list(available),
            },
        )
        self.parameter = parameter
        self.kind = kind
        self.suggestion = suggestion
        self.available = tuple(available)


class TreeFrozenError(ContentTreeError):
    """A structural mutation was attempted on a frozen tree."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"Cannot {operation}: the tree is frozen. Build or copy a new tree instead.",
            context={"operation": operation},
        )
        self.operation = operation


class DuplicateGroupError(ContentTreeError):
    """A group was appended next to a sibling group with the same name."""

    def __init__(self, *, name: str) -> None:
        super().__init__(
            f"Group {name!r} already exists among its siblings; sibling group names must be unique.",
            context={"name": name},
        )
        self.name = name


class IncompatibleMergeError(ContentTreeError):
    """Two same-named groups cannot be combined.

    Raised when a path-segment group and a tabset-label group share a name under
    the same parent.
    """

    def __init__(self, *, name: str, parent_path: Sequence[str]) -> None:
        location = "/".join(parent_path) or "<root>"
        super().__init__(
            f"Group {name!r} under {location} is both a path group and a tabset-label group.",
            context={"name": name, "parent_path": list(parent_path)},
        )
        self.name = name
        self.parent_path = tuple(parent_path)


class InvalidItemError(ContentTreeError):
    """An item's parameters or placement are invalid."""

    def __init__(self, message: str, *, kind: str, errors: Sequence[str] = ()) -> None:
        super().__init__(message, context={"kind": kind, "errors": list(errors)})
        self.kind = kind
        self.errors = tuple(errors)
