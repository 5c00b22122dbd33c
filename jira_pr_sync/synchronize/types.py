"""Type hints for the synchronize module."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class HasName(Protocol):
    """Protocol for objects that have a name attribute."""

    name: str | None


LabelType = str | dict[str, Any] | HasName | None
"""Any of the shapes in which GitHub returns an issue or pull request label."""
