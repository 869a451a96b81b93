"""Describable: the common interface of notation elements."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Describable(Protocol):
    """Anything that can be written out in phonological notation.

    Segments, feature bundles and rules all provide ``describe()``;
    renderers only need this one capability to display a rule component.
    """

    def describe(self) -> str:
        """Return the element in conventional notation."""
        ...
