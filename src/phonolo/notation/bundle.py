"""FeatureBundle: a partial feature specification denoting a natural class."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from phonolo.inventory.models import Inventory, Segment


@dataclass(frozen=True, eq=False)
class FeatureBundle:
    """A bracketed set of feature values, e.g. [+syllabic, +high].

    Immutable; editing methods return new bundles.

    Attributes:
        features: Mapping of feature name to value.
    """

    features: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "features", MappingProxyType(dict(self.features)))

    def natural_class(self, inventory: Inventory) -> list[Segment]:
        """Segments of ``inventory`` that carry every value in this bundle."""
        return inventory.get_segments(self.features)

    def with_value(self, feature: str, value: str) -> FeatureBundle:
        """Return a copy with ``feature`` set to ``value``."""
        features = dict(self.features)
        features[feature] = value
        return FeatureBundle(features)

    def cycle(self, feature: str, inventory: Inventory) -> FeatureBundle:
        """Advance one feature to its next value observed in ``inventory``.

        Values wrap around in the inventory's first-seen order.

        Raises:
            KeyError: If the bundle does not specify ``feature``.
        """
        if feature not in self.features:
            raise KeyError(f"Feature {feature!r} is not in this bundle")
        return self.with_value(
            feature, inventory.next_value(feature, self.features[feature])
        )

    def describe(self) -> str:
        """Return the bundle in bracket notation, e.g. '[+voice, -nasal]'."""
        return "[" + ", ".join(f"{v}{f}" for f, v in self.features.items()) + "]"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FeatureBundle):
            return NotImplemented
        return dict(self.features) == dict(other.features)

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.features.items())))

    def __len__(self) -> int:
        return len(self.features)
