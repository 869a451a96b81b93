"""Rule: a descriptive linear phonological rule, A → B / C _ D.

Rules are display structures only; nothing here applies them to forms.
"""

from __future__ import annotations

from dataclasses import dataclass

from phonolo.notation.base import Describable


@dataclass(frozen=True)
class Rule:
    """A linear rewrite rule.

    Each component is a Segment (including the NULL, C, V and
    WORD_BOUNDARY placeholders) or a FeatureBundle.

    Attributes:
        target: What the rule changes.
        result: What the target becomes.
        environment_left: Context to the left of the target.
        environment_right: Context to the right of the target.
    """

    target: Describable
    result: Describable
    environment_left: tuple[Describable, ...] = ()
    environment_right: tuple[Describable, ...] = ()

    def __post_init__(self) -> None:
        for component in (self.target, self.result):
            if not isinstance(component, Describable):
                raise TypeError(
                    f"Rule components must provide describe(), "
                    f"got {type(component).__name__}"
                )
        object.__setattr__(self, "environment_left", tuple(self.environment_left))
        object.__setattr__(self, "environment_right", tuple(self.environment_right))

    def describe(self) -> str:
        """Return the rule in standard notation, e.g. 't → ɾ / V _ V'."""
        left = " ".join(c.describe() for c in self.environment_left)
        right = " ".join(c.describe() for c in self.environment_right)
        environment = " ".join(part for part in (left, "_", right) if part)
        return f"{self.target.describe()} → {self.result.describe()} / {environment}"
