"""Descriptive phonological notation: feature bundles and rules."""

from phonolo.notation.base import Describable
from phonolo.notation.bundle import FeatureBundle
from phonolo.notation.rule import Rule

__all__ = ["Describable", "FeatureBundle", "Rule"]
