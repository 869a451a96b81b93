"""Data models for phonological segments and feature inventories.

Pure in-memory containers with no I/O. A Segment is an immutable
(symbol, feature specification, name) triple; an Inventory owns a set of
Segments keyed by symbol together with a derived natural-class index
(feature -> value -> segments) that is kept consistent on every insertion.
"""

from __future__ import annotations

import json
import logging
import unicodedata
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, Mapping

if TYPE_CHECKING:
    from phonolo.transcription.tokenizer import Tokenizer


logger = logging.getLogger(__name__)


def normalize_symbol(symbol: str) -> str:
    """Return the NFC form of a transcription symbol or string."""
    return unicodedata.normalize("NFC", symbol)


@dataclass(frozen=True, eq=False)
class Segment:
    """A single phonological segment.

    The symbol is NFC-normalized on construction and the feature
    specification is stored as a read-only copy, so a Segment never
    changes after it has been indexed. Use ``with_features()`` to derive
    an edited copy.

    Hashable so segments are usable in sets and as dict keys.

    Attributes:
        symbol: Transcription symbol (e.g., 'p', 't͡ʃ', 'ɛ̃').
        features: Mapping of feature name to value (e.g., {'voice': '+'}).
            Any string is a legal value.
        name: Optional human-readable label.
    """

    symbol: str
    features: Mapping[str, str] = field(default_factory=dict)
    name: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.symbol, str):
            raise TypeError(
                f"Segment symbol must be a string, got {type(self.symbol).__name__}"
            )
        if not self.symbol.strip():
            raise ValueError(
                f"Segment symbol must contain a non-whitespace character, "
                f"got {self.symbol!r}"
            )

        features = self.features if self.features is not None else {}
        if not isinstance(features, Mapping):
            raise TypeError(
                f"Features for {self.symbol!r} must be a mapping, "
                f"got {type(features).__name__}"
            )

        object.__setattr__(self, "symbol", normalize_symbol(self.symbol))
        object.__setattr__(self, "features", MappingProxyType(dict(features)))

    def with_features(
        self, changes: Mapping[str, str] | None = None, /, **kwargs: str
    ) -> Segment:
        """Return a copy of this segment with some feature values replaced.

        Feature names that are not valid identifiers (e.g. 'spread gl')
        can be passed in the ``changes`` mapping.
        """
        features = dict(self.features)
        features.update(changes or {})
        features.update(kwargs)
        return Segment(self.symbol, features, self.name)

    def describe(self) -> str:
        """Return the notation for this segment: its symbol."""
        return self.symbol

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Segment):
            return NotImplemented
        if type(self) is not type(other):
            return False
        return (
            self.symbol == other.symbol
            and dict(self.features) == dict(other.features)
            and self.name == other.name
        )

    def __hash__(self) -> int:
        return hash((
            self.symbol,
            tuple(sorted(self.features.items())),
            self.name,
        ))

    def __repr__(self) -> str:
        name = f", name={self.name!r}" if self.name else ""
        return (
            f"Segment(symbol={self.symbol!r}, "
            f"features={len(self.features)}"
            f"{name})"
        )

    def __reduce__(self) -> tuple[Any, ...]:
        # mappingproxy cannot be pickled; rebuild from a plain dict
        return (type(self), (self.symbol, dict(self.features), self.name))


class _Placeholder(Segment):
    """A featureless placeholder used in rule notation.

    Placeholders are process-wide singletons: they compare equal only to
    themselves and are never copied.
    """

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __copy__(self) -> _Placeholder:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Placeholder:
        return self

    def __reduce__(self) -> str:
        # pickled by reference to the module-level singleton
        for name in _PLACEHOLDER_NAMES:
            if globals().get(name) is self:
                return name
        raise TypeError(f"Cannot pickle unregistered placeholder {self.symbol!r}")

    def __repr__(self) -> str:
        return f"<placeholder {self.symbol!r} ({self.name})>"


NULL = _Placeholder("∅", name="null")
CONSONANT = _Placeholder("C", name="consonant")
VOWEL = _Placeholder("V", name="vowel")
WORD_BOUNDARY = _Placeholder("#", name="word boundary")

_PLACEHOLDER_NAMES = ("NULL", "CONSONANT", "VOWEL", "WORD_BOUNDARY")

Segment.NULL = NULL  # type: ignore[attr-defined]
Segment.C = CONSONANT  # type: ignore[attr-defined]
Segment.V = VOWEL  # type: ignore[attr-defined]
Segment.WORD_BOUNDARY = WORD_BOUNDARY  # type: ignore[attr-defined]


@dataclass(frozen=True, eq=False)
class ChartMetadata:
    """Chart layout data attached to a feature system for renderers.

    Carried as-is and never interpreted by the inventory itself.

    Attributes:
        places: Column ordering for consonant charts (places of articulation).
        manners: Row ordering for consonant charts (manners of articulation).
        classify_consonant: Callback mapping a Segment to a (place, manner) cell.
        classify_vowel: Callback mapping a Segment to height/backness/rounding.
        extra: Any further renderer-specific settings.
    """

    places: tuple[Any, ...] = ()
    manners: tuple[Any, ...] = ()
    classify_consonant: Callable[..., Any] | None = None
    classify_vowel: Callable[..., Any] | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "places", tuple(self.places))
        object.__setattr__(self, "manners", tuple(self.manners))


class Inventory:
    """A set of segments plus a natural-class index over their features.

    An Inventory is either a root feature system (its own
    ``feature_system``) or is derived from one, in which case
    ``feature_system`` is a plain back reference to the parent.

    Inventories are built, then frozen: the classmethod constructors
    return frozen inventories, and an inventory created directly accepts
    ``add_segment()`` calls until ``freeze()`` is called. Frozen
    inventories are safe to query and tokenize from many threads.

    Args:
        segments: Segments to insert, in order.
        feature_system: Parent inventory these segments come from.
            None makes this inventory its own feature system.
        metadata: Optional chart metadata passed through to renderers.
    """

    def __init__(
        self,
        segments: Iterable[Segment] = (),
        feature_system: Inventory | None = None,
        metadata: ChartMetadata | None = None,
    ) -> None:
        self._segments: dict[str, Segment] = {}
        self._rank: dict[str, int] = {}
        # feature -> value -> symbol -> Segment
        self._index: dict[str, dict[str, dict[str, Segment]]] = {}
        self._feature_system = feature_system if feature_system is not None else self
        self._metadata = metadata
        self._frozen = False
        self._tokenizer: Tokenizer | None = None

        for segment in segments:
            self.add_segment(segment)

    # --- Construction ---

    @classmethod
    def from_table(
        cls,
        table: Mapping[str, Mapping[str, str]],
        names: Mapping[str, str] | None = None,
    ) -> Inventory:
        """Build a root feature system from a raw feature table.

        Args:
            table: Mapping of segment symbol to feature specification.
            names: Optional mapping of symbol to human-readable name.

        Returns:
            A frozen Inventory that is its own feature system.

        Raises:
            ValueError: If the table or any feature specification is malformed.
        """
        inv = cls(_segments_from_table(table, names))
        inv.freeze()
        return inv

    @classmethod
    def from_object(
        cls,
        obj: Mapping[str, Mapping[str, str]] | str,
        *,
        is_json: bool = False,
        metadata: ChartMetadata | None = None,
    ) -> Inventory:
        """Build a root feature system from a table object or JSON string.

        Args:
            obj: Feature table, or a JSON document encoding one if
                ``is_json`` is True.
            is_json: Whether ``obj`` is a JSON string.
            metadata: Chart metadata to attach for renderers.

        Raises:
            ValueError: If the JSON is invalid or the table is malformed.
        """
        if is_json:
            obj = json.loads(obj)
        inv = cls(_segments_from_table(obj), metadata=metadata)
        inv.freeze()
        return inv

    @classmethod
    def from_feature_system(
        cls,
        feature_system: Inventory,
        symbols: Iterable[str],
        distinctive: bool = True,
    ) -> Inventory:
        """Derive a sub-inventory containing the given segments.

        With ``distinctive`` set, every feature that takes a single value
        across the whole selection is dropped from all resulting segments.
        A segment lacking a feature does not count as a value for it.

        Args:
            feature_system: Parent inventory to draw segments from.
            symbols: Symbols of the segments to include. Duplicates collapse.
            distinctive: Keep only features that distinguish the selection.

        Returns:
            A frozen Inventory whose ``feature_system`` is the parent.

        Raises:
            KeyError: If a symbol is not in the parent inventory.
            TypeError: If ``symbols`` is a single string.
        """
        if isinstance(symbols, str):
            raise TypeError(
                "symbols must be an iterable of segment symbols, not a string"
            )

        selected: dict[str, Segment] = {}
        for symbol in symbols:
            segment = feature_system[symbol]
            if segment.symbol not in selected:
                selected[segment.symbol] = segment

        if distinctive:
            observed: dict[str, set[str]] = {}
            for segment in selected.values():
                for feature, value in segment.features.items():
                    observed.setdefault(feature, set()).add(value)
            redundant = {f for f, values in observed.items() if len(values) < 2}

            segments = [
                Segment(
                    s.symbol,
                    {f: v for f, v in s.features.items() if f not in redundant},
                    s.name,
                )
                for s in selected.values()
            ]
            logger.info(
                "Derived inventory of %d segments: %d distinctive features, "
                "%d non-distinctive dropped",
                len(segments), len(observed) - len(redundant), len(redundant),
            )
        else:
            segments = list(selected.values())

        inv = cls(segments, feature_system=feature_system)
        inv.freeze()
        return inv

    # --- Mutation ---

    def add_segment(self, segment: Segment) -> None:
        """Insert a segment, replacing any segment with the same symbol.

        The replaced segment's index entries are removed before the new
        ones are added.

        Raises:
            RuntimeError: If the inventory is frozen.
            TypeError: If ``segment`` is not a Segment.
        """
        if not isinstance(segment, Segment):
            raise TypeError(f"Expected a Segment, got {type(segment).__name__}")
        if self._frozen:
            raise RuntimeError(
                f"Cannot add segment {segment.symbol!r}: inventory is frozen"
            )

        previous = self._segments.get(segment.symbol)
        if previous is not None:
            logger.debug("Replacing segment %r", segment.symbol)
            self._unindex(previous)

        self._segments[segment.symbol] = segment
        if segment.symbol not in self._rank:
            self._rank[segment.symbol] = len(self._rank)

        for feature, value in segment.features.items():
            if feature not in self._index:
                self._index[feature] = {}
            if value not in self._index[feature]:
                self._index[feature][value] = {}
            self._index[feature][value][segment.symbol] = segment

        self._tokenizer = None

    def _unindex(self, segment: Segment) -> None:
        """Remove every index entry for a segment, pruning empty buckets."""
        for feature, value in segment.features.items():
            values = self._index[feature]
            del values[value][segment.symbol]
            if not values[value]:
                del values[value]
            if not values:
                del self._index[feature]

    def freeze(self) -> Inventory:
        """Disallow further insertions. Returns self."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        """Whether this inventory rejects further insertions."""
        return self._frozen

    # --- Queries ---

    def get_segments(
        self, constraints: Mapping[str, str] | None = None, **kwargs: str
    ) -> list[Segment]:
        """Return the natural class matching all feature constraints.

        Constraints may be given as a mapping, as keyword arguments, or
        both. No constraints match every segment. A feature or value that
        does not occur in this inventory yields an empty list.

        Args:
            constraints: Dict of {feature_name: required_value}.

        Returns:
            Matching segments, in inventory insertion order.
        """
        wanted = dict(constraints or {})
        wanted.update(kwargs)
        if not wanted:
            return list(self._segments.values())

        buckets = []
        for feature, value in wanted.items():
            bucket = self._index.get(feature, {}).get(value)
            if not bucket:
                return []
            buckets.append(bucket)

        buckets.sort(key=len)
        smallest, rest = buckets[0], buckets[1:]
        matches = [s for s in smallest if all(s in bucket for bucket in rest)]
        matches.sort(key=self._rank.__getitem__)
        return [self._segments[s] for s in matches]

    def get_values(self, feature: str) -> list[str]:
        """Distinct values of a feature, in first-seen order.

        An unknown feature yields an empty list.
        """
        return list(self._index.get(feature, {}))

    def next_value(self, feature: str, value: str) -> str:
        """Return the value following ``value`` among ``get_values(feature)``.

        Wraps around at the end. A value not observed in this inventory
        moves to the first observed value; an unknown feature leaves the
        value unchanged.
        """
        values = self.get_values(feature)
        if not values:
            return value
        if value not in values:
            return values[0]
        return values[(values.index(value) + 1) % len(values)]

    def get(self, symbol: str, default: Segment | None = None) -> Segment | None:
        """Look up a segment by symbol, returning ``default`` if absent."""
        return self._segments.get(normalize_symbol(symbol), default)

    def parse(self, text: str) -> list[Segment]:
        """Tokenize a transcription into this inventory's segments.

        Raises:
            TranscriptionError: If some part of the text matches no segment.
        """
        return self.tokenizer.parse(text)

    @property
    def tokenizer(self) -> Tokenizer:
        """Longest-match tokenizer over this inventory's symbols (cached)."""
        tokenizer = self._tokenizer
        if tokenizer is None:
            from phonolo.transcription.tokenizer import Tokenizer

            tokenizer = Tokenizer(self)
            self._tokenizer = tokenizer
        return tokenizer

    # --- Properties ---

    @property
    def segments(self) -> list[Segment]:
        """All segments in insertion order."""
        return list(self._segments.values())

    @property
    def symbols(self) -> list[str]:
        """All segment symbols in insertion order."""
        return list(self._segments)

    @property
    def feature_names(self) -> list[str]:
        """Names of all features present on at least one segment."""
        return list(self._index)

    @property
    def feature_system(self) -> Inventory:
        """The inventory this one was derived from (self for a root)."""
        return self._feature_system

    @property
    def is_root(self) -> bool:
        """Whether this inventory is its own feature system."""
        return self._feature_system is self

    @property
    def chart_metadata(self) -> ChartMetadata | None:
        """Chart metadata of this inventory or, failing that, its feature system."""
        if self._metadata is not None or self.is_root:
            return self._metadata
        return self._feature_system.chart_metadata

    # --- Container protocol ---

    def __getitem__(self, symbol: str) -> Segment:
        try:
            return self._segments[normalize_symbol(symbol)]
        except KeyError:
            raise KeyError(
                f"Unknown segment {symbol!r}. "
                f"Inventory has {len(self._segments)} segments."
            ) from None

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and normalize_symbol(symbol) in self._segments

    def __iter__(self) -> Iterator[Segment]:
        return iter(list(self._segments.values()))

    def __len__(self) -> int:
        return len(self._segments)

    # --- Serialization ---

    def to_table(self) -> dict[str, dict[str, str]]:
        """Export as a raw feature table accepted by ``from_table()``."""
        return {s.symbol: dict(s.features) for s in self._segments.values()}

    def to_dict(self) -> dict[str, Any]:
        """Export as a plain Python dict, suitable for JSON serialization."""
        return {
            "root": self.is_root,
            "features": self.feature_names,
            "segments": [
                {
                    "symbol": s.symbol,
                    "name": s.name,
                    "features": dict(s.features),
                }
                for s in self._segments.values()
            ],
        }

    def __repr__(self) -> str:
        kind = "root" if self.is_root else "derived"
        return (
            f"Inventory({kind}, "
            f"segments={len(self._segments)}, "
            f"features={len(self._index)}, "
            f"frozen={self._frozen})"
        )


# ---------------------------------------------------------------------------
# Internal table parsing helpers
# ---------------------------------------------------------------------------


def _segments_from_table(
    table: Mapping[str, Mapping[str, str]],
    names: Mapping[str, str] | None = None,
) -> list[Segment]:
    """Validate a raw feature table and turn each entry into a Segment."""
    if not isinstance(table, Mapping):
        raise ValueError(
            f"Feature table must be a mapping of symbol to features, "
            f"got {type(table).__name__}"
        )
    if names is None:
        names = {}

    segments: list[Segment] = []
    seen: dict[str, str] = {}
    for symbol, spec in table.items():
        if not isinstance(symbol, str) or not symbol.strip():
            raise ValueError(f"Invalid segment symbol in feature table: {symbol!r}")
        if not isinstance(spec, Mapping):
            raise ValueError(
                f"Invalid feature specification for {symbol!r}: "
                f"expected a mapping, got {type(spec).__name__}"
            )
        for feature, value in spec.items():
            if not isinstance(feature, str) or not isinstance(value, str):
                raise ValueError(
                    f"Invalid feature {feature!r}={value!r} for {symbol!r}: "
                    f"feature names and values must be strings"
                )
        segment = Segment(symbol, spec, names.get(symbol))
        if segment.symbol in seen:
            raise ValueError(
                f"Duplicate segment symbol in feature table: {symbol!r} "
                f"normalizes to the same symbol as {seen[segment.symbol]!r}"
            )
        seen[segment.symbol] = symbol
        segments.append(segment)
    return segments
