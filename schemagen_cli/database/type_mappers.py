"""Classification of raw SQL column types into semantic types."""

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .models import SemanticType

ENUM_PATTERN = re.compile(r"^\s*(ENUM|SET)\s*\((.*)\)\s*$", re.IGNORECASE | re.DOTALL)
USER_DEFINED = "USER-DEFINED"


@dataclass(frozen=True)
class TypeInfo:
    """Result of classifying a raw column type."""
    raw_type: str
    semantic_type: SemanticType
    enum_options: Tuple[str, ...] = ()
    is_fractional: bool = False


def rewrite_user_defined(raw_type: str, special: Optional[Sequence[str]]) -> str:
    """Turn a Postgres ``USER-DEFINED`` enum into an ``ENUM(...)`` type string."""
    if raw_type == USER_DEFINED and special:
        return "ENUM(" + ",".join(f'"{value}"' for value in special) + ")"
    return raw_type


def parse_enum_options(raw_type: str) -> List[str]:
    """Return the value list of an ``ENUM(...)``/``SET(...)`` type, in order.

    Returns an empty list for any other type.
    """
    match = ENUM_PATTERN.match(raw_type or "")
    if not match:
        return []
    options = []
    for part in match.group(2).split(","):
        value = part.strip().replace("'", "").replace('"', "")
        if value and value not in options:
            options.append(value)
    return options


def is_integer_like(raw_type: str) -> bool:
    """Integer-like types eligible for the ``primary`` field rendering."""
    return re.match(r"^(smallint|mediumint|tinyint|int|bigint|long)", (raw_type or "").lower()) is not None


class TypeClassifier:
    """Maps raw SQL types to the semantic type vocabulary.

    Rules are checked in order; the first match wins. Enumerations are checked
    before anything else so their value lists never match another rule.
    """

    BOOLEAN_TYPES = {"boolean", "bit(1)", "bit", "tinyint(1)"}

    RULES: List[Tuple[str, SemanticType, bool]] = [
        (r"^(smallint|mediumint|tinyint|int|bigint)", SemanticType.INTEGER, False),
        (r"^(varchar|char|string)", SemanticType.TEXT, False),
        (r"varying|nvarchar", SemanticType.TEXT, False),
        (r"^(uuid|uniqueidentifier|geometry)", SemanticType.TEXT, False),
        (r"text|ntext$", SemanticType.TEXTAREA, False),
        (r"^(date|timestamp|time)", SemanticType.DATE, False),
        (r"^(real|float|float4|float8|double|numeric|decimal)", SemanticType.INTEGER, True),
        (r"^(jsonb|json)", SemanticType.TEXTAREA, False),
    ]

    FALLBACK = SemanticType.TEXT

    def __init__(self):
        self._rules = [(re.compile(pattern), semantic, fractional) for pattern, semantic, fractional in self.RULES]

    def classify(self, raw_type: Optional[str]) -> SemanticType:
        """Classify a raw type. Never raises; unknown types become ``text``."""
        return self.classify_column(raw_type).semantic_type

    def classify_column(self, raw_type: Optional[str], special: Optional[Sequence[str]] = None) -> TypeInfo:
        """Classify a raw type, keeping enum options and numeric precision."""
        raw = rewrite_user_defined(raw_type or "", special)

        options = parse_enum_options(raw)
        if options:
            return TypeInfo(raw, SemanticType.SELECT, tuple(options))

        lowered = raw.strip().lower()
        if lowered in self.BOOLEAN_TYPES:
            return TypeInfo(raw, SemanticType.BOOLEAN)

        for pattern, semantic, fractional in self._rules:
            if pattern.search(lowered):
                return TypeInfo(raw, semantic, is_fractional=fractional)

        return TypeInfo(raw, self.FALLBACK)


_default_classifier = TypeClassifier()


def classify(raw_type: Optional[str]) -> SemanticType:
    """Classify a raw SQL type string with the default classifier."""
    return _default_classifier.classify(raw_type)


def classify_column(raw_type: Optional[str], special: Optional[Sequence[str]] = None) -> TypeInfo:
    """Classify a raw SQL type string, returning the full ``TypeInfo``."""
    return _default_classifier.classify_column(raw_type, special)
