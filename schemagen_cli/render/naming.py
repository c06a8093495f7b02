"""Identifier helpers shared by the renderers."""

import re

# Words the way lodash splits them: acronyms, capitalised words, lowercase runs, digits
WORD_PATTERN = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")
NON_IDENTIFIER = re.compile(r"[^a-zA-Z0-9_]+")


def capitalize(value: str) -> str:
    """Lowercase everything, then uppercase the first character."""
    value = value or ""
    return value[:1].upper() + value[1:].lower()


def lower_first(value: str) -> str:
    return value[:1].lower() + value[1:]


def camel_case(value: str) -> str:
    """Convert ``created_at`` / ``Created-At`` / ``createdAt`` to ``createdAt``."""
    words = WORD_PATTERN.findall(value or "")
    if not words:
        return ""
    return words[0].lower() + "".join(capitalize(w) for w in words[1:])


def normalize_table_name(table_name: str) -> str:
    """GraphQL type name for a table.

    The segment before the first underscore is treated as a module prefix and
    dropped, the rest is PascalCased: ``cad_user`` -> ``User``,
    ``app_order_item`` -> ``OrderItem``. A name without an underscore keeps its
    only segment: ``users`` -> ``Users``.
    """
    parts = (table_name or "").split("_")
    if len(parts) > 1:
        parts = parts[1:]
    return "".join(capitalize(p) for p in parts)


def label(name: str) -> str:
    """Human label: ``order_items`` -> ``Order items``."""
    return capitalize(name).replace("_", " ")


def ref_name(table_name: str) -> str:
    """Reference name of a foreign key target table."""
    return capitalize(NON_IDENTIFIER.sub("", table_name or ""))
