"""
Utility functions for the contract schema code generator.
"""

import keyword
import re

# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z][a-z]*|[0-9]+")

# C# reserved keywords, escaped with a leading @
CS_RESERVED_KEYWORDS = frozenset(
    """
    abstract as base bool break byte case catch char checked class const continue decimal default
    delegate do double else enum event explicit extern false finally fixed float for foreach goto
    if implicit in int interface internal is lock long namespace new null object operator out
    override params private protected public readonly ref return sbyte sealed short sizeof
    stackalloc static string struct switch this throw true try typeof uint ulong unchecked unsafe
    ushort using virtual void volatile while
    """.split()
)


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens, dots) to spaces."""
    return text.replace("_", " ").replace("-", " ").replace(".", " ")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(text)


def _capitalize_and_join(words: list[str]) -> str:
    """Capitalize each word and join them together."""
    return "".join(word[0].upper() + word[1:] for word in words if word)


def snake_to_pascal_case(text: str) -> str:
    """Convert snake_case, camelCase, or space-separated text to PascalCase.

    Examples:
        "first_name" -> "FirstName"
        "actionTemplate" -> "ActionTemplate"
        "first 3 rows" -> "First3Rows"
        "BalanceResponse" -> "BalanceResponse"

    Args:
        text: The text to convert

    Returns:
        PascalCase string (empty if the text holds no word characters)
    """
    if not text:
        return ""
    normalized = _normalize_separators(text)
    words = _split_into_words(normalized)
    return _capitalize_and_join(words)


def pascal_to_snake_case(text: str) -> str:
    """Convert PascalCase or camelCase text to snake_case.

    Examples:
        "BalanceAsync" -> "balance_async"
        "AllAccounts" -> "all_accounts"
    """
    normalized = _normalize_separators(text)
    return "_".join(word.lower() for word in _split_into_words(normalized))


def to_valid_type_name(text: str) -> str:
    """Convert arbitrary text into a PascalCase identifier usable as a type name."""
    name = snake_to_pascal_case(text)
    if not name:
        return "_"
    if name[0].isdigit():
        return f"_{name}"
    return name


def to_valid_property_name(text: str) -> str:
    """Convert a JSON property key or enum literal into a PascalCase member name."""
    return to_valid_type_name(text)


def to_valid_function_name(text: str) -> str:
    """Convert a query operation name into a PascalCase function name (without suffix)."""
    return to_valid_type_name(text)


def to_valid_parameter_name(text: str, language: str = "cs", reserved: frozenset[str] = frozenset()) -> str:
    """Convert a JSON property key into a parameter identifier.

    The key is kept as written when it is already an identifier; keywords are
    escaped the way each target language expects (``@from`` in C#, ``from_``
    in Python). Names in ``reserved`` (locals of the generated body) get a
    trailing underscore.
    """
    name = re.sub(r"\W", "_", text)
    if not name or name[0].isdigit():
        name = f"_{name}"
    if name in reserved:
        return f"{name}_"
    if language == "cs" and name in CS_RESERVED_KEYWORDS:
        return f"@{name}"
    if language == "python" and keyword.iskeyword(name):
        return f"{name}_"
    return name


def make_unique(name: str, taken: set[str]) -> str:
    """Return ``name`` or ``name2``, ``name3``... whichever is not in ``taken``, and mark it taken."""
    candidate = name
    counter = 2
    while candidate in taken:
        candidate = f"{name}{counter}"
        counter += 1
    taken.add(candidate)
    return candidate
