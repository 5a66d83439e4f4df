"""
Naming utilities for code generation.

Every case conversion is built from a single word splitter, so
``user_name``, ``userName``, ``UserName`` and ``user-name`` all resolve to
the same words and round-trip between styles.
"""

from typing import List
from enum import Enum


class NamingCase(Enum):
    """Different naming case styles."""
    SNAKE_CASE = "snake"      # user_name
    CAMEL_CASE = "camel"      # userName
    PASCAL_CASE = "pascal"    # UserName
    KEBAB_CASE = "kebab"      # user-name
    SCREAMING_SNAKE = "screaming_snake"  # USER_NAME


SEPARATORS = frozenset("_- ")


def _is_upper(char: str) -> bool:
    return "A" <= char <= "Z"


def split_words(identifier: str) -> List[str]:
    """
    Split an identifier into lowercase words.

    Separators (``_``, ``-``, space) always end a word. A lower-to-upper
    transition also ends one, but a run of capitals stays together, so
    ``"UserID"`` gives ``["user", "id"]`` and ``"HTTPServer"`` gives
    ``["httpserver"]``.

    Args:
        identifier: Name in any casing style

    Returns:
        Ordered list of lowercase words (empty for blank input)
    """
    text = (identifier or "").strip()
    words: List[str] = []
    current: List[str] = []

    for index, char in enumerate(text):
        if char in SEPARATORS:
            if current:
                words.append("".join(current).lower())
                current = []
            continue

        if index > 0 and _is_upper(char) and not _is_upper(text[index - 1]):
            if current:
                words.append("".join(current).lower())
                current = []

        current.append(char)

    if current:
        words.append("".join(current).lower())

    return words


def to_camel_case(name: str) -> str:
    """Convert to camelCase."""
    words = split_words(name)
    if not words:
        return ""
    return words[0] + "".join(word.capitalize() for word in words[1:])


def to_pascal_case(name: str) -> str:
    """Convert to PascalCase."""
    return "".join(word.capitalize() for word in split_words(name))


def to_snake_case(name: str) -> str:
    """Convert to snake_case."""
    return "_".join(split_words(name))


def to_kebab_case(name: str) -> str:
    """Convert to kebab-case."""
    return "-".join(split_words(name))


def to_screaming_snake_case(name: str) -> str:
    return to_snake_case(name).upper()


_CONVERTERS = {
    NamingCase.SNAKE_CASE: to_snake_case,
    NamingCase.CAMEL_CASE: to_camel_case,
    NamingCase.PASCAL_CASE: to_pascal_case,
    NamingCase.KEBAB_CASE: to_kebab_case,
    NamingCase.SCREAMING_SNAKE: to_screaming_snake_case,
}


def convert_case(name: str, target_case: NamingCase) -> str:
    """
    Convert name to target case style.

    Args:
        name: Original name
        target_case: Desired case style

    Returns:
        Converted name
    """
    return _CONVERTERS[target_case](name)


def pluralize(word: str) -> str:
    """
    Pluralize with a small suffix heuristic.

    Irregular nouns are not handled: ``person`` becomes ``persons``.
    """
    if not word:
        return word
    if word.endswith("y"):
        return word[:-1] + "ies"
    if word.endswith(("s", "x", "ch", "sh")):
        return word + "es"
    return word + "s"


def singularize(word: str) -> str:
    """Inverse of :func:`pluralize` for words that follow its rules."""
    if word.endswith("ies"):
        return word[:-3] + "y"
    if word.endswith("es"):
        return word[:-2]
    if word.endswith("s") and not word.endswith("ss"):
        return word[:-1]
    return word
