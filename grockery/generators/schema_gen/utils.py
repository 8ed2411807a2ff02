"""Naming helpers for schema generation."""
import re


IRREGULAR_PLURALS = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
    "goose": "geese",
    "foot": "feet",
    "tooth": "teeth",
    "ox": "oxen",
}

F_TO_VES = {"leaf", "loaf", "half", "wolf", "shelf", "knife", "life", "wife", "calf", "thief"}


def _split_last_word(name: str):
    """Split a PascalCase name into (prefix, last word)."""
    match = re.search(r'[A-Z]?[a-z0-9]*$', name)
    start = match.start() if match and match.group() else 0
    return name[:start], name[start:]


def _match_case(word: str, replacement: str) -> str:
    if word.isupper() and len(word) > 1:
        return replacement.upper()
    if word[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def pluralize(name: str) -> str:
    """
    Pluralize the last word of an entity name using common English rules.

    Best effort: Category -> Categories, Box -> Boxes, LineItem -> LineItems.
    """
    if not name:
        return name

    prefix, word = _split_last_word(name)
    if not word:
        return name + "s"
    lower = word.lower()

    if lower in IRREGULAR_PLURALS:
        return prefix + _match_case(word, IRREGULAR_PLURALS[lower])
    if lower in F_TO_VES:
        stem = word[:-2] if lower.endswith("fe") else word[:-1]
        return prefix + stem + "ves"

    if lower.endswith(('s', 'x', 'z', 'ch', 'sh')):
        return name + 'es'
    elif lower.endswith('y') and len(lower) > 1 and lower[-2] not in 'aeiou':
        return name[:-1] + 'ies'
    else:
        return name + 's'
