"""String-case and inflection helpers used to derive module identifiers."""

from __future__ import annotations

import re
from typing import Callable

__all__ = [
    "camel",
    "class_basename",
    "kebab",
    "lcfirst",
    "plural",
    "singular",
    "snake",
    "studly",
    "ucfirst",
]


_WORD_BREAKS = re.compile(r"[\-_]+")
_WHITESPACE = re.compile(r"\s+")
_WORD_START = re.compile(r"(^|\s)(\S)")
_CASE_BOUNDARY = re.compile(r"(.)(?=[A-Z])")
_LOWER_ALPHA = re.compile(r"[a-z]+")
_LAST_WORD = re.compile(r"^(.*?)([A-Z]+|[A-Za-z][a-z0-9]*)$", re.DOTALL)

_UNCOUNTABLE = frozenset(
    {
        "audio",
        "data",
        "deer",
        "equipment",
        "feedback",
        "fish",
        "information",
        "media",
        "metadata",
        "money",
        "news",
        "rice",
        "series",
        "sheep",
        "species",
        "staff",
    }
)

_IRREGULAR = {
    "child": "children",
    "cookie": "cookies",
    "foot": "feet",
    "goose": "geese",
    "man": "men",
    "mouse": "mice",
    "movie": "movies",
    "ox": "oxen",
    "person": "people",
    "tooth": "teeth",
    "woman": "women",
    "zombie": "zombies",
}
_IRREGULAR_PLURALS = {value: key for key, value in _IRREGULAR.items()}

_PLURAL_RULES = tuple(
    (re.compile(pattern), replacement)
    for pattern, replacement in (
        (r"(quiz)$", r"\1zes"),
        (r"(matr|vert|ind)(?:ix|ex)$", r"\1ices"),
        (r"(alias|status|bus|campus|census|virus)$", r"\1es"),
        (r"(buffal|ech|her|potat|tomat)o$", r"\1oes"),
        (r"(x|ch|ss|sh|zz)$", r"\1es"),
        (r"([^aeiouy]|qu)y$", r"\1ies"),
        (r"(kni|li|wi)fe$", r"\1ves"),
        (r"([lr])f$", r"\1ves"),
        (r"sis$", "ses"),
        (r"s$", "ses"),
        (r"$", "s"),
    )
)

_SINGULAR_RULES = tuple(
    (re.compile(pattern), replacement)
    for pattern, replacement in (
        (r"(quiz)zes$", r"\1"),
        (r"(matr)ices$", r"\1ix"),
        (r"(vert|ind)ices$", r"\1ex"),
        (r"(alias|status|bus|campus|census|virus)(?:es)?$", r"\1"),
        (r"(analy|cri|diagno|parenthe|progno|synop)ses$", r"\1sis"),
        (r"(buffal|ech|her|potat|tomat)oes$", r"\1o"),
        (r"^(ab|acc|exc|f|m|r|ref)uses$", r"\1use"),
        (r"([^aeiou]us)es$", r"\1"),
        (r"(x|ch|ss|sh|zz)es$", r"\1"),
        (r"(kni|li|wi)ves$", r"\1fe"),
        (r"^(cal|dwar|el|hal|scar|sel|shel|whar|wol)ves$", r"\1f"),
        (r"([^aeiouy]|qu)ies$", r"\1y"),
        (r"^(bij|ecr|em|gn|gur|haik|men|sudok|tab|tut)us$", r"\1u"),
        (r"(ss|us|is)$", r"\1"),
        (r"s$", ""),
    )
)


def ucfirst(value: str) -> str:
    return value[:1].upper() + value[1:]


def lcfirst(value: str) -> str:
    return value[:1].lower() + value[1:]


def _ucwords(value: str) -> str:
    return _WORD_START.sub(lambda match: match.group(1) + match.group(2).upper(), value)


def studly(value: str) -> str:
    """Return ``value`` in StudlyCase.

    Dashes, underscores and whitespace separate words. Each word gets an
    upper-case first letter while the rest of the word is left untouched, so
    ``"blogPost"`` and ``"blog_post"`` both become ``"BlogPost"``.
    """

    words = _WHITESPACE.split(_WORD_BREAKS.sub(" ", value))
    return "".join(ucfirst(word) for word in words if word)


def camel(value: str) -> str:
    return lcfirst(studly(value))


def snake(value: str, delimiter: str = "_") -> str:
    """Return ``value`` in snake_case using ``delimiter`` between words.

    An upper-case letter preceded by any character starts a new word.
    Whitespace is dropped. Input made of lower-case letters only is returned
    unchanged.
    """

    if _LOWER_ALPHA.fullmatch(value):
        return value

    collapsed = _WHITESPACE.sub("", _ucwords(value))
    return _CASE_BOUNDARY.sub(lambda match: match.group(1) + delimiter, collapsed).lower()


def kebab(value: str) -> str:
    return snake(value, "-")


def class_basename(value: str) -> str:
    """Return the last segment of a ``/`` or ``\\`` separated path."""

    return re.split(r"[\\/]", value.rstrip("\\/"))[-1]


def _match_case(value: str, template: str) -> str:
    if len(template) > 1 and template.isupper():
        return value.upper()
    if template[:1].isupper():
        return ucfirst(value)
    return value


def _split_last_word(value: str) -> tuple[str, str] | None:
    match = _LAST_WORD.match(value)
    if match is None:
        return None
    return match.group(1), match.group(2)


def _apply_rules(word: str, rules: tuple[tuple[re.Pattern[str], str], ...]) -> str:
    for pattern, replacement in rules:
        if pattern.search(word):
            return pattern.sub(replacement, word, count=1)
    return word


def _singular_word(word: str) -> str:
    if word in _UNCOUNTABLE or word in _IRREGULAR:
        return word
    if word in _IRREGULAR_PLURALS:
        return _IRREGULAR_PLURALS[word]
    return _apply_rules(word, _SINGULAR_RULES)


def _plural_word(word: str) -> str:
    if word in _UNCOUNTABLE or word in _IRREGULAR_PLURALS:
        return word
    if word in _IRREGULAR:
        return _IRREGULAR[word]
    return _apply_rules(_singular_word(word), _PLURAL_RULES)


def _inflect(value: str, inflector: Callable[[str], str]) -> str:
    parts = _split_last_word(value)
    if parts is None:
        return value
    prefix, word = parts
    return prefix + _match_case(inflector(word.lower()), word)


def plural(value: str) -> str:
    """Return the English plural of the last word in ``value``.

    Already plural words are returned unchanged, so ``plural("posts")`` is
    ``"posts"``. The case of the inflected word follows the input.
    """

    return _inflect(value, _plural_word)


def singular(value: str) -> str:
    """Return the English singular of the last word in ``value``."""

    return _inflect(value, _singular_word)
