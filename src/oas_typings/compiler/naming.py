"""Identifier helpers for object, reference and field-pattern names."""

import re

# Acronym run ("API" in "OpenAPI"), capitalised/lowercase word, or bare number
_WORD_RE = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z0-9]+|\d+")

_NON_WORD_RE = re.compile(r"\W+")


def split_words(text: str) -> list[str]:
    """Split text into words on separators and case boundaries.

    'OpenAPI Object' -> ['Open', 'API', 'Object']
    """
    return _WORD_RE.findall(text)


def upper_camel_case(text: str) -> str:
    """'OpenAPI Object' -> 'OpenApiObject'"""
    return "".join(word[0].upper() + word[1:].lower() for word in split_words(text))


def camel_case(text: str) -> str:
    """'Field Name' -> 'fieldName'"""
    words = split_words(text)
    if not words:
        return ""
    return words[0].lower() + "".join(word[0].upper() + word[1:].lower() for word in words[1:])


def interface_name(text: str, prefix: str = "I") -> str:
    """Identifier shared by object descriptors and references to them.

    'Server Object' -> 'IServerObject'
    """
    return prefix + upper_camel_case(text)


def pattern_name(text: str) -> str:
    """Turn a field pattern such as '^x-' or '/{path}' into a placeholder identifier."""
    return camel_case(_NON_WORD_RE.sub("-", text))
