"""
Name normalization shared by the class model and the type classifier.
"""

import re
from typing import List, Optional, Tuple

from stereocode.config import Language, NAMESPACE_SEPARATORS

_WHITESPACE = re.compile(r"\s+")


def strip_generics(text: str) -> str:
    """Remove every generic/template argument list, including nested ones."""
    result = []
    depth = 0
    for ch in text:
        if ch == "<":
            depth += 1
        elif ch == ">" and depth > 0:
            depth -= 1
        elif depth == 0:
            result.append(ch)
    return "".join(result)


def strip_array_suffix(text: str) -> str:
    """Chop an array declarator ("buf[16]" -> "buf")."""
    position = text.find("[")
    if position == -1:
        return text
    return text[:position].rstrip()


def strip_namespace(text: str, language: Language) -> str:
    """Keep only the last segment of a qualified name."""
    text = text.strip()
    if language == Language.CSHARP:
        # global::System.String
        text = text.replace("::", ".")
    separator = NAMESPACE_SEPARATORS[language]
    return text.rsplit(separator, 1)[-1].strip()


def _split_arguments(argument_list: str) -> List[str]:
    """Split the inside of a generic argument list at top-level commas."""
    arguments = []
    depth = 0
    current = []
    for ch in argument_list:
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
        if ch == "," and depth == 0:
            arguments.append("".join(current))
            current = []
        else:
            current.append(ch)
    arguments.append("".join(current))
    return arguments


def normalize_type_name(text: str, language: Language) -> str:
    """
    Strip namespaces from a type name and from each of its generic arguments.

    "ns::Map< std::string , Foo >" -> "Map<string, Foo>"
    """
    text = _WHITESPACE.sub(" ", text.strip())
    open_at = text.find("<")
    close_at = text.rfind(">")
    if open_at == -1 or close_at < open_at:
        return strip_namespace(text, language)

    head = strip_namespace(text[:open_at], language)
    arguments = _split_arguments(text[open_at + 1:close_at])
    normalized = ", ".join(normalize_type_name(arg, language) for arg in arguments if arg.strip())
    return f"{head}<{normalized}>{text[close_at + 1:].strip()}"


def simple_name(text: str, language: Language) -> str:
    """Namespace-stripped name without generic arguments."""
    return strip_namespace(strip_generics(text), language)


def class_name_variants(raw: Optional[str], language: Language) -> Tuple[str, str, str, str]:
    """
    Build the four name variants of a class.

    Returns:
        (raw text, trimmed text, namespace-stripped name with generic
        arguments, namespace-stripped simple name). Anonymous types
        yield four empty strings.
    """
    if not raw:
        return ("", "", "", "")

    trimmed = raw.strip()
    open_at = trimmed.find("<")
    if open_at != -1:
        left = strip_namespace(trimmed[:open_at], language)
        with_arguments = normalize_type_name(left + trimmed[open_at:], language)
        return (raw, trimmed, with_arguments, left)

    stripped = strip_namespace(trimmed, language)
    return (raw, trimmed, stripped, stripped)
