"""
Primitive / non-primitive / external type classification.
"""

import re
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional

from stereocode.config import Language, PRIMITIVE_TYPES, VOID_POINTER_LANGUAGES
from .names import strip_generics, strip_namespace, simple_name

# Qualifiers that never change what a type is
TYPE_SPECIFIERS = frozenset({
    "const", "volatile", "static", "mutable", "constexpr", "inline", "virtual",
    "extern", "final", "readonly", "ref", "out", "in", "params", "register",
    "thread_local", "typename", "struct", "class", "enum",
})

_ARRAY_BRACKETS = re.compile(r"\[[^\]]*\]")
_POINTER_REFERENCE = re.compile(r"[*&^?]")
_SPACE_BEFORE_STAR = re.compile(r"\s+\*")


@dataclass(frozen=True)
class TypeClassification:
    is_non_primitive: bool = False
    is_external: bool = False


def type_tokens(type_text: str, language: Language) -> List[str]:
    """
    Reduce a declared type to its namespace-free name tokens.

    "const std::vector<int>&" -> ["vector"]
    "unsigned long long"      -> ["unsigned", "long", "long"]
    """
    text = strip_generics(type_text or "")
    text = _ARRAY_BRACKETS.sub(" ", text)
    text = _POINTER_REFERENCE.sub(" ", text)
    tokens = []
    for token in text.split():
        if token in TYPE_SPECIFIERS:
            continue
        token = strip_namespace(token, language)
        if token:
            tokens.append(token)
    return tokens


def canonical_type(type_text: str, language: Language) -> str:
    """Canonical form of a return type as compared by the method rules."""
    return " ".join(type_tokens(type_text, language))


def is_void_pointer(type_text: str, language: Language) -> bool:
    """True for an opaque "pointer to void" in languages that have pointers."""
    if language not in VOID_POINTER_LANGUAGES:
        return False
    return "void*" in _SPACE_BEFORE_STAR.sub("*", type_text or "")


def classify_type(
    type_text: str,
    language: Language,
    self_type_name: str,
    parents: Iterable[str] = (),
    primitives: Optional[FrozenSet[str]] = None,
) -> TypeClassification:
    """
    Decide whether a type is non-primitive and, if so, external.

    A type is external when it is neither the classifying class itself nor
    one of its parents.
    """
    tokens = type_tokens(type_text, language)
    if not tokens:
        return TypeClassification()

    if primitives is None:
        primitives = PRIMITIVE_TYPES[language]
    user_types = [token for token in tokens if token not in primitives]
    if not user_types:
        return TypeClassification()

    known = {simple_name(parent, language) for parent in parents}
    if self_type_name:
        known.add(self_type_name)
    is_external = any(token not in known for token in user_types)
    return TypeClassification(is_non_primitive=True, is_external=is_external)


class TypeClassifier:
    """Type classification bound to one class (its name, parents and language)."""

    def __init__(
        self,
        language: Language,
        self_type_name: str,
        parents: Iterable[str] = (),
        primitives: Optional[FrozenSet[str]] = None,
    ):
        self.language = language
        self.self_type_name = self_type_name
        self.parents = tuple(parents)
        self.primitives = primitives if primitives is not None else PRIMITIVE_TYPES[language]

    def classify(self, type_text: str) -> TypeClassification:
        return classify_type(
            type_text, self.language, self.self_type_name, self.parents, self.primitives
        )
