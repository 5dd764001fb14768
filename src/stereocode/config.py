"""
Classifier configuration.

Languages, per-language type tables and the explicit configuration object
handed to the classifier. Tunables are read from STEREOCODE_* environment
variables when not passed explicitly.
"""

import json
import os
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, Union

from stereocode.exceptions import ConfigError, LanguageNotSupportedError


class Language(str, Enum):
    """Source languages the classifier understands."""
    CPP = "C++"
    CSHARP = "C#"
    JAVA = "Java"


# Built-in type names. Tokens are compared after qualifiers and namespaces
# have been stripped, so "unsigned long" and "std::string" both resolve here.
PRIMITIVE_TYPES: Dict[Language, FrozenSet[str]] = {
    Language.CPP: frozenset({
        "auto", "bool", "char", "char8_t", "char16_t", "char32_t", "wchar_t",
        "short", "int", "long", "signed", "unsigned", "float", "double", "void",
        "size_t", "ssize_t", "ptrdiff_t", "nullptr_t", "intptr_t", "uintptr_t",
        "int8_t", "int16_t", "int32_t", "int64_t",
        "uint8_t", "uint16_t", "uint32_t", "uint64_t",
        "string", "wstring",
    }),
    Language.CSHARP: frozenset({
        "var", "bool", "byte", "sbyte", "char", "decimal", "double", "float",
        "int", "uint", "nint", "nuint", "long", "ulong", "short", "ushort",
        "string", "void",
        "Boolean", "Byte", "SByte", "Char", "Decimal", "Double", "Single",
        "Int16", "Int32", "Int64", "UInt16", "UInt32", "UInt64", "String", "Void",
    }),
    Language.JAVA: frozenset({
        "var", "boolean", "byte", "char", "short", "int", "long", "float",
        "double", "void", "String",
        "Boolean", "Byte", "Character", "Short", "Integer", "Long", "Float",
        "Double", "Void",
    }),
}

BOOLEAN_TYPES: Dict[Language, FrozenSet[str]] = {
    Language.CPP: frozenset({"bool"}),
    Language.CSHARP: frozenset({"bool", "Boolean"}),
    Language.JAVA: frozenset({"boolean"}),
}

VOID_TYPES: Dict[Language, FrozenSet[str]] = {
    Language.CPP: frozenset({"void"}),
    Language.CSHARP: frozenset({"void", "Void"}),
    Language.JAVA: frozenset({"void", "Void"}),
}

NAMESPACE_SEPARATORS: Dict[Language, str] = {
    Language.CPP: "::",
    Language.CSHARP: ".",
    Language.JAVA: ".",
}

# The bare self reference is treated as an accessor to class state
SELF_KEYWORDS: Dict[Language, str] = {
    Language.CPP: "this",
    Language.CSHARP: "this",
    Language.JAVA: "this",
}

# Java has no pointers, so "pointer to void" never applies there
VOID_POINTER_LANGUAGES: FrozenSet[Language] = frozenset({Language.CPP, Language.CSHARP})

DEFAULT_METHODS_PER_CLASS_THRESHOLD = 21
DEFAULT_MAX_WORKERS = 1


def _check_tables_cover_languages() -> None:
    tables = {
        "PRIMITIVE_TYPES": PRIMITIVE_TYPES,
        "BOOLEAN_TYPES": BOOLEAN_TYPES,
        "VOID_TYPES": VOID_TYPES,
        "NAMESPACE_SEPARATORS": NAMESPACE_SEPARATORS,
        "SELF_KEYWORDS": SELF_KEYWORDS,
    }
    for table_name, table in tables.items():
        missing = [lang.value for lang in Language if lang not in table]
        if missing:
            raise ConfigError(f"{table_name} has no entry for: {', '.join(missing)}")


_check_tables_cover_languages()


def resolve_language(language: Union[str, Language]) -> Language:
    """
    Map a language name (e.g. 'C++', 'Java') to its Language member.

    Raises:
        LanguageNotSupportedError: If the name is not a supported language.
    """
    if isinstance(language, Language):
        return language
    try:
        return Language(language)
    except ValueError:
        raise LanguageNotSupportedError(str(language), [lang.value for lang in Language]) from None


def _env_int(key: str, default: int) -> int:
    """Read integer from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class StereotypeConfig:
    """
    Configuration passed into the classifier.

    Environment Variables:
        STEREOCODE_METHODS_PER_CLASS: Method count a class must exceed to be
            labeled large-class (default: 21)
        STEREOCODE_MAX_WORKERS: Threads used to classify classes (default: 1)
    """

    primitive_types: Dict[Language, FrozenSet[str]] = field(
        default_factory=lambda: dict(PRIMITIVE_TYPES)
    )
    methods_per_class_threshold: int = field(default_factory=lambda: _env_int(
        "STEREOCODE_METHODS_PER_CLASS", DEFAULT_METHODS_PER_CLASS_THRESHOLD
    ))
    max_workers: int = field(default_factory=lambda: _env_int(
        "STEREOCODE_MAX_WORKERS", DEFAULT_MAX_WORKERS
    ))

    def __post_init__(self):
        if self.methods_per_class_threshold < 0:
            raise ConfigError(
                f"methods_per_class_threshold must be >= 0, got {self.methods_per_class_threshold}"
            )
        if self.max_workers < 1:
            raise ConfigError(f"max_workers must be >= 1, got {self.max_workers}")

    def primitives_for(self, language: Language) -> FrozenSet[str]:
        return self.primitive_types[language]

    def with_extra_primitives(
        self, language: Union[str, Language], names: Iterable[str]
    ) -> "StereotypeConfig":
        """Return a copy of this config with additional primitive type names."""
        lang = resolve_language(language)
        extended = dict(self.primitive_types)
        extended[lang] = extended[lang] | frozenset(n.strip() for n in names if n.strip())
        return replace(self, primitive_types=extended)

    def with_threshold(self, threshold: int) -> "StereotypeConfig":
        return replace(self, methods_per_class_threshold=threshold)

    def with_max_workers(self, workers: int) -> "StereotypeConfig":
        return replace(self, max_workers=workers)


def load_primitives_file(path: Path, config: StereotypeConfig = None) -> StereotypeConfig:
    """
    Extend a config with user-supplied primitive types.

    The file is JSON mapping language names to lists of type names:
    {"C++": ["size_type", "Handle"], "Java": ["Id"]}

    Raises:
        ConfigError: If the file cannot be read or has the wrong shape.
    """
    config = config or StereotypeConfig()
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read primitives file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Primitives file {path} must contain a JSON object")

    for language, names in data.items():
        if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
            raise ConfigError(f"Primitives for '{language}' must be a list of strings")
        config = config.with_extra_primitives(language, names)
    return config
