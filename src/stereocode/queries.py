"""
Structural query templates for the fact-extraction service.

Maps a symbolic query name to the srcML XPath the extractor runs for a
given language. Queries are evaluated relative to a class unit.
"""

from typing import Dict, List, Union

from stereocode.config import Language, resolve_language
from stereocode.exceptions import ConfigError


_CLASS = "/src:unit/*[self::src:class or self::src:struct or self::src:interface]"

QUERY_TEMPLATES: Dict[Language, Dict[str, str]] = {
    Language.CPP: {
        "class_name": f"{_CLASS}/src:name",
        "class_type": f"{_CLASS}/@type | name({_CLASS})",
        "parent_name": f"{_CLASS}/src:super_list/src:super",
        "attribute_name": f"{_CLASS}/src:block//src:decl_stmt[not(ancestor::src:function)]/src:decl/src:name",
        "attribute_type": f"{_CLASS}/src:block//src:decl_stmt[not(ancestor::src:function)]/src:decl/src:type",
        "non_private_attribute_name": (
            f"{_CLASS}/src:block/*[self::src:public or self::src:protected]"
            "/src:decl_stmt/src:decl/src:name"
        ),
        "non_private_attribute_type": (
            f"{_CLASS}/src:block/*[self::src:public or self::src:protected]"
            "/src:decl_stmt/src:decl/src:type"
        ),
        "method": (
            "//*[self::src:function or self::src:constructor or self::src:destructor]"
            "[not(ancestor::src:function)]"
        ),
    },
    Language.CSHARP: {
        "class_name": f"{_CLASS}/src:name",
        "class_type": f"name({_CLASS})",
        "parent_name": f"{_CLASS}/src:super_list/src:super",
        "attribute_name": f"{_CLASS}/src:block/src:decl_stmt/src:decl/src:name",
        "attribute_type": f"{_CLASS}/src:block/src:decl_stmt/src:decl/src:type",
        "non_private_attribute_name": (
            f"{_CLASS}/src:block/src:decl_stmt[src:decl/src:type/src:specifier"
            "[.='public' or .='protected' or .='internal']]/src:decl/src:name"
        ),
        "non_private_attribute_type": (
            f"{_CLASS}/src:block/src:decl_stmt[src:decl/src:type/src:specifier"
            "[.='public' or .='protected' or .='internal']]/src:decl/src:type"
        ),
        "method": f"{_CLASS}/src:block/*[self::src:function or self::src:constructor or self::src:destructor]",
        "property": f"{_CLASS}/src:block/src:property",
        "property_type": "/src:unit/src:property/src:type",
        "property_method": "/src:unit/src:property/src:block/src:function",
    },
    Language.JAVA: {
        "class_name": f"{_CLASS}/src:name",
        "class_type": f"name({_CLASS})",
        "parent_name": (
            f"{_CLASS}/src:super_list/*[self::src:extends or self::src:implements]/src:super"
        ),
        "attribute_name": f"{_CLASS}/src:block/src:decl_stmt/src:decl/src:name",
        "attribute_type": f"{_CLASS}/src:block/src:decl_stmt/src:decl/src:type",
        "non_private_attribute_name": (
            f"{_CLASS}/src:block/src:decl_stmt[not(src:decl/src:type/src:specifier[.='private'])]"
            "/src:decl/src:name"
        ),
        "non_private_attribute_type": (
            f"{_CLASS}/src:block/src:decl_stmt[not(src:decl/src:type/src:specifier[.='private'])]"
            "/src:decl/src:type"
        ),
        "method": f"{_CLASS}/src:block/*[self::src:function or self::src:constructor]",
    },
}

QUERY_NAMES = sorted({name for queries in QUERY_TEMPLATES.values() for name in queries})


def available_queries(language: Union[str, Language]) -> List[str]:
    """List the query names defined for a language."""
    return sorted(QUERY_TEMPLATES[resolve_language(language)])


def get_query(language: Union[str, Language], name: str) -> str:
    """
    Look up the structural query for a symbolic name.

    Args:
        language: Language name or member.
        name: Symbolic query name (e.g. 'attribute_name').

    Returns:
        The XPath string.

    Raises:
        ConfigError: If the name is unknown or not defined for the language.
    """
    lang = resolve_language(language)
    if name not in QUERY_NAMES:
        raise ConfigError(
            f"Unknown query '{name}'. Known queries: {', '.join(QUERY_NAMES)}"
        )

    queries = QUERY_TEMPLATES[lang]
    if name not in queries:
        raise ConfigError(f"Query '{name}' is not defined for {lang.value}")
    return queries[name]
