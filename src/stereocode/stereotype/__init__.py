"""
Stereotype classification package.

Provides the class model, the method and class rule engines, and the
classification entry points.
"""

from .facade import (
    classify_class_model,
    build_class_models,
    classify_models,
    classify_units,
    classify_facts_file,
)
from .class_model import (
    Attribute,
    AccessSpecifier,
    ClassModel,
    MethodModel,
    StructureKind,
)
from .class_rules import CLASS_RULES, StereotypeCounts, classify_class_counts, count_stereotypes
from .method_rules import METHOD_PASSES, MethodContext, classify_method
from .type_classifier import TypeClassification, TypeClassifier, classify_type, canonical_type

__all__ = [
    "classify_class_model",
    "build_class_models",
    "classify_models",
    "classify_units",
    "classify_facts_file",
    "Attribute",
    "AccessSpecifier",
    "ClassModel",
    "MethodModel",
    "StructureKind",
    "CLASS_RULES",
    "StereotypeCounts",
    "classify_class_counts",
    "count_stereotypes",
    "METHOD_PASSES",
    "MethodContext",
    "classify_method",
    "TypeClassification",
    "TypeClassifier",
    "classify_type",
    "canonical_type",
]
