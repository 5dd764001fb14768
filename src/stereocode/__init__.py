"""
Stereocode - method and class stereotype classification

Assigns stereotypes (get, set, factory, entity, data-class, ...) to classes
and methods from structural facts extracted from C++, C# and Java code.
"""

__version__ = "1.0.0"

# Core exports
from stereocode.config import Language, StereotypeConfig, load_primitives_file
from stereocode.registry import ResultRegistry
from stereocode.schemas import ClassFacts, FactsDocument, MethodFacts, TranslationUnitFacts, load_facts
from stereocode.stereotype import ClassModel, classify_facts_file, classify_units

__all__ = [
    "__version__",
    "Language",
    "StereotypeConfig",
    "load_primitives_file",
    "ResultRegistry",
    "ClassFacts",
    "FactsDocument",
    "MethodFacts",
    "TranslationUnitFacts",
    "load_facts",
    "ClassModel",
    "classify_facts_file",
    "classify_units",
]
