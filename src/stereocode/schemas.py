import json
from pathlib import Path
from typing import List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from stereocode.config import Language
from stereocode.exceptions import FactsLoadError
from stereocode.logging_config import logger


class MethodFacts(BaseModel):
    """
    Pre-computed structural facts for one method, produced by the fact extractor.

    Read-only input to the method rules.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    unit_id: int
    location_id: str

    is_constructor_or_destructor: bool = False
    is_destructor: bool = False
    parameter_list_text: str = ""

    attribute_returned_directly: bool = False  # e.g. "return x;" but not "return this;"
    has_non_attribute_return: bool = False  # at least one complex return expression
    attribute_used: bool = False  # includes a bare self reference
    num_attributes_modified: int = Field(0, ge=0)

    in_class_method_calls: Set[str] = Field(default_factory=set)
    attribute_calls: Set[str] = Field(default_factory=set)  # calls made on attributes
    constructor_calls: Set[str] = Field(default_factory=set)
    external_function_call_count: int = Field(0, ge=0)
    external_method_call_count: int = Field(0, ge=0)

    mutable_ref_param_reassigned: bool = False
    is_const_qualified: bool = False

    return_type_raw: str = ""
    # Derived from return_type_raw when the extractor leaves them out
    return_type_canonical: Optional[str] = None
    returns_external_non_primitive: Optional[bool] = None

    is_factory: bool = False
    is_strict_factory: bool = False
    is_empty: bool = False

    uses_external_non_primitive_attribute: bool = False
    uses_external_non_primitive_local: bool = False
    uses_external_non_primitive_parameter: bool = False
    mutates_non_primitive_local_or_parameter: bool = False


class ParentFacts(BaseModel):
    """A parent type as written in the declaration, with its access specifier if any."""
    name: str
    specifier: Optional[str] = None


class PropertyFacts(BaseModel):
    """A property declaration and the accessor methods it defines."""
    type: str
    methods: List[MethodFacts] = Field(default_factory=list)


class ClassFacts(BaseModel):
    """
    Facts for one class declaration.

    attribute_names and attribute_types are paired by position. A null type
    means "same type as the previous declarator" (e.g. `int a, b;`).
    """
    unit_id: int
    location: str
    language: Language
    name: Optional[str] = None  # None for anonymous types
    structure_kind: Optional[str] = None
    parents: List[ParentFacts] = Field(default_factory=list)
    attribute_names: List[str] = Field(default_factory=list)
    attribute_types: List[Optional[str]] = Field(default_factory=list)
    non_private_attribute_names: List[str] = Field(default_factory=list)
    non_private_attribute_types: List[Optional[str]] = Field(default_factory=list)
    methods: List[MethodFacts] = Field(default_factory=list)
    properties: List[PropertyFacts] = Field(default_factory=list)
    partial: bool = False


class TranslationUnitFacts(BaseModel):
    """All class facts discovered in one translation unit."""
    unit_id: int
    language: Language
    path: Optional[str] = None
    classes: List[ClassFacts] = Field(default_factory=list)


class FactsDocument(BaseModel):
    """Top-level facts file produced by the extractor."""
    units: List[TranslationUnitFacts] = Field(default_factory=list)


def load_facts(path: Path) -> FactsDocument:
    """
    Load and validate a facts JSON file.

    Raises:
        FactsLoadError: If the file is unreadable or violates the fact-set contract.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (IOError, UnicodeDecodeError) as e:
        raise FactsLoadError(str(path), str(e)) from e

    try:
        document = FactsDocument.model_validate(json.loads(content))
    except json.JSONDecodeError as e:
        raise FactsLoadError(str(path), f"invalid JSON: {e}") from e
    except ValidationError as e:
        raise FactsLoadError(str(path), f"fact-set contract violated: {e}") from e

    logger.debug(f"Loaded facts for {len(document.units)} units from {path}")
    return document
