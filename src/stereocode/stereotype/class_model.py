"""
Class entity model.

Builds the classifier's view of a class (name variants, structure kind,
parents, attributes and methods) from the facts handed over by the
extractor, and holds the labels assigned to it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from stereocode.config import Language, SELF_KEYWORDS, StereotypeConfig
from stereocode.exceptions import AttributeFactsMismatchError, FactContractError
from stereocode.logging_config import logger
from stereocode.schemas import ClassFacts, MethodFacts
from .names import class_name_variants, normalize_type_name, strip_array_suffix
from .type_classifier import TypeClassifier, canonical_type


class StructureKind(str, Enum):
    CLASS = "class"
    INTERFACE = "interface"
    STRUCT = "struct"
    UNKNOWN = "unknown"


class AccessSpecifier(str, Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"


_SPECIFIER_WORDS = {spec.value: spec for spec in AccessSpecifier}


@dataclass
class Attribute:
    """A class-owned variable."""
    name: str
    type: str = ""
    is_non_primitive: bool = False
    is_non_primitive_external: bool = False


@dataclass
class MethodModel:
    """A method's facts plus the labels the method rules gave it."""
    facts: MethodFacts
    stereotypes: Tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.facts.name

    @property
    def stereotype(self) -> str:
        return " ".join(self.stereotypes)

    @property
    def is_constructor_or_destructor(self) -> bool:
        return self.facts.is_constructor_or_destructor


def resolve_structure_kind(text: Optional[str], language: Language) -> StructureKind:
    """
    Map the extractor's structure keyword to a StructureKind.

    Only C++ distinguishes class and struct; C# and Java are class or interface.
    """
    keyword = (text or "").strip().lower()
    if language == Language.CPP:
        if not keyword:
            return StructureKind.UNKNOWN
        try:
            return StructureKind(keyword)
        except ValueError:
            return StructureKind.UNKNOWN
    if keyword == "interface":
        return StructureKind.INTERFACE
    return StructureKind.CLASS


def resolve_parent(
    name: str,
    specifier: Optional[str],
    language: Language,
    kind: StructureKind,
) -> Tuple[str, AccessSpecifier]:
    """
    Normalize a parent declaration into (name, inheritance access).

    C++ reads the access specifier from the facts or from a leading keyword
    ("public Base"), defaulting to private for classes and public otherwise.
    Inheritance is always public in C# and Java.
    """
    words = name.split()
    leading = None
    while words and words[0] in ("virtual", *_SPECIFIER_WORDS):
        if words[0] in _SPECIFIER_WORDS:
            leading = words[0]
        words.pop(0)
    parent_name = normalize_type_name(" ".join(words), language)

    if language != Language.CPP:
        return parent_name, AccessSpecifier.PUBLIC

    explicit = (specifier or leading or "").strip().lower()
    if explicit in _SPECIFIER_WORDS:
        return parent_name, _SPECIFIER_WORDS[explicit]
    if kind == StructureKind.CLASS:
        return parent_name, AccessSpecifier.PRIVATE
    return parent_name, AccessSpecifier.PUBLIC


class ClassModel:
    """
    A class declaration as seen by the stereotype rules.

    names holds four variants: raw text, trimmed text, namespace-stripped
    text with generic arguments, and the simple name used to recognize
    references to the class itself.
    """

    def __init__(self, language: Language, names: Tuple[str, str, str, str], config: StereotypeConfig):
        self.language = language
        self.names = names
        self.config = config
        self.structure_kind = StructureKind.UNKNOWN if language == Language.CPP else StructureKind.CLASS
        self.parents: Dict[str, AccessSpecifier] = {}
        self.attributes: Dict[str, Attribute] = {}
        self.visible_inherited_attributes: Dict[str, Attribute] = {}
        self.methods: List[MethodModel] = []
        self.locations: List[Tuple[int, str]] = []
        self.stereotypes: Tuple[str, ...] = ()
        self.constructor_destructor_count = 0
        self._fragments: List[ClassFacts] = []

    @classmethod
    def from_facts(cls, facts: ClassFacts, config: Optional[StereotypeConfig] = None) -> "ClassModel":
        """Build a model from one class declaration's facts."""
        config = config or StereotypeConfig()
        model = cls(facts.language, class_name_variants(facts.name, facts.language), config)
        model.add_fragment(facts)
        return model

    @property
    def self_type_name(self) -> str:
        return self.names[3]

    @property
    def stereotype(self) -> str:
        return " ".join(self.stereotypes)

    @property
    def unit_id(self) -> Optional[int]:
        return self.locations[0][0] if self.locations else None

    @property
    def location(self) -> str:
        return self.locations[0][1] if self.locations else ""

    def type_classifier(self) -> TypeClassifier:
        return TypeClassifier(
            self.language,
            self.self_type_name,
            self.parents.keys(),
            self.config.primitives_for(self.language),
        )

    def add_fragment(self, facts: ClassFacts) -> None:
        """
        Merge one declaration of this class into the model.

        Called once for ordinary classes and once per fragment for partial
        classes. The model is rebuilt from all fragments so every type is
        classified against the parents of the whole class, whichever
        fragment declared them.
        """
        if facts.language != self.language:
            raise FactContractError(
                facts.unit_id,
                facts.location,
                f"fragment language {facts.language.value} does not match {self.language.value}",
            )

        self._fragments.append(facts)
        self._rebuild()

        logger.debug(
            f"Modeled class '{self.names[2]}' ({self.structure_kind.value}) at {facts.location}: "
            f"{len(self.attributes)} attributes, {len(self.methods)} methods"
        )

    def _rebuild(self) -> None:
        # Structure kind and parents first: type classification depends on them
        self.locations = [(facts.unit_id, facts.location) for facts in self._fragments]
        self.parents = {}
        for facts in self._fragments:
            if self.language == Language.CPP or facts.structure_kind:
                self.structure_kind = resolve_structure_kind(facts.structure_kind, self.language)
        for facts in self._fragments:
            for parent in facts.parents:
                parent_name, access = resolve_parent(
                    parent.name, parent.specifier, self.language, self.structure_kind
                )
                self.parents.setdefault(parent_name, access)

        classifier = self.type_classifier()
        self_keyword = SELF_KEYWORDS[self.language]
        self.attributes = {}
        self.visible_inherited_attributes = {}
        self.methods = []
        for facts in self._fragments:
            self._add_attributes(
                facts, facts.attribute_names, facts.attribute_types, self.attributes, classifier, "attribute"
            )
            self.attributes.setdefault(self_keyword, Attribute(name=self_keyword))

            self._add_attributes(
                facts,
                facts.non_private_attribute_names,
                facts.non_private_attribute_types,
                self.visible_inherited_attributes,
                classifier,
                "non-private attribute",
            )

            for method in facts.methods:
                self.methods.append(MethodModel(self._resolve_method(method, classifier)))

            for prop in facts.properties:
                for method in prop.methods:
                    accessor = method.model_copy(update={
                        "return_type_raw": prop.type,
                        "return_type_canonical": None,
                        "returns_external_non_primitive": None,
                    })
                    self.methods.append(MethodModel(self._resolve_method(accessor, classifier)))

    def _add_attributes(
        self,
        facts: ClassFacts,
        names: List[str],
        types: List[Optional[str]],
        target: Dict[str, Attribute],
        classifier: TypeClassifier,
        scope: str,
    ) -> None:
        if len(names) != len(types):
            raise AttributeFactsMismatchError(
                facts.unit_id, facts.location, len(names), len(types), scope
            )

        previous_type = None
        for name, declared_type in zip(names, types):
            if declared_type is None:
                if previous_type is None:
                    raise FactContractError(
                        facts.unit_id,
                        facts.location,
                        f"{scope} '{name}' refers to a previous type but none was declared",
                    )
                declared_type = previous_type
            previous_type = declared_type

            if self.language == Language.CPP:
                name = strip_array_suffix(name)
            name = name.strip()

            classification = classifier.classify(declared_type)
            target.setdefault(name, Attribute(
                name=name,
                type=declared_type,
                is_non_primitive=classification.is_non_primitive,
                is_non_primitive_external=classification.is_external,
            ))

    def _resolve_method(self, method: MethodFacts, classifier: TypeClassifier) -> MethodFacts:
        """Fill in the return type facts the extractor left out."""
        update = {}
        if method.return_type_canonical is None:
            update["return_type_canonical"] = canonical_type(method.return_type_raw, self.language)
        if method.returns_external_non_primitive is None:
            update["returns_external_non_primitive"] = classifier.classify(method.return_type_raw).is_external
        if not update:
            return method
        return method.model_copy(update=update)
