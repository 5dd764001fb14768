"""
Public entry points for stereotype classification.

Models are built from facts, methods are labeled, then each class is
labeled from its finished method labels, and every result is written to
the registry.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from stereocode.config import Language, StereotypeConfig
from stereocode.exceptions import ClassificationError, FactContractError
from stereocode.logging_config import logger
from stereocode.registry import ResultRegistry
from stereocode.schemas import FactsDocument, TranslationUnitFacts, load_facts
from .class_model import ClassModel
from .class_rules import classify_class_counts, count_stereotypes
from .method_rules import MethodContext, classify_method


def classify_class_model(model: ClassModel, registry: Optional[ResultRegistry] = None) -> ClassModel:
    """
    Label a class model's methods, then the class itself.

    Method labels must all be final before the class rules run. Results go
    to the registry under every location the class and its methods were
    declared at.
    """
    context = MethodContext(model.language, model.self_type_name)
    for method in model.methods:
        method.stereotypes = classify_method(method.facts, context)

    model.constructor_destructor_count = sum(
        1 for method in model.methods if method.is_constructor_or_destructor
    )
    counts = count_stereotypes(
        method.stereotypes for method in model.methods if not method.is_constructor_or_destructor
    )
    model.stereotypes = classify_class_counts(counts, model.config.methods_per_class_threshold)

    logger.debug(f"Class '{model.names[2]}' at {model.location}: {model.stereotype}")

    if registry is not None:
        for unit_id, location in model.locations:
            registry.record(unit_id, location, model.stereotype)
        for method in model.methods:
            registry.record(method.facts.unit_id, method.facts.location_id, method.stereotype)

    return model


def build_class_models(
    units: Iterable[TranslationUnitFacts],
    config: Optional[StereotypeConfig] = None,
) -> List[ClassModel]:
    """
    Build one model per class declaration.

    Partial class fragments that share a language and name are merged into
    a single model, in the order they are encountered.
    """
    config = config or StereotypeConfig()
    models: List[ClassModel] = []
    partials: Dict[Tuple[Language, str], ClassModel] = {}

    for unit in units:
        for facts in unit.classes:
            if facts.unit_id != unit.unit_id or facts.language != unit.language:
                raise FactContractError(
                    facts.unit_id,
                    facts.location,
                    f"class facts do not belong to unit {unit.unit_id} ({unit.language.value})",
                )

            if facts.partial:
                key = (facts.language, (facts.name or "").strip())
                if key in partials:
                    partials[key].add_fragment(facts)
                    continue
                model = ClassModel.from_facts(facts, config)
                partials[key] = model
            else:
                model = ClassModel.from_facts(facts, config)
            models.append(model)

    logger.debug(f"Built {len(models)} class models ({len(partials)} partial)")
    return models


def _classify_with_context(model: ClassModel, registry: ResultRegistry) -> ClassModel:
    try:
        return classify_class_model(model, registry)
    except ClassificationError:
        raise
    except Exception as e:
        raise ClassificationError(model.unit_id, model.location, str(e)) from e


def classify_models(
    models: List[ClassModel],
    registry: Optional[ResultRegistry] = None,
    max_workers: int = 1,
) -> ResultRegistry:
    """
    Classify independent class models, concurrently when max_workers > 1.

    Raises:
        ClassificationError: For the first class that fails, with its location.
    """
    registry = registry if registry is not None else ResultRegistry()

    if max_workers > 1 and len(models) > 1:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(models))) as executor:
            futures = [executor.submit(_classify_with_context, model, registry) for model in models]
            for future in as_completed(futures):
                future.result()
    else:
        for model in models:
            _classify_with_context(model, registry)

    logger.info(f"Classified {len(models)} classes, {len(registry)} results recorded")
    return registry


def classify_units(
    units: Union[FactsDocument, Iterable[TranslationUnitFacts]],
    config: Optional[StereotypeConfig] = None,
    registry: Optional[ResultRegistry] = None,
    max_workers: Optional[int] = None,
) -> ResultRegistry:
    """
    Classify every class found in the given translation units.

    Args:
        units: A facts document or its translation units.
        config: Classifier configuration (defaults from environment).
        registry: Registry to write into; a new one is created if omitted.
        max_workers: Overrides config.max_workers.

    Returns:
        The registry holding one entry per class location and per method.
    """
    config = config or StereotypeConfig()
    if isinstance(units, FactsDocument):
        units = units.units
    models = build_class_models(units, config)
    workers = max_workers if max_workers is not None else config.max_workers
    return classify_models(models, registry, max_workers=workers)


def classify_facts_file(path: Path, config: Optional[StereotypeConfig] = None) -> ResultRegistry:
    """Load a facts JSON file and classify everything in it."""
    document = load_facts(path)
    logger.info(f"Classifying {len(document.units)} translation units from {path}")
    return classify_units(document, config)
