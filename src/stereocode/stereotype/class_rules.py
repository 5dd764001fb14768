"""
Class stereotype rules.

Based on the class stereotype definitions of Dragan, Collard and Maletic
(ICSM 2010). Labels are derived from the distribution of method labels;
constructors and destructors take no part in any count. Rules are not
mutually exclusive.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple

UNCLASSIFIED = "unclassified"

COLLABORATIONAL_LABELS = ("collaborator", "controller", "wrapper")


def _ratio(numerator: float, denominator: float) -> Optional[float]:
    """numerator / denominator, or None when the denominator is zero."""
    if denominator == 0:
        return None
    return numerator / denominator


def _ratio_at_least(numerator: float, denominator: float, bound: float) -> bool:
    ratio = _ratio(numerator, denominator)
    return ratio is not None and ratio >= bound


def _ratio_above(numerator: float, denominator: float, bound: float) -> bool:
    ratio = _ratio(numerator, denominator)
    return ratio is not None and ratio > bound


def _ratio_at_most(numerator: float, denominator: float, bound: float) -> bool:
    ratio = _ratio(numerator, denominator)
    return ratio is not None and ratio <= bound


@dataclass
class StereotypeCounts:
    """Method label counts for one class, excluding constructors and destructors."""
    labels: Counter = field(default_factory=Counter)
    non_collaborators: int = 0
    all_methods: int = 0

    def __getitem__(self, label: str) -> int:
        return self.labels[label]

    @property
    def getters(self) -> int:
        return self["get"]

    @property
    def accessors(self) -> int:
        return self.getters + self["predicate"] + self["property"] + self["void-accessor"]

    @property
    def setters(self) -> int:
        return self["set"]

    @property
    def commands(self) -> int:
        return self["command"] + self["non-void-command"]

    @property
    def mutators(self) -> int:
        return self.setters + self.commands

    @property
    def controllers(self) -> int:
        return self["controller"]

    @property
    def collaborator(self) -> int:
        return self["collaborator"] + self["wrapper"]

    @property
    def collaborators(self) -> int:
        return self.controllers + self.collaborator

    @property
    def factories(self) -> int:
        return self["factory"]

    @property
    def degenerates(self) -> int:
        return self["incidental"] + self["stateless"] + self["empty"]


def count_stereotypes(method_labels: Iterable[Tuple[str, ...]]) -> StereotypeCounts:
    """
    Aggregate the final labels of a class's non-constructor methods.

    A method is a non-collaborator when none of its labels mention
    collaborator, controller or wrapper.
    """
    counts = StereotypeCounts()
    for labels in method_labels:
        counts.all_methods += 1
        counts.labels.update(labels)
        joined = " ".join(labels)
        if not any(label in joined for label in COLLABORATIONAL_LABELS):
            counts.non_collaborators += 1
    return counts


def entity(c: StereotypeCounts, threshold: int) -> bool:
    return (
        (c.accessors - c.getters) != 0
        and (c.mutators - c.setters) != 0
        and _ratio_at_least(c.collaborators, c.non_collaborators, 2)
        and c.controllers == 0
    )


def minimal_entity(c: StereotypeCounts, threshold: int) -> bool:
    return (
        c.all_methods - (c.getters + c.setters + c.commands) == 0
        and c.getters != 0
        and c.setters != 0
        and c.commands != 0
        and _ratio_at_least(c.collaborators, c.non_collaborators, 2)
    )


def data_provider(c: StereotypeCounts, threshold: int) -> bool:
    return (
        c.accessors > 2 * c.mutators
        and c.accessors > 2 * (c.controllers + c.factories)
    )


def commander(c: StereotypeCounts, threshold: int) -> bool:
    return (
        c.mutators > 2 * c.accessors
        and c.mutators > 2 * (c.controllers + c.factories)
    )


def boundary(c: StereotypeCounts, threshold: int) -> bool:
    return (
        c.collaborators > c.non_collaborators
        and c.factories < 0.5 * c.all_methods
        and c.controllers < 0.33 * c.all_methods
    )


def factory(c: StereotypeCounts, threshold: int) -> bool:
    return c.factories > 0.67 * c.all_methods


def controller(c: StereotypeCounts, threshold: int) -> bool:
    return (
        c.controllers + c.factories > 0.67 * c.all_methods
        and (c.accessors != 0 or c.mutators != 0)
    )


def pure_controller(c: StereotypeCounts, threshold: int) -> bool:
    return (
        c.controllers + c.factories != 0
        and c.accessors + c.mutators + c.collaborator == 0
        and c.controllers != 0
    )


def large_class(c: StereotypeCounts, threshold: int) -> bool:
    accessors_and_mutators = c.accessors + c.mutators
    controllers_and_factories = c.controllers + c.factories
    low, high = 0.2 * c.all_methods, 0.67 * c.all_methods
    return (
        low < accessors_and_mutators < high
        and low < controllers_and_factories < high
        and c.factories != 0
        and c.controllers != 0
        and c.accessors != 0
        and c.mutators != 0
        and c.all_methods > threshold
    )


def lazy_class(c: StereotypeCounts, threshold: int) -> bool:
    return (
        c.getters + c.setters != 0
        and _ratio_above(c.degenerates, c.all_methods, 0.33)
        and _ratio_at_most(
            c.all_methods - (c.degenerates + c.getters + c.setters), c.all_methods, 0.2
        )
    )


def degenerate(c: StereotypeCounts, threshold: int) -> bool:
    return _ratio_above(c.degenerates, c.all_methods, 0.5)


def data_class(c: StereotypeCounts, threshold: int) -> bool:
    return (
        c.all_methods - (c.getters + c.setters) == 0
        and c.getters + c.setters != 0
    )


def small_class(c: StereotypeCounts, threshold: int) -> bool:
    return 0 < c.all_methods < 3


def empty(c: StereotypeCounts, threshold: int) -> bool:
    return c.all_methods == 0


ClassRule = Callable[[StereotypeCounts, int], bool]

CLASS_RULES: Tuple[Tuple[str, ClassRule], ...] = (
    ("entity", entity),
    ("minimal-entity", minimal_entity),
    ("data-provider", data_provider),
    ("commander", commander),
    ("boundary", boundary),
    ("factory", factory),
    ("controller", controller),
    ("pure-controller", pure_controller),
    ("large-class", large_class),
    ("lazy-class", lazy_class),
    ("degenerate", degenerate),
    ("data-class", data_class),
    ("small-class", small_class),
    ("empty", empty),
)


def classify_class_counts(counts: StereotypeCounts, methods_per_class_threshold: int) -> Tuple[str, ...]:
    """
    Evaluate every class rule over a class's method label counts.

    Returns:
        Labels in rule order; ("unclassified",) when no rule fires.
    """
    labels: List[str] = [
        label for label, rule in CLASS_RULES if rule(counts, methods_per_class_threshold)
    ]
    return tuple(labels) if labels else (UNCLASSIFIED,)
