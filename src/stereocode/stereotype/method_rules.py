"""
Method stereotype rules.

Based on the method stereotype taxonomy of Dragan, Collard and Maletic.
Each pass reads one method's facts and returns at most one label. Passes
never read each other's output, so a method may collect several labels
(e.g. get and factory). Constructors and destructors only ever receive
the label of the first pass.
"""

import functools
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from stereocode.config import BOOLEAN_TYPES, VOID_TYPES, Language
from stereocode.schemas import MethodFacts
from .type_classifier import canonical_type, is_void_pointer

UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class MethodContext:
    """What the rules need to know about the enclosing class."""
    language: Language
    self_type_name: str


def _canonical_return(method: MethodFacts, context: MethodContext) -> str:
    if method.return_type_canonical is not None:
        return method.return_type_canonical
    return canonical_type(method.return_type_raw, context.language)


def _void_pointer(method: MethodFacts, context: MethodContext) -> bool:
    return is_void_pointer(method.return_type_raw, context.language)


def _uses_state(method: MethodFacts) -> bool:
    """Uses an attribute (a bare self reference counts) or calls a method of the class."""
    return method.attribute_used or len(method.in_class_method_calls) > 0


def _class_calls(method: MethodFacts) -> int:
    """Calls to methods of the class plus calls made on attributes."""
    return len(method.in_class_method_calls) + len(method.attribute_calls)


MethodPass = Callable[[MethodFacts, MethodContext], Optional[str]]


def skips_constructors(rule: MethodPass) -> MethodPass:
    """Make a pass ignore constructors and destructors."""
    @functools.wraps(rule)
    def wrapper(method: MethodFacts, context: MethodContext) -> Optional[str]:
        if method.is_constructor_or_destructor:
            return None
        return rule(method, context)
    return wrapper


def constructor_destructor(method: MethodFacts, context: MethodContext) -> Optional[str]:
    if not method.is_constructor_or_destructor:
        return None
    if method.is_destructor:
        return "destructor"
    if context.self_type_name and context.self_type_name in method.parameter_list_text:
        return "copy-constructor"
    return "constructor"


@skips_constructors
def getter(method: MethodFacts, context: MethodContext) -> Optional[str]:
    # "return this;" alone is not an attribute return
    if method.attribute_returned_directly:
        return "get"
    return None


@skips_constructors
def predicate(method: MethodFacts, context: MethodContext) -> Optional[str]:
    returns_boolean = _canonical_return(method, context) in BOOLEAN_TYPES[context.language]
    if returns_boolean and method.has_non_attribute_return and _uses_state(method):
        return "predicate"
    return None


@skips_constructors
def property_(method: MethodFacts, context: MethodContext) -> Optional[str]:
    if method.is_strict_factory:
        return None
    canonical = _canonical_return(method, context)
    excluded = BOOLEAN_TYPES[context.language] | VOID_TYPES[context.language]
    returns_value = (canonical != "" and canonical not in excluded) or _void_pointer(method, context)
    if returns_value and method.has_non_attribute_return and _uses_state(method):
        return "property"
    return None


@skips_constructors
def void_accessor(method: MethodFacts, context: MethodContext) -> Optional[str]:
    returns_void = _canonical_return(method, context) == "void" and not _void_pointer(method, context)
    if returns_void and method.mutable_ref_param_reassigned and _uses_state(method):
        return "void-accessor"
    return None


@skips_constructors
def setter(method: MethodFacts, context: MethodContext) -> Optional[str]:
    if method.num_attributes_modified == 1 and _class_calls(method) <= 1:
        return "set"
    return None


@skips_constructors
def command(method: MethodFacts, context: MethodContext) -> Optional[str]:
    """
    command / non-void-command.

    Qualifies when no attribute changes but the class or its attributes are
    called, when one attribute changes alongside more than one such call, or
    when several attributes change. Const methods are excluded unless they
    change several (mutable) attributes.
    """
    modified = method.num_attributes_modified
    calls = _class_calls(method)

    no_change_with_calls = modified == 0 and calls > 0
    one_change_with_calls = modified == 1 and calls > 1
    several_changes = modified > 1
    if not (no_change_with_calls or one_change_with_calls or several_changes):
        return None

    if method.is_const_qualified and not several_changes:
        return None

    canonical = _canonical_return(method, context)
    if canonical not in VOID_TYPES[context.language] and not _void_pointer(method, context):
        return "non-void-command"
    return "command"


@skips_constructors
def factory(method: MethodFacts, context: MethodContext) -> Optional[str]:
    if method.is_factory or method.is_strict_factory:
        return "factory"
    return None


@skips_constructors
def wrapper_controller_collaborator(method: MethodFacts, context: MethodContext) -> Optional[str]:
    if method.is_empty:
        return None

    isolated = (
        method.num_attributes_modified == 0
        and len(method.in_class_method_calls) == 0
        and len(method.attribute_calls) == 0
    )
    has_free_function_calls = method.external_function_call_count > 0
    has_external_method_calls = method.external_method_call_count > 0

    if isolated and not has_external_method_calls and has_free_function_calls:
        return "wrapper"
    if isolated and (has_external_method_calls or method.mutates_non_primitive_local_or_parameter):
        return "controller"
    if (
        method.uses_external_non_primitive_attribute
        or method.uses_external_non_primitive_local
        or method.uses_external_non_primitive_parameter
        or bool(method.returns_external_non_primitive)
        or _void_pointer(method, context)
    ):
        return "collaborator"
    return None


@skips_constructors
def incidental(method: MethodFacts, context: MethodContext) -> Optional[str]:
    if method.is_empty or method.attribute_used:
        return None
    no_calls = (
        _class_calls(method) == 0
        and len(method.constructor_calls) == 0
        and method.external_function_call_count == 0
        and method.external_method_call_count == 0
    )
    if no_calls:
        return "incidental"
    return None


@skips_constructors
def stateless(method: MethodFacts, context: MethodContext) -> Optional[str]:
    if method.is_empty or method.attribute_used or _class_calls(method) != 0:
        return None
    if (
        method.external_function_call_count > 0
        or method.external_method_call_count > 0
        or len(method.constructor_calls) > 0
    ):
        return "stateless"
    return None


@skips_constructors
def empty(method: MethodFacts, context: MethodContext) -> Optional[str]:
    if method.is_empty:
        return "empty"
    return None


# Order is presentational only; passes are independent
METHOD_PASSES: Tuple[MethodPass, ...] = (
    constructor_destructor,
    getter,
    predicate,
    property_,
    void_accessor,
    setter,
    command,
    factory,
    wrapper_controller_collaborator,
    incidental,
    stateless,
    empty,
)


def classify_method(method: MethodFacts, context: MethodContext) -> Tuple[str, ...]:
    """
    Run every pass over a method and collect the labels it earns.

    Returns:
        Labels in pass order; ("unclassified",) when no pass fires.
    """
    labels: List[str] = []
    for rule in METHOD_PASSES:
        label = rule(method, context)
        if label is not None:
            labels.append(label)

    return tuple(labels) if labels else (UNCLASSIFIED,)
