"""Unit tests for the method stereotype passes."""

import pytest

pytestmark = pytest.mark.fast

from stereocode.config import Language
from stereocode.stereotype import method_rules
from stereocode.stereotype.method_rules import METHOD_PASSES, MethodContext, classify_method


CPP = MethodContext(Language.CPP, "Widget")
JAVA = MethodContext(Language.JAVA, "Order")
CSHARP = MethodContext(Language.CSHARP, "Account")


def test_pass_order_starts_with_constructors():
    assert len(METHOD_PASSES) == 12
    assert METHOD_PASSES[0] is method_rules.constructor_destructor
    assert METHOD_PASSES[-1].__name__ == "empty"


# ============================================================================
# CONSTRUCTORS AND DESTRUCTORS
# ============================================================================

class TestConstructorDestructor:

    def test_plain_constructor(self, make_method):
        m = make_method(is_constructor_or_destructor=True, parameter_list_text="(int size)")
        assert classify_method(m, CPP) == ("constructor",)

    def test_copy_constructor(self, make_method):
        m = make_method(is_constructor_or_destructor=True, parameter_list_text="(const Widget& other)")
        assert classify_method(m, CPP) == ("copy-constructor",)

    def test_destructor(self, make_method):
        m = make_method(is_constructor_or_destructor=True, is_destructor=True)
        assert classify_method(m, CPP) == ("destructor",)

    def test_anonymous_class_has_no_copy_constructor(self, make_method):
        m = make_method(is_constructor_or_destructor=True, parameter_list_text="(const Widget& other)")
        assert classify_method(m, MethodContext(Language.CPP, "")) == ("constructor",)

    def test_constructor_receives_only_one_label(self, make_method):
        # Would earn set, factory and empty if it were an ordinary method
        m = make_method(
            is_constructor_or_destructor=True,
            num_attributes_modified=1,
            is_factory=True,
            is_empty=True,
        )
        assert classify_method(m, CPP) == ("constructor",)

    def test_other_passes_skip_constructors(self, make_method):
        m = make_method(is_constructor_or_destructor=True, attribute_returned_directly=True)
        for rule in METHOD_PASSES[1:]:
            assert rule(m, CPP) is None


# ============================================================================
# ACCESSORS
# ============================================================================

class TestAccessors:

    def test_getter(self, make_method):
        m = make_method(return_type_raw="int", attribute_returned_directly=True, attribute_used=True)
        assert classify_method(m, CPP) == ("get",)

    def test_predicate(self, make_method):
        m = make_method(return_type_raw="bool", has_non_attribute_return=True, attribute_used=True)
        assert classify_method(m, CPP) == ("predicate",)

    def test_predicate_needs_class_state(self, make_method):
        m = make_method(
            return_type_raw="bool",
            has_non_attribute_return=True,
            external_function_call_count=1,
        )
        labels = classify_method(m, CPP)
        assert "predicate" not in labels

    def test_predicate_via_class_method_call(self, make_method):
        m = make_method(
            return_type_raw="boolean",
            has_non_attribute_return=True,
            in_class_method_calls={"size"},
        )
        assert "predicate" in classify_method(m, JAVA)

    def test_csharp_boxed_boolean_predicate(self, make_method):
        m = make_method(return_type_raw="Boolean", has_non_attribute_return=True, attribute_used=True)
        assert classify_method(m, CSHARP) == ("predicate",)

    def test_property(self, make_method):
        m = make_method(return_type_raw="double", has_non_attribute_return=True, attribute_used=True)
        assert classify_method(m, CPP) == ("property",)

    def test_void_pointer_return_is_property(self, make_method):
        m = make_method(return_type_raw="void*", has_non_attribute_return=True, attribute_used=True)
        labels = classify_method(m, CPP)
        assert "property" in labels
        # A void pointer is an external reference too
        assert "collaborator" in labels

    def test_strict_factory_is_never_property(self, make_method):
        m = make_method(
            return_type_raw="Widget*",
            has_non_attribute_return=True,
            attribute_used=True,
            is_strict_factory=True,
        )
        labels = classify_method(m, CPP)
        assert "property" not in labels
        assert "factory" in labels

    def test_void_accessor(self, make_method):
        m = make_method(return_type_raw="void", mutable_ref_param_reassigned=True, attribute_used=True)
        assert classify_method(m, CPP) == ("void-accessor",)

    def test_void_accessor_excludes_void_pointer(self, make_method):
        m = make_method(return_type_raw="void*", mutable_ref_param_reassigned=True, attribute_used=True)
        assert method_rules.void_accessor(m, CPP) is None

    def test_getter_and_factory_are_independent(self, make_method):
        m = make_method(
            return_type_raw="Widget*",
            attribute_returned_directly=True,
            attribute_used=True,
            is_factory=True,
        )
        assert classify_method(m, CPP) == ("get", "factory")


# ============================================================================
# MUTATORS
# ============================================================================

class TestMutators:

    def test_setter(self, make_method):
        m = make_method(return_type_raw="void", num_attributes_modified=1, attribute_used=True)
        assert classify_method(m, CPP) == ("set",)

    def test_setter_tolerates_one_call(self, make_method):
        m = make_method(return_type_raw="void", num_attributes_modified=1, in_class_method_calls={"notify"})
        assert classify_method(m, CPP) == ("set",)

    def test_command_changes_several_attributes(self, make_method):
        m = make_method(return_type_raw="void", num_attributes_modified=2, attribute_used=True)
        assert classify_method(m, CPP) == ("command",)

    def test_command_via_calls_only(self, make_method):
        m = make_method(return_type_raw="void", attribute_used=True, attribute_calls={"clear"})
        assert classify_method(m, CPP) == ("command",)

    def test_one_change_with_several_calls(self, make_method):
        m = make_method(
            return_type_raw="void",
            num_attributes_modified=1,
            in_class_method_calls={"validate"},
            attribute_calls={"push_back"},
        )
        assert classify_method(m, CPP) == ("command",)

    def test_non_void_command(self, make_method):
        m = make_method(return_type_raw="int", num_attributes_modified=2, attribute_used=True)
        assert classify_method(m, CPP) == ("non-void-command",)

    def test_const_method_with_calls_is_not_a_command(self, make_method):
        m = make_method(
            return_type_raw="void",
            attribute_used=True,
            attribute_calls={"size"},
            is_const_qualified=True,
        )
        assert method_rules.command(m, CPP) is None

    def test_const_method_changing_mutable_attributes_is_a_command(self, make_method):
        m = make_method(return_type_raw="void", num_attributes_modified=2, is_const_qualified=True)
        assert method_rules.command(m, CPP) == "command"

    def test_java_boxed_void_is_void(self, make_method):
        m = make_method(return_type_raw="Void", num_attributes_modified=3, attribute_used=True)
        assert method_rules.command(m, JAVA) == "command"


# ============================================================================
# CREATIONAL AND COLLABORATIONAL
# ============================================================================

class TestCollaboration:

    def test_factory(self, make_method):
        m = make_method(return_type_raw="Widget*", is_factory=True, constructor_calls={"Widget"})
        assert method_rules.factory(m, CPP) == "factory"

    def test_wrapper(self, make_method):
        m = make_method(return_type_raw="void", external_function_call_count=2)
        assert classify_method(m, CPP) == ("wrapper", "stateless")

    def test_controller_via_external_method_call(self, make_method):
        m = make_method(return_type_raw="void", external_method_call_count=1)
        assert classify_method(m, CPP) == ("controller", "stateless")

    def test_controller_via_mutated_parameter(self, make_method):
        m = make_method(return_type_raw="void", mutates_non_primitive_local_or_parameter=True)
        assert method_rules.wrapper_controller_collaborator(m, CPP) == "controller"

    @pytest.mark.parametrize("flag", [
        "uses_external_non_primitive_attribute",
        "uses_external_non_primitive_local",
        "uses_external_non_primitive_parameter",
    ])
    def test_collaborator_flags(self, make_method, flag):
        m = make_method(return_type_raw="void", num_attributes_modified=1, **{flag: True})
        assert method_rules.wrapper_controller_collaborator(m, CPP) == "collaborator"

    def test_collaborator_via_external_return(self, make_method):
        m = make_method(
            return_type_raw="Engine",
            has_non_attribute_return=True,
            attribute_used=True,
            returns_external_non_primitive=True,
        )
        assert classify_method(m, CPP) == ("property", "collaborator")

    def test_empty_method_is_not_collaborational(self, make_method):
        m = make_method(is_empty=True, uses_external_non_primitive_parameter=True)
        assert method_rules.wrapper_controller_collaborator(m, CPP) is None


# ============================================================================
# DEGENERATE
# ============================================================================

class TestDegenerate:

    def test_incidental(self, make_method):
        m = make_method(return_type_raw="int", has_non_attribute_return=True)
        assert classify_method(m, CPP) == ("incidental",)

    def test_stateless_with_constructor_call(self, make_method):
        m = make_method(return_type_raw="void", constructor_calls={"Logger"})
        assert classify_method(m, CPP) == ("stateless",)

    def test_empty(self, make_method):
        m = make_method(return_type_raw="void", is_empty=True)
        assert classify_method(m, CPP) == ("empty",)

    def test_attribute_use_rules_out_degenerates(self, make_method):
        m = make_method(return_type_raw="void", attribute_used=True)
        assert classify_method(m, CPP) == ("unclassified",)


def test_classification_is_deterministic(make_method):
    m = make_method(
        return_type_raw="bool",
        has_non_attribute_return=True,
        attribute_used=True,
        attribute_calls={"count"},
    )
    assert classify_method(m, CPP) == classify_method(m, CPP) == ("predicate", "non-void-command")


def test_explicit_canonical_type_wins(make_method):
    m = make_method(
        return_type_raw="MyBool",
        return_type_canonical="bool",
        has_non_attribute_return=True,
        attribute_used=True,
    )
    assert classify_method(m, CPP) == ("predicate",)
