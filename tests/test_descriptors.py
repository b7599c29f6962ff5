"""Tests for descriptor derivation and parsing (invmatch._descriptors)."""

import pytest

from invmatch import (
    ClassRef,
    InvalidDescriptorError,
    MethodRef,
    is_valid_method_descriptor,
    method_descriptor,
    parse_method_descriptor,
    type_descriptor,
)


class TestTypeDescriptor:
    @pytest.mark.parametrize(
        ("type_name", "expected"),
        [
            ("boolean", "Z"),
            ("byte", "B"),
            ("char", "C"),
            ("short", "S"),
            ("int", "I"),
            ("long", "J"),
            ("float", "F"),
            ("double", "D"),
        ],
    )
    def test_primitives(self, type_name: str, expected: str) -> None:
        assert type_descriptor(type_name) == expected

    def test_reference_canonical(self) -> None:
        assert type_descriptor("java.lang.String") == "Ljava/lang/String;"

    def test_reference_internal(self) -> None:
        assert type_descriptor("java/lang/String") == "Ljava/lang/String;"

    def test_nested_class(self) -> None:
        assert type_descriptor("java.util.Map$Entry") == "Ljava/util/Map$Entry;"

    def test_default_package(self) -> None:
        assert type_descriptor("Widget") == "LWidget;"

    def test_arrays(self) -> None:
        assert type_descriptor("int[]") == "[I"
        assert type_descriptor("double[][]") == "[[D"
        assert type_descriptor("java.lang.Object[]") == "[Ljava/lang/Object;"

    def test_class_ref(self) -> None:
        assert type_descriptor(ClassRef("com.app.Widget")) == "Lcom/app/Widget;"

    def test_void_only_as_return(self) -> None:
        assert type_descriptor("void", allow_void=True) == "V"
        with pytest.raises(InvalidDescriptorError, match="void"):
            type_descriptor("void")

    def test_void_array_rejected(self) -> None:
        with pytest.raises(InvalidDescriptorError):
            type_descriptor("void[]", allow_void=True)

    @pytest.mark.parametrize("bad", ["", "[]", "java..lang.String", "java.lang.", "a b", "int;"])
    def test_malformed(self, bad: str) -> None:
        with pytest.raises(InvalidDescriptorError):
            type_descriptor(bad)

    def test_too_many_dimensions(self) -> None:
        with pytest.raises(InvalidDescriptorError, match="array dimensions"):
            type_descriptor("int" + "[]" * 256)


class TestMethodDescriptor:
    def test_no_args_void(self) -> None:
        assert method_descriptor([], "void") == "()V"

    def test_default_return_is_void(self) -> None:
        assert method_descriptor(["int"]) == "(I)V"

    def test_mixed(self) -> None:
        descriptor = method_descriptor(["int", "java.lang.String", "long[]"], "boolean")
        assert descriptor == "(ILjava/lang/String;[J)Z"

    def test_reference_return(self) -> None:
        assert method_descriptor((), "java.lang.Object") == "()Ljava/lang/Object;"

    def test_void_parameter_rejected(self) -> None:
        with pytest.raises(InvalidDescriptorError):
            method_descriptor(["void"], "void")


class TestParseMethodDescriptor:
    def test_simple(self) -> None:
        assert parse_method_descriptor("()V") == ((), "V")

    def test_parameters(self) -> None:
        params, ret = parse_method_descriptor("(IJ[Ljava/lang/Object;[[Z)Ljava/lang/String;")
        assert params == ("I", "J", "[Ljava/lang/Object;", "[[Z")
        assert ret == "Ljava/lang/String;"

    def test_array_return(self) -> None:
        assert parse_method_descriptor("(I)[B") == (("I",), "[B")

    @pytest.mark.parametrize(
        "bad",
        [
            "",
            "V",
            "I)V",
            "(I",
            "()",
            "(V)V",
            "(I)VV",
            "(I)[V",
            "(Ljava/lang/String)V",
            "(L;)V",
            "(Ljava.lang.String;)V",
            "(X)V",
            "([)V",
        ],
    )
    def test_malformed(self, bad: str) -> None:
        with pytest.raises(InvalidDescriptorError):
            parse_method_descriptor(bad)
        assert is_valid_method_descriptor(bad) is False

    def test_round_trip_of_derived_descriptor(self) -> None:
        descriptor = method_descriptor(["char", "java.util.Map$Entry[]"], "float")
        assert is_valid_method_descriptor(descriptor) is True
        assert parse_method_descriptor(descriptor) == (("C", "[Ljava/util/Map$Entry;"), "F")


class TestClassRef:
    def test_names(self) -> None:
        ref = ClassRef("com.app.Widget")
        assert ref.canonical_name == "com.app.Widget"
        assert ref.internal_name == "com/app/Widget"
        assert ref.descriptor == "Lcom/app/Widget;"

    def test_internal_input(self) -> None:
        ref = ClassRef("com/app/Widget")
        assert ref.canonical_name == "com.app.Widget"

    @pytest.mark.parametrize("bad", ["", "com..Widget", "com.app.", "com/app/Wid;get"])
    def test_malformed(self, bad: str) -> None:
        with pytest.raises(InvalidDescriptorError):
            ClassRef(bad)


class TestMethodRef:
    def test_descriptor_derived_at_construction(self) -> None:
        ref = MethodRef("render", ("int",))
        assert ref.descriptor == "(I)V"

    def test_list_parameters_frozen_to_tuple(self) -> None:
        ref = MethodRef("render", ["int", "int"], "int")  # type: ignore[arg-type]
        assert ref.parameter_types == ("int", "int")
        assert ref.descriptor == "(II)I"

    def test_class_ref_types(self) -> None:
        widget = ClassRef("com.app.Widget")
        ref = MethodRef("copy", (widget,), widget)
        assert ref.descriptor == "(Lcom/app/Widget;)Lcom/app/Widget;"

    def test_bad_type_fails_fast(self) -> None:
        with pytest.raises(InvalidDescriptorError):
            MethodRef("render", ("",))

    def test_bare_string_parameters_rejected(self) -> None:
        with pytest.raises(InvalidDescriptorError, match="not a string"):
            MethodRef("render", "int")  # type: ignore[arg-type]

    def test_equality_ignores_cached_descriptor(self) -> None:
        assert MethodRef("a", ("int",)) == MethodRef("a", ["int"])  # type: ignore[arg-type]
