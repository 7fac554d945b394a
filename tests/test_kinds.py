#
# Printable - Kinds Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import collections
import io
import os
import types

# Third Party ----------------------------------------------------------------------------------------------------------
import pytest
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from printable.kinds import (
    Invocable,
    Kind,
    Shape,
    classify,
    invocable_from_object,
    invocable_from_pair,
    invocable_from_string,
    is_closure,
    is_type_name,
    resolve_name,
    resource_id,
)
from printable.sentinels import NOT_FOUND


# Classes --------------------------------------------------------------------------------------------------------------

class Named:
    def method(self):
        return None

    @classmethod
    def factory(cls):
        return cls()

    @staticmethod
    def helper():
        return None


class Invokable:
    def __call__(self):
        return None


class BrokenClass:
    @property
    def __class__(self):
        raise RuntimeError("broken")


class BrokenAttr:
    def __getattr__(self, name):
        raise RuntimeError(f"no {name}")


def module_function():
    return None


# Tests ----------------------------------------------------------------------------------------------------------------

class TestClassify:

    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param(None, Kind.NULL, id="none"),
            pytest.param(True, Kind.BOOL, id="bool"),
            pytest.param(0, Kind.INT, id="int"),
            pytest.param(1.5, Kind.FLOAT, id="float"),
            pytest.param("", Kind.STRING, id="str"),
            pytest.param(b"", Kind.OBJECT, id="bytes"),
            pytest.param(bytearray(b"x"), Kind.OBJECT, id="bytearray"),
            pytest.param([], Kind.ARRAY, id="list"),
            pytest.param((), Kind.ARRAY, id="tuple"),
            pytest.param({}, Kind.ARRAY, id="dict"),
            pytest.param(set(), Kind.ARRAY, id="set"),
            pytest.param(frozenset(), Kind.ARRAY, id="frozenset"),
            pytest.param(range(3), Kind.ARRAY, id="range"),
            pytest.param(collections.deque(), Kind.ARRAY, id="deque"),
            pytest.param(frozendict(), Kind.ARRAY, id="frozendict"),
            pytest.param(io.StringIO(), Kind.OBJECT, id="string_io"),
            pytest.param(iter([]), Kind.OBJECT, id="iterator"),
            pytest.param(object(), Kind.OBJECT, id="object"),
            pytest.param(Named, Kind.OBJECT, id="class"),
            pytest.param(module_function, Kind.OBJECT, id="function"),
            pytest.param(os, Kind.OBJECT, id="module"),
            pytest.param(BrokenClass(), Kind.UNKNOWN, id="broken_class"),
        ],
    )
    def test_kinds(self, obj, expected):
        assert classify(obj) is expected

    def test_resources(self, open_file, closed_file, open_socket):
        assert classify(open_file) is Kind.RESOURCE
        assert classify(open_socket) is Kind.RESOURCE
        assert classify(closed_file) is Kind.UNKNOWN

    def test_kind_tags(self):
        assert [k.value for k in Kind] == [
            "null", "bool", "int", "float", "string", "array", "object", "resource", "unknown type",
        ]


class TestResourceId:

    def test_open(self, open_file):
        assert resource_id(open_file) == open_file.fileno()

    def test_closed(self, closed_file):
        assert resource_id(closed_file) is None

    def test_closed_socket(self, open_socket):
        open_socket.close()
        assert resource_id(open_socket) is None

    def test_no_descriptor(self):
        assert resource_id(io.BytesIO()) is None
        assert resource_id(object()) is None


class TestResolveName:

    @pytest.mark.parametrize(
        "name, expected",
        [
            pytest.param("len", len, id="builtin"),
            pytest.param("int", int, id="builtin_type"),
            pytest.param("str.upper", str.upper, id="builtin_attr"),
            pytest.param("os.path.join", os.path.join, id="dotted"),
            pytest.param("collections.OrderedDict", collections.OrderedDict, id="dotted_type"),
        ],
    )
    def test_found(self, name, expected):
        assert resolve_name(name) is expected

    @pytest.mark.parametrize(
        "name",
        [
            pytest.param("", id="empty"),
            pytest.param("no_such_name", id="missing"),
            pytest.param("os.no_such_name", id="missing_attr"),
            pytest.param("1abc", id="not_identifier"),
            pytest.param("os..path", id="empty_part"),
            pytest.param("a" * 300, id="too_long"),
            pytest.param(None, id="not_str"),
        ],
    )
    def test_not_found(self, name):
        assert resolve_name(name) is NOT_FOUND

    def test_never_imports(self, monkeypatch):
        import sys

        monkeypatch.delitem(sys.modules, "colorsys", raising=False)
        assert resolve_name("colorsys.rgb_to_hsv") is NOT_FOUND
        assert "colorsys" not in sys.modules

    def test_module_getattr_not_called(self, monkeypatch):
        import sys

        calls = []

        def lazy(name):
            calls.append(name)
            return len

        module = types.ModuleType("lazy_module")
        module.__getattr__ = lazy
        module.present = len
        monkeypatch.setitem(sys.modules, "lazy_module", module)

        assert resolve_name("lazy_module.present") is len
        assert resolve_name("lazy_module.thing") is NOT_FOUND
        assert calls == []

    def test_is_type_name(self):
        assert is_type_name("int") is True
        assert is_type_name("collections.OrderedDict") is True
        assert is_type_name("len") is False
        assert is_type_name("NoSuchType") is False


class TestInvocableFromString:

    @pytest.mark.parametrize(
        "s, expected",
        [
            pytest.param("len", Invocable(Shape.FUNCTION, name="len"), id="builtin"),
            pytest.param("os.path.join", Invocable(Shape.FUNCTION, name="os.path.join"), id="dotted"),
            pytest.param("str::upper", Invocable(Shape.METHOD, name="upper", target="str"), id="type_method"),
            pytest.param(
                "collections.OrderedDict::fromkeys",
                Invocable(Shape.METHOD, name="fromkeys", target="collections.OrderedDict"),
                id="dotted_type_method",
            ),
        ],
    )
    def test_recognized(self, s, expected):
        assert invocable_from_string(s) == expected

    @pytest.mark.parametrize(
        "s",
        [
            pytest.param("int", id="type_name"),
            pytest.param("str::no_method", id="missing_method"),
            pytest.param("str::", id="empty_method"),
            pytest.param("len::x", id="not_a_type"),
            pytest.param("hello world", id="text"),
        ],
    )
    def test_not_recognized(self, s):
        assert invocable_from_string(s) is None


class TestInvocableFromPair:

    def test_object_target(self):
        assert invocable_from_pair([Named(), "method"]) == Invocable(Shape.METHOD, name="method", target="Named")

    def test_class_target(self):
        assert invocable_from_pair((Named, "factory")) == Invocable(Shape.METHOD, name="factory", target="Named")

    def test_type_name_target(self):
        assert invocable_from_pair(["dict", "fromkeys"]) == Invocable(Shape.METHOD, name="fromkeys", target="dict")

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param([Named()], id="one_element"),
            pytest.param([Named(), "method", 1], id="three_elements"),
            pytest.param({0: Named(), 1: "method"}, id="mapping"),
            pytest.param([Named(), "missing"], id="missing_method"),
            pytest.param([Named(), "not valid"], id="not_identifier"),
            pytest.param(["NoSuchType", "method"], id="unknown_type_name"),
            pytest.param([BrokenAttr(), "method"], id="broken_getattr"),
        ],
    )
    def test_not_a_pair(self, value):
        assert invocable_from_pair(value) is None


class TestInvocableFromObject:

    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param(module_function, Invocable(Shape.FUNCTION, name="module_function"), id="function"),
            pytest.param(len, Invocable(Shape.FUNCTION, name="len"), id="builtin"),
            pytest.param(Named().method, Invocable(Shape.METHOD, name="method", target="Named"), id="bound"),
            pytest.param(Named.factory, Invocable(Shape.METHOD, name="factory", target="Named"), id="classmethod"),
            pytest.param(Named.helper, Invocable(Shape.METHOD, name="helper", target="Named"), id="staticmethod"),
            pytest.param([].append, Invocable(Shape.METHOD, name="append", target="list"), id="builtin_method"),
            pytest.param((1).__add__, Invocable(Shape.METHOD, name="__add__", target="int"), id="method_wrapper"),
            pytest.param(str.upper, Invocable(Shape.METHOD, name="upper", target="str"), id="method_descriptor"),
            pytest.param(Invokable(), Invocable(Shape.INVOKABLE, target="Invokable"), id="invokable"),
            pytest.param(lambda: None, Invocable(Shape.CLOSURE), id="lambda"),
        ],
    )
    def test_recognized(self, obj, expected):
        assert invocable_from_object(obj) == expected

    @pytest.mark.parametrize(
        "obj",
        [
            pytest.param(Named, id="class"),
            pytest.param(int, id="builtin_class"),
            pytest.param(Named(), id="instance"),
            pytest.param(42, id="int"),
        ],
    )
    def test_not_invocable(self, obj):
        assert invocable_from_object(obj) is None

    def test_nested_function_is_closure(self):
        def nested():
            return None

        assert is_closure(nested) is True
        assert invocable_from_object(nested) == Invocable(Shape.CLOSURE)

    def test_module_function_not_closure(self):
        assert is_closure(module_function) is False
        assert isinstance(module_function, types.FunctionType)

    def test_local_class_method_not_closure(self):
        class Local:
            def m(self):
                return None

        assert is_closure(Local.m) is False
        assert invocable_from_object(Local.m) == Invocable(Shape.METHOD, name="m", target="Local")
        assert invocable_from_object(Local().m) == Invocable(Shape.METHOD, name="m", target="Local")

    def test_function_in_factory_is_closure(self):
        def make():
            def inner():
                return None

            return inner

        assert invocable_from_object(make()) == Invocable(Shape.CLOSURE)
