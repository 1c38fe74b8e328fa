# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import pytest

from duckcall.core.errors import MethodNotFound
from duckcall.core.types_core import BOOLEAN, INT, WILDCARD, HostArray, array_of, class_of
from duckcall.method_resolver import MethodResolver, describe_arguments, normalize_to_primitives
from duckcall.method_table import MethodTable, overloaded


class Dial:
	@overloaded
	def set_value(self, value: INT) -> str:
		return f"int:{value}"

	@set_value.overload
	def set_value(self, value: str) -> str:
		return f"str:{value}"


class OnlyInt:
	def f(self, n: INT) -> int:
		return n


class Parent:
	def greet(self, who: object) -> str:
		return "parent"

	def wave(self, who: object) -> str:
		return "parent"


class Child(Parent):
	def greet(self, who: object) -> str:
		return "child"

	def wave(self, who: str) -> str:
		return "child"


class Pair:
	def put(self, a: object, b: object) -> str:
		return "pair"


class IntPair(Pair):
	def put(self, a: INT, b: object) -> str:
		return "int pair"


class Named(Protocol):
	name: str


class Greeter:
	def greet(self, who: Named) -> str:
		return who.name


class Picture:
	pass


class Photo(Picture):
	pass


class Gallery:
	def hang(self, pictures: array_of(Picture)) -> int:
		return len(pictures)

	def take(self, items: Sequence) -> int:
		return len(items)

	def place(self, slot: INT, items: Sequence) -> int:
		return slot + len(items)


def _resolver(cls: type) -> MethodResolver:
	return MethodResolver(MethodTable.of(cls))


def test_describe_arguments() -> None:
	assert describe_arguments([5, None, "x"]) == (class_of(int), WILDCARD, class_of(str))
	assert describe_arguments([]) == ()


def test_normalize_to_primitives_leaves_input_untouched() -> None:
	original = (class_of(int), class_of(bool), class_of(str), WILDCARD)
	normalized = normalize_to_primitives(original)
	assert normalized == (INT, BOOLEAN, class_of(str), WILDCARD)
	assert original == (class_of(int), class_of(bool), class_of(str), WILDCARD)


def test_exact_name_and_types_resolve_to_declared_method() -> None:
	for cls in (Dial, OnlyInt, Child, Gallery):
		resolver = _resolver(cls)
		for method in resolver.table.methods:
			assert resolver.resolve(method.name, method.param_types) is method


def test_boxed_int_resolves_primitive_overload() -> None:
	method = _resolver(Dial).resolve("set_value", describe_arguments([5]))
	assert method.param_types == (INT,)


def test_none_resolves_reference_overload() -> None:
	method = _resolver(Dial).resolve("set_value", describe_arguments([None]))
	assert method.param_types == (class_of(str),)


def test_unmatched_double_fails() -> None:
	with pytest.raises(MethodNotFound) as exc:
		_resolver(Dial).resolve("set_value", describe_arguments([3.14]))
	assert exc.value.name == "set_value"
	assert exc.value.arg_types == (class_of(float),)
	assert "set_value(builtins.float)" in str(exc.value)


def test_none_never_matches_primitive_parameter() -> None:
	with pytest.raises(MethodNotFound):
		_resolver(OnlyInt).resolve("f", (WILDCARD,))


def test_unknown_name_fails() -> None:
	with pytest.raises(MethodNotFound) as exc:
		_resolver(Dial).resolve("nope", ())
	assert exc.value.name == "nope"


def test_override_is_preferred() -> None:
	method = _resolver(Child).resolve("greet", describe_arguments(["bob"]))
	assert method.owner is Child


def test_subclass_overload_is_scanned_first() -> None:
	resolver = _resolver(Child)
	assert resolver.resolve("wave", describe_arguments(["bob"])).owner is Child
	assert resolver.resolve("wave", describe_arguments([3])).owner is Parent


def test_array_component_assignability() -> None:
	resolver = _resolver(Gallery)
	photos = HostArray(Photo, [Photo()])
	method = resolver.resolve("hang", describe_arguments([photos]))
	assert method.name == "hang"
	assert resolver.resolve("hang", (WILDCARD,)).name == "hang"
	with pytest.raises(MethodNotFound):
		resolver.resolve("hang", describe_arguments([[Photo()]]))


def test_lists_match_sequence_parameters() -> None:
	method = _resolver(Gallery).resolve("take", describe_arguments([[1, 2]]))
	assert method.name == "take"


def test_mixed_primitive_and_reference_arguments_use_normalized_scan() -> None:
	method = _resolver(Gallery).resolve("place", describe_arguments([2, [1]]))
	assert method.param_types[0] == INT


def test_resolution_is_idempotent() -> None:
	resolver = _resolver(Dial)
	arg_types = describe_arguments([None])
	first = resolver.resolve("set_value", arg_types)
	for _ in range(5):
		assert resolver.resolve("set_value", arg_types) is first


def test_registry_is_only_built_for_brute_force() -> None:
	resolver = _resolver(Dial)
	resolver.resolve("set_value", describe_arguments([5]))
	assert resolver.registry.is_built is False
	resolver.resolve("set_value", describe_arguments([None]))
	assert resolver.registry.is_built is True


def test_override_matching_only_after_unboxing_still_wins() -> None:
	resolver = _resolver(IntPair)
	assert [m.owner for m in resolver.registry.get_candidates("put")] == [IntPair, Pair]
	assert resolver.resolve("put", describe_arguments([5, "x"])).owner is IntPair
	assert resolver.resolve("put", describe_arguments(["y", "x"])).owner is Pair


def test_protocol_parameters_reject_instead_of_raising() -> None:
	with pytest.raises(MethodNotFound) as exc:
		_resolver(Greeter).resolve("greet", describe_arguments(["bob"]))
	assert exc.value.name == "greet"
	assert _resolver(Greeter).resolve("greet", (WILDCARD,)).name == "greet"
