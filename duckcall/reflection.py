# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-14
"""
Reflection engine: find and invoke methods of one target type by name.

One `Reflection` is bound to exactly one class. Callers name an operation
either directly (`find_best_method_on_target("set_value", 5)`) or in property
style (`invoke_setter_method_on_target("Value", obj, 5)`), and the engine
picks the method from the runtime argument types.

Property-style names are matched against declared method names ignoring case
and underscores, so `"Value"` with the `set` prefix finds both `setValue`
and `set_value`. When several names match, they are tried in declaration
order (most derived class first, then definition order).

An instance may be shared between threads: the only mutable state is the
resolver's registry, whose lazy build is idempotent.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any, Iterable, List, Optional, Tuple, Union

from duckcall.core.errors import MethodNotFound
from duckcall.core.type_names import parse_type_name
from duckcall.core.types_core import VOID, HostArray, TypeDesc, as_type_desc, describe_value
from duckcall.method_resolver import MethodResolver, describe_arguments
from duckcall.method_table import GET_CLASS, AccessPolicy, Method, MethodTable

logger = logging.getLogger(__name__)

GETTER_PREFIXES = ("get", "is")
SETTER_PREFIX = "set"

TypeLike = Union[TypeDesc, type, str, None]


class Reflection:
	"""Runtime method lookup and invocation for a single target class."""

	def __init__(self, target_type: type, *, access_policy: Optional[AccessPolicy] = None) -> None:
		if not isinstance(target_type, type):
			raise TypeError(f"expected a class, got {target_type!r}")
		self._target_type = target_type
		self._table = MethodTable.of(target_type)
		self._resolver = MethodResolver(self._table)
		self._access_policy = access_policy

	@property
	def target_type(self) -> type:
		return self._target_type

	def __repr__(self) -> str:
		return f"Reflection({self._target_type.__qualname__})"

	# --- lookup by pattern -------------------------------------------------

	def find_methods(self, pattern: Union[str, re.Pattern[str]], case_sensitive: bool = True) -> Tuple[Method, ...]:
		"""All methods whose whole name matches `pattern`."""
		regex = _compile(pattern, case_sensitive)
		return tuple(m for m in self._table.methods if regex.fullmatch(m.name))

	def find_first_method(self, pattern: Union[str, re.Pattern[str]], case_sensitive: bool = True) -> Optional[Method]:
		regex = _compile(pattern, case_sensitive)
		return next((m for m in self._table.methods if regex.fullmatch(m.name)), None)

	def find_getter_methods(self) -> Tuple[Method, ...]:
		"""
		Zero-argument, non-void methods named `get*` or `is*`.

		The universal `get_class` accessor is left out.
		"""
		result: List[Method] = []
		for method in self._table.methods:
			if method.arity != 0 or method.name == GET_CLASS.name:
				continue
			if method.return_type == VOID:
				continue
			if method.name.startswith(GETTER_PREFIXES):
				result.append(method)
		return tuple(result)

	def find_getter_property_names(self) -> Tuple[str, ...]:
		"""Getter names with the prefix (and one following underscore) removed."""
		result: List[str] = []
		for method in self.find_getter_methods():
			prop = _strip_getter_prefix(method.name)
			if prop:
				result.append(prop)
		return tuple(result)

	def find_method_names(self, name: str, prefixes: Iterable[str] = ("",)) -> Tuple[str, ...]:
		"""
		Declared method names equal to `prefix + name` for any of `prefixes`,
		ignoring case and underscores, in declaration order.
		"""
		wanted = {_fold(prefix + name) for prefix in prefixes}
		return tuple(n for n in self._table.names() if _fold(n) in wanted)

	# --- resolution ---------------------------------------------------------

	def find_best_method_on_target(self, name: str, *args: object) -> Method:
		return self._resolver.resolve(name, describe_arguments(args))

	def find_best_method_with_signature(self, name: str, *arg_types: TypeLike) -> Method:
		"""
		Resolve `name` against explicit argument types.

		Each type may be a TypeDesc, a class, None (the wildcard) or a type
		name such as `"int"`, `"builtins.str"` or `"Widget[]"`; bare names are
		looked up in the target type's module.
		"""
		return self._resolver.resolve(name, tuple(self._to_type_desc(t) for t in arg_types))

	# --- invocation ---------------------------------------------------------

	def invoke_best_method_on_target(self, names: Iterable[str], target: object, *args: object) -> Any:
		"""
		Invoke the first of `names` that resolves for `args`.

		A name that does not resolve is skipped unless it is the last one, in
		which case its MethodNotFound propagates. Whatever the invoked method
		raises propagates unchanged.
		"""
		method = self._resolve_first(names, describe_arguments(args))
		return method.invoke(target, args, access_policy=self._access_policy)

	def invoke_setter_method_on_target(self, property_name: str, target: object, value: object) -> Any:
		"""
		Invoke the `set<property_name>` method accepting `value`.

		When nothing accepts an untyped object array, it is retyped to an
		array of its first non-None element's class and resolved once more.
		If that also fails, the first failure is the one reported. The setter
		itself runs exactly once, outside the retry.
		"""
		query = SETTER_PREFIX + property_name
		names = self.find_method_names(property_name, (SETTER_PREFIX,))
		if not names:
			raise MethodNotFound(query, describe_arguments([value]))
		try:
			method = self._resolve_first(names, describe_arguments([value]))
		except MethodNotFound as original:
			retyped = _retype_object_array(value)
			if retyped is None:
				raise
			logger.debug("retrying %s with %r", query, retyped.component)
			try:
				method = self._resolve_first(names, describe_arguments([retyped]))
			except MethodNotFound:
				raise original from None
			value = retyped
		return method.invoke(target, (value,), access_policy=self._access_policy)

	def invoke_getter_method_on_target(self, property_name: str, target: object) -> Any:
		names = self.find_method_names(property_name, GETTER_PREFIXES)
		if not names:
			raise MethodNotFound(GETTER_PREFIXES[0] + property_name)
		return self.invoke_best_method_on_target(names, target)

	def _resolve_first(self, names: Iterable[str], arg_types: Tuple[TypeDesc, ...]) -> Method:
		if isinstance(names, str):
			raise TypeError("names must be a sequence of method names, not a str")
		names = list(names)
		if not names:
			raise MethodNotFound("", arg_types)
		for name in names[:-1]:
			try:
				return self._resolver.resolve(name, arg_types)
			except MethodNotFound:
				continue
		return self._resolver.resolve(names[-1], arg_types)

	def _to_type_desc(self, type_like: TypeLike) -> TypeDesc:
		if isinstance(type_like, str):
			module = sys.modules.get(self._target_type.__module__)
			return parse_type_name(type_like, namespace=vars(module) if module is not None else None)
		return as_type_desc(type_like)


def _compile(pattern: Union[str, re.Pattern[str]], case_sensitive: bool) -> re.Pattern[str]:
	if isinstance(pattern, re.Pattern):
		return pattern
	return re.compile(pattern) if case_sensitive else re.compile(pattern, re.IGNORECASE)


def _fold(name: str) -> str:
	return name.replace("_", "").lower()


def _strip_getter_prefix(name: str) -> str:
	for prefix in GETTER_PREFIXES:
		if name.startswith(prefix) and len(name) > len(prefix):
			rest = name[len(prefix):]
			return rest[1:] if rest.startswith("_") else rest
	return ""


def _retype_object_array(value: object) -> Optional[HostArray]:
	if not isinstance(value, list):
		return None
	component = describe_value(value).component
	if component is None or component.is_primitive:
		return None
	for item in value:
		if item is None:
			continue
		try:
			return HostArray(type(item), value)
		except TypeError:
			# Mixed element types: the store check refuses the copy.
			logger.debug("cannot retype array as %s[]", type(item).__qualname__)
			return None
	return None


__all__ = ["Reflection", "TypeLike", "GETTER_PREFIXES", "SETTER_PREFIX"]
