# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-13
"""
Reflected method tables for Python classes.

This is the host-runtime side of method resolution: it enumerates the public
methods of a class (across its MRO) together with their declared parameter
types, answers exact-signature lookups, and invokes a method on a target.
It does not resolve anything by assignability; that is the resolver's job.

Declared types come from annotations. A TypeDesc annotation (e.g. `INT`,
`array_of(Widget)`) is taken as is, a class becomes its CLASS descriptor,
`Any` or no annotation means `object`, a parameterized generic means its
origin class, and a `None` return means `void`.

Python classes cannot declare two methods with the same name, so typed
variants are declared with `overloaded`:

	class Widget:
		@overloaded
		def set_value(self, value: INT) -> None: ...

		@set_value.overload
		def set_value(self, value: str) -> None: ...

Tables are built once per class and cached on the class. Two threads racing on the first
build compute equal tables from the same class; the later one simply wins.
"""

from __future__ import annotations

import inspect
import logging
import typing
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Optional, Sequence, Set, Tuple

from duckcall.core.errors import AccessDenied, TypeNameError
from duckcall.core.types_core import (
	OBJECT,
	VOID,
	TypeDesc,
	class_of,
	qualified_name,
	type_display_name,
)

logger = logging.getLogger(__name__)


class MethodKind(Enum):
	INSTANCE = auto()
	STATIC = auto()
	CLASS = auto()


@dataclass(frozen=True)
class Method:
	"""One reflected method: owner, name and declared signature."""

	owner: type
	name: str
	param_types: Tuple[TypeDesc, ...]
	return_type: TypeDesc
	kind: MethodKind = MethodKind.INSTANCE
	func: Callable[..., Any] = field(default=None, compare=False, repr=False)  # type: ignore[assignment]

	@property
	def arity(self) -> int:
		return len(self.param_types)

	@property
	def qualified_name(self) -> str:
		return f"{qualified_name(self.owner)}.{self.name}"

	def signature_text(self) -> str:
		params = ", ".join(type_display_name(t) for t in self.param_types)
		return f"{self.name}({params}) -> {type_display_name(self.return_type)}"

	def invoke(
		self,
		target: object,
		args: Sequence[object] = (),
		*,
		access_policy: Optional[AccessPolicy] = None,
	) -> Any:
		"""
		Call the method on `target` with `args`.

		Whatever the method raises is propagated unchanged. `target` is ignored
		for static methods; for class methods it may be the class itself.
		"""
		if access_policy is not None and not access_policy(self):
			raise AccessDenied(self.qualified_name)
		if self.kind is MethodKind.STATIC:
			return self.func(*args)
		if self.kind is MethodKind.CLASS:
			cls = target if isinstance(target, type) else type(target)
			return self.func(cls, *args)
		if not isinstance(target, self.owner):
			raise TypeError(f"{self.qualified_name} called on {type(target).__qualname__} target")
		return self.func(target, *args)


AccessPolicy = Callable[[Method], bool]


class overloaded:
	"""
	Descriptor holding several typed variants of one instance method.

	Reflection sees one Method per variant. Called normally through an
	instance, the variants are dispatched by the same resolution the
	engine applies, using a per-class engine built on first call.
	"""

	def __init__(self, func: Callable[..., Any]) -> None:
		self.variants: List[Callable[..., Any]] = [func]
		self.__name__ = func.__name__
		self.__doc__ = func.__doc__

	def overload(self, func: Callable[..., Any]) -> "overloaded":
		"""Add another variant and return the descriptor (property-setter style)."""
		self.variants.append(func)
		return self

	def __set_name__(self, owner: type, name: str) -> None:
		self.__name__ = name

	def __get__(self, obj: object, objtype: Optional[type] = None) -> Any:
		if obj is None:
			return self

		def bound(*args: object) -> Any:
			return self._engine_for(type(obj)).invoke_best_method_on_target([self.__name__], obj, *args)

		bound.__name__ = self.__name__
		return bound

	def _engine_for(self, cls: type) -> Any:
		slot = class_cache(cls)
		engine = slot.get("engine")
		if engine is None:
			from duckcall.reflection import Reflection  # cycle: reflection imports this module

			engine = Reflection(cls)
			slot["engine"] = engine
		return engine


# Classes that refuse new attributes (builtins, extension types); never collected.
_FIXED_CLASS_CACHES: Dict[type, Dict[str, Any]] = {}
_CACHE_ATTR = "__duckcall_cache__"


def class_cache(cls: type) -> Dict[str, Any]:
	"""
	Per-class cache for tables and engines.

	The dict is stored on the class itself, so a cached table referring back
	to its class forms a cycle the collector can reclaim together with a
	dynamically created class. Lookups go through `__dict__` so a subclass
	never sees its base's cache.
	"""
	slot = cls.__dict__.get(_CACHE_ATTR)
	if slot is not None:
		return slot
	slot = _FIXED_CLASS_CACHES.get(cls)
	if slot is not None:
		return slot
	slot = {}
	try:
		setattr(cls, _CACHE_ATTR, slot)
	except (TypeError, AttributeError):
		slot = _FIXED_CLASS_CACHES.setdefault(cls, slot)
	return slot


def _get_class(self: object) -> type:
	return type(self)


# Universal class-identity accessor every table exposes.
GET_CLASS = Method(
	owner=object,
	name="get_class",
	param_types=(),
	return_type=class_of(type),
	kind=MethodKind.INSTANCE,
	func=_get_class,
)


class MethodTable:
	"""Read-only list of a class's public methods, most derived first."""

	def __init__(self, target_type: type) -> None:
		if not isinstance(target_type, type):
			raise TypeError(f"expected a class, got {target_type!r}")
		self.target_type = target_type
		self.methods: Tuple[Method, ...] = tuple(_reflect(target_type))
		self._by_signature: Dict[Tuple[str, Tuple[TypeDesc, ...]], Method] = {
			(m.name, m.param_types): m for m in self.methods
		}
		logger.debug("reflected %d methods on %s", len(self.methods), qualified_name(target_type))

	@classmethod
	def of(cls, target_type: type) -> "MethodTable":
		"""Return the cached table for `target_type`, building it on first use."""
		slot = class_cache(target_type)
		table = slot.get("table")
		if table is None:
			table = cls(target_type)
			slot["table"] = table
		return table

	def get_method(self, name: str, param_types: Sequence[TypeDesc]) -> Optional[Method]:
		"""Exact lookup by name and parameter types; None when absent."""
		return self._by_signature.get((name, tuple(param_types)))

	def names(self) -> Tuple[str, ...]:
		"""Distinct method names in declaration order."""
		return tuple(dict.fromkeys(m.name for m in self.methods))


def _reflect(target_type: type) -> List[Method]:
	methods: List[Method] = []
	seen: Set[Tuple[str, Tuple[TypeDesc, ...]]] = set()
	for klass in target_type.__mro__:
		if klass is object:
			continue
		for name, attr in vars(klass).items():
			if name.startswith("_"):
				continue
			for method in _methods_from_attr(klass, name, attr):
				key = (method.name, method.param_types)
				# A base-class method with the same signature is overridden.
				if key in seen:
					continue
				seen.add(key)
				methods.append(method)
	if (GET_CLASS.name, GET_CLASS.param_types) not in seen:
		methods.append(GET_CLASS)
	return methods


def _methods_from_attr(klass: type, name: str, attr: object) -> List[Method]:
	if isinstance(attr, overloaded):
		candidates = [(fn, MethodKind.INSTANCE) for fn in attr.variants]
	elif isinstance(attr, staticmethod):
		candidates = [(attr.__func__, MethodKind.STATIC)]
	elif isinstance(attr, classmethod):
		candidates = [(attr.__func__, MethodKind.CLASS)]
	elif inspect.isfunction(attr):
		candidates = [(attr, MethodKind.INSTANCE)]
	else:
		return []
	result: List[Method] = []
	for func, kind in candidates:
		method = _build_method(klass, name, func, kind)
		if method is not None:
			result.append(method)
	return result


def _build_method(klass: type, name: str, func: Callable[..., Any], kind: MethodKind) -> Optional[Method]:
	params = list(inspect.signature(func).parameters.values())
	if kind is not MethodKind.STATIC:
		params = params[1:]
	positional = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
	if any(p.kind not in positional for p in params):
		logger.debug("skipping %s.%s: only positional parameters are reflected", klass.__qualname__, name)
		return None
	try:
		hints = typing.get_type_hints(func)
	except (NameError, TypeError) as exc:
		raise TypeNameError(f"cannot resolve annotations of {qualified_name(klass)}.{name}: {exc}") from exc
	param_types = tuple(_annotation_to_desc(hints.get(p.name, inspect.Parameter.empty)) for p in params)
	return_type = _annotation_to_desc(hints.get("return", inspect.Parameter.empty), is_return=True)
	return Method(
		owner=klass,
		name=name,
		param_types=param_types,
		return_type=return_type,
		kind=kind,
		func=func,
	)


def _annotation_to_desc(annotation: object, *, is_return: bool = False) -> TypeDesc:
	if isinstance(annotation, TypeDesc):
		return annotation
	if annotation is inspect.Parameter.empty or annotation is typing.Any:
		return OBJECT
	if is_return and annotation in (None, type(None)):
		return VOID
	origin = typing.get_origin(annotation)
	if isinstance(origin, type):
		return class_of(origin)
	if isinstance(annotation, type):
		return class_of(annotation)
	return OBJECT


__all__ = [
	"MethodKind",
	"Method",
	"AccessPolicy",
	"overloaded",
	"GET_CLASS",
	"MethodTable",
	"class_cache",
]
