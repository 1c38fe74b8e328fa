# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-12
"""
Host type model shared by the method table and the resolver.

A TypeDesc describes either a declared parameter type or the runtime type of
one argument. The universe is deliberately small:

  - PRIMITIVE: boolean/char/byte/short/int/long/float/double/void. These only
    ever appear as declared parameter (or return) types.
  - CLASS: a Python class. Every non-None runtime value describes as the
    CLASS of its exact type, which is the boxed form of a primitive.
  - ARRAY: a typed array with a component TypeDesc.
  - WILDCARD: stands for a None argument.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Iterable, Optional


class TypeKind(Enum):
	"""Kinds of types understood by the host type model."""

	PRIMITIVE = auto()
	CLASS = auto()
	ARRAY = auto()
	WILDCARD = auto()


@dataclass(frozen=True)
class TypeDesc:
	"""Resolved type of a parameter or argument; compared structurally."""

	kind: TypeKind
	name: str = ""
	py_type: Optional[type] = None  # only meaningful for TypeKind.CLASS
	component: Optional["TypeDesc"] = None  # only meaningful for TypeKind.ARRAY

	@property
	def is_primitive(self) -> bool:
		return self.kind is TypeKind.PRIMITIVE

	@property
	def is_array(self) -> bool:
		return self.kind is TypeKind.ARRAY

	@property
	def is_wildcard(self) -> bool:
		return self.kind is TypeKind.WILDCARD

	def __repr__(self) -> str:
		return f"TypeDesc({type_display_name(self)})"


def _primitive(name: str) -> TypeDesc:
	return TypeDesc(kind=TypeKind.PRIMITIVE, name=name)


BOOLEAN = _primitive("boolean")
CHAR = _primitive("char")
BYTE = _primitive("byte")
SHORT = _primitive("short")
INT = _primitive("int")
LONG = _primitive("long")
FLOAT = _primitive("float")
DOUBLE = _primitive("double")
VOID = _primitive("void")

PRIMITIVES: Dict[str, TypeDesc] = {
	t.name: t for t in (BOOLEAN, CHAR, BYTE, SHORT, INT, LONG, FLOAT, DOUBLE, VOID)
}

WILDCARD = TypeDesc(kind=TypeKind.WILDCARD, name="?")

# Runtime (boxed) classes and the primitive each one unboxes to.
BOXED_TO_PRIMITIVE: Dict[type, TypeDesc] = {
	bool: BOOLEAN,
	int: INT,
	float: DOUBLE,
	type(None): VOID,
}


def qualified_name(cls: type) -> str:
	"""Return `module.QualName` for a class (`builtins.str` for builtins)."""
	return f"{cls.__module__}.{cls.__qualname__}"


def class_of(cls: type) -> TypeDesc:
	"""Return the CLASS descriptor for a Python class."""
	if not isinstance(cls, type):
		raise TypeError(f"expected a class, got {cls!r}")
	return TypeDesc(kind=TypeKind.CLASS, name=qualified_name(cls), py_type=cls)


OBJECT = class_of(object)


def as_type_desc(obj: object) -> TypeDesc:
	"""
	Coerce a TypeDesc, a Python class or None into a TypeDesc.

	None maps to WILDCARD so callers can spell "unknown/null argument" the
	same way they would pass the argument itself.
	"""
	if isinstance(obj, TypeDesc):
		return obj
	if obj is None:
		return WILDCARD
	if isinstance(obj, type):
		return class_of(obj)
	raise TypeError(f"cannot interpret {obj!r} as a type")


def array_of(component: object) -> TypeDesc:
	"""Return the ARRAY descriptor whose elements are `component`."""
	comp = as_type_desc(component)
	if comp.is_wildcard:
		raise TypeError("array component cannot be the wildcard")
	return TypeDesc(kind=TypeKind.ARRAY, component=comp)


def to_primitive(desc: TypeDesc) -> TypeDesc:
	"""Unbox a CLASS descriptor of bool/int/float/NoneType; pass others through."""
	if desc.kind is TypeKind.CLASS and desc.py_type in BOXED_TO_PRIMITIVE:
		return BOXED_TO_PRIMITIVE[desc.py_type]  # type: ignore[index]
	return desc


def is_assignable(param: TypeDesc, arg: TypeDesc) -> bool:
	"""
	Whether a value described by `arg` may be passed for `param`.

	Primitives only accept themselves. Arrays are lists at runtime, so an
	array argument is accepted by any class parameter that accepts `list`.
	Array-to-array assignment here is identity; component-wise compatibility
	is the resolver's concern.
	"""
	if arg.is_wildcard:
		return not param.is_primitive
	if param.is_primitive or arg.is_primitive:
		return param == arg
	if param.kind is TypeKind.CLASS:
		source = arg.py_type if arg.kind is TypeKind.CLASS else list
		try:
			return issubclass(source, param.py_type)  # type: ignore[arg-type]
		except TypeError:
			# Protocols without runtime_checkable refuse issubclass.
			return False
	return param == arg


def type_display_name(desc: TypeDesc) -> str:
	"""Render a descriptor as `int`, `builtins.str`, `pkg.Widget[][]` or `?`."""
	dims = 0
	while desc.kind is TypeKind.ARRAY:
		dims += 1
		desc = desc.component  # type: ignore[assignment]
	if desc.kind is TypeKind.CLASS:
		base = desc.name or qualified_name(desc.py_type)  # type: ignore[arg-type]
	else:
		base = desc.name
	return base + "[]" * dims


class HostArray(list):
	"""
	A list that carries its declared component type.

	Elements are store-checked once, on construction; later list mutation is
	not policed. A plain `list` is the untyped (object) array.
	"""

	def __init__(self, component: object, items: Iterable[object] = ()) -> None:
		comp = as_type_desc(component)
		if comp.is_wildcard:
			raise TypeError("array component cannot be the wildcard")
		values = list(items)
		for value in values:
			_check_store(comp, value)
		super().__init__(values)
		self.component = comp

	def __repr__(self) -> str:
		return f"HostArray({type_display_name(self.component)}, {list.__repr__(self)})"


def describe_value(value: object) -> TypeDesc:
	"""Descriptor of one runtime value: WILDCARD for None, else its exact type."""
	if value is None:
		return WILDCARD
	if isinstance(value, HostArray):
		return array_of(value.component)
	if isinstance(value, list):
		return array_of(OBJECT)
	return class_of(type(value))


def _check_store(component: TypeDesc, value: object) -> None:
	if component.is_primitive:
		boxed = [cls for cls, prim in BOXED_TO_PRIMITIVE.items() if prim == component]
		if value is not None and boxed and isinstance(value, tuple(boxed)):
			return
	elif value is None or is_assignable(component, describe_value(value)):
		return
	raise TypeError(
		f"cannot store {type_display_name(describe_value(value))} in {type_display_name(component)}[]"
	)


__all__ = [
	"TypeKind",
	"TypeDesc",
	"BOOLEAN",
	"CHAR",
	"BYTE",
	"SHORT",
	"INT",
	"LONG",
	"FLOAT",
	"DOUBLE",
	"VOID",
	"PRIMITIVES",
	"WILDCARD",
	"OBJECT",
	"BOXED_TO_PRIMITIVE",
	"qualified_name",
	"class_of",
	"as_type_desc",
	"array_of",
	"to_primitive",
	"is_assignable",
	"type_display_name",
	"HostArray",
	"describe_value",
]
