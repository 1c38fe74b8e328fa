# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-14
"""
Runtime method resolution atop MethodTable/MethodRegistry.

Phases, first success wins:
- Exact: a method whose declared parameter types equal the argument
  descriptors as given (boxed form).
- Primitive-normalized exact: same lookup with bool/int/float/NoneType
  unboxed to their primitives.
- Brute force: scan the registry bucket for the name, override-first,
  trying each candidate with the original descriptors and then the
  normalized ones before moving to the next candidate.
  A candidate matches when arity agrees and every parameter accepts its
  argument (wildcard vs non-primitive, assignable, or arrays with an
  assignable component).

The brute-force scan returns the first match in registry order. It does not
rank candidates by specificity.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence, Tuple

from duckcall.core.errors import MethodNotFound
from duckcall.core.types_core import TypeDesc, describe_value, is_assignable, to_primitive
from duckcall.method_registry import MethodRegistry
from duckcall.method_table import Method, MethodTable

logger = logging.getLogger(__name__)


def describe_arguments(args: Iterable[object]) -> Tuple[TypeDesc, ...]:
	"""Descriptor per argument: WILDCARD for None, else the exact runtime type."""
	return tuple(describe_value(arg) for arg in args)


def normalize_to_primitives(arg_types: Iterable[TypeDesc]) -> Tuple[TypeDesc, ...]:
	"""Unbox boxed descriptors; all others pass through. Input is left untouched."""
	return tuple(to_primitive(t) for t in arg_types)


def _accepts(param: TypeDesc, arg: TypeDesc) -> bool:
	if arg.is_wildcard:
		return not param.is_primitive
	if is_assignable(param, arg):
		return True
	# Both arrays: compare components.
	if param.is_array and arg.is_array:
		return is_assignable(param.component, arg.component)  # type: ignore[arg-type]
	return False


def _matches(method: Method, arg_types: Sequence[TypeDesc]) -> bool:
	params = method.param_types
	if len(params) != len(arg_types):
		return False
	return all(_accepts(p, a) for p, a in zip(params, arg_types))


class MethodResolver:
	"""Resolve a (name, argument descriptors) pair to one Method of a type."""

	def __init__(self, table: MethodTable, registry: MethodRegistry | None = None) -> None:
		self.table = table
		self.registry = registry if registry is not None else MethodRegistry(table)

	def resolve(self, name: str, arg_types: Sequence[TypeDesc]) -> Method:
		arg_types = tuple(arg_types)
		method = self.table.get_method(name, arg_types)
		if method is not None:
			logger.debug("resolved %s by exact match", method.qualified_name)
			return method

		primitive_types = normalize_to_primitives(arg_types)
		method = self.table.get_method(name, primitive_types)
		if method is not None:
			logger.debug("resolved %s by primitive-normalized match", method.qualified_name)
			return method

		candidates = self.registry.get_candidates(name)
		if not candidates:
			raise MethodNotFound(name, arg_types)
		# Override first: each candidate is tried with both views before the next one.
		for candidate in candidates:
			if _matches(candidate, arg_types) or _matches(candidate, primitive_types):
				logger.debug("resolved %s by assignability scan", candidate.qualified_name)
				return candidate
		raise MethodNotFound(name, arg_types)


__all__ = [
	"describe_arguments",
	"normalize_to_primitives",
	"MethodResolver",
]
