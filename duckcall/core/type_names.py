# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-13
"""
Parse type-name strings back into TypeDescs.

This is the inverse of `type_display_name`: `"int"` is the primitive,
`"builtins.int"` the Python class, `"Widget[]"` an array of whatever `Widget`
names in the caller-supplied namespace, and `"?"` the wildcard.

Bare names resolve in order: primitive keywords, the namespace, builtins.
Dotted names try the namespace for their first segment, then import the
longest importable module prefix and walk the remaining attributes.
"""

from __future__ import annotations

import builtins
import importlib
from pathlib import Path
from typing import List, Mapping, Optional

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from .errors import TypeNameError
from .types_core import PRIMITIVES, WILDCARD, TypeDesc, array_of, as_type_desc

_GRAMMAR_PATH = Path(__file__).with_name("type_names.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="type_ref",
)


def parse_type_name(text: str, *, namespace: Optional[Mapping[str, object]] = None) -> TypeDesc:
	"""Parse `text` into a TypeDesc, raising TypeNameError when it cannot."""
	try:
		tree = _PARSER.parse(text)
	except UnexpectedInput as exc:
		raise TypeNameError(f"malformed type name {text!r} at column {exc.column}") from exc
	base_node, *suffixes = tree.children
	desc = _build_base(base_node, text, namespace or {})
	for _ in suffixes:
		if desc.is_wildcard:
			raise TypeNameError(f"wildcard cannot be an array component in {text!r}")
		desc = array_of(desc)
	return desc


def _build_base(node: Tree, text: str, namespace: Mapping[str, object]) -> TypeDesc:
	if node.data == "wildcard":
		return WILDCARD
	parts = [str(tok) for tok in node.children if isinstance(tok, Token)]
	if len(parts) == 1 and parts[0] in PRIMITIVES:
		return PRIMITIVES[parts[0]]
	obj = _resolve_dotted(parts, namespace)
	if obj is None:
		raise TypeNameError(f"unknown type {'.'.join(parts)!r} in {text!r}")
	try:
		return as_type_desc(obj)
	except TypeError as exc:
		raise TypeNameError(f"{'.'.join(parts)!r} does not name a class") from exc


def _resolve_dotted(parts: List[str], namespace: Mapping[str, object]) -> object:
	head, rest = parts[0], parts[1:]
	if head in namespace:
		return _walk(namespace[head], rest)
	if not rest:
		return getattr(builtins, head, None)
	# Longest importable module prefix wins: `a.b.C` imports `a.b` before `a`.
	for split in range(len(parts) - 1, 0, -1):
		module_name = ".".join(parts[:split])
		try:
			module = importlib.import_module(module_name)
		except ImportError:
			continue
		return _walk(module, parts[split:])
	return None


def _walk(obj: object, attrs: List[str]) -> object:
	for attr in attrs:
		obj = getattr(obj, attr, None)
		if obj is None:
			return None
	return obj


__all__ = ["parse_type_name"]
