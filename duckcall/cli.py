# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-15
"""
Command-line inspection of a class through the reflection engine.

	python -m duckcall pkg.module:Widget
	python -m duckcall pkg.module:Widget --find 'set_.*' --ignore-case
	python -m duckcall pkg.module:Widget --getters --json
	python -m duckcall pkg.module:Widget --resolve set_value int
"""

from __future__ import annotations

import argparse
import importlib
import json
import logging
import sys
from typing import Any, Dict, List

from duckcall.core.errors import ReflectionError
from duckcall.method_table import Method
from duckcall.reflection import Reflection

logger = logging.getLogger(__name__)


def load_target(spec: str) -> type:
	"""Import `module:Qual.Name` and return the class it names."""
	module_name, sep, qualname = spec.partition(":")
	if not sep or not module_name or not qualname:
		raise ValueError(f"expected module:Class, got {spec!r}")
	obj: Any = importlib.import_module(module_name)
	for attr in qualname.split("."):
		obj = getattr(obj, attr)
	if not isinstance(obj, type):
		raise ValueError(f"{spec!r} is not a class")
	return obj


def _method_json(method: Method) -> Dict[str, Any]:
	return {
		"owner": method.qualified_name.rsplit(".", 1)[0],
		"name": method.name,
		"kind": method.kind.name.lower(),
		"signature": method.signature_text(),
	}


def main(argv: list[str] | None = None) -> int:
	"""
	Print methods of a class, its getter properties, or the method a name and
	argument types resolve to. Exit code 1 means resolution failed, 2 means
	the target could not be loaded.
	"""
	parser = argparse.ArgumentParser(prog="duckcall", description="Inspect a class with runtime method resolution")
	parser.add_argument("target", help="Class to inspect, as module:Class")
	parser.add_argument("--find", metavar="PATTERN", help="Only list methods whose name fully matches PATTERN")
	parser.add_argument("--ignore-case", action="store_true", help="Match --find case-insensitively")
	parser.add_argument("--getters", action="store_true", help="List getter property names instead of methods")
	parser.add_argument(
		"--resolve",
		nargs="+",
		metavar="NAME_OR_TYPE",
		help="Resolve NAME against argument TYPEs (e.g. int, builtins.str, Widget[], ?)",
	)
	parser.add_argument("--json", action="store_true", help="Emit JSON instead of text")
	parser.add_argument("-v", "--verbose", action="store_true", help="Log resolution details to stderr")
	args = parser.parse_args(argv)

	logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, stream=sys.stderr)

	try:
		target = load_target(args.target)
	except (ImportError, AttributeError, ValueError) as exc:
		print(f"error: cannot load {args.target}: {exc}", file=sys.stderr)
		return 2

	reflection = Reflection(target)
	payload: Dict[str, Any] = {"target": args.target}
	lines: List[str] = []

	if args.resolve:
		name, *type_names = args.resolve
		try:
			method = reflection.find_best_method_with_signature(name, *type_names)
		except ReflectionError as exc:
			logger.debug("resolution failed: %s", exc)
			if args.json:
				print(json.dumps({**payload, "error": str(exc), "exit_code": 1}, indent=2))
			else:
				print(f"error: {exc.__class__.__name__}: {exc}", file=sys.stderr)
			return 1
		payload["resolved"] = _method_json(method)
		lines.append(f"{method.qualified_name}: {method.signature_text()}")
	elif args.getters:
		names = list(reflection.find_getter_property_names())
		payload["getters"] = names
		lines.extend(names)
	else:
		if args.find:
			methods = reflection.find_methods(args.find, case_sensitive=not args.ignore_case)
		else:
			methods = reflection.find_methods(".*")
		payload["methods"] = [_method_json(m) for m in methods]
		lines.extend(f"{m.qualified_name}: {m.signature_text()}" for m in methods)

	if args.json:
		print(json.dumps({**payload, "exit_code": 0}, indent=2))
	else:
		for line in lines:
			print(line)
	return 0


__all__ = ["main", "load_target"]
