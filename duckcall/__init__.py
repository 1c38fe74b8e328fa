# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-12
"""
duckcall: runtime method resolution for Python classes.

Layers, leaves first:
  core:            TypeDesc host type model, type-name parser, failures
  method_table:    reflected methods of a class, overloads, invocation
  method_registry: lazily built name buckets for the brute-force phase
  method_resolver: exact / primitive-normalized / assignability resolution
  reflection:      the engine facade (lookup, getters/setters, invocation)

The CLI entrypoint is `duckcall.cli:main`.
"""

from duckcall.core.errors import AccessDenied, MethodNotFound, ReflectionError, TypeNameError
from duckcall.core.types_core import (
	BOOLEAN,
	BYTE,
	CHAR,
	DOUBLE,
	FLOAT,
	INT,
	LONG,
	SHORT,
	VOID,
	WILDCARD,
	HostArray,
	TypeDesc,
	array_of,
	type_display_name,
)
from duckcall.method_table import Method, MethodTable, overloaded
from duckcall.reflection import Reflection

__all__ = [
	"Reflection",
	"Method",
	"MethodTable",
	"overloaded",
	"TypeDesc",
	"HostArray",
	"array_of",
	"type_display_name",
	"BOOLEAN",
	"CHAR",
	"BYTE",
	"SHORT",
	"INT",
	"LONG",
	"FLOAT",
	"DOUBLE",
	"VOID",
	"WILDCARD",
	"ReflectionError",
	"MethodNotFound",
	"AccessDenied",
	"TypeNameError",
]
