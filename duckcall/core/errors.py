# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-12
"""
Typed failures raised by the method table and the resolver.

Exceptions raised by an invoked method are never wrapped: they reach the
caller as they were raised.
"""

from __future__ import annotations

from typing import Sequence

from .types_core import TypeDesc, type_display_name


class ReflectionError(Exception):
	"""Base class for failures originating in duckcall itself."""


class MethodNotFound(ReflectionError, LookupError):
	"""Raised when no method of the requested name accepts the arguments."""

	def __init__(self, name: str, arg_types: Sequence[TypeDesc] = ()) -> None:
		self.name = name
		self.arg_types = tuple(arg_types)
		rendered = ", ".join(type_display_name(t) for t in self.arg_types)
		super().__init__(f"{name}({rendered})")


class AccessDenied(ReflectionError, PermissionError):
	"""Raised when the method table's access policy refuses an invocation."""

	def __init__(self, qualified_method: str) -> None:
		self.qualified_method = qualified_method
		super().__init__(f"access to {qualified_method} denied")


class TypeNameError(ReflectionError, ValueError):
	"""Raised for a malformed or unresolvable type-name string."""


__all__ = ["ReflectionError", "MethodNotFound", "AccessDenied", "TypeNameError"]
