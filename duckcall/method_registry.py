# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: Sławomir Liszniański; created: 2026-10-13
"""
Name-bucketed method registry used by the brute-force resolution phase.

The registry does not resolve anything; it only returns, for a name, every
method of the target type sharing that name, ordered override-first: a
subclass's method precedes a same-named method inherited from a base class.

The buckets are built in full, from the complete method table, the first
time any caller asks for candidates, and are read-only afterwards. The build
is pure: two callers racing on it compute equal mappings, so no lock is
taken and the last assignment wins.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from duckcall.core.types_core import qualified_name
from duckcall.method_table import Method, MethodTable

logger = logging.getLogger(__name__)


class MethodRegistry:
	"""Lazily built `name -> (Method, ...)` buckets for one target type."""

	def __init__(self, table: MethodTable) -> None:
		self._table = table
		self._buckets: Optional[Mapping[str, Tuple[Method, ...]]] = None

	@property
	def is_built(self) -> bool:
		return self._buckets is not None

	def buckets(self) -> Mapping[str, Tuple[Method, ...]]:
		"""Return the full mapping, building it on first use."""
		buckets = self._buckets
		if buckets is None:
			buckets = _build_buckets(self._table)
			self._buckets = buckets
		return buckets

	def get_candidates(self, name: str) -> Tuple[Method, ...]:
		"""Methods named `name`, override-first; empty when there are none."""
		return self.buckets().get(name, ())


def _build_buckets(table: MethodTable) -> Mapping[str, Tuple[Method, ...]]:
	grouped: Dict[str, List[Method]] = {}
	# The table is already in MRO order, most derived class first.
	for method in table.methods:
		grouped.setdefault(method.name, []).append(method)
	logger.debug(
		"built method registry for %s: %d names",
		qualified_name(table.target_type),
		len(grouped),
	)
	return MappingProxyType({name: tuple(methods) for name, methods in grouped.items()})


__all__ = ["MethodRegistry"]
