# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from collections.abc import Sequence

import pytest

from duckcall.core.errors import TypeNameError
from duckcall.core.type_names import parse_type_name
from duckcall.core.types_core import INT, LONG, WILDCARD, array_of, class_of, type_display_name


class Widget:
	pass


def test_primitive_keywords_win_over_builtins() -> None:
	assert parse_type_name("int") == INT
	assert parse_type_name("long") == LONG
	assert parse_type_name("builtins.int") == class_of(int)


def test_bare_names_fall_back_to_builtins() -> None:
	assert parse_type_name("str") == class_of(str)


def test_namespace_lookup_and_array_suffixes() -> None:
	ns = {"Widget": Widget}
	assert parse_type_name("Widget", namespace=ns) == class_of(Widget)
	assert parse_type_name("Widget[][]", namespace=ns) == array_of(array_of(Widget))
	assert parse_type_name("int [ ]") == array_of(INT)


def test_dotted_names_import_modules() -> None:
	assert parse_type_name("collections.abc.Sequence") == class_of(Sequence)


def test_wildcard() -> None:
	assert parse_type_name("?") is WILDCARD


def test_display_name_parses_back() -> None:
	desc = array_of(class_of(Widget))
	assert parse_type_name(type_display_name(desc)) == desc


@pytest.mark.parametrize(
	"text",
	[
		"Widget[",
		"",
		"a..b",
		"?[]",
		"NoSuchThingAnywhere",
		"no_such_pkg_for_duckcall.Thing",
		"os.path.join",
	],
)
def test_bad_type_names(text: str) -> None:
	with pytest.raises(TypeNameError):
		parse_type_name(text)
