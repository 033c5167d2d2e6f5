# Copyright Red Hat
#
# htmlcmp/compare/presets.py - HTML comparison option presets
#
# This file is part of the htmlcmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Convenience presets for common comparison configurations.
"""
from typing import Callable, Dict

from htmlcmp import HtmlCmpArgumentError

from .options import CompareOptions


def relaxed() -> CompareOptions:
    """
    Options that ignore all formatting differences: whitespace, attributes,
    comments and sibling order.
    """
    return CompareOptions(
        ignore_whitespace=True,
        ignore_attributes=True,
        ignore_text=False,
        ignore_comments=True,
        ignore_sibling_order=True,
    )


def strict() -> CompareOptions:
    """
    Options that are strict about everything except whitespace.
    """
    return CompareOptions(
        ignore_whitespace=True,
        ignore_attributes=False,
        ignore_text=False,
        ignore_comments=False,
        ignore_sibling_order=False,
    )


def markdown() -> CompareOptions:
    """
    Options suitable for testing rendered markdown: generated heading ``id``
    attributes are ignored.
    """
    return CompareOptions(
        ignore_whitespace=True,
        ignore_attributes=False,
        ignored_attributes=frozenset({"id"}),
        ignore_text=False,
        ignore_comments=True,
        ignore_sibling_order=False,
    )


#: Map of preset names to preset factories
PRESETS: Dict[str, Callable[[], CompareOptions]] = {
    "relaxed": relaxed,
    "strict": strict,
    "markdown": markdown,
}


def get_preset(name: str) -> CompareOptions:
    """
    Return the preset options named ``name``.

    :param name: The preset name.
    :type name: ``str``
    :returns: The preset options.
    :rtype: ``CompareOptions``
    """
    if name not in PRESETS:
        raise HtmlCmpArgumentError(
            f"Unknown comparison preset: {name} "
            f"(expected one of {', '.join(sorted(PRESETS))})"
        )
    return PRESETS[name]()


__all__ = [
    "PRESETS",
    "get_preset",
    "markdown",
    "relaxed",
    "strict",
]
