# Copyright Red Hat
#
# htmlcmp/compare/__init__.py - HTML comparison package
#
# This file is part of the htmlcmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""
HTML comparison package.

Provides semantic comparison of HTML documents under configurable
equivalence rules: whitespace, attribute, text, comment and sibling order
differences may each be ignored. The main entry points are ``compare``,
``HtmlComparer`` and ``CompareOptions``.
"""
from .assertions import (
    HtmlAssertionsMixin,
    HtmlCompareAssertionError,
    assert_html_eq,
    assert_html_ne,
)
from .engine import HtmlComparer, compare
from .mismatch import MismatchReport, MismatchType
from .nodes import NodeKind, ParsedNode, parse_document, parse_fragment
from .options import CompareOptions
from . import presets

__all__ = [
    "CompareOptions",
    "HtmlAssertionsMixin",
    "HtmlCompareAssertionError",
    "HtmlComparer",
    "MismatchReport",
    "MismatchType",
    "NodeKind",
    "ParsedNode",
    "assert_html_eq",
    "assert_html_ne",
    "compare",
    "parse_document",
    "parse_fragment",
    "presets",
]
