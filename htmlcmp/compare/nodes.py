# Copyright Red Hat
#
# htmlcmp/compare/nodes.py - HTML comparison document trees
#
# This file is part of the htmlcmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Parsed HTML document trees.

HTML text is parsed with html5lib, which applies the WHATWG error recovery
rules (implied ``<html>``, ``<head>`` and ``<body>`` elements, auto-closing
of unclosed tags, recovery of stray end tags), and the resulting DOM is
converted into a tree of immutable ``ParsedNode`` objects.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union
from xml.dom import Node
from enum import Enum
import logging

import html5lib
from html5lib.html5parser import ParseError

from htmlcmp import (
    HTMLCMP_SUBSYSTEM_PARSER,
    HtmlCmpArgumentError,
    HtmlCmpParseError,
)

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error


def _log_debug_parser(msg, *args, **kwargs):
    """A wrapper for parser subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": HTMLCMP_SUBSYSTEM_PARSER}, **kwargs)


class NodeKind(Enum):
    """
    Enum for the kinds of node found in a parsed document tree.
    """

    ELEMENT = "Element"
    TEXT = "Text"
    COMMENT = "Comment"
    DOCUMENT = "Document"
    DOCTYPE = "Doctype"
    PROCESSING_INSTRUCTION = "ProcessingInstruction"
    FRAGMENT = "Fragment"


_DOM_NODE_KINDS = {
    Node.ELEMENT_NODE: NodeKind.ELEMENT,
    Node.TEXT_NODE: NodeKind.TEXT,
    Node.CDATA_SECTION_NODE: NodeKind.TEXT,
    Node.COMMENT_NODE: NodeKind.COMMENT,
    Node.DOCUMENT_NODE: NodeKind.DOCUMENT,
    Node.DOCUMENT_TYPE_NODE: NodeKind.DOCTYPE,
    Node.PROCESSING_INSTRUCTION_NODE: NodeKind.PROCESSING_INSTRUCTION,
    Node.DOCUMENT_FRAGMENT_NODE: NodeKind.FRAGMENT,
}


@dataclass(frozen=True)
class ParsedNode:
    """
    A node in a parsed HTML document tree.
    """

    #: The kind of this node
    kind: NodeKind
    #: Tag name for elements, doctype name for doctypes
    name: str = ""
    #: Ordered (name, value) attribute pairs for elements
    attributes: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)
    #: Text or comment content
    data: str = ""
    #: Ordered child nodes
    children: Tuple["ParsedNode", ...] = field(default_factory=tuple)

    def __str__(self) -> str:
        """
        Return a short human readable description of this node.

        :returns: A description such as ``Element(<p class="x">)``.
        :rtype: ``str``
        """
        if self.kind == NodeKind.ELEMENT:
            attrs = "".join(f' {name}="{value}"' for name, value in self.attributes)
            return f"Element(<{self.name}{attrs}>)"
        if self.kind in (NodeKind.TEXT, NodeKind.COMMENT):
            return f"{self.kind.value}({self.data!r})"
        if self.kind == NodeKind.DOCTYPE:
            return f"Doctype({self.name})"
        if self.kind == NodeKind.PROCESSING_INSTRUCTION:
            return f"ProcessingInstruction({self.name} {self.data})"
        return self.kind.value

    @property
    def is_element(self) -> bool:
        """``True`` if this node is an element."""
        return self.kind == NodeKind.ELEMENT

    @property
    def is_text(self) -> bool:
        """``True`` if this node is a text node."""
        return self.kind == NodeKind.TEXT

    @property
    def is_comment(self) -> bool:
        """``True`` if this node is a comment."""
        return self.kind == NodeKind.COMMENT

    def root_element(self) -> Optional["ParsedNode"]:
        """
        Return the first element child of this node: for a parsed document
        this is the ``<html>`` element.

        :returns: The root element or ``None`` if there are no element
                  children.
        :rtype: ``Optional[ParsedNode]``
        """
        for child in self.children:
            if child.is_element:
                return child
        return None


def _dom_node_kind(dom_node) -> NodeKind:
    """
    Map a DOM node type onto a ``NodeKind``.
    """
    kind = _DOM_NODE_KINDS.get(dom_node.nodeType)
    if kind is None:
        raise HtmlCmpParseError(f"Unsupported DOM node type: {dom_node.nodeType}")
    return kind


def _convert_leaf(dom_node, kind: NodeKind) -> Optional[ParsedNode]:
    """
    Convert a DOM node that cannot have children, or return ``None`` for
    container nodes.
    """
    if kind in (NodeKind.TEXT, NodeKind.COMMENT):
        return ParsedNode(kind, data=dom_node.data)
    if kind == NodeKind.DOCTYPE:
        return ParsedNode(kind, name=dom_node.name or "")
    if kind == NodeKind.PROCESSING_INSTRUCTION:
        return ParsedNode(kind, name=dom_node.target, data=dom_node.data)
    return None


def _convert_container(dom_node, kind: NodeKind, children) -> ParsedNode:
    """
    Build the ``ParsedNode`` for an element, document or fragment whose
    children have already been converted.
    """
    if kind == NodeKind.ELEMENT:
        return ParsedNode(
            kind,
            name=dom_node.tagName,
            attributes=tuple(dom_node.attributes.items()),
            children=tuple(children),
        )
    return ParsedNode(kind, children=tuple(children))


def _convert_dom_node(dom_node) -> ParsedNode:
    """
    Convert an html5lib DOM node and its descendants into ``ParsedNode``
    objects.

    The tree is walked depth first with an explicit stack of partially
    converted containers, so arbitrarily deep documents can be converted.

    :param dom_node: A ``xml.dom.minidom`` node produced by html5lib.
    :returns: The converted node.
    :rtype: ``ParsedNode``
    """
    kind = _dom_node_kind(dom_node)
    leaf = _convert_leaf(dom_node, kind)
    if leaf is not None:
        return leaf

    # Each entry: (DOM node, its kind, iterator over DOM children,
    # converted children so far).
    stack = [(dom_node, kind, iter(dom_node.childNodes), [])]
    while True:
        node, node_kind, pending, converted = stack[-1]
        child = next(pending, None)
        if child is not None:
            child_kind = _dom_node_kind(child)
            leaf = _convert_leaf(child, child_kind)
            if leaf is not None:
                converted.append(leaf)
            else:
                stack.append((child, child_kind, iter(child.childNodes), []))
            continue

        stack.pop()
        parsed = _convert_container(node, node_kind, converted)
        if not stack:
            return parsed
        stack[-1][3].append(parsed)


def _check_input(html: Union[str, bytes]):
    """
    Reject document inputs that html5lib cannot consume.

    :param html: The candidate document text.
    """
    if not isinstance(html, (str, bytes)):
        raise HtmlCmpArgumentError(
            f"HTML input must be str or bytes, not {type(html).__name__}"
        )


def _make_parser() -> html5lib.HTMLParser:
    """
    Return a new html5lib parser building ``xml.dom.minidom`` trees.

    :returns: A non-strict html5lib parser.
    :rtype: ``html5lib.HTMLParser``
    """
    return html5lib.HTMLParser(tree=html5lib.treebuilders.getTreeBuilder("dom"))


def parse_document(html: Union[str, bytes]) -> ParsedNode:
    """
    Parse a complete HTML document.

    :param html: The document text.
    :type html: ``Union[str, bytes]``
    :returns: A ``NodeKind.DOCUMENT`` node.
    :rtype: ``ParsedNode``
    """
    _check_input(html)
    _log_debug_parser("Parsing document (%d characters)", len(html))
    try:
        dom = _make_parser().parse(html)
    except (ParseError, ValueError) as err:
        _log_error("Failed to parse HTML document: %s", err)
        raise HtmlCmpParseError(f"Failed to parse HTML document: {err}") from err

    document = _convert_dom_node(dom)
    _log_debug_parser(
        "Parsed document with %d top-level node(s)", len(document.children)
    )
    return document


def parse_fragment(html: Union[str, bytes], container: str = "div") -> ParsedNode:
    """
    Parse an HTML fragment in the context of a ``container`` element.

    :param html: The fragment text.
    :type html: ``Union[str, bytes]``
    :param container: The name of the context element.
    :type container: ``str``
    :returns: A ``NodeKind.FRAGMENT`` node.
    :rtype: ``ParsedNode``
    """
    _check_input(html)
    _log_debug_parser(
        "Parsing fragment (%d characters) in <%s>", len(html), container
    )
    try:
        dom = _make_parser().parseFragment(html, container=container)
    except (ParseError, ValueError) as err:
        _log_error("Failed to parse HTML fragment: %s", err)
        raise HtmlCmpParseError(f"Failed to parse HTML fragment: {err}") from err

    return _convert_dom_node(dom)


__all__ = [
    "NodeKind",
    "ParsedNode",
    "parse_document",
    "parse_fragment",
]
