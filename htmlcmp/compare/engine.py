# Copyright Red Hat
#
# htmlcmp/compare/engine.py - HTML comparison engine
#
# This file is part of the htmlcmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""
HTML comparison engine
"""
from typing import Generator, List, Optional, Sequence, Tuple, Union
import logging

from htmlcmp import HTMLCMP_SUBSYSTEM_ENGINE, HtmlCmpArgumentError

from .mismatch import AttributeSet, MismatchReport, MismatchType
from .nodes import NodeKind, ParsedNode, parse_document
from .options import CompareOptions

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error

ENGINE_LOG_ME_HARDER = False

#: A comparison generator: yields element pairs to compare, is sent the
#: report for each pair and returns the report for the whole comparison.
_CompareSteps = Generator[
    Tuple[ParsedNode, ParsedNode], Optional[MismatchReport], Optional[MismatchReport]
]


def _log_debug_engine(msg, *args, **kwargs):
    """A wrapper for engine subsystem debug logs."""
    _log.debug(msg, *args, extra={"subsystem": HTMLCMP_SUBSYSTEM_ENGINE}, **kwargs)


def _log_debug_engine_extra(msg, *args, **kwargs):
    """A wrapper for engine subsystem debug logs."""
    if ENGINE_LOG_ME_HARDER:  # pragma: no cover
        _log.debug(msg, *args, extra={"subsystem": HTMLCMP_SUBSYSTEM_ENGINE}, **kwargs)


class HtmlComparer:
    """
    Core class for comparing HTML document trees.

    An ``HtmlComparer`` holds nothing but its options: a single instance
    may be used for any number of comparisons, including from several
    threads at once.
    """

    def __init__(self, options: Optional[CompareOptions] = None):
        """
        Initialise a new ``HtmlComparer`` instance.

        Whitespace handling: with ``ignore_whitespace`` set, text is trimmed
        and whitespace-only text nodes are dropped. Runs of whitespace inside
        text are never collapsed, and elements such as ``<pre>`` receive no
        special treatment.

        :param options: The comparison options to use, or ``None`` for the
                        default options.
        :type options: ``Optional[CompareOptions]``
        """
        if options is not None and not isinstance(options, CompareOptions):
            raise HtmlCmpArgumentError(
                f"options must be CompareOptions, not {type(options).__name__}"
            )
        self.options = options if options is not None else CompareOptions()

    def compare(
        self, expected: Union[str, bytes], actual: Union[str, bytes]
    ) -> Optional[MismatchReport]:
        """
        Compare two HTML documents.

        :param expected: The expected HTML document text.
        :type expected: ``Union[str, bytes]``
        :param actual: The actual HTML document text.
        :type actual: ``Union[str, bytes]``
        :returns: ``None`` if the documents are equivalent, or a
                  ``MismatchReport`` describing the first difference found.
        :rtype: ``Optional[MismatchReport]``
        """
        expected_doc = parse_document(expected)
        actual_doc = parse_document(actual)
        return self.compare_trees(expected_doc, actual_doc)

    def equivalent(self, expected: Union[str, bytes], actual: Union[str, bytes]) -> bool:
        """
        Return ``True`` if two HTML documents are equivalent.

        :param expected: The expected HTML document text.
        :param actual: The actual HTML document text.
        :rtype: ``bool``
        """
        return self.compare(expected, actual) is None

    def compare_trees(
        self, expected: ParsedNode, actual: ParsedNode
    ) -> Optional[MismatchReport]:
        """
        Compare two parsed trees.

        Documents are compared through their root (``<html>``) elements and
        fragments through their comparable children.

        :param expected: The expected tree.
        :type expected: ``ParsedNode``
        :param actual: The actual tree.
        :type actual: ``ParsedNode``
        :returns: ``None`` if the trees are equivalent, or a
                  ``MismatchReport``.
        :rtype: ``Optional[MismatchReport]``
        """
        _log_debug_engine(
            "Comparing %s with %s using options: %s",
            expected.kind.value,
            actual.kind.value,
            repr(self.options),
        )
        if expected.kind == NodeKind.DOCUMENT and actual.kind == NodeKind.DOCUMENT:
            expected_root = expected.root_element()
            actual_root = actual.root_element()
            if expected_root is not None and actual_root is not None:
                expected, actual = expected_root, actual_root

        if expected.is_element and actual.is_element:
            report = self.compare_elements(expected, actual)
        else:
            report = self._run_steps(self._children_steps(expected, actual))

        if report is not None:
            _log_debug_engine("Comparison failed: %s", report)
        return report

    def _run_steps(self, steps: _CompareSteps) -> Optional[MismatchReport]:
        """
        Drive a comparison generator to completion.

        Comparison generators yield the ``(expected, actual)`` element pairs
        whose verdict they depend on and are sent back the report for each
        pair (``None`` when the pair is equivalent). Pending comparisons are
        held on an explicit stack, so nesting depth is not bounded by the
        interpreter recursion limit and elements are still visited depth
        first, left to right.

        :param steps: The outermost comparison generator.
        :returns: The report returned by ``steps``.
        :rtype: ``Optional[MismatchReport]``
        """
        stack: List[_CompareSteps] = [steps]
        report: Optional[MismatchReport] = None
        while stack:
            try:
                expected, actual = stack[-1].send(report)
            except StopIteration as stop:
                stack.pop()
                report = stop.value
                continue
            stack.append(self._element_steps(expected, actual))
            report = None
        return report

    def compare_elements(
        self, expected: ParsedNode, actual: ParsedNode
    ) -> Optional[MismatchReport]:
        """
        Compare two elements: tag names, attributes and comparable children.

        :param expected: The expected element.
        :type expected: ``ParsedNode``
        :param actual: The actual element.
        :type actual: ``ParsedNode``
        :returns: ``None`` if the elements are equivalent, or a
                  ``MismatchReport``.
        :rtype: ``Optional[MismatchReport]``
        """
        return self._run_steps(self._element_steps(expected, actual))

    def _element_steps(
        self, expected: ParsedNode, actual: ParsedNode
    ) -> _CompareSteps:
        if expected.name != actual.name:
            return MismatchReport(MismatchType.TAG, expected.name, actual.name)

        if not self.options.ignore_attributes:
            report = self.compare_attributes(expected, actual)
            if report is not None:
                return report

        return (yield from self._children_steps(expected, actual))

    def _children_steps(
        self, expected: ParsedNode, actual: ParsedNode
    ) -> _CompareSteps:
        """
        Filter the children of two nodes and compare them in the mode
        selected by ``ignore_sibling_order``.
        """
        expected_children = [
            node for node in expected.children if self.should_include_node(node)
        ]
        actual_children = [
            node for node in actual.children if self.should_include_node(node)
        ]

        if self.options.ignore_sibling_order:
            return (
                yield from self._unordered_steps(expected_children, actual_children)
            )
        return (yield from self._ordered_steps(expected_children, actual_children))

    def _attribute_set(self, element: ParsedNode) -> AttributeSet:
        """
        Return the comparable (name, value) pairs of ``element``.
        """
        ignored = self.options.ignored_attributes
        return frozenset(
            (name, value) for name, value in element.attributes if name not in ignored
        )

    def compare_attributes(
        self, expected: ParsedNode, actual: ParsedNode
    ) -> Optional[MismatchReport]:
        """
        Compare the attribute sets of two elements, ignoring order and any
        names in ``ignored_attributes``.

        :param expected: The expected element.
        :type expected: ``ParsedNode``
        :param actual: The actual element.
        :type actual: ``ParsedNode``
        :returns: ``None`` if the attribute sets are equal, or a
                  ``MismatchReport`` carrying both sets.
        :rtype: ``Optional[MismatchReport]``
        """
        expected_attrs = self._attribute_set(expected)
        actual_attrs = self._attribute_set(actual)
        if expected_attrs != actual_attrs:
            return MismatchReport(MismatchType.ATTRIBUTES, expected_attrs, actual_attrs)
        return None

    def _normalize_text(self, text: str) -> str:
        """
        Trim ``text`` if whitespace is ignored.
        """
        return text.strip() if self.options.ignore_whitespace else text

    def _text_matches(self, expected: ParsedNode, actual: ParsedNode) -> bool:
        """
        Return ``True`` if two text nodes are equal under the active
        whitespace rule.
        """
        if self.options.ignore_text:
            return True
        return self._normalize_text(expected.data) == self._normalize_text(actual.data)

    def compare_ordered(
        self, expected: Sequence[ParsedNode], actual: Sequence[ParsedNode]
    ) -> Optional[MismatchReport]:
        """
        Compare two lists of comparable children position by position.

        :param expected: The expected children.
        :type expected: ``Sequence[ParsedNode]``
        :param actual: The actual children.
        :type actual: ``Sequence[ParsedNode]``
        :returns: ``None`` if the lists are equivalent, or a
                  ``MismatchReport`` for the first differing position.
        :rtype: ``Optional[MismatchReport]``
        """
        return self._run_steps(self._ordered_steps(expected, actual))

    def _ordered_steps(
        self, expected: Sequence[ParsedNode], actual: Sequence[ParsedNode]
    ) -> _CompareSteps:
        if len(expected) != len(actual):
            return MismatchReport(MismatchType.CHILD_COUNT, len(expected), len(actual))

        for i, (expected_child, actual_child) in enumerate(zip(expected, actual)):
            kinds = (expected_child.kind, actual_child.kind)
            if kinds == (NodeKind.TEXT, NodeKind.TEXT):
                if not self._text_matches(expected_child, actual_child):
                    return MismatchReport(
                        MismatchType.TEXT,
                        self._normalize_text(expected_child.data),
                        self._normalize_text(actual_child.data),
                        position=i,
                    )
            elif kinds == (NodeKind.COMMENT, NodeKind.COMMENT):
                if not self.options.ignore_comments:
                    expected_comment = expected_child.data.strip()
                    actual_comment = actual_child.data.strip()
                    if expected_comment != actual_comment:
                        return MismatchReport(
                            MismatchType.COMMENT,
                            expected_comment,
                            actual_comment,
                            position=i,
                        )
            elif kinds == (NodeKind.ELEMENT, NodeKind.ELEMENT):
                report = yield expected_child, actual_child
                if report is not None:
                    return report
            else:
                return MismatchReport(
                    MismatchType.NODE_KIND,
                    expected_child.kind.value,
                    actual_child.kind.value,
                    position=i,
                )
        return None

    def _unordered_match(self, expected: ParsedNode, actual: ParsedNode) -> bool:
        """
        Return ``True`` if ``actual`` can be paired with ``expected`` during
        unordered comparison.
        """
        kinds = (expected.kind, actual.kind)
        if kinds == (NodeKind.TEXT, NodeKind.TEXT):
            return self._text_matches(expected, actual)
        if kinds == (NodeKind.ELEMENT, NodeKind.ELEMENT):
            return self.compare_elements(expected, actual) is None
        if kinds == (NodeKind.COMMENT, NodeKind.COMMENT):
            # Comments are never content-compared in unordered mode.
            return self.options.ignore_comments
        return False

    def compare_unordered(
        self, expected: Sequence[ParsedNode], actual: Sequence[ParsedNode]
    ) -> Optional[MismatchReport]:
        """
        Compare two lists of comparable children as multisets.

        Each expected child, in order, is paired with the first unmatched
        actual child it matches. Matching is greedy with no backtracking: a
        pairing, once made, is never revisited.

        :param expected: The expected children.
        :type expected: ``Sequence[ParsedNode]``
        :param actual: The actual children.
        :type actual: ``Sequence[ParsedNode]``
        :returns: ``None`` if every expected child was matched, or a
                  ``MismatchReport``.
        :rtype: ``Optional[MismatchReport]``
        """
        return self._run_steps(self._unordered_steps(expected, actual))

    def _unordered_steps(
        self, expected: Sequence[ParsedNode], actual: Sequence[ParsedNode]
    ) -> _CompareSteps:
        if len(expected) != len(actual):
            return MismatchReport(MismatchType.CHILD_COUNT, len(expected), len(actual))

        matched: List[bool] = [False] * len(actual)

        for expected_child in expected:
            for i, actual_child in enumerate(actual):
                if matched[i]:
                    continue
                if expected_child.is_element and actual_child.is_element:
                    # Element candidates are compared on the driver's stack.
                    is_match = (yield expected_child, actual_child) is None
                else:
                    is_match = self._unordered_match(expected_child, actual_child)
                if is_match:
                    _log_debug_engine_extra(
                        "Matched %s with actual child %d", expected_child, i
                    )
                    matched[i] = True
                    break
            else:
                return MismatchReport(MismatchType.NO_MATCH, str(expected_child))
        return None

    def should_include_node(self, node: ParsedNode) -> bool:
        """
        Determine if ``node`` takes part in comparison.

        :param node: The node to test.
        :type node: ``ParsedNode``
        :returns: ``False`` for text and comment nodes excluded by the
                  active options, ``True`` otherwise.
        :rtype: ``bool``
        """
        if node.is_text:
            return not self.options.ignore_text and (
                not self.options.ignore_whitespace or bool(node.data.strip())
            )
        if node.is_comment:
            return not self.options.ignore_comments
        return True


def compare(
    expected: Union[str, bytes],
    actual: Union[str, bytes],
    options: Optional[CompareOptions] = None,
) -> Optional[MismatchReport]:
    """
    Compare two HTML documents using ``options``.

    :param expected: The expected HTML document text.
    :type expected: ``Union[str, bytes]``
    :param actual: The actual HTML document text.
    :type actual: ``Union[str, bytes]``
    :param options: The comparison options, or ``None`` for the defaults.
    :type options: ``Optional[CompareOptions]``
    :returns: ``None`` if the documents are equivalent, or a
              ``MismatchReport``.
    :rtype: ``Optional[MismatchReport]``
    """
    return HtmlComparer(options).compare(expected, actual)


__all__ = [
    "HtmlComparer",
    "compare",
]
