# Copyright Red Hat
#
# htmlcmp/compare/assertions.py - HTML comparison test assertions
#
# This file is part of the htmlcmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Test assertions for HTML equivalence.
"""
from typing import Optional, Union

from .engine import HtmlComparer
from .mismatch import MismatchReport
from .options import CompareOptions


class HtmlCompareAssertionError(AssertionError):
    """
    An HTML equivalence assertion failed.
    """

    def __init__(
        self,
        msg: str,
        left: Union[str, bytes],
        right: Union[str, bytes],
        options: CompareOptions,
        report: Optional[MismatchReport] = None,
    ):
        """
        Initialise a new ``HtmlCompareAssertionError``.

        :param msg: The formatted failure message.
        :param left: The left (expected) HTML input.
        :param right: The right (actual) HTML input.
        :param options: The comparison options used.
        :param report: The mismatch report, or ``None`` if the documents were
                       unexpectedly equivalent.
        """
        self.left, self.right, self.options, self.report = left, right, options, report
        super().__init__(msg)


def _eq_failure_message(left, right, options: CompareOptions, report) -> str:
    return (
        "\nHTML comparison failed:\n"
        f"{report}\n\n"
        "left HTML:\n"
        f"{left}\n\n"
        "right HTML:\n"
        f"{right}\n\n"
        f"options:\n{options}"
    )


def _ne_failure_message(left, options: CompareOptions) -> str:
    return (
        "\nHTML strings were equal but expected to be different:\n\n"
        "HTML:\n"
        f"{left}\n\n"
        f"options:\n{options}"
    )


def assert_html_eq(
    left: Union[str, bytes],
    right: Union[str, bytes],
    options: Optional[CompareOptions] = None,
):
    """
    Assert that two HTML documents are equivalent under ``options``.

    :param left: The expected HTML document text.
    :param right: The actual HTML document text.
    :param options: The comparison options, or ``None`` for the defaults.
    :raises HtmlCompareAssertionError: if the documents differ.
    """
    comparer = HtmlComparer(options)
    report = comparer.compare(left, right)
    if report is not None:
        raise HtmlCompareAssertionError(
            _eq_failure_message(left, right, comparer.options, report),
            left,
            right,
            comparer.options,
            report=report,
        )


def assert_html_ne(
    left: Union[str, bytes],
    right: Union[str, bytes],
    options: Optional[CompareOptions] = None,
):
    """
    Assert that two HTML documents are not equivalent under ``options``.

    :param left: The first HTML document text.
    :param right: The second HTML document text.
    :param options: The comparison options, or ``None`` for the defaults.
    :raises HtmlCompareAssertionError: if the documents are equivalent.
    """
    comparer = HtmlComparer(options)
    if comparer.compare(left, right) is None:
        raise HtmlCompareAssertionError(
            _ne_failure_message(left, comparer.options),
            left,
            right,
            comparer.options,
        )


class HtmlAssertionsMixin:
    """
    Mixin adding HTML equivalence assertions to ``unittest.TestCase``.
    """

    def assertHtmlEqual(self, first, second, options=None, msg=None):
        """Fail if ``first`` and ``second`` are not equivalent HTML."""
        comparer = HtmlComparer(options)
        report = comparer.compare(first, second)
        if report is not None:
            standard_msg = _eq_failure_message(first, second, comparer.options, report)
            # pylint: disable=no-member
            self.fail(self._formatMessage(msg, standard_msg))

    def assertHtmlNotEqual(self, first, second, options=None, msg=None):
        """Fail if ``first`` and ``second`` are equivalent HTML."""
        comparer = HtmlComparer(options)
        if comparer.compare(first, second) is None:
            standard_msg = _ne_failure_message(first, comparer.options)
            # pylint: disable=no-member
            self.fail(self._formatMessage(msg, standard_msg))


__all__ = [
    "HtmlAssertionsMixin",
    "HtmlCompareAssertionError",
    "assert_html_eq",
    "assert_html_ne",
]
