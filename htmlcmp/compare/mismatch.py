# Copyright Red Hat
#
# htmlcmp/compare/mismatch.py - HTML comparison mismatch reports
#
# This file is part of the htmlcmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""
HTML comparison mismatch types and reports.
"""
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional, Tuple, Union
from enum import Enum
import json


class MismatchType(Enum):
    """
    Enum for the reasons two trees can fail to compare equal.
    """

    TAG = "tag"
    ATTRIBUTES = "attributes"
    CHILD_COUNT = "child_count"
    TEXT = "text"
    COMMENT = "comment"
    NODE_KIND = "node_kind"
    NO_MATCH = "no_match"


AttributeSet = FrozenSet[Tuple[str, str]]

MismatchValue = Union[str, int, AttributeSet, None]


def _format_attribute_set(attrs: AttributeSet) -> str:
    """
    Format an attribute set with a stable ordering.

    :param attrs: The set of (name, value) pairs.
    :type attrs: ``AttributeSet``
    :returns: A string such as ``{('class', 'a'), ('id', '1')}``.
    :rtype: ``str``
    """
    return "{" + ", ".join(repr(pair) for pair in sorted(attrs)) + "}"


def _value_to_json(value: MismatchValue) -> Any:
    """Convert attribute sets to sorted lists of pairs."""
    if isinstance(value, frozenset):
        return [list(pair) for pair in sorted(value)]
    return value


@dataclass(frozen=True)
class MismatchReport:
    """
    Single-cause explanation of why two document trees are not equivalent.
    """

    #: The reason for the mismatch
    mismatch_type: MismatchType
    #: The value found in the expected tree
    expected: MismatchValue
    #: The value found in the actual tree
    actual: MismatchValue = None
    #: Child index of the mismatch for positional reports
    position: Optional[int] = None

    @property
    def message(self) -> str:
        """
        A human readable description of this mismatch reproducing the values
        involved.
        """
        # pylint: disable=too-many-return-statements
        mtype = self.mismatch_type
        if mtype == MismatchType.TAG:
            return f"Tag name mismatch. Expected: {self.expected}, Actual: {self.actual}"
        if mtype == MismatchType.ATTRIBUTES:
            return (
                "Attributes mismatch. "
                f"Expected: {_format_attribute_set(self.expected)}, "
                f"Actual: {_format_attribute_set(self.actual)}"
            )
        if mtype == MismatchType.CHILD_COUNT:
            return (
                f"Child count mismatch. Expected: {self.expected}, Actual: {self.actual}"
            )
        if mtype == MismatchType.TEXT:
            return (
                f"Text content mismatch at position {self.position}. "
                f"Expected: '{self.expected}', Actual: '{self.actual}'"
            )
        if mtype == MismatchType.COMMENT:
            return (
                f"Comment content mismatch at position {self.position}. "
                f"Expected: '{self.expected}', Actual: '{self.actual}'"
            )
        if mtype == MismatchType.NODE_KIND:
            return (
                f"Node type mismatch at position {self.position}. "
                f'Expected type: "{self.expected}", Actual type: "{self.actual}"'
            )
        return f"No matching node found for {self.expected}"

    def __str__(self) -> str:
        """
        Return a string representation of this ``MismatchReport``.

        :returns: The mismatch message prefixed with ``Node mismatch:``.
        :rtype: ``str``
        """
        return f"Node mismatch: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert this ``MismatchReport`` into a dictionary representation
        suitable for encoding as JSON.

        :returns: A dictionary mapping this instance's keys to values.
        :rtype: ``Dict[str, Any]``
        """
        out = {
            "mismatch_type": self.mismatch_type.value,
            "expected": _value_to_json(self.expected),
            "actual": _value_to_json(self.actual),
            "message": self.message,
        }
        if self.position is not None:
            out["position"] = self.position
        return out

    def json(self, pretty=False) -> str:
        """
        Return a string representation of this ``MismatchReport`` in JSON
        notation.

        :param pretty: Indent JSON to be human readable.
        :type pretty: ``bool``
        :returns: A JSON representation of this instance.
        :rtype: ``str``
        """
        return json.dumps(self.to_dict(), indent=4 if pretty else None)


__all__ = [
    "AttributeSet",
    "MismatchReport",
    "MismatchType",
]
