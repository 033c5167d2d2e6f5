# Copyright Red Hat
#
# htmlcmp/compare/options.py - HTML comparison options
#
# This file is part of the htmlcmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""
HTML comparison options.
"""
from dataclasses import dataclass, field, fields, replace
from configparser import ConfigParser, Error as ConfigParserError
from typing import FrozenSet
from os.path import exists
import logging

from htmlcmp import HtmlCmpArgumentError, HtmlCmpConfigError

_log = logging.getLogger(__name__)

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error

#: Default configuration file section for comparison options
_HTMLCMP_CFG_SECTION = "htmlcmp"

#: Configuration key selecting a named preset as the base options
_HTMLCMP_CFG_PRESET = "preset"

#: Configuration key listing ignored attribute names
_HTMLCMP_CFG_IGNORED_ATTRIBUTES = "ignored_attributes"


@dataclass(frozen=True)
class CompareOptions:
    """
    HTML comparison options.
    """

    #: Trim text nodes and drop whitespace-only text nodes
    ignore_whitespace: bool = True
    #: Ignore all HTML attributes
    ignore_attributes: bool = False
    #: Attribute names to ignore (if ignore_attributes is False)
    ignored_attributes: FrozenSet[str] = field(default_factory=frozenset)
    #: Ignore text nodes
    ignore_text: bool = False
    #: Ignore comment nodes
    ignore_comments: bool = True
    #: Ignore the order of sibling nodes
    ignore_sibling_order: bool = False

    def __post_init__(self):
        if isinstance(self.ignored_attributes, str):
            raise HtmlCmpArgumentError(
                "ignored_attributes must be a collection of names, not a string"
            )
        object.__setattr__(self, "ignored_attributes", frozenset(self.ignored_attributes))

    def __str__(self):
        """
        Return a human readable string representation of this
        ``CompareOptions`` instance.

        :returns: A human readable string.
        :rtype: ``str``
        """
        items = [
            (key, val) if not isinstance(val, frozenset) else (key, " ".join(sorted(val)))
            for key, val in self.__dict__.items()
        ]
        return "\n".join(f"{key}={val}" for key, val in items)

    @classmethod
    def from_file(
        cls, config_file: str, section: str = _HTMLCMP_CFG_SECTION
    ) -> "CompareOptions":
        """
        Load ``CompareOptions`` from an INI-style configuration file located
        at ``config_file``.

        The optional ``preset`` key names a preset to use as the base
        options; any other key overrides the corresponding field::

            [htmlcmp]
            preset = strict
            ignore_comments = yes
            ignored_attributes = id, data-timestamp

        :param config_file: path to the configuration file.
        :type config_file: ``str``
        :param section: The section holding the comparison options.
        :type section: ``str``
        :returns: A ``CompareOptions`` instance initialised from
                  ``config_file``, or the default options if the file or
                  section does not exist.
        :rtype: ``CompareOptions``
        """
        # pylint: disable=import-outside-toplevel
        from .presets import get_preset

        if not exists(config_file):
            _log_debug("No configuration file at '%s': using defaults", config_file)
            return cls()

        _log_debug("Loading comparison options from '%s' [%s]", config_file, section)
        cfg = ConfigParser()
        try:
            cfg.read([config_file])
        except ConfigParserError as err:
            raise HtmlCmpConfigError(config_file, section, str(err)) from err

        if not cfg.has_section(section):
            return cls()

        options = cls()
        if cfg.has_option(section, _HTMLCMP_CFG_PRESET):
            preset = cfg.get(section, _HTMLCMP_CFG_PRESET).strip()
            try:
                options = get_preset(preset)
            except HtmlCmpArgumentError as err:
                raise HtmlCmpConfigError(config_file, section, str(err)) from err

        overrides = {}
        for opt in fields(cls):
            if not cfg.has_option(section, opt.name):
                continue
            if opt.name == _HTMLCMP_CFG_IGNORED_ATTRIBUTES:
                names = cfg.get(section, opt.name)
                overrides[opt.name] = frozenset(
                    name.strip() for name in names.split(",") if name.strip()
                )
                continue
            try:
                overrides[opt.name] = cfg.getboolean(section, opt.name)
            except ValueError as err:
                raise HtmlCmpConfigError(config_file, section, str(err)) from err

        options = replace(options, **overrides)
        _log_debug("Initialised CompareOptions from file: %s", repr(options))
        return options


__all__ = ["CompareOptions"]
