# Copyright Red Hat
#
# htmlcmp/_htmlcmp.py - HTML comparison global definitions
#
# This file is part of the htmlcmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Global definitions for the top-level htmlcmp package.
"""
import logging

_log = logging.getLogger("htmlcmp")

_log_debug = _log.debug
_log_info = _log.info
_log_warn = _log.warning
_log_error = _log.error

# Htmlcmp debugging subsystem mask
HTMLCMP_DEBUG_ENGINE = 1
HTMLCMP_DEBUG_PARSER = 2
HTMLCMP_DEBUG_ALL = HTMLCMP_DEBUG_ENGINE | HTMLCMP_DEBUG_PARSER

# Htmlcmp debugging subsystem names
HTMLCMP_SUBSYSTEM_ENGINE = "htmlcmp.engine"
HTMLCMP_SUBSYSTEM_PARSER = "htmlcmp.parser"

_DEBUG_MASK_TO_SUBSYSTEM = {
    HTMLCMP_DEBUG_ENGINE: HTMLCMP_SUBSYSTEM_ENGINE,
    HTMLCMP_DEBUG_PARSER: HTMLCMP_SUBSYSTEM_PARSER,
}

_debug_subsystems = set()


class SubsystemFilter(logging.Filter):
    """
    Filters DEBUG records based on a set of enabled subsystem names.
    Non-DEBUG records or DEBUG records without a 'subsystem' attribute
    are always passed through.
    """

    def __init__(self, name=""):
        super().__init__(name)
        self.enabled_subsystems = set(_debug_subsystems)

    def filter(self, record):
        if record.levelno != logging.DEBUG:
            return True

        if not hasattr(record, "subsystem"):
            return True

        return record.subsystem in self.enabled_subsystems

    def set_debug_subsystems(self, subsystems):
        """Sets the collection of subsystems to allow."""
        self.enabled_subsystems = set(subsystems)


def get_debug_mask():
    """
    Return the current debug mask for the ``htmlcmp`` package.

    :returns: The current debug mask value
    :rtype: int
    """
    enabled_subsystems = set(_debug_subsystems)
    htmlcmp_log = logging.getLogger("htmlcmp")

    for handler in htmlcmp_log.handlers:
        for f in handler.filters:
            if isinstance(f, SubsystemFilter):
                enabled_subsystems.update(f.enabled_subsystems)

    mask_map = {v: k for k, v in _DEBUG_MASK_TO_SUBSYSTEM.items()}
    mask = 0
    for subsystem_name in enabled_subsystems:
        mask |= mask_map.get(subsystem_name, 0)
    return mask


def set_debug_mask(mask):
    """
    Set the debug mask for the ``htmlcmp`` package.

    Any ``SubsystemFilter`` attached to a handler of the ``htmlcmp`` logger
    is updated to pass debug records for the selected subsystems.

    :param mask: the logical OR of the ``HTMLCMP_DEBUG_*``
                 values to log.
    :rtype: None
    """
    # pylint: disable=global-statement
    global _debug_subsystems

    if mask < 0 or mask > HTMLCMP_DEBUG_ALL:
        raise ValueError(f"Invalid htmlcmp debug mask: {mask}")

    enabled_subsystems = []
    for flag, subsystem_name in _DEBUG_MASK_TO_SUBSYSTEM.items():
        if mask & flag:
            enabled_subsystems.append(subsystem_name)

    htmlcmp_log = logging.getLogger("htmlcmp")
    for handler in htmlcmp_log.handlers:
        for f in handler.filters:
            if isinstance(f, SubsystemFilter):
                f.set_debug_subsystems(enabled_subsystems)

    _debug_subsystems = set(enabled_subsystems)


_DEBUG_NAME_TO_MASK = {
    "engine": HTMLCMP_DEBUG_ENGINE,
    "parser": HTMLCMP_DEBUG_PARSER,
    "all": HTMLCMP_DEBUG_ALL,
}


def enable_debug_logging(debug_arg="all", handler=None):
    """
    Send ``htmlcmp`` debug logs for the named subsystems to ``handler``.

    ``handler`` (a ``logging.StreamHandler`` writing to stderr if not
    given) is given a ``SubsystemFilter`` and attached to the ``htmlcmp``
    logger, which is set to the ``DEBUG`` level. Calling this again with
    the same handler only changes the enabled subsystems. Remove the
    handler from the ``htmlcmp`` logger to stop debug output.

    :param debug_arg: A comma separated list of subsystem names:
                      "engine", "parser" or "all".
    :type debug_arg: ``str``
    :param handler: The handler to receive debug records.
    :type handler: ``Optional[logging.Handler]``
    :returns: The configured handler.
    :rtype: ``logging.Handler``
    """
    mask = 0
    for name in debug_arg.split(","):
        name = name.strip()
        if name not in _DEBUG_NAME_TO_MASK:
            raise ValueError(f"Unknown debug option: {name}")
        mask |= _DEBUG_NAME_TO_MASK[name]

    if handler is None:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
    handler.setLevel(logging.DEBUG)
    if not any(isinstance(f, SubsystemFilter) for f in handler.filters):
        handler.addFilter(SubsystemFilter("htmlcmp"))

    htmlcmp_log = logging.getLogger("htmlcmp")
    htmlcmp_log.setLevel(logging.DEBUG)
    if handler not in htmlcmp_log.handlers:
        htmlcmp_log.addHandler(handler)

    set_debug_mask(mask)
    _log_debug("Enabled htmlcmp debug logging for: %s", debug_arg)
    return handler


#
# Htmlcmp exception types
#


class HtmlCmpError(Exception):
    """
    Base class for HTML comparison errors.
    """


class HtmlCmpArgumentError(HtmlCmpError):
    """
    An invalid argument was passed to an htmlcmp API call.
    """


class HtmlCmpParseError(HtmlCmpError):
    """
    The HTML parser failed to produce a document tree.
    """


class HtmlCmpConfigError(HtmlCmpError):
    """
    A comparison options configuration file could not be interpreted.
    """

    def __init__(self, config_file: str, section: str, reason: str):
        """
        Initialise a new `HtmlCmpConfigError` exception.

        :param config_file: The path of the offending configuration file.
        :param section: The configuration section being read.
        :param reason: A description of the problem.
        """
        self.config_file, self.section, self.reason = config_file, section, reason
        msg = f"Invalid configuration in {config_file} [{section}]: {reason}"
        super().__init__(msg)


__all__ = [
    "HTMLCMP_DEBUG_ENGINE",
    "HTMLCMP_DEBUG_PARSER",
    "HTMLCMP_DEBUG_ALL",
    "HTMLCMP_SUBSYSTEM_ENGINE",
    "HTMLCMP_SUBSYSTEM_PARSER",
    "SubsystemFilter",
    "get_debug_mask",
    "set_debug_mask",
    "enable_debug_logging",
    "HtmlCmpError",
    "HtmlCmpArgumentError",
    "HtmlCmpParseError",
    "HtmlCmpConfigError",
]
