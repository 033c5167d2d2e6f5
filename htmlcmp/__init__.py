# Copyright Red Hat
#
# htmlcmp/__init__.py - HTML comparison package initialisation
#
# This file is part of the htmlcmp project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Htmlcmp top-level package.
"""
from ._htmlcmp import *  # noqa: F401, F403
from ._htmlcmp import __all__  # noqa: F401

__version__ = "0.1.0"
