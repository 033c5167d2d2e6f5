# Copyright Red Hat
#
# tests/compare/__init__.py - HTML comparison engine test package
#
# This file is part of the htmlcmp project.
#
# SPDX-License-Identifier: Apache-2.0
