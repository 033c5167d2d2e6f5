# Copyright Red Hat
#
# tests/compare/test_options.py - CompareOptions tests.
#
# This file is part of the htmlcmp project.
#
# SPDX-License-Identifier: Apache-2.0
import unittest
import tempfile
import os

from htmlcmp import HtmlCmpArgumentError, HtmlCmpConfigError
from htmlcmp.compare import presets
from htmlcmp.compare.options import CompareOptions


class TestCompareOptions(unittest.TestCase):
    def test_defaults(self):
        opts = CompareOptions()
        self.assertTrue(opts.ignore_whitespace)
        self.assertTrue(opts.ignore_comments)
        self.assertFalse(opts.ignore_attributes)
        self.assertFalse(opts.ignore_text)
        self.assertFalse(opts.ignore_sibling_order)
        self.assertEqual(opts.ignored_attributes, frozenset())

    def test_ignored_attributes_normalised(self):
        opts = CompareOptions(ignored_attributes=["id", "class", "id"])
        self.assertEqual(opts.ignored_attributes, frozenset({"id", "class"}))
        self.assertEqual(opts, CompareOptions(ignored_attributes={"class", "id"}))

    def test_ignored_attributes_string_rejected(self):
        with self.assertRaises(HtmlCmpArgumentError):
            CompareOptions(ignored_attributes="id")

    def test_CompareOptions__str__(self):
        opts = CompareOptions(ignore_text=True, ignored_attributes={"id", "class"})
        s = str(opts)
        self.assertIn("ignore_text=True", s)
        self.assertIn("ignored_attributes=class id", s)
        self.assertIn("ignore_whitespace=True", s)


class TestCompareOptionsFromFile(unittest.TestCase):
    def setUp(self):
        self._tmpdir = tempfile.TemporaryDirectory()
        self.config_file = os.path.join(self._tmpdir.name, "htmlcmp.conf")

    def tearDown(self):
        self._tmpdir.cleanup()

    def _write(self, text):
        with open(self.config_file, "w", encoding="utf8") as fp:
            fp.write(text)

    def test_missing_file(self):
        opts = CompareOptions.from_file(self.config_file)
        self.assertEqual(opts, CompareOptions())

    def test_missing_section(self):
        self._write("[other]\nignore_text = yes\n")
        self.assertEqual(CompareOptions.from_file(self.config_file), CompareOptions())

    def test_overrides(self):
        self._write(
            "[htmlcmp]\n"
            "ignore_sibling_order = yes\n"
            "ignore_comments = false\n"
            "ignored_attributes = id, data-ts ,\n"
        )
        opts = CompareOptions.from_file(self.config_file)
        self.assertTrue(opts.ignore_sibling_order)
        self.assertFalse(opts.ignore_comments)
        self.assertTrue(opts.ignore_whitespace)
        self.assertEqual(opts.ignored_attributes, frozenset({"id", "data-ts"}))

    def test_preset_base(self):
        self._write("[htmlcmp]\npreset = markdown\nignore_sibling_order = on\n")
        opts = CompareOptions.from_file(self.config_file)
        self.assertEqual(opts.ignored_attributes, frozenset({"id"}))
        self.assertTrue(opts.ignore_sibling_order)

    def test_custom_section(self):
        self._write("[tool.html]\npreset = strict\n")
        opts = CompareOptions.from_file(self.config_file, section="tool.html")
        self.assertEqual(opts, presets.strict())

    def test_unknown_preset(self):
        self._write("[htmlcmp]\npreset = sloppy\n")
        with self.assertRaises(HtmlCmpConfigError) as cm:
            CompareOptions.from_file(self.config_file)
        self.assertIn("sloppy", str(cm.exception))

    def test_bad_boolean(self):
        self._write("[htmlcmp]\nignore_text = perhaps\n")
        with self.assertRaises(HtmlCmpConfigError) as cm:
            CompareOptions.from_file(self.config_file)
        self.assertEqual(cm.exception.section, "htmlcmp")

    def test_malformed_file(self):
        self._write("ignore_text = yes\n")
        with self.assertRaises(HtmlCmpConfigError):
            CompareOptions.from_file(self.config_file)


class TestPresets(unittest.TestCase):
    def test_relaxed(self):
        opts = presets.relaxed()
        self.assertTrue(opts.ignore_attributes)
        self.assertTrue(opts.ignore_sibling_order)
        self.assertTrue(opts.ignore_comments)
        self.assertFalse(opts.ignore_text)

    def test_strict(self):
        opts = presets.strict()
        self.assertFalse(opts.ignore_comments)
        self.assertFalse(opts.ignore_attributes)
        self.assertFalse(opts.ignore_sibling_order)
        self.assertTrue(opts.ignore_whitespace)

    def test_markdown(self):
        opts = presets.markdown()
        self.assertEqual(opts.ignored_attributes, frozenset({"id"}))
        self.assertFalse(opts.ignore_sibling_order)

    def test_get_preset(self):
        self.assertEqual(presets.get_preset("strict"), presets.strict())
        with self.assertRaises(HtmlCmpArgumentError):
            presets.get_preset("nope")
