"""Tests for the command line interface."""

import io
import unittest

from turboentities.__main__ import run


def call(argv, stdin=""):
    stdout = io.StringIO()
    stderr = io.StringIO()
    status = run(argv, stdin=io.StringIO(stdin), stdout=stdout, stderr=stderr)
    return status, stdout.getvalue(), stderr.getvalue()


class TestDecodeCommand(unittest.TestCase):
    def test_decode_argument(self):
        assert call(["decode", "&lt;p&gt; &copy;"]) == (0, "<p> \xa9", "")

    def test_decode_attribute(self):
        status, out, _ = call(["decode", "--attribute", "?a=1&amp=2"])
        assert status == 0
        assert out == "?a=1&amp=2"

    def test_strict_failure(self):
        status, out, err = call(["decode", "--strict", "&amp"])
        assert status == 1
        assert out == ""
        assert err.startswith("error: (0): missing-semicolon-after-character-reference")

    def test_errors_are_printed_as_warnings(self):
        status, out, err = call(["decode", "--errors", "&foo; &#128;"])
        assert status == 0
        assert out == "&foo; \u20ac"
        assert err.splitlines() == [
            "warning: (0): ambiguous-ampersand - named character reference was not terminated by a semicolon",
            "warning: (6): disallowed-character-reference - disallowed character reference",
        ]


class TestEncodeCommand(unittest.TestCase):
    def test_encode_defaults(self):
        assert call(["encode", "<\xe9>"]) == (0, "&#x3C;&#xE9;&#x3E;", "")

    def test_encode_flags(self):
        assert call(["encode", "--named", "<\xe9>"])[1] == "&lt;&eacute;&gt;"
        assert call(["encode", "--decimal", "\xe9"])[1] == "&#233;"
        assert call(["encode", "--allow-unsafe", "<b>"])[1] == "<b>"
        assert call(["encode", "--everything", "a"])[1] == "&#x61;"

    def test_strict_failure(self):
        status, out, err = call(["encode", "--strict", "a\x01"])
        assert status == 1
        assert out == ""
        assert "forbidden-code-point" in err


class TestEscapeCommand(unittest.TestCase):
    def test_escape_reads_stdin(self):
        assert call(["escape"], stdin="<a href='x'>") == (0, "&lt;a href=&apos;x&apos;&gt;", "")


class TestArguments(unittest.TestCase):
    def test_command_is_required(self):
        with self.assertRaises(SystemExit):
            call([])
