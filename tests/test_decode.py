"""Tests for character reference decoding."""

import unittest

from turboentities import (
    AmbiguousAmpersand,
    DecodeOpts,
    Decoder,
    DisallowedReference,
    MalformedReference,
    OutOfRangeCodepoint,
    StrictModeError,
    UnterminatedReference,
    decode,
)
from turboentities.tokens import ReferenceSite


class TestNumericReferences(unittest.TestCase):
    def test_decimal_references(self):
        assert decode("&#104;&#101;&#108;&#108;&#111;") == "hello"

    def test_hex_references(self):
        assert decode("&#x41;&#X42;&#x6a;") == "ABj"

    def test_astral_reference(self):
        assert decode("&#x1D306;") == "\U0001d306"
        assert decode("&#119558;") == "\U0001d306"

    def test_missing_semicolon_still_decodes(self):
        assert decode("&#65") == "A"
        assert decode("&#x41b") == "\u041b"

    def test_missing_semicolon_raises_in_strict_mode(self):
        with self.assertRaises(UnterminatedReference) as ctx:
            decode("&#65", strict=True)
        assert ctx.exception.error.message == "character reference was not terminated by a semicolon"

    def test_surrogate_reference(self):
        assert decode("&#xD800;") == "\ufffd"
        with self.assertRaises(OutOfRangeCodepoint):
            decode("&#xD800;", strict=True)

    def test_reference_past_unicode_range(self):
        assert decode("&#x110000;") == "\ufffd"
        assert decode("&#99999999999999999999999999;") == "\ufffd"
        assert decode("&#x" + "F" * 5000 + ";") == "\ufffd"

    def test_leading_zeros(self):
        assert decode("&#0000000000000065;") == "A"
        assert decode("&#x0000000000041;") == "A"

    def test_null_reference(self):
        assert decode("&#0;") == "\ufffd"
        with self.assertRaises(DisallowedReference):
            decode("&#0;", strict=True)

    def test_windows_1252_reference(self):
        assert decode("&#128;") == "\u20ac"
        assert decode("&#x99;") == "\u2122"
        with self.assertRaises(DisallowedReference) as ctx:
            decode("&#128;", strict=True)
        assert ctx.exception.error.message == "disallowed character reference"

    def test_invalid_codepoint_decodes_but_raises_in_strict_mode(self):
        assert decode("&#1;") == "\x01"
        with self.assertRaises(DisallowedReference):
            decode("&#1;", strict=True)

    def test_malformed_numeric_reference_passes_through(self):
        assert decode("&#;") == "&#;"
        assert decode("&#x;") == "&#x;"
        assert decode("&#z") == "&#z"

    def test_malformed_numeric_reference_raises_in_strict_mode(self):
        with self.assertRaises(MalformedReference) as ctx:
            decode("ok &#z;", strict=True)
        assert ctx.exception.error.position == 3
        with self.assertRaises(MalformedReference):
            decode("&#xg", strict=True)

    def test_numeric_prefix_at_end_of_input_is_text_in_strict_mode(self):
        assert decode("&#", strict=True) == "&#"
        assert decode("&#x", strict=True) == "&#x"
        assert decode("a &#", strict=True) == "a &#"


class TestNamedReferences(unittest.TestCase):
    def test_terminated_references(self):
        assert decode("&lt;&gt;&quot;&apos;&amp;") == "<>\"'&"
        assert decode("&copy; 2024") == "\xa9 2024"

    def test_astral_and_multi_symbol_references(self):
        assert decode("&Afr;") == "\U0001d504"
        assert decode("&nvlt;") == "<\u20d2"
        assert decode("&fjlig;") == "fj"

    def test_references_are_decoded_once(self):
        assert decode("&amp;amp;") == "&amp;"
        assert decode("&amp;lt;") == "&lt;"

    def test_legacy_reference_without_semicolon(self):
        assert decode("&amp") == "&"
        assert decode("&AMP") == "&"
        assert decode("&copy 2024") == "\xa9 2024"

    def test_legacy_reference_raises_in_strict_mode(self):
        with self.assertRaises(UnterminatedReference) as ctx:
            decode("&amp", strict=True)
        assert ctx.exception.error.message == "named character reference was not terminated by a semicolon"

    def test_legacy_reference_keeps_following_character(self):
        assert decode("&copyright") == "\xa9right"
        assert decode("&notit") == "\xacit"
        assert decode("&amp=") == "&="

    def test_unknown_name_with_semicolon_is_left_alone(self):
        assert decode("&foo;") == "&foo;"
        assert decode("&notit;") == "&notit;"

    def test_unknown_name_raises_in_strict_mode(self):
        with self.assertRaises(AmbiguousAmpersand):
            decode("&foo;", strict=True)

    def test_unknown_name_without_semicolon_is_text(self):
        assert decode("&xyz") == "&xyz"
        assert decode("&xyz", strict=True) == "&xyz"

    def test_bare_ampersand_is_text(self):
        assert decode("fish & chips") == "fish & chips"
        assert decode("fish & chips", strict=True) == "fish & chips"
        assert decode("&") == "&"


class TestAttributeValues(unittest.TestCase):
    def test_equals_sign_keeps_reference_literal(self):
        assert decode("&amp=", is_attribute_value=True) == "&amp="
        assert decode("?a=1&copy=2", is_attribute_value=True) == "?a=1&copy=2"

    def test_equals_sign_raises_in_strict_mode(self):
        with self.assertRaises(AmbiguousAmpersand) as ctx:
            decode("&amp=", is_attribute_value=True, strict=True)
        assert ctx.exception.error.message == "`&` did not start a character reference"

    def test_alphanumeric_follower_keeps_reference_literal_without_error(self):
        assert decode("&ampx", is_attribute_value=True) == "&ampx"
        assert decode("&ampx", is_attribute_value=True, strict=True) == "&ampx"

    def test_reference_at_end_of_attribute_is_decoded(self):
        assert decode("a&amp", is_attribute_value=True) == "a&"

    def test_terminated_reference_is_decoded(self):
        assert decode("&amp;=", is_attribute_value=True) == "&="


class TestPassThrough(unittest.TestCase):
    def test_text_without_references(self):
        assert decode("") == ""
        assert decode("plain text") == "plain text"
        assert decode("caf\xe9 \U0001d306") == "caf\xe9 \U0001d306"

    def test_text_between_references_is_kept(self):
        assert decode("a &lt; b &gt; c") == "a < b > c"

    def test_non_strict_mode_never_raises(self):
        samples = ["&#", "&#x", "&#xD800", "&#0", "&#128", "&foo;", "&amp=", "&&&", "&#99999999999;"]
        for sample in samples:
            decode(sample)
            decode(sample, is_attribute_value=True)


class TestOptions(unittest.TestCase):
    def test_opts_object(self):
        assert decode("&amp=", DecodeOpts(is_attribute_value=True)) == "&amp="

    def test_keyword_overrides_opts_object(self):
        opts = DecodeOpts(is_attribute_value=True)
        assert decode("&amp=", opts, is_attribute_value=False) == "&="
        assert opts.is_attribute_value is True

    def test_unknown_option_raises(self):
        with self.assertRaises(TypeError):
            decode("x", isAttributeValue=True)

    def test_wrong_opts_type_raises(self):
        with self.assertRaises(TypeError):
            decode("x", {"strict": True})

    def test_defaults(self):
        opts = DecodeOpts()
        assert opts.is_attribute_value is False
        assert opts.strict is False
        assert repr(opts) == "DecodeOpts(is_attribute_value=False, strict=False)"


class TestStrictModeAndErrorCollection(unittest.TestCase):
    def test_strict_mode_stops_at_first_error(self):
        with self.assertRaises(DisallowedReference) as ctx:
            decode("&amp; &#128; &foo;", strict=True)
        assert ctx.exception.error.position == 6

    def test_strict_errors_share_a_base_class(self):
        with self.assertRaises(StrictModeError):
            decode("&amp", strict=True)

    def test_strict_mode_accepts_valid_input(self):
        assert decode("&lt;p&gt; &#x1D306; &#65;", strict=True) == "<p> \U0001d306 A"

    def test_errors_are_collected_in_order(self):
        errors = []
        assert decode("&amp &#128; &foo;", errors=errors) == "& \u20ac &foo;"
        assert [error.code for error in errors] == [
            "missing-semicolon-after-character-reference",
            "disallowed-character-reference",
            "ambiguous-ampersand",
        ]
        assert [error.position for error in errors] == [0, 5, 12]

    def test_malformed_errors_are_collected_first(self):
        errors = []
        assert decode("&#65 &#z", errors=errors) == "A &#z"
        assert [error.code for error in errors] == [
            "malformed-character-reference",
            "missing-semicolon-after-character-reference",
        ]

    def test_one_reference_can_report_two_errors(self):
        errors = []
        assert decode("&#128", errors=errors) == "\u20ac"
        assert [error.code for error in errors] == [
            "missing-semicolon-after-character-reference",
            "disallowed-character-reference",
        ]

    def test_no_errors_for_clean_input(self):
        errors = []
        decode("&lt;b&gt;", errors=errors)
        assert errors == []


class TestDecoder(unittest.TestCase):
    def test_resolve_single_site(self):
        decoder = Decoder()
        site = ReferenceSite(ReferenceSite.NAMED_UNTERMINATED, 0, 5, "&ampx", "amp", next_char="x")
        assert decoder.resolve(site) == "&x"

    def test_decoder_is_reusable(self):
        decoder = Decoder(DecodeOpts(is_attribute_value=True))
        assert decoder.run("&amp=") == "&amp="
        assert decoder.run("&lt;") == "<"
