from __future__ import annotations

import pytest

from sfzkit.tokenizer import (
    IndexedNumericOpcode,
    NumericOpcode,
    SectionHeader,
    StringOpcode,
    Unrecognized,
    tokenize,
    tokenize_line,
)


@pytest.mark.parametrize("line", ["", "   ", "// comment", "  // indented comment"])
def test_blank_and_comment_lines_produce_no_token(line: str) -> None:
    assert tokenize_line(line) is None


def test_section_header() -> None:
    assert tokenize_line("<region>") == SectionHeader("region")
    assert tokenize_line("  <group>  ") == SectionHeader("group")


def test_indexed_opcode_wins_over_numeric() -> None:
    assert tokenize_line("amp_velcurve_1=64") == IndexedNumericOpcode("amp_velcurve", 1, 64)


def test_underscored_keys_without_index_stay_numeric() -> None:
    assert tokenize_line("seq_length=4") == NumericOpcode("seq_length", 4)


def test_numeric_values_keep_int_and_float() -> None:
    token = tokenize_line("pitch_keycenter=60")
    assert token == NumericOpcode("pitch_keycenter", 60)
    assert isinstance(token.value, int)

    release = tokenize_line("ampeg_release=0.75")
    assert release == NumericOpcode("ampeg_release", 0.75)
    assert tokenize_line("tune=-15") == NumericOpcode("tune", -15)
    assert tokenize_line("volume=-.5") == NumericOpcode("volume", -0.5)


def test_string_opcode_keeps_rest_of_line() -> None:
    assert tokenize_line("sample=Piano C4 f.wav") == StringOpcode("sample", "Piano C4 f.wav")


def test_malformed_number_falls_back_to_string() -> None:
    assert tokenize_line("pitch_keycenter=1.2.3") == StringOpcode("pitch_keycenter", "1.2.3")


def test_whitespace_around_equals_is_tolerated() -> None:
    assert tokenize_line("lokey = 48") == NumericOpcode("lokey", 48)


@pytest.mark.parametrize("line", ["just some words", "<region", "=60", "key="])
def test_unrecognized_lines_are_reported(line: str) -> None:
    assert tokenize_line(line) == Unrecognized(line)


def test_tokenize_reports_one_based_line_numbers() -> None:
    text = "// header\n<region>\n\nsample=a.wav\n"
    assert list(tokenize(text)) == [
        (2, SectionHeader("region")),
        (4, StringOpcode("sample", "a.wav")),
    ]


def test_tokenize_skips_a_leading_byte_order_mark() -> None:
    assert list(tokenize("\ufeff<region>\n")) == [(1, SectionHeader("region"))]
