import pytest

from sentgen.tokenizer import is_command, tokenize
from sentgen.types import EOS_TOKEN, SOS_TOKEN


def test_tokenize_wraps_words_in_sentinels():
    assert tokenize("the pump failed suddenly") == [
        "<SOS>", "the", "pump", "failed", "suddenly", "<EOS>"
    ]


def test_tokenize_drops_pieces_with_digits():
    assert tokenize("error code 42 detected") == [SOS_TOKEN, "error", "code", "detected", EOS_TOKEN]


@pytest.mark.parametrize("line", ["!reset", "!train now please", "!"])
def test_commands_produce_nothing(line):
    assert is_command(line)
    assert tokenize(line) is None


@pytest.mark.parametrize("line", ["", "   ", "42 7.5 !!", "pump3 failed!", "--- ..."])
def test_lines_without_alphabetic_pieces_produce_nothing(line):
    assert tokenize(line) is None


def test_punctuation_attached_to_a_word_rejects_the_word():
    assert tokenize("stop, then restart") == [SOS_TOKEN, "then", "restart", EOS_TOKEN]


def test_splits_on_any_whitespace():
    assert tokenize("belt\tslips  under load\r") == [SOS_TOKEN, "belt", "slips", "under", "load", EOS_TOKEN]


def test_non_ascii_letters_are_filtered():
    assert tokenize("café motor") == [SOS_TOKEN, "motor", EOS_TOKEN]


def test_bang_inside_line_is_not_a_command():
    assert tokenize("motor ! stops") == [SOS_TOKEN, "motor", "stops", EOS_TOKEN]
