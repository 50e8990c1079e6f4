"""Unit tests for token dictionary construction."""

from types import SimpleNamespace

import pytest

from emoji_chat.dictionary import build_emoji_dictionary, iter_token_lines, read_token_lines
from emoji_chat.packs import PackVariant
from tests.constants import BARE_TOKENS, KOREAN_START

# A variant whose run starts at 'A', so assignments are easy to read.
LETTERS = SimpleNamespace(start_codepoint=ord("A"))


@pytest.mark.unit
class TestBuildEmojiDictionary:
    def test_assigns_consecutive_codepoints(self):
        assert build_emoji_dictionary(LETTERS, BARE_TOKENS) == {"a": "A", "b": "B"}

    def test_kth_token_gets_start_plus_k_minus_one(self):
        tokens = [f":t{n}:" for n in range(50)]
        emojis = build_emoji_dictionary(PackVariant.KOREAN, tokens)
        for k, token in enumerate(tokens, start=1):
            assert emojis[token] == chr(KOREAN_START + k - 1)

    def test_comment_lines_do_not_consume_codepoints(self):
        lines = ["# header", "a", "# another", "b"]
        assert build_emoji_dictionary(LETTERS, lines) == {"a": "A", "b": "B"}

    def test_blank_lines_consume_a_codepoint_but_are_not_tokens(self):
        lines = ["a", "", "b"]
        assert build_emoji_dictionary(LETTERS, lines) == {"a": "A", "b": "C"}

    def test_trailing_blank_line_adds_nothing(self):
        assert build_emoji_dictionary(LETTERS, ["a", "b", ""]) == {"a": "A", "b": "B"}

    def test_line_terminators_are_stripped(self):
        assert build_emoji_dictionary(LETTERS, ["a\r\n", "b\n"]) == {"a": "A", "b": "B"}

    def test_ordered_by_token_not_by_file(self):
        emojis = build_emoji_dictionary(LETTERS, ["zeta", "alpha", "mu"])
        assert list(emojis) == ["alpha", "mu", "zeta"]
        # Assignment still follows file order.
        assert emojis == {"zeta": "A", "alpha": "B", "mu": "C"}

    def test_duplicate_token_keeps_later_glyph(self):
        emojis = build_emoji_dictionary(LETTERS, ["a", "b", "a"])
        assert emojis == {"a": "C", "b": "B"}

    def test_deterministic(self):
        first = build_emoji_dictionary(PackVariant.CHINESE, BARE_TOKENS)
        second = build_emoji_dictionary(PackVariant.CHINESE, BARE_TOKENS)
        assert first == second
        assert list(first.items()) == list(second.items())

    def test_empty_source_gives_empty_dictionary(self):
        assert build_emoji_dictionary(PackVariant.KOREAN, []) == {}

    def test_unresolved_variant_is_refused(self):
        with pytest.raises(ValueError):
            build_emoji_dictionary(PackVariant.UNRESOLVED, BARE_TOKENS)


@pytest.mark.unit
class TestIterTokenLines:
    def test_skips_comments_keeps_blanks(self):
        assert list(iter_token_lines(["# c", "", ":a:\n"])) == ["", ":a:"]

    def test_hash_inside_token_is_kept(self):
        assert list(iter_token_lines([":#hash:"])) == [":#hash:"]


@pytest.mark.unit
class TestReadTokenLines:
    def test_reads_given_path(self, tmp_path):
        path = tmp_path / "list.txt"
        path.write_text("# comment\n:a:\n:b:\n", encoding="utf-8")
        assert read_token_lines(path) == ["# comment", ":a:", ":b:"]

    def test_missing_path_raises_oserror(self, tmp_path):
        with pytest.raises(OSError):
            read_token_lines(tmp_path / "missing.txt")

    def test_packaged_list(self):
        tokens = [token for token in iter_token_lines(read_token_lines()) if token]
        assert tokens[0] == ":100:"
        assert len(tokens) == len(set(tokens))
        assert all(token.startswith(":") and token.endswith(":") for token in tokens)

    def test_packaged_list_first_token_is_ga(self):
        emojis = build_emoji_dictionary(PackVariant.KOREAN, read_token_lines())
        assert emojis[":100:"] == "가"
