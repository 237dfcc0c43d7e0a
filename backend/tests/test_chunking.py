"""Tests for size estimation and the boundary-aware chunk splitter."""

import pytest

from polai.analysis.chunking import chunk_char_budget, estimate_tokens, split_text


def _policy_like_text(length: int) -> str:
    sentence = "We process account data for support purposes.\nSection ends here. "
    return (sentence * (length // len(sentence) + 1))[:length]


class TestEstimateTokens:
    """Tests for the four-characters-per-token estimate."""

    def test_empty_text_is_zero_tokens(self) -> None:
        assert estimate_tokens("") == 0

    def test_rounds_partial_tokens_up(self) -> None:
        assert estimate_tokens("abcde") == 2

    def test_single_call_boundary(self) -> None:
        """48000 characters fit the default 12000-token budget, 48004 do not."""
        assert estimate_tokens("a" * 48000) == 12000
        assert estimate_tokens("a" * 48004) == 12001


class TestChunkCharBudget:
    def test_uses_three_and_a_half_chars_per_token(self) -> None:
        assert chunk_char_budget(12000) == 42000


class TestSplitText:
    """Tests for split_text."""

    def test_empty_text_yields_no_chunks(self) -> None:
        assert split_text("", 100) == []

    def test_text_within_budget_is_single_chunk(self) -> None:
        text = _policy_like_text(100)
        assert split_text(text, 100) == [text]
        assert split_text(text, 1000) == [text]

    @pytest.mark.parametrize("budget", [1, 7, 50, 333, 4096])
    def test_chunks_concatenate_back_to_input(self, budget: int) -> None:
        text = _policy_like_text(5000)
        assert "".join(split_text(text, budget)) == text

    @pytest.mark.parametrize("budget", [7, 50, 333])
    def test_chunks_never_exceed_budget(self, budget: int) -> None:
        chunks = split_text(_policy_like_text(3000), budget)
        assert all(0 < len(chunk) <= budget for chunk in chunks)

    def test_breaks_after_period_in_last_thirty_percent(self) -> None:
        text = "a" * 80 + "." + "b" * 40
        assert split_text(text, 100) == ["a" * 80 + ".", "b" * 40]

    def test_breaks_after_newline_in_last_thirty_percent(self) -> None:
        text = "a" * 90 + "\n" + "b" * 40
        assert split_text(text, 100) == ["a" * 90 + "\n", "b" * 40]

    def test_prefers_the_later_of_period_and_newline(self) -> None:
        text = "a" * 75 + "." + "a" * 10 + "\n" + "b" * 50
        chunks = split_text(text, 100)
        assert chunks[0] == text[:87]
        assert chunks[0].endswith("\n")

    def test_ignores_boundary_before_seventy_percent(self) -> None:
        """A boundary too early in the window would leave a tiny chunk, so cut raw."""
        text = "a" * 50 + "." + "b" * 100
        chunks = split_text(text, 100)
        assert chunks[0] == text[:100]
        assert "".join(chunks) == text

    def test_cuts_at_raw_budget_without_boundaries(self) -> None:
        text = "x" * 250
        assert split_text(text, 100) == ["x" * 100, "x" * 100, "x" * 50]

    def test_rejects_non_positive_budget(self) -> None:
        with pytest.raises(ValueError):
            split_text("text", 0)
