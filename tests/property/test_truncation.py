"""
Property-based tests for description truncation.

Property 1: Truncated text never exceeds the limit plus the marker
Property 2: Text that fits is returned unchanged
"""

from hypothesis import given, strategies as st

from pr_review_bot.llm.prompts import truncate, TRUNCATION_MARKER


class TestTruncation:
    """Property tests for truncate()."""

    @given(text=st.text(max_size=500), max_chars=st.integers(min_value=1, max_value=600))
    def test_length_bound(self, text, max_chars):
        """
        Property: The result is at most max_chars plus the marker.

        Given: Any text and a positive limit
        When: The text is truncated
        Then: The result length is bounded and keeps the original prefix
        """
        result = truncate(text, max_chars)

        assert len(result) <= max_chars + len(TRUNCATION_MARKER)
        assert result.startswith(text[:max_chars])

    @given(text=st.text(max_size=200), extra=st.integers(min_value=0, max_value=100))
    def test_fitting_text_unchanged(self, text, extra):
        """
        Property: Text within the limit passes through untouched.
        """
        assert truncate(text, len(text) + extra) == text

    @given(text=st.text(min_size=2, max_size=300), data=st.data())
    def test_marker_appended_when_cut(self, text, data):
        """
        Property: Cutting keeps exactly max_chars characters and appends the marker.
        """
        max_chars = data.draw(st.integers(min_value=1, max_value=len(text) - 1))

        result = truncate(text, max_chars)

        assert result == text[:max_chars] + TRUNCATION_MARKER

    @given(text=st.text(max_size=100), max_chars=st.integers(max_value=0))
    def test_non_positive_limit_yields_empty(self, text, max_chars):
        assert truncate(text, max_chars) == ""
