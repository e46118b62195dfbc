"""Tests for the profanity content filter."""
import pytest

from app.feedboard.content_filter import ProfanityFilter, clean, has_content


class TestClean:
    def test_masks_listed_words(self):
        assert clean("this is shit") == "this is ****"

    def test_case_insensitive(self):
        assert clean("SHIT happens") == "**** happens"

    def test_common_substitutions(self):
        assert clean("sh1t happens") == "**** happens"

    def test_whole_words_only(self):
        # "class" contains a listed word but is not listed itself
        assert clean("class scrapbook") == "class scrapbook"

    def test_keeps_punctuation(self):
        assert clean("shit, that's slow!") == "****, that's slow!"

    def test_none_is_empty(self):
        assert clean(None) == ""

    def test_clean_text_unchanged(self):
        assert clean("Add dark mode please") == "Add dark mode please"


class TestHasContent:
    @pytest.mark.parametrize("text", ["", "   ", "****", "**** ****", None])
    def test_empty_or_masked_only(self, text):
        assert has_content(text) is False

    def test_real_text(self):
        assert has_content("**** idea") is True

    def test_filtered_only_title_has_no_content(self):
        assert has_content(clean("shit fuck")) is False


class TestProfanityFilter:
    def test_custom_words(self):
        f = ProfanityFilter(words=["spam"])
        assert f.clean("spam and eggs") == "**** and eggs"
        assert f.clean("shit") == "shit"

    def test_add_and_remove_words(self):
        f = ProfanityFilter()
        f.add_words("Roadmap")
        f.remove_words("shit")
        assert f.clean("shit roadmap") == "shit ****"
        assert f.is_profane("our ROADMAP") is True
        assert f.is_profane("shit") is False

    def test_re_adding_removed_word(self):
        f = ProfanityFilter(words=["spam"])
        f.remove_words("spam")
        assert f.clean("spam") == "spam"
        f.add_words("spam")
        assert f.clean("spam") == "****"

    def test_custom_mask_char(self):
        f = ProfanityFilter(mask_char="#")
        assert f.clean("shit") == "####"
        assert f.has_content("####") is False

    def test_mask_char_must_be_single(self):
        with pytest.raises(ValueError):
            ProfanityFilter(mask_char="**")
