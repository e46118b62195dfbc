"""
Profanity masking for free-text fields (post title and description).

Backed by better-profanity's wordlist, which also catches common
character substitutions ("sh1t"). Each matched word is replaced with
four mask characters.
"""
from __future__ import annotations

from collections.abc import Iterable

from better_profanity import Profanity

from app.feedboard.constants import MASK_CHAR


class ProfanityFilter:
    def __init__(self, words: Iterable[str] | None = None, *, mask_char: str = MASK_CHAR) -> None:
        if len(mask_char) != 1:
            raise ValueError("mask_char must be a single character")
        self.mask_char = mask_char
        # None means the library's default wordlist
        self._base_words = [w.lower() for w in words] if words is not None else None
        self._extra: set[str] = set()
        self._allowed: set[str] = set()
        self._profanity = Profanity(self._base_words)

    def _reload(self) -> None:
        self._profanity.load_censor_words(
            custom_words=self._base_words,
            whitelist_words=sorted(self._allowed) or None,
        )
        extra = sorted(self._extra - self._allowed)
        if extra:
            self._profanity.add_censor_words(extra)

    def add_words(self, *words: str) -> None:
        new = {w.strip().lower() for w in words if w and w.strip()}
        self._allowed -= new
        self._extra |= new
        self._reload()

    def remove_words(self, *words: str) -> None:
        self._allowed |= {w.strip().lower() for w in words if w and w.strip()}
        self._reload()

    def is_profane(self, text: str | None) -> bool:
        return bool(text) and self._profanity.contains_profanity(text)

    def clean(self, text: str | None) -> str:
        if not text:
            return ""
        return self._profanity.censor(text, censor_char=self.mask_char)

    def has_content(self, text: str | None) -> bool:
        """True when something other than mask characters and whitespace remains."""
        return bool((text or "").replace(self.mask_char, "").strip())


_default_filter = ProfanityFilter()


def clean(text: str | None) -> str:
    return _default_filter.clean(text)


def has_content(text: str | None) -> bool:
    return _default_filter.has_content(text)
