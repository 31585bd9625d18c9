from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional


_SMART_QUOTES = {
    "“": '"',
    "”": '"',
    "‘": "'",
    "’": "'",
}


@dataclass(frozen=True)
class NormalizationConfig:
    """
    How verse text is folded before it is stored in, or matched against, the
    search column. KJV exports carry pilcrows and bracketed italics markers
    that should not break substring matches.
    """

    strip_brackets: bool = True
    strip_pilcrow: bool = True
    standardize_quotes: bool = True
    collapse_whitespace: bool = True
    casefold: bool = True


class Normalizer:
    def __init__(self, cfg: Optional[NormalizationConfig] = None) -> None:
        self.cfg = cfg or NormalizationConfig()

    def normalize(self, text: str) -> str:
        out = text
        if self.cfg.standardize_quotes:
            out = "".join(_SMART_QUOTES.get(ch, ch) for ch in out)
        if self.cfg.strip_pilcrow:
            out = out.replace("¶", "")
        if self.cfg.strip_brackets:
            out = re.sub(r"[\[\]]", "", out)
        if self.cfg.collapse_whitespace:
            out = re.sub(r"\s+", " ", out).strip()
        if self.cfg.casefold:
            out = out.casefold()
        return out

    def search_text(self, verse_text: str) -> str:
        """Value stored in the search column for a verse."""
        return self.normalize(verse_text)

    def query(self, text: str) -> str:
        """Normalise a user query the same way verse text was indexed."""
        return self.normalize(text)
