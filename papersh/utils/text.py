"""Text helpers for paper titles, author lists, and file names."""

import html
import re
from pathlib import Path
from typing import Optional

from bs4 import BeautifulSoup

# Characters that are unsafe or awkward in file names on common filesystems
_FILENAME_UNSAFE_RE = re.compile(r"[^\w\-.]+", re.UNICODE)
_AUTHOR_AND_RE = re.compile(r"\s*\band\b\s*|\s*&\s*")

# Inline math as it shows up in arXiv titles, e.g. "$O(n\log n)$"
_MATH_DELIM_RE = re.compile(r"\$\$?(.*?)\$\$?", re.DOTALL)
_LATEX_WRAPPER_RE = re.compile(
    r"\\(?:text|mathrm|mathbf|mathit|mathcal|textit|emph)\s*\{([^}]*)\}"
)
_LATEX_SYMBOLS = {
    r"\alpha": "α", r"\beta": "β", r"\gamma": "γ", r"\delta": "δ",
    r"\epsilon": "ε", r"\lambda": "λ", r"\mu": "μ", r"\pi": "π",
    r"\sigma": "σ", r"\tau": "τ", r"\phi": "φ", r"\omega": "ω",
    r"\times": "×", r"\leq": "≤", r"\geq": "≥", r"\approx": "≈",
    r"\infty": "∞", r"\rightarrow": "→", r"\to": "→",
}
_LATEX_SYMBOL_RE = re.compile(
    "(?:"
    + "|".join(re.escape(k) for k in sorted(_LATEX_SYMBOLS, key=len, reverse=True))
    + r")(?![a-zA-Z])"
)


def latex_to_plain(text: str) -> str:
    """Best-effort conversion of inline LaTeX in a title to plain Unicode."""
    text = _MATH_DELIM_RE.sub(r"\1", text)
    text = _LATEX_WRAPPER_RE.sub(r"\1", text)
    text = _LATEX_SYMBOL_RE.sub(lambda m: _LATEX_SYMBOLS[m.group()], text)
    # Drop any remaining control words but keep their arguments
    text = re.sub(r"\\([a-zA-Z]+)\s*", r"\1 ", text)
    text = text.replace("{", "").replace("}", "")
    return " ".join(text.split())


def clean_title(text: Optional[str]) -> str:
    """Clean a scraped title.

    Strips HTML tags, decodes entities, converts inline LaTeX and
    normalizes whitespace.

    Args:
        text: Raw title string

    Returns:
        Cleaned title string, or "(no title)" if nothing is left
    """
    if not text:
        return "(no title)"

    if "<" in text:
        text = BeautifulSoup(text, "html.parser").get_text(" ")
    text = html.unescape(text)
    text = latex_to_plain(text)

    return text.strip() or "(no title)"


def split_authors(text: str) -> list[str]:
    """Split a comma-separated author string, also accepting "and"/"&".

    >>> split_authors("Jae-Won Chung, Chaehyun Jeong and Alexander Li")
    ['Jae-Won Chung', 'Chaehyun Jeong', 'Alexander Li']
    """
    text = _AUTHOR_AND_RE.sub(",", text)
    return [name.strip() for name in text.split(",") if name.strip()]


def as_filename(title: str) -> str:
    """Turn a paper title into a file name stem.

    Whitespace becomes underscores and everything else that is not a word
    character, dash or dot is dropped.
    """
    stem = "_".join(title.split())
    stem = _FILENAME_UNSAFE_RE.sub("", stem).strip("._")
    return stem or "untitled"


def expand_path(path: str, base_dir: Optional[Path] = None) -> Path:
    """Expand ``~`` and resolve relative paths against *base_dir*."""
    expanded = Path(path).expanduser()
    if not expanded.is_absolute() and base_dir is not None:
        expanded = Path(base_dir).expanduser() / expanded
    return expanded
