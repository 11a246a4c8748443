"""Notes export: renders paper notes into a single HTML "book"."""

import html
import logging
from pathlib import Path
from typing import Sequence

import marko

from papersh.errors import NoteError
from papersh.models.paper import Paper

logger = logging.getLogger(__name__)

_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ max-width: 50em; margin: 2em auto; font-family: sans-serif; line-height: 1.5; }}
nav li {{ margin: 0.2em 0; }}
section {{ border-top: 1px solid #ccc; margin-top: 2em; }}
.meta {{ color: #666; }}
</style>
<script src="https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js" async></script>
</head>
<body>
<h1>{title}</h1>
<nav><ol>
{toc}
</ol></nav>
{chapters}
</body>
</html>
"""


class NotebookExporter:
    """Service for exporting paper notes to one HTML page."""

    def __init__(self, book_dir: Path, title: str = "Paper Notes"):
        """Initialize exporter.

        Args:
            book_dir: Directory to write ``index.html`` into
            title: Book title
        """
        self.book_dir = Path(book_dir)
        self.title = title

    def export(self, notes: Sequence[tuple[Paper, Path]]) -> Path:
        """Render each note as a numbered chapter.

        Args:
            notes: ``(paper, note file)`` pairs, in chapter order

        Returns:
            Path to the created ``index.html``

        Raises:
            NoteError: A note cannot be read, or the page cannot be written
        """
        filepath = self.book_dir / "index.html"

        toc = []
        chapters = []
        for number, (paper, note) in enumerate(notes, start=1):
            anchor = f"chapter-{number}"
            title = html.escape(paper.title)
            toc.append(f'<li><a href="#{anchor}">{title}</a></li>')

            try:
                with open(note, "r", encoding="utf-8") as f:
                    text = f.read()
            except (OSError, UnicodeDecodeError) as e:
                raise NoteError(note, e) from e
            body = marko.convert(text)
            meta = html.escape(f"{', '.join(paper.authors)} · {paper.venue} {paper.year}")
            chapters.append(
                f'<section id="{anchor}">\n'
                f"<h2>{number}. {title}</h2>\n"
                f'<p class="meta">{meta}</p>\n'
                f"{body}</section>"
            )

        page = _PAGE.format(
            title=html.escape(self.title),
            toc="\n".join(toc),
            chapters="\n".join(chapters),
        )
        # Write to file (overwrites if exists)
        try:
            self.book_dir.mkdir(parents=True, exist_ok=True)
            with open(filepath, "w", encoding="utf-8") as f:
                f.write(page)
        except OSError as e:
            raise NoteError(filepath, e) from e

        logger.info("Wrote %d notes to %s", len(chapters), filepath)
        return filepath
