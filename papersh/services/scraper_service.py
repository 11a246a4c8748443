"""Import paper metadata (and the PDF) from arXiv, USENIX, or a PDF URL."""

import hashlib
import logging
import re
from pathlib import Path
from typing import Callable, Optional, Union
from urllib.parse import urljoin, urlparse

import requests
from bs4 import BeautifulSoup, NavigableString
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from papersh import __version__
from papersh.console import ConsoleUI
from papersh.errors import (
    CurlCannotFindAuthor,
    CurlCannotFindTitle,
    CurlFetchFailed,
    CurlFileExists,
    CurlInvalidSourceUrl,
    CurlUnknownSource,
    PaperMissingFields,
)
from papersh.models.paper import Paper
from papersh.utils.text import as_filename, clean_title, split_authors

logger = logging.getLogger(__name__)

USER_AGENT = f"papersh/{__version__}"
PAGE_TIMEOUT = 30
PDF_TIMEOUT = 90

# New-style arXiv identifiers: YYMM.NNNN (until 2014) or YYMM.NNNNN, optional version
ARXIV_ID_RE = re.compile(r"^(\d{2})(\d{2})\.(\d{4,5})(v\d+)?$")
# USENIX conference slugs: "atc21", "osdi22", "usenixsecurity21"
USENIX_CONF_RE = re.compile(r"^(?P<name>[a-z][a-z\-]*?)(?P<yy>\d{2})$", re.IGNORECASE)

TitleSource = Union[str, Callable[[Path], str]]


# ---------------------------------------------------------------------------
# URL and page parsers (no network)
# ---------------------------------------------------------------------------

def parse_arxiv_url(url: str) -> tuple[str, str]:
    """Validate an arXiv abstract URL.

    Returns:
        Tuple of (arxiv id, four-digit year)

    Raises:
        CurlInvalidSourceUrl: If *url* is not ``https://arxiv.org/abs/<id>``
    """
    parsed = urlparse(url)
    segments = [s for s in parsed.path.split("/") if s]
    host = parsed.hostname or ""
    if (
        parsed.scheme not in ("http", "https")
        or not host.endswith("arxiv.org")
        or len(segments) != 2
        or segments[0] != "abs"
    ):
        raise CurlInvalidSourceUrl(url)
    match = ARXIV_ID_RE.match(segments[1])
    if not match:
        raise CurlInvalidSourceUrl(url)
    return segments[1], f"20{match.group(1)}"


def parse_arxiv_page(page: str) -> tuple[str, list[str]]:
    """Extract (title, authors) from an arXiv abstract page."""
    soup = BeautifulSoup(page, "html.parser")

    title_el = soup.select_one("h1.title") or soup.find(class_="title")
    if title_el is None:
        raise CurlCannotFindTitle("No class named 'title' found.")
    for descriptor in title_el.find_all(class_="descriptor"):
        descriptor.decompose()
    title = clean_title(title_el.get_text(" "))
    if title == "(no title)":
        raise CurlCannotFindTitle("Class 'title' has no text.")

    authors_el = soup.find(class_="authors")
    if authors_el is None:
        raise CurlCannotFindAuthor("No class named 'authors' found.")
    authors = [a.get_text(strip=True) for a in authors_el.find_all("a")]
    authors = [a for a in authors if a]
    if not authors:
        raise CurlCannotFindAuthor("No author links found.")

    return title, authors


def parse_usenix_url(url: str) -> tuple[str, str]:
    """Validate a USENIX presentation URL.

    ``https://www.usenix.org/conference/atc21/presentation/lee`` gives
    venue ``ATC`` and year ``2021``; ``usenixsecurity21`` gives ``SECURITY``.

    Returns:
        Tuple of (venue, four-digit year)

    Raises:
        CurlInvalidSourceUrl: If the URL does not have that shape
    """
    parsed = urlparse(url)
    segments = [s for s in parsed.path.split("/") if s]
    host = parsed.hostname or ""
    if (
        parsed.scheme not in ("http", "https")
        or not host.endswith("usenix.org")
        or len(segments) != 4
        or segments[0] != "conference"
        or segments[2] != "presentation"
    ):
        raise CurlInvalidSourceUrl(url)

    match = USENIX_CONF_RE.match(segments[1])
    if not match:
        raise CurlInvalidSourceUrl(url)
    name = match.group("name")
    if name.lower().startswith("usenix") and len(name) > len("usenix"):
        name = name[len("usenix"):]
    return name.upper(), f"20{match.group('yy')}"


def parse_usenix_page(page: str, base_url: str) -> tuple[str, list[str], list[tuple[str, str]]]:
    """Extract (title, authors, pdf links) from a USENIX presentation page.

    PDF links are ``(label, absolute url)`` pairs; some presentations have
    both a pre-print and a final version.
    """
    soup = BeautifulSoup(page, "html.parser")

    title_el = soup.find(id="page-title")
    if title_el is None:
        raise CurlCannotFindTitle("No element with id 'page-title' found.")
    title = clean_title(title_el.get_text(" "))

    people = soup.find(class_="field-name-field-paper-people-text")
    if people is None:
        raise CurlCannotFindAuthor(
            "No class named 'field-name-field-paper-people-text' found."
        )
    paragraph = people.find("p")
    if paragraph is None:
        raise CurlCannotFindAuthor("Cannot find 'p' tag inside author element.")
    # Affiliations are in <em>; author names are the bare text nodes.
    authors: list[str] = []
    for child in paragraph.children:
        if isinstance(child, NavigableString):
            authors.extend(split_authors(str(child).replace(";", ",")))
    if not authors:
        raise CurlCannotFindAuthor("Author element has no names.")

    files = []
    for file_el in soup.find_all(class_="file"):
        link = file_el.find("a", href=True)
        if link is not None:
            files.append((link.get_text(strip=True), urljoin(base_url, link["href"])))

    return title, authors, files


def read_pdf_metadata(path: Path) -> dict[str, str]:
    """Return the PDF document-info entries we care about ("" when absent)."""
    try:
        info = PdfReader(path).metadata or {}
    except (PdfReadError, OSError) as e:
        logger.warning("Could not read PDF metadata from %s: %s", path, e)
        info = {}
    values = {}
    for key in ("Title", "Author", "Venue", "Year"):
        value = info.get(f"/{key}")
        values[key] = str(value).strip().strip('"') if value else ""
    return values


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class ScraperService:
    """Service that fetches paper metadata and downloads the PDF."""

    def __init__(
        self,
        file_dir: Path,
        ui: ConsoleUI,
        session: Optional[requests.Session] = None,
    ):
        """Initialize scraper.

        Args:
            file_dir: Directory where downloaded PDFs are stored
            ui: Console used to ask the user when metadata is ambiguous
            session: HTTP session (a new one with our User-Agent if omitted)
        """
        self.file_dir = Path(file_dir).expanduser()
        self.ui = ui
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = USER_AGENT
        self.session = session

    def fetch(self, url: str) -> Paper:
        """Build a paper from *url*, routing on the kind of source.

        Raises:
            CurlUnknownSource: If the URL is not arXiv, USENIX, or a PDF
        """
        if "arxiv" in url:
            return self.from_arxiv(url)
        if "usenix" in url:
            return self.from_usenix(url)
        if "pdf" in url:
            return self.from_pdf(url)
        raise CurlUnknownSource(url)

    def from_arxiv(self, url: str) -> Paper:
        arxiv_id, year = parse_arxiv_url(url)
        title, authors = parse_arxiv_page(self._get(url, PAGE_TIMEOUT).text)
        filepath = self.download_pdf(f"https://arxiv.org/pdf/{arxiv_id}.pdf", title)
        return Paper(title=title, authors=authors, venue="arXiv", year=year, filepath=filepath)

    def from_usenix(self, url: str) -> Paper:
        venue, year = parse_usenix_url(url)
        title, authors, files = parse_usenix_page(self._get(url, PAGE_TIMEOUT).text, url)

        filepath = None
        if not files:
            self.ui.info("Paper PDF not found. Skipping PDF download.")
        else:
            choice = 0
            if len(files) > 1:
                choice = self.ui.select("Multiple files found:", [label for label, _ in files])
            filepath = self.download_pdf(files[choice][1], title)

        return Paper(title=title, authors=authors, venue=venue, year=year, filepath=filepath)

    def from_pdf(self, url: str) -> Paper:
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise CurlInvalidSourceUrl(url)

        metadata: dict[str, str] = {}

        # Runs before the download is kept; raising discards the file.
        def title_from_pdf(path: Path) -> str:
            metadata.update(read_pdf_metadata(path))
            metadata["Title"] = self.ui.ask("title", metadata["Title"]) or path.stem
            metadata["Author"] = self.ui.ask("authors", metadata["Author"])
            metadata["Venue"] = self.ui.ask("venue", metadata["Venue"])
            metadata["Year"] = self.ui.ask("year", metadata["Year"])
            missing = [
                f"{name}({keyword})"
                for name, keyword, key in (("venue", "at", "Venue"), ("year", "in", "Year"))
                if not metadata[key]
            ]
            if missing:
                raise PaperMissingFields(missing)
            return metadata["Title"]

        filepath = self.download_pdf(url, title_from_pdf)
        return Paper(
            title=metadata["Title"],
            authors=split_authors(metadata["Author"]) or ["Unknown"],
            venue=metadata["Venue"],
            year=metadata["Year"],
            filepath=filepath,
        )

    def download_pdf(self, url: str, title: TitleSource) -> str:
        """Download *url* into the file directory, named after the title.

        A symlink named by the MD5 digest of the URL points at the file, so
        downloading the same URL twice is detected.

        Args:
            url: PDF location
            title: The title, or a callable that derives it from the
                downloaded file

        Returns:
            File name relative to the file directory

        Raises:
            CurlFileExists: If the URL, or a file with the same title, was
                already downloaded
        """
        self.file_dir.mkdir(parents=True, exist_ok=True)
        digest = hashlib.md5(url.encode("utf-8")).hexdigest()
        digest_path = self.file_dir / f"{digest}.pdf"
        if digest_path.is_symlink() or digest_path.exists():
            raise CurlFileExists(digest_path.resolve())

        logger.info("Downloading %s", url)
        response = self._get(url, PDF_TIMEOUT)
        with open(digest_path, "wb") as f:
            f.write(response.content)

        if callable(title):
            try:
                title = title(digest_path)
            except BaseException:
                # Forget the URL too; no paper was added.
                digest_path.unlink(missing_ok=True)
                raise
        filename = f"{as_filename(title)}.pdf"
        readable_path = self.file_dir / filename

        if readable_path.exists():
            digest_path.unlink()
            digest_path.symlink_to(readable_path.name)
            raise CurlFileExists(readable_path)

        digest_path.rename(readable_path)
        digest_path.symlink_to(readable_path.name)
        logger.info("Saved %s", readable_path)
        return filename

    def _get(self, url: str, timeout: int) -> requests.Response:
        try:
            response = self.session.get(url, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise CurlFetchFailed(url, e) from e
        return response
