"""Service layer."""

from papersh.services.export_service import NotebookExporter
from papersh.services.process_service import ProcessService, build_command
from papersh.services.scraper_service import ScraperService

__all__ = [
    "NotebookExporter",
    "ProcessService",
    "ScraperService",
    "build_command",
]
