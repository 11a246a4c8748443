"""``curl``: add a paper from the web."""

from papersh.commands.base import Command, CommandInput, CommandOutput, Selection, ShellEnv
from papersh.database.repository import PaperStore
from papersh.errors import CurlNoSource
from papersh.services.scraper_service import ScraperService


def curl(cmd_input: CommandInput, store: PaperStore, env: ShellEnv) -> CommandOutput:
    if len(cmd_input.args) != 2:
        raise CurlNoSource()

    if env.scraper is None:
        env.scraper = ScraperService(env.settings.file_dir, env.ui)
    paper = env.scraper.fetch(cmd_input.args[1])
    return Selection((store.add(paper),))


COMMANDS = [
    Command(
        name="curl",
        execute=curl,
        summary="Add a paper from arXiv, USENIX, or a PDF link.",
        usage="""\
Usage: curl <url>

Fetch paper metadata, download the PDF into the file directory, and add
the paper. Supported sources:

  arXiv    https://arxiv.org/abs/2202.05917
  USENIX   https://www.usenix.org/conference/osdi22/presentation/chung
  PDF      any http(s) link containing "pdf"; you are asked to confirm
           the title, authors, venue, and year read from the file
""",
    ),
]
