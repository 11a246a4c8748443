"""Commands that hand papers and notes to external programs."""

import logging

from papersh.commands.base import (
    Command,
    CommandInput,
    CommandOutput,
    NoOutput,
    Selection,
    ShellEnv,
)
from papersh.commands.navigation import piped_or_listed
from papersh.database.repository import PaperStore
from papersh.services.export_service import NotebookExporter
from papersh.services.process_service import build_command

logger = logging.getLogger(__name__)


def open_papers(cmd_input: CommandInput, store: PaperStore, env: ShellEnv) -> CommandOutput:
    """Open paper files with the configured viewer.

    Papers without a file are skipped. The output lists only the papers
    whose viewer actually started.
    """
    selection = piped_or_listed(cmd_input, store, env)
    file_dir = env.settings.file_dir

    indices = []
    files = []
    for index in selection.indices:
        path = store[index].abs_filepath(file_dir)
        if path is not None:
            indices.append(index)
            files.append(path)

    skipped = len(selection) - len(files)
    if skipped:
        env.ui.info(
            f"{len(selection)} papers selected. Skipping {skipped} without file paths."
        )
    if len(files) > 1:
        env.ui.confirm(f"Open {len(files)} papers?", default=True)

    opened = env.processes.open_files(
        env.settings.viewer_command, files, "viewer", env.settings.viewer_batch
    )
    return Selection(tuple(i for i, ok in zip(indices, opened) if ok))


def ed(cmd_input: CommandInput, store: PaperStore, env: ShellEnv) -> CommandOutput:
    selection = piped_or_listed(cmd_input, store, env)
    if len(selection) > 1:
        env.ui.confirm(f"Open notes for {len(selection)} papers?", default=True)

    note_dir = env.settings.note_dir
    notes = [store[index].ensure_note(note_dir) for index in selection.indices]

    # The editor shares our terminal, so it is never detached.
    batch = env.settings.editor_batch
    env.processes.open_files(
        env.settings.editor_command, notes, "editor", batch, block=batch, detach=False
    )
    return NoOutput()


def printf(cmd_input: CommandInput, store: PaperStore, env: ShellEnv) -> CommandOutput:
    """Collect existing notes into one HTML page and open it in the browser."""
    selection = piped_or_listed(cmd_input, store, env)
    note_dir = env.settings.note_dir

    included = []
    notes = []
    for index in selection.indices:
        paper = store[index]
        path = paper.abs_notepath(note_dir)
        if path is None or not path.exists():
            logger.debug("No note for '%s'", paper.title)
            continue
        included.append(index)
        notes.append((paper, path))

    if not notes:
        env.ui.info("None of the selected papers has notes.")
        return NoOutput()

    book = NotebookExporter(note_dir / "book").export(notes)
    if not env.processes.spawn(build_command(env.settings.browser_command, [book]), "browser"):
        return NoOutput()
    return Selection(tuple(included))


COMMANDS = [
    Command(
        name="open",
        execute=open_papers,
        summary="Open paper files with the viewer.",
        usage="""\
Usage:
1) alone: open [filter]
2) pipe:  [paper list] | open

Open the paper files with the configured viewer (`output.viewer_command`).
Papers without a file path are skipped. Asks for confirmation when more
than one file would be opened. Outputs the papers that were opened.
""",
    ),
    Command(
        name="ed",
        execute=ed,
        summary="Edit paper notes.",
        usage="""\
Usage:
1) alone: ed [filter]
2) pipe:  [paper list] | ed

Open the markdown notes of the papers with the configured editor
(`output.editor_command`). Missing notes are created in the note
directory, named after the paper title.
""",
    ),
    Command(
        name="printf",
        execute=printf,
        summary="Build an HTML book of notes and open it.",
        usage="""\
Usage:
1) alone: printf [filter]
2) pipe:  [paper list] | printf

Render the notes of the papers into `<note dir>/book/index.html`, one
chapter per paper, and open it with the configured browser
(`output.browser_command`). Papers without notes are left out.
""",
    ),
]
