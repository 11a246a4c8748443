"""Shared fixtures: temporary settings, a small paperbase, and scripted I/O."""

import io
from pathlib import Path

import pytest
from rich.console import Console

from papersh.commands.base import ShellEnv
from papersh.commands.registry import default_registry
from papersh.config import Settings
from papersh.console import ConsoleUI
from papersh.database.repository import PaperStore
from papersh.errors import ConfirmationDeclined
from papersh.models.paper import Paper
from papersh.services.process_service import ProcessService


class FakeUI(ConsoleUI):
    """Console writing to a buffer, with canned prompt answers."""

    def __init__(self) -> None:
        self.buffer = io.StringIO()
        super().__init__(Console(file=self.buffer, width=200, color_system=None))
        self.confirm_answers: list[bool] = []
        self.select_answers: list[int] = []
        self.ask_answers: dict[str, str] = {}
        self.prompts: list[str] = []

    def confirm(self, prompt: str, default: bool) -> None:
        self.prompts.append(prompt)
        answer = self.confirm_answers.pop(0) if self.confirm_answers else default
        if not answer:
            raise ConfirmationDeclined()

    def select(self, prompt, options) -> int:
        self.prompts.append(prompt)
        return self.select_answers.pop(0) if self.select_answers else 0

    def ask(self, name: str, default: str = "") -> str:
        self.prompts.append(name)
        return self.ask_answers.get(name, default)

    @property
    def output(self) -> str:
        return self.buffer.getvalue()


class FakeProcesses(ProcessService):
    """Records spawn requests instead of starting programs."""

    def __init__(self) -> None:
        self.spawned: list[dict] = []
        self.fail_for: set[str] = set()

    def spawn(self, argv, role, block=False, detach=True) -> bool:
        self.spawned.append({"argv": argv, "role": role, "block": block, "detach": detach})
        return not any(arg in self.fail_for for arg in argv)


@pytest.fixture
def settings(tmp_path: Path):
    Settings.reset()
    settings = Settings(
        config_path=tmp_path / "config.yaml",
        state_path=tmp_path / "data" / "state.yaml",
        history_path=tmp_path / "data" / "history",
        file_dir=tmp_path / "files",
        note_dir=tmp_path / "notes",
    )
    settings.ensure_dirs()
    yield settings
    Settings.reset()


def make_paper(title, authors, venue, year, **kwargs) -> Paper:
    return Paper(title=title, authors=list(authors), venue=venue, year=year, **kwargs)


@pytest.fixture
def papers() -> list[Paper]:
    return [
        make_paper(
            "ShadowTutor: Distributed Partial Distillation for Mobile Video DNN Inference",
            ["Jae-Won Chung", "Jae-Yun Kim", "Soo-Mook Moon"],
            "ICPP",
            "2020",
            nickname="ShadowTutor",
            labels={"video", "mobile"},
        ),
        make_paper(
            "Zeus: Understanding and Optimizing GPU Energy Consumption of DNN Training",
            ["Jie You", "Jae-Won Chung", "Mosharaf Chowdhury"],
            "NSDI",
            "2023",
            nickname="Zeus",
            filepath="zeus.pdf",
            labels={"energy"},
        ),
        make_paper(
            "Oobleck: Resilient Distributed Training of Large Models Using Pipeline Templates",
            ["Insu Jang", "Zhenning Yang", "Zhen Zhang", "Xin Jin", "Mosharaf Chowdhury"],
            "SOSP",
            "2023",
            filepath="oobleck.pdf",
        ),
    ]


@pytest.fixture
def store(papers) -> PaperStore:
    return PaperStore(papers)


@pytest.fixture
def ui() -> FakeUI:
    return FakeUI()


@pytest.fixture
def processes() -> FakeProcesses:
    return FakeProcesses()


@pytest.fixture
def registry():
    return default_registry()


@pytest.fixture
def env(settings, ui, processes, registry) -> ShellEnv:
    return ShellEnv(settings=settings, ui=ui, processes=processes, registry=registry)
