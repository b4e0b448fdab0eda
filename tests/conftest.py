"""Shared pytest setup for lprojfill.

Hypothesis runs 200 examples per property locally and a derandomized 50 when
``CI=true``; ``HYPOTHESIS_PROFILE`` picks a profile explicitly. Property tests
marked ``fuzz`` hammer the parser with random bytes and only run under
``pytest -m fuzz``.

Fixtures:
    make_project - writes an lproj project tree under tmp_path
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from typing import TypeAlias
from pathlib import Path

import pytest
from hypothesis import settings

from lprojfill.project import Project

settings.register_profile("dev", max_examples=200)
settings.register_profile("ci", max_examples=50, derandomize=True, print_blob=True)
settings.load_profile(
    os.environ.get("HYPOTHESIS_PROFILE")
    or ("ci" if os.environ.get("CI") == "true" else "dev")
)


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "fuzz: random-bytes parser runs, opt in with -m fuzz")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if "fuzz" in str(config.getoption("-m", default="")):
        return
    skip_fuzz = pytest.mark.skip(reason="opt in with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


ProjectLayout: TypeAlias = Mapping[str, Mapping[str, str | bytes]]
"""locale -> {file name -> content}; str content is written as UTF-8."""


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[[ProjectLayout], Project]:
    """Return a factory writing ``<locale>.lproj/<file>`` trees under tmp_path.

    Example:
        project = make_project({"en": {"Localizable.strings": '"A" = "A";'}})
    """

    def _make(layout: ProjectLayout) -> Project:
        root = tmp_path / "proj"
        root.mkdir(exist_ok=True)
        for locale, files in layout.items():
            locale_dir = root / f"{locale}.lproj"
            locale_dir.mkdir(exist_ok=True)
            for name, content in files.items():
                path = locale_dir / name
                if isinstance(content, bytes):
                    path.write_bytes(content)
                else:
                    path.write_text(content, encoding="utf-8")
        return Project(root)

    return _make
