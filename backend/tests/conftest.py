from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
BACKEND_PATH = ROOT / "backend"
if str(BACKEND_PATH) not in sys.path:
    sys.path.insert(0, str(BACKEND_PATH))

from elmdoc.config import VARIANTS, ViewerConfig  # noqa: E402

MANIFEST = {
    "type": "application",
    "source-directories": ["src"],
    "elm-version": "0.19.1",
    "dependencies": {"direct": {"elm/core": "1.0.5", "alice/lib": "1.0.0"}, "indirect": {}},
}


@pytest.fixture
def elm_home(tmp_path: Path) -> Path:
    home = tmp_path / "elm-home"
    docs_dir = home / "0.19.1" / "packages" / "alice" / "lib" / "1.0.0"
    docs_dir.mkdir(parents=True)
    (docs_dir / "docs.json").write_text('[{"name":"Lib","comment":""}]')
    (docs_dir / "README.md").write_text("# lib\n")
    (tmp_path / "secret.txt").write_text("outside the cache")
    return home


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    project = tmp_path / "project"
    project.mkdir()
    (project / "elm.json").write_text(json.dumps(MANIFEST, indent=4))
    return project


@pytest.fixture
def config(elm_home: Path, project_dir: Path) -> ViewerConfig:
    return ViewerConfig(
        variant=VARIANTS["0.19.1"],
        elm_home=elm_home,
        manifest_path=project_dir / "elm.json",
        open_browser=False,
    )


@pytest.fixture
def client(config: ViewerConfig):
    from fastapi.testclient import TestClient

    from elmdoc.main import create_app

    with TestClient(create_app(config)) as test_client:
        yield test_client
