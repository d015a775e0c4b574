import importlib
import sys
import uuid

import pytest


@pytest.fixture
def load_generated(tmp_path, monkeypatch):
    """Write generated files as a package under tmp_path and import a module of it."""
    packages = []

    def _load(files: dict[str, str], module: str):
        package = f"genclient_{uuid.uuid4().hex[:8]}"
        pkg_dir = tmp_path / package
        pkg_dir.mkdir()
        for filename, content in files.items():
            (pkg_dir / filename).write_text(content, encoding="utf-8")
        packages.append(package)
        monkeypatch.syspath_prepend(str(tmp_path))
        importlib.invalidate_caches()
        return importlib.import_module(f"{package}.{module}")

    yield _load

    for name in list(sys.modules):
        if name.split(".")[0] in packages:
            del sys.modules[name]
