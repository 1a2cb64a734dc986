import os

import pytest

from propdoc.config import ExtractConfig
from propdoc.scanner import read_source, relative_path, scan_files


@pytest.fixture
def project(tmp_path):
    files = [
        "src/Button.tsx",
        "src/Button.test.tsx",
        "src/util.js",
        "src/styles.css",
        "node_modules/lib/index.js",
        "dist/bundle.js",
        "generated/Api.ts",
    ]
    for rel in files:
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("export {};\n")
    (tmp_path / ".gitignore").write_text("generated/\n")
    return tmp_path


def rel_paths(files, root):
    return [relative_path(f, str(root)) for f in files]


def test_default_globs(project):
    files = scan_files(ExtractConfig(root=str(project)))
    assert rel_paths(files, project) == ["src/Button.tsx", "src/util.js"]
    assert all(os.path.isabs(f) for f in files)


def test_gitignore_can_be_disabled(project):
    files = scan_files(ExtractConfig(root=str(project), respect_gitignore=False))
    assert rel_paths(files, project) == ["generated/Api.ts", "src/Button.tsx", "src/util.js"]


def test_custom_include_and_exclude(project):
    config = ExtractConfig(root=str(project), include=["src/**"], exclude=["*.css"])
    assert rel_paths(scan_files(config), project) == ["src/Button.test.tsx", "src/Button.tsx", "src/util.js"]


def test_read_source_decodes(tmp_path):
    path = tmp_path / "Label.tsx"
    path.write_bytes("export const Label = () => <span>café</span>;\n".encode("utf-8"))
    assert "<span>" in read_source(str(path))


def test_relative_path_uses_forward_slashes(tmp_path):
    assert relative_path(str(tmp_path / "a" / "b.tsx"), str(tmp_path)) == "a/b.tsx"
