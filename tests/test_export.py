"""Tests for project ZIP export."""

import io
import json
import zipfile
from datetime import date

import pytest

from app_builder.models import ProjectFile
from app_builder.project.export import (
    build_project_zip,
    export_filename,
    generate_package_json,
    generate_readme,
    slugify,
)


def read_zip(data: bytes) -> dict[str, str]:
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        return {name: archive.read(name).decode("utf-8") for name in archive.namelist()}


def test_slugify():
    assert slugify("My Todo App!") == "my-todo-app-"
    assert export_filename("My Todo App", 1700000000000) == "my-todo-app-1700000000000.zip"


def test_generate_readme():
    readme = generate_readme("Todo App", None, "React", generated_on=date(2024, 5, 1))
    assert readme.startswith("# Todo App\n\nA project generated with AI App Builder.")
    assert "This project uses: **React**" in readme
    assert readme.rstrip().endswith("Generated with AI App Builder on 2024-05-01")


@pytest.mark.parametrize(
    "framework,script,dependency",
    [
        ("Next.js", "next dev", "next"),
        ("React + Vite", "vite", "react"),
        ("Express", "nodemon index.js", "express"),
    ],
)
def test_generate_package_json_per_framework(framework, script, dependency):
    pkg = json.loads(generate_package_json("Todo App", "desc", framework))
    assert pkg["name"] == "todo-app"
    assert pkg["description"] == "desc"
    assert pkg["private"] is True
    assert pkg["scripts"]["dev"] == script
    assert dependency in pkg["dependencies"]


def test_generate_package_json_unknown_framework():
    pkg = json.loads(generate_package_json("Todo App"))
    assert pkg["scripts"] == {"start": "node index.js"}
    assert pkg["dependencies"] == {}
    assert pkg["description"] == "Todo App - Generated with AI App Builder"


def test_zip_adds_readme_and_package_json_for_js_projects():
    files = [ProjectFile(path="src/App.tsx", content="export default 1;\n")]

    contents = read_zip(build_project_zip(files, "Todo App", framework="React"))

    assert set(contents) == {"src/App.tsx", "README.md", "package.json"}
    assert contents["src/App.tsx"] == "export default 1;\n"
    assert json.loads(contents["package.json"])["scripts"]["dev"] == "vite"


def test_zip_keeps_existing_readme_and_package_json():
    files = [
        ProjectFile(path="readme.md", content="mine"),
        ProjectFile(path="package.json", content="{}"),
        ProjectFile(path="index.js", content=""),
    ]
    contents = read_zip(build_project_zip(files, "Todo App"))
    assert set(contents) == {"readme.md", "package.json", "index.js"}
    assert contents["package.json"] == "{}"


def test_zip_without_js_files_has_no_package_json():
    files = [ProjectFile(path="main.py", content="print('hi')\n")]
    contents = read_zip(build_project_zip(files, "Script"))
    assert set(contents) == {"main.py", "README.md"}


def test_zip_is_deflated():
    files = [ProjectFile(path="big.txt", content="a" * 10_000)]
    with zipfile.ZipFile(io.BytesIO(build_project_zip(files, "Big"))) as archive:
        info = archive.getinfo("big.txt")
    assert info.compress_type == zipfile.ZIP_DEFLATED
    assert info.compress_size < info.file_size
