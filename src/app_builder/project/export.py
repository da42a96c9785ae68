"""ZIP export of a project's files."""

import io
import json
import re
import zipfile
from datetime import date
from typing import Iterable, Optional

from app_builder.models import ProjectFile

JS_EXTENSIONS = (".js", ".ts", ".jsx", ".tsx")
COMPRESSION_LEVEL = 9


def slugify(name: str) -> str:
    """Lowercase ``name`` and replace every non-alphanumeric char with '-'."""
    return re.sub(r"[^a-z0-9]", "-", name.lower())


def export_filename(project_name: str, timestamp_ms: int) -> str:
    return f"{slugify(project_name)}-{timestamp_ms}.zip"


def generate_readme(
    project_name: str,
    description: Optional[str] = None,
    framework: Optional[str] = None,
    generated_on: Optional[date] = None,
) -> str:
    """Build a README.md for projects that do not ship one."""
    framework_name = framework or "Unknown"
    summary = description or "A project generated with AI App Builder."
    generated = (generated_on or date.today()).isoformat()

    return f"""# {project_name}

{summary}

## Framework

This project uses: **{framework_name}**

## Getting Started

### Prerequisites

- Node.js 18+ (for JavaScript/TypeScript projects)
- npm or yarn

### Installation

1. Install dependencies:
   ```bash
   npm install
   ```

2. Start the development server:
   ```bash
   npm run dev
   ```

3. Open your browser and navigate to the appropriate URL (usually http://localhost:3000 or http://localhost:5173)

## Project Structure

This project was generated using AI App Builder. The structure follows standard conventions for {framework_name} projects.

## License

This project is for personal use.

---

Generated with AI App Builder on {generated}
"""


def generate_package_json(
    project_name: str,
    description: Optional[str] = None,
    framework: Optional[str] = None,
) -> str:
    """Build a package.json with scripts and dependencies for ``framework``."""
    framework_key = (framework or "unknown").lower()

    pkg: dict = {
        "name": slugify(project_name),
        "version": "1.0.0",
        "description": description or f"{project_name} - Generated with AI App Builder",
        "private": True,
        "scripts": {},
        "dependencies": {},
        "devDependencies": {},
    }

    if "next" in framework_key:
        pkg["scripts"] = {
            "dev": "next dev",
            "build": "next build",
            "start": "next start",
            "lint": "next lint",
        }
        pkg["dependencies"] = {
            "next": "^14.0.0",
            "react": "^18.2.0",
            "react-dom": "^18.2.0",
        }
        pkg["devDependencies"] = {
            "typescript": "^5.0.0",
            "@types/node": "^20.0.0",
            "@types/react": "^18.0.0",
        }
    elif "react" in framework_key or "vite" in framework_key:
        pkg["scripts"] = {
            "dev": "vite",
            "build": "vite build",
            "preview": "vite preview",
        }
        pkg["dependencies"] = {
            "react": "^18.2.0",
            "react-dom": "^18.2.0",
        }
        pkg["devDependencies"] = {
            "vite": "^5.0.0",
            "@vitejs/plugin-react": "^4.0.0",
            "typescript": "^5.0.0",
        }
    elif "express" in framework_key or "node" in framework_key:
        pkg["scripts"] = {
            "start": "node index.js",
            "dev": "nodemon index.js",
        }
        pkg["dependencies"] = {"express": "^4.18.0"}
        pkg["devDependencies"] = {"nodemon": "^3.0.0"}
    else:
        pkg["scripts"] = {"start": "node index.js"}

    return json.dumps(pkg, indent=2)


def build_project_zip(
    files: Iterable[ProjectFile],
    project_name: str,
    description: Optional[str] = None,
    framework: Optional[str] = None,
) -> bytes:
    """Package project files into an in-memory ZIP archive.

    A README.md is added when the project has none, and a package.json is
    added for JavaScript/TypeScript projects that lack one.
    """
    files = list(files)
    paths = {f.path for f in files}

    buffer = io.BytesIO()
    with zipfile.ZipFile(
        buffer,
        "w",
        compression=zipfile.ZIP_DEFLATED,
        compresslevel=COMPRESSION_LEVEL,
    ) as archive:
        for f in files:
            archive.writestr(f.path, f.content)

        if not any(path.lower() == "readme.md" for path in paths):
            archive.writestr("README.md", generate_readme(project_name, description, framework))

        has_js_files = any(path.endswith(JS_EXTENSIONS) for path in paths)
        if has_js_files and "package.json" not in paths:
            archive.writestr(
                "package.json",
                generate_package_json(project_name, description, framework),
            )

    return buffer.getvalue()
