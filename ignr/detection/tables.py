"""Lookup tables mapping filesystem evidence to technology tags."""

from __future__ import annotations

from typing import Dict, Tuple

MANIFEST_TAGS: Dict[str, Tuple[str, ...]] = {
    "Cargo.toml": ("rust",),
    "package.json": ("node",),
    "requirements.txt": ("python",),
    "pyproject.toml": ("python",),
    "setup.py": ("python",),
    "Pipfile": ("python",),
    "uv.lock": ("python",),
    "go.mod": ("go",),
    "go.sum": ("go",),
    "pom.xml": ("java",),
    "build.gradle": ("java",),
    "build.gradle.kts": ("java",),
    "CMakeLists.txt": ("cpp",),
    "Makefile": ("cpp",),
    "configure.ac": ("cpp",),
    "Gemfile": ("ruby",),
    "Rakefile": ("ruby",),
    "Package.swift": ("swift",),
    "composer.json": ("php",),
    "build.sbt": ("scala",),
    "mix.exs": ("elixir",),
    "stack.yaml": ("haskell",),
    "cabal.project": ("haskell",),
    "build.zig": ("zig",),
    "pubspec.yaml": ("dart",),
    "main.tf": ("terraform",),
    "terraform.tf": ("terraform",),
    "playbook.yml": ("ansible",),
    "ansible.cfg": ("ansible",),
    "Dockerfile": ("docker",),
    "docker-compose.yml": ("docker",),
    "docker-compose.yaml": ("docker",),
}

# Manifests that add extra tags when their full path contains a hint substring.
PATH_HINT_TAGS: Dict[str, Tuple[Tuple[str, str], ...]] = {
    "build.gradle.kts": (("kotlin", "kotlin"),),
}

EXTENSION_TAGS: Dict[str, str] = {
    "rs": "rust",
    "py": "python",
    "pyw": "python",
    "pyi": "python",
    "js": "node",
    "jsx": "node",
    "ts": "node",
    "tsx": "node",
    "mjs": "node",
    "cjs": "node",
    "go": "go",
    "java": "java",
    "cs": "csharp",
    "fs": "csharp",
    "vb": "csharp",
    "csproj": "csharp",
    "sln": "csharp",
    "fsproj": "csharp",
    "c": "cpp",
    "cpp": "cpp",
    "cc": "cpp",
    "cxx": "cpp",
    "h": "cpp",
    "hpp": "cpp",
    "hxx": "cpp",
    "rb": "ruby",
    "swift": "swift",
    "kt": "kotlin",
    "kts": "kotlin",
    "php": "php",
    "scala": "scala",
    "sc": "scala",
    "ex": "elixir",
    "exs": "elixir",
    "hs": "haskell",
    "lhs": "haskell",
    "zig": "zig",
    "dart": "dart",
    "tf": "terraform",
    "tfvars": "terraform",
}

IDE_DIRECTORY_TAGS: Dict[str, str] = {
    ".vscode": "vscode",
    ".idea": "intellij",
    ".vim": "vim",
    ".nvim": "vim",
    ".emacs.d": "emacs",
}

OS_TAGS: Dict[str, str] = {
    "linux": "linux",
    "darwin": "macos",
    "win32": "windows",
    "cygwin": "windows",
}


__all__ = [
    "EXTENSION_TAGS",
    "IDE_DIRECTORY_TAGS",
    "MANIFEST_TAGS",
    "OS_TAGS",
    "PATH_HINT_TAGS",
]
