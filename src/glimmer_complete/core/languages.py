from pathlib import Path

TEMPLATE_LANGUAGE = "handlebars"

_EXTENSION_LANGUAGE_MAP = {
    ".hbs": "handlebars",
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
}

WATCHED_EXTENSIONS = frozenset({*_EXTENSION_LANGUAGE_MAP, ".json", ".yaml", ".yml"})


def language_for_path(file_path: str | Path) -> str | None:
    """Return the language of a template or script file, or None for anything else."""
    return _EXTENSION_LANGUAGE_MAP.get(Path(file_path).suffix.lower())
