"""
Markdown help topic renderer for terminal display.
"""
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markdown import Markdown

console = Console()

# Topics shipped with the package
BUILTIN_DOCS_DIR = Path(__file__).resolve().parent.parent / "docs"


def render_explanation(filepath: Path, context: str = "template") -> None:
    """
    Render markdown file to terminal.

    Args:
        filepath: Path to markdown file
        context: "template" or "personal" (for attribution)
    """
    content = filepath.read_text(encoding="utf-8")

    if context == "personal":
        console.print("[dim](from your personal notes)[/dim]\n")

    console.print(Markdown(content))
    console.print()


def find_topic(topic: str, docs_dir: Path = BUILTIN_DOCS_DIR,
               personal_dir: Optional[Path] = None):
    """
    Locate a topic file, preferring personal notes over shipped templates.

    Returns:
        (path, context) tuple, or (None, None) if the topic does not exist
    """
    name = topic.strip().lower()
    if personal_dir is not None:
        personal = personal_dir / f"{name}.md"
        if personal.exists():
            return personal, "personal"
    template = docs_dir / "templates" / f"{name}.md"
    if template.exists():
        return template, "template"
    return None, None


def list_available_topics(docs_dir: Path = BUILTIN_DOCS_DIR,
                          personal_dir: Optional[Path] = None) -> list:
    """
    Get list of available explanation topics.

    Args:
        docs_dir: Base docs directory (contains templates/)
        personal_dir: Optional directory of personal notes

    Returns:
        Sorted list of topic names
    """
    topics = set()

    templates_dir = docs_dir / "templates"
    if templates_dir.exists():
        for f in templates_dir.glob("*.md"):
            topics.add(f.stem)

    # Private notes start with _
    if personal_dir is not None and personal_dir.exists():
        for f in personal_dir.glob("*.md"):
            if not f.name.startswith("_"):
                topics.add(f.stem)

    return sorted(topics)
