"""
Explain command - show help topics from markdown files.
"""
from diet_tracker.utils.docs_renderer import find_topic, list_available_topics, render_explanation

from .base import Command, register_command


@register_command
class ExplainCommand(Command):
    """Show explanation of a concept."""

    name = "explain"
    help_text = "Explain a concept (explain composite, explain undo, explain targets)"

    def execute(self, args: str) -> None:
        """
        Show explanation from markdown documentation.

        Personal notes override the shipped topics of the same name.

        Examples:
            explain              -> List available topics
            explain undo         -> Show undo explanation
        """
        if not args.strip():
            self._list_topics()
            return

        topic = args.strip().lower().replace(" ", "-")
        path, context = find_topic(topic, personal_dir=self.ctx.personal_docs_dir)
        if path is None:
            print(f"\nNo explanation found for '{topic}'")
            self._list_topics()
            return

        render_explanation(path, context=context)

    def _list_topics(self) -> None:
        topics = list_available_topics(personal_dir=self.ctx.personal_docs_dir)
        if not topics:
            print("\nNo explanations available.\n")
            return

        print("\nAvailable explanations:")
        for topic in topics:
            print(f"  {topic}")
        print("\nUsage: explain <topic>\n")
