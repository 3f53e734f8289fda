"""Markdown to HTML conversion for issue and comment bodies."""

import markdown

_EXTENSIONS = [
    "fenced_code",
    "codehilite",
    "nl2br",
    "tables",
    "sane_lists",
    # GitHub extras: ~~strikethrough~~, bare URL autolinks, - [x] task lists.
    "pymdownx.tilde",
    "pymdownx.magiclink",
    "pymdownx.tasklist",
]

_EXTENSION_CONFIGS = {
    # Pygments guesses the lexer when a fence does not name a language.
    "codehilite": {"guess_lang": True, "use_pygments": True, "css_class": "highlight"},
    "pymdownx.tilde": {"subscript": False},
}


class MarkdownRenderer:
    """Renders GitHub-flavoured markdown with line breaks and highlighted code fences.

    A new ``markdown.Markdown`` converter is built per call because converters keep
    per-document state between ``convert`` calls.
    """

    def __init__(
        self,
        extensions: list[str] | None = None,
        extension_configs: dict[str, dict] | None = None,
    ) -> None:
        self._extensions = list(extensions if extensions is not None else _EXTENSIONS)
        self._extension_configs = dict(extension_configs if extension_configs is not None else _EXTENSION_CONFIGS)

    def render(self, text: str) -> str:
        converter = markdown.Markdown(extensions=self._extensions, extension_configs=self._extension_configs)
        return converter.convert(text)
