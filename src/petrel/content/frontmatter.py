"""TOML front matter parsing.

Content files may start with a TOML block fenced by ``+++`` lines::

    +++
    title = "First post"
    date = 2024-01-15
    tags = ["intro"]
    +++

    Body text in **Markdown**.
"""

import tomllib
from typing import Any

FENCE = "+++"


class FrontMatterError(ValueError):
    """The front matter block is unterminated or not valid TOML."""


def parse_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split *text* into ``(metadata, body)``.

    Text without a leading fence has empty metadata and is returned
    whole as the body.

    Raises:
        FrontMatterError: Unterminated fence or invalid TOML.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != FENCE:
        return {}, text

    for index in range(1, len(lines)):
        if lines[index].strip() == FENCE:
            block = "".join(lines[1:index])
            body = "".join(lines[index + 1 :]).lstrip("\r\n")
            try:
                return tomllib.loads(block), body
            except tomllib.TOMLDecodeError as exc:
                raise FrontMatterError(f"Invalid TOML front matter: {exc}") from exc

    raise FrontMatterError("Front matter opened with '+++' but never closed")
