"""
Action parser - extract file actions from model output.

The model embeds actions in free text as tags:

    <create_file path="src/app.py">...</create_file>
    <update_file id="file-id">...</update_file>

Matching is non-greedy and spans lines, so the first closing tag ends a body
and nested tags of the same kind are not supported. Anything that does not
match (unterminated tags, unquoted attributes) is ignored.
"""

import re

from polaris.core.types import CreateFileAction, ParsedActions, UpdateFileAction

CREATE_FILE_PATTERN = re.compile(r'<create_file\s+path="([^"]+)">(.*?)</create_file>', re.DOTALL)
UPDATE_FILE_PATTERN = re.compile(r'<update_file\s+id="([^"]+)">(.*?)</update_file>', re.DOTALL)


def parse_create_actions(text: str) -> list[CreateFileAction]:
    return [
        CreateFileAction(path=match.group(1), content=match.group(2))
        for match in CREATE_FILE_PATTERN.finditer(text)
    ]


def parse_update_actions(text: str) -> list[UpdateFileAction]:
    return [
        UpdateFileAction(file_id=match.group(1), content=match.group(2))
        for match in UPDATE_FILE_PATTERN.finditer(text)
    ]


def parse_actions(text: str | None) -> ParsedActions:
    """
    Extract create and update actions from a model response.

    Each list keeps the order the tags appear in. Paths, IDs and bodies are
    captured verbatim; deciding whether they are usable is left to the store.

    Args:
        text: Raw model output (None is treated as empty)

    Returns:
        ParsedActions with creates and updates
    """
    if not text:
        return ParsedActions()

    return ParsedActions(
        creates=parse_create_actions(text),
        updates=parse_update_actions(text),
    )
