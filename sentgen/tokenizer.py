from __future__ import annotations
import re
from typing import List, Optional

from .types import EOS_TOKEN, SOS_TOKEN, Token

COMMAND_PREFIX = "!"
_ALPHA_ONLY = re.compile(r"[A-Za-z]+")

def is_command(line: str) -> bool:
    """True when the line is a `!command` rather than sentence content."""
    return line.startswith(COMMAND_PREFIX)

def tokenize(line: str) -> Optional[List[Token]]:
    """
    Cleans and tokenizes a single line of corpus text.

    The line is split on whitespace and only pieces made up entirely of
    letters are kept, so anything carrying digits or punctuation is dropped.
    Surviving tokens are wrapped in the start and end sentinels.

    Args:
        line: One raw line from a corpus file.

    Returns:
        `[SOS, *tokens, EOS]`, or None when the line is a command or no piece
        survives filtering. None means "skip this line", not an error.
    """
    if is_command(line):
        return None

    tokens = [piece for piece in line.split() if _ALPHA_ONLY.fullmatch(piece)]
    if not tokens:
        return None

    return [SOS_TOKEN, *tokens, EOS_TOKEN]
