from __future__ import annotations
import re

COMMENT_SPLIT_RE = re.compile(r"//")

def strip_comment(line: str) -> str:
    """Remove comments starting with '//'"""
    return COMMENT_SPLIT_RE.split(line, maxsplit=1)[0].strip()

def is_skippable(line: str) -> bool:
    """Blank, whitespace-only and comment-only lines carry no instruction."""
    return not strip_comment(line)

def split_tokens(line: str):
    return strip_comment(line).split()

def split_opcode_operands(line: str):
    """Return (opcode, [operands]); opcode is lowercased, '' for empty lines."""
    tokens = split_tokens(line)
    if not tokens:
        return "", []
    return tokens[0].lower(), tokens[1:]
