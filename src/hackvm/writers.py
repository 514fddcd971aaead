from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List

HEADER = (
    "// Hack ASM generated from VM code",
    "// by hackvm (nand2tetris VM translator)",
)

@dataclass(frozen=True)
class AsmRecord:
    """Echoed source comment plus the Hack lines generated for it."""
    src: str
    asm: List[str]

def to_asm_lines(records: Iterable[AsmRecord]) -> List[str]:
    lines = list(HEADER)
    for rec in records:
        lines += ["", "", rec.src]
        lines += rec.asm
    return lines

def to_asm_text(records: Iterable[AsmRecord]) -> str:
    return "\n".join(to_asm_lines(records)) + "\n"

def write_asm(records: Iterable[AsmRecord], path: str) -> None:
    text = to_asm_text(records)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
