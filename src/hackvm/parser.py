# src/hackvm/parser.py
from __future__ import annotations
import re
from typing import Iterable, List, Optional, Tuple

from .lexer import is_skippable, split_opcode_operands
from .ast import Instruction, SourceLine, StackMove, UnaryOp, BinaryOp, CompareOp
from .opcodes import spec as opcode_spec
from .segments import parse_segment
from .diagnostics import Diagnostic, ParseError, MalformedOperand

INDEX_RE = re.compile(r"^[0-9]+$")

def _parse_index(token: str) -> int:
    t = token.strip()
    if not INDEX_RE.match(t):
        raise MalformedOperand(f"Índice inválido: '{token}'", hint="se espera un entero no negativo")
    return int(t)

def parse_line(line: str) -> Instruction:
    """Convierte una línea de VM en su Instruction.

    Las líneas vacías o de comentario no son instrucciones: el llamador debe
    filtrarlas con lexer.is_skippable; si llegan aquí se lanza ParseError.
    """
    opcode, operands = split_opcode_operands(line)
    if not opcode:
        raise ParseError("Línea sin instrucción", hint="filtre líneas vacías y comentarios antes de parsear")

    op = opcode_spec(opcode)
    if len(operands) < op.arity:
        raise MalformedOperand(
            f"Faltan operandos en '{opcode}': se esperaban {op.arity}, hay {len(operands)}",
            hint=f"{opcode} <segmento> <índice>" if op.arity else None,
        )
    if len(operands) > op.arity:
        extra = " ".join(operands[op.arity:])
        raise MalformedOperand(f"Sobran operandos en '{opcode}': '{extra}'")

    if op.family == "stack":
        segment = parse_segment(operands[0])
        index = _parse_index(operands[1])
        return StackMove(direction=op.kind, segment=segment, index=index)
    if op.family == "unary":
        return UnaryOp(kind=op.kind)
    if op.family == "binary":
        return BinaryOp(kind=op.kind)
    return CompareOp(kind=op.kind)

def parse_lines(source: Iterable[str], *, filename: Optional[str] = None) -> Tuple[List[SourceLine], List[Diagnostic]]:
    """
    Devuelve (lines, diagnostics) donde lines es una lista de SourceLine(text, line, instruction)
    en el orden del archivo.

    Reglas:
      - Comentarios: '//' hasta fin de línea; líneas vacías o solo comentario se ignoran.
      - Cada línea restante debe ser exactamente una instrucción.
      - Un error por línea inválida; se siguen analizando las demás.
    """
    lines: List[SourceLine] = []
    diags: List[Diagnostic] = []

    for lineno, raw in enumerate(source, start=1):
        if is_skippable(raw):
            continue
        try:
            instruction = parse_line(raw)
        except ParseError as ex:
            diags.append(ex.to_diagnostic(line=lineno, file=filename))
            continue
        lines.append(SourceLine(text=raw.strip(), line=lineno, instruction=instruction))

    return lines, diags

def parse(text: str, *, filename: Optional[str] = None) -> Tuple[List[SourceLine], List[Diagnostic]]:
    """Como parse_lines, partiendo el texto completo en líneas."""
    return parse_lines(text.splitlines(), filename=filename)
