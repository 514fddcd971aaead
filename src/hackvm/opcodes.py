'''
tabla de opcodes de la VM (familia, variante y aridad)
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Literal, Union

from .ast import Direction, UnaryKind, BinaryKind, CompareKind
from .diagnostics import UnrecognizedOpcode

Family = Literal["stack", "unary", "binary", "compare"]

@dataclass(frozen=True)
class OpSpec:
    """Especificación de un opcode de la VM.

    - family: 'stack', 'unary', 'binary' o 'compare'
    - kind: variante dentro de la familia
    - arity: número de operandos en la línea (2 para push/pop, 0 para el resto)
    """
    family: Family
    kind: Union[Direction, UnaryKind, BinaryKind, CompareKind]
    arity: int = 0

SPEC: Dict[str, OpSpec] = {}

def _add(spec: OpSpec) -> None:
    SPEC[spec.kind.value] = spec

# Movimientos de pila
_add(OpSpec("stack", Direction.PUSH, arity=2))
_add(OpSpec("stack", Direction.POP,  arity=2))

# Aritmética unaria
_add(OpSpec("unary", UnaryKind.NEG))
_add(OpSpec("unary", UnaryKind.NOT))

# Aritmética binaria
_add(OpSpec("binary", BinaryKind.ADD))
_add(OpSpec("binary", BinaryKind.SUB))
_add(OpSpec("binary", BinaryKind.AND))
_add(OpSpec("binary", BinaryKind.OR))

# Comparaciones
_add(OpSpec("compare", CompareKind.EQ))
_add(OpSpec("compare", CompareKind.LT))
_add(OpSpec("compare", CompareKind.GT))

def spec(opcode: str) -> OpSpec:
    """Devuelve la especificación de un opcode o lanza UnrecognizedOpcode."""
    o = opcode.lower()
    if o not in SPEC:
        raise UnrecognizedOpcode(
            f"Instrucción desconocida: {opcode}",
            hint="opcodes válidos: " + ", ".join(SPEC),
        )
    return SPEC[o]
