'''
dataclases del modelo de instrucciones (StackMove, UnaryOp, BinaryOp, CompareOp)
'''

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .segments import Segment

# ---- Variantes de cada familia ----

class Direction(str, Enum):
    PUSH = "push"
    POP = "pop"

class UnaryKind(str, Enum):
    NEG = "neg"
    NOT = "not"

class BinaryKind(str, Enum):
    ADD = "add"
    SUB = "sub"
    AND = "and"
    OR = "or"

class CompareKind(str, Enum):
    EQ = "eq"
    LT = "lt"
    GT = "gt"

# ---- Instrucciones ----

@dataclass(frozen=True)
class StackMove:
    """push/pop con segmento e índice no negativo."""
    direction: Direction
    segment: Segment
    index: int

    def render(self) -> str:
        return f"{self.direction.value} {self.segment.value} {self.index}"

@dataclass(frozen=True)
class UnaryOp:
    """Operación sobre el tope de la pila (neg, not)."""
    kind: UnaryKind

    def render(self) -> str:
        return self.kind.value

@dataclass(frozen=True)
class BinaryOp:
    """Operación sobre los dos elementos del tope (add, sub, and, or)."""
    kind: BinaryKind

    def render(self) -> str:
        return self.kind.value

@dataclass(frozen=True)
class CompareOp:
    """Comparación de los dos elementos del tope (eq, lt, gt); deja -1 o 0."""
    kind: CompareKind

    def render(self) -> str:
        return self.kind.value

Instruction = Union[StackMove, UnaryOp, BinaryOp, CompareOp]

@dataclass(frozen=True)
class SourceLine:
    """Instrucción junto con el texto y la línea de donde salió."""
    text: str
    line: int
    instruction: Instruction
