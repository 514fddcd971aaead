# src/hackvm/codegen.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List

from .ast import (
    Instruction, StackMove, UnaryOp, BinaryOp, CompareOp,
    Direction, UnaryKind, BinaryKind, CompareKind,
)
from .segments import Segment, is_indirect, resolve_fixed
from .diagnostics import InvalidPop

LABEL_PREFIX = "JMP_"
SLOT_PREFIX = "V_"

# ---------------- Estado de una traducción ----------------

@dataclass
class CodeGenState:
    """Contadores y tabla de statics de UNA traducción.

    Los nombres JMP_<n> y V_<n> solo son únicos dentro de la salida que
    comparte este estado; cada traducción crea uno nuevo.
    """
    label_counter: int = 0
    slot_counter: int = 0
    static_slots: Dict[int, str] = field(default_factory=dict)

    def new_label(self) -> str:
        name = f"{LABEL_PREFIX}{self.label_counter}"
        self.label_counter += 1
        return name

    def new_slot(self) -> str:
        name = f"{SLOT_PREFIX}{self.slot_counter}"
        self.slot_counter += 1
        return name

    def static_slot(self, index: int) -> str:
        """Slot persistente de 'static index'; se asigna en la primera referencia."""
        slot = self.static_slots.get(index)
        if slot is None:
            slot = self.new_slot()
            self.static_slots[index] = slot
        return slot

# ---------------- Helpers de emisión ----------------

def _push_d() -> List[str]:
    # *SP = D; SP++
    return ["@SP", "A=M", "M=D", "@SP", "M=M+1"]

def _pop_to_d() -> List[str]:
    # SP--; D = *SP; A queda apuntando al nuevo tope
    return ["@SP", "M=M-1", "A=M", "D=M", "A=A-1"]

# ---------------- push / pop ----------------

def _gen_push(segment: Segment, index: int, state: CodeGenState) -> List[str]:
    if segment is Segment.CONSTANT:
        asm = [f"@{index}", "D=A"]
    elif segment is Segment.STATIC:
        asm = [f"@{state.static_slot(index)}", "D=M"]
    else:
        base = resolve_fixed(segment)
        # temp/pointer son regiones planas: base + index sin desreferenciar
        effective = "A=D+M" if is_indirect(segment) else "A=D+A"
        asm = [f"@{index}", "D=A", f"@{base}", effective, "D=M"]
    return asm + _push_d()

def _gen_pop(segment: Segment, index: int, state: CodeGenState) -> List[str]:
    if segment is Segment.CONSTANT:
        raise InvalidPop(f"No se puede hacer pop a constant {index}",
                         hint="constant solo admite push")

    # el slot guarda la dirección destino mientras se baja SP
    dest = state.new_slot()
    if segment is Segment.STATIC:
        asm = [f"@{state.static_slot(index)}", "D=A"]
    else:
        base = resolve_fixed(segment)
        asm = [f"@{index}", "D=A", f"@{base}"]
        if is_indirect(segment):
            asm.append("A=M")
        asm.append("D=D+A")

    asm += [f"@{dest}", "M=D"]
    asm += ["@SP", "M=M-1", "A=M", "D=M"]
    asm += [f"@{dest}", "A=M", "M=D"]
    return asm

def _gen_stack_block(ins: StackMove, state: CodeGenState) -> List[str]:
    if ins.direction is Direction.PUSH:
        return _gen_push(ins.segment, ins.index, state)
    return _gen_pop(ins.segment, ins.index, state)

# ---------------- aritmética ----------------

UNARY_OPS: Dict[UnaryKind, List[str]] = {
    UnaryKind.NEG: ["@0", "D=A", "@SP", "A=M-1", "M=D-M"],
    UnaryKind.NOT: ["@SP", "A=M-1", "M=!M"],
}

# top = top OP popped
BINARY_OPS: Dict[BinaryKind, str] = {
    BinaryKind.ADD: "M=D+M",
    BinaryKind.SUB: "M=M-D",
    BinaryKind.AND: "M=D&M",
    BinaryKind.OR:  "M=D|M",
}

def _gen_unary_block(ins: UnaryOp, state: CodeGenState) -> List[str]:
    return list(UNARY_OPS[ins.kind])

def _gen_binary_block(ins: BinaryOp, state: CodeGenState) -> List[str]:
    return _pop_to_d() + [BINARY_OPS[ins.kind]]

# ---------------- comparaciones ----------------

COMPARE_JUMPS: Dict[CompareKind, str] = {
    CompareKind.EQ: "JEQ",
    CompareKind.GT: "JGT",
    CompareKind.LT: "JLT",
}

def _gen_comparison_block(ins: CompareOp, state: CodeGenState) -> List[str]:
    cnd_jmp = COMPARE_JUMPS[ins.kind]

    # siempre en este orden: match, no_match, done
    if_match = state.new_label()
    if_not_match = state.new_label()
    done = state.new_label()

    # D = primero - segundo
    asm = _pop_to_d() + ["D=M-D"]

    asm += [f"@{if_match}", f"D;{cnd_jmp}", f"@{if_not_match}", "0;JMP"]

    # D = -1 (verdadero)
    asm += [f"({if_match})", "    @0", "    D=A-1", f"    @{done}", "    0;JMP"]

    # D = 0 (falso)
    asm += [f"({if_not_match})", "    @0", "    D=A"]

    # *(SP-1) = D
    asm += [f"({done})", "    @SP", "    A=M", "    A=A-1", "    M=D"]
    return asm

# ---------------- Dispatch ----------------

EMITTERS: Dict[type, Callable[..., List[str]]] = {
    StackMove: _gen_stack_block,
    UnaryOp: _gen_unary_block,
    BinaryOp: _gen_binary_block,
    CompareOp: _gen_comparison_block,
}

def gen_block(instruction: Instruction, state: CodeGenState) -> List[str]:
    """Emite el bloque Hack de una instrucción y avanza 'state' si hace falta.

    Lanza InvalidPop para 'pop constant'; en ese caso 'state' no cambia.
    """
    emitter = EMITTERS.get(type(instruction))
    if emitter is None:
        raise TypeError(f"No hay emisor para {type(instruction).__name__}")
    return emitter(instruction, state)
