'''
segmentos de memoria de la VM y su resolución a direcciones Hack
'''

from __future__ import annotations
from enum import Enum
from typing import Dict

from .diagnostics import ContextualAddressMisuse, MalformedOperand

class Segment(str, Enum):
    """Las ocho regiones de memoria que puede nombrar un push/pop."""
    CONSTANT = "constant"
    LOCAL = "local"
    ARGUMENT = "argument"
    THIS = "this"
    THAT = "that"
    TEMP = "temp"
    POINTER = "pointer"
    STATIC = "static"

# Registros que guardan un puntero en tiempo de ejecución (acceso indirecto)
POINTER_BASES: Dict[Segment, str] = {
    Segment.LOCAL: "LCL",
    Segment.ARGUMENT: "ARG",
    Segment.THIS: "THIS",
    Segment.THAT: "THAT",
}

# Regiones planas: la base ya es la dirección (acceso directo)
FIXED_BASES: Dict[Segment, str] = {
    Segment.TEMP: "5",
    Segment.POINTER: "3",
}

def parse_segment(token: str) -> Segment:
    """Devuelve el Segment de un nombre ('local', 'temp', ...) o lanza MalformedOperand."""
    t = token.strip().lower()
    try:
        return Segment(t)
    except ValueError:
        raise MalformedOperand(
            f"Segmento inválido: '{token}'",
            hint="use constant, local, argument, this, that, temp, pointer o static",
        ) from None

def is_indirect(segment: Segment) -> bool:
    """True si la base es un puntero que hay que desreferenciar."""
    return segment in POINTER_BASES

def resolve_fixed(segment: Segment) -> str:
    """Dirección simbólica (LCL, ARG, ...) o base numérica ('5', '3') del segmento.

    constant no tiene dirección y static depende del contexto del generador,
    ambos lanzan ContextualAddressMisuse.
    """
    if segment in POINTER_BASES:
        return POINTER_BASES[segment]
    if segment in FIXED_BASES:
        return FIXED_BASES[segment]
    if segment is Segment.STATIC:
        raise ContextualAddressMisuse(
            "La dirección de static es contextual y solo la asigna el generador de código")
    raise ContextualAddressMisuse("El segmento constant no tiene dirección")
