'''
clase Diagnostic, errores de traducción y helpers (archivo/línea, tipos de error)
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Literal

# Severidad de los diagnósticos (en español)
Severity = Literal["error", "advertencia"]

_SEV_TO_LABEL = {
    "error": "ERROR",
    "advertencia": "ADVERTENCIA",
}

@dataclass(frozen=True)
class Diagnostic:
    """Estructura de un diagnóstico para reportar problemas.

    Abarca errores y advertencias, con ubicación opcional (archivo, línea y columna)
    y un mensaje de ayuda (pista) para orientar la corrección.
    """
    severity: Severity
    message: str
    line: Optional[int] = None
    col: Optional[int] = None
    hint: Optional[str] = None
    file: Optional[str] = None

    def __str__(self) -> str:
        loc = ""
        if self.file is not None:
            loc += f"{self.file}:"
        if self.line is not None:
            loc += f"{self.line}"
            if self.col is not None:
                loc += f":{self.col}"
        if loc:
            loc += ": "
        sev = _SEV_TO_LABEL.get(self.severity, str(self.severity).upper())
        core = f"{sev}: {self.message}"
        if self.hint:
            core += f"  (pista: {self.hint})"
        return loc + core

def error(message: str, *, line: int | None = None, col: int | None = None,
          file: str | None = None, hint: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo error."""
    return Diagnostic("error", message, line, col, hint, file)

def warning(message: str, *, line: int | None = None, col: int | None = None,
            file: str | None = None, hint: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo advertencia."""
    return Diagnostic("advertencia", message, line, col, hint, file)

# ---- Errores de traducción ----

class TranslationError(ValueError):
    """Error que aborta la traducción completa (no hay salida parcial)."""

    def __init__(self, message: str, *, hint: str | None = None):
        super().__init__(message)
        self.message = message
        self.hint = hint

    def to_diagnostic(self, *, line: int | None = None, file: str | None = None) -> Diagnostic:
        return error(self.message, line=line, file=file, hint=self.hint)

class ParseError(TranslationError):
    """Línea de VM que no se puede convertir en instrucción."""

class UnrecognizedOpcode(ParseError):
    """El primer token no es un opcode soportado."""

class MalformedOperand(ParseError):
    """Segmento desconocido, índice inválido o número de operandos incorrecto."""

class CodeGenError(TranslationError):
    """Instrucción válida sintácticamente pero imposible de emitir."""

class InvalidPop(CodeGenError):
    """pop sobre el segmento constant."""

class ContextualAddressMisuse(CodeGenError):
    """Se pidió la dirección fija de constant o static."""
