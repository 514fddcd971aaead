from __future__ import annotations
import argparse, os, sys
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .parser import parse_lines
from .codegen import CodeGenState, gen_block
from .writers import AsmRecord, write_asm
from .diagnostics import Diagnostic, CodeGenError, warning
from .ast import SourceLine

@dataclass
class TranslationResult:
    """Salida de una traducción: todo o nada.

    Si hay algún error, 'records' queda vacío y 'diagnostics' explica por qué.
    """
    records: List[AsmRecord] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    state: CodeGenState = field(default_factory=CodeGenState)
    lines: List[SourceLine] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not any(d.severity == "error" for d in self.diagnostics)

def translate_lines(source: Iterable[str], *, filename: str | None = None) -> TranslationResult:
    """Parsea y genera el bloque Hack de cada línea dada, en orden.

    La línea N de 'source' es la línea N de los diagnósticos.
    """
    lines, diags = parse_lines(source, filename=filename)
    result = TranslationResult(diagnostics=list(diags), lines=lines)
    if not result.ok:
        return result

    if not lines:
        result.diagnostics.append(warning("El archivo no contiene instrucciones", file=filename))
        return result

    records: List[AsmRecord] = []
    for src in lines:
        try:
            asm = gen_block(src.instruction, result.state)
        except CodeGenError as ex:
            result.diagnostics.append(ex.to_diagnostic(line=src.line, file=filename))
            return result
        records.append(AsmRecord(src=f"// {src.text}", asm=asm))

    result.records = records
    return result

def translate_text(text: str, *, filename: str | None = None) -> TranslationResult:
    return translate_lines(text.splitlines(), filename=filename)

def default_output(source: str) -> str:
    """'dir/Foo.vm' -> 'dir/Foo.asm'."""
    root, _ = os.path.splitext(source)
    return root + ".asm"

def dump_debug(result: TranslationResult, out=None) -> None:
    out = out or sys.stderr
    print("***  LINES  ***", file=out)
    for src in result.lines:
        print(f"{src.line}: {src.instruction!r}", file=out)
    st = result.state
    print(f"***  STATE  *** labels={st.label_counter} slots={st.slot_counter}", file=out)
    for index in sorted(st.static_slots):
        print(f"static {index} -> {st.static_slots[index]}", file=out)

def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Hack VM -> ASM translator (nand2tetris)")
    ap.add_argument("source", help="archivo .vm de entrada")
    ap.add_argument("-o", "--output", help="archivo .asm de salida (por defecto, el mismo nombre con .asm)")
    ap.add_argument("--debug", action="store_true", default=bool(os.environ.get("DEBUG")),
                    help="vuelca instrucciones y estado del generador a stderr (también con DEBUG=1)")
    args = ap.parse_args(argv)

    if not args.source.endswith(".vm"):
        print(f"ERROR: el archivo debe ser .vm (recibido: {args.source})", file=sys.stderr)
        return 2
    out_path = args.output or default_output(args.source)

    try:
        with open(args.source, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as ex:
        print(f"ERROR: no pude leer {args.source}: {ex}", file=sys.stderr)
        return 2

    print(f"traduciendo {args.source}")
    result = translate_text(text, filename=args.source)

    if args.debug:
        dump_debug(result)

    for d in result.diagnostics:
        print(d, file=sys.stderr)

    if not result.ok:
        return 1

    try:
        write_asm(result.records, out_path)
    except OSError as ex:
        print(f"ERROR al escribir salidas: {ex}", file=sys.stderr)
        return 3

    print(f"OK: {len(result.records)} instrucciones → {out_path}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
