import pytest

# Emulador Hack mínimo para ejecutar la salida del traductor en los tests.

PREDEFINED = {"SP": 0, "LCL": 1, "ARG": 2, "THIS": 3, "THAT": 4,
              "SCREEN": 16384, "KBD": 24576}
PREDEFINED.update({f"R{i}": i for i in range(16)})

MASK = 0xFFFF

def _s16(x):
    x &= MASK
    return x - 0x10000 if x & 0x8000 else x

COMPS = {
    "0": lambda a, d, m: 0,
    "1": lambda a, d, m: 1,
    "-1": lambda a, d, m: -1,
    "D": lambda a, d, m: d,
    "A": lambda a, d, m: a,
    "M": lambda a, d, m: m,
    "!D": lambda a, d, m: ~d,
    "!A": lambda a, d, m: ~a,
    "!M": lambda a, d, m: ~m,
    "-D": lambda a, d, m: -d,
    "-A": lambda a, d, m: -a,
    "-M": lambda a, d, m: -m,
    "D+1": lambda a, d, m: d + 1,
    "A+1": lambda a, d, m: a + 1,
    "M+1": lambda a, d, m: m + 1,
    "D-1": lambda a, d, m: d - 1,
    "A-1": lambda a, d, m: a - 1,
    "M-1": lambda a, d, m: m - 1,
    "D+A": lambda a, d, m: d + a,
    "D+M": lambda a, d, m: d + m,
    "D-A": lambda a, d, m: d - a,
    "D-M": lambda a, d, m: d - m,
    "A-D": lambda a, d, m: a - d,
    "M-D": lambda a, d, m: m - d,
    "D&A": lambda a, d, m: d & a,
    "D&M": lambda a, d, m: d & m,
    "D|A": lambda a, d, m: d | a,
    "D|M": lambda a, d, m: d | m,
}

JUMPS = {
    "JGT": lambda v: v > 0, "JEQ": lambda v: v == 0, "JGE": lambda v: v >= 0,
    "JLT": lambda v: v < 0, "JNE": lambda v: v != 0, "JLE": lambda v: v <= 0,
    "JMP": lambda v: True,
}

class HackMachine:
    """CPU Hack de 16 bits: ROM de instrucciones ya resueltas y RAM dispersa."""

    def __init__(self, asm_text, ram=None):
        self.ram = dict(ram or {})
        self.rom = self._assemble(asm_text)

    @staticmethod
    def _assemble(asm_text):
        code = []
        for raw in asm_text.splitlines():
            s = raw.split("//", 1)[0].replace(" ", "").replace("\t", "")
            if s:
                code.append(s)
        symbols = dict(PREDEFINED)
        rom, pc = [], 0
        for s in code:
            if s.startswith("("):
                symbols[s[1:-1]] = pc
            else:
                rom.append(s)
                pc += 1
        next_var = 16
        out = []
        for s in rom:
            if s.startswith("@"):
                tok = s[1:]
                if tok.isdigit():
                    out.append(("A", int(tok)))
                    continue
                if tok not in symbols:
                    symbols[tok] = next_var
                    next_var += 1
                out.append(("A", symbols[tok]))
            else:
                dest, rest = s.split("=", 1) if "=" in s else ("", s)
                comp, jump = rest.split(";", 1) if ";" in rest else (rest, "")
                out.append(("C", dest, COMPS[comp], jump))
        return out

    def run(self, max_steps=10000):
        a = d = pc = 0
        steps = 0
        while pc < len(self.rom):
            steps += 1
            if steps > max_steps:
                raise RuntimeError("demasiados pasos")
            ins = self.rom[pc]
            if ins[0] == "A":
                a = ins[1]
                pc += 1
                continue
            _, dest, comp, jump = ins
            m = self.ram.get(a, 0)
            value = _s16(comp(a, d, m))
            addr = a
            if "A" in dest:
                a = value & MASK
            if "D" in dest:
                d = value
            if "M" in dest:
                self.ram[addr] = value
            if jump and JUMPS[jump](value):
                pc = a
            else:
                pc += 1
        return self

    def stack(self):
        sp = self.ram.get(0, 0)
        return [self.ram.get(i, 0) for i in range(256, sp)]

@pytest.fixture
def run_hack():
    """Ejecuta texto ASM con SP=256 y segmentos en direcciones típicas."""
    def _run(asm_text, ram=None):
        base = {0: 256, 1: 300, 2: 400, 3: 3000, 4: 3010}
        base.update(ram or {})
        return HackMachine(asm_text, base).run()
    return _run
