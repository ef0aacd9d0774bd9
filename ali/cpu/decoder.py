"""
ALI — Instruction Decoder / Opcode Table

Maps instruction text to a decoded Instruction. The opcode set is closed:
the Opcode enum has exactly the 11 ALI mnemonics, and OPCODES records
which operand each one takes.

Operand kinds:
  NONE     no operand (extra tokens are ignored)
  SYMBOL   variable name, resolved through the symbol table at run time
  INT      signed decimal literal
  ADDR     jump target in the instruction segment

Instruction text is split on whitespace; the first token is the opcode,
the second the operand.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..errors import MalformedInstruction, UnknownOpcode


# ──────────────────────────────────────────────
# Operand kinds
# ──────────────────────────────────────────────

NONE = 'NONE'
SYMBOL = 'SYMBOL'
INT = 'INT'
ADDR = 'ADDR'


class Opcode(Enum):
    DEC = 'DEC'
    LDA = 'LDA'
    LDI = 'LDI'
    STR = 'STR'
    XCH = 'XCH'
    ADD = 'ADD'
    SUB = 'SUB'
    JMP = 'JMP'
    JZS = 'JZS'
    JVS = 'JVS'
    HLT = 'HLT'


# Format: opcode -> (operand_kind, description)
OPCODES = {
    # ── Memory ──
    Opcode.DEC: (SYMBOL, 'declare symbol'),
    Opcode.LDA: (SYMBOL, 'A <- mem[symbol]'),
    Opcode.LDI: (INT,    'A <- literal'),
    Opcode.STR: (SYMBOL, 'mem[symbol] <- A'),

    # ── Registers / arithmetic ──
    Opcode.XCH: (NONE,   'swap A and B'),
    Opcode.ADD: (NONE,   'A <- A + B'),
    Opcode.SUB: (NONE,   'A <- A - B'),

    # ── Control ──
    Opcode.JMP: (ADDR,   'jump'),
    Opcode.JZS: (ADDR,   'jump if Z set'),
    Opcode.JVS: (ADDR,   'jump if V set'),
    Opcode.HLT: (NONE,   'halt'),
}


@dataclass(frozen=True)
class Instruction:
    """A decoded instruction."""
    opcode: Opcode
    operand: Optional[Union[str, int]] = None
    text: str = ""

    @property
    def mnemonic(self) -> str:
        return self.opcode.value

    def __str__(self) -> str:
        if self.operand is None:
            return self.mnemonic
        return f"{self.mnemonic} {self.operand}"


def decode_instruction(text: str, address: Optional[int] = None) -> Instruction:
    """Decode one line of instruction text.

    Raises UnknownOpcode for a mnemonic outside the table and
    MalformedInstruction for an empty line or a bad/missing operand.
    """
    tokens = text.split()
    if not tokens:
        raise MalformedInstruction("empty instruction", address, text)

    mnem = tokens[0]
    try:
        opcode = Opcode(mnem)
    except ValueError:
        raise UnknownOpcode(f"Unknown opcode: {mnem}", address, text) from None

    kind = OPCODES[opcode][0]
    if kind == NONE:
        return Instruction(opcode, None, text)

    if len(tokens) < 2:
        raise MalformedInstruction(f"{mnem}: missing operand", address, text)
    raw = tokens[1]

    if kind == SYMBOL:
        return Instruction(opcode, raw, text)

    # INT and ADDR both take a decimal integer
    try:
        value = int(raw)
    except ValueError:
        raise MalformedInstruction(
            f"{mnem}: operand '{raw}' is not an integer", address, text) from None
    return Instruction(opcode, value, text)


def jump_target(instr: Instruction) -> int:
    """PC value a taken jump writes: one before the target, because the
    engine increments PC after every dispatched instruction."""
    return instr.operand - 1
