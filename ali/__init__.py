"""
ALI — Assembly Language Interpreter
===================================
Interpreter for an 11-opcode accumulator machine with a 256-cell
address space (128 instruction cells, 128 data cells).

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌───────────┐
    │ Program  │───>│  Memory  │───>│ Decoder  │───>│ Emulator  │
    │ (.txt)   │    │ (0-127)  │    │ (Opcode) │    │ step/run  │
    └──────────┘    └──────────┘    └──────────┘    └───────────┘

    - mem/memory.py:  code/data stores behind one address map, symbol table
    - cpu/regs.py:    A, B, PC, Z/V bits, halt/done
    - cpu/alu.py:     exact add/sub with advisory int32 overflow flag
    - cpu/decoder.py: instruction text → Instruction(Opcode, operand)
    - emu.py:         dispatch table, budget pause, completion rules
    - snapshot.py:    inspectable state + text rendering
"""

__version__ = "1.0.0"

from .errors import (ALIError, UnknownOpcode, MalformedInstruction,
                     SymbolNotFound, AddressSpaceExhausted, AddressOverflow)
from .cpu.decoder import Opcode, Instruction, decode_instruction
from .emu import (ALIEmulator, StopReason, EngineState,
                  abort_on_budget, continue_on_budget)
from .snapshot import Snapshot, take_snapshot, render


def run_program(lines, *, instruction_budget: int = 0,
                decide=None) -> ALIEmulator:
    """Load lines into a fresh emulator, run to completion, return it."""
    emu = ALIEmulator(instruction_budget=instruction_budget, decide=decide)
    emu.load_program(lines)
    emu.run()
    return emu
