"""
ALI — Error taxonomy

Every fault the interpreter can raise derives from ALIError so the CLI
can catch the whole family in one place. Errors carry the address and
instruction text they were raised for (same shape as the compiler's
AssemblerError(message, line_num, line_text)).

  UnknownOpcode          fatal   opcode outside the 11-entry table
  MalformedInstruction   fatal   missing or unparsable operand, empty cell
  SymbolNotFound         —       LDA/STR on an undeclared name; the
                                 handler turns the instruction into a no-op
  AddressSpaceExhausted  fatal   DEC with no free data address left
  AddressOverflow        fatal   program longer than the instruction
                                 segment, or PC left the segment
"""

from typing import Optional


class ALIError(Exception):
    """Base class for interpreter faults."""

    fatal = True

    def __init__(self, message: str, address: Optional[int] = None,
                 instruction: str = ""):
        self.address = address
        self.instruction = instruction
        super().__init__(f"Address {address}: {message}"
                         if address is not None else message)


class UnknownOpcode(ALIError):
    """Raised by the decoder for a mnemonic outside the opcode table."""


class MalformedInstruction(ALIError):
    """Raised when a required operand is missing or cannot be parsed."""


class SymbolNotFound(ALIError):
    """Raised by SymbolTable.resolve() for an undeclared name."""

    fatal = False

    def __init__(self, symbol: str, address: Optional[int] = None,
                 instruction: str = ""):
        self.symbol = symbol
        super().__init__(f"Symbol {symbol} not found in the symbol table.",
                         address, instruction)


class AddressSpaceExhausted(ALIError):
    """Raised when DEC finds no free slot in the data segment."""


class AddressOverflow(ALIError):
    """Raised when code does not fit, or runs past, the instruction segment."""


class SegmentError(ALIError):
    """Instruction/data cell accessed through the wrong segment."""
