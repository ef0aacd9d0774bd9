"""
ALI — Register File + Flag Management

Register model:
  A     — accumulator (Python int, unbounded; see alu.py)
  B     — secondary data register
  PC    — program counter (instruction segment address)
  CC    — condition bits:
          bit 2: Z (Zero — last ADD/SUB result was 0)
          bit 1: V (Overflow — last ADD/SUB result outside int32)
  halt  — set by HLT or by an aborted budget pause
  done  — set only by the execution engine's completion rules

Flags are stored as CCR-style bits so alu.py can hand back a single
flag word per operation, the same split the HC11 emulator used.
"""

# CC bit masks
CC_Z = 0x04
CC_V = 0x02


class Registers:
    """ALI register set."""

    __slots__ = ('A', 'B', 'PC', 'CC', 'halt', 'done', 'executed')

    def __init__(self):
        self.A: int = 0
        self.B: int = 0
        self.PC: int = 0
        self.CC: int = 0
        self.halt: bool = False
        self.done: bool = False
        self.executed: int = 0  # running instruction counter

    # --- flag access ---

    def set_ZV(self, flags: int):
        """Set Z and V from an alu flag word."""
        self.CC = flags & (CC_Z | CC_V)

    @property
    def zero(self) -> int:
        return 1 if self.CC & CC_Z else 0

    @property
    def overflow(self) -> int:
        return 1 if self.CC & CC_V else 0

    # --- register ops ---

    def exchange(self):
        """XCH: swap A and B. Flags untouched."""
        self.A, self.B = self.B, self.A

    def display(self) -> str:
        """One-line register dump, used by the execution trace."""
        return (f"A={self.A} B={self.B} PC={self.PC} "
                f"Z={self.zero} V={self.overflow}")
