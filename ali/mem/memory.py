"""
ALI — 256-cell address space with segment routing

Memory map:
  0–127    CODE  instruction text, one instruction per cell
  128–255  DATA  signed integers, written by STR

The two segments are kept in separate stores (a list of strings and a
list of ints). Memory routes an address to the right store through the
REGIONS table, so callers still see one flat address space.

Symbols live in SymbolTable: DEC allocates the lowest free data address,
and an allocation is never moved or released.
"""

import logging
from typing import Dict, Iterable, List, Optional

from ..config import CODE_END, CODE_START, DATA_END, DATA_START
from ..errors import (AddressOverflow, AddressSpaceExhausted, SegmentError,
                      SymbolNotFound)

logger = logging.getLogger(__name__)

CODE = 'CODE'
DATA = 'DATA'


class MemoryRegion:
    """A named region in the 256-cell address space."""
    def __init__(self, name: str, start: int, end: int, kind: str):
        self.name = name
        self.start = start
        self.end = end  # inclusive
        self.kind = kind

    def contains(self, addr: int) -> bool:
        return self.start <= addr <= self.end

    @property
    def size(self) -> int:
        return self.end - self.start + 1


class Memory:
    """Instruction and data stores behind one address space."""

    REGIONS = [
        MemoryRegion('CODE', CODE_START, CODE_END, CODE),
        MemoryRegion('DATA', DATA_START, DATA_END, DATA),
    ]

    def __init__(self):
        self._code: List[str] = [""] * self.REGIONS[0].size
        self._data: List[int] = [0] * self.REGIONS[1].size
        self.program_length = 0

    def region(self, addr: int) -> Optional[MemoryRegion]:
        for region in self.REGIONS:
            if region.contains(addr):
                return region
        return None

    def _check(self, addr: int, kind: str) -> MemoryRegion:
        region = self.region(addr)
        if region is None or region.kind != kind:
            raise SegmentError(f"not a {kind} address", addr)
        return region

    # --- Core read/write ---

    def read_instruction(self, addr: int) -> str:
        region = self._check(addr, CODE)
        return self._code[addr - region.start]

    def write_instruction(self, addr: int, text: str):
        region = self._check(addr, CODE)
        self._code[addr - region.start] = text

    def read_data(self, addr: int) -> int:
        region = self._check(addr, DATA)
        return self._data[addr - region.start]

    def write_data(self, addr: int, value: int):
        region = self._check(addr, DATA)
        self._data[addr - region.start] = value

    def read(self, addr: int):
        """Read any cell: instruction text or data value."""
        region = self.region(addr)
        if region is None:
            raise SegmentError("address out of range", addr)
        if region.kind == CODE:
            return self.read_instruction(addr)
        return self.read_data(addr)

    # --- Loading ---

    def load_program(self, lines: Iterable[str]) -> int:
        """Load instruction lines at address 0 upwards.

        Each line is stripped. Returns the end-of-program address (the
        address of the last line; 0 for an empty program). A program that
        does not fit the code segment is rejected before anything is
        written.
        """
        program = [line.strip() for line in lines]
        capacity = self.REGIONS[0].size
        if len(program) > capacity:
            raise AddressOverflow(
                f"program has {len(program)} lines, code segment holds {capacity}")

        self._code = [""] * capacity
        for addr, text in enumerate(program):
            self._code[addr] = text
        self.program_length = len(program)
        logger.debug("Loaded %d instructions", len(program))
        return max(len(program) - 1, 0)

    def code_cells(self):
        """(address, text) for every loaded instruction."""
        return [(CODE_START + i, text)
                for i, text in enumerate(self._code[:self.program_length])]

    def data_cells(self):
        """(address, value) for every non-zero data cell."""
        return [(DATA_START + i, value)
                for i, value in enumerate(self._data) if value != 0]


class SymbolTable:
    """Symbol name → data address. Allocation is ascending and permanent."""

    def __init__(self, start: int = DATA_START, end: int = DATA_END):
        self._start = start
        self._end = end
        self._symbols: Dict[str, int] = {}

    def declare(self, name: str) -> int:
        """Allocate the lowest free data address for name.

        Redeclaring a name returns its existing address.
        """
        if name in self._symbols:
            return self._symbols[name]
        used = set(self._symbols.values())
        for addr in range(self._start, self._end + 1):
            if addr not in used:
                self._symbols[name] = addr
                return addr
        raise AddressSpaceExhausted(
            f"no free data address for symbol {name}")

    def resolve(self, name: str) -> int:
        try:
            return self._symbols[name]
        except KeyError:
            raise SymbolNotFound(name) from None

    def name_for(self, addr: int) -> Optional[str]:
        for name, a in self._symbols.items():
            if a == addr:
                return name
        return None

    def items(self):
        """(name, address) pairs in allocation order."""
        return sorted(self._symbols.items(), key=lambda kv: kv[1])

    def addresses(self) -> List[int]:
        return sorted(self._symbols.values())

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)
