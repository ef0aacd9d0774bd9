"""
ALI — Machine state snapshot + text rendering

take_snapshot() copies the inspectable state out of an emulator;
render() formats it in the classic ALI layout:

    ---- Registers ----
    A/Accum: 10
    B/Data: 0
    PC: 8
    ZRB: 0
    OFB: 0
    ---- Instruction Memory ----
       0: DEC X
    => 1: LDI 10
    ---- Data Memory ----
    128   X      :    10
    129 - 255  :       0
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .config import DATA_END, DATA_START


@dataclass
class DataCell:
    address: int
    value: int
    symbol: Optional[str] = None


@dataclass
class Snapshot:
    accumulator: int
    data_register: int
    pc: int
    zero: int
    overflow: int
    instructions: List[Tuple[int, str]] = field(default_factory=list)
    data: List[DataCell] = field(default_factory=list)
    free_start: Optional[int] = None   # first unoccupied data address
    free_end: int = DATA_END


def take_snapshot(emu) -> Snapshot:
    regs = emu.regs
    occupied = emu.symbols.addresses()

    cells = {addr: DataCell(addr, emu.mem.read_data(addr), name)
             for name, addr in emu.symbols.items()}
    for addr, value in emu.mem.data_cells():
        if addr not in cells:
            cells[addr] = DataCell(addr, value)

    if occupied:
        free_start = occupied[-1] + 1
    else:
        free_start = DATA_START
    if free_start > DATA_END:
        free_start = None

    return Snapshot(
        accumulator=regs.A,
        data_register=regs.B,
        pc=regs.PC,
        zero=regs.zero,
        overflow=regs.overflow,
        instructions=emu.mem.code_cells(),
        data=[cells[a] for a in sorted(cells)],
        free_start=free_start,
    )


def render(snap: Snapshot) -> str:
    lines = [
        "---- Registers ----",
        f"A/Accum: {snap.accumulator}",
        f"B/Data: {snap.data_register}",
        f"PC: {snap.pc}",
        f"ZRB: {snap.zero}",
        f"OFB: {snap.overflow}",
        "---- Instruction Memory ----",
    ]
    for addr, text in snap.instructions:
        marker = "=>" if addr == snap.pc else "  "
        lines.append(f"{marker} {addr}: {text}")

    lines.append("---- Data Memory ----")
    for cell in snap.data:
        if cell.symbol is not None:
            lines.append("%-5d %-7s: %5d" % (cell.address, cell.symbol, cell.value))
        else:
            lines.append("%-5d: %5d" % (cell.address, cell.value))
    if snap.free_start is not None:
        lines.append("%-d - %d  :       0" % (snap.free_start, snap.free_end))
    lines.append("")
    return "\n".join(lines)
