"""
ALI — Main Emulator Class

Integrates:
  - Register file (cpu/regs.py)
  - Accumulator arithmetic (cpu/alu.py)
  - Instruction decoder (cpu/decoder.py)
  - Address space + symbol table (mem/memory.py)

Execution model (one instruction per step):
  1. Fetch instruction text at PC
  2. Decode it into an Instruction
  3. Execute the handler → update registers, memory, symbols, flags
  4. PC += 1, bump the executed and budget counters
  5. Budget reached → pause and ask the decision provider
  6. Check completion

Jumps write target - 1 into PC so the increment in step 4 lands on the
target.

Completion rules (kept as the classic ALI behaved):
  - step(): done only when HLT executes and the incremented PC equals
    the end-of-program address (address of the last loaded line).
  - run():  done as soon as any HLT executes.

Stop reasons:
  - HALT:    machine is halted but not done (HLT mid-program in step mode)
  - DONE:    program completed
  - ABORT:   budget pause answered with "stop"
  - ILLEGAL: unknown opcode
  - ERROR:   malformed instruction, data segment full, PC out of range
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

from .config import DEFAULT_INSTRUCTION_BUDGET
from .cpu import alu
from .cpu.decoder import Instruction, Opcode, decode_instruction, jump_target
from .cpu.regs import Registers
from .errors import ALIError, AddressOverflow, SymbolNotFound, UnknownOpcode
from .mem.memory import CODE, Memory, SymbolTable
from .snapshot import Snapshot, take_snapshot

logger = logging.getLogger(__name__)

# decide(instructions_since_last_pause) -> True to resume, False to abort
DecisionProvider = Callable[[int], bool]


def abort_on_budget(count: int) -> bool:
    """Default decision provider: stop at the first budget pause."""
    return False


def continue_on_budget(count: int) -> bool:
    return True


class StopReason(Enum):
    HALT = 'HALT'
    DONE = 'DONE'
    ABORT = 'ABORT'
    ILLEGAL = 'ILLEGAL'
    ERROR = 'ERROR'


class EngineState(Enum):
    RUNNING = 'RUNNING'
    PAUSED = 'PAUSED'
    HALTED = 'HALTED'
    DONE = 'DONE'


class ALIEmulator:
    """Assembly Language Interpreter.

    Usage:
        emu = ALIEmulator(decide=continue_on_budget)
        emu.load_program(["DEC X", "LDI 10", "STR X", "HLT"])
        emu.run()
        print(emu.regs.A, emu.mem.read_data(emu.symbols.resolve("X")))
    """

    def __init__(self, instruction_budget: int = DEFAULT_INSTRUCTION_BUDGET,
                 decide: Optional[DecisionProvider] = None,
                 trace: bool = False):
        self.regs = Registers()
        self.mem = Memory()
        self.symbols = SymbolTable()

        self.instruction_budget = instruction_budget
        self._decide = decide or abort_on_budget
        self._budget_count = 0
        self._paused = False

        self.end_address = 0
        self.error: Optional[ALIError] = None
        self.stop_reason: Optional[StopReason] = None

        self._trace = trace
        self._trace_output: List[str] = []

        self._dispatch = self._build_dispatch()

    # ══════════════════════════════════════════════
    # Loading
    # ══════════════════════════════════════════════

    def load_program(self, path_or_lines) -> int:
        """Load a program file (str/Path) or a list of instruction lines.

        Returns the end-of-program address.
        """
        if isinstance(path_or_lines, (str, Path)):
            text = Path(path_or_lines).read_text(encoding='utf-8')
            lines = text.splitlines()
            logger.info("Loading %s", path_or_lines)
        else:
            lines = list(path_or_lines)
        self.end_address = self.mem.load_program(lines)
        return self.end_address

    def load_source(self, text: str) -> int:
        """Load a program from a string, one instruction per line."""
        self.end_address = self.mem.load_program(text.splitlines())
        return self.end_address

    # ══════════════════════════════════════════════
    # State
    # ══════════════════════════════════════════════

    @property
    def done(self) -> bool:
        return self.regs.done

    @property
    def halted(self) -> bool:
        return self.regs.halt

    @property
    def state(self) -> EngineState:
        if self._paused:
            return EngineState.PAUSED
        if self.error is not None:
            return EngineState.HALTED
        if self.regs.done:
            return EngineState.DONE
        if self.regs.halt:
            return EngineState.HALTED
        return EngineState.RUNNING

    @property
    def trace_output(self) -> List[str]:
        return self._trace_output

    def snapshot(self) -> Snapshot:
        return take_snapshot(self)

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def step(self) -> Optional[StopReason]:
        """Execute one instruction. Returns a StopReason once the machine
        stops, else None. No-op on a halted machine.

        Fatal instruction errors halt the machine, set done, and are
        re-raised.
        """
        if self.regs.halt:
            return self.stop_reason or StopReason.HALT

        instr = self._execute_next()

        if self._budget_reached() and not self._pause():
            return self._stop(StopReason.ABORT)

        if instr.opcode is Opcode.HLT and self.regs.PC == self.end_address:
            self.regs.done = True
            return self._stop(StopReason.DONE)

        if self.regs.halt:
            return self._stop(StopReason.HALT)
        return None

    def run(self) -> StopReason:
        """Run until any HLT executes, a budget pause is aborted, or a
        fatal error is raised."""
        if self.regs.halt:
            if not self.regs.done:
                # halted by a mid-program HLT while stepping
                self.regs.done = True
                self.stop_reason = StopReason.DONE
            return self.stop_reason or StopReason.DONE

        while True:
            instr = self._execute_next()

            if instr.opcode is Opcode.HLT:
                self.regs.done = True
                return self._stop(StopReason.DONE)

            if self._budget_reached() and not self._pause():
                return self._stop(StopReason.ABORT)

    def _execute_next(self) -> Instruction:
        pc = self.regs.PC
        try:
            text = self._fetch(pc)
            instr = decode_instruction(text, pc)
            self._dispatch[instr.opcode](instr)
        except ALIError as e:
            self._fail(e)
            raise

        self.regs.PC += 1
        self.regs.executed += 1
        self._budget_count += 1

        logger.debug("%3d: %-12s %s", pc, instr, self.regs.display())
        if self._trace:
            self._trace_output.append(
                f"{pc:3d}: {str(instr):<12s} {self.regs.display()}")
        return instr

    def _fetch(self, pc: int) -> str:
        region = self.mem.region(pc)
        if region is None or region.kind != CODE:
            raise AddressOverflow(
                "program counter left the instruction segment", pc)
        return self.mem.read_instruction(pc)

    def _fail(self, error: ALIError):
        self.error = error
        self.regs.halt = True
        self.regs.done = True
        self.stop_reason = (StopReason.ILLEGAL if isinstance(error, UnknownOpcode)
                            else StopReason.ERROR)
        logger.error("%s", error)

    def _stop(self, reason: StopReason) -> StopReason:
        self.stop_reason = reason
        return reason

    # ══════════════════════════════════════════════
    # Instruction budget
    # ══════════════════════════════════════════════

    def _budget_reached(self) -> bool:
        return (self.instruction_budget > 0
                and self._budget_count >= self.instruction_budget)

    def _pause(self) -> bool:
        """Suspend for the decision provider. True if execution resumes."""
        self._paused = True
        logger.info("Execution paused after %d instructions.", self._budget_count)
        try:
            resume = self._decide(self._budget_count)
        finally:
            self._paused = False

        if resume:
            logger.info("Resuming execution...")
            self._budget_count = 0
            return True

        logger.info("Halting program...")
        self.regs.halt = True
        self.regs.done = True
        return False

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════

    def _build_dispatch(self) -> dict:
        """Opcode → handler. Covers every member of Opcode."""
        return {
            # ── Memory ──
            Opcode.DEC: self._op_dec,
            Opcode.LDA: self._op_lda,
            Opcode.LDI: self._op_ldi,
            Opcode.STR: self._op_str,

            # ── Arithmetic ──
            Opcode.XCH: self._op_xch,
            Opcode.ADD: self._op_add,
            Opcode.SUB: self._op_sub,

            # ── Control ──
            Opcode.JMP: self._op_jmp,
            Opcode.JZS: self._op_jzs,
            Opcode.JVS: self._op_jvs,
            Opcode.HLT: self._op_hlt,
        }

    def _op_dec(self, instr):
        addr = self.symbols.declare(instr.operand)
        logger.debug("DEC %s -> %d", instr.operand, addr)

    def _op_lda(self, instr):
        try:
            addr = self.symbols.resolve(instr.operand)
        except SymbolNotFound as e:
            logger.warning("%s", e)
            return
        self.regs.A = self.mem.read_data(addr)

    def _op_ldi(self, instr):
        self.regs.A = instr.operand

    def _op_str(self, instr):
        try:
            addr = self.symbols.resolve(instr.operand)
        except SymbolNotFound as e:
            logger.warning("%s", e)
            return
        self.mem.write_data(addr, self.regs.A)

    def _op_xch(self, instr):
        self.regs.exchange()

    def _op_add(self, instr):
        self.regs.A, flags = alu.add(self.regs.A, self.regs.B)
        self.regs.set_ZV(flags)

    def _op_sub(self, instr):
        self.regs.A, flags = alu.sub(self.regs.A, self.regs.B)
        self.regs.set_ZV(flags)

    def _op_jmp(self, instr):
        self.regs.PC = jump_target(instr)

    def _op_jzs(self, instr):
        if self.regs.zero:
            self.regs.PC = jump_target(instr)

    def _op_jvs(self, instr):
        if self.regs.overflow:
            self.regs.PC = jump_target(instr)

    def _op_hlt(self, instr):
        self.regs.halt = True
