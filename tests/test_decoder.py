"""
ALI — Decoder tests

Instruction text → Instruction(Opcode, operand), and the errors for
text that is not a valid instruction.
"""

import pytest

from ali.cpu.decoder import OPCODES, Instruction, Opcode, decode_instruction, jump_target
from ali.errors import MalformedInstruction, UnknownOpcode


class TestOpcodeTable:
    def test_eleven_opcodes(self):
        assert len(Opcode) == 11
        assert set(OPCODES) == set(Opcode)


class TestDecode:
    def test_no_operand(self):
        for mnem in ("XCH", "ADD", "SUB", "HLT"):
            instr = decode_instruction(mnem)
            assert instr.opcode is Opcode(mnem)
            assert instr.operand is None

    def test_extra_tokens_ignored(self):
        assert decode_instruction("HLT now").operand is None
        assert decode_instruction("LDA X Y").operand == "X"

    def test_symbol_operand(self):
        instr = decode_instruction("DEC COUNT")
        assert instr == Instruction(Opcode.DEC, "COUNT", "DEC COUNT")
        assert str(instr) == "DEC COUNT"

    def test_integer_operand(self):
        assert decode_instruction("LDI 42").operand == 42
        assert decode_instruction("LDI -7").operand == -7
        assert decode_instruction("LDI 99999999999").operand == 99999999999

    def test_whitespace(self):
        instr = decode_instruction("  JMP\t12  ")
        assert instr.opcode is Opcode.JMP
        assert instr.operand == 12

    def test_jump_target_is_one_before(self):
        assert jump_target(decode_instruction("JMP 5")) == 4
        assert jump_target(decode_instruction("JZS 0")) == -1


class TestDecodeErrors:
    def test_unknown_opcode(self):
        with pytest.raises(UnknownOpcode) as info:
            decode_instruction("XYZ 1", address=3)
        assert info.value.address == 3
        assert info.value.instruction == "XYZ 1"
        assert "Unknown opcode: XYZ" in str(info.value)

    def test_opcodes_are_case_sensitive(self):
        with pytest.raises(UnknownOpcode):
            decode_instruction("hlt")

    def test_missing_operand(self):
        for text in ("DEC", "LDA", "LDI", "STR", "JMP", "JZS", "JVS"):
            with pytest.raises(MalformedInstruction):
                decode_instruction(text)

    def test_non_integer_operand(self):
        with pytest.raises(MalformedInstruction):
            decode_instruction("LDI ten")
        with pytest.raises(MalformedInstruction):
            decode_instruction("JMP here")

    def test_empty_line(self):
        with pytest.raises(MalformedInstruction):
            decode_instruction("   ")
