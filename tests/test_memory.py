"""
ALI — Address space and symbol table tests

Segment routing, program loading limits, and the allocation order of
DEC'd symbols.
"""

import pytest

from ali.errors import (AddressOverflow, AddressSpaceExhausted, SegmentError,
                        SymbolNotFound)
from ali.mem.memory import CODE, DATA, Memory, SymbolTable


class TestMemoryRouting:
    """One address space, two stores."""

    def test_regions(self):
        mem = Memory()
        assert mem.region(0).kind == CODE
        assert mem.region(127).kind == CODE
        assert mem.region(128).kind == DATA
        assert mem.region(255).kind == DATA
        assert mem.region(256) is None
        assert mem.region(-1) is None

    def test_cells_start_empty(self):
        mem = Memory()
        assert mem.read(0) == ""
        assert mem.read(200) == 0

    def test_data_round_trip(self):
        mem = Memory()
        mem.write_data(130, -42)
        assert mem.read_data(130) == -42
        assert mem.read(130) == -42
        assert mem.data_cells() == [(130, -42)]

    def test_cross_segment_access_rejected(self):
        mem = Memory()
        with pytest.raises(SegmentError):
            mem.write_data(5, 1)
        with pytest.raises(SegmentError):
            mem.read_instruction(128)
        with pytest.raises(SegmentError):
            mem.write_instruction(300, "HLT")


class TestProgramLoading:
    def test_line_n_goes_to_address_n(self):
        mem = Memory()
        end = mem.load_program(["DEC X", "  LDI 3  ", "HLT"])
        assert end == 2
        assert mem.read_instruction(0) == "DEC X"
        assert mem.read_instruction(1) == "LDI 3"
        assert mem.code_cells() == [(0, "DEC X"), (1, "LDI 3"), (2, "HLT")]

    def test_full_segment_fits(self):
        mem = Memory()
        assert mem.load_program(["XCH"] * 128) == 127

    def test_oversized_program_rejected(self):
        """129 lines would spill into data memory — nothing is loaded."""
        mem = Memory()
        with pytest.raises(AddressOverflow):
            mem.load_program(["XCH"] * 129)
        assert mem.program_length == 0
        assert mem.read_instruction(0) == ""

    def test_empty_program(self):
        mem = Memory()
        assert mem.load_program([]) == 0
        assert mem.code_cells() == []


class TestSymbolTable:
    @pytest.mark.parametrize("count", [1, 5, 128])
    def test_addresses_ascend_from_128(self, count):
        """N distinct declarations → 128, 129, ... with no duplicates."""
        table = SymbolTable()
        addrs = [table.declare(f"V{i}") for i in range(count)]
        assert addrs[0] == 128
        assert addrs == list(range(128, 128 + count))
        assert len(set(addrs)) == count

    def test_redeclare_keeps_address(self):
        table = SymbolTable()
        assert table.declare("X") == 128
        assert table.declare("Y") == 129
        assert table.declare("X") == 128
        assert len(table) == 2

    def test_exhausted(self):
        table = SymbolTable()
        for i in range(128):
            table.declare(f"V{i}")
        with pytest.raises(AddressSpaceExhausted):
            table.declare("ONE_MORE")

    def test_resolve(self):
        table = SymbolTable()
        table.declare("X")
        assert table.resolve("X") == 128
        assert table.name_for(128) == "X"
        assert table.name_for(129) is None
        assert "X" in table

    def test_resolve_missing(self):
        table = SymbolTable()
        with pytest.raises(SymbolNotFound) as info:
            table.resolve("Y")
        assert info.value.symbol == "Y"
        assert not info.value.fatal
        assert "Symbol Y not found" in str(info.value)
