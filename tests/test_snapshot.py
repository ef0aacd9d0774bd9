"""
ALI — State snapshot rendering tests
"""

from ali import render, run_program, take_snapshot
from ali.emu import ALIEmulator


class TestRender:
    def test_registers_and_data(self):
        emu = run_program(["DEC X", "LDI 10", "STR X", "LDI 0", "XCH",
                           "LDA X", "ADD", "HLT"])
        text = render(take_snapshot(emu))
        assert "---- Registers ----" in text
        assert "A/Accum: 10" in text
        assert "B/Data: 0" in text
        assert "PC: 8" in text
        assert "ZRB: 0" in text
        assert "OFB: 0" in text
        assert "128   X      :    10" in text
        assert "129 - 255  :       0" in text

    def test_pc_marker(self):
        emu = ALIEmulator()
        emu.load_program(["DEC X", "LDI 10", "HLT"])
        emu.step()
        lines = render(emu.snapshot()).splitlines()
        assert "   0: DEC X" in lines
        assert "=> 1: LDI 10" in lines
        assert "   2: HLT" in lines

    def test_no_symbols(self):
        emu = ALIEmulator()
        emu.load_program(["HLT"])
        text = render(emu.snapshot())
        assert "128 - 255  :       0" in text

    def test_full_data_segment_has_no_free_range(self):
        emu = ALIEmulator()
        emu.load_program(["HLT"])
        for i in range(128):
            emu.symbols.declare(f"V{i}")
        snap = emu.snapshot()
        assert snap.free_start is None
        assert " - 255" not in render(snap)
        assert len(snap.data) == 128
