"""Machine state, driver accessors and program loading."""

import pytest

from chip8 import Machine, RomTooLarge, load, load_rom
from chip8 import config
from chip8.machine import fontset


class TestInitialState:
    def test_power_on(self):
        m = Machine()
        assert len(m.memory) == 4096
        assert bytes(m.memory[:80]) == bytes(fontset)
        assert not any(m.memory[80:])
        assert m.V == [0] * 16
        assert m.I == 0
        assert m.pc == 0x200
        assert m.sp == 0
        assert m.framebuffer().shape == (32, 64)
        assert not m.framebuffer().any()
        assert not m.keys.any()
        assert m.delay_timer == 0 and m.sound_timer == 0
        assert not m.awaiting_key
        assert m.is_dirty()

    def test_reset_discards_program(self):
        m = Machine()
        load(m, b"\x12\x00")
        m.V[3] = 9
        m.pc = 0x300
        m.reset()
        assert m.memory[0x200] == 0
        assert m.V[3] == 0
        assert m.pc == 0x200
        assert bytes(m.memory[:80]) == bytes(fontset)

    def test_dump_state(self):
        m = Machine()
        m.V[0xA] = 0xBE
        m.I = 0x123
        text = m.dump_state()
        assert "pc: 0x200" in text
        assert "i: 0x123" in text
        assert "sp: 0" in text
        assert "vA: 0xBE" in text
        assert "stack[0]: 0x000" in text


class TestDisplayDriver:
    def test_dirty_flag(self):
        m = Machine()
        m.clear_dirty()
        assert not m.is_dirty()

    def test_framebuffer_is_read_only(self):
        m = Machine()
        fb = m.framebuffer()
        with pytest.raises(ValueError):
            fb[0, 0] = 1
        m.vram[0, 0] = 1
        assert fb[0, 0] == 1


class TestInputDriver:
    def test_set_key(self):
        m = Machine()
        m.set_key(0xF, True)
        assert m.keys[0xF]
        m.set_key(0xF, False)
        assert not m.keys[0xF]

    @pytest.mark.parametrize("index", [-1, 16])
    def test_set_key_out_of_range(self, index):
        with pytest.raises(ValueError):
            Machine().set_key(index, True)

    def test_deliver_key_without_wait_is_noop(self):
        m = Machine()
        assert m.deliver_key(5) is False
        assert m.V == [0] * 16

    def test_deliver_key_out_of_range(self):
        m = Machine()
        m.awaiting_key = True
        m.key_register = 2
        with pytest.raises(ValueError):
            m.deliver_key(16)
        assert m.awaiting_key


class TestClockDriver:
    def test_tick_decrements_and_clamps(self):
        m = Machine()
        m.delay_timer = 2
        m.sound_timer = 1
        m.tick_timers()
        assert (m.delay_timer, m.sound_timer) == (1, 0)
        m.tick_timers()
        m.tick_timers()
        assert (m.delay_timer, m.sound_timer) == (0, 0)


class TestLoader:
    def test_load_at_program_start(self):
        m = Machine()
        assert load(m, b"\x60\x01\x12\x02") == 4
        assert bytes(m.memory[0x200:0x204]) == b"\x60\x01\x12\x02"

    def test_load_fills_all_available_memory(self):
        m = Machine()
        data = bytes([0xAA]) * (4096 - 0x200)
        load(m, data)
        assert m.memory[0xFFF] == 0xAA

    def test_too_large_writes_nothing(self):
        m = Machine()
        with pytest.raises(RomTooLarge) as info:
            load(m, bytes([0xAA]) * (4096 - 0x200 + 1))
        assert info.value.size == 3585
        assert info.value.capacity == 3584
        assert not any(m.memory[0x200:])

    def test_load_rom_file(self, tmp_path):
        rom = tmp_path / "test.ch8"
        rom.write_bytes(b"\x00\xE0\x12\x00")
        m = Machine()
        assert load_rom(m, str(rom)) == 4
        assert bytes(m.memory[0x200:0x204]) == b"\x00\xE0\x12\x00"

    def test_load_rom_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_rom(Machine(), str(tmp_path / "missing.ch8"))


class TestLogging:
    def test_log_is_silent_by_default(self, capsys, monkeypatch):
        monkeypatch.setattr(config, "logsOn", False)
        config.log("hidden")
        assert capsys.readouterr().out == ""

    def test_trace_not_formatted_when_disabled(self, monkeypatch):
        from chip8 import step
        from chip8 import opcodes

        def fail(*args, **kwargs):
            raise AssertionError("trace formatted with logsOn off")

        monkeypatch.setattr(config, "logsOn", False)
        monkeypatch.setattr(opcodes.Instruction, "__str__", fail)
        m = Machine()
        load(m, b"\x6A\x2F")
        step(m)
        assert m.V[0xA] == 0x2F

    def test_trace_when_enabled(self, capsys, monkeypatch):
        from chip8 import step

        monkeypatch.setattr(config, "logsOn", True)
        m = Machine()
        load(m, b"\x6A\x2F")
        step(m)
        assert "200: 6A2F  LD VA, 0x2F" in capsys.readouterr().out
