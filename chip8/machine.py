# CHIP8 machine state:
# Memory - 4096 bytes which hold the fonts (0x000-0x04F) and the ROM (from 0x200).
# Registers - V0..VF, VF doubles as the carry / borrow / collision flag.
# Stack - 16 return addresses with a stack pointer counting the entries in use.
# Output - 64x32 display (every pixel is either on or off (0 || 1)).
# Input - 16 key states plus the wait-for-key latch used by Fx0A.
#----------------------------------------------------------------------------------------------
# Only the interpreter and the three drivers (display, input, clock) touch this state,
# through the accessors at the bottom of the class.

import random

import numpy as np

from chip8 import config

# set fonts (binary pixel patterns)
fontset = [
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
] #notice 80 bytes

GLYPH_SIZE = 5


class Machine:
    """All CHIP-8 state in one place.

    `rng` is the source for the RND instruction. Pass a seed (or any object
    with a ``getrandbits`` method) to make runs reproducible.

    `increment_index` picks the Fx55/Fx65 convention: False leaves I where it
    was, True advances it past the copied registers like the COSMAC VIP did.
    """

    def __init__(self, seed=None, rng=None, increment_index=None):
        self.rng = rng if rng is not None else random.Random(seed)
        if increment_index is None:
            increment_index = config.INCREMENT_I_ON_LOAD_STORE
        self.increment_index = increment_index
        self.reset()

    def reset(self):
        self.memory = bytearray(config.MEMORY_SIZE)
        self.V = [0] * config.NUM_REGISTERS
        self.I = 0
        self.pc = config.PROGRAM_START

        self.stack = np.zeros(config.STACK_SIZE, dtype=np.uint16)
        self.sp = 0

        self.vram = np.zeros((config.height, config.width), dtype=np.uint8)
        self.keys = np.zeros(config.NUM_KEYS, dtype=bool)
        self.delay_timer = 0
        self.sound_timer = 0

        self.should_draw = True
        self.awaiting_key = False
        self.key_register = 0

        # Load fontset into memory
        self.memory[config.FONT_START:config.FONT_START + len(fontset)] = bytes(fontset)

    def fetch(self):
        return (self.memory[self.pc] << 8) | self.memory[self.pc + 1]

    def dump_state(self):
        """Registers, timers and stack as text, for fatal error reports."""
        lines = [
            "pc: 0x%03X" % self.pc,
            "i: 0x%03X" % self.I,
            "sp: %d" % self.sp,
            "delay: %d sound: %d" % (self.delay_timer, self.sound_timer),
        ]
        lines.append("  ".join("v%X: 0x%02X" % (i, v) for i, v in enumerate(self.V)))
        lines.append("  ".join("stack[%d]: 0x%03X" % (i, int(addr))
                               for i, addr in enumerate(self.stack)))
        return "\n".join(lines)

    # ---- Display driver ----
    def is_dirty(self):
        return self.should_draw

    def framebuffer(self):
        view = self.vram.view()
        view.flags.writeable = False
        return view

    def clear_dirty(self):
        self.should_draw = False

    # ---- Input driver ----
    def set_key(self, index, pressed):
        if not 0 <= index < config.NUM_KEYS:
            raise ValueError("key index out of range: %r" % (index,))
        self.keys[index] = bool(pressed)

    def deliver_key(self, value):
        """Finish a pending Fx0A. Returns False when nothing was waiting."""
        if not self.awaiting_key:
            return False
        if not 0 <= value < config.NUM_KEYS:
            raise ValueError("key value out of range: %r" % (value,))
        self.V[self.key_register] = value
        self.awaiting_key = False
        return True

    # ---- Clock driver ----
    def tick_timers(self):
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1
