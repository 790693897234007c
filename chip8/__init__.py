"""CHIP-8 virtual machine: machine state, interpreter and program loader.

The pyglet front end lives in ``chip8.window`` and is only imported by
``python -m chip8``.
"""

from chip8.errors import (
    Chip8Error,
    MachineFault,
    ProgramCounterError,
    RomTooLarge,
    StackOverflow,
    StackUnderflow,
    UnknownOpcode,
)
from chip8.interpreter import run, step
from chip8.loader import load, load_rom
from chip8.machine import Machine
from chip8.opcodes import Instruction, decode

__version__ = "0.1.0"
