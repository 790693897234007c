from chip8 import config
from chip8.config import log
from chip8.errors import RomTooLarge


def load(machine, data):
    """Copy a program image into memory at 0x200. All or nothing."""
    capacity = len(machine.memory) - config.PROGRAM_START
    if len(data) > capacity:
        raise RomTooLarge(len(data), capacity)
    machine.memory[config.PROGRAM_START:config.PROGRAM_START + len(data)] = data
    return len(data)


def load_rom(machine, path):
    log("Loading ROM:", path)
    with open(path, "rb") as f:
        data = f.read()
    size = load(machine, data)
    log("Read %d bytes of data" % size)
    return size
