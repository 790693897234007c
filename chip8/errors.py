"""Exceptions raised by the CHIP-8 core."""


class Chip8Error(Exception):
    pass


class RomTooLarge(Chip8Error):
    """The program image does not fit between 0x200 and the end of memory."""

    def __init__(self, size, capacity):
        self.size = size
        self.capacity = capacity
        super().__init__(
            "ROM is %d bytes, only %d bytes available from 0x200" % (size, capacity))


class MachineFault(Chip8Error):
    """Fatal execution fault. The machine cannot safely continue.

    `state` is filled in with the machine dump by the interpreter before the
    fault leaves ``step()``.
    """

    reason = "Machine fault"

    def __init__(self, opcode, pc, state=""):
        super().__init__(opcode, pc)
        self.opcode = opcode
        self.pc = pc
        self.state = state

    def __str__(self):
        if self.opcode is None:
            message = "%s: pc 0x%03X" % (self.reason, self.pc)
        else:
            message = "%s: opcode %04X at pc 0x%03X" % (self.reason, self.opcode, self.pc)
        if self.state:
            message += "\n" + self.state
        return message


class UnknownOpcode(MachineFault):
    reason = "Unknown opcode"


class StackOverflow(MachineFault):
    reason = "Stack overflow on CALL"


class StackUnderflow(MachineFault):
    reason = "Stack underflow on RET"


class ProgramCounterError(MachineFault):
    reason = "PC out of bounds"
