# Instruction decode.
# Every instruction is 2 bytes, big-endian. The top nibble picks the family and
# the rest are fields:
#   nnn - lowest 12 bits (address)
#   n   - lowest 4 bits
#   x   - lower 4 bits of the high byte (register)
#   y   - upper 4 bits of the low byte (register)
#   kk  - lowest 8 bits (byte)

from collections import namedtuple

from chip8.errors import UnknownOpcode


class Instruction(namedtuple("Instruction", "op opcode x y n kk nnn")):
    __slots__ = ()

    def __str__(self):
        return SYNTAX[self.op].format(x=self.x, y=self.y, n=self.n, kk=self.kk, nnn=self.nnn)


# decode table: (mask, pattern, op). First match wins, so the exact 00E0/00EE
# words come before the 0nnn catch-all.
OPCODES = [
    (0xFFFF, 0x00E0, "CLS"),
    (0xFFFF, 0x00EE, "RET"),
    (0xF000, 0x0000, "SYS"),

    (0xF000, 0x1000, "JP"),
    (0xF000, 0x2000, "CALL"),
    (0xF000, 0x3000, "SE"),
    (0xF000, 0x4000, "SNE"),
    (0xF00F, 0x5000, "SE_VX_VY"),
    (0xF000, 0x6000, "LD"),
    (0xF000, 0x7000, "ADD"),

    (0xF00F, 0x8000, "LD_VX_VY"),
    (0xF00F, 0x8001, "OR"),
    (0xF00F, 0x8002, "AND"),
    (0xF00F, 0x8003, "XOR"),
    (0xF00F, 0x8004, "ADD_VX_VY"),
    (0xF00F, 0x8005, "SUB"),
    (0xF00F, 0x8006, "SHR"),
    (0xF00F, 0x8007, "SUBN"),
    (0xF00F, 0x800E, "SHL"),

    (0xF00F, 0x9000, "SNE_VX_VY"),
    (0xF000, 0xA000, "LD_I"),
    (0xF000, 0xB000, "JP_V0"),
    (0xF000, 0xC000, "RND"),
    (0xF000, 0xD000, "DRW"),

    (0xF0FF, 0xE09E, "SKP"),
    (0xF0FF, 0xE0A1, "SKNP"),

    (0xF0FF, 0xF007, "LD_VX_DT"),
    (0xF0FF, 0xF00A, "LD_VX_K"),
    (0xF0FF, 0xF015, "LD_DT"),
    (0xF0FF, 0xF018, "LD_ST"),
    (0xF0FF, 0xF01E, "ADD_I"),
    (0xF0FF, 0xF029, "LD_F"),
    (0xF0FF, 0xF033, "LD_B"),
    (0xF0FF, 0xF055, "LD_MEM_VX"),
    (0xF0FF, 0xF065, "LD_VX_MEM"),
]

SYNTAX = {
    "CLS": "CLS",
    "RET": "RET",
    "SYS": "SYS 0x{nnn:03X}",
    "JP": "JP 0x{nnn:03X}",
    "CALL": "CALL 0x{nnn:03X}",
    "SE": "SE V{x:X}, 0x{kk:02X}",
    "SNE": "SNE V{x:X}, 0x{kk:02X}",
    "SE_VX_VY": "SE V{x:X}, V{y:X}",
    "LD": "LD V{x:X}, 0x{kk:02X}",
    "ADD": "ADD V{x:X}, 0x{kk:02X}",
    "LD_VX_VY": "LD V{x:X}, V{y:X}",
    "OR": "OR V{x:X}, V{y:X}",
    "AND": "AND V{x:X}, V{y:X}",
    "XOR": "XOR V{x:X}, V{y:X}",
    "ADD_VX_VY": "ADD V{x:X}, V{y:X}",
    "SUB": "SUB V{x:X}, V{y:X}",
    "SHR": "SHR V{x:X}",
    "SUBN": "SUBN V{x:X}, V{y:X}",
    "SHL": "SHL V{x:X}",
    "SNE_VX_VY": "SNE V{x:X}, V{y:X}",
    "LD_I": "LD I, 0x{nnn:03X}",
    "JP_V0": "JP V0, 0x{nnn:03X}",
    "RND": "RND V{x:X}, 0x{kk:02X}",
    "DRW": "DRW V{x:X}, V{y:X}, {n}",
    "SKP": "SKP V{x:X}",
    "SKNP": "SKNP V{x:X}",
    "LD_VX_DT": "LD V{x:X}, DT",
    "LD_VX_K": "LD V{x:X}, K",
    "LD_DT": "LD DT, V{x:X}",
    "LD_ST": "LD ST, V{x:X}",
    "ADD_I": "ADD I, V{x:X}",
    "LD_F": "LD F, V{x:X}",
    "LD_B": "LD B, V{x:X}",
    "LD_MEM_VX": "LD [I], V{x:X}",
    "LD_VX_MEM": "LD V{x:X}, [I]",
}


def decode(opcode, pc=0):
    """Split a 16-bit word into an Instruction.

    Raises UnknownOpcode for words outside the instruction set; `pc` is only
    used for that report.
    """
    for mask, pattern, op in OPCODES:
        if (opcode & mask) == pattern:
            return Instruction(
                op=op,
                opcode=opcode,
                x=(opcode >> 8) & 0xF,
                y=(opcode >> 4) & 0xF,
                n=opcode & 0xF,
                kk=opcode & 0xFF,
                nnn=opcode & 0x0FFF,
            )
    raise UnknownOpcode(opcode, pc)
