# Fetch / decode / execute.
# step() runs exactly one instruction. PC is bumped past the instruction before
# the handler runs, so jumps simply overwrite it and skips add another 2.
# Handlers may clobber VF (carry, borrow, shifted-out bit, sprite collision);
# that is part of the instruction set, VF stays an ordinary register otherwise.

from chip8 import config
from chip8.config import log
from chip8.errors import MachineFault, ProgramCounterError, StackOverflow, StackUnderflow
from chip8.opcodes import decode

ADDRESS_MASK = config.MEMORY_SIZE - 1


def step(machine):
    """Execute one instruction and return it.

    Returns None without touching anything while an Fx0A is waiting for a
    key. Any MachineFault leaves PC on the faulting instruction and carries
    a dump of the machine state.
    """
    if machine.awaiting_key:
        return None

    pc = machine.pc
    try:
        # guard pc bounds
        if pc < 0 or pc + 1 >= len(machine.memory):
            raise ProgramCounterError(None, pc)
        instruction = decode(machine.fetch(), pc)
        if config.logsOn:
            log("%03X: %04X  %s" % (pc, instruction.opcode, instruction))

        machine.pc = pc + 2
        handlers[instruction.op](machine, instruction)
    except MachineFault as fault:
        machine.pc = pc
        fault.pc = pc
        fault.state = machine.dump_state()
        raise
    return instruction


def run(machine, cycles):
    """Step up to `cycles` times, stopping early on a key wait."""
    for _ in range(cycles):
        if step(machine) is None:
            break


# ---- Opcode Handlers ----

def skip(machine):
    machine.pc += 2


# 00E0 - Clear the display
def op_CLS(m, ins):
    m.vram[:] = 0
    m.should_draw = True


# 00EE - Return from subroutine
def op_RET(m, ins):
    if m.sp == 0:
        raise StackUnderflow(ins.opcode, m.pc - 2)
    m.sp -= 1
    m.pc = int(m.stack[m.sp])


# 0nnn - SYS call, ignored on modern interpreters
def op_SYS(m, ins):
    log("SYS call ignored (0nnn)")


# 1nnn - Jump to address nnn
def op_JP(m, ins):
    m.pc = ins.nnn


# 2nnn - Call subroutine at nnn
def op_CALL(m, ins):
    if m.sp >= config.STACK_SIZE:
        raise StackOverflow(ins.opcode, m.pc - 2)
    m.stack[m.sp] = m.pc
    m.sp += 1
    m.pc = ins.nnn


# 3xkk - Skip next instruction if Vx == kk
def op_SE(m, ins):
    if m.V[ins.x] == ins.kk:
        skip(m)


# 4xkk - Skip next instruction if Vx != kk
def op_SNE(m, ins):
    if m.V[ins.x] != ins.kk:
        skip(m)


# 5xy0 - Skip next instruction if Vx == Vy
def op_SE_VX_VY(m, ins):
    if m.V[ins.x] == m.V[ins.y]:
        skip(m)


# 6xkk - Set Vx = kk
def op_LD(m, ins):
    m.V[ins.x] = ins.kk


# 7xkk - Add immediate, no carry
def op_ADD(m, ins):
    m.V[ins.x] = (m.V[ins.x] + ins.kk) & 0xFF


# 8xy0..8xyE - the flag is written last so it wins when x is F
def op_LD_VX_VY(m, ins):
    m.V[ins.x] = m.V[ins.y]


def op_OR(m, ins):
    m.V[ins.x] |= m.V[ins.y]


def op_AND(m, ins):
    m.V[ins.x] &= m.V[ins.y]


def op_XOR(m, ins):
    m.V[ins.x] ^= m.V[ins.y]


def op_ADD_VX_VY(m, ins):
    total = m.V[ins.x] + m.V[ins.y]
    m.V[ins.x] = total & 0xFF
    m.V[0xF] = 1 if total > 0xFF else 0


def op_SUB(m, ins):
    not_borrow = 1 if m.V[ins.x] > m.V[ins.y] else 0
    m.V[ins.x] = (m.V[ins.x] - m.V[ins.y]) & 0xFF
    m.V[0xF] = not_borrow


def op_SHR(m, ins):
    lsb = m.V[ins.x] & 1
    m.V[ins.x] >>= 1
    m.V[0xF] = lsb


def op_SUBN(m, ins):
    not_borrow = 1 if m.V[ins.y] > m.V[ins.x] else 0
    m.V[ins.x] = (m.V[ins.y] - m.V[ins.x]) & 0xFF
    m.V[0xF] = not_borrow


def op_SHL(m, ins):
    msb = (m.V[ins.x] >> 7) & 1
    m.V[ins.x] = (m.V[ins.x] << 1) & 0xFF
    m.V[0xF] = msb


# 9xy0 - Skip next instruction if Vx != Vy
def op_SNE_VX_VY(m, ins):
    if m.V[ins.x] != m.V[ins.y]:
        skip(m)


# Annn - Set I = nnn
def op_LD_I(m, ins):
    m.I = ins.nnn


# Bnnn - Jump to address nnn + V0
def op_JP_V0(m, ins):
    m.pc = (ins.nnn + m.V[0]) & ADDRESS_MASK


# Cxkk - Vx = random byte AND kk
def op_RND(m, ins):
    m.V[ins.x] = m.rng.getrandbits(8) & ins.kk


# Dxyn - Draw n-byte sprite from memory[I] at (Vx, Vy), VF = collision.
# The start point and every pixel wrap around both screen edges.
def op_DRW(m, ins):
    px = m.V[ins.x] % config.width
    py = m.V[ins.y] % config.height
    m.V[0xF] = 0
    for row in range(ins.n):
        sprite = m.memory[(m.I + row) & ADDRESS_MASK]
        if sprite == 0:
            continue
        vy = (py + row) % config.height
        for bit in range(8):
            if sprite & (0x80 >> bit):
                vx = (px + bit) % config.width
                if m.vram[vy, vx]:
                    m.V[0xF] = 1
                m.vram[vy, vx] ^= 1
    m.should_draw = True


# Ex9E / ExA1 - Skip if key Vx is / is not pressed
def op_SKP(m, ins):
    if m.keys[m.V[ins.x] & 0xF]:
        skip(m)


def op_SKNP(m, ins):
    if not m.keys[m.V[ins.x] & 0xF]:
        skip(m)


# Fx07..Fx65 - timers, memory, I, and key input
def op_LD_VX_DT(m, ins):
    m.V[ins.x] = m.delay_timer


# Fx0A - stall until Machine.deliver_key() fills Vx
def op_LD_VX_K(m, ins):
    m.awaiting_key = True
    m.key_register = ins.x


def op_LD_DT(m, ins):
    m.delay_timer = m.V[ins.x]


def op_LD_ST(m, ins):
    m.sound_timer = m.V[ins.x]


def op_ADD_I(m, ins):
    m.I = (m.I + m.V[ins.x]) & 0xFFFF


def op_LD_F(m, ins):
    m.I = m.V[ins.x] * 5


def op_LD_B(m, ins):
    v = m.V[ins.x]
    m.memory[m.I & ADDRESS_MASK] = v // 100
    m.memory[(m.I + 1) & ADDRESS_MASK] = (v // 10) % 10
    m.memory[(m.I + 2) & ADDRESS_MASK] = v % 10


def op_LD_MEM_VX(m, ins):
    for i in range(ins.x + 1):
        m.memory[(m.I + i) & ADDRESS_MASK] = m.V[i]
    if m.increment_index:
        m.I = (m.I + ins.x + 1) & 0xFFFF


def op_LD_VX_MEM(m, ins):
    for i in range(ins.x + 1):
        m.V[i] = m.memory[(m.I + i) & ADDRESS_MASK]
    if m.increment_index:
        m.I = (m.I + ins.x + 1) & 0xFFFF


# dispatch table, one handler per decoded op
handlers = {
    "CLS": op_CLS,
    "RET": op_RET,
    "SYS": op_SYS,
    "JP": op_JP,
    "CALL": op_CALL,
    "SE": op_SE,
    "SNE": op_SNE,
    "SE_VX_VY": op_SE_VX_VY,
    "LD": op_LD,
    "ADD": op_ADD,
    "LD_VX_VY": op_LD_VX_VY,
    "OR": op_OR,
    "AND": op_AND,
    "XOR": op_XOR,
    "ADD_VX_VY": op_ADD_VX_VY,
    "SUB": op_SUB,
    "SHR": op_SHR,
    "SUBN": op_SUBN,
    "SHL": op_SHL,
    "SNE_VX_VY": op_SNE_VX_VY,
    "LD_I": op_LD_I,
    "JP_V0": op_JP_V0,
    "RND": op_RND,
    "DRW": op_DRW,
    "SKP": op_SKP,
    "SKNP": op_SKNP,
    "LD_VX_DT": op_LD_VX_DT,
    "LD_VX_K": op_LD_VX_K,
    "LD_DT": op_LD_DT,
    "LD_ST": op_LD_ST,
    "ADD_I": op_ADD_I,
    "LD_F": op_LD_F,
    "LD_B": op_LD_B,
    "LD_MEM_VX": op_LD_MEM_VX,
    "LD_VX_MEM": op_LD_VX_MEM,
}
