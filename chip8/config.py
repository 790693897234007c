# ---- Configuration ----
# Display: 64x32 monochrome, blown up by `scale` in the window.
scale = 10
width, height = 64, 32
window_width, window_height = width * scale, height * scale

CPU_HZ = 600
TIMER_HZ = 60

# Memory map (Cowgod's reference http://devernay.free.fr/hacks/chip8/C8TECH10.HTM)
MEMORY_SIZE = 4096
FONT_START = 0x000
PROGRAM_START = 0x200
NUM_REGISTERS = 16
STACK_SIZE = 16
NUM_KEYS = 16

# Fx55 / Fx65 leave I alone on modern interpreters; True matches the COSMAC VIP
INCREMENT_I_ON_LOAD_STORE = False

#make it true if you want the logs (F1 toggles it in the window)
logsOn = False


def log(*args):
    if logsOn:
        print(*args)
