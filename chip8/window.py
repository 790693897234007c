# pyglet host for the interpreter.
# We subclass pyglet's Window (that handles graphics and keyboard input) and
# drive the Machine from pyglet's clock:
#   tick        - CPU, config.CPU_HZ times a second
#   _timer_tick - delay / sound timers at 60Hz
#   on_draw     - rebuilds the image when the framebuffer is dirty, blits every frame
# Everything runs on pyglet's event loop thread, so the CPU and the timers
# never touch the machine at the same time.

import pyglet
from pyglet.window import key
import numpy as np

from chip8 import config
from chip8.config import log
from chip8.errors import Chip8Error
from chip8.interpreter import step
from chip8.screen import to_rgba

#map binding keys
keymap = {
    key._1: 0x1, key._2: 0x2, key._3: 0x3, key._4: 0xC,
    key.Q: 0x4, key.W: 0x5, key.E: 0x6, key.R: 0xD,
    key.A: 0x7, key.S: 0x8, key.D: 0x9, key.F: 0xE,
    key.Z: 0xA, key.X: 0x0, key.C: 0xB, key.V: 0xF,
}


class Chip8Window(pyglet.window.Window):

    def __init__(self, machine):
        # machine comes in with the ROM already loaded (see main())
        self.machine = machine
        self.fault = None

        super().__init__(
            width=config.window_width,
            height=config.window_height,
            caption="CHIP-8 Emulator",
            vsync=False
        )

        # Pre-allocated small framebuffer (64x32 RGBA), upscaled with numpy.repeat
        self._small_framebuf = np.zeros((config.height, config.width, 4), dtype=np.uint8)
        self._small_framebuf[..., 3] = 255

        #creating ImageData once (initialized empty)
        self.image = pyglet.image.ImageData(
            config.window_width,
            config.window_height,
            'RGBA',
            bytes(config.window_width * config.window_height * 4)
        )

        # Schedule the loops
        pyglet.clock.schedule_interval(self.tick, 1 / config.CPU_HZ)
        pyglet.clock.schedule_interval(self._timer_tick, 1 / config.TIMER_HZ)

    # ---- CPU cycle ----
    def tick(self, dt):
        try:
            step(self.machine)
        except Chip8Error as e:
            print("Emulation error:", e)
            self.fault = e
            self._stop()
            self.close()

    def _stop(self):
        pyglet.clock.unschedule(self.tick)
        pyglet.clock.unschedule(self._timer_tick)

    # ---- timers ----
    def _timer_tick(self, dt):
        self.machine.tick_timers()

    # ---- Drawing ----
    def on_draw(self):
        # rebuild the image only when the framebuffer changed, but blit every
        # frame so both back buffers always hold the screen
        if self.machine.is_dirty():
            scaled = to_rgba(self.machine.framebuffer(), config.scale, self._small_framebuf)
            #updates existing image without creating new object
            self.image.set_data('RGBA', config.window_width * 4, scaled.tobytes())
            self.machine.clear_dirty()

        self.clear()
        self.image.blit(0, 0)

    # ---- Input ----
    def on_key_press(self, symbol, modifiers):
        if symbol == key.ESCAPE:
            self.close()
        if symbol == key.F1:
            config.logsOn = not config.logsOn
            print("logsOn:", config.logsOn)
        if symbol in keymap:
            self.machine.set_key(keymap[symbol], True)
            if self.machine.deliver_key(keymap[symbol]):
                log("Key %X delivered to V%X" % (keymap[symbol], self.machine.key_register))

    def on_key_release(self, symbol, modifiers):
        if symbol in keymap:
            self.machine.set_key(keymap[symbol], False)

    def on_close(self):
        self._stop()
        super().on_close()
