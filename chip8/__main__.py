import sys

from chip8.errors import Chip8Error
from chip8.loader import load_rom
from chip8.machine import Machine


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) < 1:
        print("Usage: python -m chip8 romfile")
        return 1

    # Load ROM before pyglet comes in so a bad file never opens a window
    machine = Machine()
    try:
        load_rom(machine, argv[0])
    except (OSError, Chip8Error) as e:
        print("Cannot load %s: %s" % (argv[0], e))
        return 1

    import pyglet
    from chip8.window import Chip8Window

    window = Chip8Window(machine)
    pyglet.app.run()
    return 1 if window.fault is not None else 0


if __name__ == "__main__":
    sys.exit(main())
