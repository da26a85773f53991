"""Pygame host loop for the CHIP-8 interpreter.

The host owns pacing: it ticks the timers once per frame, runs a fixed
number of cycles per frame and redraws the window when the interpreter
reports a display change.
"""

import time

import jax
import numpy as np
import pygame

from chip8.state import create_state
from chip8.emulator import load_rom, step, tick_timers, clear_draw_flag
from chip8.errors import Chip8Error
from chip8.constants import SCREEN_WIDTH, SCREEN_HEIGHT, NUM_KEYS
from chip8.rendering import chip8_display_to_rgb, create_color_scheme
from chip8.logging import ConsoleLogger

# COSMAC VIP hex keypad laid over the left side of a QWERTY keyboard:
#   1 2 3 C      1 2 3 4
#   4 5 6 D  ->  q w e r
#   7 8 9 E      a s d f
#   A 0 B F      z x c v
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}

TONE_FREQUENCY = 440.0
SAMPLE_RATE = 44100


def keypad_from_pressed(pressed) -> np.ndarray:
    """Build the 16-slot keypad from a pygame ``get_pressed()`` sequence."""
    keypad = np.zeros(NUM_KEYS, dtype=np.bool_)
    for key, chip8_key in KEY_MAP.items():
        if pressed[key]:
            keypad[chip8_key] = True
    return keypad


class ToneGenerator:
    """Looping sine tone that plays while the sound timer is non-zero."""

    def __init__(self, logger: ConsoleLogger, frequency: float = TONE_FREQUENCY, volume: float = 0.25):
        self.logger = logger
        self.playing = False
        self.sound = None
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
        except pygame.error as e:
            self.logger.warning(f"Audio unavailable, running without sound: {e}")
            return

        sample_rate, _, channels = pygame.mixer.get_init()
        t = np.arange(sample_rate) / sample_rate
        samples = (np.sin(2 * np.pi * frequency * t) * volume * 32767).astype(np.int16)
        if channels > 1:
            samples = np.repeat(samples[:, None], channels, axis=1)
        self.sound = pygame.sndarray.make_sound(np.ascontiguousarray(samples))

    def update(self, sound_timer: int):
        if self.sound is None:
            return
        if sound_timer > 0 and not self.playing:
            self.sound.play(loops=-1)
            self.playing = True
        elif sound_timer == 0 and self.playing:
            self.sound.stop()
            self.playing = False


def draw_display(screen, display, scale: int, on_color, off_color):
    """Blit the display grid onto the window surface."""
    frame = chip8_display_to_rgb(display, scale, on_color, off_color)
    # surfarray expects (width, height, 3)
    surface = pygame.surfarray.make_surface(frame.swapaxes(0, 1))
    screen.blit(surface, (0, 0))
    pygame.display.flip()


def run_emulator(
    rom_path: str,
    scale: int = 10,
    instruction_frequency: int = 500,
    fps: int = 60,
    color_scheme: str = "classic",
    seed: int = None,
    logger: ConsoleLogger = None,
):
    """Open a window and run the program until the window is closed.

    Args:
        rom_path: Path to the CHIP-8 program file
        scale: Window pixels per CHIP-8 pixel
        instruction_frequency: Cycles executed per second
        fps: Frame rate; timers tick once per frame
        color_scheme: Rendering color scheme name
        seed: PRNG seed for CXNN, taken from the clock when None
        logger: Logger for host messages

    Raises:
        LoadError: The program could not be loaded.
        DecodeError, StackUnderflow, MemoryAccessError: The program hit a fatal instruction.
    """
    logger = logger or ConsoleLogger()
    on_color, off_color = create_color_scheme(color_scheme)
    cycles_per_frame = max(1, instruction_frequency // fps)

    if seed is None:
        seed = time.time_ns() & 0xFFFFFFFF
    state = load_rom(create_state(jax.random.PRNGKey(seed)), rom_path)
    logger.info(f"Loaded {rom_path}")

    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale))
        pygame.display.set_caption("CHIP-8")
        clock = pygame.time.Clock()
        tone = ToneGenerator(logger)
        draw_display(screen, state.display, scale, on_color, off_color)

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False

            keypad = keypad_from_pressed(pygame.key.get_pressed())

            state = tick_timers(state)
            tone.update(int(state.sound_timer))

            try:
                for _ in range(cycles_per_frame):
                    state = step(state, keypad)
            except Chip8Error as e:
                logger.error(f"Halted at PC={int(state.pc):03X}: {e}")
                logger.log_state(state, "ERROR")
                raise

            if bool(state.draw_flag):
                draw_display(screen, state.display, scale, on_color, off_color)
                state = clear_draw_flag(state)

            clock.tick(fps)
    finally:
        pygame.quit()
