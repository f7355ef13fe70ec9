"""
A reference host for the emulator: a pygame window acting as the display sink, audio sink and input source, with an
easygui picker acting as the ROM loader.
"""
import logging
import sys

from pathlib import Path
from typing import List, Optional

import easygui
import numpy as np
import pygame

from chipcore.constants import KEY_COUNT
from chipcore.emulator import Emulator
from chipcore.errors import Chip8Error

logger = logging.getLogger(__name__)

SCALE = 12
FRAME_RATE = 60
SOUND_FREQUENCY = 44100
SOUND_BUFFER = 4096
TONE_HZ = 550
GAMES_PATH = str(Path.cwd().joinpath("*.ch8"))
GAME_FILE_TYPES = ["*.ch8", "*.chip8"]

COLOUR_PALETTE = [(0, 0, 0), (0, 255, 0)]

KEY_LOOKUP = {
    pygame.K_1: 1,
    pygame.K_q: 4,
    pygame.K_a: 7,
    pygame.K_z: 10,
    pygame.K_2: 2,
    pygame.K_w: 5,
    pygame.K_s: 8,
    pygame.K_x: 0,
    pygame.K_3: 3,
    pygame.K_e: 6,
    pygame.K_d: 9,
    pygame.K_c: 11,
    pygame.K_4: 12,
    pygame.K_r: 13,
    pygame.K_f: 14,
    pygame.K_v: 15,
}


def make_tone(frequency: int = SOUND_FREQUENCY, tone_hz: int = TONE_HZ, amplitude: int = SOUND_BUFFER) -> np.ndarray:
    """
    Build one second of a sine wave at the given pitch.
    :param frequency: The sample rate.
    :param tone_hz: The pitch of the tone.
    :param amplitude: The peak of the wave.
    :return: The 16-bit samples.
    """
    length = frequency / tone_hz
    omega = np.pi * 2 / length
    x_values = np.arange(int(length)) * omega
    one_cycle = amplitude * np.sin(x_values)
    return np.resize(one_cycle, (frequency,)).astype(np.int16)


class KeyState:
    """
    The input source: tracks which of the 16 CHIP-8 keys are held.
    """
    def __init__(self):
        self.keys: List[bool] = [False] * KEY_COUNT

    def handle_key(self, pygame_key: int, pressed: bool) -> Optional[int]:
        """
        Update the state of the CHIP-8 key mapped to a keyboard key.
        :param pygame_key: The pygame key code.
        :param pressed: True if the key went down, False if it came up.
        :return: The CHIP-8 key which changed, or None if the keyboard key is not mapped.
        """
        key = KEY_LOOKUP.get(pygame_key, None)
        if key is not None:
            self.keys[key] = pressed
            logger.debug(f"Key State Changed.  Key: {key}, Pressed: {pressed}.")
        return key

    def release_all(self) -> None:
        self.keys = [False] * KEY_COUNT


class Host:
    """
    Drives the emulator from a pygame event loop, feeding it the elapsed time of each frame.
    """
    def __init__(self, emulator: Optional[Emulator] = None):
        """
        Constructor.
        :param emulator: The emulator to drive; a default 64x32 one is created if not provided.
        """
        self.emulator = emulator or Emulator()
        self.key_state = KeyState()
        self.game_loaded = False
        self.selecting_game = False

        pygame.mixer.init(SOUND_FREQUENCY, -16, 1, SOUND_BUFFER)
        pygame.init()
        pygame.display.init()

        self.sound_player = pygame.sndarray.make_sound(make_tone())
        self.sound_playing = False

        self.inter_screen = pygame.Surface((self.emulator.screen_width, self.emulator.screen_height), 0, 8)
        self.inter_screen.set_palette(COLOUR_PALETTE)
        pygame.display.set_caption("chipcore")
        self.screen = pygame.display.set_mode((self.emulator.screen_width * SCALE, self.emulator.screen_height * SCALE), 0, 8)
        self.screen.set_palette(COLOUR_PALETTE)
        self.clock = pygame.time.Clock()

    def stop_game(self) -> None:
        """
        Stop the running game, silencing any sound.
        """
        self.game_loaded = False
        self.key_state.release_all()
        self.set_sound(False)
        pygame.display.set_caption("chipcore")

    def load_game(self) -> None:
        """
        Stop any currently running game, then ask for a game and load it into the emulator.
        """
        if self.game_loaded:
            self.stop_game()

        self.selecting_game = True
        file_name = easygui.fileopenbox(title="Select a Game", default=GAMES_PATH, filetypes=[GAME_FILE_TYPES + ["CHIP-8"]])
        self.selecting_game = False

        if not file_name:
            easygui.msgbox("Pick a game to play!  Press the L key to re-open the game picker.", "No Game Selected")
            return

        path = Path(file_name)
        if not path.exists():
            easygui.msgbox(f"Game could not be loaded as the path does not exist!  Path: {path}.", "Game Not Found")
            return

        logger.debug(f"Loading game at path {path}.")
        try:
            self.emulator.load_rom(path.read_bytes())
        except Chip8Error as error:
            logger.error(f"Could not load the game at {path}: {error}")
            easygui.msgbox(str(error), "Game Not Loaded")
            return

        pygame.display.set_caption(path.stem)
        self.game_loaded = True
        self.draw_to_display(self.emulator.framebuffer_snapshot())
        # Don't count the time spent in the picker against the game
        self.clock.tick()

    def draw_to_display(self, frame: np.ndarray) -> None:
        """
        Update the display from a framebuffer snapshot indexed [row][column].
        :param frame: The snapshot to show.
        """
        pygame.surfarray.blit_array(self.inter_screen, frame.T)
        pygame.transform.scale(self.inter_screen, self.screen.get_size(), self.screen)
        pygame.display.flip()

    def set_sound(self, active: bool) -> None:
        """
        Start or stop the tone.
        :param active: True if the tone should be playing.
        """
        if active == self.sound_playing:
            return

        self.sound_playing = active
        if active:
            self.sound_player.play(-1)
        else:
            self.sound_player.stop()
        logger.debug(f"{'Starting' if active else 'Stopping'} sound.")

    def run_frame(self, elapsed: float) -> None:
        """
        Advance the emulator by the elapsed time and hand its outputs to the display and the speaker.
        Errors stop the game.
        :param elapsed: Seconds since the previous frame.
        """
        try:
            self.emulator.update(elapsed, self.key_state.keys)
        except Chip8Error as error:
            logger.error(f"Game stopped: {error}")
            self.stop_game()
            easygui.msgbox(f"{error}  Press the L key to load a game.", "Game Stopped")
            return

        frame = self.emulator.pop_frame()
        if frame is not None:
            self.draw_to_display(frame)
        self.set_sound(self.emulator.sound_active)

    def event_loop(self) -> None:
        """
        Loop which handles all events and spawns the first game picker to get started.
        """
        self.load_game()

        while True:
            elapsed = self.clock.tick(FRAME_RATE) / 1000

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    sys.exit(0)
                elif event.type == pygame.KEYDOWN or event.type == pygame.KEYUP:
                    pressed = event.type == pygame.KEYDOWN

                    if pressed and event.key == pygame.K_l and not self.selecting_game:
                        self.load_game()
                        continue

                    self.key_state.handle_key(event.key, pressed)

            if self.game_loaded:
                self.run_frame(elapsed)
