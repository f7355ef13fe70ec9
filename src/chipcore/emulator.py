import logging
import random

from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from chipcore.clock import Clock
from chipcore.constants import (
    ADDRESS_MASK,
    BYTE_MASK,
    DEFAULT_INSTRUCTIONS_PER_SECOND,
    DIGIT_SPRITE_HEIGHT,
    DIGIT_SPRITES,
    FLAG_REGISTER,
    GAME_START_ADDRESS,
    KEY_COUNT,
    MAX_ROM_SIZE,
    MEMORY_SIZE,
    REGISTER_COUNT,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    SPRITE_WIDTH,
    STACK_DEPTH,
)
from chipcore.errors import Chip8Error, MemoryOutOfBounds, RomTooLarge, StackOverflow, StackUnderflow
from chipcore.framebuffer import Framebuffer
from chipcore.instructions import Instruction, Operation, decode

logger = logging.getLogger(__name__)

# Name of the method which executes each operation
OPCODE_HANDLERS: Dict[Operation, str] = {
    Operation.MACHINE_CODE_ROUTINE: "opcode_machine_code_routine",
    Operation.CLEAR_SCREEN: "opcode_clear_screen",
    Operation.RETURN_FROM_SUBROUTINE: "opcode_return_from_subroutine",
    Operation.GOTO: "opcode_goto",
    Operation.CALL_SUBROUTINE: "opcode_call_subroutine",
    Operation.IF_EQUAL: "opcode_if_equal",
    Operation.IF_NOT_EQUAL: "opcode_if_not_equal",
    Operation.IF_REGISTER_EQUAL: "opcode_if_register_equal",
    Operation.SET_REGISTER_VALUE: "opcode_set_register_value",
    Operation.ADD_VALUE: "opcode_add_value",
    Operation.SET_REGISTER_VALUE_OTHER_REGISTER: "opcode_set_register_value_other_register",
    Operation.SET_REGISTER_BITWISE_OR: "opcode_set_register_bitwise_or",
    Operation.SET_REGISTER_BITWISE_AND: "opcode_set_register_bitwise_and",
    Operation.SET_REGISTER_BITWISE_XOR: "opcode_set_register_bitwise_xor",
    Operation.ADD_OTHER_REGISTER: "opcode_add_other_register",
    Operation.SUBTRACT_FROM_FIRST_REGISTER: "opcode_subtract_from_first_register",
    Operation.BIT_SHIFT_RIGHT: "opcode_bit_shift_right",
    Operation.SUBTRACT_FROM_SECOND_REGISTER: "opcode_subtract_from_second_register",
    Operation.BIT_SHIFT_LEFT: "opcode_bit_shift_left",
    Operation.IF_REGISTER_NOT_EQUAL: "opcode_if_register_not_equal",
    Operation.SET_REGISTER_I: "opcode_set_register_i",
    Operation.GOTO_ADDITION: "opcode_goto_addition",
    Operation.RANDOM_BITWISE_AND: "opcode_random_bitwise_and",
    Operation.DRAW_SPRITE: "opcode_draw_sprite",
    Operation.IF_KEY_PRESSED: "opcode_if_key_pressed",
    Operation.IF_KEY_NOT_PRESSED: "opcode_if_key_not_pressed",
    Operation.GET_DELAY_TIMER: "opcode_get_delay_timer",
    Operation.WAIT_FOR_KEY_PRESS: "opcode_wait_for_key_press",
    Operation.SET_DELAY_TIMER: "opcode_set_delay_timer",
    Operation.SET_SOUND_TIMER: "opcode_set_sound_timer",
    Operation.REGISTER_I_ADDITION: "opcode_register_i_addition",
    Operation.SET_REGISTER_I_TO_HEX_SPRITE_ADDRESS: "opcode_set_register_i_to_hex_sprite_address",
    Operation.BINARY_CODED_DECIMAL: "opcode_binary_coded_decimal",
    Operation.REGISTER_DUMP: "opcode_register_dump",
    Operation.REGISTER_LOAD: "opcode_register_load",
}


class Emulator:
    """
    The CHIP-8 interpreter.  Holds all of the machine state and executes one opcode per call to step.

    The emulator never schedules itself: the host calls step at the instruction rate and tick_timers at 60 Hz, or lets
    update work out how many of each are due from the elapsed time.

    Conventions where CHIP-8 implementations disagree:
    - The bit shift opcodes (8xy6, 8xyE) shift register x in place and ignore register y.
    - The register dump and load opcodes (Fx55, Fx65) leave register I untouched.
    - Sprites wrap around the edges of the screen.
    - The subtraction opcodes set register 15 to 1 when there was no borrow.
    """
    def __init__(self, screen_width: int = SCREEN_WIDTH, screen_height: int = SCREEN_HEIGHT,
                 instructions_per_second: int = DEFAULT_INSTRUCTIONS_PER_SECOND):
        """
        Constructor.
        :param screen_width: The number of columns of the display.
        :param screen_height: The number of rows of the display.
        :param instructions_per_second: How many opcodes update runs for each second of elapsed time.
        """
        self.framebuffer = Framebuffer(screen_width, screen_height)
        self.clock = Clock(instructions_per_second)
        self.random = random.Random()

        self.ram = bytearray(MEMORY_SIZE)
        self.registers = bytearray(REGISTER_COUNT)
        self.register_i = 0
        self.delay = 0
        self.sound = 0
        self.sound_active = False
        self.draw_pending = False
        self.program_counter = GAME_START_ADDRESS
        self.stack: List[int] = []
        self.keys: List[bool] = [False] * KEY_COUNT

        self.load_digit_sprites()

    @property
    def instructions_per_second(self) -> int:
        return self.clock.instructions_per_second

    @property
    def screen_width(self) -> int:
        return self.framebuffer.width

    @property
    def screen_height(self) -> int:
        return self.framebuffer.height

    def reset(self) -> None:
        """
        Reset the state of the emulator to how it was after construction.
        """
        self.register_i = 0
        self.delay = 0
        self.sound = 0
        self.sound_active = False
        self.draw_pending = False
        self.stack: List[int] = []
        self.keys: List[bool] = [False] * KEY_COUNT
        self.program_counter = GAME_START_ADDRESS
        self.framebuffer.clear()
        self.clock.reset()

        self.ram = bytearray(MEMORY_SIZE)
        self.registers = bytearray(REGISTER_COUNT)

        self.load_digit_sprites()
        logger.info("Emulator reset.")

    def load_rom(self, rom: bytes) -> None:
        """
        Reset the emulator and load the provided game into memory at the game start address.
        :param rom: The raw bytes of the game.
        """
        rom = bytes(rom)
        if len(rom) > MAX_ROM_SIZE:
            raise RomTooLarge(len(rom), MAX_ROM_SIZE)

        self.reset()
        self.ram[GAME_START_ADDRESS:GAME_START_ADDRESS + len(rom)] = rom
        logger.info(f"Loaded a game of {len(rom)} bytes at address {hex(GAME_START_ADDRESS)}.")

    def load_digit_sprites(self) -> None:
        """
        Load the sprites for the hexadecimal digits 0-f into memory.
        """
        self.ram[0:len(DIGIT_SPRITES)] = DIGIT_SPRITES

    def framebuffer_snapshot(self) -> np.ndarray:
        """
        Get a read-only copy of the display, indexed [row][column].
        """
        return self.framebuffer.snapshot()

    def pop_frame(self) -> Optional[np.ndarray]:
        """
        Get a snapshot of the display if anything was drawn since the last call.
        :return: The snapshot, or None if the display is unchanged.
        """
        if not self.draw_pending:
            return None

        self.draw_pending = False
        return self.framebuffer.snapshot()

    # region Memory
    def read_byte(self, address: int) -> int:
        """
        Read a byte of memory.
        :param address: The address to read.
        :return: The value at the address.
        """
        if not 0 <= address < MEMORY_SIZE:
            raise MemoryOutOfBounds(address)
        return self.ram[address]

    def write_byte(self, address: int, value: int) -> None:
        """
        Write a byte of memory.
        :param address: The address to write.
        :param value: The value to store.
        """
        if not 0 <= address < MEMORY_SIZE:
            raise MemoryOutOfBounds(address)
        self.ram[address] = value & BYTE_MASK
    # endregion

    # region Timers
    def tick_timers(self) -> None:
        """
        Decrement the delay and sound timers towards 0 and refresh whether the sound should be playing.
        Must be called at 60 Hz, independently of the rate at which opcodes are run.
        """
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

        was_active = self.sound_active
        self.sound_active = self.sound > 0
        if was_active != self.sound_active:
            logger.debug(f"Sound {'started' if self.sound_active else 'stopped'}.")

    def update(self, elapsed: float, keys: Sequence[bool]) -> int:
        """
        Run as many opcodes and timer ticks as are due after the provided amount of time, spreading the ticks evenly
        between the opcodes.
        :param elapsed: Seconds since the last update.
        :param keys: The state of the 16 keys, True if pressed.
        :return: The number of opcodes run.
        """
        cycles, ticks = self.clock.advance(elapsed)
        try:
            self.check_keys(keys)
        except ValueError:
            self.clock.refund(cycles, ticks)
            raise

        ticks_done = 0
        for cycle in range(cycles):
            try:
                self.step(keys)
            except Chip8Error:
                self.clock.refund(cycles - cycle - 1, ticks - ticks_done)
                raise

            ticks_due = (cycle + 1) * ticks // cycles
            while ticks_done < ticks_due:
                self.tick_timers()
                ticks_done += 1

        while ticks_done < ticks:
            self.tick_timers()
            ticks_done += 1

        return cycles
    # endregion

    # region Helpers
    @staticmethod
    def bounded_add(augend: int, addend: int) -> Tuple[int, int]:
        """
        Add two values, bounded by the confines of a byte.
        :param augend: The integer to add to.
        :param addend: The integer to add.
        :return: The result of the addition and the carry (1 if the sum did not fit in a byte, 0 otherwise).
        """
        sum_of_values = augend + addend
        result = sum_of_values & BYTE_MASK
        carry = 1 if sum_of_values > BYTE_MASK else 0
        return result, carry

    @staticmethod
    def bounded_subtract(minuend: int, subtrahend: int) -> Tuple[int, int]:
        """
        Subtract the subtrahend from the minuend, bounded by the confines of a byte.
        :param minuend: The integer from which to subtract.
        :param subtrahend: The integer to subtract.
        :return: The result of the subtraction and the not borrow (1 if there was no borrow, 0 otherwise).
        """
        difference_of_registers = minuend - subtrahend
        result = difference_of_registers % 256
        not_borrow = 1 if difference_of_registers >= 0 else 0
        return result, not_borrow

    @staticmethod
    def check_keys(keys: Sequence[bool]) -> None:
        """
        Make sure the state of exactly 16 keys was provided.
        :param keys: The state of the keys, True if pressed.
        """
        if len(keys) != KEY_COUNT:
            raise ValueError(f"Expected the state of {KEY_COUNT} keys, got {len(keys)}.")

    def skip_next_instruction(self, condition: bool) -> None:
        """
        Skip the next instruction if the condition holds.
        :param condition: Whether to skip.
        """
        if condition:
            self.program_counter += 2
            logger.debug("Instruction skipped.")
        else:
            logger.debug("Instruction not skipped.")
    # endregion

    # region Opcodes
    def fetch_opcode(self) -> int:
        """
        Read the big-endian opcode found at the program counter.
        """
        if self.program_counter + 1 >= MEMORY_SIZE:
            raise MemoryOutOfBounds(self.program_counter + 1)
        return (self.read_byte(self.program_counter) << 8) | self.read_byte(self.program_counter + 1)

    def step(self, keys: Sequence[bool]) -> Instruction:
        """
        Run a single CPU cycle: fetch the current opcode, move the program counter past it, decode and execute it.
        :param keys: The state of the 16 keys, True if pressed.
        :return: The instruction which was executed.
        """
        self.check_keys(keys)
        self.keys = [bool(key) for key in keys]

        opcode = self.fetch_opcode()
        self.program_counter += 2
        instruction = decode(opcode)
        self.run_opcode(instruction)
        return instruction

    def run_opcode(self, instruction: Instruction) -> None:
        """
        Route the provided instruction to the correct method to execute it.
        :param instruction: The instruction to execute.
        """
        getattr(self, OPCODE_HANDLERS[instruction.operation])(instruction)

    def opcode_machine_code_routine(self, instruction: Instruction) -> None:
        """
        Call a machine code routine of the original host computer.  Not supported by interpreters, so it is ignored.
        :param instruction: The instruction to execute.
        """
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Ignoring call to machine code routine at {hex(instruction.nnn)}.")

    def opcode_clear_screen(self, instruction: Instruction) -> None:
        """
        Clear the screen.
        :param instruction: The instruction to execute.
        """
        self.framebuffer.clear()
        self.draw_pending = True
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Clearing the screen.")

    def opcode_return_from_subroutine(self, instruction: Instruction) -> None:
        """
        Return from the current subroutine.
        :param instruction: The instruction to execute.
        """
        if len(self.stack) == 0:
            raise StackUnderflow()

        self.program_counter = self.stack.pop()
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Return from subroutine, continue at {hex(self.program_counter)}.")

    def opcode_goto(self, instruction: Instruction) -> None:
        """
        Jump to the provided address.
        :param instruction: The instruction to execute.
        """
        self.program_counter = instruction.nnn
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Jump to address {hex(instruction.nnn)}.")

    def opcode_call_subroutine(self, instruction: Instruction) -> None:
        """
        Call the subroutine at the given address.
        :param instruction: The instruction to execute.
        """
        if len(self.stack) >= STACK_DEPTH:
            raise StackOverflow(STACK_DEPTH)

        self.stack.append(self.program_counter)
        self.program_counter = instruction.nnn
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Call subroutine at address {hex(instruction.nnn)}.")

    def opcode_if_equal(self, instruction: Instruction) -> None:
        """
        Skip the next instruction if the value of the provided register is equal to the provided value.
        :param instruction: The instruction to execute.
        """
        register_value = self.registers[instruction.x]
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Skip next instruction if register {instruction.x}'s value ({register_value}) is {instruction.kk}.")
        self.skip_next_instruction(register_value == instruction.kk)

    def opcode_if_not_equal(self, instruction: Instruction) -> None:
        """
        Skip the next instruction if the value of the provided register is not equal to the provided value.
        :param instruction: The instruction to execute.
        """
        register_value = self.registers[instruction.x]
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Skip next instruction if register {instruction.x}'s value ({register_value}) is not {instruction.kk}.")
        self.skip_next_instruction(register_value != instruction.kk)

    def opcode_if_register_equal(self, instruction: Instruction) -> None:
        """
        Skip the next instruction if the value of the first provided register is equal to the value of the second provided register.
        :param instruction: The instruction to execute.
        """
        first_register_value = self.registers[instruction.x]
        second_register_value = self.registers[instruction.y]
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Skip next instruction if register {instruction.x}'s value ({first_register_value}) is equal to register {instruction.y}'s value ({second_register_value}).")
        self.skip_next_instruction(first_register_value == second_register_value)

    def opcode_set_register_value(self, instruction: Instruction) -> None:
        """
        Set the value of the provided register to the provided value.
        :param instruction: The instruction to execute.
        """
        self.registers[instruction.x] = instruction.kk
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Set the value of register {instruction.x} to {instruction.kk}.")

    def opcode_add_value(self, instruction: Instruction) -> None:
        """
        Adds the provided value to the value of the provided register.  The carry flag (register 15) is not set.
        :param instruction: The instruction to execute.
        """
        self.registers[instruction.x] = (self.registers[instruction.x] + instruction.kk) & BYTE_MASK
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Add {instruction.kk} to the value of register {instruction.x}.")

    def opcode_set_register_value_other_register(self, instruction: Instruction) -> None:
        """
        Set the value of the first provided register to the value of the second provided register.
        :param instruction: The instruction to execute.
        """
        second_register_value = self.registers[instruction.y]
        self.registers[instruction.x] = second_register_value
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Set the value of register {instruction.x} to the value of register {instruction.y} ({second_register_value}).")

    def opcode_set_register_bitwise_or(self, instruction: Instruction) -> None:
        """
        Sets the value of the first provided register to the bitwise or of itself and the value of the second provided register.
        :param instruction: The instruction to execute.
        """
        result = self.registers[instruction.x] | self.registers[instruction.y]
        self.registers[instruction.x] = result
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Set the value of register {instruction.x} to the bitwise or of itself and the value of register {instruction.y} ({result}).")

    def opcode_set_register_bitwise_and(self, instruction: Instruction) -> None:
        """
        Sets the value of the first provided register to the bitwise and of itself and the value of the second provided register.
        :param instruction: The instruction to execute.
        """
        result = self.registers[instruction.x] & self.registers[instruction.y]
        self.registers[instruction.x] = result
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Set the value of register {instruction.x} to the bitwise and of itself and the value of register {instruction.y} ({result}).")

    def opcode_set_register_bitwise_xor(self, instruction: Instruction) -> None:
        """
        Sets the value of the first provided register to the bitwise xor of itself and the value of the second provided register.
        :param instruction: The instruction to execute.
        """
        result = self.registers[instruction.x] ^ self.registers[instruction.y]
        self.registers[instruction.x] = result
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Set the value of register {instruction.x} to the bitwise xor of itself and the value of register {instruction.y} ({result}).")

    def opcode_add_other_register(self, instruction: Instruction) -> None:
        """
        Sets the value of the first provided register to the sum of itself and the value of the second provided register.  The carry flag (register 15) is set.
        :param instruction: The instruction to execute.
        """
        first_register_value = self.registers[instruction.x]
        second_register_value = self.registers[instruction.y]
        result, carry = self.bounded_add(first_register_value, second_register_value)
        self.registers[instruction.x] = result
        self.registers[FLAG_REGISTER] = carry
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Set the value of register {instruction.x} to the sum of itself and the value of register {instruction.y} ({first_register_value} + {second_register_value} = {result}, carry = {carry}).")

    def opcode_subtract_from_first_register(self, instruction: Instruction) -> None:
        """
        Sets the value of the first provided register to the difference of itself and the value of the second provided register.  The not borrow flag (register 15) is set.
        :param instruction: The instruction to execute.
        """
        first_register_value = self.registers[instruction.x]
        second_register_value = self.registers[instruction.y]
        result, not_borrow = self.bounded_subtract(first_register_value, second_register_value)
        self.registers[instruction.x] = result
        self.registers[FLAG_REGISTER] = not_borrow
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Set the value of register {instruction.x} to the difference of itself and the value of register {instruction.y} ({first_register_value} - {second_register_value} = {result}, not borrow = {not_borrow}).")

    def opcode_bit_shift_right(self, instruction: Instruction) -> None:
        """
        Shift the value of the first provided register to the right by 1.  Set register 15 to the value of the least significant bit before the operation.
        :param instruction: The instruction to execute.
        """
        first_register_value = self.registers[instruction.x]
        bit_shift = first_register_value >> 1
        least_significant_bit = first_register_value & 1
        self.registers[instruction.x] = bit_shift
        self.registers[FLAG_REGISTER] = least_significant_bit
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Shift the value of register {instruction.x} to the right by 1 ({first_register_value} >> 1 = {bit_shift}, previous least significant bit = {least_significant_bit}).")

    def opcode_subtract_from_second_register(self, instruction: Instruction) -> None:
        """
        Sets the value of the first provided register to the difference of the value of the second provided register and itself.  The not borrow flag (register 15) is set.
        :param instruction: The instruction to execute.
        """
        first_register_value = self.registers[instruction.x]
        second_register_value = self.registers[instruction.y]
        result, not_borrow = self.bounded_subtract(second_register_value, first_register_value)
        self.registers[instruction.x] = result
        self.registers[FLAG_REGISTER] = not_borrow
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Set the value of register {instruction.x} to the difference of the value of register {instruction.y} and itself ({second_register_value} - {first_register_value} = {result}, not borrow = {not_borrow}).")

    def opcode_bit_shift_left(self, instruction: Instruction) -> None:
        """
        Shift the value of the first provided register to the left by 1.  Set register 15 to the value of the most significant bit before the operation.
        :param instruction: The instruction to execute.
        """
        first_register_value = self.registers[instruction.x]
        bit_shift = (first_register_value << 1) & BYTE_MASK
        most_significant_bit = first_register_value >> 7
        self.registers[instruction.x] = bit_shift
        self.registers[FLAG_REGISTER] = most_significant_bit
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Shift the value of register {instruction.x} to the left by 1 ({first_register_value} << 1 = {bit_shift}, previous most significant bit = {most_significant_bit}).")

    def opcode_if_register_not_equal(self, instruction: Instruction) -> None:
        """
        Skip the next instruction if the value of the first provided register is not equal to the value of the second provided register.
        :param instruction: The instruction to execute.
        """
        first_register_value = self.registers[instruction.x]
        second_register_value = self.registers[instruction.y]
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Skip next instruction if register {instruction.x}'s value ({first_register_value}) is not equal to register {instruction.y}'s value ({second_register_value}).")
        self.skip_next_instruction(first_register_value != second_register_value)

    def opcode_set_register_i(self, instruction: Instruction) -> None:
        """
        Sets the value of register I to the provided value.
        :param instruction: The instruction to execute.
        """
        self.register_i = instruction.nnn
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Set register I to {hex(instruction.nnn)}.")

    def opcode_goto_addition(self, instruction: Instruction) -> None:
        """
        Jump to the provided address plus the value of register 0.
        :param instruction: The instruction to execute.
        """
        register_value = self.registers[0]
        self.program_counter = instruction.nnn + register_value
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Jump to the provided address plus the value of register 0 ({hex(instruction.nnn)} + {hex(register_value)} = {hex(self.program_counter)}).")

    def opcode_random_bitwise_and(self, instruction: Instruction) -> None:
        """
        Set the value of the provided register to the bitwise and of the provided value and a random number [0, 255].
        :param instruction: The instruction to execute.
        """
        random_value = self.random.randint(0, 255)
        result = instruction.kk & random_value
        self.registers[instruction.x] = result
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Set the value of register {instruction.x} to the bitwise and of the provided value and a random number [0, 255] ({instruction.kk} & {random_value} = {result}).")

    def opcode_draw_sprite(self, instruction: Instruction) -> None:
        """
        Draws the sprite with the provided height found at the address denoted by the value of register I to the provided x and y coordinates, wrapping around the edges of the screen.  The collision flag (register 15) is set to 1 if a pixel was unset, 0 otherwise.
        :param instruction: The instruction to execute.
        """
        register_x_value = self.registers[instruction.x]
        register_y_value = self.registers[instruction.y]
        height = instruction.n
        sprite = [self.read_byte(self.register_i + row) for row in range(height)]

        pixel_unset = 0
        for row, byte in enumerate(sprite):
            y_coordinate = (register_y_value + row) % self.screen_height
            for column in range(SPRITE_WIDTH):
                pixel = (byte >> (SPRITE_WIDTH - 1 - column)) & 1
                if pixel == 0:
                    continue
                x_coordinate = (register_x_value + column) % self.screen_width
                if self.framebuffer.xor_pixel(x_coordinate, y_coordinate, pixel):
                    pixel_unset = 1
        self.registers[FLAG_REGISTER] = pixel_unset
        self.draw_pending = True
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Drawing the sprite with a height of {height} and found at address {hex(self.register_i)} to the screen at the x-coordinate from the value of register {instruction.x} and y-coordinate from the value of register {instruction.y} ({register_x_value, register_y_value}), collision = {pixel_unset}.")

    def opcode_if_key_pressed(self, instruction: Instruction) -> None:
        """
        Skip the next instruction if the key represented by the value of the provided register is pressed.
        :param instruction: The instruction to execute.
        """
        key = self.registers[instruction.x] & 0xF
        pressed = self.keys[key]
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Skip next instruction if the key represented by the value of register {instruction.x} ({key}) is pressed ({pressed}).")
        self.skip_next_instruction(pressed)

    def opcode_if_key_not_pressed(self, instruction: Instruction) -> None:
        """
        Skip the next instruction if the key represented by the value of the provided register is not pressed.
        :param instruction: The instruction to execute.
        """
        key = self.registers[instruction.x] & 0xF
        pressed = self.keys[key]
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Skip next instruction if the key represented by the value of register {instruction.x} ({key}) is not pressed ({pressed}).")
        self.skip_next_instruction(not pressed)

    def opcode_get_delay_timer(self, instruction: Instruction) -> None:
        """
        Sets the value of the provided register to the value of the delay timer.
        :param instruction: The instruction to execute.
        """
        self.registers[instruction.x] = self.delay
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Set the value of register {instruction.x} to the value of the delay timer ({self.delay}).")

    def opcode_wait_for_key_press(self, instruction: Instruction) -> None:
        """
        Wait until a key is pressed and store it in the provided register.  While no key is pressed the program counter
        is moved back onto this instruction so the next step runs it again; the timers keep ticking meanwhile.
        :param instruction: The instruction to execute.
        """
        pressed_keys = [key for key, pressed in enumerate(self.keys) if pressed]
        if not pressed_keys:
            self.program_counter -= 2
            logger.debug(f"Execute Opcode {instruction.opcode:04x}: Waiting for a keypress to store in register {instruction.x}.")
            return

        self.registers[instruction.x] = pressed_keys[0]
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Storing the key {pressed_keys[0]} in register {instruction.x}.")

    def opcode_set_delay_timer(self, instruction: Instruction) -> None:
        """
        Sets the delay timer to the value of the provided register.
        :param instruction: The instruction to execute.
        """
        self.delay = self.registers[instruction.x]
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Set the value of the delay timer to value of register {instruction.x} ({self.delay}).")

    def opcode_set_sound_timer(self, instruction: Instruction) -> None:
        """
        Sets the sound timer to the value of the provided register.  The sound starts or stops on the next timer tick.
        :param instruction: The instruction to execute.
        """
        self.sound = self.registers[instruction.x]
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Set the value of the sound timer to value of register {instruction.x} ({self.sound}).")

    def opcode_register_i_addition(self, instruction: Instruction) -> None:
        """
        Add the value of the provided register to register I.  The overflow flag (register 15) is set.
        :param instruction: The instruction to execute.
        """
        register_value = self.registers[instruction.x]
        register_i_value = self.register_i
        sum_of_registers = register_i_value + register_value
        result = sum_of_registers & ADDRESS_MASK
        overflow = 1 if sum_of_registers > ADDRESS_MASK else 0
        self.register_i = result
        self.registers[FLAG_REGISTER] = overflow
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Adds the value of register {instruction.x} to the value of register I ({register_i_value} + {register_value} = {result}, overflow = {overflow}).")

    def opcode_set_register_i_to_hex_sprite_address(self, instruction: Instruction) -> None:
        """
        Sets the value of register I to the address of the hexadecimal sprite represented by the value in the provided register.
        :param instruction: The instruction to execute.
        """
        digit = self.registers[instruction.x] & 0xF
        self.register_i = digit * DIGIT_SPRITE_HEIGHT
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Set the value of register I to the address ({self.register_i}) of the hexadecimal sprite for {digit:x} from register {instruction.x}.")

    def opcode_binary_coded_decimal(self, instruction: Instruction) -> None:
        """
        Store the Binary Coded Decimal representation of the value of the provided register in memory, starting at the value of register I.
        Hundreds digit stored in memory at the location of the value of register I.
        Tens digit stored in memory at the location of the value of register I + 1.
        Units digit stored in memory at the location of the value of register I + 2.
        :param instruction: The instruction to execute.
        """
        register_value = self.registers[instruction.x]
        hundreds = register_value // 100 % 10
        tens = register_value // 10 % 10
        units = register_value % 10
        if self.register_i + 2 >= MEMORY_SIZE:
            raise MemoryOutOfBounds(self.register_i + 2)
        self.write_byte(self.register_i, hundreds)
        self.write_byte(self.register_i + 1, tens)
        self.write_byte(self.register_i + 2, units)
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Store the Binary Coded Decimal representation of the value of register {instruction.x} ({register_value}), starting at the value of register I ({hex(self.register_i)}).")

    def opcode_register_dump(self, instruction: Instruction) -> None:
        """
        Store the values of all registers from register 0 to the provided register in memory, starting at the value of register I.
        Register I is left untouched.
        :param instruction: The instruction to execute.
        """
        last_register = instruction.x
        if self.register_i + last_register >= MEMORY_SIZE:
            raise MemoryOutOfBounds(self.register_i + last_register)
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Dumping the values of all registers from register 0 to register {last_register} into memory, starting at the value of register I ({hex(self.register_i)}).")
        for register in range(last_register + 1):
            self.write_byte(self.register_i + register, self.registers[register])

    def opcode_register_load(self, instruction: Instruction) -> None:
        """
        Load the values of all registers from register 0 to the provided register from memory, starting at the value of register I.
        Register I is left untouched.
        :param instruction: The instruction to execute.
        """
        last_register = instruction.x
        if self.register_i + last_register >= MEMORY_SIZE:
            raise MemoryOutOfBounds(self.register_i + last_register)
        logger.debug(f"Execute Opcode {instruction.opcode:04x}: Loading the values of all registers from register 0 to register {last_register} from memory, starting at the value of register I ({hex(self.register_i)}).")
        for register in range(last_register + 1):
            self.registers[register] = self.read_byte(self.register_i + register)
    # endregion
