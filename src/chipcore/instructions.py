"""
Decoding of raw 16-bit opcodes into tagged instructions.

Decoding is pure: it never touches emulator state, so the same opcode always decodes to the same instruction.
"""
from enum import Enum
from typing import Dict, NamedTuple

from chipcore.errors import UnknownOpcode


class Operation(Enum):
    """
    Every operation of the baseline CHIP-8 instruction set.
    """
    MACHINE_CODE_ROUTINE = "0nnn"
    CLEAR_SCREEN = "00e0"
    RETURN_FROM_SUBROUTINE = "00ee"
    GOTO = "1nnn"
    CALL_SUBROUTINE = "2nnn"
    IF_EQUAL = "3xkk"
    IF_NOT_EQUAL = "4xkk"
    IF_REGISTER_EQUAL = "5xy0"
    SET_REGISTER_VALUE = "6xkk"
    ADD_VALUE = "7xkk"
    SET_REGISTER_VALUE_OTHER_REGISTER = "8xy0"
    SET_REGISTER_BITWISE_OR = "8xy1"
    SET_REGISTER_BITWISE_AND = "8xy2"
    SET_REGISTER_BITWISE_XOR = "8xy3"
    ADD_OTHER_REGISTER = "8xy4"
    SUBTRACT_FROM_FIRST_REGISTER = "8xy5"
    BIT_SHIFT_RIGHT = "8xy6"
    SUBTRACT_FROM_SECOND_REGISTER = "8xy7"
    BIT_SHIFT_LEFT = "8xye"
    IF_REGISTER_NOT_EQUAL = "9xy0"
    SET_REGISTER_I = "annn"
    GOTO_ADDITION = "bnnn"
    RANDOM_BITWISE_AND = "cxkk"
    DRAW_SPRITE = "dxyn"
    IF_KEY_PRESSED = "ex9e"
    IF_KEY_NOT_PRESSED = "exa1"
    GET_DELAY_TIMER = "fx07"
    WAIT_FOR_KEY_PRESS = "fx0a"
    SET_DELAY_TIMER = "fx15"
    SET_SOUND_TIMER = "fx18"
    REGISTER_I_ADDITION = "fx1e"
    SET_REGISTER_I_TO_HEX_SPRITE_ADDRESS = "fx29"
    BINARY_CODED_DECIMAL = "fx33"
    REGISTER_DUMP = "fx55"
    REGISTER_LOAD = "fx65"


class Instruction(NamedTuple):
    """
    A decoded opcode along with all of the operands which can be extracted from it.
    Which operands are meaningful depends on the operation.
    """
    operation: Operation
    opcode: int
    x: int
    y: int
    n: int
    kk: int
    nnn: int

    def __str__(self) -> str:
        return f"{self.opcode:04x} ({self.operation.name})"


# Operations selected by the last nibble of an 8xy_ opcode
ARITHMETIC_OPERATIONS: Dict[int, Operation] = {
    0x0: Operation.SET_REGISTER_VALUE_OTHER_REGISTER,
    0x1: Operation.SET_REGISTER_BITWISE_OR,
    0x2: Operation.SET_REGISTER_BITWISE_AND,
    0x3: Operation.SET_REGISTER_BITWISE_XOR,
    0x4: Operation.ADD_OTHER_REGISTER,
    0x5: Operation.SUBTRACT_FROM_FIRST_REGISTER,
    0x6: Operation.BIT_SHIFT_RIGHT,
    0x7: Operation.SUBTRACT_FROM_SECOND_REGISTER,
    0xE: Operation.BIT_SHIFT_LEFT,
}

# Operations selected by the low byte of an Ex__ opcode
KEY_OPERATIONS: Dict[int, Operation] = {
    0x9E: Operation.IF_KEY_PRESSED,
    0xA1: Operation.IF_KEY_NOT_PRESSED,
}

# Operations selected by the low byte of an Fx__ opcode
MISC_OPERATIONS: Dict[int, Operation] = {
    0x07: Operation.GET_DELAY_TIMER,
    0x0A: Operation.WAIT_FOR_KEY_PRESS,
    0x15: Operation.SET_DELAY_TIMER,
    0x18: Operation.SET_SOUND_TIMER,
    0x1E: Operation.REGISTER_I_ADDITION,
    0x29: Operation.SET_REGISTER_I_TO_HEX_SPRITE_ADDRESS,
    0x33: Operation.BINARY_CODED_DECIMAL,
    0x55: Operation.REGISTER_DUMP,
    0x65: Operation.REGISTER_LOAD,
}

# Operations fully selected by the first nibble
FAMILY_OPERATIONS: Dict[int, Operation] = {
    0x1: Operation.GOTO,
    0x2: Operation.CALL_SUBROUTINE,
    0x3: Operation.IF_EQUAL,
    0x4: Operation.IF_NOT_EQUAL,
    0x6: Operation.SET_REGISTER_VALUE,
    0x7: Operation.ADD_VALUE,
    0xA: Operation.SET_REGISTER_I,
    0xB: Operation.GOTO_ADDITION,
    0xC: Operation.RANDOM_BITWISE_AND,
    0xD: Operation.DRAW_SPRITE,
}


def select_operation(opcode: int) -> Operation:
    """
    Find the operation encoded by the provided opcode.
    :param opcode: The 16-bit opcode.
    :return: The matching operation.
    :raises UnknownOpcode: If the opcode matches no known pattern.
    """
    family = (opcode >> 12) & 0xF
    last_char = opcode & 0xF
    low_byte = opcode & 0xFF

    operation = None
    if family == 0x0:
        if opcode == 0x00E0:
            operation = Operation.CLEAR_SCREEN
        elif opcode == 0x00EE:
            operation = Operation.RETURN_FROM_SUBROUTINE
        else:
            operation = Operation.MACHINE_CODE_ROUTINE
    elif family == 0x5 or family == 0x9:
        if last_char == 0:
            operation = Operation.IF_REGISTER_EQUAL if family == 0x5 else Operation.IF_REGISTER_NOT_EQUAL
    elif family == 0x8:
        operation = ARITHMETIC_OPERATIONS.get(last_char)
    elif family == 0xE:
        operation = KEY_OPERATIONS.get(low_byte)
    elif family == 0xF:
        operation = MISC_OPERATIONS.get(low_byte)
    else:
        operation = FAMILY_OPERATIONS[family]

    if operation is None:
        raise UnknownOpcode(opcode)
    return operation


def decode(opcode: int) -> Instruction:
    """
    Decode the provided opcode into an instruction.
    :param opcode: The 16-bit opcode, as fetched big-endian from memory.
    :return: The decoded instruction.
    :raises UnknownOpcode: If the opcode matches no known pattern.
    """
    if not 0 <= opcode <= 0xFFFF:
        raise UnknownOpcode(opcode)

    return Instruction(
        operation=select_operation(opcode),
        opcode=opcode,
        x=(opcode >> 8) & 0xF,
        y=(opcode >> 4) & 0xF,
        n=opcode & 0xF,
        kk=opcode & 0xFF,
        nnn=opcode & 0xFFF,
    )
