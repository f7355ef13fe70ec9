from chipcore.emulator import Emulator
from chipcore.errors import (
    Chip8Error,
    InvalidDimensions,
    MemoryOutOfBounds,
    RomTooLarge,
    StackOverflow,
    StackUnderflow,
    UnknownOpcode,
)
from chipcore.instructions import Instruction, Operation, decode

__all__ = [
    "Emulator",
    "Chip8Error",
    "InvalidDimensions",
    "MemoryOutOfBounds",
    "RomTooLarge",
    "StackOverflow",
    "StackUnderflow",
    "UnknownOpcode",
    "Instruction",
    "Operation",
    "decode",
]
