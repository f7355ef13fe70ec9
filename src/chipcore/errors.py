"""
Errors raised by the interpreter.  All of them are recoverable; the host decides whether to halt, report, or ignore.
"""


class Chip8Error(Exception):
    """
    Base class for every error the interpreter raises.
    """


class InvalidDimensions(Chip8Error):
    def __init__(self, width: int, height: int):
        super().__init__(f"Invalid screen dimensions {width}x{height}, both must be greater than 0.")
        self.width = width
        self.height = height


class RomTooLarge(Chip8Error):
    def __init__(self, size: int, limit: int):
        super().__init__(f"ROM is {size} bytes but at most {limit} bytes fit in memory.")
        self.size = size
        self.limit = limit


class MemoryOutOfBounds(Chip8Error):
    def __init__(self, address: int):
        super().__init__(f"Memory access out of bounds at address {hex(address)}.")
        self.address = address


class UnknownOpcode(Chip8Error):
    def __init__(self, opcode: int):
        super().__init__(f"Unimplemented / Invalid Opcode: {opcode:04x}.")
        self.opcode = opcode


class StackOverflow(Chip8Error):
    def __init__(self, depth: int):
        super().__init__(f"Tried to call a subroutine with the stack already at its maximum depth of {depth}.")
        self.depth = depth


class StackUnderflow(Chip8Error):
    def __init__(self):
        super().__init__("Tried to return from a subroutine when the stack is empty.")
