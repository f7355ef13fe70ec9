import numpy as np

from chipcore.errors import InvalidDimensions


class Framebuffer:
    """
    A monochrome display stored as a single flat, row-major buffer of pixels (0 or 1).
    """
    def __init__(self, width: int, height: int):
        """
        Constructor.
        :param width: The number of columns.
        :param height: The number of rows.
        """
        if width <= 0 or height <= 0:
            raise InvalidDimensions(width, height)

        self.width = width
        self.height = height
        self.pixels = np.zeros(width * height, np.ubyte)

    def index(self, column: int, row: int) -> int:
        """
        Get the position of a pixel in the flat buffer.
        :param column: The x-coordinate of the pixel.
        :param row: The y-coordinate of the pixel.
        :return: The index of the pixel.
        """
        if not (0 <= column < self.width and 0 <= row < self.height):
            raise IndexError(f"Pixel ({column}, {row}) is outside of the {self.width}x{self.height} screen.")
        return row * self.width + column

    def get_pixel(self, column: int, row: int) -> int:
        return int(self.pixels[self.index(column, row)])

    def xor_pixel(self, column: int, row: int, value: int) -> bool:
        """
        XOR a value onto a pixel.
        :param column: The x-coordinate of the pixel.
        :param row: The y-coordinate of the pixel.
        :param value: The value to XOR onto the pixel (0 or 1).
        :return: True if a set pixel was unset by the operation, False otherwise.
        """
        position = self.index(column, row)
        previous = int(self.pixels[position])
        self.pixels[position] = previous ^ value
        return previous == 1 and value == 1

    def clear(self) -> None:
        """
        Unset every pixel.  The buffer keeps its size.
        """
        self.pixels.fill(0)

    def snapshot(self) -> np.ndarray:
        """
        Get a read-only copy of the display, indexed [row][column].
        """
        rows = self.pixels.reshape((self.height, self.width)).copy()
        rows.setflags(write=False)
        return rows
