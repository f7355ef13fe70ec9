import pytest

from chipcore.errors import InvalidDimensions
from chipcore.framebuffer import Framebuffer


class TestFramebuffer:
    def setup_method(self):
        self.framebuffer = Framebuffer(64, 32)

    def test_starts_blank(self):
        snapshot = self.framebuffer.snapshot()
        assert snapshot.shape == (32, 64), "Snapshot is not indexed by row then column."
        assert not snapshot.any(), "Framebuffer did not start blank."

    def test_invalid_dimensions(self):
        with pytest.raises(InvalidDimensions):
            Framebuffer(0, 32)
        with pytest.raises(InvalidDimensions):
            Framebuffer(64, -1)

    def test_row_major_layout(self):
        self.framebuffer.xor_pixel(5, 2, 1)
        assert self.framebuffer.pixels[2 * 64 + 5] == 1, "Pixel not stored row-major."
        assert self.framebuffer.snapshot()[2][5] == 1, "Snapshot not indexed [row][column]."
        assert self.framebuffer.get_pixel(5, 2) == 1, "Pixel not readable by column and row."

    def test_xor_reports_unset_pixels(self):
        assert not self.framebuffer.xor_pixel(1, 1, 1), "Setting a blank pixel reported a collision."
        assert not self.framebuffer.xor_pixel(1, 1, 0), "XOR with 0 reported a collision."
        assert self.framebuffer.get_pixel(1, 1) == 1, "XOR with 0 changed the pixel."
        assert self.framebuffer.xor_pixel(1, 1, 1), "Unsetting a pixel did not report a collision."
        assert self.framebuffer.get_pixel(1, 1) == 0, "Pixel was not unset."

    def test_accessors_are_bounds_checked(self):
        with pytest.raises(IndexError):
            self.framebuffer.get_pixel(64, 0)
        with pytest.raises(IndexError):
            self.framebuffer.xor_pixel(0, 32, 1)
        with pytest.raises(IndexError):
            self.framebuffer.get_pixel(-1, 0)

    def test_clear_keeps_size(self):
        self.framebuffer.xor_pixel(63, 31, 1)
        buffer = self.framebuffer.pixels

        self.framebuffer.clear()
        assert self.framebuffer.pixels is buffer, "Clearing replaced the buffer."
        assert len(self.framebuffer.pixels) == 64 * 32, "Clearing resized the buffer."
        assert not self.framebuffer.pixels.any(), "Clearing left pixels set."
