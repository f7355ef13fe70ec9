import pytest

from chipcore.clock import Clock


class TestClock:
    def setup_method(self):
        self.clock = Clock(500)

    def test_invalid_rates(self):
        with pytest.raises(ValueError):
            Clock(0)
        with pytest.raises(ValueError):
            Clock(500, timer_hz=0)

    def test_one_second(self):
        assert self.clock.advance(1.0) == (500, 60), "One second should give the full instruction rate and 60 ticks."

    def test_sixtieths_add_up(self):
        ticks = 0
        for _ in range(60):
            ticks += self.clock.advance(1 / 60)[1]
        assert ticks == 60, "Sixty frames of a sixtieth of a second did not give sixty ticks."

    def test_fractions_accumulate(self):
        assert self.clock.advance(0.001) == (0, 0), "Nothing should be due yet."
        assert self.clock.advance(0.001) == (1, 0), "Accumulated time did not produce a cycle."
        assert self.clock.pending_cycles == pytest.approx(0.0), "Claimed cycle was not removed from the accumulated time."

    def test_catch_up(self):
        assert self.clock.advance(0.1) == (50, 6), "Long frame did not catch up on every due cycle and tick."

    def test_reset(self):
        self.clock.advance(0.0015)
        self.clock.reset()
        assert self.clock.advance(0.001) == (0, 0), "Reset did not forget accumulated time."

    def test_refund(self):
        self.clock.advance(0.01)
        self.clock.refund(3, 1)
        assert self.clock.advance(0) == (3, 1), "Refunded cycles and ticks were not due again."

    def test_negative_elapsed(self):
        with pytest.raises(ValueError):
            self.clock.advance(-0.001)
