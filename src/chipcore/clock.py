from typing import Tuple

from chipcore.constants import TIMER_HZ

# Absorbs float rounding so that, for example, 60 sixtieths of a second always add up to a whole tick
ROUNDING_TOLERANCE = 1e-9


class Clock:
    """
    Converts elapsed wall-clock time into a number of CPU cycles and timer ticks.

    Time is accumulated rather than sampled, so a slow host catches up on the following frames instead of drifting.
    """
    def __init__(self, instructions_per_second: int, timer_hz: int = TIMER_HZ):
        """
        Constructor.
        :param instructions_per_second: How many opcodes should run each second.
        :param timer_hz: How many times the timers should tick each second.
        """
        if instructions_per_second <= 0:
            raise ValueError(f"Instructions per second must be positive, got {instructions_per_second}.")
        if timer_hz <= 0:
            raise ValueError(f"Timer frequency must be positive, got {timer_hz}.")

        self.instructions_per_second = instructions_per_second
        self.timer_hz = timer_hz
        self.pending_cycles = 0.0
        self.pending_ticks = 0.0

    def reset(self) -> None:
        """
        Forget any accumulated time.
        """
        self.pending_cycles = 0.0
        self.pending_ticks = 0.0

    @staticmethod
    def claim(pending: float) -> Tuple[int, float]:
        """
        Split an accumulated amount into its whole part and the remainder.
        :param pending: The accumulated, possibly fractional, amount.
        :return: The whole part and what is left over.
        """
        whole = int(pending + ROUNDING_TOLERANCE)
        return whole, max(pending - whole, 0.0)

    def advance(self, elapsed: float) -> Tuple[int, int]:
        """
        Accumulate elapsed time and claim the whole cycles and ticks it covers.
        :param elapsed: Seconds since the last call.
        :return: The number of CPU cycles and the number of timer ticks which are now due.
        """
        if elapsed < 0:
            raise ValueError(f"Elapsed time cannot be negative, got {elapsed}.")

        cycles, self.pending_cycles = self.claim(self.pending_cycles + elapsed * self.instructions_per_second)
        ticks, self.pending_ticks = self.claim(self.pending_ticks + elapsed * self.timer_hz)
        return cycles, ticks

    def refund(self, cycles: int, ticks: int) -> None:
        """
        Give back cycles and ticks which were claimed but never run, so they are due again on the next advance.
        :param cycles: The number of unrun cycles.
        :param ticks: The number of unrun ticks.
        """
        self.pending_cycles += cycles
        self.pending_ticks += ticks
