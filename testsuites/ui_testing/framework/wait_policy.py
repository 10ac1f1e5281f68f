# ================================================================================
# Wait Policy Module
# ================================================================================
#
# Fixed-interval polling used by every synchronization point of the UI layer.
# A policy is immutable: one instance can be shared read-only by any number of
# operations and sessions.
#
# Key Features:
#   - Configurable timeout and poll interval
#   - Deterministic cutoff at the deadline
#   - Last error / last result carried on the timeout error
#   - Injectable clock and sleep (fake time in unit tests, event-pumping
#     sleep inside a live Playwright session)
#
# Usage:
#   policy = WaitPolicy(timeout=15, poll_interval=0.5)
#   value = policy.until(lambda: handle.get_attribute("aria-valuenow") == "100")
#
# ================================================================================

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple, Type, TypeVar

from loguru import logger

from .exceptions import WaitTimeoutError


T = TypeVar("T")


@dataclass(frozen=True)
class WaitPolicy:
    """
    Timeout/poll configuration with a polling loop.

    Attributes:
        timeout: Total time budget in seconds (> 0)
        poll_interval: Pause between predicate evaluations in seconds
            (0 < poll_interval <= timeout)
    """
    timeout: float = 15.0
    poll_interval: float = 0.5

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError(f"timeout must be > 0, got {self.timeout}")
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be > 0, got {self.poll_interval}")
        if self.poll_interval > self.timeout:
            raise ValueError(
                f"poll_interval ({self.poll_interval}) must not exceed "
                f"timeout ({self.timeout})"
            )

    def until(
        self,
        predicate: Callable[[], T],
        description: str = "condition",
        ignored: Tuple[Type[BaseException], ...] = (Exception,),
        sleep: Optional[Callable[[float], None]] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> T:
        """
        Poll `predicate` until it returns something other than None/False.

        An evaluation is never started after the deadline. A value produced
        by an evaluation that finished after the deadline does not count as
        success; it is reported on the raised error instead.

        Args:
            predicate: Zero-argument callable evaluated on every poll
            description: Human-readable description for logging
            ignored: Exception types recorded as `last_error` while polling;
                anything else propagates immediately
            sleep: Pause function (seconds). Defaults to time.sleep
            clock: Monotonic clock (seconds). Defaults to time.monotonic

        Returns:
            The first accepted predicate result

        Raises:
            WaitTimeoutError: If the deadline passed without success
        """
        sleep = sleep or time.sleep
        clock = clock or time.monotonic

        start = clock()
        deadline = start + self.timeout
        attempt = 0
        last_error: Optional[BaseException] = None
        last_result = None

        while True:
            attempt += 1
            result = None
            try:
                result = predicate()
                last_result = result
            except ignored as e:
                last_error = e

            now = clock()
            if _accepted(result) and now <= deadline:
                if attempt > 1:
                    logger.debug(
                        f"Wait satisfied after {attempt} attempts "
                        f"({now - start:.2f}s): {description}"
                    )
                return result

            if now >= deadline:
                elapsed = now - start
                message = (
                    f"Timeout after {elapsed:.2f}s waiting for: {description}. "
                    f"Last result: {last_result!r}, Last error: {last_error}"
                )
                logger.debug(message)
                raise WaitTimeoutError(
                    message,
                    elapsed=elapsed,
                    last_error=last_error,
                    last_result=last_result,
                )

            sleep(min(self.poll_interval, deadline - now))


def _accepted(result) -> bool:
    return result is not None and result is not False


# Pre-configured policies for common UI scenarios
POLICY_PRESETS: Dict[str, WaitPolicy] = {
    "default": WaitPolicy(timeout=15.0, poll_interval=0.5),
    # Best-effort probes that must not stall a test (ad close buttons)
    "short": WaitPolicy(timeout=3.0, poll_interval=0.25),
    # Widgets that animate over several seconds (progress bar)
    "slow_widget": WaitPolicy(timeout=30.0, poll_interval=0.5),
}


def get_wait_policy(scenario: str) -> WaitPolicy:
    """
    Get wait policy for a named scenario.

    Args:
        scenario: Scenario name (e.g., "short", "slow_widget")

    Returns:
        WaitPolicy for the scenario, or the default policy if not found
    """
    return POLICY_PRESETS.get(scenario, POLICY_PRESETS["default"])


__all__ = [
    "WaitPolicy",
    "POLICY_PRESETS",
    "get_wait_policy",
]
