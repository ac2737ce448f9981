"""
Token expiry example
====================

Shows how to inject a MockClock into code that depends on "now":
- a service accepts any Clock (SystemClock in production)
- the test pins the time, then advances it past the expiry

Run:
    python examples/token_expiry.py
"""

from __future__ import annotations

from datetime import timedelta

from mockclock import Clock, Instant, MockClock, SystemClock


# ---------------------------------------------------------------------------
# 1. Application code depends on the Clock protocol only
# ---------------------------------------------------------------------------

class TokenService:
    def __init__(self, clock: Clock | None = None, ttl: timedelta = timedelta(hours=1)):
        self._clock = clock or SystemClock()
        self._ttl = ttl
        self._issued: dict[str, Instant] = {}

    def issue(self, token: str) -> None:
        self._issued[token] = self._clock.instant()

    def is_valid(self, token: str) -> bool:
        issued = self._issued.get(token)
        if issued is None:
            return False
        return self._clock.instant() < issued.plus(self._ttl)


# ---------------------------------------------------------------------------
# 2. Tests pin and move the clock
# ---------------------------------------------------------------------------

def main() -> None:
    clock = MockClock.of_fields(2015, 12, 9, 12, 25, zone="Europe/London")
    service = TokenService(clock)

    service.issue("abc")
    print(f"{clock.to_zoned_datetime()}  valid={service.is_valid('abc')}")

    clock.advance_by_minutes(59)
    print(f"{clock.to_zoned_datetime()}  valid={service.is_valid('abc')}")

    clock.advance_by_minutes(1)
    print(f"{clock.to_zoned_datetime()}  valid={service.is_valid('abc')}")


if __name__ == "__main__":
    main()
