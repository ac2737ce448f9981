"""
DST and event example
=====================

Shows:
- advancing by days is elapsed time, so the wall clock hour shifts across DST
- field setters keep the other fields
- listening to clock changes through the event bus

Run:
    python examples/dst_and_events.py
"""

from datetime import datetime

from mockclock import CLOCK_ADVANCED, ClockConfig, ClockEvent, create_mock_clock


def main() -> None:
    cfg = ClockConfig(zone="America/New_York", start=datetime(2021, 3, 13, 12, 0))
    clock = create_mock_clock(cfg)

    def on_advance(event: ClockEvent) -> None:
        print(f"  advanced {event.delta_nanos / 1e9:+.0f}s -> {event.current}")

    clock.event_bus.on(CLOCK_ADVANCED, on_advance)

    print(f"start:   {clock.to_zoned_datetime()}")
    clock.advance_by_days(1)
    print(f"+1 day:  {clock.to_zoned_datetime()}  (hour moved by the DST change)")

    clock.set_hour(9).set_minute(30)
    print(f"set:     {clock.to_zoned_datetime()}")

    print(f"events:  {[e.payload['operation'] for e in clock.event_bus.history]}")


if __name__ == "__main__":
    main()
