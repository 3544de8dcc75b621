"""Plain message types for velocity commands, laser scans and markers."""

from __future__ import annotations

from dataclasses import dataclass, field

FORWARD_SPEED = 0.2


@dataclass
class Twist:
    """A planar velocity command: forward speed and yaw rate."""

    linear_x: float = 0.0
    angular_z: float = 0.0


@dataclass
class LaserScan:
    """A single sweep of a planar laser range finder."""

    ranges: list[float] = field(default_factory=list)
    angle_min: float = 0.0
    angle_max: float = 0.0
    angle_increment: float = 0.0
    range_min: float = 0.0
    range_max: float = 0.0


@dataclass
class Marker:
    """A sphere marker for visualisation, placed in the robot's frame."""

    namespace: str = ""
    marker_id: int = 0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.1
    scale: float = 0.1
    color: tuple[float, float, float] = (0.0, 0.0, 0.0)
    alpha: float = 1.0
    lifetime: float = 0.0
    frame_id: str = "base_link"


def forward_velocity() -> Twist:
    """The constant command sent by the velocity publisher: straight ahead."""
    return Twist(linear_x=FORWARD_SPEED, angular_z=0.0)


def describe_scan(scan: LaserScan) -> str:
    """Summarise a scan as the laser listener reports it."""
    if not scan.ranges:
        raise ValueError("scan has no range readings")
    return (
        "LaserScan received:\n"
        f"Angle range: [{scan.angle_min:.2f}, {scan.angle_max:.2f}] "
        f"({scan.angle_max - scan.angle_min:.2f} rad)\n"
        f"Readings: {len(scan.ranges)}\n"
        f"Range min: {scan.range_min:.2f}, max: {scan.range_max:.2f}\n"
        f"First range: {scan.ranges[0]:.2f}"
    )