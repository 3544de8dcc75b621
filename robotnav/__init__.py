"""Decision logic for small mobile robots: PID control, scan safety, wall following and goals."""

__version__ = "0.1.0"