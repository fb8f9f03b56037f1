"""Chassis frames, WIT IMU protocol handling, PID control and detection post-processing for a robot car."""

__version__ = "0.1.0"