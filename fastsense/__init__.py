"""Messages, buffers, utilities and ZeroMQ transport for a lidar/IMU SLAM pipeline."""

__version__ = "0.1.0"