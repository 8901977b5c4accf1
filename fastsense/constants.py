"""System-wide constants, IMU parameters and the common timestamp clock."""

import math
import time

#: Resolution of the map in millimetres per cell.
MAP_RESOLUTION = 64

#: A weight of 1.0 is represented as this integer.
WEIGHT_RESOLUTION = 32

#: Fixed-point equivalent of 1.0 used in matrix and division calculations.
MATRIX_RESOLUTION = 1 << 15

#: Number of times the TSDF update runs in parallel.
TSDF_SPLIT_FACTOR = 4

#: Default wait in milliseconds when popping from a ring buffer in a loop.
DEFAULT_POP_TIMEOUT = 100

#: Standard gravity in m/s^2.
G = 9.80665
MAX_TIMEDIFF_SECONDS = 0.1

SERIAL_NUMBER = -1
#: IMU data rate in milliseconds.
PERIOD_MS = 4

#: 0.02 deg/s resolution, as per the IMU manual.
ANGULAR_VELOCITY_STDEV = 0.02 * (math.pi / 180.0)
#: 300 micro-g, as per the IMU manual.
LINEAR_ACCELERATION_STDEV = 300.0 * 1e-6 * G
#: 0.095 deg/s, as per the IMU manual.
MAGNETIC_FIELD_STDEV = 0.095 * (math.pi / 180.0)

# Compass correction parameters.
CC_MAG_FIELD = 0.52859
CC_OFFSET0 = 0.03921
CC_OFFSET1 = 0.19441
CC_OFFSET2 = -0.03493
CC_GAIN0 = 1.81704
CC_GAIN1 = 1.81028
CC_GAIN2 = 2.04819
CC_T0 = 0.00142
CC_T1 = -0.03591
CC_T2 = 0.00160
CC_T3 = -0.05038
CC_T4 = -0.03942
CC_T5 = -0.05673


def now() -> int:
    """Return the current time as integer nanoseconds since the epoch."""
    return time.time_ns()