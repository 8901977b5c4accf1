# fastsense

Building blocks for a lidar and IMU SLAM pipeline. The package has no
command-line program. It is a library of messages, buffers, worker threads
and ZeroMQ transport.

## Contents

- **Messages** (`fastsense.msg`)
  - `fastsense.msg.stamped`:
    - `ZMQConverter` is the base of every message that encodes itself as a list of byte frames (`to_frames`, `from_frames`).
    - `Stamped(data, timestamp)` pairs data with a nanosecond timestamp. Its timestamp is sent as a leading 8-byte frame. Use `Stamped.from_frames(frames, data_type)` to decode one.
  - `fastsense.msg.imu`:
    - `LinearAcceleration`, `AngularVelocity` and `MagneticField` are single-precision three-component vectors (`Vector3`). Each has a `from_phidget` conversion from raw driver readings.
    - `Imu` combines the three. It supports `+`, `-` and `/` (by an `Imu` or a number).
  - `fastsense.msg.point_cloud`: `PointCloud` holds integer scan points, a ring count and a scaling factor.
  - `fastsense.msg.transform`: `Transform` holds a `Quaternion` rotation, a translation and a scaling factor.
  - `fastsense.msg.tsdf`: `TSDF` holds the map geometry and a list of `TSDFValue` cells.
- **Transport** (`fastsense.comm`)
  - `fastsense.comm.sender`:
    - `Sender(port)` publishes on a ZeroMQ PUB socket. With port `0` it binds to a free port, which you can read from `sender.port`.
    - `get_context()` returns the shared ZeroMQ context.
  - `fastsense.comm.receiver`:
    - `Receiver(addr, port, message_type, timeout_ms=100)` subscribes to a publisher.
    - `receive()` returns the next decoded message, or `None` if none arrived within the timeout.
  - `fastsense.comm.buffered_receiver`: `BufferedImuStampedReceiver` and `BufferedPclStampedReceiver` receive messages in a background thread and push them into a ring buffer.
  - `fastsense.comm.queue_bridge`:
    - `QueueBridge` pops values from one ring buffer, pushes them into another and publishes them.
    - Options: `send=False` only forwards values without publishing them. `force=True` drops the oldest value when the output buffer is full.
- **Utilities**
  - `fastsense.ring_buffer`: `ConcurrentRingBuffer` is a thread-safe bounded FIFO.
    - Pushing: `push`, `push_nb`.
    - Popping: `pop`, `pop_nb`, `pop_if`, `pop_nb_if`.
    - Peeking: `peek`, `peek_nb`.
    - When nothing can be taken, these methods raise `BufferEmpty`.
  - `fastsense.filter`: `SlidingWindowFilter` is a running mean over a fixed window.
  - `fastsense.events`: `EventHandlerList` holds callbacks. `add` returns an `EventHandlerHandle`, which can be used to remove the callback.
  - `fastsense.process_thread`: `ProcessThread` is a base class for worker threads. `Runner` is a context manager that stops the thread.
  - `fastsense.runtime_evaluator`: `RuntimeEvaluator` records timing statistics for named, nested tasks. It can print them as a table.
  - `fastsense.pcd_file`: `PCDFile` reads and writes PCD point cloud files in ASCII or binary form. Points are grouped by ring.
  - `fastsense.point_hw`: `PointHW` and `PointArith` provide integer point arithmetic for map cells.
  - `fastsense.tsdf_value`: `TSDFValue` is a TSDF cell with a 16-bit value and a 16-bit weight, packed into 32 bits.
  - `fastsense.logging_sink`: `CoutSink` and `FileSink` are destinations for log messages.
  - `fastsense.constants`: map resolutions, IMU parameters, and `now()`.

It needs Python 3.10 or later and depends on `pyzmq`.

## Examples

### Thread-safe ring buffer

```python
from fastsense.ring_buffer import BufferEmpty, ConcurrentRingBuffer

buffer = ConcurrentRingBuffer(4)
buffer.push(1)
buffer.push(2)
print(len(buffer), buffer.full(), buffer.empty())  # 2 False False
print(buffer.pop())                                # 1
try:
    ConcurrentRingBuffer(1).pop_nb(timeout_ms=10)
except BufferEmpty:
    print("nothing to pop")
```

### Integer map points

```python
from fastsense.point_hw import PointHW

p = PointHW(3, 4, 0)
print(p.norm2(), p.norm())      # 25 5
print((p * 64).to_map() == p)   # True
```

### Time-stamped messages as frames

```python
from fastsense.msg.imu import Imu, LinearAcceleration
from fastsense.msg.stamped import Stamped

msg = Stamped(Imu(acc=LinearAcceleration(0.0, 0.0, 9.81)))
frames = msg.to_frames()
decoded = Stamped.from_frames(frames, Imu)
print(decoded.timestamp == msg.timestamp)
```

### Publishing and receiving

```python
from fastsense.comm.receiver import Receiver
from fastsense.comm.sender import Sender
from fastsense.msg.imu import ImuStamped

with Sender(0) as sender, Receiver("localhost", sender.port, ImuStamped) as receiver:
    ...  # sender.send(stamped_imu); receiver.receive() returns it or None
```

### PCD files

```python
from fastsense.pcd_file import PCDFile

pcd = PCDFile("cloud.pcd")
pcd.write_points([[(1.0, 2.0, 3.0)], [(4.0, 5.0, 6.0)]], binary=True)
rings, count = pcd.read_points()
```

### Running mean, runtime measurements and events

```python
from fastsense.events import EventHandlerList
from fastsense.filter import SlidingWindowFilter
from fastsense.runtime_evaluator import RuntimeEvaluator

f = SlidingWindowFilter(3)
for value in (1.0, 2.0, 3.0, 4.0):
    f.update(value)

evaluator = RuntimeEvaluator.get_instance()
evaluator.start("total")
# ... work ...
evaluator.stop("total")
print(evaluator)

handlers = EventHandlerList()
handle = handlers.add(lambda value: print("got", value))
handlers.invoke(42)
handlers.remove(handle)
```

## What it does not do

The package does not provide the following:

- sensor drivers
- scan registration
- map building or storage
- configuration loading
- a log front-end with levels; only the sinks are provided
- an application that wires the pieces together

## Running the tests

The test suite uses pytest, which is declared in the `test` extra:

```
pip install -e .[test]
pytest
```