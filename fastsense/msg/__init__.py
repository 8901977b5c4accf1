"""IMU, point cloud, transform and TSDF messages, time-stamped and encoded as frames."""