"""ZeroMQ publisher and subscriber, buffered receivers and queue bridges."""