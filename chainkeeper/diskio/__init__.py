"""Executors that perform disk writes immediately or on a thread pool."""