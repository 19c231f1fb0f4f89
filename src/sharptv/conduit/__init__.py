"""
The conduit package provides an abstraction of a bi-directional byte stream to the television.
The concrete implementation is a serial port; tests use in-memory streams.
"""
