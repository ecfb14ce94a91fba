"""Encoding of PIX NEV instrument and diagnostic commands into CAN frames, decoding of instrument feedback frames, and command delay tracking."""

__version__ = "1.1.0"