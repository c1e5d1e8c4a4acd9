"""CPU benchmark over linked lists, matrices and a state machine with CRC-checked results."""

__version__ = "1.0.0"