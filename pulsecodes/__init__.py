"""Pulse codes -- temporal identifier codes for optically tracked LEDs.

Generates a table of bright/dark frame sequences (codewords) so that a
camera sampling a fixed number of frames can tell every LED apart, then
rephases each LED's codeword to keep the number of LEDs that are bright
in any single frame as low as possible.

Two encodings are supported:

- simple: a self-clocking framed codeword per LED identifier (start
  marker, parity, data bits, stop field).
- compact: the cheapest rotation-distinct codewords, lowest weight first,
  so the tracker never confuses two LEDs seen from a different phase.
"""

__version__ = "0.1.0"
