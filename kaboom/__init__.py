"""
Kaboom - Exploding Kittens against the computer

A single-player card game engine: one human seat and three computer seats.
The engine provides:
- Deck building and dealing
- Turn and draw-cycle bookkeeping
- Legal move enumeration
- A reducer that applies one move at a time
- Random-choice computer players
"""

__version__ = "0.1.0"
