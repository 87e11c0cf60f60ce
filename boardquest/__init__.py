"""
Boardquest - Fraction Board Game Engine

The core of an educational board game about fractions. The engine
provides:
- Procedural board generation and deterministic 2-D layout
- A roll / move turn state machine with a pursuing opponent
- A bonus-roll economy fed by puzzle results
- Exact fraction arithmetic for the puzzle screens
"""

__version__ = "0.1.0"
