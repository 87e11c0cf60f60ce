"""
Minigames - Fraction puzzle models the board hands off to.

Only the rules live here; the screens that draw pizzas and asteroids
belong to the presentation layer.
"""

from .pizza import PizzaAssembler, AddResult, AddOutcome
from .space_rescue import AsteroidOrdering, SortOrder, ASTEROID_COUNT

__all__ = [
    "PizzaAssembler",
    "AddResult",
    "AddOutcome",
    "AsteroidOrdering",
    "SortOrder",
    "ASTEROID_COUNT",
]
