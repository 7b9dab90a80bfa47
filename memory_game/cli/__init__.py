"""Terminal presentation adapter for the memory game."""
