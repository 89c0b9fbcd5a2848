"""
Room model for Escape Room.

Contains the cell/tile vocabulary, the bounds-checked grid, the door model and
the randomized layout generator.
"""
