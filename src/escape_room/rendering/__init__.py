"""
Front ends for Escape Room.

Renderers consume the redraw instructions produced by the game session:
``terminal`` (curses, default), ``text`` (headless plain text) and
``arcade_window`` (optional Arcade GUI).
"""
