"""Entry point for the Glitch Snake game."""

from __future__ import annotations

from glitch_snake.app import main

if __name__ == "__main__":
    main()
