"""Entry point for the snake game."""

from __future__ import annotations

from snake_engine.app import main

if __name__ == "__main__":
    main()
