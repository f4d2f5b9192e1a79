#!/usr/bin/env python3
"""
LASER BATTLE Launcher
======================
Run this script to start the game.
"""

from laser_battle.main import main

if __name__ == "__main__":
    main()
