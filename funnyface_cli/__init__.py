"""
Funny Face CLI - Command-line front end for the overlay engine.

Usage:
    funnyface-cli face selfie.jpg faces.json -o clown.png
    funnyface-cli face selfie.jpg faces.json -o clown.png --no-nose
    funnyface-cli debug-rect selfie.jpg -o debug.png --rect 0.25 0.25 0.5 0.5
"""

__version__ = "1.0.0"
