"""
Cross Stars - Rules engine for a two-player collectible card game

The engine owns the authoritative game state and provides:
- Decklist parsing and validation against a card catalog
- Zone, PP and leader-state rules
- Turn sequencing (refresh, draw, end-of-turn cleanup)
- An HTTP API and CLI around a session of games
"""

__version__ = "0.1.0"
