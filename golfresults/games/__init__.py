"""
Casual Game Types

Modules:
- strategies: Game type table and the stroke play strategy
"""


def __getattr__(name):
    """Lazy imports to keep subpackage import cheap."""
    if name == "get_game_type":
        from golfresults.games.strategies import get_game_type
        return get_game_type
    if name == "list_game_types":
        from golfresults.games.strategies import list_game_types
        return list_game_types
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
