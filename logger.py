# logger.py

import constants as C

# This will hold a reference to the world's TimeManager instance.
_time_manager = None

def set_time_manager(tm):
    """Sets the global time manager for the logger to use."""
    global _time_manager
    _time_manager = tm

def format_timestamp(game_time_ms):
    """Formats a game time as '[Day DDD HH:MM]' using the in-game clock."""
    total_hours = game_time_ms / C.HOUR_LENGTH_MS + C.STARTING_HOUR
    day = int(game_time_ms // C.DAY_LENGTH_MS) + 1
    hour = int(total_hours % C.HOURS_PER_DAY)
    minute = int((total_hours % 1) * 60)
    return f"[Day {day:03d} {hour:02d}:{minute:02d}]"

def log(message):
    """Prints a message with a simulation timestamp if available."""
    if _time_manager is not None and _time_manager.game_time > 0:
        print(f"{format_timestamp(_time_manager.game_time)} {message}")
    else:
        # For messages logged before the clock starts moving.
        print(f"[Sim Start] {message}")
