#time_manager.py

import constants as C
import logger as log

class TimeManager:
    """
    Owns the game clock. Only game_time is stored; the hour and day are
    always derived from it so they can never drift apart.
    """
    def __init__(self):
        self.game_time = 0.0 # Milliseconds of game time since the world was created
        self.is_paused = False
        self.time_multiplier_level = C.DEFAULT_TIME_MULTIPLIER_LEVEL
        self.current_multiplier = C.TIME_MULTIPLIERS[self.time_multiplier_level]

    @property
    def current_hour(self):
        """Fractional hour of the day in [0, 24)."""
        total_hours = self.game_time / C.HOUR_LENGTH_MS + C.STARTING_HOUR
        return total_hours % C.HOURS_PER_DAY

    @property
    def current_day(self):
        """1-based day counter."""
        return int(self.game_time // C.DAY_LENGTH_MS) + 1

    def is_daytime(self):
        return C.DAYTIME_START_HOUR <= self.current_hour < C.DAYTIME_END_HOUR

    def get_scaled_delta_time(self, real_delta_ms):
        """Returns how much game time should pass based on real time and speed."""
        if self.is_paused:
            return 0.0
        return real_delta_ms * self.current_multiplier

    def advance(self, delta_ms):
        """Moves the clock forward. The clock never runs backwards."""
        self.game_time += max(0.0, delta_ms)

    def toggle_pause(self):
        self.is_paused = not self.is_paused
        log.log(f"Event: Simulation {'paused' if self.is_paused else 'resumed'}.")

    def set_speed(self, level):
        if level in C.TIME_MULTIPLIERS:
            self.time_multiplier_level = level
            self.current_multiplier = C.TIME_MULTIPLIERS[level]
            log.log(f"Event: Simulation speed set to level {level} (x{self.current_multiplier}).")

    def get_display_string(self):
        hour = int(self.current_hour)
        minute = int((self.current_hour - hour) * 60)
        ampm = "PM" if hour >= 12 else "AM"
        hour12 = hour % 12 or 12

        time_str = f"Day {self.current_day}, {hour12}:{minute:02d} {ampm}"
        speed_str = f"Speed: x{self.current_multiplier}"
        if self.is_paused:
            speed_str = "Speed: PAUSED"

        return f"{time_str} | {speed_str}"
