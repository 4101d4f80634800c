#genes.py

import constants as C

class PlantGenes:
    """A data container for the tunable growth traits of a plant."""
    def __init__(self, growth_rate=C.PLANT_GROWTH_RATE):
        self.growth_rate = growth_rate  # Base growth potential, unitless multiplier
        self.water_absorption = C.PLANT_WATER_ABSORPTION  # Moisture taken per root tile per check
        self.nutrient_absorption = C.PLANT_NUTRIENT_ABSORPTION  # Nutrients taken per root tile per check
        self.growth_check_interval = C.PLANT_GROWTH_CHECK_INTERVAL_MS  # Game ms between hourly growth rolls
        self.hourly_growth_chance = C.PLANT_HOURLY_GROWTH_CHANCE  # Chance of a growth check once an hour has passed
