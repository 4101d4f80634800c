# plant_manager.py
import numpy as np
import constants as C
import logger as log

class PlantManager:
    """
    Ordered collection of every plant in the world. Order is the order of
    planting; the world walks it in reverse so plants can be dropped mid-pass.
    """
    def __init__(self):
        self.plants = []

    def add_plant(self, plant):
        self.plants.append(plant)

    def remove_plant(self, plant_to_remove):
        """Removes a plant by identity. Returns False if it was not in the collection."""
        for index, plant in enumerate(self.plants):
            if plant is plant_to_remove:
                del self.plants[index]
                return True
        log.log(f"ERROR: Attempted to remove plant {plant_to_remove.id}, which is not managed.")
        return False

    def find_at(self, x, y):
        """Returns the plant anchored on tile (x, y), or None."""
        for plant in self.plants:
            if plant.x == x and plant.y == y:
                return plant
        return None

    def find_nearest(self, x, y, max_distance):
        """Returns the plant whose anchor is closest to (x, y), if within max_distance tiles."""
        if not self.plants:
            return None
        positions = np.array([(plant.x, plant.y) for plant in self.plants], dtype=np.float64)
        distances = np.hypot(positions[:, 0] - x, positions[:, 1] - y)
        nearest = int(np.argmin(distances))
        if distances[nearest] > max_distance:
            return None
        return self.plants[nearest]

    def find_by_id(self, plant_id):
        for plant in self.plants:
            if plant.id == plant_id:
                return plant
        return None

    def set_growth_rate(self, growth_rate):
        for plant in self.plants:
            plant.growth_rate = growth_rate

    def get_stage_counts(self):
        """Number of plants in each growth stage, keyed by stage name."""
        stages = np.fromiter((plant.stage for plant in self.plants), dtype=np.int64, count=len(self.plants))
        counts = np.bincount(stages, minlength=len(C.STAGE_NAMES))
        return {C.STAGE_NAMES[stage]: int(counts[stage]) for stage in C.STAGE_NAMES}

    def get_population_summary(self):
        if not self.plants:
            return "Population: 0 plants."
        healths = np.fromiter((plant.health for plant in self.plants), dtype=np.float64, count=len(self.plants))
        leaves = sum(len(plant.leaves) for plant in self.plants)
        stage_text = ", ".join(f"{name}={count}" for name, count in self.get_stage_counts().items() if count)
        return (f"Population: {len(self.plants)} plants ({stage_text}). "
                f"Mean health {healths.mean():.1f}, total leaves {leaves}.")

    def __iter__(self):
        """Allows the manager to be iterated over like a list (e.g., 'for plant in manager')."""
        return iter(self.plants)

    def __len__(self):
        return len(self.plants)

    def __getitem__(self, index):
        return self.plants[index]

    def __contains__(self, plant):
        return any(p is plant for p in self.plants)
