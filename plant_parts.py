# plant_parts.py

import constants as C

END_SLOT = -1 # Slot value for the tip of a branch, sub-branch or tertiary branch

class ConnectionPoint:
    """A slot on a stem segment or branch where exactly one child part may attach."""
    def __init__(self, position, side=None):
        self.position = position # Fraction along the parent part, [0, 1]
        self.side = side # -1 left, 1 right, None for slots without a side
        self.occupied = False
        self.occupant_id = None # part_id of whatever sits here

    @property
    def t(self):
        return self.position

    def occupy(self, occupant_id):
        """Claims the slot. Returns False, and changes nothing, if it is already taken."""
        if self.occupied:
            return False
        self.occupied = True
        self.occupant_id = occupant_id
        return True

    def __repr__(self):
        return f"ConnectionPoint(t={self.position:.2f}, side={self.side}, occupant={self.occupant_id})"

class PlantPart:
    """
    Base for every part of a plant. Coordinates are in tiles, relative to the
    plant's anchor, with negative y pointing up.
    """
    kind = None

    def __init__(self, part_id, x, y, size, color):
        self.part_id = part_id
        self.x = x
        self.y = y
        self.size = size
        self.color = color

    def __repr__(self):
        return f"{type(self).__name__}(id={self.part_id}, x={self.x:.2f}, y={self.y:.2f}, size={self.size:.2f})"

class StemSegment(PlantPart):
    kind = C.PART_STEM

    def __init__(self, part_id, x, y, size, color, woody=False, curved=False):
        super().__init__(part_id, x, y, size, color)
        self.woody = woody
        self.curved = curved
        self.branch_points = []

class AbsorptionZone:
    """A simple data class for one fine-root cluster on an advanced root."""
    def __init__(self, x, y, size, efficiency):
        self.x = x # Offset from the owning root, in tiles
        self.y = y
        self.size = size
        self.efficiency = efficiency # Unitless [0.5, 1]

class Root(PlantPart):
    kind = C.PART_ROOT

    def __init__(self, part_id, x, y, size, color, advanced=False):
        super().__init__(part_id, x, y, size, color)
        self.advanced = advanced
        self.absorption = []

class LinearPart(PlantPart):
    """
    A straight part running from (start_x, start_y) to its tip at (x, y).
    Leaves attach through leaf_points (indexed slots) or end_point (END_SLOT).
    """
    def __init__(self, part_id, start_x, start_y, x, y, size, color, angle):
        super().__init__(part_id, x, y, size, color)
        self.start_x = start_x
        self.start_y = start_y
        self.angle = angle
        self.leaf_points = []
        self.end_point = ConnectionPoint(1.0)

    def get_slot(self, slot):
        """Returns the leaf slot for a slot index, or None if there is no such slot."""
        if slot == END_SLOT:
            return self.end_point
        if 0 <= slot < len(self.leaf_points):
            return self.leaf_points[slot]
        return None

class Branch(LinearPart):
    kind = C.PART_BRANCH

    def __init__(self, part_id, stem_id, slot_index, start_x, start_y, x, y, size, color, angle, complex=False):
        super().__init__(part_id, start_x, start_y, x, y, size, color, angle)
        self.stem_id = stem_id
        self.slot_index = slot_index # Index into the stem segment's branch_points
        self.complex = complex
        self.extended = False
        self.sub_branch_points = []
        self.sub_branches = []

class SubBranch(LinearPart):
    kind = C.PART_SUB_BRANCH

    def __init__(self, part_id, parent_id, slot_index, start_x, start_y, x, y, size, color, angle, length):
        super().__init__(part_id, start_x, start_y, x, y, size, color, angle)
        self.parent_id = parent_id
        self.slot_index = slot_index # Index into the parent branch's sub_branch_points
        self.length = length
        self.tertiary_points = []
        self.tertiary_branches = []

class TertiaryBranch(LinearPart):
    kind = C.PART_TERTIARY_BRANCH

    def __init__(self, part_id, parent_id, slot_index, start_x, start_y, x, y, size, color, angle, length):
        super().__init__(part_id, start_x, start_y, x, y, size, color, angle)
        self.parent_id = parent_id
        self.slot_index = slot_index # Index into the parent sub-branch's tertiary_points
        self.length = length

class Leaf(PlantPart):
    kind = C.PART_LEAF

    def __init__(self, part_id, x, y, leaf_type, size, color, angle, stem_length, parent_id=None, slot=None):
        super().__init__(part_id, x, y, size, color)
        self.leaf_type = leaf_type
        self.angle = angle
        self.stem_length = stem_length
        self.parent_id = parent_id # None for free leaves such as cotyledons
        self.slot = slot

class Connector(PlantPart):
    """Decorative joint drawn over the seed and where leaves meet their branch."""
    kind = C.PART_CONNECTOR

    def __init__(self, part_id, x, y, radius, color, is_leaf_connector=False):
        super().__init__(part_id, x, y, radius, color)
        self.radius = radius
        self.is_leaf_connector = is_leaf_connector
