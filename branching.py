# branching.py

import math
import constants as C

# Branch angles snap to right angles and their halves.
CANONICAL_ANGLES = (0.0, math.pi / 2, math.pi, -math.pi / 2,
                    math.pi / 4, -math.pi / 4, 3 * math.pi / 4, -3 * math.pi / 4)

def angle_distance(a, b):
    """Smallest absolute difference between two angles, in [0, pi]."""
    diff = (a - b) % (2 * math.pi)
    return min(diff, 2 * math.pi - diff)

def choose_branch_angle(nearby_angles, candidates=CANONICAL_ANGLES):
    """
    Picks the angle for a new branch given the angles of branches already near
    it on the same side of the stem.

    With no neighbours the branch grows horizontally (0). Otherwise the
    candidate nearest the neighbours' mean is used, but only if it keeps at
    least BRANCH_COLLISION_ANGLE from all of them. Returns None when it does
    not; the caller then extends an existing branch instead.
    """
    nearby_angles = list(nearby_angles)
    if not nearby_angles:
        return 0.0

    mean = sum(nearby_angles) / len(nearby_angles)
    angle = min(candidates, key=lambda candidate: angle_distance(candidate, mean))
    if any(angle_distance(angle, other) < C.BRANCH_COLLISION_ANGLE for other in nearby_angles):
        return None
    return angle

def choose_leaf_type(stage, draw):
    """Leaf types get more elaborate as the plant ages."""
    if stage >= C.STAGE_ADVANCED:
        return C.LEAF_COMPOUND if draw < C.LEAF_COMPOUND_CHANCE else C.LEAF_DETAILED
    if stage >= C.STAGE_JUVENILE:
        return C.LEAF_DETAILED if draw < C.LEAF_DETAILED_CHANCE else C.LEAF_SIMPLE
    return C.LEAF_SIMPLE

def point_along(part, t):
    """Interpolates between a linear part's start and tip."""
    return (part.start_x + (part.x - part.start_x) * t,
            part.start_y + (part.y - part.start_y) * t)

def leaf_orientation(part, leaf_x, leaf_y):
    """
    Angle for a leaf attached to a linear part: perpendicular to the part,
    pointing away from its midpoint on whichever side the leaf sits.
    """
    vx = part.x - part.start_x
    vy = part.y - part.start_y
    base_angle = math.atan2(vy, vx)
    mid_x, mid_y = point_along(part, 0.5)
    dot = vx * (leaf_x - mid_x) + vy * (leaf_y - mid_y)
    return base_angle + (math.pi / 2 if dot >= 0 else -math.pi / 2)
