"""
Lookahead pursuit simulation over a densified path.

A single "turtle" starts on the first path pose and repeatedly picks the first
not-yet-referenced pose inside the lookahead circle as its goal, then moves a
fixed fraction of the way toward it. One call simulates one complete pass.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .config import MAX_ITERATIONS, PURSUIT_GAIN
from .geom import Vec2, distance, vec_add, vec_scale, vec_sub

logger = logging.getLogger(__name__)

# Pass states
SEARCHING_GOAL = "searching_goal"
ADVANCING = "advancing"
DONE = "done"


class GoalIndexError(RuntimeError):
    """The goal index left the pose list; this is a controller defect."""


@dataclass
class FollowResult:
    """Everything one following pass produced."""
    trajectory: List[Vec2] = field(default_factory=list)
    goal_lines: List[Tuple[Vec2, Vec2]] = field(default_factory=list)
    goal_indices: List[int] = field(default_factory=list)
    iterations: int = 0
    reached_end: bool = False
    exhausted: bool = False


def _check_params(lookahead_radius: float, gain: float, max_iterations: int) -> None:
    # A radius <= 0 is allowed: no pose ever qualifies, so the goal stays at index 0
    if not math.isfinite(lookahead_radius):
        raise ValueError(f"lookahead radius must be finite, got {lookahead_radius!r}")
    if not math.isfinite(gain):
        raise ValueError(f"gain must be finite, got {gain!r}")
    if isinstance(max_iterations, bool) or not isinstance(max_iterations, int) or max_iterations <= 0:
        raise ValueError(f"max_iterations must be a positive integer, got {max_iterations!r}")


def find_goal(path_poses: Sequence, turtle: Vec2, lookahead_radius: float,
              start: int = 0) -> Optional[int]:
    """
    Index of the first pose (in path order) strictly inside the lookahead
    circle that has not been referenced yet, or None.

    ``start`` may skip a prefix that is known to be fully referenced.
    """
    for i in range(start, len(path_poses)):
        path_pose = path_poses[i]
        if path_pose.referenced:
            continue
        if distance(path_pose.pos, turtle) < lookahead_radius:
            return i
    return None


def run_pass(path_poses: Sequence,
             lookahead_radius: float,
             gain: float = PURSUIT_GAIN,
             max_iterations: int = MAX_ITERATIONS) -> FollowResult:
    """
    Simulate one following pass from the start of the path.

    Poses are mutated in place: every ``referenced`` flag is cleared first and
    then set as goals are left behind. Returns a FollowResult whose trajectory
    holds at most ``max_iterations`` positions.
    """
    result = FollowResult()
    if not path_poses:
        return result
    _check_params(lookahead_radius, gain, max_iterations)

    for path_pose in path_poses:
        path_pose.referenced = False

    turtle = path_poses[0].pos
    goal_index = 0
    # Flags only go from False to True within a pass, so this never moves back
    first_open = 0
    end_pos = path_poses[-1].pos
    state = SEARCHING_GOAL

    while state != DONE and result.iterations < max_iterations:
        result.iterations += 1
        if not 0 <= goal_index < len(path_poses):
            raise GoalIndexError(f"goal index {goal_index} outside {len(path_poses)} poses")

        # Goal search; the prior goal gets referenced, not the new one
        while first_open < len(path_poses) and path_poses[first_open].referenced:
            first_open += 1
        i = find_goal(path_poses, turtle, lookahead_radius, first_open)
        if i is not None:
            path_poses[goal_index].referenced = True
            goal_index = i
            result.goal_lines.append((turtle, path_poses[goal_index].pos))
        state = ADVANCING

        goal = path_poses[goal_index].pos

        turtle = vec_add(turtle, vec_scale(vec_sub(goal, turtle), gain))
        result.trajectory.append(turtle)
        result.goal_indices.append(goal_index)

        if goal == end_pos:
            state = DONE
            result.reached_end = True
        else:
            state = SEARCHING_GOAL

    if not result.reached_end:
        result.exhausted = True
        logger.debug(
            "Pass hit the %d iteration cap with goal stuck at pose %d/%d (lookahead %.1f)",
            max_iterations, goal_index, len(path_poses) - 1, lookahead_radius)
    return result


def follow_path(path_poses: Sequence,
                lookahead_radius: float,
                gain: float = PURSUIT_GAIN,
                max_iterations: int = MAX_ITERATIONS) -> List[Vec2]:
    """Trajectory of one following pass."""
    return run_pass(path_poses, lookahead_radius, gain, max_iterations).trajectory
