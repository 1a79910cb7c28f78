"""
Control points and the densified path built from them.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Tuple

from .config import MAX_ITERATIONS, POSE_INTERPOLATE_DISTANCE, PURSUIT_GAIN, path_flat, pursuit_flat
from .geom import Vec2, as_point, is_finite_point, vec_add, vec_norm, vec_scale, vec_sub
from .pursuit import FollowResult, run_pass

logger = logging.getLogger(__name__)


class PathError(ValueError):
    """Invalid input to the path model."""


@dataclass
class PathPose:
    """A point on the densified path."""
    pos: Vec2
    # Set once the follower has moved on from this pose during the current pass
    referenced: bool = False


def add_control_point(point: Vec2,
                      control_points: List[Vec2],
                      path_poses: List[PathPose],
                      spacing: float = POSE_INTERPOLATE_DISTANCE) -> int:
    """
    Append a control point and in-fill poses from the last stored pose to it.

    In-fill poses sit every ``spacing`` px along the straight line; the last
    one before the control point may be closer. The control point itself is
    always appended exactly. Returns the number of poses added.
    """
    point = as_point(point)
    if not is_finite_point(point):
        raise PathError(f"control point must be finite, got {point!r}")

    control_points.append(point)

    added = 0
    if path_poses:
        last_pose = path_poses[-1].pos
        displacement = vec_sub(point, last_pose)
        length = vec_norm(displacement)

        # Duplicate point: nothing to interpolate
        if length > 0.0:
            normal = vec_scale(displacement, 1.0 / length)
            inner_count = math.ceil(length / spacing)
            # i == 0 is last_pose itself, already stored
            for i in range(1, inner_count):
                offset = spacing * i
                if length - offset <= 1e-9:
                    break
                path_poses.append(PathPose(vec_add(last_pose, vec_scale(normal, offset))))
                added += 1

    path_poses.append(PathPose(point))
    return added + 1


def reset_path(control_points: List[Vec2], path_poses: List[PathPose]) -> None:
    """Clear control points and poses together."""
    control_points.clear()
    path_poses.clear()


class PathSession:
    """Owns the control points and path poses shared by builder and follower."""

    def __init__(self, spacing: float = POSE_INTERPOLATE_DISTANCE,
                 gain: float = PURSUIT_GAIN, max_iterations: int = MAX_ITERATIONS):
        if not math.isfinite(spacing) or spacing <= 0.0:
            raise PathError(f"interpolation distance must be positive, got {spacing!r}")
        self.spacing = float(spacing)
        self.gain = gain
        self.max_iterations = max_iterations
        self.control_points: List[Vec2] = []
        self.path_poses: List[PathPose] = []

    @classmethod
    def from_config(cls, cfg: dict) -> "PathSession":
        pc = path_flat(cfg)
        pp = pursuit_flat(cfg)
        return cls(spacing=pc["interpolate_distance_px"],
                   gain=pp["gain"], max_iterations=pp["max_iterations"])

    def add_control_point(self, point: Vec2) -> int:
        added = add_control_point(point, self.control_points, self.path_poses, self.spacing)
        logger.debug("Control point %s added (%d poses, %d total)",
                     self.control_points[-1], added, len(self.path_poses))
        return added

    def reset(self) -> None:
        reset_path(self.control_points, self.path_poses)
        logger.debug("Path reset")

    def get_control_points(self) -> Tuple[Vec2, ...]:
        return tuple(self.control_points)

    def get_path_poses(self) -> Tuple[PathPose, ...]:
        return tuple(self.path_poses)

    def run_pass(self, lookahead_radius: float) -> FollowResult:
        """One following pass over the current path, restarted from its first pose."""
        return run_pass(self.path_poses, lookahead_radius, self.gain, self.max_iterations)

    def follow_path(self, lookahead_radius: float) -> List[Vec2]:
        return self.run_pass(lookahead_radius).trajectory
