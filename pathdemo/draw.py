# pathdemo/draw.py

from __future__ import annotations

import pygame

from .config import (
    POSE_COLOR, CONTROL_COLOR, GOAL_LINE_COLOR, TRAJECTORY_COLOR, TEXT_COLOR,
    POSE_RADIUS_PX, CONTROL_RADIUS_PX, TRAJECTORY_RADIUS_PX
)


def _px(p):
    return (int(p[0]), int(p[1]))


def draw_path(surface, control_points, path_poses):
    """Draw path poses as dots and control points as rings."""
    for path_pose in path_poses:
        pygame.draw.circle(surface, POSE_COLOR, _px(path_pose.pos), POSE_RADIUS_PX)
    for point in control_points:
        pygame.draw.circle(surface, CONTROL_COLOR, _px(point), CONTROL_RADIUS_PX, 1)


def draw_goal_lines(surface, goal_lines):
    """Draw a line from the follower to each goal it selected."""
    for start, goal in goal_lines:
        pygame.draw.line(surface, GOAL_LINE_COLOR, _px(start), _px(goal))


def draw_trajectory(surface, trajectory):
    """Plot follower positions."""
    for pos in trajectory:
        pygame.draw.circle(surface, TRAJECTORY_COLOR, _px(pos), TRAJECTORY_RADIUS_PX)


def draw_followed_path(surface, result, show_goal_lines=True, show_trajectory=True):
    """Draw one pass result."""
    if show_goal_lines:
        draw_goal_lines(surface, result.goal_lines)
    if show_trajectory:
        draw_trajectory(surface, result.trajectory)


def draw_label(surface, anchor_xy, lines, font_small):
    """Draw stacked text lines starting at anchor."""
    x, y = anchor_xy
    for line in lines:
        text = font_small.render(line, True, TEXT_COLOR)
        surface.blit(text, (x, y))
        y += text.get_height() + 2


def status_lines(session, result, lookahead_px):
    """Status readout for the current pass."""
    if result.reached_end:
        state = "done"
    elif result.exhausted:
        state = "iteration cap hit"
    else:
        state = "idle"
    return [
        f"Control points: {len(session.control_points)}  Poses: {len(session.path_poses)}",
        f"Lookahead: {lookahead_px:.1f} px  Iterations: {result.iterations} ({state})",
        "Click: add point   R: reset   [ ]: lookahead   G: goal lines",
    ]
