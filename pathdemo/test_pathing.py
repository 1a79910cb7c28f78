# Path densification checks: exact control points, spacing, duplicates and reset.
import math

from .geom import distance
from .pathing import PathError, PathPose, PathSession, add_control_point, reset_path


def _positions(poses):
    return [p.pos for p in poses]


def _build(points, spacing=10.0):
    session = PathSession(spacing=spacing)
    for p in points:
        session.add_control_point(p)
    return session


def test_straight_segment_example():
    session = _build([(0, 0), (30, 0)])
    assert _positions(session.get_path_poses()) == [(0.0, 0.0), (10.0, 0.0), (20.0, 0.0), (30.0, 0.0)]
    assert session.get_control_points() == ((0.0, 0.0), (30.0, 0.0))


def test_single_point():
    session = _build([(5, 5)])
    assert _positions(session.get_path_poses()) == [(5.0, 5.0)]
    assert session.get_control_points() == ((5.0, 5.0),)


def test_short_final_subsegment():
    session = _build([(0, 0), (25, 0)])
    pts = _positions(session.get_path_poses())
    assert pts == [(0.0, 0.0), (10.0, 0.0), (20.0, 0.0), (25.0, 0.0)]


def test_span_shorter_than_spacing():
    session = _build([(0, 0), (4, 3)])
    assert _positions(session.get_path_poses()) == [(0.0, 0.0), (4.0, 3.0)]


def test_every_control_point_has_exact_pose():
    points = [(0, 0), (37.5, 12.25), (80, -40), (80, -40), (3.3, 99.9), (120, 60)]
    session = _build(points)
    poses = _positions(session.get_path_poses())
    assert len(poses) >= len(session.get_control_points())
    # Control points appear in order as exact pose coordinates
    j = 0
    for cp in session.get_control_points():
        while poses[j] != cp:
            j += 1
        j += 1
    assert poses[-1] == (120.0, 60.0)


def test_infill_spacing():
    spacing = 10.0
    points = [(0, 0), (37, 41), (-12, 70), (95, 70)]
    session = _build(points, spacing)
    poses = _positions(session.get_path_poses())
    cps = set(session.get_control_points())
    for a, b in zip(poses, poses[1:]):
        d = distance(a, b)
        if b in cps:
            # final sub-segment of a span
            assert 0.0 < d <= spacing + 1e-9
        else:
            assert math.isclose(d, spacing, abs_tol=1e-9)


def test_arc_length_increasing_along_diagonal():
    session = _build([(0, 0), (60, 80)])
    poses = _positions(session.get_path_poses())
    dists = [distance((0.0, 0.0), p) for p in poses]
    assert all(b > a for a, b in zip(dists, dists[1:]))
    assert len(poses) == 11


def test_duplicate_point_skips_interpolation():
    control_points, path_poses = [], []
    add_control_point((10, 10), control_points, path_poses)
    added = add_control_point((10, 10), control_points, path_poses)
    assert added == 1
    assert [p.pos for p in path_poses] == [(10.0, 10.0), (10.0, 10.0)]
    assert all(math.isfinite(c) for p in path_poses for c in p.pos)


def test_anchor_from_previous_exact_pose():
    control_points, path_poses = [], []
    add_control_point((0, 0), control_points, path_poses, 10.0)
    add_control_point((15, 0), control_points, path_poses, 10.0)
    add_control_point((15, 20), control_points, path_poses, 10.0)
    assert [p.pos for p in path_poses] == [
        (0.0, 0.0), (10.0, 0.0), (15.0, 0.0), (15.0, 10.0), (15.0, 20.0)
    ]


def test_non_finite_point_rejected():
    session = _build([(0, 0)])
    try:
        session.add_control_point((float("nan"), 1.0))
    except PathError:
        pass
    else:
        raise AssertionError("nan control point should be rejected")
    assert session.get_control_points() == ((0.0, 0.0),)
    assert len(session.get_path_poses()) == 1


def test_invalid_spacing_rejected():
    for bad in (0.0, -5.0, float("inf")):
        try:
            PathSession(spacing=bad)
        except PathError:
            continue
        raise AssertionError(f"spacing {bad} should be rejected")


def test_reset_clears_everything():
    session = _build([(0, 0), (50, 50), (100, 0)])
    session.reset()
    assert session.get_control_points() == ()
    assert session.get_path_poses() == ()
    session.add_control_point((7, 7))
    assert _positions(session.get_path_poses()) == [(7.0, 7.0)]


def test_reset_path_helper():
    control_points = [(0.0, 0.0)]
    path_poses = [PathPose((0.0, 0.0))]
    reset_path(control_points, path_poses)
    assert control_points == [] and path_poses == []


def test_from_config_uses_interpolation_distance():
    cfg = {
        "path_config": {"interpolate_distance_px": {"value": 5.0}},
        "pursuit": {"gain": {"value": 0.05}, "max_iterations": {"value": 500}},
    }
    session = PathSession.from_config(cfg)
    assert session.spacing == 5.0
    assert session.gain == 0.05
    assert session.max_iterations == 500
    session.add_control_point((0, 0))
    session.add_control_point((20, 0))
    assert len(session.get_path_poses()) == 5


def run():
    for name, fn in sorted(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()


if __name__ == "__main__":
    run()
