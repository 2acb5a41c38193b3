import math

import pytest

from core.physics import Vector2
from core.circle import Circle
from core.body import Body


HALF_PI = math.pi / 2


@pytest.fixture
def chain():
    """a -> b: a лежит вправо, b свисает вниз"""
    body = Body(Vector2(0, 0), ground_level=10)
    body.add_segment("a", 10, 0.0)
    body.add_segment("b", 10, HALF_PI)
    body.connect_segment("a", "b")
    return body


def test_child_starts_at_parent_end(chain):
    assert chain.get_segment("b").get_start() == Vector2(10, 0)
    assert chain.get_segment("b").get_end() == Vector2(10, 10)


def test_rotation_propagates_to_descendants(chain):
    assert chain.rotate_segment("a", HALF_PI)
    assert chain.get_segment("a").get_end() == Vector2(0, 10)
    assert chain.get_segment("b").get_start() == Vector2(0, 10)
    assert chain.get_segment("b").get_end() == Vector2(0, 20)


def test_rotate_to_absolute_angle(chain):
    chain.rotate_segment_to("a", math.pi)
    assert chain.get_segment("b").get_start() == Vector2(-10, 0)


def test_rotate_missing_segment(chain):
    assert not chain.rotate_segment("missing", 1.0)
    assert not chain.rotate_segment_to("missing", 1.0)


def test_soft_fail_still_propagates():
    body = Body(Vector2(0, 0), 100)
    body.add_segment("a", 10, 0.0, 0.0, HALF_PI)
    body.add_segment("b", 5, 0.0)
    body.connect_segment("a", "b")

    assert not body.rotate_segment("a", math.pi)
    assert body.get_segment("a").angle == pytest.approx(HALF_PI)
    assert body.get_segment("b").get_start() == body.get_segment("a").get_end()


def test_duplicate_name_rejected(chain):
    assert not chain.add_segment("a", 5, 0.0)
    assert chain.get_segment_count() == 2
    assert chain.get_segment("a").length == 10


def test_connect_rejects_missing_second_parent_and_cycles(chain):
    chain.add_segment("c", 5, 0.0)
    assert not chain.connect_segment("a", "missing")
    assert not chain.connect_segment("c", "b")
    assert not chain.connect_segment("b", "a")
    assert not chain.connect_segment("a", "a")
    assert chain.get_parent_name("b") == "a"
    assert chain.get_children_names("c") == []


def test_connect_rejects_longer_cycle(chain):
    chain.add_segment("c", 5, 0.0)
    assert chain.connect_segment("b", "c")
    assert not chain.connect_segment("c", "a")


def test_tree_queries(chain):
    chain.add_segment("c", 5, 0.0)
    chain.connect_segment("a", "c")
    assert chain.get_segment_names() == ["a", "b", "c"]
    assert chain.get_root_names() == ["a"]
    assert chain.get_children_names("a") == ["b", "c"]
    assert chain.is_root("a")
    assert not chain.is_root("b")
    assert chain.is_end_point("b")
    assert not chain.is_end_point("a")
    assert chain.get_parent_name("a") is None
    assert chain.has_segment("c")
    assert len(chain.get_segment_lines()) == 3


def test_move_base_translates_whole_tree(chain):
    chain.move_base_to(Vector2(5, 5))
    assert chain.get_base_position() == Vector2(5, 5)
    assert chain.get_segment("a").get_start() == Vector2(5, 5)
    assert chain.get_segment("b").get_start() == Vector2(15, 5)
    assert chain.get_segment("a").angle == pytest.approx(0.0)
    assert chain.get_segment("b").angle == pytest.approx(HALF_PI)


def test_move_base_keeps_root_offset():
    body = Body(Vector2(0, 0), 100)
    body.add_segment("a", 10, 0.0)
    body.get_segment("a").set_start(Vector2(2, 0))
    body.move_base_to(Vector2(10, 0))
    assert body.get_segment("a").get_start() == Vector2(12, 0)

    body.update_segments()
    assert body.get_segment("a").get_start() == Vector2(10, 0)


def test_reset_pose(chain):
    chain.rotate_segment("a", 1.0)
    chain.rotate_segment("b", 1.0)
    chain.reset_pose()
    assert chain.get_segment("b").get_end() == Vector2(10, 10)


def test_ground_contacts(chain):
    assert chain.count_ground_contacts() == 1
    assert chain.get_segments_contacting_ground() == ["b"]
    assert chain.has_minimum_ground_contacts(1)
    assert not chain.has_minimum_ground_contacts(2)


def test_only_leaves_touch_objects(chain):
    target = Circle(Vector2(10, 10), 1)
    assert chain.get_segments_touching_object(target) == ["b"]

    on_parent = Circle(Vector2(5, 0), 1)
    assert chain.get_segments_touching_object(on_parent) == []


def test_leaf_touches_when_segment_passes_through_circle(chain):
    # Конец снаружи, но отрезок проходит рядом с центром
    target = Circle(Vector2(12, 5), 3)
    assert chain.get_segments_touching_object(target) == ["b"]
    assert chain.can_reach_object(target, min_touching_points=1)
    assert not chain.can_reach_object(target)


def test_copy_is_independent(chain):
    chain.rotate_segment("a", 0.5)
    clone = chain.copy()
    assert clone.get_segment("b").get_end() == chain.get_segment("b").get_end()
    assert clone.get_parent_name("b") == "a"

    clone.rotate_segment("a", 1.0)
    clone.move_base_to(Vector2(50, 50))
    assert chain.get_segment("a").angle == pytest.approx(0.5)
    assert chain.get_base_position() == Vector2(0, 0)

    clone.reset_pose()
    assert clone.get_segment("a").angle == pytest.approx(0.0)


def test_errors_are_logged():
    class Recorder:
        def __init__(self):
            self.errors = []

        def log_error(self, message):
            self.errors.append(message)

    recorder = Recorder()
    body = Body(Vector2(0, 0), 100, logger=recorder)
    body.add_segment("a", 10, 0.0)
    body.add_segment("a", 10, 0.0)
    body.connect_segment("a", "nope")
    body.rotate_segment("nope", 1.0)
    assert len(recorder.errors) == 3
