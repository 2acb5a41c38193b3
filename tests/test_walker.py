import dataclasses
import math

import pytest

from core.physics import Vector2
from core.circle import Circle
from core.body import Body
from core.builder import build_preset_body
from core.config import Presets
from strategies.base import StrategyKind, create_strategy
from strategies.walker import WalkerStrategy, MoveType, WalkerState, SequenceMove


def humanoid(x=100.0, y=300.0, ground=400.0):
    return build_preset_body("humanoid", Vector2(x, y), ground)


def reaching_body():
    """Две ноги на земле и четыре конечности-руки, растущие из базы"""
    body = Body(Vector2(470, 350), 400)
    body.add_segment("left_leg", 50, math.pi / 2)
    body.add_segment("right_leg", 50, math.pi / 2)
    body.add_segment("left_lower_arm", 40, math.pi)
    body.add_segment("right_lower_arm", 40, math.pi)
    body.add_segment("left_hand", 40, 0.0)
    body.add_segment("right_hand", 40, 0.0)
    return body


def run_to_end(strategy):
    results = []
    while not strategy.is_sequence_complete():
        results.append(strategy.execute_next_move())
    return results


def walk_moves(moves):
    return [m for m in moves if m.move_type in (MoveType.WALK_FORWARD, MoveType.WALK_BACKWARD)]


def test_walk_step_count():
    body = humanoid(100, 400)
    strategy = WalkerStrategy(body, Circle(Vector2(500, 350), 20), walk_speed=5.0)
    moves = strategy.plan_sequence()

    walks = walk_moves(moves)
    assert len(walks) == 70
    assert all(m.move_type is MoveType.WALK_FORWARD for m in walks)
    assert all(m.parameter == pytest.approx(5.0) for m in walks)
    direction = (Vector2(500, 350) - Vector2(100, 400)).normalized()
    assert walks[0].target_position == Vector2(100, 400) + direction * 5.0
    assert walks[-1].target_position == Vector2(100, 400) + direction * 350.0
    assert walks[-1].target_position.x == pytest.approx(447.30, abs=0.01)
    assert walks[-1].target_position.y == pytest.approx(356.59, abs=0.01)
    assert moves[-1].move_type is MoveType.GRAB


def test_last_step_is_truncated():
    strategy = WalkerStrategy(humanoid(), Circle(Vector2(500, 300), 28), walk_speed=30.0)
    walks = walk_moves(strategy.plan_sequence())
    assert len(walks) == 12
    assert walks[-1].parameter == pytest.approx(20.0)
    assert walks[-1].target_position == Vector2(450, 300)


def test_walk_backward_toward_target_on_the_left():
    strategy = WalkerStrategy(humanoid(400), Circle(Vector2(100, 300), 28), walk_speed=10.0)
    walks = walk_moves(strategy.plan_sequence())
    assert len(walks) == 25
    assert all(m.move_type is MoveType.WALK_BACKWARD for m in walks)
    assert walks[-1].target_position == Vector2(150, 300)


def test_no_walking_within_reach():
    strategy = WalkerStrategy(humanoid(), Circle(Vector2(140, 378), 28))
    moves = strategy.plan_sequence()
    assert walk_moves(moves) == []
    assert [m.segment_name for m in moves[:-1]] == [
        "left_lower_arm", "right_lower_arm", "left_hand", "right_hand"
    ]


def test_reach_moves_point_limbs_at_target():
    body = reaching_body()
    strategy = WalkerStrategy(body, Circle(Vector2(500, 350), 20))
    moves = strategy.plan_sequence()
    reach = moves[:-1]
    assert all(m.move_type is MoveType.REACH_RIGHT for m in reach)
    assert reach[0].parameter == pytest.approx(-math.pi)
    assert reach[2].parameter == pytest.approx(0.0)


def test_catches_target_with_four_limbs():
    body = reaching_body()
    target = Circle(Vector2(500, 350), 20)
    strategy = WalkerStrategy(body, target)
    strategy.plan_sequence()

    assert all(run_to_end(strategy))
    assert strategy.has_object_been_caught()
    assert len(body.get_segments_touching_object(target)) == 4
    assert strategy.state is WalkerState.COMPLETE


def test_grab_fails_out_of_reach():
    body = reaching_body()
    target = Circle(Vector2(700, 350), 20)
    strategy = WalkerStrategy(body, target, reach_distance=1000.0)
    strategy.plan_sequence()
    results = run_to_end(strategy)

    assert results[-1] is False
    assert not strategy.has_object_been_caught()
    assert strategy.has_object_been_caught() == body.can_reach_object(target, 3)


def test_walker_demo_catches_the_ball():
    config = Presets.walker_demo()
    body = build_preset_body(config.body.preset, Vector2(config.body.base_x, config.body.base_y),
                             config.body.ground_level)
    target = Circle(Vector2(config.target.x, config.target.y), config.target.radius)
    strategy = create_strategy(StrategyKind.WALKER, body, target, config)
    strategy.plan_sequence()

    assert all(run_to_end(strategy))
    assert body.get_base_position() == Vector2(450, 300)
    assert body.count_ground_contacts() == 2
    assert sorted(body.get_segments_touching_object(target)) == [
        "left_arm", "left_leg", "right_arm", "right_leg"
    ]
    assert strategy.has_object_been_caught()
    assert strategy.has_object_been_caught() == body.can_reach_object(target, 3)


def test_walking_downhill_lifts_feet_off_the_ground():
    # Цель ниже таза: база опускается вдоль направления, стопы уходят под землю
    body = humanoid()
    strategy = WalkerStrategy(body, Circle(Vector2(500, 378), 28))
    strategy.plan_sequence()
    results = run_to_end(strategy)

    assert results[:3] == [True, True, False]
    assert body.get_base_position().y > 300
    assert body.count_ground_contacts() == 0
    assert not strategy.has_object_been_caught()


def test_close_range_preset_catches_without_walking():
    config = Presets.close_range()
    body = humanoid()
    target = Circle(Vector2(config.target.x, config.target.y), config.target.radius)
    strategy = create_strategy("walker", body, target, config)
    moves = strategy.plan_sequence()
    assert walk_moves(moves) == []
    run_to_end(strategy)
    assert strategy.has_object_been_caught()


def test_project_pose_does_not_touch_live_body():
    body = humanoid()
    strategy = WalkerStrategy(body, Circle(Vector2(500, 378), 28), project_pose=True)
    strategy.plan_sequence()
    assert body.get_base_position() == Vector2(100, 300)
    assert body.get_segment("left_lower_arm").angle == pytest.approx(math.pi / 2)


def test_failed_moves_are_discarded():
    # Земля далеко - опоры нет
    body = humanoid(ground=1000)
    strategy = WalkerStrategy(body, Circle(Vector2(500, 378), 28))
    strategy.plan_sequence()
    remaining = strategy.get_remaining_moves()

    assert strategy.execute_next_move() is False
    assert strategy.get_remaining_moves() == remaining - 1
    assert strategy.get_current_move_index() == 1
    assert body.get_base_position() == Vector2(100, 300)


def test_reach_for_missing_segment_fails():
    body = reaching_body()
    strategy = WalkerStrategy(body, Circle(Vector2(500, 350), 20))
    strategy._queue.append(SequenceMove(MoveType.REACH_UP, 0.1, segment_name="tail"))
    assert strategy.execute_next_move() is False


def test_reset_pose_first():
    body = humanoid()
    body.rotate_segment("left_lower_arm", 0.3)
    strategy = WalkerStrategy(body, Circle(Vector2(140, 378), 28), reset_pose_first=True)
    moves = strategy.plan_sequence()
    assert moves[0].move_type is MoveType.RESET_POSE

    assert strategy.execute_next_move()
    assert body.get_segment("left_lower_arm").angle == pytest.approx(math.pi / 2)


def test_plan_uses_explicit_position():
    strategy = WalkerStrategy(humanoid(), None)
    moves = strategy.plan_sequence(Vector2(300, 378))
    assert len(walk_moves(moves)) == 30


def test_plan_without_target():
    strategy = WalkerStrategy(humanoid(), None)
    assert strategy.plan_sequence() == []
    assert strategy.is_sequence_complete()
    assert strategy.execute_next_move() is False


def test_state_and_replanning():
    strategy = WalkerStrategy(humanoid(), Circle(Vector2(140, 378), 28))
    assert strategy.state is WalkerState.PLANNING

    strategy.plan_sequence()
    assert strategy.state is WalkerState.QUEUED

    strategy.execute_next_move()
    assert strategy.state is WalkerState.EXECUTING

    run_to_end(strategy)
    assert strategy.state is WalkerState.COMPLETE

    strategy.plan_sequence()
    assert strategy.state is WalkerState.QUEUED
    assert strategy.get_current_move_index() == 0
    assert not strategy.has_object_been_caught()


def test_reset_sequence():
    strategy = WalkerStrategy(humanoid(), Circle(Vector2(500, 378), 28))
    strategy.plan_sequence()
    strategy.reset_sequence()
    assert strategy.get_remaining_moves() == 0
    assert strategy.get_sequence() == []
    assert strategy.is_sequence_complete()


def test_walk_speed_must_be_positive():
    strategy = WalkerStrategy(humanoid(), Circle(Vector2(500, 378), 28), walk_speed=5.0)
    assert not strategy.set_walk_speed(0)
    assert not strategy.set_walk_speed(-2)
    assert strategy.get_walk_speed() == 5.0
    assert strategy.set_walk_speed(7.5)
    assert strategy.get_walk_speed() == 7.5


def test_sequence_moves_are_frozen():
    move = SequenceMove(MoveType.GRAB)
    with pytest.raises(dataclasses.FrozenInstanceError):
        move.parameter = 1.0
