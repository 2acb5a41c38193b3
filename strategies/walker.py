"""Ходок: подойти к цели, дотянуться конечностями и схватить"""

import math
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional, Sequence

from core.physics import Vector2
from core.segment import wrap_to_pi
from core.body import Body
from core.circle import Circle
from core.config import DEFAULT_REACHING_SEGMENTS
from strategies.base import MovementStrategy, StrategyKind


class MoveType(Enum):
    WALK_FORWARD = "walk_forward"
    WALK_BACKWARD = "walk_backward"
    REACH_UP = "reach_up"
    REACH_DOWN = "reach_down"
    REACH_LEFT = "reach_left"
    REACH_RIGHT = "reach_right"
    RESET_POSE = "reset_pose"
    GRAB = "grab"


WALK_MOVES = (MoveType.WALK_FORWARD, MoveType.WALK_BACKWARD)
REACH_MOVES = (MoveType.REACH_UP, MoveType.REACH_DOWN, MoveType.REACH_LEFT, MoveType.REACH_RIGHT)


@dataclass(frozen=True)
class SequenceMove:
    """
    Один шаг плана.
    Для ходьбы parameter - длина шага, target_position - куда встанет база.
    Для дотягивания parameter - поворот сегмента segment_name (рад).
    """
    move_type: MoveType
    parameter: float = 0.0
    segment_name: Optional[str] = None
    target_position: Optional[Vector2] = None


class WalkerState(Enum):
    PLANNING = "planning"
    QUEUED = "queued"
    EXECUTING = "executing"
    COMPLETE = "complete"


def reach_direction(offset: Vector2) -> MoveType:
    """Тип дотягивания по преобладающей оси смещения (y растёт вниз)"""
    if abs(offset.x) >= abs(offset.y):
        return MoveType.REACH_RIGHT if offset.x >= 0 else MoveType.REACH_LEFT
    return MoveType.REACH_UP if offset.y < 0 else MoveType.REACH_DOWN


class WalkerStrategy(MovementStrategy):
    """
    Планирует очередь шагов: ходьба до цели, повороты рук к её центру
    и финальный захват. Выполняет по одному шагу за вызов.
    Шаг, не прошедший проверку (мало опоры, нет сегмента), выбрасывается.
    """

    kind = StrategyKind.WALKER

    def __init__(self, body: Body, target: Circle = None, walk_speed: float = 5.0,
                 logger=None, reach_distance: float = 50.0,
                 min_ground_contacts: int = 2, min_object_contacts: int = 3,
                 reaching_segments: Sequence[str] = DEFAULT_REACHING_SEGMENTS,
                 project_pose: bool = False, reset_pose_first: bool = False):
        super().__init__(body, target, logger)
        self.walk_speed = walk_speed if walk_speed > 0 else 5.0
        self.reach_distance = reach_distance
        self.min_ground_contacts = min_ground_contacts
        self.min_object_contacts = min_object_contacts
        self.reaching_segments = tuple(reaching_segments)
        self.project_pose = project_pose
        self.reset_pose_first = reset_pose_first

        self._planned: List[SequenceMove] = []
        self._queue: Deque[SequenceMove] = deque()
        self._executed = 0
        self._caught = False
        self.state = WalkerState.PLANNING

    # ------------------------------------------------------------------
    #  Планирование
    # ------------------------------------------------------------------

    def plan_sequence(self, object_position: Vector2 = None) -> List[SequenceMove]:
        """
        Составить план заново.

        Args:
            object_position: куда тянуться (по умолчанию - центр цели)

        Returns:
            список запланированных шагов
        """
        self.reset_sequence()

        if object_position is None:
            if self.target is None:
                self._log("Cannot plan sequence: no target set")
                return []
            object_position = self.target.get_center()

        shadow = self.body.copy() if self.project_pose else None
        moves: List[SequenceMove] = []

        if self.reset_pose_first:
            moves.append(SequenceMove(MoveType.RESET_POSE))
            if shadow is not None:
                shadow.reset_pose()

        moves.extend(self._plan_walk(object_position, shadow))
        moves.extend(self._plan_reach(object_position, shadow))
        moves.append(SequenceMove(MoveType.GRAB))

        self._planned = moves
        self._queue.extend(moves)
        self.state = WalkerState.QUEUED

        walk_count = sum(1 for move in moves if move.move_type in WALK_MOVES)
        self._log(f"Planned sequence: {len(moves)} moves ({walk_count} walking) "
                  f"to reach object at {object_position}")
        return list(moves)

    def _plan_walk(self, object_position: Vector2, shadow: Optional[Body]) -> List[SequenceMove]:
        base = self.body.get_base_position()
        offset_x = object_position.x - base.x
        distance = abs(offset_x) - self.reach_distance
        if distance <= 0:
            return []

        # Шаги идут по прямой к цели; их число считается только по x
        direction = (object_position - base).normalized()
        move_type = MoveType.WALK_FORWARD if offset_x >= 0 else MoveType.WALK_BACKWARD

        moves = []
        step_count = math.ceil(distance / self.walk_speed)
        walked = 0.0
        for _ in range(step_count):
            step = min(self.walk_speed, distance - walked)
            walked += step
            position = base + direction * walked
            moves.append(SequenceMove(move_type, step, target_position=position))
            if shadow is not None:
                shadow.move_base_to(position)
        return moves

    def _plan_reach(self, object_position: Vector2, shadow: Optional[Body]) -> List[SequenceMove]:
        source = shadow if shadow is not None else self.body
        moves = []
        for name in self.reaching_segments:
            segment = source.get_segment(name)
            if segment is None:
                continue
            offset = object_position - segment.get_start()
            delta = wrap_to_pi(offset.angle() - segment.angle)
            moves.append(SequenceMove(reach_direction(offset), delta, segment_name=name))
            if shadow is not None:
                shadow.rotate_segment(name, delta)
        return moves

    # ------------------------------------------------------------------
    #  Выполнение
    # ------------------------------------------------------------------

    def execute_next_move(self) -> bool:
        if not self._queue:
            return False

        move = self._queue.popleft()
        self._executed += 1
        self.state = WalkerState.EXECUTING

        success = self._apply(move)

        if not self._queue:
            self.state = WalkerState.COMPLETE
        return success

    def _apply(self, move: SequenceMove) -> bool:
        if move.move_type in WALK_MOVES:
            if not self._has_support(move):
                return False
            self.body.move_base_to(move.target_position)
            return True

        if move.move_type in REACH_MOVES:
            if not self._has_support(move):
                return False
            if not self.body.has_segment(move.segment_name):
                self._log(f"Move {move.move_type.name} failed: segment '{move.segment_name}' not found")
                return False
            if not self.body.rotate_segment(move.segment_name, move.parameter):
                self._log(f"Segment '{move.segment_name}' reached its angle limit")
            return True

        if move.move_type is MoveType.RESET_POSE:
            self.body.reset_pose()
            return True

        # GRAB
        if self.target is None:
            self._log("Grab failed: no target set")
            return False
        touching = self.body.get_segments_touching_object(self.target)
        self._caught = len(touching) >= self.min_object_contacts
        if self._caught:
            self._log(f"Object caught with {len(touching)} segments: {', '.join(touching)}")
        else:
            self._log(f"Grab failed: only {len(touching)} segments touching the object")
        return self._caught

    def _has_support(self, move: SequenceMove) -> bool:
        contacts = self.body.count_ground_contacts()
        if contacts >= self.min_ground_contacts:
            return True
        self._log(f"Move {move.move_type.name} skipped: only {contacts} ground contacts "
                  f"(need {self.min_ground_contacts})")
        return False

    # ------------------------------------------------------------------
    #  Состояние
    # ------------------------------------------------------------------

    def is_sequence_complete(self) -> bool:
        return not self._queue

    def has_object_been_caught(self) -> bool:
        return self._caught

    def get_sequence(self) -> List[SequenceMove]:
        """Весь последний план, включая выполненные шаги"""
        return list(self._planned)

    def get_current_move_index(self) -> int:
        return self._executed

    def get_remaining_moves(self) -> int:
        return len(self._queue)

    def set_walk_speed(self, speed: float) -> bool:
        if speed <= 0:
            self._log(f"Invalid walk speed {speed}: must be positive")
            return False
        self.walk_speed = speed
        return True

    def get_walk_speed(self) -> float:
        return self.walk_speed

    def reset_sequence(self):
        self._planned = []
        self._queue.clear()
        self._executed = 0
        self._caught = False
        self.state = WalkerState.PLANNING
