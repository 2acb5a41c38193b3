"""Тело: дерево сегментов, привязанное к базовой точке"""

from typing import Dict, List, Optional, Tuple

from core.physics import Vector2
from core.segment import Segment, TWO_PI, GROUND_TOLERANCE
from core.circle import Circle


ROOT = -1


class Body:
    """
    Сочленённое тело из именованных сегментов.

    Сегменты лежат в массиве и адресуются целыми индексами (handle).
    Для каждого индекса хранится родитель (ROOT для корней) и упорядоченный
    список детей. Связи образуют лес: у ребёнка не больше одного родителя,
    циклы отклоняются при соединении.

    Корни начинаются в базовой точке, остальные - в конце родителя.
    Любой поворот или перенос базы сразу пересчитывает потомков.
    """

    def __init__(self, base_position: Vector2, ground_level: float,
                 logger=None, ground_tolerance: float = GROUND_TOLERANCE):
        self.base_position = base_position.copy()
        self.ground_level = float(ground_level)
        self.ground_tolerance = float(ground_tolerance)
        self.logger = logger

        self._segments: List[Segment] = []
        self._handles: Dict[str, int] = {}
        self._parents: List[int] = []
        self._children: List[List[int]] = []

    def _log_error(self, message: str):
        if self.logger is not None:
            self.logger.log_error(message)

    # ------------------------------------------------------------------
    #  Построение
    # ------------------------------------------------------------------

    def add_segment(self, name: str, length: float, angle: float,
                    min_angle: float = 0.0, max_angle: float = TWO_PI) -> bool:
        """Добавить сегмент, начинающийся в базовой точке"""
        if name in self._handles:
            self._log_error(f"Segment '{name}' already exists!")
            return False

        segment = Segment(name, self.base_position, length, angle, min_angle, max_angle)
        self._handles[name] = len(self._segments)
        self._segments.append(segment)
        self._parents.append(ROOT)
        self._children.append([])
        return True

    def connect_segment(self, parent_name: str, child_name: str) -> bool:
        """
        Прикрепить ребёнка к концу родителя.
        Отклоняет несуществующие имена, второго родителя и циклы.
        """
        parent = self._handles.get(parent_name)
        child = self._handles.get(child_name)
        if parent is None or child is None:
            self._log_error(
                f"Cannot connect '{parent_name}' -> '{child_name}': one or both segments don't exist!"
            )
            return False

        if self._parents[child] != ROOT:
            existing = self._segments[self._parents[child]].id
            self._log_error(f"Cannot connect: '{child_name}' is already attached to '{existing}'")
            return False

        if self._is_ancestor(child, parent):
            self._log_error(f"Cannot connect '{parent_name}' -> '{child_name}': would create a cycle")
            return False

        self._parents[child] = parent
        self._children[parent].append(child)

        self._segments[child].connect_to(self._segments[parent])
        self._update_children(child)
        return True

    def _is_ancestor(self, candidate: int, handle: int) -> bool:
        """candidate совпадает с handle или лежит на пути от handle к корню"""
        current = handle
        while current != ROOT:
            if current == candidate:
                return True
            current = self._parents[current]
        return False

    # ------------------------------------------------------------------
    #  Доступ
    # ------------------------------------------------------------------

    def get_segment(self, name: str) -> Optional[Segment]:
        handle = self._handles.get(name)
        return self._segments[handle] if handle is not None else None

    def has_segment(self, name: str) -> bool:
        return name in self._handles

    def get_segment_names(self) -> List[str]:
        return [segment.id for segment in self._segments]

    def get_segment_count(self) -> int:
        return len(self._segments)

    def get_base_position(self) -> Vector2:
        return self.base_position.copy()

    def get_ground_level(self) -> float:
        return self.ground_level

    def is_root(self, name: str) -> bool:
        handle = self._handles.get(name)
        return handle is not None and self._parents[handle] == ROOT

    def is_end_point(self, name: str) -> bool:
        """Конечный сегмент - без детей (только такие могут хватать)"""
        handle = self._handles.get(name)
        return handle is not None and not self._children[handle]

    def get_parent_name(self, name: str) -> Optional[str]:
        handle = self._handles.get(name)
        if handle is None or self._parents[handle] == ROOT:
            return None
        return self._segments[self._parents[handle]].id

    def get_children_names(self, name: str) -> List[str]:
        handle = self._handles.get(name)
        if handle is None:
            return []
        return [self._segments[child].id for child in self._children[handle]]

    def get_root_names(self) -> List[str]:
        return [self._segments[h].id for h in range(len(self._segments)) if self._parents[h] == ROOT]

    def get_segment_lines(self) -> List[Tuple[Vector2, Vector2]]:
        """Пары (начало, конец) для отрисовки"""
        return [(segment.get_start(), segment.get_end()) for segment in self._segments]

    # ------------------------------------------------------------------
    #  Движение
    # ------------------------------------------------------------------

    def rotate_segment(self, name: str, delta_angle: float) -> bool:
        """
        Повернуть сегмент на delta_angle и подтянуть потомков.
        Returns:
            False если сегмента нет или угол упёрся в предел
        """
        handle = self._handles.get(name)
        if handle is None:
            self._log_error(f"Segment '{name}' not found!")
            return False

        unconstrained = self._segments[handle].rotate(delta_angle)
        self._update_children(handle)
        return unconstrained

    def rotate_segment_to(self, name: str, target_angle: float) -> bool:
        handle = self._handles.get(name)
        if handle is None:
            self._log_error(f"Segment '{name}' not found!")
            return False

        unconstrained = self._segments[handle].rotate_to(target_angle)
        self._update_children(handle)
        return unconstrained

    def move_base_to(self, new_base: Vector2):
        """
        Перенести базу. Корни сдвигаются на то же смещение вместе с поддеревьями
        (перенос, а не повторная привязка к базе).
        """
        displacement = new_base - self.base_position
        self.base_position = new_base.copy()

        for handle, segment in enumerate(self._segments):
            if self._parents[handle] == ROOT:
                segment.move(displacement)
                self._update_children(handle)

    def update_segments(self):
        """Полный пересчёт: корни в базу, дальше вниз по дереву"""
        for handle, segment in enumerate(self._segments):
            if self._parents[handle] == ROOT:
                segment.set_start(self.base_position)
                self._update_children(handle)

    def reset_pose(self):
        """Все сегменты в исходные углы"""
        for segment in self._segments:
            segment.reset_to_rest()
        self.update_segments()

    def copy(self) -> 'Body':
        """Независимая копия с той же структурой и позой (без журнала)"""
        clone = Body(self.base_position, self.ground_level, ground_tolerance=self.ground_tolerance)
        for segment in self._segments:
            clone.add_segment(segment.id, segment.length, segment.angle,
                              segment.min_angle, segment.max_angle)
            copied = clone.get_segment(segment.id)
            copied.rest_angle = segment.rest_angle
            copied.set_start(segment.start)
        for child, parent in enumerate(self._parents):
            if parent != ROOT:
                clone.connect_segment(self._segments[parent].id, self._segments[child].id)
        return clone

    def _update_children(self, handle: int):
        parent = self._segments[handle]
        for child in self._children[handle]:
            self._segments[child].set_start(parent.get_end())
            self._update_children(child)

    # ------------------------------------------------------------------
    #  Контакты
    # ------------------------------------------------------------------

    def count_ground_contacts(self) -> int:
        """Сколько концов сегментов (начал и концов) касаются земли"""
        count = 0
        for segment in self._segments:
            if segment.is_start_contacting_ground(self.ground_level, self.ground_tolerance):
                count += 1
            if segment.is_end_contacting_ground(self.ground_level, self.ground_tolerance):
                count += 1
        return count

    def has_minimum_ground_contacts(self, min_contacts: int) -> bool:
        return self.count_ground_contacts() >= min_contacts

    def get_segments_contacting_ground(self) -> List[str]:
        return [
            segment.id for segment in self._segments
            if segment.is_start_contacting_ground(self.ground_level, self.ground_tolerance)
            or segment.is_end_contacting_ground(self.ground_level, self.ground_tolerance)
        ]

    def get_segments_touching_object(self, obj: Circle) -> List[str]:
        """Конечные сегменты, которые касаются круга"""
        touching = []
        for handle, segment in enumerate(self._segments):
            if self._children[handle]:
                continue
            if obj.contains(segment.get_end()) or \
                    segment.distance_to_point(obj.center) <= obj.radius:
                touching.append(segment.id)
        return touching

    def can_reach_object(self, obj: Circle, min_touching_points: int = 3) -> bool:
        return len(self.get_segments_touching_object(obj)) >= min_touching_points

    def __repr__(self):
        return (f"Body(base={self.base_position}, ground={self.ground_level:.1f}, "
                f"segments={len(self._segments)}, roots={self.get_root_names()})")
