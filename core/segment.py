"""Жёсткий сегмент скелета с ограничением угла"""

import math
import weakref

from core.physics import Vector2


TWO_PI = 2 * math.pi
MIN_LENGTH = 0.1
GROUND_TOLERANCE = 1.0
ANGLE_TOLERANCE = 1e-9


def normalize_angle(angle: float) -> float:
    """Привести угол к [0, 2pi)"""
    normalized = math.fmod(angle, TWO_PI)
    if normalized < 0:
        normalized += TWO_PI
    # fmod(-1e-17) + 2pi округляется ровно до 2pi
    if normalized >= TWO_PI:
        normalized = 0.0
    return normalized


def wrap_to_pi(angle: float) -> float:
    """Привести разность углов к [-pi, pi]"""
    while angle > math.pi:
        angle -= TWO_PI
    while angle < -math.pi:
        angle += TWO_PI
    return angle


class Segment:
    """
    Одно звено скелета.

    Хранит только начало, длину и угол. Конец всегда вычисляется заново,
    поэтому не может разойтись с началом и углом.
    Родитель хранится слабой ссылкой: им владеет Body, а не сегмент.
    """

    def __init__(self, segment_id: str, start: Vector2, length: float, angle: float,
                 min_angle: float = 0.0, max_angle: float = TWO_PI):
        self.id = segment_id
        self.start = start.copy()
        self.length = max(MIN_LENGTH, float(length))
        self.min_angle = float(min_angle)
        self.max_angle = float(max_angle)
        self.angle = self.clamp_angle(angle)
        self.rest_angle = self.angle
        self._parent_ref = None

    # --- геометрия ---

    def get_start(self) -> Vector2:
        return self.start.copy()

    def get_end(self) -> Vector2:
        return Vector2(
            self.start.x + self.length * math.cos(self.angle),
            self.start.y + self.length * math.sin(self.angle)
        )

    @property
    def end(self) -> Vector2:
        return self.get_end()

    def set_start(self, new_start: Vector2):
        self.start = new_start.copy()

    def move(self, displacement: Vector2):
        self.start = self.start + displacement

    # --- углы ---

    def clamp_angle(self, angle: float) -> float:
        """
        Ограничить угол диапазоном [min_angle, max_angle].

        Обычный диапазон (min <= max) - простой clamp.
        Диапазон через ноль (min > max, например 270..90 градусов):
        угол внутри [min, 2pi) или [0, max] не меняется, иначе
        прилипает к ближайшей по окружности границе.
        """
        normalized = normalize_angle(angle)

        if self.min_angle <= self.max_angle:
            return min(max(normalized, self.min_angle), self.max_angle)

        if normalized >= self.min_angle or normalized <= self.max_angle:
            return normalized

        dist_to_min = min(abs(normalized - self.min_angle),
                          abs(normalized - (self.min_angle - TWO_PI)))
        dist_to_max = min(abs(normalized - self.max_angle),
                          abs(normalized - (self.max_angle + TWO_PI)))
        return self.min_angle if dist_to_min <= dist_to_max else self.max_angle

    def set_angle(self, angle: float):
        self.angle = self.clamp_angle(angle)

    def set_angle_limits(self, min_angle: float, max_angle: float):
        """Новые пределы; текущий угол сразу приводится к ним"""
        self.min_angle = float(min_angle)
        self.max_angle = float(max_angle)
        self.angle = self.clamp_angle(self.angle)

    def rotate(self, delta_angle: float) -> bool:
        return self.rotate_to(self.angle + delta_angle)

    def rotate_to(self, target_angle: float) -> bool:
        """
        Повернуть к углу. Угол обновляется всегда (возможно, до границы).
        Returns:
            True - без ограничения, False - пришлось упереться в предел
        """
        wanted = normalize_angle(target_angle)
        clamped = self.clamp_angle(target_angle)
        self.angle = clamped

        diff = abs(clamped - wanted)
        return min(diff, TWO_PI - diff) <= ANGLE_TOLERANCE

    def reset_to_rest(self):
        """Вернуть угол, заданный при создании"""
        self.angle = self.rest_angle

    # --- связь с родителем ---

    def connect_to(self, parent: 'Segment'):
        self._parent_ref = weakref.ref(parent)
        self.start = parent.get_end()

    def disconnect(self):
        self._parent_ref = None

    def get_parent(self):
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def update_from_parent(self):
        """Начало = конец родителя (если он ещё жив)"""
        parent = self.get_parent()
        if parent is not None:
            self.start = parent.get_end()

    # --- запросы ---

    def closest_point_to(self, point: Vector2) -> Vector2:
        """Ближайшая к точке точка отрезка"""
        segment_vec = self.get_end() - self.start
        length_sq = segment_vec.magnitude_squared()
        if length_sq == 0:
            return self.start.copy()

        projection = (point - self.start).dot(segment_vec) / length_sq
        projection = max(0.0, min(1.0, projection))
        return self.start + segment_vec * projection

    def distance_to_point(self, point: Vector2) -> float:
        return point.distance_to(self.closest_point_to(point))

    def contains_point(self, point: Vector2, threshold: float = 1.0) -> bool:
        return self.distance_to_point(point) <= threshold

    def is_start_contacting_ground(self, ground_level: float,
                                   tolerance: float = GROUND_TOLERANCE) -> bool:
        return abs(self.start.y - ground_level) <= tolerance

    def is_end_contacting_ground(self, ground_level: float,
                                 tolerance: float = GROUND_TOLERANCE) -> bool:
        return abs(self.get_end().y - ground_level) <= tolerance

    def __repr__(self):
        return (f"Segment({self.id}, start={self.start}, len={self.length:.1f}, "
                f"angle={math.degrees(self.angle):.1f}deg)")
