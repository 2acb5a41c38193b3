"""Пошаговая сборка тела и готовые скелеты"""

import math
from dataclasses import dataclass
from typing import Dict, List, Tuple, Iterable

from core.physics import Vector2
from core.segment import TWO_PI
from core.body import Body


HALF_PI = math.pi / 2
QUARTER_PI = math.pi / 4

# Ось Y направлена вниз: 0 - вперёд (вправо), pi/2 - вниз, 3pi/2 - вверх


@dataclass
class SegmentSpec:
    """Описание сегмента до сборки"""
    name: str
    length: float
    angle: float
    min_angle: float = 0.0
    max_angle: float = TWO_PI


class BodyBuilder:
    """
    Строитель тела.

    Сначала копит описания сегментов и связей, затем build() создаёт Body:
    добавляет сегменты в порядке объявления, соединяет их и делает
    полный пересчёт позиций.
    """

    DEFAULT_BASE = (100.0, 300.0)
    DEFAULT_GROUND = 400.0

    def __init__(self):
        self.base_position = Vector2(*self.DEFAULT_BASE)
        self.ground_level = self.DEFAULT_GROUND
        self.ground_tolerance = 1.0
        self.segment_specs: Dict[str, SegmentSpec] = {}
        self.connections: List[Tuple[str, str]] = []

    def set_base_position(self, position: Vector2) -> 'BodyBuilder':
        self.base_position = position.copy()
        return self

    def set_ground_level(self, level: float) -> 'BodyBuilder':
        self.ground_level = float(level)
        return self

    def set_ground_tolerance(self, tolerance: float) -> 'BodyBuilder':
        self.ground_tolerance = float(tolerance)
        return self

    def add_segment(self, name: str, length: float, angle: float,
                    min_angle: float = 0.0, max_angle: float = TWO_PI) -> 'BodyBuilder':
        """Повторное имя заменяет прежнее описание"""
        self.segment_specs[name] = SegmentSpec(name, length, angle, min_angle, max_angle)
        return self

    def connect_segments(self, parent_name: str, child_name: str) -> 'BodyBuilder':
        self.connections.append((parent_name, child_name))
        return self

    def from_specs(self, specs: Iterable[SegmentSpec],
                   connections: Iterable[Tuple[str, str]]) -> 'BodyBuilder':
        """Загрузить готовый список описаний (заменяет текущие)"""
        self.reset()
        for spec in specs:
            self.add_segment(spec.name, spec.length, spec.angle, spec.min_angle, spec.max_angle)
        for parent_name, child_name in connections:
            self.connect_segments(parent_name, child_name)
        return self

    def build_humanoid_body(self) -> 'BodyBuilder':
        """
        Человечек в профиль, лицом вправо.
        База - таз. Корпус и обе ноги растут из таза, руки - из плеч
        (конца корпуса). При базе на 100 выше земли стопы стоят на земле.
        """
        self.reset()

        # Корпус и голова
        self.add_segment("torso", 50.0, 3 * HALF_PI, 5 * QUARTER_PI, 7 * QUARTER_PI)
        self.add_segment("head", 25.0, 3 * HALF_PI, 5 * QUARTER_PI, 7 * QUARTER_PI)
        self.connect_segments("torso", "head")

        # Руки вытянуты вперёд-вниз; предплечье и кисть гнутся через ноль
        for side, shoulder_angle in (("left", 1.3), ("right", 1.1)):
            self.add_segment(f"{side}_upper_arm", 45.0, shoulder_angle, 0.0, math.pi)
            self.connect_segments("torso", f"{side}_upper_arm")
            self.add_segment(f"{side}_lower_arm", 45.0, HALF_PI, 3 * HALF_PI, 3 * QUARTER_PI)
            self.connect_segments(f"{side}_upper_arm", f"{side}_lower_arm")
            self.add_segment(f"{side}_hand", 25.0, HALF_PI, 3 * HALF_PI, 3 * QUARTER_PI)
            self.connect_segments(f"{side}_lower_arm", f"{side}_hand")

        # Ноги
        for side in ("left", "right"):
            self.add_segment(f"{side}_upper_leg", 50.0, HALF_PI, QUARTER_PI, 3 * QUARTER_PI)
            self.add_segment(f"{side}_lower_leg", 50.0, HALF_PI, QUARTER_PI, 3 * QUARTER_PI)
            self.connect_segments(f"{side}_upper_leg", f"{side}_lower_leg")
            self.add_segment(f"{side}_foot", 40.0, 0.0, 7 * QUARTER_PI, QUARTER_PI)
            self.connect_segments(f"{side}_lower_leg", f"{side}_foot")

        return self

    def build_simple_body(self) -> 'BodyBuilder':
        """Корпус, две руки и две прямые ноги"""
        self.reset()

        self.add_segment("torso", 50.0, 3 * HALF_PI, 5 * QUARTER_PI, 7 * QUARTER_PI)
        self.add_segment("left_arm", 40.0, 3 * QUARTER_PI, HALF_PI, 3 * HALF_PI)
        self.connect_segments("torso", "left_arm")
        self.add_segment("right_arm", 40.0, QUARTER_PI, 3 * HALF_PI, HALF_PI)
        self.connect_segments("torso", "right_arm")
        self.add_segment("left_leg", 100.0, HALF_PI, QUARTER_PI, 3 * QUARTER_PI)
        self.add_segment("right_leg", 100.0, HALF_PI, QUARTER_PI, 3 * QUARTER_PI)

        return self

    def build(self, logger=None) -> Body:
        body = Body(self.base_position, self.ground_level, logger=logger,
                    ground_tolerance=self.ground_tolerance)

        for spec in self.segment_specs.values():
            body.add_segment(spec.name, spec.length, spec.angle, spec.min_angle, spec.max_angle)

        for parent_name, child_name in self.connections:
            body.connect_segment(parent_name, child_name)

        body.update_segments()
        return body

    def reset(self):
        """Очистить сегменты и связи (база и земля остаются)"""
        self.segment_specs.clear()
        self.connections.clear()


def build_preset_body(preset: str, base_position: Vector2, ground_level: float,
                      logger=None, ground_tolerance: float = 1.0) -> Body:
    """Собрать тело по имени заготовки: "humanoid" | "simple" """
    builder = BodyBuilder()
    builder.set_base_position(base_position).set_ground_level(ground_level)
    builder.set_ground_tolerance(ground_tolerance)

    if preset == "humanoid":
        builder.build_humanoid_body()
    elif preset == "simple":
        builder.build_simple_body()
    else:
        raise ValueError(f"Unknown body preset: {preset}")

    return builder.build(logger=logger)
