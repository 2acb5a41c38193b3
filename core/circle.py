"""Круг: цель для ходока и снаряд для снежка"""

import math

from core.physics import Vector2, euler_step


class Circle:
    """
    Круглый объект симуляции.
    Может быть статичной целью или (после set_ballistics) лететь под гравитацией.
    """

    def __init__(self, center: Vector2 = None, radius: float = 10.0):
        self.center = center.copy() if center is not None else Vector2(0, 0)
        self.radius = max(0.0, float(radius))

        # Баллистика (выключена по умолчанию)
        self.velocity = Vector2(0, 0)
        self.gravity = 0.0
        self.has_physics = False

    @classmethod
    def from_xy(cls, x: float, y: float, radius: float = 10.0) -> 'Circle':
        return cls(Vector2(x, y), radius)

    def get_center(self) -> Vector2:
        return self.center.copy()

    def get_radius(self) -> float:
        return self.radius

    def area(self) -> float:
        return math.pi * self.radius * self.radius

    def circumference(self) -> float:
        return 2 * math.pi * self.radius

    def set_center(self, center: Vector2):
        self.center = center.copy()

    def set_radius(self, radius: float):
        """Радиус не может быть отрицательным"""
        self.radius = max(0.0, float(radius))

    def move(self, displacement: Vector2):
        self.center = self.center + displacement

    def set_ballistics(self, initial_velocity: Vector2, gravity: float):
        """Включить полёт с начальной скоростью"""
        self.velocity = initial_velocity.copy()
        self.gravity = gravity
        self.has_physics = True

    def get_velocity(self) -> Vector2:
        return self.velocity.copy()

    def update_position(self, dt: float):
        """Шаг полёта. Без баллистики ничего не делает"""
        if not self.has_physics:
            return
        self.center, self.velocity = euler_step(self.center, self.velocity, self.gravity, dt)

    def contains(self, point: Vector2) -> bool:
        return self.center.distance_squared_to(point) <= self.radius * self.radius

    def intersects(self, other: 'Circle') -> bool:
        sum_radii = self.radius + other.radius
        return self.center.distance_squared_to(other.center) <= sum_radii * sum_radii

    def is_on_ground(self, ground_level: float) -> bool:
        """Нижний край касается земли (y растёт вниз)"""
        return self.center.y + self.radius >= ground_level

    def distance_to(self, other: 'Circle') -> float:
        """Зазор между краями кругов (0 при пересечении)"""
        return max(0.0, self.center.distance_to(other.center) - self.radius - other.radius)

    def distance_to_center(self, other: 'Circle') -> float:
        return self.center.distance_to(other.center)

    def __repr__(self):
        return f"Circle(center={self.center}, radius={self.radius:.1f})"
