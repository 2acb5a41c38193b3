"""Физика мира: вектора и баллистика снежка"""

import math


EPSILON = 1e-6


class Vector2:
    """2D вектор с базовыми операциями"""

    # Сравнение с допуском делает хеш бессмысленным
    __hash__ = None

    def __init__(self, x=0, y=0):
        self.x = float(x)
        self.y = float(y)

    def __add__(self, other):
        if isinstance(other, Vector2):
            return Vector2(self.x + other.x, self.y + other.y)
        return Vector2(self.x + other, self.y + other)

    def __sub__(self, other):
        if isinstance(other, Vector2):
            return Vector2(self.x - other.x, self.y - other.y)
        return Vector2(self.x - other, self.y - other)

    def __mul__(self, scalar):
        return Vector2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar):
        return Vector2(self.x * scalar, self.y * scalar)

    def __truediv__(self, scalar):
        if scalar == 0:
            return Vector2(0, 0)
        return Vector2(self.x / scalar, self.y / scalar)

    def __neg__(self):
        return Vector2(-self.x, -self.y)

    # Составное присваивание меняет сам вектор
    def __iadd__(self, other):
        self.x += other.x
        self.y += other.y
        return self

    def __isub__(self, other):
        self.x -= other.x
        self.y -= other.y
        return self

    def __imul__(self, scalar):
        self.x *= scalar
        self.y *= scalar
        return self

    def __itruediv__(self, scalar):
        if scalar == 0:
            self.x = 0.0
            self.y = 0.0
        else:
            self.x /= scalar
            self.y /= scalar
        return self

    def __eq__(self, other):
        if not isinstance(other, Vector2):
            return NotImplemented
        return abs(self.x - other.x) < EPSILON and abs(self.y - other.y) < EPSILON

    def __iter__(self):
        yield self.x
        yield self.y

    def dot(self, other):
        """Скалярное произведение"""
        return self.x * other.x + self.y * other.y

    def cross(self, other):
        """Псевдоскалярное произведение (z-компонента)"""
        return self.x * other.y - self.y * other.x

    def magnitude(self):
        """Длина вектора"""
        return math.sqrt(self.x ** 2 + self.y ** 2)

    def magnitude_squared(self):
        """Квадрат длины (без sqrt, быстрее)"""
        return self.x ** 2 + self.y ** 2

    # Синонимы
    length = magnitude
    length_squared = magnitude_squared

    def normalized(self):
        """Нормализованная копия (направление, длина = 1)"""
        mag = self.magnitude()
        if mag == 0:
            return Vector2(0, 0)
        return Vector2(self.x / mag, self.y / mag)

    def normalize(self):
        """Нормализовать на месте, вернуть self"""
        mag = self.magnitude()
        if mag == 0:
            self.x = 0.0
            self.y = 0.0
        else:
            self.x /= mag
            self.y /= mag
        return self

    def distance_to(self, other):
        """Расстояние до другой точки"""
        return (self - other).magnitude()

    def distance_squared_to(self, other):
        """Квадрат расстояния (быстрее)"""
        return (self - other).magnitude_squared()

    def rotate(self, angle):
        """Повернуть на угол (радианы) вокруг начала координат"""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return Vector2(self.x * cos_a - self.y * sin_a, self.x * sin_a + self.y * cos_a)

    def angle(self):
        """Угол вектора относительно оси X"""
        return math.atan2(self.y, self.x)

    def angle_between(self, other):
        """Угол между векторами, [0, pi]"""
        mags = self.magnitude() * other.magnitude()
        if mags == 0:
            return 0.0
        cos_theta = max(-1.0, min(1.0, self.dot(other) / mags))
        return math.acos(cos_theta)

    def clamp_magnitude(self, max_mag):
        """Ограничить длину вектора"""
        mag = self.magnitude()
        if mag > max_mag:
            return self.normalized() * max_mag
        return Vector2(self.x, self.y)

    def to_tuple(self):
        return (self.x, self.y)

    def __repr__(self):
        return f"Vector2({self.x:.2f}, {self.y:.2f})"

    def copy(self):
        return Vector2(self.x, self.y)


def solve_launch_velocity(dx: float, dy: float, gravity: float) -> Vector2:
    """
    Начальная скорость снежка, чтобы попасть в точку (dx, dy).

    Упрощённая парабола: время полёта t = sqrt(2|dx| / |g|),
    vx = dx / t, vy = -g*t/2 + dy/t.
    При нулевой гравитации или нулевом времени полёта - нулевой вектор.
    """
    if gravity == 0:
        return Vector2(0, 0)
    time = math.sqrt(2 * abs(dx) / abs(gravity))
    if time == 0:
        return Vector2(0, 0)
    return Vector2(dx / time, -gravity * time / 2 + dy / time)


def euler_step(position: Vector2, velocity: Vector2, gravity: float, dt: float):
    """
    Один шаг интегрирования: сначала гравитация в скорость, потом позиция.
    Возвращает (новая позиция, новая скорость).
    """
    new_velocity = Vector2(velocity.x, velocity.y + gravity * dt)
    new_position = Vector2(position.x + new_velocity.x * dt, position.y + new_velocity.y * dt)
    return new_position, new_velocity
