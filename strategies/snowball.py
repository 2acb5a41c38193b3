"""Бросок снежка по параболе"""

from enum import Enum

import numpy as np

from core.physics import Vector2, solve_launch_velocity, euler_step
from core.body import Body
from core.circle import Circle
from strategies.base import MovementStrategy, StrategyKind


class SnowballState(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    HIT_TARGET = "hit_target"
    HIT_GROUND = "hit_ground"


TERMINAL_STATES = (SnowballState.HIT_TARGET, SnowballState.HIT_GROUND)


class SnowballStrategy(MovementStrategy):
    """
    Тело бросает снежок в цель.

    Снежок вылетает над базой (на launch_offset выше) со скоростью,
    рассчитанной так, чтобы пролететь через центр цели. Дальше каждый
    update(dt) - один шаг полёта: сначала гравитация, потом позиция,
    затем проверки земли и цели (земля первой).
    """

    kind = StrategyKind.SNOWBALL

    def __init__(self, body: Body, target: Circle = None, snowball_radius: float = 10.0,
                 gravity: float = 9.8, logger=None, launch_offset: float = 50.0):
        super().__init__(body, target, logger)
        self.gravity = gravity
        self.launch_offset = launch_offset

        self.snowball = Circle(self.launch_position(), snowball_radius)
        self.state = SnowballState.IDLE
        self._prepared = False

    # ------------------------------------------------------------------
    #  Подготовка и бросок
    # ------------------------------------------------------------------

    def plan_sequence(self, *args, **kwargs):
        """Бросок планируется заново при выполнении - здесь только сброс"""
        self.reset()

    def launch_position(self) -> Vector2:
        return self.body.get_base_position() - Vector2(0, self.launch_offset)

    def compute_launch_velocity(self, position: Vector2) -> Vector2:
        if self.target is None:
            return Vector2(0, 0)
        offset = self.target.get_center() - position
        return solve_launch_velocity(offset.x, offset.y, self.gravity)

    def prepare_throw(self, position: Vector2, velocity: Vector2):
        """Задать точку и скорость броска вручную"""
        self.snowball.set_center(position)
        self.snowball.set_ballistics(velocity, self.gravity)
        self._prepared = True

    def throw_snowball(self) -> bool:
        if self.state is not SnowballState.IDLE:
            return False

        if not self._prepared:
            position = self.launch_position()
            self.prepare_throw(position, self.compute_launch_velocity(position))

        self.state = SnowballState.ACTIVE
        if self.logger is not None:
            self.logger.log_snowball_throw(self.snowball.get_center(), self.snowball.get_velocity())
        return True

    def execute_next_move(self) -> bool:
        return self.throw_snowball()

    # ------------------------------------------------------------------
    #  Полёт
    # ------------------------------------------------------------------

    def update(self, dt: float):
        """Один шаг полёта (только в состоянии ACTIVE)"""
        if self.state is not SnowballState.ACTIVE:
            return

        self.snowball.update_position(dt)

        if self.snowball.is_on_ground(self.body.get_ground_level()):
            self.state = SnowballState.HIT_GROUND
            if self.logger is not None:
                self.logger.log_snowball_hit(self.snowball.get_center(), False)
        elif self.target is not None and self.snowball.intersects(self.target):
            self.state = SnowballState.HIT_TARGET
            if self.logger is not None:
                self.logger.log_snowball_hit(self.snowball.get_center(), True)

    def predict_trajectory(self, steps: int = 100, dt: float = 0.1) -> np.ndarray:
        """
        Предсказать траекторию без изменения состояния.

        Для ещё не брошенного снежка считает от точки броска.
        Returns:
            массив (n, 2) позиций; обрывается на первом столкновении
        """
        if self.state is SnowballState.ACTIVE or self._prepared:
            position = self.snowball.get_center()
            velocity = self.snowball.get_velocity()
        else:
            position = self.launch_position()
            velocity = self.compute_launch_velocity(position)

        ground = self.body.get_ground_level()
        radius = self.snowball.get_radius()
        points = []
        for _ in range(steps):
            position, velocity = euler_step(position, velocity, self.gravity, dt)
            points.append((position.x, position.y))
            if position.y + radius >= ground:
                break
            if self.target is not None and \
                    Circle(position, radius).intersects(self.target):
                break

        return np.array(points, dtype=float).reshape(-1, 2)

    # ------------------------------------------------------------------
    #  Состояние
    # ------------------------------------------------------------------

    def reset(self):
        self.snowball = Circle(self.launch_position(), self.snowball.get_radius())
        self.state = SnowballState.IDLE
        self._prepared = False

    def is_sequence_complete(self) -> bool:
        return self.state in TERMINAL_STATES

    def is_active(self) -> bool:
        return self.state is SnowballState.ACTIVE

    def has_hit_target(self) -> bool:
        return self.state is SnowballState.HIT_TARGET

    def has_hit_ground(self) -> bool:
        return self.state is SnowballState.HIT_GROUND

    def get_position(self) -> Vector2:
        return self.snowball.get_center()

    def get_velocity(self) -> Vector2:
        return self.snowball.get_velocity()

    def get_radius(self) -> float:
        return self.snowball.get_radius()

    def set_gravity(self, gravity: float):
        self.gravity = gravity
