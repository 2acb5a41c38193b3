"""Стратегии движения тела: общий интерфейс и фабрика"""

from abc import ABC, abstractmethod
from enum import Enum

from core.body import Body
from core.circle import Circle
from core.config import reaching_segments_for


class StrategyKind(Enum):
    WALKER = "walker"
    SNOWBALL = "snowball"


class MovementStrategy(ABC):
    """
    Абстрактная стратегия: планирует последовательность и выполняет её
    по одному шагу за вызов.
    Владеет только своим состоянием; тело и цель принадлежат драйверу.
    """

    kind: StrategyKind = None

    def __init__(self, body: Body, target: Circle = None, logger=None):
        self.body = body
        self.target = target
        self.logger = logger

    @abstractmethod
    def plan_sequence(self, *args, **kwargs):
        """Подготовить последовательность (сбрасывает прежнее состояние)"""
        pass

    @abstractmethod
    def execute_next_move(self) -> bool:
        """
        Выполнить следующий шаг.

        Returns:
            True если шаг выполнен, False если отклонён или делать нечего
        """
        pass

    @abstractmethod
    def is_sequence_complete(self) -> bool:
        pass

    def enable_logging(self, logger):
        self.logger = logger

    def set_target(self, target: Circle):
        self.target = target

    def _log(self, message: str):
        if self.logger is not None:
            self.logger.log_message(message)


# ---------------------------------------------------------------------------
#  Фабрика стратегий
# ---------------------------------------------------------------------------

def create_strategy(kind, body: Body, target: Circle, config=None, logger=None) -> MovementStrategy:
    """
    Фабрика: создать стратегию нужного типа.

    Args:
        kind:   StrategyKind или его строковое значение ("walker" | "snowball")
        body:   управляемое тело
        target: цель (круг)
        config: SimulationConfig (None - значения по умолчанию)
        logger: журнал (может отсутствовать)
    """
    from strategies.walker import WalkerStrategy
    from strategies.snowball import SnowballStrategy

    kind = StrategyKind(kind)

    if kind is StrategyKind.WALKER:
        if config is None:
            return WalkerStrategy(body, target, logger=logger)
        walker = config.walker
        return WalkerStrategy(
            body, target,
            walk_speed=walker.walk_speed,
            reach_distance=walker.reach_distance,
            min_ground_contacts=walker.min_ground_contacts,
            min_object_contacts=walker.min_object_contacts,
            reaching_segments=reaching_segments_for(config),
            project_pose=walker.project_pose,
            reset_pose_first=walker.reset_pose_first,
            logger=logger,
        )

    if config is None:
        return SnowballStrategy(body, target, logger=logger)
    snowball = config.snowball
    return SnowballStrategy(
        body, target,
        snowball_radius=snowball.radius,
        gravity=snowball.gravity,
        launch_offset=snowball.launch_offset,
        logger=logger,
    )
