"""Конфигурация тела, цели и стратегий"""

import json
from dataclasses import dataclass, field, asdict
from typing import Tuple


DEFAULT_REACHING_SEGMENTS = ("left_lower_arm", "right_lower_arm", "left_hand", "right_hand")

# Чем тянется каждый готовый скелет
PRESET_REACHING_SEGMENTS = {
    "humanoid": DEFAULT_REACHING_SEGMENTS,
    "simple": ("left_arm", "right_arm"),
}

MODES = ("walker", "snowball")


@dataclass
class BodyConfig:
    """Конфигурация тела"""
    preset: str = "simple"    # "humanoid" | "simple"
    base_x: float = 100.0
    base_y: float = 300.0     # таз на 100 выше земли - стопы стоят на земле
    ground_level: float = 400.0
    ground_tolerance: float = 1.0


@dataclass
class TargetConfig:
    """Конфигурация цели"""
    x: float = 500.0
    y: float = 300.0          # на высоте таза - идём по горизонтали
    radius: float = 55.0


@dataclass
class WalkerConfig:
    """Конфигурация ходока"""
    walk_speed: float = 5.0
    reach_distance: float = 50.0  # с этого расстояния перестаём идти и тянемся
    min_ground_contacts: int = 2
    min_object_contacts: int = 3
    reaching_segments: Tuple[str, ...] = ()  # пусто - по скелету тела
    project_pose: bool = True     # считать повороты по позе после запланированных шагов
    reset_pose_first: bool = False


@dataclass
class SnowballConfig:
    """Конфигурация броска снежка"""
    radius: float = 10.0
    gravity: float = 9.8
    launch_offset: float = 50.0  # снежок вылетает выше базы
    target_x: float = 400.0
    target_y: float = 300.0
    target_radius: float = 20.0
    dt: float = 0.1
    max_updates: int = 150


@dataclass
class SimulationConfig:
    """Главная конфигурация симуляции"""
    mode: str = "walker"  # "walker" | "snowball"
    body: BodyConfig = field(default_factory=BodyConfig)
    target: TargetConfig = field(default_factory=TargetConfig)
    walker: WalkerConfig = field(default_factory=WalkerConfig)
    snowball: SnowballConfig = field(default_factory=SnowballConfig)

    # Параметры запуска
    log_file: str = "simulation_log.txt"
    step_delay: float = 0.0      # пауза между шагами в авто-режиме (сек)
    update_interval: int = 10    # выводить статус каждые N шагов
    window_width: int = 800
    window_height: int = 600


# Предустановки разных сценариев
class Presets:
    """Предустановленные конфигурации"""

    @staticmethod
    def walker_demo():
        """Идём к мячу на высоте таза и обхватываем его руками и ногами"""
        return SimulationConfig(mode="walker")

    @staticmethod
    def snowball_demo():
        """Бросок снежка в цель на уровне плеч"""
        return SimulationConfig(mode="snowball")

    @staticmethod
    def close_range():
        """Цель рядом - ходить не нужно, только тянуться"""
        config = SimulationConfig(mode="walker")
        config.body.preset = "humanoid"
        config.target = TargetConfig(x=150.0, y=378.0, radius=28.0)
        return config

    @staticmethod
    def far_throw():
        """Дальний бросок по цели у земли"""
        config = SimulationConfig(mode="snowball")
        config.snowball = SnowballConfig(target_x=650.0, target_y=360.0, target_radius=25.0)
        return config

    @staticmethod
    def names():
        return ["walker_demo", "snowball_demo", "close_range", "far_throw"]

    @staticmethod
    def by_name(name: str) -> SimulationConfig:
        if name not in Presets.names():
            raise ValueError(f"Unknown preset: {name}")
        return getattr(Presets, name)()


def reaching_segments_for(config: SimulationConfig) -> Tuple[str, ...]:
    """Сегменты для дотягивания: из конфига ходока или по скелету тела"""
    if config.walker.reaching_segments:
        return tuple(config.walker.reaching_segments)
    return PRESET_REACHING_SEGMENTS.get(config.body.preset, DEFAULT_REACHING_SEGMENTS)


def config_to_dict(config: SimulationConfig) -> dict:
    data = asdict(config)
    data['walker']['reaching_segments'] = list(config.walker.reaching_segments)
    return data


def config_from_dict(data: dict) -> SimulationConfig:
    """Собрать конфигурацию из словаря; отсутствующие поля - по умолчанию"""
    try:
        walker_data = dict(data.get('walker', {}))
        if 'reaching_segments' in walker_data:
            walker_data['reaching_segments'] = tuple(walker_data['reaching_segments'])

        top_level = {k: v for k, v in data.items()
                     if k not in ('body', 'target', 'walker', 'snowball')}
        config = SimulationConfig(
            body=BodyConfig(**data.get('body', {})),
            target=TargetConfig(**data.get('target', {})),
            walker=WalkerConfig(**walker_data),
            snowball=SnowballConfig(**data.get('snowball', {})),
            **top_level
        )
    except TypeError as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    if config.mode not in MODES:
        raise ValueError(f"Invalid configuration: unknown mode '{config.mode}' "
                         f"(expected one of: {', '.join(MODES)})")
    return config


def save_config(config: SimulationConfig, filepath: str):
    """Сохранить конфигурацию в JSON"""
    with open(filepath, 'w') as f:
        json.dump(config_to_dict(config), f, indent=2)


def load_config(filepath: str) -> SimulationConfig:
    """Загрузить конфигурацию из JSON"""
    try:
        with open(filepath, 'r') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Cannot read configuration from {filepath}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Configuration in {filepath} must be a JSON object")
    return config_from_dict(data)
