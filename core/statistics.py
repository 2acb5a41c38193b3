"""Статистика выполнения шагов симуляции"""

import json
from dataclasses import dataclass, asdict
from typing import List, Dict, Any, Optional


@dataclass
class StepStats:
    """Статистика за один шаг (ход ходока или тик полёта снежка)"""
    step: int
    mode: str
    action: str
    success: bool
    base_x: float
    base_y: float
    ground_contacts: int
    touching_segments: int
    snowball_x: Optional[float] = None
    snowball_y: Optional[float] = None


class StatisticsCollector:
    """Собирает и анализирует статистику симуляции"""

    def __init__(self):
        self.steps: List[StepStats] = []
        self.is_recording = False

    def start_recording(self):
        """Начать запись статистики"""
        self.steps = []
        self.is_recording = True

    def stop_recording(self):
        self.is_recording = False

    def collect_step(self, mode: str, action: str, success: bool, body,
                     target=None, snowball_position=None):
        """Записать состояние после шага"""
        if not self.is_recording:
            return

        base = body.get_base_position()
        touching = len(body.get_segments_touching_object(target)) if target is not None else 0

        stats = StepStats(
            step=len(self.steps) + 1,
            mode=mode,
            action=action,
            success=success,
            base_x=base.x,
            base_y=base.y,
            ground_contacts=body.count_ground_contacts(),
            touching_segments=touching,
            snowball_x=snowball_position.x if snowball_position is not None else None,
            snowball_y=snowball_position.y if snowball_position is not None else None,
        )
        self.steps.append(stats)

    def get_stats(self, start_step=None, end_step=None) -> List[StepStats]:
        """Получить статистику за диапазон шагов"""
        if start_step is None:
            start_step = 0
        if end_step is None:
            end_step = len(self.steps)

        return self.steps[start_step:end_step]

    def get_summary(self) -> Dict[str, Any]:
        """Сводка по всем шагам"""
        if not self.steps:
            return {}

        first_step = self.steps[0]
        last_step = self.steps[-1]
        successful = sum(1 for s in self.steps if s.success)

        actions: Dict[str, int] = {}
        for s in self.steps:
            actions[s.action] = actions.get(s.action, 0) + 1

        return {
            'total_steps': len(self.steps),
            'successful_steps': successful,
            'failed_steps': len(self.steps) - successful,
            'distance_walked': abs(last_step.base_x - first_step.base_x),
            'min_ground_contacts': min(s.ground_contacts for s in self.steps),
            'max_touching_segments': max(s.touching_segments for s in self.steps),
            'actions': actions,
        }

    def save_to_json(self, filepath: str):
        """Сохранить статистику в JSON"""
        data = {
            'steps': [asdict(s) for s in self.steps],
            'summary': self.get_summary()
        }
        with open(filepath, 'w') as f:
            json.dump(data, f, indent=2)

    def load_from_json(self, filepath: str):
        """Загрузить статистику из JSON"""
        with open(filepath, 'r') as f:
            data = json.load(f)

        self.steps = [StepStats(**step_data) for step_data in data['steps']]
