"""Главное приложение с Tkinter UI и Pygame визуализацией"""

import sys

from core.config import SimulationConfig
from headless import HeadlessSimulation
from strategies.base import StrategyKind
from ui.settings import SettingsWindow
from ui.pygame_renderer import PygameRenderer


class SimulationApp:
    """
    Окно с телом и кнопками управления.
    Шаги выполняет тот же драйвер, что и текстовый режим; здесь только
    события, авто-режим и отрисовка.
    """

    def __init__(self, config: SimulationConfig = None):
        print("Starting BodyLines - Articulated Body Simulation")

        # Загружаем настройки через Tkinter UI
        settings_window = SettingsWindow(config)
        self.config = settings_window.get_config()

        if self.config is None:
            print("Simulation cancelled")
            sys.exit(0)

        print(f"Loaded config: mode={self.config.mode}, body={self.config.body.preset}")

        self.sim = HeadlessSimulation(self.config)
        self.sim.initialize()

        self.renderer = PygameRenderer(self.config.window_width, self.config.window_height)
        self.renderer.set_active_mode(self.sim.mode.value)

        self.auto = False
        self.running = True

    def status_items(self):
        sim = self.sim
        items = [
            ("Mode", sim.mode.value),
            ("Step", sim.step_count),
            ("Ground", sim.body.count_ground_contacts()),
        ]
        if sim.mode is StrategyKind.WALKER:
            items.append(("Left", sim.strategy.get_remaining_moves()))
            items.append(("Touching", len(sim.body.get_segments_touching_object(sim.target))))
            if sim.strategy.has_object_been_caught():
                items.append(("Result", "CAUGHT", (100, 255, 100)))
        else:
            items.append(("State", sim.strategy.state.value))
        if self.auto:
            items.append(("AUTO", "on", (255, 200, 50)))
        return items

    def run(self):
        """Запустить цикл окна"""
        print("Starting simulation... (S - step, A - auto, W/B - mode, R - reset, Q - quit)")
        print("=" * 60)

        try:
            while self.running:
                events = self.renderer.handle_events()

                if events['quit']:
                    print("\nSimulation stopped by user (window closed or Q pressed)")
                    break

                if events['walker']:
                    self.auto = False
                    self.sim.initialize_walker()
                elif events['snowball']:
                    self.auto = False
                    self.sim.initialize_snowball()
                elif events['reset']:
                    self.auto = False
                    self.sim.process_command('r')
                self.renderer.set_active_mode(self.sim.mode.value)

                if events['auto']:
                    self.auto = not self.auto
                elif events['step']:
                    self.sim.execute_step()
                    self.sim.display_status()

                if self.auto:
                    if self.sim.is_finished():
                        self.auto = False
                        self.sim.display_result()
                    else:
                        self.sim.execute_step()

                self.render()
                self.renderer.set_fps(30)

        except KeyboardInterrupt:
            print("\nSimulation interrupted by user")
        finally:
            self.cleanup()

    def render(self):
        sim = self.sim
        snowball = None
        trajectory = None
        caught = False
        if sim.mode is StrategyKind.SNOWBALL:
            snowball = sim.strategy
            if not sim.strategy.is_sequence_complete():
                trajectory = sim.strategy.predict_trajectory(self.config.snowball.max_updates,
                                                             self.config.snowball.dt)
        else:
            caught = sim.strategy.has_object_been_caught()

        self.renderer.render(sim.body, sim.target, snowball=snowball, caught=caught,
                             trajectory=trajectory, status=self.status_items())

    def cleanup(self):
        print("\nClosing simulation...")
        self.renderer.quit()
        self.sim.close()


def main():
    app = SimulationApp()
    app.run()


if __name__ == "__main__":
    main()
