#!/usr/bin/env python3
"""Headless simulation application - runs without UI"""

import sys
import time

from core.physics import Vector2
from core.circle import Circle
from core.builder import build_preset_body
from core.config import SimulationConfig, Presets
from core.logger import SimulationLogger
from core.statistics import StatisticsCollector
from strategies.base import StrategyKind, create_strategy
from strategies.snowball import SnowballState


class HeadlessSimulation:
    """Text-mode driver: builds the body, runs a strategy and prints its progress"""

    def __init__(self, config: SimulationConfig = None, logger=None):
        self.config = config if config is not None else SimulationConfig()

        if logger is None and self.config.log_file:
            logger = SimulationLogger(self.config.log_file)
        self.logger = logger

        self.stats = StatisticsCollector()
        self.body = None
        self.target = None
        self.strategy = None
        self.mode = None
        self.step_count = 0

        print("=" * 60)
        print(f"HEADLESS SIMULATION: {self.config.mode}")
        print("=" * 60)

    # ------------------------------------------------------------------
    #  Setup
    # ------------------------------------------------------------------

    def _build_body(self):
        body_config = self.config.body
        return build_preset_body(
            body_config.preset,
            Vector2(body_config.base_x, body_config.base_y),
            body_config.ground_level,
            logger=self.logger,
            ground_tolerance=body_config.ground_tolerance,
        )

    def initialize_walker(self):
        """Fresh body, ball target and a planned walking sequence"""
        self.mode = StrategyKind.WALKER
        self.body = self._build_body()
        target = self.config.target
        self.target = Circle(Vector2(target.x, target.y), target.radius)

        self.strategy = create_strategy(StrategyKind.WALKER, self.body, self.target,
                                        self.config, self.logger)
        moves = self.strategy.plan_sequence()
        self.step_count = 0
        self.stats.start_recording()

        print(f"Walker initialized: {len(moves)} moves planned")
        print(f"Body base: {self.body.get_base_position()}, target: {self.target}")

    def initialize_snowball(self):
        """Fresh body and a snowball ready to be thrown"""
        self.mode = StrategyKind.SNOWBALL
        self.body = self._build_body()
        snowball = self.config.snowball
        self.target = Circle(Vector2(snowball.target_x, snowball.target_y), snowball.target_radius)

        self.strategy = create_strategy(StrategyKind.SNOWBALL, self.body, self.target,
                                        self.config, self.logger)
        self.strategy.plan_sequence()
        self.step_count = 0
        self.stats.start_recording()

        print(f"Snowball initialized: launch from {self.strategy.get_position()}, target: {self.target}")

    def initialize(self):
        if StrategyKind(self.config.mode) is StrategyKind.SNOWBALL:
            self.initialize_snowball()
        else:
            self.initialize_walker()

    # ------------------------------------------------------------------
    #  Execution
    # ------------------------------------------------------------------

    def is_finished(self) -> bool:
        if self.strategy is None:
            return True
        if self.mode is StrategyKind.SNOWBALL and self.step_count >= self.config.snowball.max_updates:
            return True
        return self.strategy.is_sequence_complete()

    def execute_step(self) -> bool:
        """One walker move or one snowball tick. Returns False when nothing was done"""
        if self.strategy is None:
            print("No strategy initialized. Use 'w' or 'b' first.")
            return False
        if self.is_finished():
            print("Sequence complete.")
            return False

        if self.mode is StrategyKind.WALKER:
            remaining = self.strategy.get_sequence()[self.strategy.get_current_move_index():]
            action = remaining[0].move_type.name
            success = self.strategy.execute_next_move()
            self.stats.collect_step("walker", action, success, self.body, self.target)
        else:
            if self.strategy.state is SnowballState.IDLE:
                action = "THROW"
                success = self.strategy.execute_next_move()
            else:
                action = "FLY"
                self.strategy.update(self.config.snowball.dt)
                success = True
            self.stats.collect_step("snowball", action, success, self.body, self.target,
                                    snowball_position=self.strategy.get_position())

        self.step_count += 1
        if not success:
            print(f"Step {self.step_count}: {action} failed")
        return True

    def auto_execute(self) -> int:
        """Run until the sequence is complete. Returns the number of steps done"""
        start = self.step_count
        while not self.is_finished():
            self.execute_step()
            if self.step_count % self.config.update_interval == 0:
                self.display_status()
            if self.config.step_delay > 0:
                time.sleep(self.config.step_delay)

        self.stats.stop_recording()
        self.display_result()
        return self.step_count - start

    def is_successful(self) -> bool:
        if self.strategy is None:
            return False
        if self.mode is StrategyKind.WALKER:
            return self.strategy.has_object_been_caught()
        return self.strategy.has_hit_target()

    # ------------------------------------------------------------------
    #  Output
    # ------------------------------------------------------------------

    def display_status(self):
        if self.strategy is None:
            print("Status: not initialized")
            return

        print(f"Step {self.step_count:4d} | base {self.body.get_base_position()} | "
              f"ground contacts {self.body.count_ground_contacts()}", end="")
        if self.mode is StrategyKind.WALKER:
            touching = self.body.get_segments_touching_object(self.target)
            print(f" | remaining {self.strategy.get_remaining_moves():3d} | touching {len(touching)}")
        else:
            print(f" | snowball {self.strategy.get_position()} | {self.strategy.state.value}")

    def display_result(self):
        if self.mode is StrategyKind.WALKER:
            if self.strategy.has_object_been_caught():
                print("\nResult: object caught!")
            else:
                print("\nResult: object not caught")
        elif self.strategy.has_hit_target():
            print("\nResult: snowball hit the target!")
        elif self.strategy.has_hit_ground():
            print("\nResult: snowball hit the ground")
        else:
            print("\nResult: snowball still flying (update limit reached)")

        summary = self.stats.get_summary()
        if summary:
            print(f"Steps: {summary['total_steps']}, failed: {summary['failed_steps']}")

    def display_instructions(self):
        print("Commands:")
        print("  s - execute one step")
        print("  a - auto-execute to the end")
        print("  r - reset current mode")
        print("  w - walker mode")
        print("  b - snowball mode")
        print("  q - quit")

    # ------------------------------------------------------------------
    #  Command loop
    # ------------------------------------------------------------------

    def process_command(self, command: str) -> bool:
        """Handle one command. Returns False when the loop should stop"""
        command = command.strip().lower()

        if command == 'q':
            return False
        elif command == 's':
            self.execute_step()
            self.display_status()
        elif command == 'a':
            self.auto_execute()
        elif command == 'r':
            if self.mode is StrategyKind.SNOWBALL:
                self.initialize_snowball()
            else:
                self.initialize_walker()
        elif command == 'w':
            self.initialize_walker()
        elif command == 'b':
            self.initialize_snowball()
        else:
            print(f"Unknown command: '{command}'")
            self.display_instructions()
        return True

    def run_interactive(self, input_fn=input):
        self.initialize()
        self.display_instructions()
        while True:
            try:
                command = input_fn("> ")
            except EOFError:
                break
            if not self.process_command(command):
                break
        print("Goodbye!")

    def run(self) -> bool:
        """Run the configured mode to the end"""
        self.initialize()
        self.auto_execute()
        return self.is_successful()

    def close(self):
        if self.logger is not None:
            self.logger.close()


def main():
    """Main function"""
    args = sys.argv[1:]
    interactive = "--interactive" in args
    args = [a for a in args if a != "--interactive"]

    preset = args[0] if len(args) > 0 else "walker_demo"
    try:
        config = Presets.by_name(preset)
    except ValueError as e:
        print(f"Error: {e}")
        print(f"Available presets: {', '.join(Presets.names())}")
        sys.exit(1)

    if len(args) > 1:
        if args[1] not in [kind.value for kind in StrategyKind]:
            print(f"Unknown mode: {args[1]} (use 'walker' or 'snowball')")
            sys.exit(1)
        config.mode = args[1]

    sim = HeadlessSimulation(config)
    try:
        if interactive:
            sim.run_interactive()
        else:
            sim.run()
    finally:
        sim.close()


if __name__ == "__main__":
    main()
