import pytest

from core.config import Presets
from headless import HeadlessSimulation
from strategies.base import StrategyKind
from strategies.snowball import SnowballState


def quiet(config):
    config.log_file = ""
    config.update_interval = 1000
    return config


def test_walker_demo_run_succeeds():
    sim = HeadlessSimulation(quiet(Presets.walker_demo()))
    assert sim.run()
    assert sim.mode is StrategyKind.WALKER
    assert sim.stats.get_summary()['actions']['GRAB'] == 1


def test_snowball_demo_run_succeeds():
    sim = HeadlessSimulation(quiet(Presets.snowball_demo()))
    assert sim.run()
    assert sim.strategy.state is SnowballState.HIT_TARGET


def test_commands_switch_modes_and_step():
    sim = HeadlessSimulation(quiet(Presets.walker_demo()))
    assert sim.process_command('w')
    remaining = sim.strategy.get_remaining_moves()

    assert sim.process_command('s')
    assert sim.strategy.get_remaining_moves() == remaining - 1

    assert sim.process_command('b')
    assert sim.mode is StrategyKind.SNOWBALL
    assert sim.process_command('s')
    assert sim.strategy.is_active()

    assert sim.process_command('r')
    assert sim.strategy.state is SnowballState.IDLE


def test_auto_command_finishes_sequence():
    sim = HeadlessSimulation(quiet(Presets.close_range()))
    sim.process_command('w')
    sim.process_command('a')
    assert sim.is_finished()
    assert sim.is_successful()
    assert not sim.execute_step()


def test_quit_and_unknown_commands(capsys):
    sim = HeadlessSimulation(quiet(Presets.walker_demo()))
    assert sim.process_command('x')
    assert "Unknown command" in capsys.readouterr().out
    assert not sim.process_command('q')


def test_step_without_strategy(capsys):
    sim = HeadlessSimulation(quiet(Presets.walker_demo()))
    assert not sim.execute_step()
    assert "No strategy initialized" in capsys.readouterr().out


def test_interactive_loop():
    commands = iter(['s', 's', 'q', 's'])
    sim = HeadlessSimulation(quiet(Presets.walker_demo()))
    sim.run_interactive(input_fn=lambda prompt: next(commands))
    assert sim.step_count == 2
    assert next(commands) == 's'


def test_interactive_loop_stops_on_eof():
    def no_input(prompt):
        raise EOFError

    sim = HeadlessSimulation(quiet(Presets.snowball_demo()))
    sim.run_interactive(input_fn=no_input)
    assert sim.mode is StrategyKind.SNOWBALL


def test_snowball_update_limit():
    config = quiet(Presets.snowball_demo())
    config.snowball.max_updates = 5
    sim = HeadlessSimulation(config)
    sim.initialize_snowball()
    steps = sim.auto_execute()
    assert steps == 5
    assert sim.strategy.is_active()


def test_writes_log_file(tmp_path):
    config = Presets.close_range()
    config.log_file = str(tmp_path / "run.log")
    sim = HeadlessSimulation(config)
    sim.run()
    sim.close()
    assert "Object caught" in (tmp_path / "run.log").read_text()
