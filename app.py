#!/usr/bin/env python3
"""Точка входа - запускает приложение с UI или в headless режиме"""

import sys

from core.config import Presets, load_config


def print_help():
    print("Usage: python3 app.py [OPTIONS]")
    print()
    print("OPTIONS:")
    print("  (no args)           Run with Tkinter settings + Pygame visualization")
    print("  --headless [PRESET] [MODE]")
    print("                      Run without UI")
    print(f"                      PRESET: {', '.join(Presets.names())}")
    print("                      MODE: walker, snowball (default: from preset)")
    print("  --interactive       Headless step-by-step mode (commands s/a/r/w/b/q)")
    print("  --config FILE       Load settings from a JSON file")
    print("  --help, -h          Show this help message")
    print()
    print("Examples:")
    print("  python3 app.py                              # Normal mode with UI")
    print("  python3 app.py --headless walker_demo       # Walk to the ball and grab it")
    print("  python3 app.py --headless far_throw         # Long snowball throw")
    print("  python3 app.py --interactive --config my.json")


def main():
    """Главная функция"""
    print("\n" + "=" * 60)
    print("BODYLINES - Articulated Body Simulation")
    print("=" * 60 + "\n")

    args = sys.argv[1:]

    if "--help" in args or "-h" in args:
        print_help()
        return

    config = None
    if "--config" in args:
        index = args.index("--config")
        if index + 1 >= len(args):
            print("Error: --config requires a file path")
            sys.exit(1)
        try:
            config = load_config(args[index + 1])
        except ValueError as e:
            print(f"Error: {e}")
            sys.exit(1)
        del args[index:index + 2]

    if args and args[0] == "--headless":
        print("Running in HEADLESS mode (no UI)\n")
        from headless import HeadlessSimulation

        if config is None:
            preset = args[1] if len(args) > 1 else "walker_demo"
            try:
                config = Presets.by_name(preset)
            except ValueError as e:
                print(f"Error: {e}")
                sys.exit(1)
        if len(args) > 2:
            if args[2] not in ("walker", "snowball"):
                print(f"Unknown mode: {args[2]}")
                sys.exit(1)
            config.mode = args[2]

        sim = HeadlessSimulation(config)
        try:
            sim.run()
        finally:
            sim.close()

    elif args and args[0] == "--interactive":
        print("Running in INTERACTIVE mode\n")
        from headless import HeadlessSimulation

        sim = HeadlessSimulation(config if config is not None else Presets.walker_demo())
        try:
            sim.run_interactive()
        finally:
            sim.close()

    elif args:
        print(f"Unknown argument: {args[0]}")
        print("Use 'python3 app.py --help' for usage information")
        sys.exit(1)

    else:
        # UI mode - может повторяться для нескольких симуляций
        from ui.application import SimulationApp

        while True:
            print("Running in UI mode (Tkinter + Pygame)\n")

            try:
                app = SimulationApp(config)
                app.run()

                print("\n" + "=" * 60)
                answer = input("Run another simulation? (y/n): ").lower()
                print("=" * 60 + "\n")

                if answer != 'y' and answer != 'yes':
                    print("Goodbye!")
                    break

            except KeyboardInterrupt:
                print("\n\nGoodbye!")
                break

            except Exception as e:
                print(f"\nError: {e}")
                import traceback
                traceback.print_exc()

                print("\n" + "=" * 60)
                print("TROUBLESHOOTING:")
                print("=" * 60)
                print("If you get Tkinter or Pygame errors, try running in headless mode:")
                print("  python3 app.py --headless walker_demo")
                print()
                break


if __name__ == "__main__":
    main()
