"""Журнал симуляции: текстовый файл с метками времени + вывод в консоль"""

from datetime import datetime


class SimulationLogger:
    """
    Простой журнал событий.

    Пишет строки вида "2025-01-01 12:00:00 - сообщение" в файл (режим дозаписи)
    и дублирует их в консоль. Если файл не открылся - журнал остаётся
    неинициализированным и только предупреждает в консоль.
    Один экземпляр передаётся явно всем компонентам, которым он нужен.
    """

    def __init__(self, log_file_path: str = "simulation_log.txt", echo: bool = True):
        self.log_file_path = log_file_path
        self.echo = echo
        self.initialized = False
        self._file = None

        if log_file_path:
            try:
                self._file = open(log_file_path, 'a', encoding='utf-8')
            except OSError as e:
                print(f"Error: Could not open log file: {log_file_path} ({e})")
                return
            self.initialized = True
            self.log_message("Logger initialized")

    def is_initialized(self) -> bool:
        return self.initialized

    def _timestamp(self) -> str:
        return datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    def _write(self, line: str):
        self._file.write(line + "\n")
        self._file.flush()

    def log_message(self, message: str):
        if not self.initialized:
            print(f"Warning: Logger not initialized. Message: {message}")
            return
        timestamp = self._timestamp()
        self._write(f"{timestamp} - {message}")
        if self.echo:
            print(f"LOG: {timestamp} - {message}")

    def log_error(self, error: str):
        if not self.initialized:
            print(f"Warning: Logger not initialized. Error: {error}")
            return
        timestamp = self._timestamp()
        self._write(f"{timestamp} - ERROR: {error}")
        if self.echo:
            print(f"ERROR: {timestamp} - {error}")

    def log_warning(self, warning: str):
        if not self.initialized:
            print(f"Warning: Logger not initialized. Warning: {warning}")
            return
        timestamp = self._timestamp()
        self._write(f"{timestamp} - WARNING: {warning}")
        if self.echo:
            print(f"WARNING: {timestamp} - {warning}")

    # --- события снежка ---

    def log_snowball_throw(self, position, velocity):
        self.log_message(
            f"Snowball thrown from ({position.x:.2f}, {position.y:.2f}) "
            f"with velocity ({velocity.x:.2f}, {velocity.y:.2f})"
        )

    def log_snowball_hit(self, position, hit_target: bool):
        if hit_target:
            self.log_message(f"Snowball hit target at ({position.x:.2f}, {position.y:.2f})")
        else:
            self.log_message(f"Snowball missed target at ({position.x:.2f}, {position.y:.2f})")

    def close(self):
        if self._file is not None:
            self._file.close()
            self._file = None
        self.initialized = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
