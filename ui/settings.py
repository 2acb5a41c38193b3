"""Tkinter интерфейс для настроек симуляции"""

import tkinter as tk
from tkinter import ttk, messagebox, filedialog

from core.config import SimulationConfig, Presets, load_config, save_config


class SettingsWindow:
    """Окно с настройками перед запуском"""

    def __init__(self, config: SimulationConfig = None, parent=None):
        self.root = tk.Tk() if parent is None else tk.Toplevel(parent)
        self.root.title("BodyLines - Settings")
        self.root.geometry("460x640")
        self.root.resizable(True, True)
        # Закрытие крестиком только выходит из mainloop, окно уничтожает get_config
        self.root.protocol("WM_DELETE_WINDOW", self.root.quit)

        style = ttk.Style()
        style.theme_use('clam')

        self.config = config if config is not None else SimulationConfig()
        self.variables = {}

        self.create_widgets()

        self.result = None

    def create_widgets(self):
        self.container = ttk.Frame(self.root, padding=10)
        self.container.pack(fill=tk.BOTH, expand=True)

        title = ttk.Label(self.container, text="Simulation Settings", font=("Arial", 16, "bold"))
        title.pack(pady=10)

        self.create_presets_section(self.container)
        ttk.Separator(self.container, orient=tk.HORIZONTAL).pack(fill=tk.X, pady=10)

        self.form = ttk.Frame(self.container)
        self.form.pack(fill=tk.BOTH, expand=True)
        self.create_form(self.form)

        button_frame = ttk.Frame(self.container)
        button_frame.pack(fill=tk.X, pady=15)

        ttk.Button(button_frame, text="▶ Start", command=self.start_simulation).pack(side=tk.LEFT, padx=5)
        ttk.Button(button_frame, text="Load...", command=self.load_from_file).pack(side=tk.LEFT, padx=5)
        ttk.Button(button_frame, text="Save...", command=self.save_to_file).pack(side=tk.LEFT, padx=5)
        ttk.Button(button_frame, text="↺ Reset", command=self.reset_config).pack(side=tk.LEFT, padx=5)
        ttk.Button(button_frame, text="✕ Quit", command=self.root.quit).pack(side=tk.LEFT, padx=5)

    def create_presets_section(self, parent):
        frame = ttk.LabelFrame(parent, text="Presets", padding=10)
        frame.pack(fill=tk.X, pady=5)

        for name in Presets.names():
            ttk.Button(
                frame,
                text=name.replace("_", " ").title(),
                command=lambda n=name: self.load_preset(n)
            ).pack(fill=tk.X, pady=3)

    def create_form(self, parent):
        """Поля пересоздаются после загрузки пресета"""
        for child in parent.winfo_children():
            child.destroy()
        self.variables.clear()

        general = ttk.LabelFrame(parent, text="General", padding=10)
        general.pack(fill=tk.X, pady=5)
        self.variables['mode'] = self.create_selector(general, "Mode", ["walker", "snowball"], self.config.mode)
        self.variables['preset'] = self.create_selector(general, "Body", ["humanoid", "simple"],
                                                        self.config.body.preset)

        walker = ttk.LabelFrame(parent, text="Walker", padding=10)
        walker.pack(fill=tk.X, pady=5)
        self.variables['walk_speed'] = self.create_slider(walker, "Walk Speed", 1, 20, self.config.walker.walk_speed)
        self.variables['target_x'] = self.create_slider(walker, "Target X", 50, 750, self.config.target.x, is_int=True)
        self.variables['target_y'] = self.create_slider(walker, "Target Y", 200, 400, self.config.target.y, is_int=True)

        snowball = ttk.LabelFrame(parent, text="Snowball", padding=10)
        snowball.pack(fill=tk.X, pady=5)
        self.variables['gravity'] = self.create_slider(snowball, "Gravity", 1, 30, self.config.snowball.gravity)
        self.variables['throw_x'] = self.create_slider(snowball, "Target X", 150, 750,
                                                       self.config.snowball.target_x, is_int=True)
        self.variables['throw_y'] = self.create_slider(snowball, "Target Y", 100, 390,
                                                       self.config.snowball.target_y, is_int=True)

    def create_selector(self, parent, label, values, default_val):
        """Выпадающий список"""
        frame = ttk.Frame(parent)
        frame.pack(fill=tk.X, pady=5)

        ttk.Label(frame, text=label, width=20).pack(side=tk.LEFT)

        var = tk.StringVar(value=default_val)
        combo = ttk.Combobox(frame, textvariable=var, values=values, state="readonly", width=12)
        combo.pack(side=tk.LEFT, padx=5)
        return var

    def create_slider(self, parent, label, min_val, max_val, default_val, is_int=False):
        """Слайдер с меткой"""
        frame = ttk.Frame(parent)
        frame.pack(fill=tk.X, pady=5)

        ttk.Label(frame, text=label, width=20).pack(side=tk.LEFT)

        VarClass = tk.IntVar if is_int else tk.DoubleVar
        var = VarClass(value=int(default_val) if is_int else float(default_val))
        slider = ttk.Scale(frame, from_=min_val, to=max_val, orient=tk.HORIZONTAL, variable=var)
        slider.pack(side=tk.LEFT, fill=tk.X, expand=True, padx=5)

        value_lbl = ttk.Label(frame, text=f"{default_val:.1f}", width=6)
        value_lbl.pack(side=tk.RIGHT)
        slider.config(command=lambda val: value_lbl.config(text=f"{float(val):.1f}"))
        return var

    def load_preset(self, name: str):
        self.config = Presets.by_name(name)
        self.create_form(self.form)

    def reset_config(self):
        self.config = SimulationConfig()
        self.create_form(self.form)
        messagebox.showinfo("Reset", "Settings reset to defaults!")

    def load_from_file(self):
        path = filedialog.askopenfilename(filetypes=[("JSON", "*.json")])
        if not path:
            return
        try:
            self.config = load_config(path)
        except ValueError as e:
            messagebox.showerror("Load failed", str(e))
            return
        self.create_form(self.form)

    def save_to_file(self):
        path = filedialog.asksaveasfilename(defaultextension=".json", filetypes=[("JSON", "*.json")])
        if not path:
            return
        self.apply_form()
        try:
            save_config(self.config, path)
        except OSError as e:
            messagebox.showerror("Save failed", str(e))

    def apply_form(self):
        """Перенести значения полей в конфиг"""
        v = self.variables
        self.config.mode = v['mode'].get()
        self.config.body.preset = v['preset'].get()
        self.config.walker.walk_speed = float(v['walk_speed'].get())
        self.config.target.x = float(v['target_x'].get())
        self.config.target.y = float(v['target_y'].get())
        self.config.snowball.gravity = float(v['gravity'].get())
        self.config.snowball.target_x = float(v['throw_x'].get())
        self.config.snowball.target_y = float(v['throw_y'].get())

    def start_simulation(self):
        self.apply_form()
        self.result = self.config
        self.root.quit()

    def get_config(self):
        """Показать окно и вернуть конфиг (None - отмена)"""
        try:
            self.root.mainloop()
        except tk.TclError as e:
            print(f"Warning: Error in Tkinter mainloop: {e}")
            return None

        # Убираем окно Tkinter, чтобы оно не блокировало Pygame
        self.root.destroy()

        return self.result
