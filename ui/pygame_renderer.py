"""Pygame визуализация тела, цели и снежка"""

import os

import pygame

from core.physics import Vector2
from ui.ui_components import Button, ButtonGroup, StatPanel


class PygameRenderer:
    """Рендер сцены: земля, сегменты тела, цель, снежок и его траектория"""

    def __init__(self, width: int = 800, height: int = 600):
        os.environ.setdefault('SDL_VIDEO_CENTERED', '1')
        pygame.init()

        self.TOP_BAR_HEIGHT = 40
        self.BOTTOM_BAR_HEIGHT = 60

        self.window_width = width
        self.window_height = height + self.TOP_BAR_HEIGHT + self.BOTTOM_BAR_HEIGHT
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("BodyLines - Articulated Body Simulation")
        self.clock = pygame.time.Clock()
        self.font_small = pygame.font.Font(None, 20)
        self.font_large = pygame.font.Font(None, 26)

        # Цвета
        self.COLOR_BG = (25, 25, 35)
        self.COLOR_GROUND = (90, 70, 50)
        self.COLOR_SEGMENT = (220, 220, 230)
        self.COLOR_JOINT = (150, 180, 200)
        self.COLOR_CONTACT = (255, 200, 60)
        self.COLOR_TARGET = (200, 100, 100)
        self.COLOR_TARGET_CAUGHT = (100, 200, 100)
        self.COLOR_SNOWBALL = (240, 240, 255)
        self.COLOR_TRAJECTORY = (90, 110, 160)
        self.COLOR_BASE = (255, 120, 60)

        self.stat_panel = StatPanel(0, 0, self.window_width, self.TOP_BAR_HEIGHT, font=self.font_large)
        self.buttons = ButtonGroup()
        self.setup_buttons()

        self.show_trajectory = True

    def setup_buttons(self):
        """Кнопки горизонтально внизу"""
        self.buttons.clear()

        labels = [
            ("STEP", "step", (80, 120, 80)),
            ("AUTO", "auto", (80, 120, 80)),
            ("WALKER", "walker", (100, 100, 150)),
            ("SNOWBALL", "snowball", (100, 100, 150)),
            ("RESET", "reset", (150, 100, 100)),
            ("QUIT", "quit", (180, 80, 80)),
        ]
        btn_width = 110
        btn_height = 36
        spacing = 10

        total_width = btn_width * len(labels) + spacing * (len(labels) - 1)
        x = (self.window_width - total_width) // 2
        y = self.window_height - self.BOTTOM_BAR_HEIGHT + 12

        for text, action, color in labels:
            hover = tuple(min(255, c + 20) for c in color)
            self.buttons.add_button(Button(x, y, btn_width, btn_height, text, action=action,
                                           font=self.font_small, color_bg=color, color_hover=hover))
            x += btn_width + spacing

    def world_to_screen(self, pos: Vector2) -> tuple:
        """Координаты мира совпадают с экраном, сдвиг только на верхнюю панель"""
        return (int(pos.x), int(pos.y) + self.TOP_BAR_HEIGHT)

    # ------------------------------------------------------------------
    #  Отрисовка
    # ------------------------------------------------------------------

    def render(self, body, target=None, snowball=None, caught: bool = False,
               trajectory=None, status=None):
        """
        Нарисовать кадр.

        Args:
            body: тело
            target: цель (Circle) или None
            snowball: SnowballStrategy или None
            caught: цель поймана (меняет цвет)
            trajectory: массив (n, 2) предсказанных позиций снежка
            status: пары (метка, значение) для верхней панели
        """
        self.screen.fill(self.COLOR_BG)

        self.draw_ground(body.get_ground_level())
        if target is not None:
            self.draw_target(target, caught)
        if trajectory is not None and self.show_trajectory:
            self.draw_trajectory(trajectory)
        self.draw_body(body)
        if snowball is not None:
            self.draw_snowball(snowball)

        self.stat_panel.update(status or [])
        self.stat_panel.draw(self.screen)

        bar = pygame.Rect(0, self.window_height - self.BOTTOM_BAR_HEIGHT,
                          self.window_width, self.BOTTOM_BAR_HEIGHT)
        pygame.draw.rect(self.screen, (30, 30, 40), bar)
        self.buttons.draw(self.screen)

        pygame.display.flip()

    def draw_ground(self, ground_level: float):
        left = self.world_to_screen(Vector2(0, ground_level))
        height = self.window_height - self.BOTTOM_BAR_HEIGHT - left[1]
        if height > 0:
            pygame.draw.rect(self.screen, self.COLOR_GROUND,
                             pygame.Rect(0, left[1], self.window_width, height))
        pygame.draw.line(self.screen, (140, 110, 80), left, (self.window_width, left[1]), 2)

    def draw_body(self, body):
        ground = body.get_ground_level()
        tolerance = body.ground_tolerance

        for start, end in body.get_segment_lines():
            pygame.draw.line(self.screen, self.COLOR_SEGMENT,
                             self.world_to_screen(start), self.world_to_screen(end), 3)

        for start, end in body.get_segment_lines():
            for point in (start, end):
                on_ground = abs(point.y - ground) <= tolerance
                color = self.COLOR_CONTACT if on_ground else self.COLOR_JOINT
                pygame.draw.circle(self.screen, color, self.world_to_screen(point), 4)

        pygame.draw.circle(self.screen, self.COLOR_BASE,
                           self.world_to_screen(body.get_base_position()), 6)

    def draw_target(self, target, caught: bool):
        color = self.COLOR_TARGET_CAUGHT if caught else self.COLOR_TARGET
        pygame.draw.circle(self.screen, color, self.world_to_screen(target.get_center()),
                           max(1, int(target.get_radius())), 2)

    def draw_snowball(self, snowball):
        pygame.draw.circle(self.screen, self.COLOR_SNOWBALL,
                           self.world_to_screen(snowball.get_position()),
                           max(1, int(snowball.get_radius())))

    def draw_trajectory(self, points):
        for x, y in points:
            pygame.draw.circle(self.screen, self.COLOR_TRAJECTORY,
                               self.world_to_screen(Vector2(x, y)), 2)

    # ------------------------------------------------------------------
    #  События
    # ------------------------------------------------------------------

    def handle_events(self) -> dict:
        """Обработать события Pygame"""
        events = {
            'quit': False,
            'step': False,
            'auto': False,
            'walker': False,
            'snowball': False,
            'reset': False
        }

        self.buttons.update_hover(pygame.mouse.get_pos())

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                events['quit'] = True

            elif event.type == pygame.MOUSEBUTTONDOWN:
                action = self.buttons.clicked_action(event)
                if action is not None:
                    events[action] = True

            # Горячие клавиши - те же, что и в текстовом режиме
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_q or event.key == pygame.K_ESCAPE:
                    events['quit'] = True
                elif event.key == pygame.K_s or event.key == pygame.K_SPACE:
                    events['step'] = True
                elif event.key == pygame.K_a:
                    events['auto'] = True
                elif event.key == pygame.K_w:
                    events['walker'] = True
                elif event.key == pygame.K_b:
                    events['snowball'] = True
                elif event.key == pygame.K_r:
                    events['reset'] = True
                elif event.key == pygame.K_t:
                    self.show_trajectory = not self.show_trajectory

        return events

    def set_active_mode(self, mode: str):
        self.buttons.set_active(mode)

    def set_fps(self, fps: int):
        self.clock.tick(fps)

    def quit(self):
        pygame.quit()
