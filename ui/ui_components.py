"""UI компоненты для интерфейса Pygame"""

import pygame


class Button:
    """Кнопка на нижней панели"""

    def __init__(self, x: int, y: int, width: int, height: int, text: str,
                 action: str = None, font=None, color_bg=(100, 100, 100),
                 color_hover=(120, 120, 120), color_text=(255, 255, 255)):
        """
        Args:
            x, y: координаты верхнего левого угла
            text: надпись
            action: ключ события, который кнопка выставляет при нажатии
        """
        self.rect = pygame.Rect(x, y, width, height)
        self.text = text
        self.action = action
        self.font = font or pygame.font.Font(None, 24)
        self.color_bg = color_bg
        self.color_hover = color_hover
        self.color_text = color_text
        self.is_hovered = False
        self.active = False  # подсветка выбранного режима

    def draw(self, surface: pygame.Surface):
        color = self.color_hover if self.is_hovered or self.active else self.color_bg
        pygame.draw.rect(surface, color, self.rect)
        border = (255, 220, 120) if self.active else (200, 200, 200)
        pygame.draw.rect(surface, border, self.rect, 2)

        text_surface = self.font.render(self.text, True, self.color_text)
        surface.blit(text_surface, text_surface.get_rect(center=self.rect.center))

    def update_hover(self, mouse_pos: tuple):
        self.is_hovered = self.rect.collidepoint(mouse_pos)

    def is_clicked(self, event) -> bool:
        return (event.type == pygame.MOUSEBUTTONDOWN and event.button == 1
                and self.rect.collidepoint(event.pos))


class ButtonGroup:
    """Ряд кнопок"""

    def __init__(self):
        self.buttons = []

    def add_button(self, button: Button) -> Button:
        self.buttons.append(button)
        return button

    def draw(self, surface: pygame.Surface):
        for button in self.buttons:
            button.draw(surface)

    def update_hover(self, mouse_pos: tuple):
        for button in self.buttons:
            button.update_hover(mouse_pos)

    def clicked_action(self, event):
        """Ключ действия нажатой кнопки или None"""
        for button in self.buttons:
            if button.is_clicked(event):
                return button.action
        return None

    def set_active(self, action: str):
        for button in self.buttons:
            button.active = button.action == action

    def clear(self):
        self.buttons.clear()


class StatPanel:
    """Горизонтальная панель состояния: пары "метка: значение" в одну строку"""

    def __init__(self, x: int, y: int, width: int, height: int, font=None):
        self.rect = pygame.Rect(x, y, width, height)
        self.font_text = font or pygame.font.Font(None, 24)

        self.color_bg = (30, 30, 40)
        self.color_border = (60, 60, 70)
        self.color_text = (220, 220, 220)
        self.color_good = (100, 255, 100)
        self.color_bad = (255, 100, 100)

        self.items = []

    def update(self, items):
        """
        Args:
            items: список (метка, значение) или (метка, значение, цвет)
        """
        self.items = list(items)

    def draw(self, surface: pygame.Surface):
        pygame.draw.rect(surface, self.color_bg, self.rect)
        pygame.draw.rect(surface, (50, 50, 60), self.rect, 1)

        y = self.rect.centery - 8
        x = self.rect.x + 20
        spacing = 30

        for item in self.items:
            label, value = item[0], item[1]
            color = item[2] if len(item) > 2 else self.color_text
            text = self.font_text.render(f"{label}: {value}", True, color)
            surface.blit(text, (x, y))
            x += text.get_width() + spacing

            # Разделитель
            pygame.draw.line(surface, self.color_border,
                             (x - spacing // 2, self.rect.y + 10),
                             (x - spacing // 2, self.rect.bottom - 10), 1)
