import sys
import pygame
from mathrace.Constants import WIDTH, HEIGHT, WHITE, GREY, COLORS, SPEED_NAMES, BACKGROUND
from mathrace.utils import (
    Button, calculate_ui_constants, create_shadowed_text, blit_centered, font_scale,
    draw_high_scores_table
)


class BaseMenuScreen:
    """Base class for menu screens"""

    def __init__(self, screen, inputs, title="Menu"):
        self.screen = screen
        self.inputs = inputs
        self.title = title
        self.UI = calculate_ui_constants((WIDTH, HEIGHT))
        self.font = font_scale(30)
        self.title_font = font_scale(64)
        self.buttons = []
        self.selection = 0
        self.initialize()

    def initialize(self):
        pass

    def create_button(self, text, action, x, y, width=None, bg_color=None):
        if width is None:
            text_surf = self.font.render(text, True, WHITE)
            width = max(text_surf.get_width() + self.UI['BUTTON_TEXT_PADDING'],
                        self.UI['BUTTON_MIN_WIDTH'])
        btn = Button(pygame.Rect(x, y, width, self.UI['BUTTON_HEIGHT']), text, action, self.font, bg_color)
        self.buttons.append(btn)
        return btn

    def draw_title(self):
        title = create_shadowed_text(self.title, self.title_font, COLORS["title"], offset=4)
        blit_centered(self.screen, title, (self.screen.get_width() // 2, int(self.screen.get_height() * 0.08)))

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit()
            if self.inputs.handle_event(event):
                continue
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                for i, btn in enumerate(self.buttons):
                    if btn.selected:
                        self.selection = i
                        btn.action()
                        return

    def handle_keys(self):
        """Keyboard/touch navigation - up/down moves, enter activates"""
        if not self.buttons:
            return
        if self.inputs.is_just_pressed('up'):
            self.selection = (self.selection - 1) % len(self.buttons)
        elif self.inputs.is_just_pressed('down'):
            self.selection = (self.selection + 1) % len(self.buttons)
        elif self.inputs.is_just_pressed('enter'):
            self.buttons[self.selection].action()
        elif self.inputs.is_just_pressed('escape'):
            self.on_escape()

    def on_escape(self):
        pass

    def update(self):
        mouse_pos = pygame.mouse.get_pos()
        for btn in self.buttons:
            btn.update_hover_state(mouse_pos)
        self.inputs.update()
        self.handle_keys()

    def draw(self):
        self.draw_title()
        for i, btn in enumerate(self.buttons):
            btn.draw(self.screen, highlighted=i == self.selection)

    def run(self):
        self.handle_events()
        self.update()
        self.draw()

    def _quit(self):
        pygame.quit()
        sys.exit()


class MainMenu(BaseMenuScreen):
    """Start button, difficulty settings and the high score table"""

    def __init__(self, screen, inputs, state_manager, high_scores):
        self.state_manager = state_manager
        self.high_scores = high_scores
        super().__init__(screen, inputs, "MATH RACER")

    def initialize(self):
        self.buttons.clear()
        width = int(WIDTH * 0.42)
        x = WIDTH // 2 - width // 2
        top = int(HEIGHT * 0.17)
        spacing = self.UI['BUTTON_HEIGHT'] + self.UI['BUTTON_SPACING']

        self.start_btn = self.create_button('START RACE', self.start, x, top, width, (255, 107, 53))
        self.mult_btn = self.create_button('', lambda: self.adjust(1), x, top + spacing, width)
        self.speed_btn = self.create_button('', lambda: self.adjust(1), x, top + spacing * 2, width)
        self.quit_btn = self.create_button('QUIT', self._quit, x, top + spacing * 3, width, (150, 40, 40))
        self.refresh_labels()

    def refresh_labels(self):
        self.mult_btn.text = f"Max Multiplier: {self.state_manager.max_mult}"
        self.speed_btn.text = f"Game Speed: {SPEED_NAMES[self.state_manager.game_speed]}"

    def start(self):
        self.state_manager.setState('game')

    def adjust(self, step):
        """Left/right (or clicking) changes the highlighted setting"""
        btn = self.buttons[self.selection]
        if btn is self.mult_btn:
            self.state_manager.change_max_mult(step)
        elif btn is self.speed_btn:
            self.state_manager.change_game_speed(step)
            # Show the table for the speed you are about to play
            self.state_manager.high_scores_speed = self.state_manager.game_speed
        self.refresh_labels()

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit()
            if self.inputs.handle_event(event):
                continue
            if event.type == pygame.KEYDOWN and event.key == pygame.K_9:
                self.state_manager.change_high_scores_speed(-1)
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_0:
                self.state_manager.change_high_scores_speed(1)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                for i, btn in enumerate(self.buttons):
                    if btn.selected:
                        self.selection = i
                        btn.action()
                        return

    def handle_keys(self):
        if self.inputs.is_just_pressed('left'):
            self.adjust(-1)
        elif self.inputs.is_just_pressed('right'):
            self.adjust(1)
        else:
            super().handle_keys()

    def on_escape(self):
        # The touch pause button shares the escape action - it must not close the game
        if self.inputs.uses_touch_layout():
            return
        self._quit()

    def draw(self):
        self.screen.fill(BACKGROUND)
        super().draw()
        hint = font_scale(20).render(
            "UP/DOWN select, LEFT/RIGHT change, ENTER start - 9/0 switch high scores", True, GREY)
        blit_centered(self.screen, hint, (WIDTH // 2, int(HEIGHT * 0.56)))
        draw_high_scores_table(self.screen, self.high_scores, self.state_manager.high_scores_speed,
                               int(HEIGHT * 0.62))
        if self.inputs.uses_touch_layout():
            self.inputs.touch_controls.draw(self.screen, font_scale(30))
