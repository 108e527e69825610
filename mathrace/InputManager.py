"""
INPUTMANAGER.PY - One input state for keyboard AND touch
Screens ask "is left pressed?" / "was enter just pressed?"
without caring where the press came from
"""

import pygame

ACTIONS = ('up', 'down', 'left', 'right', 'enter', 'escape', 'space')

# Arrows or WASD, Enter/Space to confirm
KEY_BINDINGS = {
    'up': (pygame.K_UP, pygame.K_w),
    'down': (pygame.K_DOWN, pygame.K_s),
    'left': (pygame.K_LEFT, pygame.K_a),
    'right': (pygame.K_RIGHT, pygame.K_d),
    'enter': (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE),
    'escape': (pygame.K_ESCAPE,),
    'space': (pygame.K_SPACE,),
}

TOUCH_LABELS = {
    'left': '<', 'right': '>', 'up': '^', 'down': 'v', 'enter': 'OK', 'escape': 'II',
}


def default_touch_layout(width, height, size=70, margin=20):
    """Steering buttons bottom-left, menu buttons bottom-right, pause top-right"""
    bottom = height - size - margin
    return {
        'left': pygame.Rect(margin, bottom, size, size),
        'right': pygame.Rect(margin * 2 + size, bottom, size, size),
        'up': pygame.Rect(width - (size + margin) * 2, bottom - size - margin, size, size),
        'down': pygame.Rect(width - (size + margin) * 2, bottom, size, size),
        'enter': pygame.Rect(width - size - margin, bottom, size, size),
        'escape': pygame.Rect(width - size - margin, margin, size, size),
    }


class TouchControls:
    """On-screen buttons - held while any finger (or the mouse) is on them"""

    def __init__(self, screen_size, buttons=None):
        self.screen_size = screen_size
        self.buttons = buttons or default_touch_layout(*screen_size)
        self.pointers = {}      # pointer id -> action it went down on

    def _action_at(self, pos):
        for action, rect in self.buttons.items():
            if rect.collidepoint(pos):
                return action
        return None

    def handle_event(self, event):
        """Returns True when the event landed on a button"""
        if event.type == pygame.FINGERDOWN:
            w, h = self.screen_size
            action = self._action_at((int(event.x * w), int(event.y * h)))
            if action:
                self.pointers[('finger', event.finger_id)] = action
            return action is not None
        if event.type == pygame.FINGERUP:
            return self.pointers.pop(('finger', event.finger_id), None) is not None
        # SDL mirrors touches as mouse events; those are already handled above
        if getattr(event, 'touch', False):
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            action = self._action_at(event.pos)
            if action:
                self.pointers['mouse'] = action
            return action is not None
        if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            return self.pointers.pop('mouse', None) is not None
        return False

    def get_input_state(self):
        held = set(self.pointers.values())
        return {action: action in held for action in ACTIONS}

    def release_all(self):
        self.pointers.clear()

    def draw(self, surface, font):
        held = set(self.pointers.values())
        for action, rect in self.buttons.items():
            overlay = pygame.Surface(rect.size, pygame.SRCALPHA)
            overlay.fill((255, 107, 53, 200) if action in held else (44, 62, 80, 150))
            surface.blit(overlay, rect)
            pygame.draw.rect(surface, (255, 255, 255), rect, 2, border_radius=10)
            label = font.render(TOUCH_LABELS.get(action, action), True, (255, 255, 255))
            surface.blit(label, label.get_rect(center=rect.center))


class InputManager:
    def __init__(self, touch_controls=None):
        self.touch_controls = touch_controls
        self.state = {action: False for action in ACTIONS}
        self.previous = dict(self.state)
        self.just_pressed = dict(self.state)

    def uses_touch_layout(self):
        return self.touch_controls is not None

    def handle_event(self, event):
        if not self.touch_controls:
            return False
        if event.type == pygame.WINDOWFOCUSLOST:
            self.touch_controls.release_all()
            return False
        return self.touch_controls.handle_event(event)

    def update(self, pressed_keys=None):
        """Call once per frame, after the events were handled"""
        if pressed_keys is None:
            pressed_keys = pygame.key.get_pressed()

        self.previous = dict(self.state)
        for action, keys in KEY_BINDINGS.items():
            self.state[action] = any(pressed_keys[k] for k in keys)

        # Keyboard OR touch
        if self.touch_controls:
            for action, held in self.touch_controls.get_input_state().items():
                self.state[action] = self.state[action] or held

        self.just_pressed = {
            action: self.state[action] and not self.previous[action] for action in ACTIONS
        }

    def is_pressed(self, action):
        return self.state.get(action, False)

    def is_just_pressed(self, action):
        return self.just_pressed.get(action, False)
