"""
NAMEINPUT.PY - Typing your name after a high score
Only letters, digits and spaces, at most 15 characters
"""

import pygame
from mathrace.Constants import MAX_NAME_LENGTH, DEFAULT_PLAYER_NAME
from mathrace.highscores import clean_player_name


class NameInput:
    def __init__(self, max_length=MAX_NAME_LENGTH):
        self.max_length = max_length
        self.text = ''
        self.submitted = None       # final name once ENTER/ESC was pressed

    @property
    def done(self):
        return self.submitted is not None

    def handle_event(self, event):
        if self.done:
            return
        if event.type == pygame.TEXTINPUT:
            for ch in event.text:
                if (ch.isascii() and ch.isalnum() or ch == ' ') and len(self.text) < self.max_length:
                    self.text += ch
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_BACKSPACE:
                self.text = self.text[:-1]
            elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self.submitted = clean_player_name(self.text)
            elif event.key == pygame.K_ESCAPE:
                self.submitted = DEFAULT_PLAYER_NAME
