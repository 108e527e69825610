"""
CAR.PY - The player's car and the answer cars driving at it
The player hops between 3 lanes; answer cars roll down the road
carrying one number each
"""

import pygame
from pygame.math import Vector2
from mathrace.Constants import (
    CAR_SIZE, LANES, PLAYER_Y, ANSWER_CAR_START_Y, LANE_SWITCH_TIME, PLAYER_CAR_COLOR,
    ANSWER_CAR_COLORS, SCROLL_FACTOR, WHITE, BLACK
)


def _car_rect(position):
    rect = pygame.Rect(0, 0, *CAR_SIZE)
    rect.center = (round(position.x), round(position.y))
    return rect


def draw_car_body(surface, rect, color):
    """Plain top-down car: body, windshield and four wheels"""
    wheel_w, wheel_h = 8, 16
    for dx in (-2, rect.width - wheel_w + 2):
        for dy in (10, rect.height - wheel_h - 10):
            pygame.draw.rect(surface, BLACK, (rect.x + dx, rect.y + dy, wheel_w, wheel_h), border_radius=3)
    pygame.draw.rect(surface, color, rect, border_radius=10)
    pygame.draw.rect(surface, BLACK, rect, 2, border_radius=10)
    shield = pygame.Rect(rect.x + 7, rect.y + 14, rect.width - 14, 16)
    pygame.draw.rect(surface, (170, 210, 240), shield, border_radius=4)


class PlayerCar:
    def __init__(self, lane=1):
        self.reset(lane)

    def reset(self, lane=1):
        self.lane = lane
        self.position = Vector2(LANES[lane], PLAYER_Y)
        self.slide_from = self.position.x
        self.slide_time = LANE_SWITCH_TIME

    @property
    def rect(self):
        return _car_rect(self.position)

    def steer(self, direction):
        """-1 = left, +1 = right. Returns True if the lane changed"""
        new_lane = max(0, min(len(LANES) - 1, self.lane + direction))
        if new_lane == self.lane:
            return False
        self.lane = new_lane
        self.slide_from = self.position.x
        self.slide_time = 0.0
        return True

    def update(self, dt):
        # Ease-out slide into the target lane
        self.slide_time = min(LANE_SWITCH_TIME, self.slide_time + dt)
        t = self.slide_time / LANE_SWITCH_TIME
        t = 1 - (1 - t) ** 2
        self.position.x = self.slide_from + (LANES[self.lane] - self.slide_from) * t

    def draw(self, surface):
        draw_car_body(surface, self.rect, PLAYER_CAR_COLOR)


class AnswerCar:
    def __init__(self, choice):
        self.choice = choice
        self.position = Vector2(LANES[choice.lane], ANSWER_CAR_START_Y)

    @property
    def value(self):
        return self.choice.value

    @property
    def correct(self):
        return self.choice.is_correct

    @property
    def rect(self):
        return _car_rect(self.position)

    def update(self, dt, game_speed):
        self.position.y += game_speed * SCROLL_FACTOR * dt

    def is_off_screen(self, height):
        return self.position.y > height + 100

    def draw(self, surface, font):
        rect = self.rect
        color = ANSWER_CAR_COLORS[self.choice.lane % len(ANSWER_CAR_COLORS)]
        draw_car_body(surface, rect, color)

        label = font.render(str(self.value), True, WHITE)
        box = label.get_rect(center=rect.center).inflate(16, 10)
        pygame.draw.rect(surface, color, box, border_radius=6)
        pygame.draw.rect(surface, BLACK, box, 2, border_radius=6)
        surface.blit(label, label.get_rect(center=box.center))
