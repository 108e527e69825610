import math
from functools import lru_cache
import pygame
from mathrace.Constants import *
from mathrace.highscores import format_score_row, tier_name


@lru_cache(maxsize=None)
def font_scale(size, Font=FONT):
    return pygame.font.Font(Font, size)


@lru_cache(maxsize=None)
def mono_font(size):
    return pygame.font.SysFont('couriernew,monospace', size, bold=True)


def create_shadowed_text(text, font, color, shadow_color=BLACK, offset=3):
    shadow = font.render(text, True, shadow_color)
    main_text = font.render(text, True, color)
    combined = pygame.Surface((shadow.get_width() + offset, shadow.get_height() + offset), pygame.SRCALPHA)
    combined.blit(shadow, (offset, offset))
    combined.blit(main_text, (0, 0))
    return combined


def smooth_sine_wave(time, period=4.0, min_val=0.0, max_val=1.0):
    normalized = (math.cos(time * (2 * math.pi / period)) + 1) / 2
    return min_val + normalized * (max_val - min_val)


def calculate_ui_constants(display_size):
    ref_width, ref_height = 800, 600
    width_scale = display_size[0] / ref_width
    height_scale = display_size[1] / ref_height
    general_scale = min(width_scale, height_scale)

    return {
        'BUTTON_HEIGHT': int(44 * height_scale),
        'BUTTON_MIN_WIDTH': int(200 * width_scale),
        'BUTTON_TEXT_PADDING': int(40 * general_scale),
        'BUTTON_SPACING': int(12 * general_scale),
        'BUTTON_COLOR': (44, 62, 80),
        'BUTTON_HOVER_COLOR': (64, 82, 100),
    }


def blit_centered(surface, text_surf, center):
    surface.blit(text_surf, text_surf.get_rect(center=center))


def draw_dim(surface, alpha=200, tint=None):
    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, alpha))
    surface.blit(overlay, (0, 0))
    if tint:
        overlay.fill(tint)
        surface.blit(overlay, (0, 0))


# ============================================================================
# ROAD + HUD
# ============================================================================

def draw_road(surface, scroll):
    """Grass, road, barriers and dashed lane lines - scroll moves them down"""
    surface.fill(GRASS)
    pygame.draw.rect(surface, ROAD, (ROAD_X, 0, ROAD_WIDTH, HEIGHT))

    stripe = 30
    offset = int(scroll) % (stripe * 2)
    for x in (ROAD_X - BARRIER_WIDTH, ROAD_X + ROAD_WIDTH):
        for y in range(-stripe * 2 + offset, HEIGHT, stripe * 2):
            pygame.draw.rect(surface, BARRIER_RED, (x, y, BARRIER_WIDTH, stripe))
            pygame.draw.rect(surface, WHITE, (x, y + stripe, BARRIER_WIDTH, stripe))

    dash = 40
    dash_offset = int(scroll * 0.8) % (dash * 2)
    for i in range(1, LANE_COUNT):
        x = int(ROAD_X + LANE_WIDTH * i) - 2
        for y in range(-dash * 2 + dash_offset, HEIGHT, dash * 2):
            pygame.draw.rect(surface, WHITE, (x, y, 4, dash))


def draw_ui(surface, environment, touch=False):
    """Score, lives, speed, question and a hint on how to steer"""
    panel = pygame.Surface((WIDTH - 20, 110), pygame.SRCALPHA)
    panel.fill(COLORS["panel"])
    surface.blit(panel, (10, 10))
    pygame.draw.rect(surface, COLORS["border"], (10, 10, WIDTH - 20, 110), 2, border_radius=10)

    status = font_scale(26)
    surface.blit(status.render(f"Score: {environment.score}", True, GOLD), (30, 25))
    surface.blit(status.render(f"Lives: {environment.lives}", True, RED), (30, 80))

    speed = status.render(f"Speed: {environment.game_speed}", True, BLUE)
    surface.blit(speed, speed.get_rect(topright=(WIDTH - 30, 25)))
    level = font_scale(22).render(f"Max: {environment.max_mult}", True, PURPLE)
    surface.blit(level, level.get_rect(topright=(WIDTH - 30, 55)))
    hint = "Use touch controls to change lanes" if touch else "Use LEFT / RIGHT to change lanes"
    hint_surf = font_scale(18).render(hint, True, GREY)
    surface.blit(hint_surf, hint_surf.get_rect(topright=(WIDTH - 30, 90)))

    if environment.question is not None:
        q = create_shadowed_text(str(environment.question), font_scale(46), WHITE, ORANGE)
        blit_centered(surface, q, (WIDTH // 2, 55))


def draw_feedback(surface, environment):
    if not environment.feedback:
        return
    kind, left = environment.feedback
    text, color = ("CORRECT!", GREEN) if kind == 'correct' else ("WRONG!", RED)
    label = create_shadowed_text(text, font_scale(72), color, BLACK, 4)
    label.set_alpha(int(255 * min(1.0, left / FEEDBACK_TIME * 1.5)))
    blit_centered(surface, label, (WIDTH // 2, HEIGHT // 2 - 40))


# ============================================================================
# OVERLAYS
# ============================================================================

def draw_options(surface, options, selection, top, touch=False):
    font = font_scale(32)
    for i, option in enumerate(options):
        selected = i == selection
        color = GOLD if selected else WHITE
        text = f"> {option} <" if selected and not touch else option
        blit_centered(surface, font.render(text, True, color), (WIDTH // 2, top + i * 44))
    hint = "Use the arrow buttons and OK" if touch else "Use UP / DOWN to select, ENTER to confirm"
    blit_centered(surface, font_scale(20).render(hint, True, GREY), (WIDTH // 2, top + len(options) * 44 + 10))


def draw_pause_menu(surface, environment, options, touch=False):
    draw_dim(surface, 200)
    title = create_shadowed_text("GAME PAUSED", font_scale(64), ORANGE)
    blit_centered(surface, title, (WIDTH // 2, HEIGHT // 2 - 80))
    draw_options(surface, options, environment.menu_selection, HEIGHT // 2 - 10, touch)


def draw_game_over(surface, environment, options, touch=False):
    draw_dim(surface, 200, tint=(255, 0, 0, 30))
    title = create_shadowed_text("GAME OVER", font_scale(64), RED)
    blit_centered(surface, title, (WIDTH // 2, 60))
    score = font_scale(34).render(f"Final Score: {environment.score}", True, WHITE)
    blit_centered(surface, score, (WIDTH // 2, 115))

    y = 150
    if environment.is_new_high_score:
        text = "NEW HIGH SCORE!" if environment.score_rank == 1 else f"NEW HIGH SCORE! (Rank #{environment.score_rank})"
        pulse = smooth_sine_wave(pygame.time.get_ticks() / 1000, period=1.2, min_val=0.4)
        label = font_scale(32).render(text, True, GOLD)
        label.set_alpha(int(255 * pulse))
        blit_centered(surface, label, (WIDTH // 2, y))
        y += 40

    if environment.game_over_state == "name_input":
        prompt = font_scale(28).render("Enter your name:", True, WHITE)
        blit_centered(surface, prompt, (WIDTH // 2, y + 20))
        box = pygame.Rect(0, 0, 320, 44)
        box.center = (WIDTH // 2, y + 65)
        pygame.draw.rect(surface, BACKGROUND, box, border_radius=6)
        pygame.draw.rect(surface, ORANGE, box, 2, border_radius=6)
        cursor = "_" if pygame.time.get_ticks() // 500 % 2 == 0 else " "
        name = font_scale(30).render(environment.name_input.text + cursor, True, WHITE)
        blit_centered(surface, name, box.center)
        hint = font_scale(20).render("Type your name and press ENTER", True, GREY)
        blit_centered(surface, hint, (WIDTH // 2, y + 110))
        return

    if environment.save_failed:
        warn = font_scale(22).render("Could not save score", True, RED)
        blit_centered(surface, warn, (WIDTH // 2, y))
        y += 25

    draw_options(surface, options, environment.menu_selection, y + 20, touch)
    draw_high_scores_table(surface, environment.high_scores, environment.speed_tier, y + 140)


def draw_high_scores_table(surface, high_scores, tier, top, title=None):
    title = title or f"High Scores - {tier_name(tier)}"
    blit_centered(surface, create_shadowed_text(title, font_scale(30), GOLD), (WIDTH // 2, top))

    mono = mono_font(16)
    header = mono.render("Rank Name              Score    Date", True, WHITE)
    blit_centered(surface, header, (WIDTH // 2, top + 32))
    pygame.draw.line(surface, GREY, (WIDTH // 2 - 200, top + 45), (WIDTH // 2 + 200, top + 45), 2)

    scores = high_scores.get_scores(tier)
    if not scores:
        empty = font_scale(24).render("No scores yet!", True, DARK_GREY)
        blit_centered(surface, empty, (WIDTH // 2, top + 70))
        return

    rank_colors = {1: COLORS["rank1"], 2: COLORS["rank2"], 3: COLORS["rank3"]}
    for rank, entry in enumerate(scores, 1):
        row = mono.render(format_score_row(rank, entry), True, rank_colors.get(rank, WHITE))
        blit_centered(surface, row, (WIDTH // 2, top + 45 + rank * 22))


def draw_fps(surface, clock):
    fps = clock.get_fps()
    color = GREEN if fps >= 55 else GOLD if fps >= 30 else RED
    label = font_scale(22).render(f"FPS: {fps:.0f}", True, color)
    surface.blit(label, label.get_rect(topright=(WIDTH - 10, HEIGHT - 30)))


# ============================================================================
# MENU CLASSES
# ============================================================================

class Button:
    def __init__(self, rect, text, action, font, bg_color=None):
        self.rect = rect
        self.text = text
        self.action = action
        self.font = font
        self.selected = False
        self.bg_color = bg_color
        self.border_radius = max(6, int(rect.height * 0.1))

    def update_hover_state(self, mouse_pos):
        self.selected = self.rect.collidepoint(mouse_pos)

    def draw(self, surface, highlighted=False):
        color = self.bg_color or (44, 62, 80)
        if self.selected or highlighted:
            color = tuple(min(c + 30, 255) for c in color)

        pygame.draw.rect(surface, color, self.rect, border_radius=self.border_radius)
        border = GOLD if highlighted else (200, 200, 200)
        pygame.draw.rect(surface, border, self.rect, 3 if highlighted else 2, border_radius=self.border_radius)

        text_surf = self.font.render(self.text, True, GOLD if highlighted else WHITE)
        surface.blit(text_surf, text_surf.get_rect(center=self.rect.center))
