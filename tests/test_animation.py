import pygame
import pytest

from obliterator.animation import AnimatedSprite, Animation, AnimationState, Sprite
from obliterator.collider import Rect


def make_animation():
    return Animation(
        8,
        [AnimationState("idle", 4, True), AnimationState("burst", 4, False)],
        pygame.Surface((80, 10)),
    )


def test_width_of_frame_splits_texture():
    animation = make_animation()
    assert animation.width_of_frame * animation.number_of_frames == 80
    assert animation.texture_size == (80, 10)


def test_blank_animation_has_zero_size():
    animation = Animation()
    assert animation.texture_size == (0, 0)
    assert animation.width_of_frame == 0


def test_load_missing_file_gives_blank_texture(tmp_path):
    animation = Animation.load(tmp_path / "missing.png", 4, [AnimationState()])
    assert animation.texture is None
    assert animation.width_of_frame == 0
    assert animation.animation_states == [AnimationState("idle", 1, True)]


def test_setting_animation_shows_first_frame():
    sprite = AnimatedSprite(fps=10)
    animation = make_animation()
    sprite.animation = animation
    assert sprite.texture is animation.texture
    assert sprite.texture_rect == Rect(0, 0, animation.width_of_frame, 10)


def test_sprite_move_and_bounds():
    sprite = Sprite(pygame.Surface((20, 30)))
    sprite.move(5, -2)
    sprite.move(1, 1)
    sprite.scale = (2.0, 2.0)
    bounds = sprite.global_bounds
    assert (bounds.left, bounds.top) == (6, -1)
    assert (bounds.width, bounds.height) == (40, 60)


def test_frames_advance_and_loop():
    sprite = AnimatedSprite(fps=10)
    animation = make_animation()
    sprite.animation = animation
    sprite.animate(0.15)
    assert sprite.current_frame == 1
    assert sprite.texture_rect.left == animation.width_of_frame
    for _ in range(3):
        sprite.animate(0.15)
    assert sprite.current_frame == 0
    assert sprite.animation_state == "idle"


def test_no_frame_change_before_interval():
    sprite = AnimatedSprite(fps=10)
    sprite.animation = make_animation()
    sprite.animate(0.01)
    assert sprite.current_frame == 0
    assert sprite.time_since_last_frame == pytest.approx(0.01)


def test_unloopable_state_returns_to_idle():
    sprite = AnimatedSprite(fps=10)
    animation = make_animation()
    sprite.animation = animation
    sprite.change_animation_state("burst")
    assert sprite.animation_state == "burst"
    sprite.animate(0.15)
    assert sprite.texture_rect.left == 5 * animation.width_of_frame
    sprite.animate(0.15)
    sprite.animate(0.15)
    assert sprite.animation_state == "burst"
    sprite.animate(0.15)
    assert sprite.animation_state == "idle"


def test_change_state_sets_delay_and_resets_frame():
    sprite = AnimatedSprite(fps=10)
    sprite.animation = make_animation()
    sprite.animate(0.15)
    sprite.change_animation_state("burst")
    assert sprite.current_frame == 0
    assert sprite.time_since_last_frame == pytest.approx(0.8 / 10)


def test_change_state_needs_a_loopable_state():
    sprite = AnimatedSprite()
    sprite.animation = Animation(1, [AnimationState("once", 1, False)])
    sprite.change_animation_state("once")
    assert sprite.animation_state == "idle"


def test_change_state_ignored_without_states():
    sprite = AnimatedSprite(current_state="walk")
    sprite.change_animation_state("idle")
    assert sprite.animation_state == "walk"