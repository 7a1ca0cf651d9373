"""Tests for input mapping, on-screen text and the particle burst."""

import random

import pygame
import pytest

from snake_engine.app import hud_text, overlay_lines
from snake_engine.config import CELL, PARTICLE_LIFE
from snake_engine.controls import dispatch_key, swipe_direction
from snake_engine.effects import spawn_food_particles, update_particles
from snake_engine.engine import Phase
from snake_engine.rules import Direction


class TestSwipe:

    def test_short_drags_ignored(self):
        assert swipe_direction((100, 100), (129, 120)) is None
        assert swipe_direction((100, 100), (100, 100)) is None

    @pytest.mark.parametrize(
        "end, expected",
        [
            ((140, 105), Direction.RIGHT),
            ((60, 90), Direction.LEFT),
            ((110, 150), Direction.DOWN),
            ((95, 40), Direction.UP),
        ],
    )
    def test_dominant_axis(self, end, expected):
        assert swipe_direction((100, 100), end) is expected

    def test_tie_goes_vertical(self):
        assert swipe_direction((0, 0), (40, 40)) is Direction.DOWN

    def test_threshold_is_inclusive(self):
        assert swipe_direction((0, 0), (30, 0)) is Direction.RIGHT


class TestDispatchKey:

    def test_enter_starts_from_menu(self, engine):
        assert dispatch_key(engine, pygame.K_RETURN) is True
        assert engine.phase is Phase.PLAYING

    def test_arrows_and_wasd_turn(self, engine):
        engine.start()
        dispatch_key(engine, pygame.K_w)
        assert engine.get_state().next_direction is Direction.UP
        dispatch_key(engine, pygame.K_DOWN)
        assert engine.get_state().next_direction is Direction.DOWN

    def test_space_toggles_pause(self, engine):
        engine.start()
        dispatch_key(engine, pygame.K_SPACE)
        assert engine.phase is Phase.PAUSED
        dispatch_key(engine, pygame.K_SPACE)
        assert engine.phase is Phase.PLAYING

    def test_direction_keys_ignored_while_paused(self, engine):
        engine.start()
        engine.pause()
        dispatch_key(engine, pygame.K_UP)
        assert engine.get_state().next_direction is Direction.RIGHT

    def test_restart_after_game_over(self, engine):
        engine.start()
        engine._end_round("wall")
        dispatch_key(engine, pygame.K_r)
        assert engine.phase is Phase.PLAYING
        assert engine.get_state().death_reason is None

    @pytest.mark.parametrize("key", [pygame.K_m, pygame.K_BACKSPACE])
    def test_menu_key_resets_from_pause(self, engine, scheduler, key):
        engine.start()
        engine.pause()
        assert dispatch_key(engine, key) is True
        assert engine.phase is Phase.MENU
        assert scheduler.pending == 0

    def test_menu_key_resets_from_game_over(self, engine):
        engine.start()
        engine._end_round("wall")
        dispatch_key(engine, pygame.K_m)
        snap = engine.get_state()
        assert snap.phase is Phase.MENU
        assert snap.death_reason is None

    def test_menu_key_ignored_while_playing(self, engine):
        engine.start()
        dispatch_key(engine, pygame.K_m)
        assert engine.phase is Phase.PLAYING

    def test_quit_keys(self, engine):
        assert dispatch_key(engine, pygame.K_q) is False
        assert dispatch_key(engine, pygame.K_ESCAPE) is False


class TestFoodParticles:

    def test_burst_starts_at_cell_centre(self):
        particles = []
        spawn_food_particles(particles, (2, 3), rng=random.Random(0))

        assert len(particles) == 8
        for particle in particles:
            assert particle.x == 2 * CELL + CELL / 2
            assert particle.y == 3 * CELL + CELL / 2
            assert particle.life == PARTICLE_LIFE

    def test_particles_fall_and_expire(self):
        particles = []
        spawn_food_particles(particles, (5, 5), rng=random.Random(0))
        vy_before = [p.vy for p in particles]

        alive = update_particles(particles, 0.5)
        assert len(alive) == 8
        assert all(p.vy > before for p, before in zip(alive, vy_before))

        assert update_particles(alive, PARTICLE_LIFE) == []

    def test_zero_dt_is_noop(self):
        particles = []
        spawn_food_particles(particles, (0, 0))
        assert update_particles(particles, 0) is particles


class TestScreenText:

    def test_hud_shows_length(self, engine):
        engine.start()
        text = hud_text(engine.get_state())
        assert "SCORE 0000" in text
        assert "LV 1" in text
        assert "LEN 3" in text

    def test_game_over_lists_food_and_final_length(self, engine):
        engine.start()
        engine._state.food_count = 2
        engine._end_round("self")

        lines = overlay_lines(engine.get_state())

        assert lines[0] == "Game Over"
        assert "Food eaten: 2" in lines
        assert "Final length: 3" in lines
        assert any("M menu" in line for line in lines)

    def test_pause_overlay_offers_main_menu(self, engine):
        engine.start()
        engine.pause()
        assert "M for main menu" in overlay_lines(engine.get_state())

    def test_no_overlay_while_playing(self, engine):
        engine.start()
        assert overlay_lines(engine.get_state()) == []
