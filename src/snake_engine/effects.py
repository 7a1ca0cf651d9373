"""Food-burst particles for the pygame front-end."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Iterable

import pygame

from .config import CELL, PARTICLE_COUNT, PARTICLE_GRAVITY, PARTICLE_LIFE


@dataclass(slots=True)
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    life: float
    color: pygame.Color


def spawn_food_particles(
    particles: list[Particle],
    cell: tuple[int, int],
    *,
    count: int = PARTICLE_COUNT,
    rng: random.Random | None = None,
) -> None:
    """Emit an evenly spaced radial burst from the centre of a grid cell."""

    rng = rng or random
    cx = cell[0] * CELL + CELL / 2
    cy = cell[1] * CELL + CELL / 2

    for i in range(count):
        angle = (i / count) * math.tau
        speed = rng.uniform(120.0, 240.0)
        color = pygame.Color(0)
        color.hsla = (rng.uniform(15.0, 75.0), 100, 60, 100)  # red to yellow
        particles.append(
            Particle(
                x=cx,
                y=cy,
                vx=math.cos(angle) * speed,
                vy=math.sin(angle) * speed,
                life=PARTICLE_LIFE,
                color=color,
            )
        )


def update_particles(particles: list[Particle], dt: float) -> list[Particle]:
    """Advance particle positions under gravity and trim dead ones."""

    if dt <= 0:
        return particles

    for particle in particles:
        particle.x += particle.vx * dt
        particle.y += particle.vy * dt
        particle.vy += PARTICLE_GRAVITY * dt
        particle.life = max(0.0, particle.life - dt)
    return [p for p in particles if p.life > 0]


def draw_particles(surface: pygame.Surface, particles: Iterable[Particle]) -> None:
    """Draw fading square particles onto the target surface."""

    for particle in particles:
        alpha = int(255 * (particle.life / PARTICLE_LIFE))
        if alpha <= 0:
            continue
        side = 4
        surf = pygame.Surface((side, side), pygame.SRCALPHA)
        color = pygame.Color(particle.color.r, particle.color.g, particle.color.b, alpha)
        pygame.draw.rect(surf, color, surf.get_rect(), border_radius=2)
        surface.blit(surf, (int(particle.x) - side // 2, int(particle.y) - side // 2))
