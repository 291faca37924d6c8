"""Tile- and pixel-based collision world for platformer games."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from quadkit.geometry import Rect, Vec2

__all__ = ["Tile", "Actor", "Solid", "World"]


class Tile(Enum):
    """What occupies a cell of a static layer, or what a collision query hit."""

    EMPTY = "empty"
    SOLID = "solid"
    JUMP_THROUGH = "jump_through"
    COLLIDER = "collider"

    def combine(self, other: Tile) -> Tile:
        """Merge two collision results into the one that blocks most."""
        passable = {Tile.EMPTY, Tile.JUMP_THROUGH}
        if self in passable and other in passable:
            if Tile.JUMP_THROUGH in (self, other):
                return Tile.JUMP_THROUGH
            return Tile.EMPTY
        return Tile.SOLID


@dataclass(frozen=True)
class Actor:
    """Handle to a moving body in a World."""

    index: int


@dataclass(frozen=True)
class Solid:
    """Handle to a moving platform in a World."""

    index: int


@dataclass
class _Collider:
    pos: Vec2
    width: int
    height: int
    collidable: bool = True
    squished: bool = False
    x_remainder: float = 0.0
    y_remainder: float = 0.0
    squishers: set = field(default_factory=set)
    descent: bool = False
    seen_wood: bool = False

    @property
    def rect(self) -> Rect:
        return Rect(self.pos.x, self.pos.y, float(self.width), float(self.height))


@dataclass
class _StaticTiledLayer:
    static_colliders: list
    tile_width: float
    tile_height: float
    width: int
    tag: int


def _round(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class World:
    """Static tile layers plus moving actors and solids."""

    def __init__(self) -> None:
        self._layers: list[_StaticTiledLayer] = []
        self._solids: list[_Collider] = []
        self._actors: list[_Collider] = []

    def add_static_tiled_layer(self, static_colliders, tile_width, tile_height, width, tag) -> None:
        """Add a grid of tiles laid out row by row, `width` tiles per row."""
        self._layers.append(
            _StaticTiledLayer(list(static_colliders), float(tile_width), float(tile_height), int(width), tag)
        )

    def add_actor(self, pos: Vec2, width: int, height: int) -> Actor:
        actor = Actor(len(self._actors))
        inside_wood = self.collide_solids(pos, width, height) is Tile.JUMP_THROUGH
        self._actors.append(
            _Collider(pos=pos, width=width, height=height, descent=inside_wood, seen_wood=inside_wood)
        )
        return actor

    def add_solid(self, pos: Vec2, width: int, height: int) -> Solid:
        solid = Solid(len(self._solids))
        self._solids.append(_Collider(pos=pos, width=width, height=height))
        return solid

    def set_actor_position(self, actor: Actor, pos: Vec2) -> None:
        collider = self._actors[actor.index]
        collider.x_remainder = 0.0
        collider.y_remainder = 0.0
        collider.pos = pos

    def descent(self, actor: Actor) -> None:
        """Let the actor drop through jump-through tiles."""
        self._actors[actor.index].descent = True

    def move_v(self, actor: Actor, dy: float) -> bool:
        """Move vertically pixel by pixel; False if stopped by an obstacle."""
        c = self._actors[actor.index]
        c.y_remainder += dy
        move = _round(c.y_remainder)
        if move != 0:
            c.y_remainder -= move
            sign = 1 if move > 0 else -1
            while move != 0:
                tile = self.collide_solids(c.pos + Vec2(0.0, float(sign)), c.width, c.height)
                if tile is Tile.JUMP_THROUGH and c.descent:
                    c.seen_wood = True
                if tile is Tile.JUMP_THROUGH and sign < 0:
                    c.seen_wood = True
                    c.descent = True
                if tile is Tile.EMPTY or (tile is Tile.JUMP_THROUGH and c.descent):
                    c.pos = Vec2(c.pos.x, c.pos.y + sign)
                    move -= sign
                else:
                    return False

        if self.collide_solids(c.pos, c.width, c.height) is not Tile.JUMP_THROUGH:
            c.seen_wood = False
            c.descent = False
        return True

    def move_h(self, actor: Actor, dx: float) -> bool:
        """Move horizontally pixel by pixel; False if stopped by an obstacle."""
        c = self._actors[actor.index]
        c.x_remainder += dx
        move = _round(c.x_remainder)
        if move != 0:
            c.x_remainder -= move
            sign = 1 if move > 0 else -1
            while move != 0:
                tile = self.collide_solids(c.pos + Vec2(float(sign), 0.0), c.width, c.height)
                if tile is Tile.JUMP_THROUGH:
                    c.descent = True
                    c.seen_wood = True
                if tile in (Tile.EMPTY, Tile.JUMP_THROUGH):
                    c.pos = Vec2(c.pos.x + sign, c.pos.y)
                    move -= sign
                else:
                    return False
        return True

    def solid_move(self, solid: Solid, dx: float, dy: float) -> None:
        """Move a solid, carrying riding actors and pushing (or squishing) others."""
        collider = self._solids[solid.index]
        collider.x_remainder += dx
        collider.y_remainder += dy
        move_x = _round(collider.x_remainder)
        move_y = _round(collider.y_remainder)

        riding_rect = Rect(collider.pos.x, collider.pos.y - 1.0, float(collider.width), 1.0)
        pushing_rect = Rect(
            collider.pos.x + move_x, collider.pos.y, float(collider.width), float(collider.height)
        )

        riding_actors = []
        pushing_actors = []
        for index, actor_collider in enumerate(self._actors):
            rider_rect = Rect(
                actor_collider.pos.x,
                actor_collider.pos.y + actor_collider.height - 1.0,
                float(actor_collider.width),
                1.0,
            )
            pushed = pushing_rect.overlaps(actor_collider.rect)
            if riding_rect.overlaps(rider_rect):
                riding_actors.append(Actor(index))
            elif pushed and not actor_collider.squished:
                pushing_actors.append(Actor(index))

            if not pushed:
                actor_collider.squishers.discard(solid)
                if not actor_collider.squishers:
                    actor_collider.squished = False

        collider.collidable = False
        for actor in riding_actors:
            self.move_h(actor, float(move_x))
        for actor in pushing_actors:
            if not self.move_h(actor, float(move_x)):
                squished = self._actors[actor.index]
                squished.squished = True
                squished.squishers.add(solid)
        collider.collidable = True

        if move_x != 0:
            collider.x_remainder -= move_x
            collider.pos = Vec2(collider.pos.x + move_x, collider.pos.y)
        if move_y != 0:
            collider.y_remainder -= move_y
            collider.pos = Vec2(collider.pos.x, collider.pos.y + move_y)

    def solid_at(self, pos: Vec2) -> bool:
        return self.tag_at(pos, 1)

    def tag_at(self, pos: Vec2, tag: int) -> bool:
        """True if the first non-empty layer cell at pos has this tag, or a solid covers pos."""
        for layer in self._layers:
            y = int(pos.y / layer.tile_width)
            x = int(pos.x / layer.tile_height)
            ix = y * layer.width + x
            if 0 <= ix < len(layer.static_colliders) and layer.static_colliders[ix] is not Tile.EMPTY:
                return layer.tag == tag

        return any(s.collidable and s.rect.contains(pos) for s in self._solids)

    def collide_solids(self, pos: Vec2, width: int, height: int) -> Tile:
        """What a box of the given size at pos would hit, tiles first, then solids."""
        tile = self.collide_tag(1, pos, width, height)
        if tile is not Tile.EMPTY:
            return tile

        box = Rect(pos.x, pos.y, float(width), float(height))
        if any(s.collidable and s.rect.overlaps(box) for s in self._solids):
            return Tile.COLLIDER
        return Tile.EMPTY

    def collide_tag(self, tag: int, pos: Vec2, width: int, height: int) -> Tile:
        """What a box would hit among the static layers carrying this tag."""
        for layer in self._layers:
            layer_height = len(layer.static_colliders) // layer.width

            def check(point: Vec2, layer: _StaticTiledLayer = layer, layer_height: int = layer_height) -> Tile:
                y = int(point.y / layer.tile_width)
                x = int(point.x / layer.tile_height)
                ix = y * layer.width + x
                if (
                    0 <= y < layer_height
                    and 0 <= x < layer.width
                    and 0 <= ix < len(layer.static_colliders)
                    and layer.tag == tag
                    and layer.static_colliders[ix] is not Tile.EMPTY
                ):
                    return layer.static_colliders[ix]
                return Tile.EMPTY

            right = width - 1.0
            bottom = height - 1.0
            tile = (
                check(pos)
                .combine(check(pos + Vec2(right, 0.0)))
                .combine(check(pos + Vec2(right, bottom)))
                .combine(check(pos + Vec2(0.0, bottom)))
            )
            if tile is not Tile.EMPTY:
                return tile

            if width > int(layer.tile_width):
                x = pos.x + layer.tile_width
                while x < pos.x + width - 1.0:
                    tile = check(Vec2(x, pos.y)).combine(check(Vec2(x, pos.y + bottom)))
                    if tile is not Tile.EMPTY:
                        return tile
                    x += layer.tile_width

            if height > int(layer.tile_height):
                y = pos.y + layer.tile_height
                while y < pos.y + height - 1.0:
                    tile = check(Vec2(pos.x, y)).combine(check(Vec2(pos.x + right, y)))
                    if tile is not Tile.EMPTY:
                        return tile
                    y += layer.tile_height

        return Tile.EMPTY

    def squished(self, actor: Actor) -> bool:
        return self._actors[actor.index].squished

    def actor_pos(self, actor: Actor) -> Vec2:
        return self._actors[actor.index].pos

    def solid_pos(self, solid: Solid) -> Vec2:
        return self._solids[solid.index].pos

    def collide_check(self, actor: Actor, pos: Vec2) -> bool:
        """True if the actor placed at pos would be blocked."""
        collider = self._actors[actor.index]
        tile = self.collide_solids(pos, collider.width, collider.height)
        blocking = {Tile.SOLID, Tile.COLLIDER}
        if not collider.descent:
            blocking.add(Tile.JUMP_THROUGH)
        return tile in blocking