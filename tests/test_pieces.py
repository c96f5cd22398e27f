from __future__ import annotations

import pytest

from blockfall.game import FallingPiece, PieceKind, Vector, kind_by_name, kinds
from blockfall.game.pieces import Color


def test_catalog_order_and_rotation_counts():
    counts = {kind.name: kind.rotation_count for kind in kinds()}
    assert [kind.name for kind in kinds()] == ["O", "Z", "S", "T", "L", "J", "I"]
    assert counts == {"O": 1, "Z": 2, "S": 2, "T": 4, "L": 4, "J": 4, "I": 2}


def test_every_rotation_state_has_four_non_negative_cells():
    for kind in kinds():
        for state in kind.rotations:
            assert len(set(state)) == 4
            assert all(v.x >= 0 and v.y >= 0 for v in state)


def test_colors_are_distinct_and_non_empty():
    colors = [kind.color for kind in kinds()]
    assert len(set(colors)) == 7
    assert all(int(c) > 0 for c in colors)


def test_kind_by_name():
    assert kind_by_name("T").color == Color.MAGENTA
    with pytest.raises(ValueError):
        kind_by_name("X")


def test_malformed_kind_rejected():
    with pytest.raises(ValueError):
        PieceKind("bad", ((Vector(0, 0), Vector(1, 0), Vector(2, 0)),), Vector(0, 0), Color.RED)


@pytest.mark.parametrize("name", ["O", "Z", "S", "T", "L", "J", "I"])
@pytest.mark.parametrize("n", [1, 2, 3, 5, 9])
def test_rotate_then_unrotate_restores_index(name, n):
    piece = FallingPiece.spawn(kind_by_name(name))
    for _ in range(n):
        piece.rotate()
        assert 0 <= piece.rotation < piece.kind.rotation_count
    for _ in range(n):
        piece.unrotate()
        assert 0 <= piece.rotation < piece.kind.rotation_count
    assert piece.rotation == 0


def test_unrotate_wraps_to_last_state():
    piece = FallingPiece.spawn(kind_by_name("T"))
    piece.unrotate()
    assert piece.rotation == 3


def test_spawn_and_cells():
    piece = FallingPiece.spawn(kind_by_name("O"))
    assert piece.position == Vector(4, 0)
    assert sorted(piece.cells()) == [Vector(4, 0), Vector(4, 1), Vector(5, 0), Vector(5, 1)]
    piece.translate(Vector(-1, 2))
    assert sorted(piece.cells()) == [Vector(3, 2), Vector(3, 3), Vector(4, 2), Vector(4, 3)]


def test_rotation_state_is_per_instance():
    kind = kind_by_name("L")
    a = FallingPiece.spawn(kind)
    b = FallingPiece.spawn(kind)
    a.rotate()
    assert a.rotation == 1
    assert b.rotation == 0
    assert a.offsets() == kind.rotations[1]
