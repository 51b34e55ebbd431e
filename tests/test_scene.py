from dataclasses import dataclass

import pytest

from orbitsim.scene import Scene


@dataclass
class Pos:
    x: float


@dataclass
class Tag:
    name: str


@pytest.fixture
def scene():
    s = Scene()
    s.register_component(Pos)
    s.register_component(Tag)
    return s


def test_ids_are_sequential(scene):
    assert [scene.create_entity() for _ in range(3)] == [0, 1, 2]


def test_smallest_free_id_is_recycled(scene):
    for _ in range(4):
        scene.create_entity()
    scene.remove_entity(2)
    scene.remove_entity(1)
    assert scene.create_entity() == 1
    assert scene.create_entity() == 2
    assert scene.create_entity() == 4


def test_all_entities_excludes_removed(scene):
    for _ in range(3):
        scene.create_entity()
    scene.remove_entity(1)
    assert scene.all_entities() == [0, 2]


def test_remove_unknown_entity_raises(scene):
    with pytest.raises(KeyError):
        scene.remove_entity(0)


def test_assign_and_get(scene):
    e = scene.create_entity()
    comp = Pos(1.0)
    assert scene.assign_component(e, comp) is comp
    assert scene.get_component(e, Pos) is comp
    assert scene.has_component(e, Pos)
    assert not scene.has_component(e, Tag)


def test_assign_twice_raises(scene):
    e = scene.create_entity()
    scene.assign_component(e, Pos(1.0))
    with pytest.raises(ValueError):
        scene.assign_component(e, Pos(2.0))


def test_unregistered_type_raises(scene):
    e = scene.create_entity()
    with pytest.raises(KeyError):
        scene.assign_component(e, 3.5)


def test_erase_keeps_other_entities(scene):
    ids = [scene.create_entity() for _ in range(3)]
    for i in ids:
        scene.assign_component(i, Pos(float(i)))
    scene.erase_component(1, Pos)
    assert scene.get_component(2, Pos) == Pos(2.0)
    with pytest.raises(KeyError):
        scene.get_component(1, Pos)
    with pytest.raises(KeyError):
        scene.erase_component(1, Pos)


def test_remove_entity_drops_components(scene):
    e = scene.create_entity()
    scene.assign_component(e, Pos(1.0))
    scene.remove_entity(e)
    assert scene.view(Pos) == []


def test_view_filters_and_orders_by_id(scene):
    ids = [scene.create_entity() for _ in range(4)]
    scene.assign_component(ids[3], Pos(3.0))
    scene.assign_component(ids[3], Tag("d"))
    scene.assign_component(ids[1], Pos(1.0))
    scene.assign_component(ids[1], Tag("b"))
    scene.assign_component(ids[2], Pos(2.0))
    assert scene.view(Pos, Tag) == [(1, Pos(1.0), Tag("b")), (3, Pos(3.0), Tag("d"))]
    assert [row[0] for row in scene.view(Pos)] == [1, 2, 3]


def test_view_returns_live_components(scene):
    e = scene.create_entity()
    scene.assign_component(e, Pos(1.0))
    (_, pos), = scene.view(Pos)
    pos.x = 9.0
    assert scene.get_component(e, Pos).x == 9.0


def test_find_unique(scene):
    a = scene.create_entity()
    b = scene.create_entity()
    scene.assign_component(b, Tag("player"))
    assert scene.find_unique(Tag) == b
    scene.assign_component(a, Tag("other"))
    with pytest.raises(LookupError):
        scene.find_unique(Tag)


def test_find_unique_none(scene):
    scene.create_entity()
    with pytest.raises(LookupError):
        scene.find_unique(Pos)


def test_register_resets_storage(scene):
    e = scene.create_entity()
    scene.assign_component(e, Pos(1.0))
    scene.register_component(Pos)
    assert not scene.has_component(e, Pos)