import pytest

from modeframe.actor import Actor, ActorState, Vector
from modeframe.component import Component, SpriteComponent
from modeframe.mode import ModeBase


class Tagged(Component):
    def __init__(self, owner, tag, order, log):
        self.tag = tag
        self.log = log
        super().__init__(owner, order)

    def update(self):
        self.log.append(("update", self.tag))

    def process_input(self):
        self.log.append(("input", self.tag))

    def receive(self, message):
        self.log.append((message, self.tag))


class Counting(Actor):
    def __init__(self, mode):
        self.actor_updates = 0
        super().__init__(mode)

    def update_actor(self):
        self.actor_updates += 1


def test_initial_state_and_vectors():
    actor = Actor(ModeBase())
    assert actor.state is ActorState.ACTIVE
    assert actor.position == Vector(0, 0, 0)
    assert actor.direction == Vector(0, 0, -1)


def test_actor_registers_with_mode():
    mode = ModeBase()
    actor = Actor(mode)
    assert mode.actors == (actor,)


def test_components_sorted_by_update_order():
    actor = Actor(ModeBase())
    log = []
    a = Tagged(actor, "a", 50, log)
    b = Tagged(actor, "b", 100, log)
    c = Tagged(actor, "c", 10, log)
    assert actor.components == (c, a, b)


def test_equal_order_keeps_insertion_order():
    actor = Actor(ModeBase())
    log = []
    first = Tagged(actor, "first", 20, log)
    second = Tagged(actor, "second", 20, log)
    assert actor.components == (first, second)


def test_update_runs_components_in_order():
    actor = Actor(ModeBase())
    log = []
    late = Tagged(actor, "late", 200, log)
    early = Tagged(actor, "early", 1, log)
    actor.update()
    assert actor.components == (early, late)
    assert log == [("update", comp.tag) for comp in actor.components]


@pytest.mark.parametrize(
    "state, expected",
    [
        (ActorState.ACTIVE, 1),
        (ActorState.PREPARATION, 1),
        (ActorState.PAUSED, 0),
        (ActorState.DEAD, 0),
    ],
)
def test_update_depends_on_state(state, expected):
    actor = Counting(ModeBase())
    actor.state = state
    actor.update()
    assert actor.actor_updates == expected


def test_process_input_only_when_active():
    actor = Actor(ModeBase())
    log = []
    comp = Tagged(actor, "x", 1, log)
    actor.state = ActorState.PREPARATION
    actor.process_input()
    assert len(log) == 0
    actor.state = ActorState.ACTIVE
    actor.process_input()
    assert actor.components == (comp,)
    assert log == [("input", c.tag) for c in actor.components]


def test_send_reaches_every_component():
    actor = Actor(ModeBase())
    log = []
    a = Tagged(actor, "a", 1, log)
    b = Tagged(actor, "b", 2, log)
    actor.send(3)
    assert actor.components == (a, b)
    assert log == [(3, comp.tag) for comp in actor.components]


def test_remove_unknown_component_is_ignored():
    actor = Actor(ModeBase())
    other = Actor(ModeBase())
    comp = Component(other)
    actor.remove_component(comp)
    assert actor.components == ()
    assert other.components == (comp,)


def test_destroy_clears_components_and_leaves_mode():
    mode = ModeBase()
    actor = Actor(mode)
    Component(actor)
    SpriteComponent(actor)
    actor.destroy()
    assert actor.components == ()
    assert mode.actors == ()
    assert mode.sprites == ()