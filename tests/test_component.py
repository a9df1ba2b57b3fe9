from modeframe.actor import Actor
from modeframe.component import Component, SpriteComponent
from modeframe.mode import ModeBase


def make_actor():
    mode = ModeBase()
    return mode, Actor(mode)


class Recording(Component):
    def __init__(self, owner, log, update_order=100):
        self.log = log
        super().__init__(owner, update_order)

    def update(self):
        self.log.append("update")

    def process_input(self):
        self.log.append("input")

    def receive(self, message):
        self.log.append(message)


class DrawRecorder(SpriteComponent):
    def __init__(self, owner, draw_order, log):
        self.log = log
        super().__init__(owner, draw_order)

    def draw(self):
        self.log.append(self.draw_order)


def test_component_registers_with_owner():
    _, actor = make_actor()
    comp = Component(actor)
    assert actor.components == (comp,)
    assert comp.owner is actor


def test_default_update_order():
    _, actor = make_actor()
    assert Component(actor).update_order == 100


def test_destroy_detaches_from_owner():
    _, actor = make_actor()
    keep = Component(actor)
    gone = Component(actor)
    gone.destroy()
    assert actor.components == (keep,)


def test_hooks_are_dispatched_by_actor():
    _, actor = make_actor()
    log = []
    recorder = Recording(actor, log)
    actor.process_input()
    actor.update()
    actor.send(7)
    assert actor.components == (recorder,)
    assert log == ["input", "update", 7]


def test_sprite_registers_with_mode_and_owner():
    mode, actor = make_actor()
    sprite = SpriteComponent(actor, 5)
    assert mode.sprites == (sprite,)
    assert actor.components == (sprite,)
    assert sprite.draw_order == 5


def test_sprite_default_orders():
    _, actor = make_actor()
    sprite = SpriteComponent(actor)
    assert sprite.draw_order == 100
    assert sprite.update_order == 100


def test_sprite_destroy_removes_everywhere():
    mode, actor = make_actor()
    sprite = SpriteComponent(actor, 3)
    sprite.destroy()
    assert mode.sprites == ()
    assert actor.components == ()


def test_sprites_drawn_in_draw_order():
    mode, actor = make_actor()
    log = []
    DrawRecorder(actor, 30, log)
    DrawRecorder(actor, 10, log)
    DrawRecorder(actor, 20, log)
    mode.render()
    assert [sprite.draw_order for sprite in mode.sprites] == [10, 20, 30]
    assert log == [sprite.draw_order for sprite in mode.sprites]