"""
Condition Builder: Builder Context Tests
===========================================
Tests verify the value/on_change contract:
- Callbacks commit through on_change only when the root changed
- Committed roots become the new value
- Invalid values are seeded with a fresh root
- Invariant checks guard commits when enabled
"""

import itertools

import pytest

from condition_builder.config.settings import BuilderSettings
from condition_builder.context.builder import BuilderContext
from condition_builder.dnd.metadata import DropTarget
from condition_builder.tree.exceptions import (
    RendererNotConfiguredError,
    TreeInvariantError,
)
from condition_builder.tree.models import ConditionGroup, ConditionLeaf
from condition_builder.tree.queries import find_node


# ══════════════════════════════════════════════════════════════
# FIXTURES
# ══════════════════════════════════════════════════════════════

DEFAULT_PAYLOAD = {"policyType": "AuthzDirectOwner", "data": {}}


def leaf(node_id, data=None):
    return ConditionLeaf(id=node_id, data=data if data is not None else dict(DEFAULT_PAYLOAD))


def make_factory():
    counter = itertools.count(1)
    return lambda: leaf(f"new-{next(counter)}")


def shape(node):
    if isinstance(node, ConditionLeaf):
        return node.id
    return (node.operator, [shape(child) for child in node.children])


ROOT = ConditionGroup(
    id="root",
    operator="AND",
    children=(
        leaf("a"),
        ConditionGroup(id="g", operator="OR", children=(leaf("b"), leaf("c"))),
        leaf("d"),
    ),
)


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, root):
        self.calls.append(root)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def builder(recorder):
    return BuilderContext(
        value=ROOT,
        on_change=recorder,
        leaf_factory=make_factory(),
        render_condition=lambda node: f"<{node.data['policyType']}:{node.id}>",
    )


# ══════════════════════════════════════════════════════════════
# VALUE
# ══════════════════════════════════════════════════════════════

class TestValue:
    def test_holds_given_root(self, builder):
        assert builder.value is ROOT

    @pytest.mark.parametrize("value", [None, {}, "root", ConditionLeaf(id="x", data={})])
    def test_invalid_value_is_seeded(self, value, recorder):
        builder = BuilderContext(value=value, on_change=recorder, leaf_factory=make_factory())
        assert isinstance(builder.value, ConditionGroup)
        assert builder.value.operator == "AND"
        assert shape(builder.value) == ("AND", ["new-1"])
        assert recorder.calls == []

    def test_setter_accepts_new_root(self, builder):
        replacement = ConditionGroup(id="other", children=(leaf("z"),))
        builder.value = replacement
        assert builder.value is replacement
        assert builder.on_delete_node("d") is False

    def test_default_settings(self, builder):
        assert builder.settings.leaf_drop_operator == "AND"


# ══════════════════════════════════════════════════════════════
# CALLBACKS
# ══════════════════════════════════════════════════════════════

class TestCallbacks:
    def test_delete_commits(self, builder, recorder):
        assert builder.on_delete_node("b") is True
        assert shape(builder.value) == ("AND", ["a", "c", "d"])
        assert recorder.calls == [builder.value]

    def test_noop_skips_on_change(self, builder, recorder):
        assert builder.on_delete_node("nonexistent") is False
        assert builder.on_toggle_group_operator("a") is False
        assert builder.on_add_condition_to_group("a") is False
        assert builder.value is ROOT
        assert recorder.calls == []

    def test_toggle(self, builder, recorder):
        assert builder.on_toggle_group_operator("g") is True
        assert find_node(builder.value, "g").operator == "AND"
        assert len(recorder.calls) == 1

    def test_add_condition(self, builder):
        builder.on_add_condition_to_group("g")
        builder.on_add_condition_to_group("root")
        assert shape(builder.value) == (
            "AND", ["a", ("OR", ["b", "c", "new-1"]), "d", "new-2"]
        )

    def test_update_condition(self, builder):
        payload = {"policyType": "AuthzMembership", "data": {"role": "admin"}}
        assert builder.on_update_condition("c", payload) is True
        assert find_node(builder.value, "c").data == payload

    def test_move_before(self, builder):
        assert builder.on_move_node("d", "a", "before") is True
        assert shape(builder.value) == ("AND", ["d", "a", ("OR", ["b", "c"])])

    def test_move_into_group(self, builder):
        assert builder.on_move_node("a", "g", "into") is True
        assert shape(builder.value) == ("AND", [("OR", ["b", "c", "a"]), "d"])

    def test_move_into_condition_groups(self, builder):
        assert builder.on_move_node("a", "d", "into") is True
        assert shape(builder.value) == ("AND", [("AND", ["a", "d"]), ("OR", ["b", "c"])])

    def test_move_unknown_target(self, builder, recorder):
        assert builder.on_move_node("a", "nonexistent", "after") is False
        assert recorder.calls == []

    def test_callbacks_chain_on_latest_value(self, builder, recorder):
        builder.on_delete_node("b")
        builder.on_delete_node("a")
        assert shape(builder.value) == ("AND", ["c", "d"])
        assert len(recorder.calls) == 2


# ══════════════════════════════════════════════════════════════
# DRAG INTEGRATION
# ══════════════════════════════════════════════════════════════

class TestDrag:
    def test_is_dragging_id(self, builder):
        builder.controller.on_drag_start("b")
        assert builder.is_dragging_id("b")
        assert not builder.is_dragging_id("a")

    def test_drop_commits_through_builder(self, builder, recorder):
        builder.controller.on_drag_start("b")
        builder.controller.on_drag_end("b", DropTarget("d", "after", "condition"))
        assert shape(builder.value) == ("AND", ["a", "c", "d", "b"])
        assert recorder.calls == [builder.value]
        assert not builder.is_dragging_id("b")


# ══════════════════════════════════════════════════════════════
# RENDERING / INVARIANTS
# ══════════════════════════════════════════════════════════════

class TestRendering:
    def test_render_condition_delegates(self, builder):
        assert builder.render_condition(leaf("a")) == "<AuthzDirectOwner:a>"

    def test_render_without_renderer(self, recorder):
        builder = BuilderContext(value=ROOT, on_change=recorder, leaf_factory=make_factory())
        with pytest.raises(RendererNotConfiguredError):
            builder.render_condition(leaf("a"))


class TestInvariantGuard:
    BROKEN = ConditionGroup(
        id="root",
        children=(leaf("a"), ConditionGroup(id="g", operator="OR", children=(leaf("a"), leaf("b")))),
    )

    def test_commit_checks_invariants(self, recorder):
        builder = BuilderContext(
            value=self.BROKEN,
            on_change=recorder,
            leaf_factory=make_factory(),
            settings=BuilderSettings(check_invariants=True),
        )
        with pytest.raises(TreeInvariantError, match="UNIQUE_IDS"):
            builder.on_toggle_group_operator("g")
        assert builder.value is self.BROKEN
        assert recorder.calls == []

    def test_checks_can_be_disabled(self, recorder):
        builder = BuilderContext(
            value=self.BROKEN,
            on_change=recorder,
            leaf_factory=make_factory(),
            settings=BuilderSettings(check_invariants=False),
        )
        assert builder.on_toggle_group_operator("g") is True
        assert len(recorder.calls) == 1
