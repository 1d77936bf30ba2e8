"""Bootstrap behaviour: one bean per class, then field-by-field wiring."""

from __future__ import annotations

from typing import Optional

from crux_di import DIContainer, build_container
from crux_di.tests import beans, beans_alt
from crux_di.tests.beans import (
    Bare,
    ChildHolder,
    Consumer,
    Counter,
    EnglishGreeter,
    FrozenHolder,
    Guarded,
    Host,
    Impl,
    Left,
    OnlyA,
    OtherImpl,
    Qualified,
    Right,
    Runner,
    RunnerUser,
    ServiceA,
    ServiceB,
    Untyped,
    WithPrivate,
)
from crux_di.tests.utils import assert_true, events_named


def test_one_instance_per_candidate_type():
    types = {ServiceA, ServiceB, Impl, Consumer, OnlyA}
    container = DIContainer(types)
    assert len(container) == len(types)
    assert {type(b) for b in container.instances} == types
    assert len({id(b) for b in container.instances}) == len(types)


def test_duplicate_candidates_are_collapsed():
    Counter.created = 0
    container = DIContainer([Counter, ServiceA, Counter])
    assert len(container) == 2
    assert Counter.created == 1
    assert [type(b) for b in container] == [Counter, ServiceA]


def test_empty_candidate_set_builds_empty_container():
    container = DIContainer(set())
    assert len(container) == 0
    assert container.get_bean(ServiceA) is None


def test_field_receives_the_pooled_instance_by_identity():
    container = DIContainer({ServiceA, ServiceB})
    b = container.get_bean(ServiceB)
    assert b is not None
    assert b.service_a is not None
    assert b.service_a is container.get_bean(ServiceA)


def test_field_typed_as_abstract_base_receives_implementation():
    container = DIContainer({Impl, Consumer})
    consumer = container.get_bean(Consumer)
    assert consumer.capability is container.get_bean(Impl)
    assert consumer.capability.ping() == "pong"


def test_field_typed_as_runtime_protocol_receives_structural_match():
    container = DIContainer({EnglishGreeter, Host})
    host = container.get_bean(Host)
    assert isinstance(host.greeter, EnglishGreeter)


def test_unmatched_field_stays_default_and_is_not_an_error():
    container = DIContainer({OnlyA})
    only = container.get_bean(OnlyA)
    assert only is not None
    assert only.z is None


def test_unmatched_bare_annotation_stays_unset():
    container = DIContainer({Bare})
    assert not hasattr(container.get_bean(Bare), "service_a")


def test_bare_annotation_is_injected_when_matched():
    container = DIContainer({Bare, ServiceA})
    assert container.get_bean(Bare).service_a is container.get_bean(ServiceA)


def test_non_runtime_protocol_field_matches_nothing():
    container = DIContainer([Runner, RunnerUser])
    assert container.get_bean(RunnerUser).runner is None


def test_mutual_references_are_wired():
    container = DIContainer({Left, Right})
    left = container.get_bean(Left)
    right = container.get_bean(Right)
    assert left.right is right
    assert right.left is left


def test_private_field_is_written_under_mangled_name():
    container = DIContainer({WithPrivate, ServiceA})
    assert container.get_bean(WithPrivate).secret() is container.get_bean(ServiceA)


def test_frozen_dataclass_field_is_written_directly():
    container = DIContainer({FrozenHolder, ServiceA})
    assert container.get_bean(FrozenHolder).service_a is container.get_bean(ServiceA)


def test_custom_setattr_is_bypassed():
    container = DIContainer({Guarded, ServiceA})
    assert container.get_bean(Guarded).service_a is container.get_bean(ServiceA)


def test_final_and_classvar_fields_are_never_written():
    container = DIContainer({Qualified, ServiceA})
    q = container.get_bean(Qualified)
    assert q.pinned is None
    assert Qualified.shared is None
    assert q.service_a is container.get_bean(ServiceA)


def test_non_class_annotations_are_left_alone():
    container = DIContainer({Untyped, ServiceA})
    u = container.get_bean(Untyped)
    assert u.numbers == []
    assert u.either is None
    assert u.label == "not annotated"


def test_inherited_fields_are_not_injected():
    container = DIContainer({ChildHolder, ServiceA})
    assert container.get_bean(ChildHolder).service_a is None


def test_multiple_candidates_pick_one_assignable_bean(captured_events):
    container = DIContainer([Impl, OtherImpl, Consumer])
    consumer = container.get_bean(Consumer)
    assert isinstance(consumer.capability, (Impl, OtherImpl))
    assert any(consumer.capability is b for b in container.instances)
    ambiguous = events_named(captured_events, "container.field.ambiguous")
    assert len(ambiguous) == 1
    assert ambiguous[0]["_level"] == "WARNING"
    assert len(ambiguous[0]["candidates"]) == 2


def test_ambiguity_warning_can_be_disabled(captured_events):
    build_container([Impl, OtherImpl, Consumer], config={"warn_on_ambiguous": False})
    assert not [
        e for e in events_named(captured_events, "container.field.ambiguous") if e["_level"] == "WARNING"
    ]


def test_function_local_components_resolve_postponed_annotations():
    class Repo:
        pass

    class Service:
        repo: Optional[Repo] = None

    container = DIContainer([Service, Repo])
    assert_true(
        container.get_bean(Service).repo is container.get_bean(Repo),
        "local forward reference should resolve through the candidate namespace",
    )


def test_bootstrap_emits_start_and_ready_events(captured_events):
    build_container({ServiceA, ServiceB}, config={"log_level": "DEBUG"})
    assert len(events_named(captured_events, "container.bootstrap.start")) == 1
    ready = events_named(captured_events, "container.bootstrap.ready")
    assert ready and ready[0]["beans"] == 2
    injected = events_named(captured_events, "container.field.injected")
    assert injected and injected[0]["field_name"] == "service_a"


def test_same_named_candidates_do_not_shadow_the_declared_type():
    container = DIContainer([beans.RepoUser, beans.Repo, beans_alt.Repo])
    user = container.get_bean(beans.RepoUser)
    assert user.repo is container.get_bean(beans.Repo)
    assert not isinstance(user.repo, beans_alt.Repo)


def test_one_unresolvable_annotation_does_not_disable_its_siblings():
    container = DIContainer([beans.HalfResolvable, ServiceA, beans_alt.Repo])
    holder = container.get_bean(beans.HalfResolvable)
    assert holder.dep is container.get_bean(ServiceA)
    assert holder.union_dep is container.get_bean(ServiceA)
    assert holder.dotted is container.get_bean(beans_alt.Repo)
    assert holder.ghost is None
    assert container.describe().bean("HalfResolvable").unresolved == ["ghost"]


def test_unresolvable_base_annotation_does_not_affect_subclass_fields():
    container = DIContainer([beans.GhostChild, ServiceA])
    assert container.get_bean(beans.GhostChild).dep is container.get_bean(ServiceA)
