"""Tests for customizer activation, ordering and failure propagation."""

import pytest

from buildmodel import BuildModel
from customizers import (
    Activation,
    BuildCustomizer,
    CustomizationContext,
    CustomizerPipeline,
    CustomizerRegistry,
    PipelineState,
)
from resolution import ProjectDescription
from versioning import parse_version


def describe(**kwargs):
    kwargs.setdefault("platform_version", parse_version("2.1.0.RELEASE"))
    kwargs.setdefault("build_tool", "maven")
    kwargs.setdefault("language", "java")
    kwargs.setdefault("packaging", "jar")
    return ProjectDescription(**kwargs)


def recorder(name, log, activation=None, priority=0):
    class _Recorder(BuildCustomizer):
        def customize(self, build):
            log.append(name)

    _Recorder.__name__ = name
    _Recorder.activation = activation or Activation()
    _Recorder.priority = priority
    return _Recorder


def run(registry, description, build=None):
    build = build if build is not None else BuildModel()
    pipeline = CustomizerPipeline(registry)
    pipeline.run(CustomizationContext(description, catalog=None), build)
    return pipeline


@pytest.mark.parametrize("activation,expected", [
    (Activation(), True),
    (Activation(build_tool="maven"), True),
    (Activation(build_tool="gradle"), False),
    (Activation(language="kotlin"), False),
    (Activation(language=("java", "kotlin")), True),
    (Activation(packaging="war"), False),
    (Activation(platform_range="2.0.0.RELEASE"), True),
    (Activation(platform_range="[1.5.0.RELEASE,2.0.0.M1)"), False),
    (Activation(build_tool="maven", language="java", packaging="jar", platform_range="2.1.0"), True),
    (Activation(build_tool="maven", packaging="war"), False),
])
def test_activation_dimensions_are_anded(activation, expected):
    assert activation.matches(describe()) is expected


def test_dialect_and_build_tool_version_dimensions():
    gradle5 = describe(build_tool="gradle", dialect="kotlin", build_tool_version="5.2.1")
    assert Activation(build_tool="gradle", dialect="kotlin", build_tool_versions="5").matches(gradle5)
    assert not Activation(dialect="groovy").matches(gradle5)
    assert not Activation(build_tool_versions=("3", "4")).matches(gradle5)
    assert not Activation(build_tool_versions="5").matches(describe(build_tool_version="51.0"))
    assert not Activation(build_tool_versions="5").matches(describe())


def test_only_matching_customizers_run():
    log = []
    registry = CustomizerRegistry()
    registry.register(recorder("maven", log, Activation(build_tool="maven")))
    registry.register(recorder("gradle", log, Activation(build_tool="gradle")))
    registry.register(recorder("any", log))
    run(registry, describe())
    assert log == ["maven", "any"]


def test_priority_order_with_stable_ties():
    log = []
    registry = CustomizerRegistry()
    registry.register(recorder("late", log, priority=10))
    registry.register(recorder("first-tie", log, priority=0))
    registry.register(recorder("early", log, priority=-5))
    registry.register(recorder("second-tie", log, priority=0))
    pipeline = run(registry, describe())
    assert log == ["early", "first-tie", "second-tie", "late"]
    assert pipeline.applied == log


def test_registration_overrides_class_attributes():
    log = []
    registry = CustomizerRegistry()
    registry.register(recorder("a", log, priority=0), priority=5, name="renamed")
    registry.register(recorder("b", log, Activation(build_tool="gradle")), activation=Activation())
    run(registry, describe())
    assert log == ["b", "a"]
    assert registry.names() == ["renamed", "b"]


def test_plain_callable_factories_are_supported():
    seen = []

    class Adder:
        def __init__(self, context):
            self.context = context

        def customize(self, build):
            seen.append(self.context.description.platform_version)
            build.properties.put("touched", "yes")

    registry = CustomizerRegistry()
    registry.register(Adder)
    build = BuildModel()
    run(registry, describe(), build)
    assert seen == [parse_version("2.1.0")]
    assert build.properties.has("touched")


def test_later_customizer_reads_state_of_earlier_one():
    class First(BuildCustomizer):
        priority = 0

        def customize(self, build):
            build.plugins.add("first")

    class Second(BuildCustomizer):
        priority = 1

        def customize(self, build):
            if build.plugins.has("first"):
                build.plugins.add("second")

    registry = CustomizerRegistry()
    registry.register(Second)
    registry.register(First)
    build = BuildModel()
    run(registry, describe(), build)
    assert build.plugins.items() == [("first", None), ("second", None)]


def test_customizers_are_instantiated_per_run():
    instances = []

    class Counting(BuildCustomizer):
        def __init__(self, context):
            super().__init__(context)
            instances.append(self)

        def customize(self, build):
            pass

    registry = CustomizerRegistry()
    registry.register(Counting)
    run(registry, describe())
    run(registry, describe())
    assert len(instances) == 2 and instances[0] is not instances[1]


def test_failure_propagates_unchanged_and_stops_pipeline(caplog):
    log = []

    class Boom(BuildCustomizer):
        def customize(self, build):
            raise KeyError("boom")

    registry = CustomizerRegistry()
    registry.register(recorder("before", log, priority=-1))
    registry.register(Boom)
    registry.register(recorder("after", log, priority=1))
    pipeline = CustomizerPipeline(registry)
    with pytest.raises(KeyError) as excinfo:
        pipeline.run(CustomizationContext(describe(), catalog=None), BuildModel())
    assert excinfo.value.args == ("boom",)
    assert log == ["before"]
    assert pipeline.state is PipelineState.RUNNING
    assert "Customizer Boom failed" in caplog.text


def test_pipeline_states_and_single_use():
    pipeline = CustomizerPipeline(CustomizerRegistry())
    assert pipeline.state is PipelineState.PENDING
    pipeline.run(CustomizationContext(describe(), catalog=None), BuildModel())
    assert pipeline.state is PipelineState.DONE
    with pytest.raises(RuntimeError):
        pipeline.run(CustomizationContext(describe(), catalog=None), BuildModel())
