"""
Tests for the feature generators, the world composer and configuration.
"""

import json
import math
import os
import tempfile

import pytest

from trailgen import build_world, WorldComposer, WorldConfig, WorldConfigError, load_config
from trailgen.config import PathSpec, Corridor, validate_config
from trailgen.engine.feature_generators import (
    PatchGenerator, PathCarver, ScatterPlacer, LandmarkRegistry, DEFAULT_LANDMARKS
)
from trailgen.procgen import SeededRNG
from trailgen.types import Landmark


def test_patch_generator():
    print("Testing PatchGenerator...")

    rng = SeededRNG("patches")
    patches = PatchGenerator().generate(rng, count=70, spread=350.0)

    assert len(patches) == 70
    assert rng.draws == 70 * 3
    for p in patches:
        assert -175.0 <= p.x < 175.0
        assert -175.0 <= p.z < 175.0
        assert 6.0 <= p.r < 20.0
        assert p.color == 0x2B5F34


def test_path_carver_zero_steps():
    rng = SeededRNG(1)
    path = PathCarver().carve(rng, start_x=3.0, start_z=-4.0, steps=0, step_len=7.0)

    assert len(path.points) == 1
    assert path.origin.x == 3.0 and path.origin.z == -4.0
    # heading is still drawn
    assert rng.draws == 1


def test_path_carver_step_length():
    print("\nTesting PathCarver...")

    rng = SeededRNG("walk")
    path = PathCarver().carve(rng, start_x=-60, start_z=20, steps=75, step_len=7.0, width=5.0)

    assert len(path.points) == 76
    assert path.width == 5.0
    assert path.origin.x == -60 and path.origin.z == 20
    for a, b in zip(path.points, path.points[1:]):
        assert math.isclose(math.hypot(b.x - a.x, b.z - a.z), 7.0, rel_tol=1e-9)


def test_path_carver_without_turns_is_straight():
    rng = SeededRNG(9)
    path = PathCarver().carve(rng, 0.0, 0.0, steps=20, step_len=5.0, turn_chance=0.0)

    end = path.points[-1]
    assert math.isclose(math.hypot(end.x, end.z), 100.0, rel_tol=1e-9)
    # one heading draw plus one turn check per step
    assert rng.draws == 21


def test_path_carver_from_path_spec():
    spec = PathSpec(start_x=0, start_z=0, steps=55, step_len=8, width=5.2)
    path = PathCarver().generate(SeededRNG("spec"), spec)
    assert len(path) == 56
    assert path.width == 5.2


def test_scatter_full_corridor_removes_everything():
    print("\nTesting ScatterPlacer thinning...")

    rng = SeededRNG("dense")
    trees = ScatterPlacer().generate(
        rng, count=200, spread=100.0, corridors=[Corridor(0, 0, 1000)], thin_chance=1.0
    )
    assert trees == ()
    # x, z and the skip check for every candidate
    assert rng.draws == 200 * 3


def test_scatter_without_corridors_keeps_everything():
    rng = SeededRNG("sparse")
    trees = ScatterPlacer().generate(rng, count=120, spread=360.0, scale=(0.75, 0.9))

    assert len(trees) == 120
    assert rng.draws == 120 * 3
    for t in trees:
        assert -180.0 <= t.x < 180.0
        assert -180.0 <= t.z < 180.0
        assert 0.75 <= t.scale < 1.65


def test_scatter_scale_is_base_plus_span():
    """Every scale is exactly base + r * span for the draw that produced it."""

    trees = ScatterPlacer().generate(SeededRNG("scales"), count=500, spread=360.0, scale=(0.75, 0.9))

    replay = SeededRNG("scales")
    for tree in trees:
        assert tree.x == (replay.next() - 0.5) * 360.0
        assert tree.z == (replay.next() - 0.5) * 360.0
        assert tree.scale == 0.75 + replay.next() * 0.9


def test_patch_radius_is_base_plus_span():
    patches = PatchGenerator().generate(SeededRNG("radii"), count=100, radius=(6.0, 14.0))

    replay = SeededRNG("radii")
    for patch in patches:
        replay.next()
        replay.next()
        assert patch.r == 6.0 + replay.next() * 14.0


def test_scatter_corridor_is_inclusive():
    corridor = Corridor(x=0, z=0, r=5)
    assert corridor.contains(5, 0)
    assert corridor.contains(3, 4)
    assert not corridor.contains(5, 0.01)
    assert ScatterPlacer.in_corridor(0, -5, [Corridor(10, 10, 1), corridor])


def test_scatter_thins_corridors():
    rng = SeededRNG("thin")
    corridor = Corridor(0, 0, 60)
    trees = ScatterPlacer().generate(rng, count=2000, spread=360.0, corridors=[corridor], thin_chance=0.75)

    inside = sum(1 for t in trees if corridor.contains(t.x, t.z))
    area_fraction = math.pi * 60 ** 2 / 360.0 ** 2
    expected_inside = 2000 * area_fraction * 0.25
    print(f"  inside corridor: {inside} (expected ~{expected_inside:.0f})")
    assert 0 < inside < expected_inside * 2.5
    assert len(trees) < 2000


def test_landmark_registry():
    print("\nTesting LandmarkRegistry...")

    registry = LandmarkRegistry()
    ids = [lm.id for lm in registry.landmarks()]
    assert ids == ["stone_ring", "pond", "watch_rock", "dead_tree"]
    assert len(set(ids)) == len(ids)
    assert "pond" in registry
    assert registry.get("pond").type == "water"
    assert registry.get("missing") is None

    with pytest.raises(ValueError):
        registry.register(Landmark(id="pond", name="Other Pond", type="water", x=0, z=0))
    with pytest.raises(ValueError):
        registry.register(Landmark(id="lava", name="Lava", type="lava", x=0, z=0))

    rng = SeededRNG(5)
    assert registry.generate(rng) == registry.landmarks()
    assert rng.draws == 0
    assert LandmarkRegistry.consumes_rng is False


def test_default_world():
    print("\nTesting default world...")

    world = build_world("default")

    assert world.seed == 2470140894
    assert world.bounds == 240.0
    assert world.world_size == 500.0
    assert len(world.patches) == 70
    assert [len(p.points) for p in world.paths] == [76, 76, 56]
    assert [p.width for p in world.paths] == [5.0, 5.0, 5.2]
    assert (world.paths[0].origin.x, world.paths[0].origin.z) == (-60, 20)
    assert (world.paths[1].origin.x, world.paths[1].origin.z) == (40, -30)
    assert (world.paths[2].origin.x, world.paths[2].origin.z) == (0, 0)

    pond = world.landmark("pond")
    assert (pond.x, pond.z, pond.type) == (110, 90, "water")
    assert [lm.id for lm in world.landmarks] == [lm.id for lm in DEFAULT_LANDMARKS]

    # pinned output for the default seed
    first = world.patches[0]
    assert (first.x, first.z) == (-123.74647572869435, 158.7162698386237)
    assert first.r == 14.10239687655121
    assert world.patches[5].r == 17.81097182724625
    assert len(world.trees) == 635
    assert (world.trees[0].x, world.trees[0].z) == (91.7217418178916, 50.22489471361041)
    assert world.trees[0].scale == 1.095815215492621
    assert world.trees[100].scale == 1.518721288908273
    assert world.trees[-1].scale == 0.9406179608311505
    last = world.paths[0].points[-1]
    assert math.isclose(last.x, 394.30857441516883, rel_tol=1e-9)
    assert math.isclose(last.z, 264.1297040062051, rel_tol=1e-9)

    print(f"  trees: {len(world.trees)}, last point of path 0: ({last.x:.2f}, {last.z:.2f})")


def test_integer_seed_world():
    world = build_world(42)
    assert world.seed == 42
    assert len(world.trees) == 629
    assert (world.patches[0].x, world.patches[0].z) == (35.38631317205727, -18.098304350860417)


def test_determinism_and_seed_sensitivity():
    a = build_world("trail")
    b = build_world("trail")
    c = build_world("trail-2")

    assert a == b
    assert a.patches != c.patches


def test_include_trees_does_not_shift_earlier_content():
    composer = WorldComposer()
    full = composer.generate(seed="x", include_trees=True)
    bare = composer.generate(seed="x", include_trees=False)

    assert bare.trees == ()
    assert bare.patches == full.patches
    assert bare.paths == full.paths
    assert bare.landmarks == full.landmarks


def test_degenerate_seeds_fall_back():
    default = build_world("default")
    for seed in (None, "", float("nan")):
        assert build_world(seed) == default


def test_composer_uses_config_seed():
    composer = WorldComposer(WorldConfig(seed="configured"))
    assert composer.generate() == build_world("configured")
    assert composer.generate(seed="other") == build_world("other")


def test_build_world_uses_config_seed():
    config = WorldConfig(seed="from-config")
    assert build_world(config=config) == build_world("from-config")
    assert build_world("explicit", config) == build_world("explicit")
    assert build_world() == build_world("default")


def test_custom_config():
    config = WorldConfig(
        patch_count=5,
        tree_count=0,
        paths=(PathSpec(start_x=10, start_z=10, steps=3, step_len=2.0),),
        landmarks=(Landmark(id="cairn", name="Cairn", type="stone", x=1, z=2),),
        bounds=100.0
    )
    world = build_world("custom", config)

    assert len(world.patches) == 5
    assert world.trees == ()
    assert len(world.paths) == 1 and len(world.paths[0].points) == 4
    assert [lm.id for lm in world.landmarks] == ["cairn"]
    assert world.bounds == 100.0


def test_parameter_spec():
    from trailgen.procgen import ParameterSpec, WORLD_PARAMETERS

    spec = ParameterSpec({"count": (0, 10, 3), "ratio": (0.0, 1.0, 0.5)}, strict_min=("ratio",), integers=("count",))
    assert spec.extract_params({"count": 7}) == {"count": 7, "ratio": 0.5}
    assert spec.get_param_ranges() == {"count": (0, 10), "ratio": (0.0, 1.0)}
    assert spec.validate({"count": 7}) == []
    assert len(spec.validate({"count": 2.5, "ratio": 0.0})) == 2
    assert spec.check("count", True, 0, 10) is not None
    assert spec.check("count", "3", 0, 10) is not None

    defaults = WORLD_PARAMETERS.extract_params({})
    assert defaults["tree_count"] == 650 and defaults["bounds"] == 240.0


def test_config_validation_errors():
    print("\nTesting configuration validation...")

    config = WorldConfig(
        bounds=0,
        patch_count=-1,
        thin_chance=1.5,
        tree_spread=float("nan"),
        patch_radius=(0.0, 2.0),
        paths=(PathSpec(start_x=0, start_z=0, steps=2.5, step_len=0),),
        corridors=(Corridor(0, 0, -1),),
        landmarks=(
            Landmark(id="a", name="A", type="stone", x=0, z=0),
            Landmark(id="a", name="B", type="lava", x=float("inf"), z=0),
        )
    )
    errors = validate_config(config)
    print(f"  errors: {errors}")
    joined = "\n".join(errors)

    for fragment in (
        "bounds", "patch_count", "thin_chance", "tree_spread", "patch_radius",
        "paths[0].steps", "paths[0].step_len", "corridors[0].r",
        "duplicate landmark id: a", "unknown type: lava", "landmarks[1].x"
    ):
        assert fragment in joined, fragment

    with pytest.raises(WorldConfigError) as excinfo:
        WorldComposer(config).generate("any")
    assert excinfo.value.errors == errors

    assert validate_config(WorldConfig()) == []


def test_landmark_ids_and_names_must_be_strings():
    config = WorldConfig(landmarks=(
        Landmark(id=5, name=None, type="stone", x=0, z=0),
        Landmark(id=["a"], name="List", type="rock", x=1, z=1),
        Landmark(id="", name="Empty", type="water", x=2, z=2),
        Landmark(id="ok", name="Fine", type="tree", x=3, z=3),
    ))
    errors = validate_config(config)
    print(f"  errors: {errors}")
    joined = "\n".join(errors)

    assert "landmarks[0].id" in joined
    assert "landmarks[0].name" in joined
    assert "landmarks[1].id" in joined
    assert "landmarks[2].id" in joined
    assert "landmarks[3]" not in joined

    with pytest.raises(WorldConfigError):
        WorldComposer(config).generate("any")


def test_config_dict_and_file():
    config = WorldConfig(seed=7, tree_count=10, patch_radius=(1.0, 2.0))
    data = config.to_dict()
    assert json.loads(json.dumps(data)) == data
    assert WorldConfig.from_dict(json.loads(json.dumps(data))) == config

    with pytest.raises(WorldConfigError):
        WorldConfig.from_dict({"tree_cout": 10})
    with pytest.raises(WorldConfigError):
        WorldConfig.from_dict({"paths": [{"start_x": 0}]})
    with pytest.raises(WorldConfigError):
        WorldConfig.from_dict(["not", "a", "dict"])

    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "world.json")
        with open(path, "w") as f:
            json.dump({"tree_count": 3, "corridors": [{"x": 0, "z": 0, "r": 5}]}, f)
        loaded = load_config(path)

    assert loaded.tree_count == 3
    assert loaded.corridors == (Corridor(0, 0, 5),)
    assert loaded.with_overrides(tree_count=4).tree_count == 4


def main():
    """Run all world generation tests."""

    print("Testing world generation...")
    print("=" * 50)

    tests = [
        ("Patches", test_patch_generator),
        ("Zero-step path", test_path_carver_zero_steps),
        ("Path step length", test_path_carver_step_length),
        ("Straight path", test_path_carver_without_turns_is_straight),
        ("Path from spec", test_path_carver_from_path_spec),
        ("Full corridor", test_scatter_full_corridor_removes_everything),
        ("No corridors", test_scatter_without_corridors_keeps_everything),
        ("Scale formula", test_scatter_scale_is_base_plus_span),
        ("Radius formula", test_patch_radius_is_base_plus_span),
        ("Inclusive corridor", test_scatter_corridor_is_inclusive),
        ("Corridor thinning", test_scatter_thins_corridors),
        ("Landmark registry", test_landmark_registry),
        ("Default world", test_default_world),
        ("Integer seed", test_integer_seed_world),
        ("Determinism", test_determinism_and_seed_sensitivity),
        ("Scatter toggle", test_include_trees_does_not_shift_earlier_content),
        ("Degenerate seeds", test_degenerate_seeds_fall_back),
        ("Config seed", test_composer_uses_config_seed),
        ("build_world config seed", test_build_world_uses_config_seed),
        ("Custom config", test_custom_config),
        ("Parameter spec", test_parameter_spec),
        ("Config validation", test_config_validation_errors),
        ("Landmark id types", test_landmark_ids_and_names_must_be_strings),
        ("Config I/O", test_config_dict_and_file),
    ]

    failed = []
    for test_name, test_func in tests:
        try:
            test_func()
            print(f"{test_name}: ✓ PASS")
        except AssertionError as e:
            failed.append(test_name)
            print(f"{test_name}: ✗ FAIL {e}")

    print("\n" + "=" * 50)
    print(f"Passed: {len(tests) - len(failed)}/{len(tests)}")
    return 0 if not failed else 1


if __name__ == "__main__":
    raise SystemExit(main())
