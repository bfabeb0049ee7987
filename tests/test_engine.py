"""Tests for engine setup, phase ordering, waves and render snapshots."""

import pytest

from lasso.config.simulation_config import SimulationConfig
from lasso.events import WaveRequestedEvent
from lasso.exceptions import ConfigurationError
from lasso.kinds import PRIMARY_KINDS, ShapeKind
from lasso.math_utils import Vector2
from lasso.simulation import CaptureEngine
from lasso.update_phases import UpdatePhase


class TestEngineSetup:
    def test_initial_wave_is_small(self, simulation_engine) -> None:
        engine = simulation_engine
        engine.update()
        shapes = list(engine.registry.alive_shapes())
        assert len(shapes) == 3
        assert {shape.kind for shape in shapes} == PRIMARY_KINDS

    def test_large_wave_when_field_is_populated(self, simulation_engine) -> None:
        engine = simulation_engine
        engine.update()
        engine.event_bus.emit(WaveRequestedEvent(reason="test", frame=engine.frame_count))
        engine.update()
        assert len(engine.registry) == 9

    def test_wave_spawns_inside_margins(self, simulation_engine) -> None:
        engine = simulation_engine
        engine.update()
        half_w, half_h = engine.config.display.half_extents
        margin = engine.config.spawning.spawn_margin
        # One physics step has run since spawning
        slack = engine.config.spawning.max_spawn_velocity * engine.delta_time * 1.5
        for shape in engine.registry.alive_shapes():
            assert abs(shape.position.x) <= half_w - margin + slack
            assert abs(shape.position.y) <= half_h - margin + slack
            assert abs(shape.velocity.x) <= engine.config.spawning.max_spawn_velocity
            assert abs(shape.velocity.y) <= engine.config.spawning.max_spawn_velocity

    def test_no_initial_wave_when_disabled(self, empty_engine) -> None:
        empty_engine.update()
        assert len(empty_engine.registry) == 0

    def test_invalid_config_rejected(self) -> None:
        config = SimulationConfig()
        config.capture.max_live_paths = 0
        with pytest.raises(ConfigurationError):
            CaptureEngine(config)

    def test_same_seed_same_run(self) -> None:
        runs = []
        for _ in range(2):
            engine = CaptureEngine(seed=5)
            engine.setup()
            for _ in range(120):
                engine.update()
            runs.append([(s.kind, s.position.as_tuple()) for s in engine.registry.alive_shapes()])
        assert runs[0] == runs[1]

    def test_reset_clears_field(self, simulation_engine, drive_pen) -> None:
        engine = simulation_engine
        pen = engine.add_pen()
        drive_pen(engine, pen, [(0.0, 0.0), (10.0, 0.0)])
        engine.reset()
        assert len(engine.registry) == 0
        assert len(engine.paths) == 0
        assert not pen.active

    def test_reset_drops_running_captures(self, empty_engine, drive_pen, square_stroke) -> None:
        engine = empty_engine
        engine.spawn_shape(ShapeKind.RED, Vector2(-10, 0))
        engine.spawn_shape(ShapeKind.CYAN, Vector2(10, 0))
        pen = engine.add_pen()
        drive_pen(engine, pen, square_stroke)
        assert len(engine.animation_system.sessions) == 1

        engine.reset()
        for _ in range(60):
            engine.update()

        assert engine.animation_system.sessions == []
        assert len(engine.registry) == 0

    def test_reset_drops_pending_waves(self, simulation_engine) -> None:
        engine = simulation_engine
        assert engine.wave_system.pending_waves == 1
        engine.reset()
        assert engine.wave_system.pending_waves == 0
        engine.update()
        assert len(engine.registry) == 0

    def test_pause_freezes_frame_count(self, simulation_engine) -> None:
        engine = simulation_engine
        engine.paused = True
        engine.update()
        assert engine.frame_count == 0


class TestPhaseOrder:
    def test_systems_registered_in_tick_order(self, simulation_engine) -> None:
        info = simulation_engine.get_debug_info()["phases"]["systems_per_phase"]
        assert list(info) == [
            "INPUT",
            "PATH_RECORD",
            "PATH_CLOSE",
            "CAPTURE",
            "ANIMATION",
            "SPAWN",
            "PHYSICS",
        ]

    def test_every_system_runs_each_tick(self, simulation_engine) -> None:
        engine = simulation_engine
        for _ in range(5):
            engine.update()
        for system in (
            engine.input_system,
            engine.recording_system,
            engine.closure_system,
            engine.capture_system,
            engine.animation_system,
            engine.wave_system,
            engine.physics_system,
        ):
            assert system.update_count == 5
            assert system.phase in UpdatePhase

    def test_disabled_system_is_skipped(self, simulation_engine) -> None:
        engine = simulation_engine
        engine.wave_system.enabled = False
        engine.update()
        assert engine.wave_system.update_count == 0
        assert engine.wave_system.pending_waves == 1
        assert len(engine.registry) == 0


class TestRenderState:
    def test_snapshot_contents(self, empty_engine, drive_pen) -> None:
        engine = empty_engine
        engine.spawn_shape(ShapeKind.GREEN, Vector2(100, 100))
        background = engine.add_pen()
        drive_pen(engine, background, [(200.0, 0.0), (210.0, 0.0)])
        drive_pen(engine, background, [(210.0, 0.0)], drawing=False)

        pen = engine.add_pen()
        drive_pen(engine, pen, [(0.0, -100.0), (10.0, -100.0)])
        snapshot = engine.render_state()

        assert snapshot.frame == engine.frame_count
        assert len(snapshot.paths) == 1
        active = snapshot.active_path
        assert active.points == ((0.0, -100.0), (10.0, -100.0))
        assert active.opacity == pytest.approx(1.0)
        assert active.age_rank == 0
        assert snapshot.shapes[0].kind == "green"
        assert not snapshot.shapes[0].held
        assert {view.pen_id: view.active for view in snapshot.pens} == {1: False, 2: True}

    def test_older_paths_fade(self, empty_engine, drive_pen) -> None:
        engine = empty_engine
        pens = [engine.add_pen() for _ in range(3)]
        for index, pen in enumerate(pens):
            drive_pen(engine, pen, [(index * 40.0, 0.0)])
        snapshot = engine.render_state()
        assert [view.age_rank for view in snapshot.paths] == [2, 1, 0]
        assert [view.opacity for view in snapshot.paths] == pytest.approx([0.5, 0.75, 1.0])

    def test_final_score_counts_every_kind(self, empty_engine) -> None:
        engine = empty_engine
        engine.spawn_shape(ShapeKind.RED, Vector2(0, 0))
        engine.spawn_shape(ShapeKind.RED, Vector2(20, 0))
        engine.spawn_shape(ShapeKind.WHITE, Vector2(40, 0))
        score = engine.final_score()
        assert score[ShapeKind.RED] == 2
        assert score[ShapeKind.WHITE] == 1
        assert score[ShapeKind.CYAN] == 0
        assert set(score) == set(ShapeKind)
