"""Tests for the command-line entry point in headless mode."""

import sys

import main


def test_headless_run_completes():
    engine = main.run_headless(max_frames=600, stats_interval=0, seed=3)
    assert engine.frame_count == 600
    # The scripted pen closes loops every revolution
    assert engine.closure_system.get_debug_info()["loops_closed"] > 0


def test_headless_run_is_deterministic():
    first = main.run_headless(max_frames=300, stats_interval=100, seed=11)
    second = main.run_headless(max_frames=300, stats_interval=100, seed=11)
    assert first.final_score() == second.final_score()
    assert first.score.summary() == second.score.summary()


def test_main_parses_headless_flags(monkeypatch):
    calls = []
    monkeypatch.setattr(main, "run_headless", lambda *args, **kwargs: calls.append((args, kwargs)))
    monkeypatch.setattr(
        sys, "argv", ["main.py", "--headless", "--max-frames", "50", "--stats-interval", "10", "--seed", "4"]
    )
    main.main()
    assert calls == [((50, 10), {"seed": 4})]
