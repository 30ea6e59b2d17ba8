import json

from flapline.autopilot import next_gap, should_flap
from flapline.core.state import Phase
from flapline.main import create_session, run_headless
from flapline.session import Snapshot
from flapline.settings import Settings
from flapline.storage import HIGH_SCORE_KEY


def snapshot(config, bird_y, velocity, obstacles=()):
    return Snapshot(
        phase=Phase.ACTIVE,
        bird_y=bird_y,
        bird_velocity=velocity,
        obstacles=obstacles,
        score=0,
        high_score=0,
        tick=0,
        config=config,
    )


def test_next_gap_skips_passed_obstacles(config):
    snap = snapshot(config, 300.0, 0.0, obstacles=((100.0, 50.0), (300.0, 120.0)))
    assert next_gap(snap) == (300.0, 120.0)
    assert next_gap(snapshot(config, 300.0, 0.0)) is None


def test_flaps_only_when_falling_below_gap(config):
    # Gap [100, 400): lowest safe top is 400 - 64 - 20 = 316
    gap = ((300.0, 100.0),)
    assert should_flap(snapshot(config, 320.0, 2.0, gap))
    assert not should_flap(snapshot(config, 300.0, 2.0, gap))
    assert not should_flap(snapshot(config, 320.0, -4.0, gap))


def test_create_session_uses_settings(tmp_path):
    settings = Settings(_env_file=None, data_dir=tmp_path, seed=3)
    session = create_session(settings)
    assert session.config == settings.game_config()
    assert session.start_gate is True
    assert session.high_scores.store.path == tmp_path / "scores.json"


def test_headless_run_records_best_score(tmp_path):
    settings = Settings(_env_file=None, data_dir=tmp_path, seed=11, headless_ticks=3000)
    scores = run_headless(settings)

    assert all(isinstance(s, int) and s >= 0 for s in scores)

    path = tmp_path / "scores.json"
    best = max(scores, default=0)
    if best > 0:
        assert json.loads(path.read_text(encoding="utf-8"))[HIGH_SCORE_KEY] == str(best)
    else:
        assert not path.exists()
