import os
import subprocess
import sys
from pathlib import Path

from core.clock import SessionClock


def test_clock_reads_zero_until_started(clock):
    sc = SessionClock(clock)
    clock.advance(5_000)
    assert sc.started is False
    assert sc.elapsed_ms() == 0.0


def test_clock_start_is_idempotent(clock):
    sc = SessionClock(clock)
    assert sc.start() is True
    clock.advance(300)
    assert sc.start() is False
    clock.advance(200)
    assert sc.elapsed_ms() == 500


def test_clock_stop_freezes_elapsed(clock):
    sc = SessionClock(clock)
    sc.start()
    clock.advance(1_000)
    sc.stop()
    clock.advance(9_000)
    assert sc.elapsed_ms() == 1_000
    assert sc.stopped


def test_clock_stop_before_start_is_noop(clock):
    sc = SessionClock(clock)
    sc.stop()
    assert sc.stopped is False
    assert sc.elapsed_ms() == 0.0


def test_clock_reset(clock):
    sc = SessionClock(clock)
    sc.start()
    clock.advance(50)
    sc.reset()
    assert sc.started is False
    assert sc.elapsed_ms() == 0.0


def test_core_modules_import_without_qt():
    root = Path(__file__).resolve().parents[1]
    code = (
        "import sys\n"
        "import app.session, services.stats, services.typing_engine, services.ghost, utils.storage\n"
        "assert not any(m.startswith('PySide6') for m in sys.modules), 'Qt was imported'\n"
    )
    env = dict(os.environ, PYTHONPATH=str(root))
    proc = subprocess.run([sys.executable, "-c", code], cwd=root, env=env,
                          capture_output=True, text=True)
    assert proc.returncode == 0, proc.stderr
