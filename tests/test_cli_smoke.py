import subprocess
import sys
from pathlib import Path

from wav_fixtures import chunk, fmt_chunk, wave_file


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def test_toolbox_help_exits_cleanly():
    repo = _repo_root()
    proc = subprocess.run(
        [sys.executable, "toolbox.py", "--help"],
        cwd=repo,
        capture_output=True,
        text=True,
        check=False,
    )
    assert proc.returncode == 0
    assert "Tools Suite" in (proc.stdout + proc.stderr)
    assert "pcm-info" in proc.stdout


def test_toolbox_doctor_exits_cleanly():
    repo = _repo_root()
    proc = subprocess.run(
        [sys.executable, "toolbox.py", "doctor"],
        cwd=repo,
        capture_output=True,
        text=True,
        check=False,
    )
    assert proc.returncode == 0
    assert "TOOLS SUITE DOCTOR" in (proc.stdout + proc.stderr)
    assert "pcm_info" in proc.stdout


def test_wavels_version():
    repo = _repo_root()
    proc = subprocess.run(
        [sys.executable, "-m", "plugins.pcm_info.tool", "--version"],
        cwd=repo,
        capture_output=True,
        text=True,
        check=False,
    )
    assert proc.returncode == 0
    assert "wavels 0.1.0" in proc.stdout


def test_wavels_lists_files_and_fails_on_bad_one(tmp_path):
    repo = _repo_root()
    good = tmp_path / "good.wav"
    bad = tmp_path / "bad.wav"
    good.write_bytes(wave_file(fmt_chunk(channels=2, sample_rate=44100, bit_depth=16)))
    bad.write_bytes(wave_file(chunk(b"data", bytes(4)), fmt_chunk()))

    proc = subprocess.run(
        [sys.executable, "-m", "plugins.pcm_info.tool", str(good), str(bad), "--config-dir", str(tmp_path / "cfg")],
        cwd=repo,
        capture_output=True,
        text=True,
        check=False,
    )

    assert proc.returncode == 1
    assert f"{good}:" in proc.stdout
    assert "44100 khz 16 bit stereo" in proc.stdout
    assert f"{bad}:" in proc.stderr
    assert "InvalidChunkID" in proc.stderr


def test_toolbox_runs_pcm_info_subcommand(tmp_path):
    repo = _repo_root()
    good = tmp_path / "good.wav"
    good.write_bytes(wave_file(fmt_chunk(channels=1, sample_rate=22050, bit_depth=8)))

    proc = subprocess.run(
        [sys.executable, "toolbox.py", "pcm-info", str(good), "--config-dir", str(tmp_path / "cfg")],
        cwd=repo,
        capture_output=True,
        text=True,
        check=False,
    )

    assert proc.returncode == 0
    assert "22050 khz 8 bit mono" in proc.stdout
