"""Environment self-check for the path following demo.

Each check returns a ``Check`` row; ``main`` prints them as a table and exits
non-zero if any row failed. Warnings do not affect the exit code.
"""

import json
import math
import os
import platform
import sys
import tempfile
from collections import namedtuple
from pathlib import Path

Check = namedtuple("Check", "status label detail")

MIN_PYTHON = (3, 8)
MIN_PYGAME = (2, 1)
CORE_FILES = (
    "main.py",
    "pathdemo/config.py",
    "pathdemo/pathing.py",
    "pathdemo/pursuit.py",
    "pathdemo/draw.py",
)


def check_python(version=None) -> Check:
    version = tuple(version or sys.version_info[:3])
    want = ".".join(map(str, MIN_PYTHON))
    ok = version[:2] >= MIN_PYTHON
    return Check("PASS" if ok else "FAIL", f"Python >= {want}", ".".join(map(str, version)))


def check_pygame() -> Check:
    try:
        import pygame
    except ImportError as e:
        return Check("FAIL", "pygame installed", str(e))
    have = tuple(pygame.version.vernum)[:2]
    want = ".".join(map(str, MIN_PYGAME))
    if have < MIN_PYGAME:
        return Check("FAIL", f"pygame >= {want}", pygame.version.ver)
    return Check("PASS", f"pygame >= {want}", pygame.version.ver)


def check_display(environ=None, plat=None) -> Check:
    environ = os.environ if environ is None else environ
    plat = plat or sys.platform
    driver = environ.get("SDL_VIDEODRIVER", "")
    if driver:
        return Check("PASS", "display", f"SDL_VIDEODRIVER={driver}")
    if plat.startswith("linux") and not (environ.get("DISPLAY") or environ.get("WAYLAND_DISPLAY")):
        return Check("WARN", "display", "no DISPLAY; set SDL_VIDEODRIVER=dummy to run headless")
    return Check("PASS", "display", plat)


def check_files(root: Path) -> Check:
    missing = [name for name in CORE_FILES if not (root / name).is_file()]
    if missing:
        return Check("FAIL", "core files", "missing " + ", ".join(missing))
    return Check("PASS", "core files", f"{len(CORE_FILES)} found")


def config_problems(data: dict, defaults: dict) -> list:
    """Numeric settings in ``data`` that the app would replace with defaults."""
    problems = []
    for section, entries in defaults.items():
        got = data.get(section, {})
        if not isinstance(got, dict):
            problems.append(f"{section}: not a section")
            continue
        for key, leaf in entries.items():
            if not isinstance(leaf["value"], (int, float)) or key not in got:
                continue
            raw = got[key].get("value") if isinstance(got[key], dict) else got[key]
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                problems.append(f"{section}.{key}={raw!r}")
            elif key.startswith("show_"):
                continue
            elif not math.isfinite(raw) or raw <= 0:
                problems.append(f"{section}.{key}={raw!r}")
    return problems


def check_config(path: Path) -> Check:
    from pathdemo.config import DEFAULT_CONFIG

    if not path.exists():
        return Check("WARN", "config file", f"{path} not found, defaults will be written")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        return Check("FAIL", "config file", f"{path}: {e}")
    if not isinstance(data, dict):
        return Check("FAIL", "config file", f"{path}: top level is not an object")
    problems = config_problems(data, DEFAULT_CONFIG)
    if problems:
        return Check("WARN", "config file", "defaults used for " + ", ".join(problems))
    return Check("PASS", "config file", str(path))


def check_config_dir(path: Path) -> Check:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.TemporaryFile(dir=path.parent):
            pass
    except OSError as e:
        return Check("FAIL", "config directory writable", str(e))
    return Check("PASS", "config directory writable", str(path.parent))


def run_checks(root: Path, cfg_path: Path = None) -> list:
    checks = [check_python()]
    if checks[0].status == "FAIL":
        return checks
    if cfg_path is None:
        from pathdemo.config import default_config_path

        cfg_path = Path(default_config_path())
    checks += [
        check_pygame(),
        check_display(),
        check_files(root),
        check_config(cfg_path),
        check_config_dir(cfg_path),
    ]
    return checks


def main() -> int:
    root = Path(__file__).resolve().parent
    print(f"Path Following Demo doctor ({platform.system()} {platform.release()}, {sys.executable})")
    checks = run_checks(root)
    width = max(len(c.label) for c in checks)
    for c in checks:
        print(f"  {c.status:<4}  {c.label:<{width}}  {c.detail}")
    failed = sum(c.status == "FAIL" for c in checks)
    print(f"{failed} check(s) failed." if failed else "No failures.")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
