#!/usr/bin/env python
"""
Run the Streamlit gold calculator.

Usage:
    python scripts/run_app.py [--port 8501] [--headless] [--language ar]
"""
import argparse
import os
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
UI_PATH = PROJECT_ROOT / 'src' / 'gold_calculator' / 'ui' / 'app_streamlit.py'


def build_command(ui_path: Path, port: int = 8501, headless: bool = False) -> list[str]:
    cmd = [
        sys.executable, '-m', 'streamlit', 'run', str(ui_path),
        '--server.port', str(port),
    ]
    if headless:
        cmd += ['--server.headless', 'true']
    return cmd


def build_env(project_root: Path, language: str = None) -> dict:
    """Environment for the UI process: src on PYTHONPATH, optional start language."""
    env = os.environ.copy()
    src_path = str(project_root / 'src')
    if env.get('PYTHONPATH'):
        env['PYTHONPATH'] = f"{src_path}{os.pathsep}{env['PYTHONPATH']}"
    else:
        env['PYTHONPATH'] = src_path
    if language:
        env['GOLD_CALC_DEFAULT_LANGUAGE'] = language
    return env


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run the Gold Calculator UI")
    parser.add_argument("--port", type=int, default=8501)
    parser.add_argument("--headless", action="store_true", help="Don't open a browser")
    parser.add_argument("--language", choices=["en", "ar"], help="Start in this language")
    args = parser.parse_args(argv)

    if not UI_PATH.exists():
        print(f"ERROR: UI module not found at {UI_PATH}")
        sys.exit(1)

    cmd = build_command(UI_PATH, args.port, args.headless)
    print(f"Starting Gold Calculator UI on port {args.port}...")

    try:
        subprocess.run(cmd, cwd=str(PROJECT_ROOT), env=build_env(PROJECT_ROOT, args.language))
    except KeyboardInterrupt:
        print("\nApplication stopped.")


if __name__ == "__main__":
    main()
