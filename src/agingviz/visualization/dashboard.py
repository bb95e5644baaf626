"""
Dashboard launcher with pre-flight checks.
"""

import subprocess
import sys
from pathlib import Path

from omegaconf import OmegaConf

from ..config import load_config

APP_SCRIPT = Path(__file__).resolve().with_name("streamlit_app.py")


def launch_dashboard():
    """Launch the Streamlit dashboard with checks - entry point for dashboard command."""
    print("🚀 Launching cognitive decline dashboard...")

    overrides = sys.argv[1:]
    try:
        config = load_config(overrides=overrides)
    except (RuntimeError, FileNotFoundError) as e:
        print(f"❌ Error: {e}")
        sys.exit(1)

    csv_path = Path(config.csv_path)
    if not csv_path.exists():
        print("❌ Survey data not found!")
        print(f"Expected: {csv_path}")
        print("Point the dashboard at the CSV:")
        print("  uv run dashboard csv_path=path/to/Alzheimer's_Disease_and_Healthy_Aging_Data.csv")
        sys.exit(1)

    print(f"📊 Using {csv_path}")
    print(f"⚙️  Configuration:\n{OmegaConf.to_yaml(config)}")

    print("🌐 Starting dashboard server...")
    print("👉 Dashboard will open in your browser automatically")
    print("👉 Press Ctrl+C to stop the server")

    try:
        # Arguments after "--" reach the app's sys.argv
        subprocess.run(
            [
                sys.executable,
                "-m",
                "streamlit",
                "run",
                str(APP_SCRIPT),
                "--browser.gatherUsageStats",
                "false",
                "--",
                *overrides,
            ],
            check=True,
        )
    except KeyboardInterrupt:
        print("\n✅ Dashboard stopped")
    except subprocess.CalledProcessError as e:
        print(f"❌ Error launching dashboard: {e}")
        sys.exit(1)
