from __future__ import annotations
import os
import sys
import subprocess
from pathlib import Path

# --- Ensure project root is in path ---
ROOT_DIR = Path(__file__).resolve().parent
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

# --- Import core setup ---
from core.config import config
from core.logger import get_logger
from catalog import load_reference_data
from gateway import ApiError, ReceiptsApi

log = get_logger("main")


def check_backend() -> bool:
    """Check the receipts backend once; the UI still starts when it is down."""
    try:
        ReceiptsApi().health()
    except ApiError as e:
        log.warning(f"⚠️  Receipts backend unreachable at {config.api_base_url}: {e.message}")
        return False
    log.info(f"Receipts backend reachable at {config.api_base_url}")
    return True


def verify_environment() -> None:
    """Check environment prerequisites before launching Streamlit."""
    log.info(f"Starting {config.company_name} receipts portal in '{config.environment}' mode")

    if not os.getenv("API_BASE_URL"):
        log.warning(f"⚠️  API_BASE_URL not set, using {config.api_base_url}")
    check_backend()

    ref = load_reference_data()
    if not len(ref.employees) or not len(ref.investors):
        log.warning(f"⚠️  Reference data incomplete in {config.reference_dir}; lookups will come up empty")


def launch_streamlit() -> None:
    """Launch the Streamlit UI programmatically."""
    ui_path = ROOT_DIR / "ui" / "app.py"
    if not ui_path.exists():
        log.error(f"UI app not found at {ui_path}")
        sys.exit(1)

    port = os.getenv("PORT", config.app_port)
    log.info(f"Launching Streamlit app on port {port}: {ui_path}")
    try:
        subprocess.run(
            [sys.executable, "-m", "streamlit", "run", str(ui_path), "--server.port", str(port), "--server.headless", "true"],
            check=True,
            cwd=str(ROOT_DIR),
        )
    except KeyboardInterrupt:
        log.info("Receipts portal stopped by user.")
    except subprocess.CalledProcessError as e:
        log.error(f"Streamlit failed to start: {e}")
        sys.exit(1)


def main() -> None:
    verify_environment()
    launch_streamlit()


if __name__ == "__main__":
    main()
