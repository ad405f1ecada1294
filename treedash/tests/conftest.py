import sys
from pathlib import Path

# Ensure the treedash package is importable when running tests from a checkout
_REPO_DIR = Path(__file__).resolve().parents[2]
if str(_REPO_DIR) not in sys.path:
    sys.path.insert(0, str(_REPO_DIR))
