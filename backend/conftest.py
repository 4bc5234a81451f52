# Ensure 'backend/' is on sys.path so 'import app' and 'import tests.*' work
# whatever directory pytest is started from.
from pathlib import Path
import sys

_BACKEND_DIR = Path(__file__).resolve().parent
if str(_BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(_BACKEND_DIR))
