# Tests package initialization
# Set up path for diversutils imports before any test modules are loaded
import sys
from pathlib import Path

_project_root = str(Path(__file__).parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)
