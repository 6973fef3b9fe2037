"""
Pytest configuration for ratsweep tests.
Adds src/ and the project root to sys.path so that `import ratsweep` and
`from tests.test_fixtures import ...` work without an install.
"""
import sys
from pathlib import Path

_PROJECT_ROOT = Path(__file__).parent.parent
for path in (_PROJECT_ROOT / "src", _PROJECT_ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))
