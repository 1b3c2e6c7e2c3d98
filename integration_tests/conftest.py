"""Pytest configuration for integration tests.

Integration tests call the real Mux API and require actual credentials to run.
"""

import sys
from pathlib import Path

# Ensure the project root is on sys.path so `app` packages resolve
PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)
