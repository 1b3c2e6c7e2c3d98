import os
import sys
from pathlib import Path

# Set test environment variables before app config is imported
os.environ.update(
    {
        "DEBUG": "false",
        "DEMO_MODE": "false",
        "MUX_TOKEN_ID": "",
        "MUX_TOKEN_SECRET": "",
        "FUNCTIONS_JWT_SECRET": "",
        "LOGFIRE_ENABLE": "false",
    }
)

# Ensure the project root is on sys.path so `app` packages resolve
PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

from tests.fixtures.provider_fixtures import *  # noqa: E402, F403
