"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports and that the
application settings point at the testing environment before anything reads
them.
"""

import os
import sys
from pathlib import Path

# Settings are read at import time, so these must be set first
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite://"

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# test_fixtures is imported by name from test modules
tests_dir = Path(__file__).parent
if str(tests_dir) not in sys.path:
    sys.path.insert(0, str(tests_dir))
