"""
Pytest configuration for prisma tests.
Adds the src directory to sys.path so tests run against a plain checkout,
and selects a non-interactive matplotlib backend.
"""
import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

# Add src to the path so imports like 'from prisma.elements.prisma_face import Face' work
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))
