# SPDX-FileCopyrightText: 2025 quorum-recover contributors
# SPDX-License-Identifier: MIT
#
# conftest.py: makes src/ importable without an editable install.

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if SRC.is_dir():
    sys.path.insert(0, str(SRC))
