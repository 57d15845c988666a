"""Shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from plantree.core import config


ALTIBASE_PLAN = """\
------------------------------------------------------------
PROJECT ( COLUMN_COUNT: 2, TUPLE_SIZE: 8, COST: 0.08 )
 JOIN ( METHOD: NL, COST: 0.06 )
  SCAN ( TABLE: T1, FULL SCAN, ACCESS: 10, COST: 0.02 )
  SCAN ( TABLE: T2, INDEX: T2_IDX, RANGESCAN, ACCESS: 5, COST: 0.03 )
------------------------------------------------------------
"""


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep settings files out of the user's home directory."""

    app_dir = tmp_path / "app"
    monkeypatch.setenv("PLANTREE_APP_DIR", str(app_dir))
    monkeypatch.setattr(config, "_settings", None)
    return app_dir


@pytest.fixture
def altibase_plan() -> str:
    return ALTIBASE_PLAN
