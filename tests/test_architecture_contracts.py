"""Tests to enforce the ports/adapters import contracts via importlinter.

The contracts are configured in pyproject.toml under
[tool.importlinter.contracts]. If this test fails, a new import crossed a
layer boundary: the resolution core must not know about the application
layer, and services must only talk to adapters through ports.
"""

from __future__ import annotations

import shutil
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def test_importlinter_contracts_enforced() -> None:
    """Verify all import contracts pass.

    Run manually: lint-imports
    """
    lint_imports = shutil.which("lint-imports")
    if lint_imports is None:
        # Fallback to virtualenv bin directory
        lint_imports = str(Path(sys.executable).parent / "lint-imports")

    result = subprocess.run(
        [lint_imports],
        capture_output=True,
        text=True,
        cwd=PROJECT_ROOT,
    )

    # importlinter returns 0 if all contracts pass, 1 if any broken
    if result.returncode != 0:
        output = result.stdout + "\n" + result.stderr
        raise AssertionError(
            "Import contracts violated.\n"
            "Run 'lint-imports' for details.\n\n"
            f"Output:\n{output}"
        )

    assert "Contracts:" in result.stdout, (
        "Unexpected importlinter output - missing 'Contracts:' summary. "
        f"Got: {result.stdout[:500]}"
    )
    assert "0 broken" in result.stdout, f"Contract status unclear. Output: {result.stdout[:500]}"
