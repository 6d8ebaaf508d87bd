"""Shared helpers for building FLD files in tests."""

from __future__ import annotations

import numpy as np
import pytest


def fld_header(*lines: str) -> bytes:
    """Join header lines and append the form-feed sentinel."""
    return ("\n".join(lines) + "\n").encode("ascii") + b"\x0c\x0c"


@pytest.fixture
def make_fld(tmp_path):
    """Write an FLD file under tmp_path and return its path."""

    def _make(name: str, header: bytes, payload: bytes = b"") -> str:
        path = tmp_path / name
        path.write_bytes(header + payload)
        return str(path)

    return _make


@pytest.fixture
def float_le_2x3() -> np.ndarray:
    return np.array([1.0, 2.0, 3.0, 4.0, 5.0, 6.0], dtype="<f4")
