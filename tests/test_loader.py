"""Tests for the shaped read/write helpers and logging setup."""

from __future__ import annotations

import sys

import numpy as np
import pytest
import xarray as xr
from loguru import logger

from avsfld import read_fld, read_fld_dataarray, write_fld, format_fld_header
from avsfld.io.fldio.reader import open_fld
from avsfld.logger import ProgressLogger, configure_logging


def test_write_then_read_shaped(tmp_path) -> None:
    array = np.arange(24, dtype=np.float64).reshape(4, 3, 2)
    path = tmp_path / "cube.fld"
    write_fld(path, array)

    header, data = read_fld(path)
    assert header.extents == (2, 3, 4)
    assert data.shape == (4, 3, 2)
    assert data.dtype == np.float32
    np.testing.assert_array_equal(data, array.astype(np.float32))


def test_dim1_varies_fastest_on_disk(tmp_path) -> None:
    array = np.array([[1, 2, 3], [4, 5, 6]], dtype=np.float32)
    path = tmp_path / "plane.fld"
    write_fld(path, array)
    with open_fld(path) as reader:
        assert reader.header.extents == (3, 2)
        assert reader.read().tolist() == [1, 2, 3, 4, 5, 6]


def test_dataarray(tmp_path) -> None:
    array = np.ones((2, 5), dtype=np.float32)
    path = tmp_path / "da.fld"
    write_fld(path, array)

    da = read_fld_dataarray(path)
    assert isinstance(da, xr.DataArray)
    assert da.dims == ("dim2", "dim1")
    assert da.sizes["dim1"] == 5
    assert da.attrs["encoding"] == "float_le"
    assert da.attrs["field"] == "uniform"
    assert float(da.sum()) == 10.0


def test_read_fld_with_base_dir(tmp_path) -> None:
    write_fld(tmp_path / "a.fld", np.zeros(3))
    header, data = read_fld("a.fld", base_dir=tmp_path)
    assert header.extents == (3,)
    assert data.tolist() == [0.0, 0.0, 0.0]


def test_format_header(tmp_path) -> None:
    write_fld(tmp_path / "s.fld", np.zeros((3, 4)))
    with open_fld(tmp_path / "s.fld") as reader:
        text = format_fld_header(reader.header, reader.source)
    assert "Extents:           4 x 3" in text
    assert "Elements:          12" in text
    assert "float_le" in text
    assert "Payload Source:" in text


def test_print_logger(tmp_path, capsys) -> None:
    write_fld(tmp_path / "p.fld", np.zeros(1), logger=ProgressLogger(mode="print"))
    assert "Writing FLD file" in capsys.readouterr().out


def test_logger_rejects_unknown_mode() -> None:
    with pytest.raises(ValueError):
        ProgressLogger(mode="qt")


def test_configure_logging_sends_to_stderr(tmp_path, capsys) -> None:
    configure_logging(debug=True)
    try:
        write_fld(tmp_path / "l.fld", np.zeros(1))
        assert "Writing FLD file" in capsys.readouterr().err
    finally:
        logger.remove()
        logger.add(sys.__stderr__)


def test_write_fld_rejects_eight_dimensional_arrays(tmp_path) -> None:
    with pytest.raises(ValueError):
        write_fld(tmp_path / "eight.fld", np.zeros((1,) * 8))
    assert (tmp_path / "eight.fld").read_bytes() == b""
