# tests/test_ephemeris.py

import sys
from unittest.mock import MagicMock, patch

import pytest
from lunaris.ephemeris import DEFAULT_KERNEL, load_kernel


def test_load_kernel_without_skyfield():
    with patch.dict(sys.modules, {"skyfield": None, "skyfield.api": None}):
        with pytest.raises(RuntimeError, match=r"lunaris\[ephemeris\]"):
            load_kernel()


def test_load_kernel_uses_default_loader():
    api = MagicMock()
    with patch.dict(sys.modules, {"skyfield": MagicMock(api=api), "skyfield.api": api}):
        ts, eph = load_kernel()

    api.load.assert_called_once_with(DEFAULT_KERNEL)
    api.Loader.assert_not_called()
    assert ts is api.load.timescale.return_value
    assert eph is api.load.return_value


def test_load_kernel_into_directory(tmp_path):
    api = MagicMock()
    with patch.dict(sys.modules, {"skyfield": MagicMock(api=api), "skyfield.api": api}):
        load_kernel("de440s.bsp", str(tmp_path))

    api.Loader.assert_called_once_with(str(tmp_path))
    api.Loader.return_value.assert_called_once_with("de440s.bsp")
