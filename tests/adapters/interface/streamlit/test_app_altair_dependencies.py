"""Tests for Streamlit Altair dependency checks."""

import sys
import types

from wip_analytics.adapters.interface.streamlit import app


def test_check_altair_dependencies_ok(monkeypatch) -> None:
    """Return ok when numpy/pandas expose expected attributes."""
    fake_numpy = types.SimpleNamespace(ndarray=object)
    fake_pandas = types.SimpleNamespace(Timestamp=object)
    monkeypatch.setitem(sys.modules, "numpy", fake_numpy)
    monkeypatch.setitem(sys.modules, "pandas", fake_pandas)

    ok, message = app._check_altair_dependencies()

    assert ok is True
    assert message is None


def test_check_altair_dependencies_missing_numpy_ndarray(
    monkeypatch,
) -> None:
    """Return error when numpy import is incomplete."""
    fake_numpy = types.SimpleNamespace()
    fake_pandas = types.SimpleNamespace(Timestamp=object)
    monkeypatch.setitem(sys.modules, "numpy", fake_numpy)
    monkeypatch.setitem(sys.modules, "pandas", fake_pandas)

    ok, message = app._check_altair_dependencies()

    assert ok is False
    assert message is not None
    assert "numpy" in message


def test_check_altair_dependencies_missing_pandas_timestamp(
    monkeypatch,
) -> None:
    """Return error when pandas import is incomplete."""
    fake_numpy = types.SimpleNamespace(ndarray=object)
    fake_pandas = types.SimpleNamespace()
    monkeypatch.setitem(sys.modules, "numpy", fake_numpy)
    monkeypatch.setitem(sys.modules, "pandas", fake_pandas)

    ok, message = app._check_altair_dependencies()

    assert ok is False
    assert message is not None
    assert "pandas" in message


def test_main_warns_when_charts_unavailable(monkeypatch) -> None:
    """main should surface the dependency problem and skip charts."""
    warnings: list[str] = []
    fake_st = types.SimpleNamespace(
        set_page_config=lambda **_: None,
        title=lambda _text: None,
        warning=warnings.append,
        sidebar=types.SimpleNamespace(selectbox=lambda *_a, **_k: "WIP"),
    )
    rendered: list[bool] = []
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(
        app,
        "_check_altair_dependencies",
        lambda: (False, "numpy is broken"),
    )
    monkeypatch.setattr(app, "_render_wip_page", rendered.append)

    app.main()

    assert warnings == ["numpy is broken"]
    assert rendered == [False]
