# tests/test_update_deltat_table.py

import pytest
from lunaris.ephemeris import update_deltat_table as upd
from lunaris.reference import time_scales as ts


def _finals_line(mjd, dut=None):
    line = [" "] * 80
    line[7:15] = f"{mjd:8.2f}"
    if dut is not None:
        line[58:68] = f"{dut:10.7f}"
    return "".join(line)


def _preds_line(mjd, dt):
    line = [" "] * 40
    line[3:12] = f"{mjd:9.3f}"
    line[24:29] = f"{dt:5.2f}"
    return "".join(line)


FINALS = "\n".join([
    _finals_line(57754.0, 0.4075),
    _finals_line(57755.0, 0.4065),
    _finals_line(57756.0),          # no UT1-UTC yet
])

PREDS = "\n".join([
    "  MJD        YEAR    TT-UT Pred  UT1-UTC Pred  ERROR",
    _preds_line(57755.0, 99.99),
    _preds_line(57800.0, 68.90),
])


def test_parse_finals():
    rows = upd.parse_finals(FINALS)
    assert [r.jd for r in rows] == [2457754.5, 2457755.5]
    # ΔT = (TAI-UTC) + 32.184 - (UT1-UTC)
    assert rows[0].delta_t == pytest.approx(37.0 + 32.184 - 0.4075, abs=1e-9)


def test_parse_finals_rejects_empty():
    with pytest.raises(RuntimeError):
        upd.parse_finals("nothing here\n")


def test_parse_preds():
    rows = upd.parse_preds(PREDS)
    assert [r.jd for r in rows] == [2457755.5, 2457800.5]
    assert rows[1].delta_t == pytest.approx(68.90)


def test_merge_prefers_observed():
    rows = upd.merge(upd.parse_finals(FINALS), upd.parse_preds(PREDS))
    assert [r.jd for r in rows] == [2457754.5, 2457755.5, 2457800.5]
    assert rows[1].delta_t != pytest.approx(99.99)


def test_merge_thinning_keeps_last_observed():
    obs = [upd.DeltaTRow(2457000.5 + i, 68.0 + i) for i in range(4)]
    rows = upd.merge(obs, [], every=2)
    assert [r.jd for r in rows] == [2457000.5, 2457002.5, 2457003.5]


def test_written_table_loads(tmp_path, monkeypatch):
    out = tmp_path / "delta_t.csv"
    upd.write_csv(upd.merge(upd.parse_finals(FINALS), upd.parse_preds(PREDS)), out)
    assert out.read_text(encoding="utf-8").splitlines()[0] == "jd,delta_t"

    monkeypatch.setenv(ts.DELTAT_ENV, str(out))
    ts.clear_table_cache()
    assert ts.delta_t(2457754.5) == pytest.approx(68.7765, abs=1e-6)


def test_main_from_local_files(tmp_path, capsys):
    finals = tmp_path / "finals2000A.all"
    preds = tmp_path / "deltat.preds"
    finals.write_text(FINALS, encoding="utf-8")
    preds.write_text(PREDS, encoding="utf-8")
    out = tmp_path / "out" / "delta_t.csv"

    rc = upd.main(["--finals", str(finals), "--preds", str(preds), "--out", str(out)])
    assert rc == 0
    assert len(out.read_text(encoding="utf-8").splitlines()) == 4
    assert ts.DELTAT_ENV in capsys.readouterr().out


def test_main_defaults_to_user_cache(tmp_path):
    finals = tmp_path / "finals2000A.all"
    finals.write_text(FINALS, encoding="utf-8")

    assert upd.main(["--finals", str(finals), "--preds", ""]) == 0
    assert ts.user_cache_path().is_file()
    ts.clear_table_cache()
    assert ts.delta_t(2457754.5) == pytest.approx(68.7765, abs=1e-6)
