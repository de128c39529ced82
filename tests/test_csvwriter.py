import io

import pytest

from pimsim.csvwriter import CSVWriter, IndexedName


def test_documented_example():
    out = io.StringIO()
    sw = CSVWriter(out)
    sw << "Bandwidth" << 0.5
    sw << "Latency" << 5
    sw.finalize()
    sw << "Bandwidth" << 1.5
    sw << "Latency" << 15
    sw.finalize()
    sw << "Bandwidth" << 2.5
    sw << "Latency" << 25
    sw.finalize()
    assert out.getvalue() == "Bandwidth,Latency,\n1.5,15,\n2.5,25,\n"


def test_names_ignored_after_finalize():
    sw = CSVWriter(io.StringIO())
    sw.add_field("a")
    sw.finalize()
    sw.add_field("b")
    assert sw.field_names == ["a"]
    assert sw.finalized


def test_values_ignored_before_finalize():
    out = io.StringIO()
    sw = CSVWriter(out)
    sw.add_value(3)
    assert out.getvalue() == ""
    assert not sw.finalized


def test_indexed_names():
    assert str(IndexedName("bw", 1)) == "bw[1]"
    assert str(IndexedName("bw", 1, 2)) == "bw[1][2]"
    assert str(IndexedName("bw", 1, 2, 3)) == "bw[1][2][3]"


def test_indexed_name_as_field():
    sw = CSVWriter(io.StringIO())
    sw << IndexedName("lat", 0, 1)
    assert sw.field_names == ["lat[0][1]"]


def test_name_length_limit():
    assert not IndexedName.is_name_too_long("x" * 60, 1)
    assert IndexedName.is_name_too_long("x" * 61, 1)
    with pytest.raises(ValueError):
        IndexedName.check_name_length("x" * 57, 2)
    with pytest.raises(ValueError):
        IndexedName("y" * 70, 0)


def test_index_count_checked():
    with pytest.raises(ValueError):
        IndexedName("a")
    with pytest.raises(ValueError):
        IndexedName("a", 1, 2, 3, 4)


def test_mismatch_warning(capsys):
    out = io.StringIO()
    sw = CSVWriter(out)
    sw << "a" << "b"
    sw.finalize()
    sw << 1
    sw.finalize()
    captured = capsys.readouterr()
    assert "Number of fields doesn't match values" in captured.out
    assert out.getvalue() == "a,b,\n1,\n"


def test_no_warning_when_complete(capsys):
    sw = CSVWriter(io.StringIO())
    sw << "a"
    sw.finalize()
    sw << 7
    sw.finalize()
    assert capsys.readouterr().out == ""