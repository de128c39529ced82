import io

from pimsim.configuration import (
    DEFAULT_CONFIGURATION,
    ConfigurationData,
    ConfigurationDB,
    ParamType,
    VarType,
    get_db,
)


def _db():
    db = ConfigurationDB()
    db.initialize()
    return db


def test_default_uint_value():
    entry = _db().find("NUM_BANKS")
    assert entry.value == "0"
    assert entry.variable_type == VarType.UINT
    assert entry.parameter_type == ParamType.DEV_PARAM


def test_default_bool_and_string_values():
    db = _db()
    assert db.find("DEBUG_BUS").value == "false"
    assert db.find("SIM_TRACE_FILE").value == ""


def test_later_definition_wins():
    db = _db()
    assert db.find("PIM_PRECISION").value == "FP16"
    assert db.find("ROW_BUFFER_POLICY").value == "open_page"
    assert db.find("ADDRESS_MAPPING_SCHEME").value == "Scheme8"
    assert db.find("HISTOGRAM_BIN_SIZE").value == "10"


def test_unique_names_count():
    db = _db()
    assert len(db) == len({entry.name for entry in DEFAULT_CONFIGURATION})


def test_find_missing_returns_none():
    assert _db().find("NO_SUCH_PARAMETER") is None


def test_update_values_only_known():
    db = _db()
    db.update_values([("NUM_BANKS", "16"), ("UNKNOWN", "1")])
    assert db.find("NUM_BANKS").value == "16"
    assert db.find("NUM_BANKS").variable_type == VarType.UINT
    assert "UNKNOWN" not in db


def test_update_values_none_is_noop():
    db = _db()
    before = len(db)
    db.update_values(None)
    assert len(db) == before


def test_update_adds_and_replaces():
    db = ConfigurationDB()
    db.initialize(None)
    assert len(db) == 0
    db.update(ConfigurationData("X", VarType.UINT, ParamType.SYS_PARAM, "1"))
    db.update(ConfigurationData("X", VarType.UINT, ParamType.SYS_PARAM, "2"))
    assert len(db) == 1
    assert db.find("X").value == "2"


def test_initialize_stops_at_empty_name():
    db = ConfigurationDB()
    db.initialize(
        [
            ConfigurationData("A", VarType.UINT, ParamType.SYS_PARAM, "1"),
            ConfigurationData("", VarType.UINT, ParamType.SYS_PARAM, ""),
            ConfigurationData("B", VarType.UINT, ParamType.SYS_PARAM, "2"),
        ]
    )
    assert "A" in db
    assert "B" not in db


def test_clear():
    db = _db()
    db.clear()
    assert len(db) == 0


def test_dump_layout():
    db = ConfigurationDB()
    db.initialize(
        [
            ConfigurationData("S", VarType.STRING, ParamType.SYS_PARAM, "sysval"),
            ConfigurationData("D", VarType.UINT, ParamType.DEV_PARAM, "devval"),
        ]
    )
    out = io.StringIO()
    db.dump(out)
    assert out.getvalue() == (
        "!!SYSTEM INI PARAMETER\nsysval\n!!DEVICE INI PARAMETER\ndevval\n!!EPOCH_DATA\n"
    )


def test_get_db_is_shared():
    first = get_db()
    first.initialize()
    first.update_values([("NUM_CHANS", "4")])
    assert get_db() is first
    assert get_db().find("NUM_CHANS").value == "4"
    first.initialize()