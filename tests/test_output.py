import io

from pimsim.output import Color, DebugFlags, SimOutput, error


def make(show=True, log_output=False):
    console = io.StringIO()
    log = io.StringIO()
    out = SimOutput(DebugFlags(show_sim_output=show, log_output=log_output), log=log, console=console)
    return out, console, log


def test_silent_when_output_disabled():
    out, console, log = make(show=False)
    out.emit("hello")
    out.write("x")
    assert console.getvalue() == ""
    assert log.getvalue() == ""


def test_emit_goes_to_console():
    out, console, log = make()
    out.emit("hello")
    assert console.getvalue() == "hello\n"
    assert log.getvalue() == ""


def test_emit_goes_to_log_when_logging():
    out, console, log = make(log_output=True)
    out.emit("cycle")
    assert log.getvalue() == "cycle\n"
    assert console.getvalue() == ""


def test_write_has_no_newline():
    out, console, _ = make()
    out.write("a")
    out.write("b")
    assert console.getvalue() == "ab"


def test_conditional_variants():
    out, console, _ = make()
    out.emit_if(False, "no")
    out.write_if(False, "no")
    out.emit_if(True, "yes")
    out.write_if(True, "!")
    assert console.getvalue() == "yes\n!"


def test_logging_without_log_stream_drops_messages(capsys):
    out = SimOutput(DebugFlags(show_sim_output=True, log_output=True))
    out.emit("lost")
    assert capsys.readouterr().out == ""


def test_default_console_is_stdout(capsys):
    out = SimOutput(DebugFlags(show_sim_output=True))
    out.emit("shown")
    assert capsys.readouterr().out == "shown\n"


def test_error_goes_to_stderr(capsys):
    error("broken")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("[ERROR (test_output.py:")
    assert captured.err.endswith("]: broken\n")


def test_flags_default_off():
    flags = DebugFlags()
    assert not flags.show_sim_output
    assert not flags.debug_cmd_trace
    assert flags.sim_trace_file == ""


def test_color_lookup_by_escape_code():
    assert Color("\x1b[31m") is Color.RED
    assert Color("\x1b[0m") is Color.END