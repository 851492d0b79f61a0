import io

from rich.console import Console

from closedissues.console import RichLogger


def _logger(verbose):
    console = Console(file=io.StringIO(), width=120, force_terminal=False)
    return RichLogger(console=console, verbose=verbose), console


def test_levels_written():
    logger, console = _logger(verbose=False)
    logger.info("scanning")
    logger.warn("slow")
    logger.error("broken")
    logger.done("finished")
    output = console.file.getvalue()
    for tag, msg in (("INFO", "scanning"), ("WARN", "slow"), ("ERROR", "broken"), ("DONE", "finished")):
        assert tag in output
        assert msg in output


def test_debug_requires_verbose():
    quiet, quiet_console = _logger(verbose=False)
    quiet.debug("hidden detail")
    assert "hidden detail" not in quiet_console.file.getvalue()

    loud, loud_console = _logger(verbose=True)
    loud.debug("shown detail")
    assert "shown detail" in loud_console.file.getvalue()


def test_step_and_progress():
    logger, console = _logger(verbose=False)
    logger.step("Checking issues")
    with logger.progress("Checking issues") as progress:
        task_id = progress.add_task("resolve", total=2)
        progress.advance(task_id, 2)
        assert progress.tasks[0].finished
    assert "Checking issues" in console.file.getvalue()
