"""Running commands joined by ``|``."""

import contextlib
import subprocess
import sys

from minitools.shell.redirection import parse_redirection


def split_pipeline(line):
    """Split ``line`` at every ``|`` into the commands of the pipeline."""
    return line.split("|")


def _start(stage, feed, first, last, files):
    if not stage.args:
        raise ValueError("empty command in pipeline")
    if stage.input_file:
        stdin = files.enter_context(open(stage.input_file, "rb"))
    elif feed is not None:
        stdin = feed
    elif first:
        stdin = None
    else:
        stdin = subprocess.DEVNULL
    if stage.output_file:
        stdout = files.enter_context(open(stage.output_file, "ab" if stage.append else "wb"))
    elif last:
        stdout = None
    else:
        stdout = subprocess.PIPE
    return subprocess.Popen(stage.args, stdin=stdin, stdout=stdout)


def run_pipeline(line):
    """Run every command of ``line`` connected by pipes and return their exit statuses.

    A command that cannot be started is reported on standard error and
    counts as exit status 1; the others still run.
    """
    stages = [parse_redirection(part) for part in split_pipeline(line)]
    last = len(stages) - 1
    processes = []
    upstream = None
    with contextlib.ExitStack() as files:
        for position, stage in enumerate(stages):
            feed, upstream = upstream, None
            try:
                process = _start(stage, feed, position == 0, position == last, files)
            except (OSError, ValueError) as exc:
                print(f"pipeline: {exc}", file=sys.stderr)
                process = None
            finally:
                if feed is not None:
                    feed.close()
            if process is not None and process.stdout is not None:
                upstream = process.stdout
            processes.append(process)
        return [process.wait() if process is not None else 1 for process in processes]