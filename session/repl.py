"""
Interactive loop over the active session.

Each line read is submitted as its own unit of code and the log and
listing are printed.  Typing the exit keyword (any case) leaves the loop;
the session stays open for the caller to reuse or disconnect.
"""

from session import config
from session.manager import require_session, submit


def is_exit(line, exit_keyword):
    return line.strip().lower() == exit_keyword.lower()


def repl(*, exit_keyword=None, prompt="? ", read=None, write=None, flush_size=None):
    """Run the read/submit/print loop until the exit keyword is entered.

    Ctrl-C discards the current line and keeps reading.  End of input
    returns because nothing more can be read.  Returns the number of lines
    submitted.
    """
    require_session("start the interactive loop")
    read = read or input
    write = write or print
    exit_keyword = exit_keyword or config.EXIT_KEYWORD
    submitted = 0

    while True:
        try:
            line = read(prompt)
        except KeyboardInterrupt:
            write("")
            continue
        except EOFError:
            write("")
            break

        if is_exit(line, exit_keyword):
            break

        result = submit(line, flush_size=flush_size)
        submitted += 1
        if result.log:
            write(result.log.rstrip("\n"))
        if result.listing:
            write(result.listing.rstrip("\n"))

    return submitted
